import uuid
from datetime import timedelta

from django.test import TestCase
from django.utils import timezone

from apps.client.models import Client, Supplier
from apps.job.models import Job
from apps.portal.enums import VendorStatus
from apps.portal.models import JobPortal
from apps.portal.services.portal_token_service import (
    PortalTokenService,
    build_portal_url,
    token_digest,
)
from apps.purchasing.models import PurchaseOrder
from apps.workflow.exceptions import (
    NotFoundError,
    PortalExpiredError,
    PortalNotFoundError,
    ValidationError,
)


class PortalTokenServiceTests(TestCase):
    def setUp(self):
        self.customer = Client.objects.create(name="Acme Corp")
        self.vendor = Supplier.objects.create(name="Alpha Print", email="a@alpha.test")
        self.job = Job.objects.create(
            name="Spring catalog", customer=self.customer, vendor=self.vendor
        )

    def expire(self, portal):
        JobPortal.objects.filter(pk=portal.pk).update(
            expires_at=timezone.now() - timedelta(minutes=1)
        )

    def test_issue_creates_portal_with_random_token(self):
        portal = PortalTokenService.issue(self.job.id)

        # 32 random bytes render as 43 URL-safe characters
        self.assertGreaterEqual(len(portal.share_token), 43)
        self.assertRegex(portal.share_token, r"^[A-Za-z0-9_-]+$")
        self.assertEqual(portal.token_digest, token_digest(portal.share_token))
        self.assertEqual(portal.vendor_status, VendorStatus.PENDING)
        self.assertEqual(portal.access_count, 0)
        self.assertAlmostEqual(
            portal.expires_at,
            timezone.now() + timedelta(days=14),
            delta=timedelta(minutes=1),
        )
        self.assertEqual(
            build_portal_url(portal),
            f"https://portal.example.com/portal/{portal.share_token}",
        )

    def test_reissue_rotates_in_place(self):
        first = PortalTokenService.issue(self.job.id)
        old_token = first.share_token
        PortalTokenService.resolve(old_token)

        second = PortalTokenService.issue(self.job.id, ttl_days=30)

        self.assertEqual(second.id, first.id)
        self.assertEqual(JobPortal.objects.filter(job=self.job).count(), 1)
        self.assertNotEqual(second.share_token, old_token)
        self.assertEqual(second.access_count, 0)
        self.assertAlmostEqual(
            second.expires_at,
            timezone.now() + timedelta(days=30),
            delta=timedelta(minutes=1),
        )
        with self.assertRaises(PortalNotFoundError):
            PortalTokenService.resolve(old_token)

    def test_rotation_keeps_confirmation_for_same_purchase_order(self):
        po = PurchaseOrder.objects.create(vendor=self.vendor, job=self.job)
        portal = PortalTokenService.issue(self.job.id, purchase_order_id=po.id)
        JobPortal.objects.filter(pk=portal.pk).update(
            confirmed_at=timezone.now(), vendor_status=VendorStatus.IN_PRODUCTION
        )

        rotated = PortalTokenService.issue(self.job.id, purchase_order_id=po.id)

        self.assertIsNotNone(rotated.confirmed_at)
        self.assertEqual(rotated.vendor_status, VendorStatus.IN_PRODUCTION)

    def test_new_purchase_order_resets_confirmation(self):
        first_po = PurchaseOrder.objects.create(vendor=self.vendor, job=self.job)
        second_po = PurchaseOrder.objects.create(vendor=self.vendor, job=self.job)
        portal = PortalTokenService.issue(self.job.id, purchase_order_id=first_po.id)
        JobPortal.objects.filter(pk=portal.pk).update(
            confirmed_at=timezone.now(),
            confirmed_by_name="Ann",
            vendor_status=VendorStatus.SHIPPED,
            tracking_number="1Z999",
        )

        rotated = PortalTokenService.issue(self.job.id, purchase_order_id=second_po.id)

        self.assertEqual(rotated.purchase_order_id, second_po.id)
        self.assertIsNone(rotated.confirmed_at)
        self.assertIsNone(rotated.confirmed_by_name)
        self.assertEqual(rotated.vendor_status, VendorStatus.PENDING)
        self.assertIsNone(rotated.tracking_number)

    def test_purchase_order_must_belong_to_job(self):
        other_job = Job.objects.create(name="Other", customer=self.customer)
        po = PurchaseOrder.objects.create(vendor=self.vendor, job=other_job)

        with self.assertRaisesMessage(
            ValidationError, "Purchase order does not belong to this job"
        ):
            PortalTokenService.issue(self.job.id, purchase_order_id=po.id)
        self.assertFalse(JobPortal.objects.exists())

    def test_invalid_ttl_is_rejected(self):
        for ttl in (0, -3, "7", 1.5):
            with self.subTest(ttl=ttl):
                with self.assertRaises(ValidationError):
                    PortalTokenService.issue(self.job.id, ttl_days=ttl)

    def test_issue_for_unknown_job(self):
        with self.assertRaisesMessage(NotFoundError, "Job not found"):
            PortalTokenService.issue(uuid.uuid4())

    def test_resolve_records_access(self):
        portal = PortalTokenService.issue(self.job.id)

        PortalTokenService.resolve(portal.share_token)
        resolved = PortalTokenService.resolve(portal.share_token)

        self.assertEqual(resolved.id, portal.id)
        self.assertEqual(resolved.access_count, 2)
        self.assertIsNotNone(resolved.accessed_at)

    def test_resolve_unknown_token(self):
        PortalTokenService.issue(self.job.id)

        for token in ("", "not-a-real-token"):
            with self.subTest(token=token):
                with self.assertRaisesMessage(PortalNotFoundError, "Portal not found"):
                    PortalTokenService.resolve(token)

    def test_resolve_expired_token(self):
        portal = PortalTokenService.issue(self.job.id)
        self.expire(portal)

        with self.assertRaisesMessage(PortalExpiredError, "Portal link has expired"):
            PortalTokenService.resolve(portal.share_token)

        portal.refresh_from_db()
        self.assertEqual(portal.access_count, 0)

    def test_get_or_issue_reuses_live_portal(self):
        portal = PortalTokenService.issue(self.job.id)

        self.assertEqual(
            PortalTokenService.get_or_issue(self.job.id).share_token, portal.share_token
        )

    def test_get_or_issue_replaces_expired_portal(self):
        portal = PortalTokenService.issue(self.job.id)
        self.expire(portal)

        fresh = PortalTokenService.get_or_issue(self.job.id)

        self.assertEqual(fresh.id, portal.id)
        self.assertNotEqual(fresh.share_token, portal.share_token)
        self.assertFalse(fresh.is_expired)
