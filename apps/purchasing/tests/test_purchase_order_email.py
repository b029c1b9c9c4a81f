import uuid

from django.contrib.auth import get_user_model
from django.core import mail
from rest_framework import status
from rest_framework.test import APITestCase

from apps.client.models import Client, ClientContact, Supplier
from apps.job.models import Job
from apps.portal.models import JobPortal
from apps.portal.services.portal_token_service import PortalTokenService
from apps.purchasing.models import PurchaseOrder, PurchaseOrderStatus
from apps.workflow.models import Notification, NotificationEventType

User = get_user_model()


class PurchaseOrderEmailVendorTests(APITestCase):
    def setUp(self):
        self.staff = User.objects.create_user(username="staff", password="secret-pass")
        self.client.force_authenticate(user=self.staff)
        self.vendor = Supplier.objects.create(name="Alpha Print", email="office@alpha.test")
        self.job = Job.objects.create(
            name="Spring catalog",
            customer=Client.objects.create(name="Acme Corp"),
            vendor=self.vendor,
        )
        self.purchase_order = PurchaseOrder.objects.create(
            vendor=self.vendor, job=self.job, buy_cost="850.00"
        )
        self.url = f"/api/purchase-orders/{self.purchase_order.id}/email-vendor"

    def test_po_numbers(self):
        self.assertEqual(self.purchase_order.po_number, "PO-0001")
        second = PurchaseOrder.objects.create(vendor=self.vendor, job=self.job)
        self.assertEqual(second.po_number, "PO-0002")

    def test_emails_portal_link_to_vendor(self):
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["email"], "office@alpha.test")
        self.assertEqual(body["poNumber"], "PO-0001")

        portal = JobPortal.objects.get(job=self.job)
        self.assertEqual(portal.purchase_order, self.purchase_order)
        self.assertEqual(
            body["portalUrl"], f"https://portal.example.com/portal/{portal.share_token}"
        )

        self.assertEqual(len(mail.outbox), 1)
        message = mail.outbox[0]
        self.assertEqual(message.to, ["office@alpha.test"])
        self.assertEqual(message.reply_to, ["job-j-1001@jobs.example.com"])
        self.assertIn(portal.share_token, message.body)
        self.assertTrue(
            Notification.objects.filter(
                event_type=NotificationEventType.PORTAL_LINK, job=self.job
            ).exists()
        )

        self.purchase_order.refresh_from_db()
        self.assertEqual(self.purchase_order.status, PurchaseOrderStatus.SUBMITTED)
        self.assertEqual(self.purchase_order.emailed_to, "office@alpha.test")

    def test_primary_contact_is_preferred(self):
        ClientContact.objects.create(
            client=self.vendor, name="Ann", email="ann@alpha.test", is_primary=True
        )

        body = self.client.post(self.url).json()

        self.assertEqual(body["email"], "ann@alpha.test")

    def test_resending_rotates_the_link(self):
        first = PortalTokenService.issue(self.job.id, purchase_order_id=self.purchase_order.id)

        body = self.client.post(self.url).json()

        self.assertNotIn(first.share_token, body["portalUrl"])
        self.assertEqual(JobPortal.objects.filter(job=self.job).count(), 1)

    def test_vendor_without_email(self):
        self.vendor.email = None
        self.vendor.save()

        response = self.client.post(self.url)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json(), {"error": "No email address for vendor Alpha Print"})
        self.assertFalse(JobPortal.objects.exists())

    def test_unknown_purchase_order(self):
        response = self.client.post(f"/api/purchase-orders/{uuid.uuid4()}/email-vendor")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
