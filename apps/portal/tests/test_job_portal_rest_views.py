import uuid
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.client.models import Client, Supplier
from apps.job.models import Job
from apps.portal.models import JobPortal
from apps.purchasing.models import PurchaseOrder

User = get_user_model()


class JobPortalRestViewTests(APITestCase):
    def setUp(self):
        self.staff = User.objects.create_user(username="staff", password="secret-pass")
        self.client.force_authenticate(user=self.staff)
        self.vendor = Supplier.objects.create(name="Alpha Print", email="a@alpha.test")
        self.job = Job.objects.create(
            name="Spring catalog",
            customer=Client.objects.create(name="Acme Corp"),
            vendor=self.vendor,
        )
        self.url = f"/api/jobs/{self.job.id}/portal"

    def test_get_issues_portal_once(self):
        first = self.client.get(self.url).json()
        second = self.client.get(self.url).json()

        self.assertEqual(first["shareToken"], second["shareToken"])
        self.assertEqual(
            first["portalUrl"], f"https://portal.example.com/portal/{first['shareToken']}"
        )
        self.assertEqual(JobPortal.objects.filter(job=self.job).count(), 1)

    def test_get_replaces_expired_portal(self):
        first = self.client.get(self.url).json()
        JobPortal.objects.filter(job=self.job).update(
            expires_at=timezone.now() - timedelta(days=1)
        )

        second = self.client.get(self.url).json()

        self.assertNotEqual(first["shareToken"], second["shareToken"])

    def test_post_rotates_token(self):
        first = self.client.get(self.url).json()
        po = PurchaseOrder.objects.create(vendor=self.vendor, job=self.job)

        response = self.client.post(
            self.url, {"purchaseOrderId": str(po.id), "ttlDays": 3}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        body = response.json()
        self.assertNotEqual(body["shareToken"], first["shareToken"])
        self.assertEqual(body["purchaseOrderId"], str(po.id))
        self.assertEqual(body["accessCount"], 0)
        self.assertEqual(
            self.client.get(f"/api/portal/{first['shareToken']}").status_code,
            status.HTTP_404_NOT_FOUND,
        )

    def test_unknown_job_is_404(self):
        response = self.client.post(f"/api/jobs/{uuid.uuid4()}/portal")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json(), {"error": "Job not found"})

    def test_staff_endpoint_needs_login(self):
        self.client.force_authenticate(user=None)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
