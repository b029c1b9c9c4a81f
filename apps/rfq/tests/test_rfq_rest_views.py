import uuid

from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APITestCase

from apps.client.models import Client, Supplier
from apps.rfq.enums import RFQStatus
from apps.rfq.models import VendorRFQ

User = get_user_model()


class VendorRFQRestViewTests(APITestCase):
    def setUp(self):
        self.staff = User.objects.create_user(username="staff", password="secret-pass")
        self.client.force_authenticate(user=self.staff)
        self.vendor_a = Supplier.objects.create(name="Alpha Print", email="a@alpha.test")
        self.vendor_b = Supplier.objects.create(name="Beta Press", email="b@beta.test")
        self.customer = Client.objects.create(name="Acme Corp")

    def create_rfq(self):
        response = self.client.post(
            "/api/vendor-rfqs",
            {
                "title": "Spring catalog",
                "specs": "5,000 x 24pp",
                "dueDate": "2026-03-01",
                "vendorIds": [str(self.vendor_a.id), str(self.vendor_b.id)],
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        return response.json()

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)

        response = self.client.get("/api/vendor-rfqs")

        self.assertIn(
            response.status_code,
            (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN),
        )

    def test_create_returns_rfq(self):
        body = self.create_rfq()

        self.assertEqual(body["status"], RFQStatus.DRAFT)
        self.assertRegex(body["rfqNumber"], r"^RFQ-\d{8}-001$")
        self.assertEqual(body["dueDate"], "2026-03-01")
        self.assertEqual(
            {v["vendor"]["name"] for v in body["vendors"]}, {"Alpha Print", "Beta Press"}
        )
        self.assertEqual(body["quotes"], [])
        self.assertIsNone(body["job"])

    def test_create_validation_error_is_400(self):
        response = self.client.post(
            "/api/vendor-rfqs",
            {"title": "No vendors", "specs": "x", "dueDate": "2026-03-01", "vendorIds": []},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json(), {"error": "At least one vendor must be selected"})

    def test_invalid_json_is_400(self):
        response = self.client.post(
            "/api/vendor-rfqs", data="{not json", content_type="application/json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(response.json()["error"].startswith("Invalid JSON"))

    def test_unknown_rfq_is_404(self):
        response = self.client.get(f"/api/vendor-rfqs/{uuid.uuid4()}")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json(), {"error": "RFQ not found"})

    def test_full_award_workflow(self):
        rfq = self.create_rfq()
        base = f"/api/vendor-rfqs/{rfq['id']}"

        sent = self.client.post(f"{base}/send").json()
        self.assertTrue(sent["success"])
        self.assertEqual(sent["message"], "RFQ sent to 2 of 2 vendors")
        self.assertEqual(
            {r["vendorId"] for r in sent["results"]},
            {str(self.vendor_a.id), str(self.vendor_b.id)},
        )

        quote_a = self.client.post(
            f"{base}/quotes",
            {"vendorId": str(self.vendor_a.id), "quoteAmount": 1200, "turnaroundDays": 5},
            format="json",
        )
        self.assertEqual(quote_a.status_code, status.HTTP_200_OK)
        self.assertEqual(quote_a.json()["quoteAmount"], "1200.00")
        self.assertEqual(self.client.get(base).json()["status"], RFQStatus.PENDING)

        self.client.post(
            f"{base}/quotes",
            {"vendorId": str(self.vendor_b.id), "quoteAmount": "1100.00"},
            format="json",
        )
        detail = self.client.get(base).json()
        self.assertEqual(detail["status"], RFQStatus.QUOTED)
        # Highest amount first
        self.assertEqual([q["quoteAmount"] for q in detail["quotes"]], ["1200.00", "1100.00"])

        award = self.client.post(f"{base}/award/{self.vendor_b.id}")
        self.assertEqual(award.status_code, status.HTTP_200_OK)
        self.assertTrue(award.json()["success"])
        self.assertEqual(award.json()["awardedQuote"]["vendorId"], str(self.vendor_b.id))
        self.assertTrue(award.json()["awardedQuote"]["isAwarded"])

        converted = self.client.post(
            f"{base}/convert-to-job", {"customerId": str(self.customer.id)}, format="json"
        )
        self.assertEqual(converted.status_code, status.HTTP_200_OK)
        body = converted.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["jobNo"], "J-1001")

        detail = self.client.get(base).json()
        self.assertEqual(detail["status"], RFQStatus.CONVERTED)
        self.assertEqual(detail["job"]["jobNo"], "J-1001")
        self.assertEqual(detail["job"]["vendorId"], str(self.vendor_b.id))

        again = self.client.post(
            f"{base}/convert-to-job", {"customerId": str(self.customer.id)}, format="json"
        )
        self.assertEqual(again.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(again.json(), {"error": "RFQ has already been converted to a job"})

    def test_quote_from_uninvited_vendor_is_400(self):
        rfq = self.create_rfq()
        outsider = Supplier.objects.create(name="Delta Digital")

        response = self.client.post(
            f"/api/vendor-rfqs/{rfq['id']}/quotes",
            {"vendorId": str(outsider.id), "quoteAmount": 10},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json(), {"error": "Vendor is not assigned to this RFQ"})

    def test_convert_without_award_is_400(self):
        rfq = self.create_rfq()

        response = self.client.post(
            f"/api/vendor-rfqs/{rfq['id']}/convert-to-job",
            {"customerId": str(self.customer.id)},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.json(),
            {"error": "No vendor has been awarded. Award a vendor first."},
        )

    def test_patch_and_delete_draft(self):
        rfq = self.create_rfq()
        url = f"/api/vendor-rfqs/{rfq['id']}"

        patched = self.client.patch(url, {"notes": "Rush"}, format="json")
        self.assertEqual(patched.status_code, status.HTTP_200_OK)
        self.assertEqual(patched.json()["notes"], "Rush")

        deleted = self.client.delete(url)
        self.assertEqual(deleted.status_code, status.HTTP_200_OK)
        self.assertFalse(VendorRFQ.objects.filter(id=rfq["id"]).exists())

    def test_invite_and_cancel(self):
        rfq = self.create_rfq()
        base = f"/api/vendor-rfqs/{rfq['id']}"
        self.client.post(f"{base}/send")
        late = Supplier.objects.create(name="Late Litho", email="late@litho.test")

        invited = self.client.post(
            f"{base}/vendors", {"vendorIds": [str(late.id)]}, format="json"
        )
        self.assertEqual(invited.status_code, status.HTTP_200_OK)
        self.assertEqual(len(invited.json()["rfq"]["vendors"]), 3)

        cancelled = self.client.post(f"{base}/cancel")
        self.assertEqual(cancelled.json()["rfq"]["status"], RFQStatus.CANCELLED)

    def test_list_includes_stats(self):
        self.create_rfq()

        body = self.client.get("/api/vendor-rfqs", {"status": "DRAFT"}).json()

        self.assertEqual(body["total"], 1)
        self.assertEqual(len(body["rfqs"]), 1)
        self.assertEqual(body["stats"]["draft"], 1)
