from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.http import Http404
from django.test import TestCase
from rest_framework.test import APIRequestFactory, APITestCase

from apps.workflow.exceptions import (
    AlreadyConfirmedError,
    NotAssignedError,
    NotFoundError,
    PortalExpiredError,
    ValidationError,
)
from apps.workflow.models import AppError
from apps.workflow.views.base_rest_view import BaseRestView

User = get_user_model()


class HandleServiceErrorTests(TestCase):
    def setUp(self):
        self.view = BaseRestView()

    def test_domain_errors_keep_their_status(self):
        cases = [
            (ValidationError("Bad input"), 400),
            (NotAssignedError("rfq", "vendor"), 400),
            (AlreadyConfirmedError(), 400),
            (NotFoundError("RFQ not found"), 404),
            (PortalExpiredError(), 410),
        ]
        for error, expected_status in cases:
            with self.subTest(error=type(error).__name__):
                response = self.view.handle_service_error(error)
                self.assertEqual(response.status_code, expected_status)
                self.assertEqual(response.data, {"error": error.message})
        self.assertFalse(AppError.objects.exists())

    def test_http404(self):
        response = self.view.handle_service_error(Http404())

        self.assertEqual(response.status_code, 404)

    def test_unexpected_error_is_hidden_and_recorded(self):
        response = self.view.handle_service_error(RuntimeError("db password is hunter2"))

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data, {"error": "Internal server error"})
        app_error = AppError.objects.get()
        self.assertEqual(app_error.message, "db password is hunter2")
        self.assertEqual(app_error.data["type"], "RuntimeError")


class ParseJsonBodyTests(TestCase):
    def setUp(self):
        self.view = BaseRestView()
        self.factory = APIRequestFactory()

    def test_empty_body_is_empty_object(self):
        request = self.factory.post("/", data="", content_type="application/json")

        self.assertEqual(self.view.parse_json_body(request), {})

    def test_non_object_body_is_rejected(self):
        request = self.factory.post("/", data="[1, 2]", content_type="application/json")

        with self.assertRaises(ValidationError):
            self.view.parse_json_body(request)


class UnexpectedErrorThroughViewTests(APITestCase):
    def test_500_from_a_real_endpoint(self):
        staff = User.objects.create_user(username="staff", password="secret-pass")
        self.client.force_authenticate(user=staff)

        with patch(
            "apps.rfq.views.rfq_rest_views.VendorRFQService.list_rfqs",
            side_effect=RuntimeError("boom"),
        ):
            response = self.client.get("/api/vendor-rfqs")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Internal server error"})
        self.assertEqual(AppError.objects.count(), 1)
