"""
Vendor Portal REST Views

Public endpoints under /api/portal/<token>/. There is no session here: the
share token in the URL is the credential. Every view resolves the token
before touching the request body, so a dead token answers 404 or 410 the same
way on every endpoint.
"""

import logging

from django.http import FileResponse
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from apps.job.serializers import JobFileSerializer
from apps.portal.services.portal_token_service import PortalTokenService
from apps.portal.services.vendor_portal_service import VendorPortalService
from apps.workflow.views.base_rest_view import BaseRestView

logger = logging.getLogger(__name__)


class BasePortalRestView(BaseRestView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def resolve_portal(self, token):
        return PortalTokenService.resolve(token)


class PortalRestView(BasePortalRestView):
    def get(self, request, token):
        """
        Portal view payload: job summary, files, confirmation and status.
        """
        try:
            portal = self.resolve_portal(token)
            return Response(VendorPortalService.build_view(portal))
        except Exception as e:
            return self.handle_service_error(e)


class PortalConfirmRestView(BasePortalRestView):
    def post(self, request, token):
        """
        Confirm receipt of the PO.

        Expected JSON:
        {
            "name": "Jane Vendor",
            "email": "jane@vendor.com"
        }
        """
        try:
            portal = self.resolve_portal(token)
            data = self.parse_json_body(request)
            portal = VendorPortalService.confirm(
                portal, data.get("name"), data.get("email")
            )
            return Response(
                {
                    "success": True,
                    "message": "PO confirmed",
                    "portal": VendorPortalService.portal_state(portal),
                }
            )
        except Exception as e:
            return self.handle_service_error(e)


class PortalStatusRestView(BasePortalRestView):
    def post(self, request, token):
        """
        Report production status.

        Expected JSON:
        {
            "status": "SHIPPED",
            "trackingNumber": "1Z999AA10123456784",
            "trackingCarrier": "UPS"
        }
        """
        try:
            portal = self.resolve_portal(token)
            data = self.parse_json_body(request)
            portal = VendorPortalService.update_status(
                portal,
                data.get("status"),
                tracking_number=data.get("trackingNumber"),
                tracking_carrier=data.get("trackingCarrier"),
            )
            return Response(
                {
                    "success": True,
                    "message": "Status updated",
                    "portal": VendorPortalService.portal_state(portal),
                }
            )
        except Exception as e:
            return self.handle_service_error(e)


class PortalUploadRestView(BasePortalRestView):
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request, token):
        try:
            portal = self.resolve_portal(token)
            files = request.FILES.getlist("files")
            job_files = VendorPortalService.upload_files(portal, files)
            return Response(
                {
                    "success": True,
                    "message": f"{len(job_files)} file(s) uploaded",
                    "files": JobFileSerializer(job_files, many=True).data,
                },
                status=status.HTTP_201_CREATED,
            )
        except Exception as e:
            return self.handle_service_error(e)


class PortalFileDownloadView(BasePortalRestView):
    def get(self, request, token, file_id):
        try:
            portal = self.resolve_portal(token)
            job_file = VendorPortalService.get_file(portal, file_id)
            return FileResponse(
                open(job_file.full_path, "rb"),
                as_attachment=True,
                filename=job_file.filename,
                content_type=job_file.mime_type or None,
            )
        except Exception as e:
            return self.handle_service_error(e)


class PortalDownloadAllView(BasePortalRestView):
    def get(self, request, token):
        try:
            portal = self.resolve_portal(token)
            archive, filename = VendorPortalService.build_archive(portal)
            return FileResponse(
                archive,
                as_attachment=True,
                filename=filename,
                content_type="application/zip",
            )
        except Exception as e:
            return self.handle_service_error(e)
