import logging

from rest_framework import status
from rest_framework.response import Response

from apps.portal.models import JobPortal
from apps.portal.services.portal_token_service import (
    PortalTokenService,
    build_portal_url,
)
from apps.workflow.views.base_rest_view import BaseRestView

logger = logging.getLogger(__name__)


def serialize_portal_link(portal: JobPortal) -> dict:
    return {
        "portalUrl": build_portal_url(portal),
        "shareToken": portal.share_token,
        "expiresAt": portal.expires_at,
        "accessCount": portal.access_count,
        "purchaseOrderId": portal.purchase_order_id,
    }


class JobPortalRestView(BaseRestView):
    """
    Staff management of a job's portal link.
    """

    def get(self, request, job_id):
        """
        Current portal link, issuing a new one if none exists or it expired.
        """
        try:
            portal = PortalTokenService.get_or_issue(job_id)
            return Response(serialize_portal_link(portal))
        except Exception as e:
            return self.handle_service_error(e)

    def post(self, request, job_id):
        """
        Rotate the portal token.

        Expected JSON (all optional):
        {
            "purchaseOrderId": "po-uuid",
            "ttlDays": 14
        }
        """
        try:
            data = self.parse_json_body(request)
            portal = PortalTokenService.issue(
                job_id,
                purchase_order_id=data.get("purchaseOrderId"),
                ttl_days=data.get("ttlDays"),
            )
            logger.info(f"{request.user} rotated portal for job {portal.job.job_number}")
            return Response(serialize_portal_link(portal), status=status.HTTP_201_CREATED)
        except Exception as e:
            return self.handle_service_error(e)
