"""
Vendor RFQ REST Views

Staff endpoints for the RFQ lifecycle. Views parse the request, call
VendorRFQService and render the result; every rule lives in the service.
"""

import logging

from rest_framework import status
from rest_framework.response import Response

from apps.rfq.serializers import VendorQuoteSerializer, VendorRFQSerializer
from apps.rfq.services.rfq_service import VendorRFQService
from apps.workflow.views.base_rest_view import BaseRestView

logger = logging.getLogger(__name__)


class VendorRFQListRestView(BaseRestView):
    def get(self, request):
        """
        List RFQs.

        Query params: status, startDate, endDate, limit, offset
        """
        try:
            result = VendorRFQService.list_rfqs(
                status=request.query_params.get("status"),
                start_date=request.query_params.get("startDate"),
                end_date=request.query_params.get("endDate"),
                limit=request.query_params.get("limit"),
                offset=request.query_params.get("offset"),
            )
            return Response(
                {
                    "rfqs": VendorRFQSerializer(result["rfqs"], many=True).data,
                    "total": result["total"],
                    "stats": result["stats"],
                }
            )
        except Exception as e:
            return self.handle_service_error(e)

    def post(self, request):
        """
        Create a DRAFT RFQ.

        Expected JSON:
        {
            "title": "Spring catalog",
            "specs": "5,000 x 24pp saddle stitched",
            "dueDate": "2026-03-01",
            "vendorIds": ["vendor-uuid", ...],
            "notes": "optional",
            "jobId": "optional job uuid"
        }
        """
        try:
            data = self.parse_json_body(request)
            rfq = VendorRFQService.create_rfq(data, user=request.user)
            rfq = VendorRFQService.get_rfq(rfq.id)
            return Response(
                VendorRFQSerializer(rfq).data, status=status.HTTP_201_CREATED
            )
        except Exception as e:
            return self.handle_service_error(e)


class VendorRFQDetailRestView(BaseRestView):
    def get(self, request, rfq_id):
        try:
            rfq = VendorRFQService.get_rfq(rfq_id)
            return Response(VendorRFQSerializer(rfq).data)
        except Exception as e:
            return self.handle_service_error(e)

    def patch(self, request, rfq_id):
        """
        Edit a DRAFT RFQ. Accepts any of title, specs, dueDate, notes, vendorIds.
        """
        try:
            data = self.parse_json_body(request)
            VendorRFQService.update_rfq(rfq_id, data)
            rfq = VendorRFQService.get_rfq(rfq_id)
            return Response(VendorRFQSerializer(rfq).data)
        except Exception as e:
            return self.handle_service_error(e)

    def delete(self, request, rfq_id):
        try:
            VendorRFQService.delete_rfq(rfq_id)
            return Response({"success": True, "message": "RFQ deleted"})
        except Exception as e:
            return self.handle_service_error(e)


class VendorRFQSendRestView(BaseRestView):
    def post(self, request, rfq_id):
        """
        E-mail the RFQ to every invited vendor.
        """
        try:
            return Response(VendorRFQService.send_rfq(rfq_id))
        except Exception as e:
            return self.handle_service_error(e)


class VendorRFQInviteRestView(BaseRestView):
    def post(self, request, rfq_id):
        """
        Invite more vendors to an RFQ already out for quotes.

        Expected JSON:
        {
            "vendorIds": ["vendor-uuid", ...]
        }
        """
        try:
            data = self.parse_json_body(request)
            result = VendorRFQService.invite_vendors(rfq_id, data.get("vendorIds"))
            rfq = VendorRFQService.get_rfq(rfq_id)
            return Response(
                {
                    "success": True,
                    "results": result["results"],
                    "rfq": VendorRFQSerializer(rfq).data,
                }
            )
        except Exception as e:
            return self.handle_service_error(e)


class VendorRFQQuoteRestView(BaseRestView):
    def post(self, request, rfq_id):
        """
        Record a vendor's quote.

        Expected JSON:
        {
            "vendorId": "vendor-uuid",
            "quoteAmount": 1250.00,
            "turnaroundDays": 5,
            "notes": "optional",
            "status": "RECEIVED"
        }
        """
        try:
            data = self.parse_json_body(request)
            quote = VendorRFQService.record_quote(rfq_id, data)
            return Response(VendorQuoteSerializer(quote).data)
        except Exception as e:
            return self.handle_service_error(e)


class VendorRFQAwardRestView(BaseRestView):
    def post(self, request, rfq_id, vendor_id):
        try:
            quote = VendorRFQService.award_vendor(rfq_id, vendor_id)
            return Response(
                {"success": True, "awardedQuote": VendorQuoteSerializer(quote).data}
            )
        except Exception as e:
            return self.handle_service_error(e)


class VendorRFQCancelRestView(BaseRestView):
    def post(self, request, rfq_id):
        try:
            VendorRFQService.cancel_rfq(rfq_id)
            rfq = VendorRFQService.get_rfq(rfq_id)
            return Response({"success": True, "rfq": VendorRFQSerializer(rfq).data})
        except Exception as e:
            return self.handle_service_error(e)


class VendorRFQConvertRestView(BaseRestView):
    def post(self, request, rfq_id):
        """
        Convert an awarded RFQ into a job.

        Expected JSON (customerId required unless the RFQ is linked to a job):
        {
            "customerId": "client-uuid",
            "title": "optional job name"
        }
        """
        try:
            data = self.parse_json_body(request)
            result = VendorRFQService.convert_to_job(
                rfq_id,
                customer_id=data.get("customerId"),
                title=data.get("title"),
                user=request.user,
            )
            return Response(result)
        except Exception as e:
            return self.handle_service_error(e)
