import logging

from rest_framework.response import Response

from apps.purchasing.services.purchase_order_email_service import (
    email_purchase_order_to_vendor,
)
from apps.workflow.views.base_rest_view import BaseRestView

logger = logging.getLogger(__name__)


class PurchaseOrderEmailVendorRestView(BaseRestView):
    """
    Email the PO to its vendor together with a fresh portal link.
    """

    def post(self, request, purchase_order_id):
        try:
            result = email_purchase_order_to_vendor(purchase_order_id)
            return Response(result)
        except Exception as e:
            return self.handle_service_error(e)
