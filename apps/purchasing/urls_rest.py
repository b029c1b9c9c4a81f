from django.urls import path

from apps.purchasing.views.purchase_order_email_view import (
    PurchaseOrderEmailVendorRestView,
)

app_name = "purchasing_rest"

urlpatterns = [
    path(
        "purchase-orders/<uuid:purchase_order_id>/email-vendor",
        PurchaseOrderEmailVendorRestView.as_view(),
        name="purchase_order_email_vendor",
    ),
]
