"""
RFQ REST URLs

Staff endpoints under /api/vendor-rfqs/
"""

from django.urls import path

from apps.rfq.views.rfq_rest_views import (
    VendorRFQAwardRestView,
    VendorRFQCancelRestView,
    VendorRFQConvertRestView,
    VendorRFQDetailRestView,
    VendorRFQInviteRestView,
    VendorRFQListRestView,
    VendorRFQQuoteRestView,
    VendorRFQSendRestView,
)

app_name = "rfq_rest"

urlpatterns = [
    path("vendor-rfqs", VendorRFQListRestView.as_view(), name="rfq_list"),
    path(
        "vendor-rfqs/<uuid:rfq_id>",
        VendorRFQDetailRestView.as_view(),
        name="rfq_detail",
    ),
    path(
        "vendor-rfqs/<uuid:rfq_id>/send",
        VendorRFQSendRestView.as_view(),
        name="rfq_send",
    ),
    path(
        "vendor-rfqs/<uuid:rfq_id>/vendors",
        VendorRFQInviteRestView.as_view(),
        name="rfq_invite_vendors",
    ),
    path(
        "vendor-rfqs/<uuid:rfq_id>/quotes",
        VendorRFQQuoteRestView.as_view(),
        name="rfq_record_quote",
    ),
    path(
        "vendor-rfqs/<uuid:rfq_id>/award/<uuid:vendor_id>",
        VendorRFQAwardRestView.as_view(),
        name="rfq_award",
    ),
    path(
        "vendor-rfqs/<uuid:rfq_id>/cancel",
        VendorRFQCancelRestView.as_view(),
        name="rfq_cancel",
    ),
    path(
        "vendor-rfqs/<uuid:rfq_id>/convert-to-job",
        VendorRFQConvertRestView.as_view(),
        name="rfq_convert_to_job",
    ),
]
