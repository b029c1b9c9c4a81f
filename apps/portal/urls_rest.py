"""
Portal REST URLs

Staff: /api/jobs/<job_id>/portal
Vendors (public, token in path): /api/portal/<token>/...
"""

from django.urls import path

from apps.portal.views.job_portal_rest_views import JobPortalRestView
from apps.portal.views.portal_rest_views import (
    PortalConfirmRestView,
    PortalDownloadAllView,
    PortalFileDownloadView,
    PortalRestView,
    PortalStatusRestView,
    PortalUploadRestView,
)

app_name = "portal_rest"

urlpatterns = [
    path("jobs/<uuid:job_id>/portal", JobPortalRestView.as_view(), name="job_portal"),
    path("portal/<str:token>", PortalRestView.as_view(), name="portal_view"),
    path(
        "portal/<str:token>/confirm",
        PortalConfirmRestView.as_view(),
        name="portal_confirm",
    ),
    path(
        "portal/<str:token>/status",
        PortalStatusRestView.as_view(),
        name="portal_status",
    ),
    path(
        "portal/<str:token>/upload",
        PortalUploadRestView.as_view(),
        name="portal_upload",
    ),
    path(
        "portal/<str:token>/files/<uuid:file_id>",
        PortalFileDownloadView.as_view(),
        name="portal_file_download",
    ),
    path(
        "portal/<str:token>/download-all",
        PortalDownloadAllView.as_view(),
        name="portal_download_all",
    ),
]
