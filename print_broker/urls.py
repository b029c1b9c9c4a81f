from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("apps.rfq.urls_rest")),
    path("api/", include("apps.portal.urls_rest")),
    path("api/", include("apps.purchasing.urls_rest")),
]
