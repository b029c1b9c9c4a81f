from django.contrib import admin

from apps.portal.models import JobPortal


@admin.register(JobPortal)
class JobPortalAdmin(admin.ModelAdmin):
    list_display = [
        "job",
        "vendor_status",
        "confirmed_at",
        "expires_at",
        "access_count",
        "accessed_at",
    ]
    list_filter = ["vendor_status"]
    search_fields = ["job__job_number", "job__name"]
    exclude = ["share_token", "token_digest"]
    readonly_fields = ["access_count", "accessed_at", "confirmed_at"]
