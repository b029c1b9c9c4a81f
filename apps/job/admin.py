from django.contrib import admin
from simple_history.admin import SimpleHistoryAdmin

from apps.job.models import Job, JobEvent, JobFile


class JobFileInline(admin.TabularInline):
    model = JobFile
    extra = 0
    fields = ("filename", "kind", "size", "uploaded_by", "uploaded_at")
    readonly_fields = ("uploaded_at",)


class JobEventInline(admin.TabularInline):
    model = JobEvent
    extra = 0
    fields = ("timestamp", "event_type", "description", "changed_by", "staff")
    readonly_fields = fields


@admin.register(Job)
class JobAdmin(SimpleHistoryAdmin):
    list_display = ["job_number", "name", "customer", "vendor", "status", "sell_price"]
    list_filter = ["status"]
    search_fields = ["job_number", "name", "customer__name", "vendor__name"]
    readonly_fields = ["job_number", "created_at", "updated_at"]
    inlines = [JobFileInline, JobEventInline]
