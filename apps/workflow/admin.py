# workflow/admin.py

from django.contrib import admin

from apps.workflow.models import AppError, CompanyDefaults, Notification, NumberSequence


@admin.register(CompanyDefaults)
class CompanyDefaultsAdmin(admin.ModelAdmin):
    def edit_link(self, obj):
        from django.utils.html import format_html

        return format_html('<a href="{}/change/">Edit defaults</a>', obj.pk)

    edit_link.short_description = "Actions"

    list_display = [
        "edit_link",
        "company_name",
        "starting_job_number",
        "job_email_domain",
    ]

    fieldsets = (
        (None, {"fields": ("company_name",)}),
        (
            "Numbering",
            {"fields": ("starting_job_number",)},
        ),
        (
            "E-mail",
            {"fields": ("job_email_domain", "notification_from_email")},
        ),
    )

    def has_add_permission(self, request):
        return not CompanyDefaults.objects.exists()


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = [
        "event_type",
        "recipient",
        "subject",
        "status",
        "attempts",
        "created_at",
        "sent_at",
    ]
    list_filter = ["status", "event_type"]
    search_fields = ["recipient", "subject"]
    readonly_fields = ["created_at", "sent_at", "attempts", "last_error"]


@admin.register(AppError)
class AppErrorAdmin(admin.ModelAdmin):
    list_display = ["timestamp", "message"]
    readonly_fields = ["id", "timestamp", "message", "data"]


@admin.register(NumberSequence)
class NumberSequenceAdmin(admin.ModelAdmin):
    list_display = ["name", "last_value", "updated_at"]
