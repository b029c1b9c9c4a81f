from django.contrib import admin
from simple_history.admin import SimpleHistoryAdmin

from apps.rfq.models import VendorQuote, VendorRFQ, VendorRFQVendor


class VendorRFQVendorInline(admin.TabularInline):
    model = VendorRFQVendor
    extra = 0
    fields = ("vendor", "sent_at")
    readonly_fields = ("sent_at",)


class VendorQuoteInline(admin.TabularInline):
    model = VendorQuote
    extra = 0
    fields = (
        "vendor",
        "quote_amount",
        "turnaround_days",
        "status",
        "is_awarded",
        "responded_at",
    )
    readonly_fields = ("is_awarded",)


@admin.register(VendorRFQ)
class VendorRFQAdmin(SimpleHistoryAdmin):
    list_display = ["rfq_number", "title", "status", "due_date", "job", "created_at"]
    list_filter = ["status"]
    search_fields = ["rfq_number", "title"]
    readonly_fields = ["rfq_number", "status", "sent_at", "created_at", "updated_at"]
    inlines = [VendorRFQVendorInline, VendorQuoteInline]
