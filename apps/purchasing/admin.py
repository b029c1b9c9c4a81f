from django.contrib import admin

from apps.purchasing.models import PurchaseOrder


@admin.register(PurchaseOrder)
class PurchaseOrderAdmin(admin.ModelAdmin):
    list_display = ["po_number", "job", "vendor", "buy_cost", "status", "emailed_at"]
    list_filter = ["status"]
    search_fields = ["po_number", "job__job_number", "vendor__name"]
    readonly_fields = ["po_number", "emailed_at", "emailed_to"]
