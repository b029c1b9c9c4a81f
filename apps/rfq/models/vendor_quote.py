import uuid

from django.db import models
from django.db.models import Q

from apps.rfq.enums import VendorQuoteStatus


class VendorQuote(models.Model):
    """
    A vendor's answer to an RFQ, entered by staff.

    One row per (rfq, vendor); recording again overwrites it. At most one
    quote per RFQ is awarded. The partial unique index backs that up on
    databases that support it.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    rfq = models.ForeignKey(
        "rfq.VendorRFQ", on_delete=models.CASCADE, related_name="quotes"
    )
    vendor = models.ForeignKey(
        "client.Client", on_delete=models.CASCADE, related_name="rfq_quotes"
    )
    quote_amount = models.DecimalField(max_digits=12, decimal_places=2)
    turnaround_days = models.PositiveIntegerField(null=True, blank=True)
    notes = models.TextField(null=True, blank=True)
    status = models.CharField(
        max_length=20,
        choices=VendorQuoteStatus.choices,
        default=VendorQuoteStatus.RECEIVED,
    )
    is_awarded = models.BooleanField(default=False)
    responded_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "rfq_vendorquote"
        ordering = ["-quote_amount"]
        constraints = [
            models.UniqueConstraint(
                fields=["rfq", "vendor"], name="unique_rfq_vendor_quote"
            ),
            models.UniqueConstraint(
                fields=["rfq"],
                condition=Q(is_awarded=True),
                name="one_awarded_quote_per_rfq",
            ),
        ]

    def __str__(self):
        return f"{self.vendor.name}: {self.quote_amount} ({self.status})"
