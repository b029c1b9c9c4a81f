import logging
import uuid

from django.conf import settings
from django.db import models
from django.db.models import IntegerField, Max
from django.db.models.functions import Cast, Substr
from django.utils import timezone
from simple_history.models import HistoricalRecords  # type: ignore

from apps.rfq.enums import RFQStatus
from apps.workflow.models import NumberSequence

logger = logging.getLogger(__name__)


class VendorRFQ(models.Model):
    """
    A request for quote sent to one or more vendors for a print spec.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    rfq_number = models.CharField(max_length=30, unique=True, editable=False)
    title = models.CharField(max_length=255)
    specs = models.TextField()
    due_date = models.DateField()
    notes = models.TextField(null=True, blank=True)
    status = models.CharField(
        max_length=20, choices=RFQStatus.choices, default=RFQStatus.DRAFT
    )
    job = models.OneToOneField(
        "job.Job",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="rfq",
        help_text="Job this RFQ was raised for or converted into",
    )
    sent_at = models.DateTimeField(null=True, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    history: HistoricalRecords = HistoricalRecords(table_name="rfq_historicalvendorrfq")

    class Meta:
        db_table = "rfq_vendorrfq"
        ordering = ["-created_at"]
        verbose_name = "Vendor RFQ"
        verbose_name_plural = "Vendor RFQs"

    def __str__(self):
        return f"{self.rfq_number} {self.title} ({self.get_status_display()})"

    def generate_rfq_number(self) -> str:
        """RFQ-YYYYMMDD-NNN, numbered per calendar day."""
        date_str = timezone.localdate().strftime("%Y%m%d")
        prefix = f"RFQ-{date_str}-"

        def seed() -> int:
            agg = (
                VendorRFQ.objects.filter(rfq_number__regex=rf"^{prefix}\d+$")
                .annotate(num=Cast(Substr("rfq_number", len(prefix) + 1), IntegerField()))
                .aggregate(max_num=Max("num"))
            )
            return agg["max_num"] or 0

        nxt = NumberSequence.next_value(f"rfq-{date_str}", seed=seed)
        return f"{prefix}{nxt:03d}"

    def save(self, *args, **kwargs):
        if not self.rfq_number:
            self.rfq_number = self.generate_rfq_number()
        super().save(*args, **kwargs)


class VendorRFQVendor(models.Model):
    """A vendor invited to quote on an RFQ."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    rfq = models.ForeignKey(VendorRFQ, on_delete=models.CASCADE, related_name="invitees")
    vendor = models.ForeignKey(
        "client.Client", on_delete=models.CASCADE, related_name="rfq_invitations"
    )
    sent_at = models.DateTimeField(
        null=True, blank=True, help_text="When the RFQ e-mail reached the mail server"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "rfq_vendorrfqvendor"
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["rfq", "vendor"], name="unique_rfq_vendor_invite"
            ),
        ]

    def __str__(self):
        return f"{self.rfq.rfq_number} -> {self.vendor.name}"
