import logging
import uuid
from decimal import Decimal

from django.db import models
from django.db.models import IntegerField, Max
from django.db.models.functions import Cast, Substr

from apps.workflow.models import NumberSequence

logger = logging.getLogger(__name__)

PO_NUMBER_PREFIX = "PO-"
PO_NUMBER_SEQUENCE = "purchase_order"


class PurchaseOrderStatus(models.TextChoices):
    DRAFT = "draft", "Draft"
    SUBMITTED = "submitted", "Submitted to Vendor"
    CANCELLED = "cancelled", "Cancelled"


class PurchaseOrder(models.Model):
    """An order placed with a print vendor for one job."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    vendor = models.ForeignKey(
        "client.Client",
        on_delete=models.PROTECT,
        related_name="purchase_orders",
    )
    job = models.ForeignKey(
        "job.Job",
        on_delete=models.CASCADE,
        related_name="purchase_orders",
        help_text="Job this PO is for",
    )
    po_number = models.CharField(max_length=50, unique=True)
    description = models.TextField(blank=True, null=True)
    buy_cost = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    status = models.CharField(
        max_length=20,
        choices=PurchaseOrderStatus.choices,
        default=PurchaseOrderStatus.DRAFT,
    )
    emailed_at = models.DateTimeField(null=True, blank=True)
    emailed_to = models.EmailField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "workflow_purchaseorder"
        ordering = ["-created_at"]

    def __str__(self):
        return self.po_number

    @classmethod
    def highest_existing_po_number(cls) -> int:
        prefix_len = len(PO_NUMBER_PREFIX)

        # 1) Filter to exactly <prefix><digits>
        # 2) Strip off "<prefix>" (first prefix_len chars), cast the rest to int
        # 3) Take the MAX of that numeric part
        agg = (
            cls.objects.filter(po_number__regex=rf"^{PO_NUMBER_PREFIX}\d+$")
            .annotate(num=Cast(Substr("po_number", prefix_len + 1), IntegerField()))
            .aggregate(max_num=Max("num"))
        )
        return agg["max_num"] or 0

    def generate_po_number(self):
        """Generate the next sequential PO number."""
        nxt = NumberSequence.next_value(
            PO_NUMBER_SEQUENCE, seed=PurchaseOrder.highest_existing_po_number
        )
        return f"{PO_NUMBER_PREFIX}{nxt:04d}"

    def save(self, *args, **kwargs):
        """Save the model and auto-generate PO number if none exists."""
        if not self.po_number:
            self.po_number = self.generate_po_number()

        super().save(*args, **kwargs)
