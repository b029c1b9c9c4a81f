import uuid

from django.db import models
from django.utils import timezone

from apps.portal.enums import VendorStatus


class JobPortal(models.Model):
    """
    Token-gated vendor view of one job.

    There is at most one portal per job. Whoever holds ``share_token`` has
    full vendor capability until ``expires_at``; rotating the token updates
    this row rather than creating a second one.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    job = models.OneToOneField(
        "job.Job", on_delete=models.CASCADE, related_name="portal"
    )
    purchase_order = models.ForeignKey(
        "purchasing.PurchaseOrder",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="portals",
        help_text="The PO shown to the vendor. None shows the latest PO on the job.",
    )
    share_token = models.CharField(max_length=128, unique=True)
    # sha256 of share_token, used for lookup
    token_digest = models.CharField(max_length=64, unique=True)
    expires_at = models.DateTimeField()
    access_count = models.PositiveIntegerField(default=0)
    accessed_at = models.DateTimeField(null=True, blank=True)

    confirmed_at = models.DateTimeField(null=True, blank=True)
    confirmed_by_name = models.CharField(max_length=255, null=True, blank=True)
    confirmed_by_email = models.EmailField(null=True, blank=True)

    vendor_status = models.CharField(
        max_length=20, choices=VendorStatus.choices, default=VendorStatus.PENDING
    )
    status_updated_at = models.DateTimeField(null=True, blank=True)
    tracking_number = models.CharField(max_length=100, null=True, blank=True)
    tracking_carrier = models.CharField(max_length=50, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "portal_jobportal"
        verbose_name = "Job Portal"
        verbose_name_plural = "Job Portals"

    def __str__(self):
        return f"Portal for {self.job.job_number}"

    @property
    def is_expired(self) -> bool:
        return self.expires_at < timezone.now()

    @property
    def is_confirmed(self) -> bool:
        return self.confirmed_at is not None

    def get_purchase_order(self):
        """The scoped PO, or the newest PO on the job when none is scoped."""
        if self.purchase_order_id:
            return self.purchase_order
        return self.job.purchase_orders.order_by("-created_at").first()
