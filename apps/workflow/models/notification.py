import uuid

from django.db import models


class NotificationEventType(models.TextChoices):
    RFQ_SENT = "RFQ_SENT", "RFQ Sent"
    PORTAL_LINK = "PORTAL_LINK", "Portal Link"
    PO_CONFIRMED = "PO_CONFIRMED", "PO Confirmed"
    STATUS_UPDATED = "STATUS_UPDATED", "Vendor Status Updated"
    PROOF_UPLOADED = "PROOF_UPLOADED", "Vendor Proof Uploaded"


class NotificationStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    SENT = "SENT", "Sent"
    FAILED = "FAILED", "Failed"


class Notification(models.Model):
    """
    Outbox row for an e-mail triggered by a state change.

    Written in the same transaction as the change it describes and delivered
    afterwards by ``apps.workflow.tasks.deliver_notification``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event_type = models.CharField(max_length=30, choices=NotificationEventType.choices)
    job = models.ForeignKey(
        "job.Job",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="notifications",
    )
    recipient = models.EmailField()
    reply_to = models.EmailField(null=True, blank=True)
    subject = models.CharField(max_length=255)
    body = models.TextField()
    status = models.CharField(
        max_length=10,
        choices=NotificationStatus.choices,
        default=NotificationStatus.PENDING,
    )
    attempts = models.PositiveIntegerField(default=0)
    last_error = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    sent_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "workflow_notification"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.event_type} -> {self.recipient} ({self.status})"
