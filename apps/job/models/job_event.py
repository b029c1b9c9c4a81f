import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone


class JobEvent(models.Model):
    """
    Audit log entry for a job. Staff actions carry ``staff``; actions taken
    through the vendor portal carry ``changed_by="vendor"`` instead.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    job = models.ForeignKey("Job", on_delete=models.CASCADE, related_name="events")
    timestamp = models.DateTimeField(default=timezone.now)
    event_type = models.CharField(max_length=50)
    description = models.TextField()
    field_name = models.CharField(max_length=50, null=True, blank=True)
    old_value = models.CharField(max_length=255, null=True, blank=True)
    new_value = models.CharField(max_length=255, null=True, blank=True)
    changed_by = models.CharField(max_length=100, null=True, blank=True)
    staff = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True
    )

    class Meta:
        ordering = ["-timestamp"]
        db_table = "workflow_jobevent"

    def __str__(self):
        return f"{self.timestamp}: {self.event_type} for {self.job_id}"
