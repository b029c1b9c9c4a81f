import os
import uuid

from django.conf import settings
from django.db import models

from apps.job.enums import JobFileKind


class JobFile(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    job = models.ForeignKey("Job", related_name="files", on_delete=models.CASCADE)
    kind = models.CharField(
        max_length=20, choices=JobFileKind.choices, default=JobFileKind.OTHER
    )
    filename = models.CharField(max_length=255)
    # Relative to PORTAL_UPLOAD_FOLDER
    file_path = models.CharField(max_length=500)
    mime_type = models.CharField(max_length=100, blank=True)
    size = models.PositiveBigIntegerField(null=True, blank=True)
    checksum = models.CharField(max_length=64, blank=True)
    uploaded_by = models.CharField(max_length=100, blank=True)
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["uploaded_at"]
        db_table = "workflow_jobfile"

    def __str__(self):
        return f"{self.filename} ({self.kind})"

    @property
    def full_path(self):
        """Full system path to the file."""
        return os.path.join(settings.PORTAL_UPLOAD_FOLDER, self.file_path)

    @property
    def exists_on_disk(self) -> bool:
        return os.path.isfile(self.full_path)
