import uuid

from django.db import models


class AppError(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    timestamp = models.DateTimeField(auto_now_add=True)
    message = models.TextField()
    data = models.JSONField(blank=True, null=True)

    class Meta:
        db_table = "workflow_app_error"
        ordering = ["-timestamp"]
        verbose_name = "Application Error"
        verbose_name_plural = "Application Errors"
