import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    dependencies = [
        ("job", "0001_initial"),
        ("workflow", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                (
                    "event_type",
                    models.CharField(
                        choices=[
                            ("RFQ_SENT", "RFQ Sent"),
                            ("PORTAL_LINK", "Portal Link"),
                            ("PO_CONFIRMED", "PO Confirmed"),
                            ("STATUS_UPDATED", "Vendor Status Updated"),
                            ("PROOF_UPLOADED", "Vendor Proof Uploaded"),
                        ],
                        max_length=30,
                    ),
                ),
                ("recipient", models.EmailField(max_length=254)),
                ("reply_to", models.EmailField(blank=True, max_length=254, null=True)),
                ("subject", models.CharField(max_length=255)),
                ("body", models.TextField()),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("SENT", "Sent"),
                            ("FAILED", "Failed"),
                        ],
                        default="PENDING",
                        max_length=10,
                    ),
                ),
                ("attempts", models.PositiveIntegerField(default=0)),
                ("last_error", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("sent_at", models.DateTimeField(blank=True, null=True)),
                (
                    "job",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="notifications",
                        to="job.job",
                    ),
                ),
            ],
            options={
                "db_table": "workflow_notification",
                "ordering": ["-created_at"],
            },
        ),
    ]
