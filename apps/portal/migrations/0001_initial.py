import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("job", "0001_initial"),
        ("purchasing", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="JobPortal",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("share_token", models.CharField(max_length=128, unique=True)),
                ("token_digest", models.CharField(max_length=64, unique=True)),
                ("expires_at", models.DateTimeField()),
                ("access_count", models.PositiveIntegerField(default=0)),
                ("accessed_at", models.DateTimeField(blank=True, null=True)),
                ("confirmed_at", models.DateTimeField(blank=True, null=True)),
                (
                    "confirmed_by_name",
                    models.CharField(blank=True, max_length=255, null=True),
                ),
                (
                    "confirmed_by_email",
                    models.EmailField(blank=True, max_length=254, null=True),
                ),
                (
                    "vendor_status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Awaiting Confirmation"),
                            ("PO_RECEIVED", "PO Received"),
                            ("IN_PRODUCTION", "In Production"),
                            ("PRINTING_COMPLETE", "Printing Complete"),
                            ("SHIPPED", "Shipped"),
                        ],
                        default="PENDING",
                        max_length=20,
                    ),
                ),
                ("status_updated_at", models.DateTimeField(blank=True, null=True)),
                (
                    "tracking_number",
                    models.CharField(blank=True, max_length=100, null=True),
                ),
                (
                    "tracking_carrier",
                    models.CharField(blank=True, max_length=50, null=True),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "job",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="portal",
                        to="job.job",
                    ),
                ),
                (
                    "purchase_order",
                    models.ForeignKey(
                        blank=True,
                        help_text="The PO shown to the vendor. None shows the latest PO on the job.",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="portals",
                        to="purchasing.purchaseorder",
                    ),
                ),
            ],
            options={
                "verbose_name": "Job Portal",
                "verbose_name_plural": "Job Portals",
                "db_table": "portal_jobportal",
            },
        ),
    ]
