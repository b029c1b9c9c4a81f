import uuid

import django.db.models.deletion
import simple_history.models
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("client", "0001_initial"),
        ("job", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="VendorRFQ",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                (
                    "rfq_number",
                    models.CharField(editable=False, max_length=30, unique=True),
                ),
                ("title", models.CharField(max_length=255)),
                ("specs", models.TextField()),
                ("due_date", models.DateField()),
                ("notes", models.TextField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("DRAFT", "Draft"),
                            ("PENDING", "Pending"),
                            ("QUOTED", "Quoted"),
                            ("AWARDED", "Awarded"),
                            ("CONVERTED", "Converted"),
                            ("CANCELLED", "Cancelled"),
                        ],
                        default="DRAFT",
                        max_length=20,
                    ),
                ),
                ("sent_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "job",
                    models.OneToOneField(
                        blank=True,
                        help_text="Job this RFQ was raised for or converted into",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="rfq",
                        to="job.job",
                    ),
                ),
            ],
            options={
                "verbose_name": "Vendor RFQ",
                "verbose_name_plural": "Vendor RFQs",
                "db_table": "rfq_vendorrfq",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="HistoricalVendorRFQ",
            fields=[
                (
                    "id",
                    models.UUIDField(db_index=True, default=uuid.uuid4, editable=False),
                ),
                (
                    "rfq_number",
                    models.CharField(db_index=True, editable=False, max_length=30),
                ),
                ("title", models.CharField(max_length=255)),
                ("specs", models.TextField()),
                ("due_date", models.DateField()),
                ("notes", models.TextField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("DRAFT", "Draft"),
                            ("PENDING", "Pending"),
                            ("QUOTED", "Quoted"),
                            ("AWARDED", "Awarded"),
                            ("CONVERTED", "Converted"),
                            ("CANCELLED", "Cancelled"),
                        ],
                        default="DRAFT",
                        max_length=20,
                    ),
                ),
                ("sent_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(blank=True, editable=False)),
                ("updated_at", models.DateTimeField(blank=True, editable=False)),
                ("history_id", models.AutoField(primary_key=True, serialize=False)),
                ("history_date", models.DateTimeField(db_index=True)),
                ("history_change_reason", models.CharField(max_length=100, null=True)),
                (
                    "history_type",
                    models.CharField(
                        choices=[("+", "Created"), ("~", "Changed"), ("-", "Deleted")],
                        max_length=1,
                    ),
                ),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        db_constraint=False,
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "history_user",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "job",
                    models.ForeignKey(
                        blank=True,
                        db_constraint=False,
                        help_text="Job this RFQ was raised for or converted into",
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="+",
                        to="job.job",
                    ),
                ),
            ],
            options={
                "verbose_name": "historical Vendor RFQ",
                "verbose_name_plural": "historical Vendor RFQs",
                "db_table": "rfq_historicalvendorrfq",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
        migrations.CreateModel(
            name="VendorRFQVendor",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                (
                    "sent_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="When the RFQ e-mail reached the mail server",
                        null=True,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "rfq",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="invitees",
                        to="rfq.vendorrfq",
                    ),
                ),
                (
                    "vendor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="rfq_invitations",
                        to="client.client",
                    ),
                ),
            ],
            options={
                "db_table": "rfq_vendorrfqvendor",
                "ordering": ["created_at"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("rfq", "vendor"), name="unique_rfq_vendor_invite"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="VendorQuote",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("quote_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("turnaround_days", models.PositiveIntegerField(blank=True, null=True)),
                ("notes", models.TextField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("RECEIVED", "Received"),
                            ("DECLINED", "Declined"),
                        ],
                        default="RECEIVED",
                        max_length=20,
                    ),
                ),
                ("is_awarded", models.BooleanField(default=False)),
                ("responded_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "rfq",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="quotes",
                        to="rfq.vendorrfq",
                    ),
                ),
                (
                    "vendor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="rfq_quotes",
                        to="client.client",
                    ),
                ),
            ],
            options={
                "db_table": "rfq_vendorquote",
                "ordering": ["-quote_amount"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("rfq", "vendor"), name="unique_rfq_vendor_quote"
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("is_awarded", True)),
                        fields=("rfq",),
                        name="one_awarded_quote_per_rfq",
                    ),
                ],
            },
        ),
    ]
