import uuid

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AppError",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        primary_key=True, default=uuid.uuid4, editable=False, serialize=False
                    ),
                ),
                ("timestamp", models.DateTimeField(auto_now_add=True)),
                ("message", models.TextField()),
                ("data", models.JSONField(blank=True, null=True)),
            ],
            options={
                "verbose_name": "Application Error",
                "verbose_name_plural": "Application Errors",
                "db_table": "workflow_app_error",
                "ordering": ["-timestamp"],
            },
        ),
        migrations.CreateModel(
            name="CompanyDefaults",
            fields=[
                (
                    "company_name",
                    models.CharField(max_length=255, primary_key=True, serialize=False),
                ),
                ("is_primary", models.BooleanField(default=True, unique=True)),
                (
                    "starting_job_number",
                    models.IntegerField(
                        default=1001,
                        help_text="Helper field to set the starting job number based on the latest paper job",
                    ),
                ),
                (
                    "job_email_domain",
                    models.CharField(
                        default="jobs.example.com",
                        help_text="Domain for per-job internal inboxes (job-<jobNo>@<domain>)",
                        max_length=255,
                    ),
                ),
                (
                    "notification_from_email",
                    models.EmailField(
                        blank=True,
                        help_text="Sender for internal notifications. Falls back to DEFAULT_FROM_EMAIL.",
                        max_length=254,
                        null=True,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Company Defaults",
                "verbose_name_plural": "Company Defaults",
                "db_table": "workflow_companydefaults",
            },
        ),
        migrations.CreateModel(
            name="NumberSequence",
            fields=[
                (
                    "name",
                    models.CharField(max_length=50, primary_key=True, serialize=False),
                ),
                ("last_value", models.PositiveIntegerField(default=0)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "workflow_number_sequence",
            },
        ),
    ]
