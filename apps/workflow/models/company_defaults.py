from django.core.exceptions import ValidationError
from django.db import models, transaction


class CompanyDefaults(models.Model):
    company_name = models.CharField(max_length=255, primary_key=True)
    is_primary = models.BooleanField(default=True, unique=True)

    starting_job_number = models.IntegerField(
        default=1001,
        help_text="Helper field to set the starting job number based on the latest paper job",
    )
    job_email_domain = models.CharField(
        max_length=255,
        default="jobs.example.com",
        help_text="Domain for per-job internal inboxes (job-<jobNo>@<domain>)",
    )
    notification_from_email = models.EmailField(
        null=True,
        blank=True,
        help_text="Sender for internal notifications. Falls back to DEFAULT_FROM_EMAIL.",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Company Defaults"
        verbose_name_plural = "Company Defaults"
        db_table = "workflow_companydefaults"

    def save(self, *args, **kwargs):
        if not self.pk and CompanyDefaults.objects.exists():
            raise ValidationError("There can be only one CompanyDefaults instance")
        self.is_primary = True
        super().save(*args, **kwargs)

    @classmethod
    def get_instance(cls):
        """
        Get the singleton instance.
        This is the preferred way to get the CompanyDefaults instance.
        A fresh database gets a row with default values on first access.
        """
        with transaction.atomic():
            instance = cls.objects.first()
            if instance is None:
                instance = cls.objects.create(company_name="Print Broker")
            return instance

    def __str__(self):
        return self.company_name
