import logging
import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import IntegerField, Max
from django.db.models.functions import Cast, Substr
from simple_history.models import HistoricalRecords  # type: ignore

from apps.job.enums import JobEventType, JobStatus
from apps.job.helpers import get_company_defaults
from apps.job.specs import JobSpecs
from apps.workflow.models import NumberSequence

# We say . rather than job.models to avoid going through init,
# otherwise it would have a circular import
from .job_event import JobEvent

logger = logging.getLogger(__name__)

JOB_NUMBER_PREFIX = "J-"
JOB_NUMBER_SEQUENCE = "job"


class Job(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    job_number = models.CharField(max_length=20, unique=True, editable=False)  # J-1234
    name = models.CharField(max_length=255)

    customer = models.ForeignKey(
        "client.Client",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="jobs",
    )
    vendor = models.ForeignKey(
        "client.Client",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="vendor_jobs",
        help_text="The print vendor producing this job",
    )

    status = models.CharField(
        max_length=20, choices=JobStatus.choices, default=JobStatus.ACTIVE
    )
    quantity = models.PositiveIntegerField(null=True, blank=True)
    sell_price = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    delivery_date = models.DateField(null=True, blank=True)
    description = models.TextField(blank=True, null=True)
    notes = models.TextField(
        blank=True,
        null=True,
        help_text="Internal notes about the job. Not shown to vendors.",
    )
    specs = models.JSONField(
        default=dict,
        blank=True,
        help_text="Print specifications. Read through Job.typed_specs.",
    )

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    history: HistoricalRecords = HistoricalRecords(table_name="workflow_historicaljob")

    class Meta:
        verbose_name = "Job"
        verbose_name_plural = "Jobs"
        ordering = ["-created_at"]
        db_table = "workflow_job"

    def __str__(self) -> str:
        return f"[Job {self.job_number}] {self.name} ({self.get_status_display()})"

    @property
    def typed_specs(self) -> JobSpecs:
        return JobSpecs.from_dict(self.specs)

    @typed_specs.setter
    def typed_specs(self, value: JobSpecs) -> None:
        self.specs = value.to_dict()

    @classmethod
    def highest_existing_job_number(cls) -> int:
        """Numeric suffix of the highest J-NNNN number on file, 0 if none."""
        prefix_len = len(JOB_NUMBER_PREFIX)
        agg = (
            cls.objects.filter(job_number__regex=rf"^{JOB_NUMBER_PREFIX}\d+$")
            .annotate(num=Cast(Substr("job_number", prefix_len + 1), IntegerField()))
            .aggregate(max_num=Max("num"))
        )
        return agg["max_num"] or 0

    def generate_job_number(self) -> str:
        """
        Take the next number from the job sequence. The first call seeds the
        sequence from existing jobs and the configured starting number.
        """

        def seed() -> int:
            starting_number = get_company_defaults().starting_job_number
            return max(starting_number - 1, Job.highest_existing_job_number())

        next_number = NumberSequence.next_value(JOB_NUMBER_SEQUENCE, seed=seed)
        return f"{JOB_NUMBER_PREFIX}{next_number:04d}"

    def save(self, *args, **kwargs):
        staff = kwargs.pop("staff", None)

        is_new = self._state.adding
        if is_new and not self.job_number:
            self.job_number = self.generate_job_number()
            logger.debug(f"Saving new job with job number: {self.job_number}")
            if staff and not self.created_by:
                self.created_by = staff

        super().save(*args, **kwargs)

        if is_new:
            JobEvent.objects.create(
                job=self,
                event_type=JobEventType.JOB_CREATED,
                description="New job created",
                staff=staff,
            )
