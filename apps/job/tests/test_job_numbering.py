from django.contrib.auth import get_user_model
from django.test import TestCase

from apps.client.models import Client
from apps.job.enums import JobEventType
from apps.job.models import Job
from apps.workflow.models import CompanyDefaults, NumberSequence

User = get_user_model()


class JobNumberingTests(TestCase):
    def setUp(self):
        self.customer = Client.objects.create(name="Acme Corp")

    def test_numbers_start_from_company_default(self):
        first = Job.objects.create(name="First", customer=self.customer)
        second = Job.objects.create(name="Second", customer=self.customer)

        self.assertEqual(first.job_number, "J-1001")
        self.assertEqual(second.job_number, "J-1002")

    def test_configured_starting_number(self):
        defaults = CompanyDefaults.get_instance()
        defaults.starting_job_number = 5000
        defaults.save()

        job = Job.objects.create(name="First", customer=self.customer)

        self.assertEqual(job.job_number, "J-5000")

    def test_sequence_continues_after_existing_numbers(self):
        Job.objects.bulk_create([Job(name="Imported", job_number="J-2040")])

        job = Job.objects.create(name="New", customer=self.customer)

        self.assertEqual(job.job_number, "J-2041")
        self.assertEqual(NumberSequence.objects.get(name="job").last_value, 2041)

    def test_numbers_past_9999_keep_growing(self):
        NumberSequence.objects.create(name="job", last_value=9999)

        job = Job.objects.create(name="Big", customer=self.customer)

        self.assertEqual(job.job_number, "J-10000")

    def test_creation_is_logged(self):
        staff = User.objects.create_user(username="staff", password="secret-pass")
        job = Job(name="Logged", customer=self.customer)
        job.save(staff=staff)

        event = job.events.get()
        self.assertEqual(event.event_type, JobEventType.JOB_CREATED)
        self.assertEqual(event.staff, staff)
        self.assertEqual(job.created_by, staff)
        self.assertEqual(job.history.count(), 1)
