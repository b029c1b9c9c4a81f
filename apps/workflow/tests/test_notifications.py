from datetime import timedelta
from smtplib import SMTPException
from unittest.mock import patch

from django.core import mail
from django.test import TestCase
from django.utils import timezone

from apps.client.models import Client
from apps.job.models import Job
from apps.workflow.helpers import get_job_email_address
from apps.workflow.models import (
    CompanyDefaults,
    Notification,
    NotificationEventType,
    NotificationStatus,
)
from apps.workflow.services.notification_service import (
    notify_job_inbox,
    queue_notification,
)
from apps.workflow.tasks import deliver_notification, retry_pending_notifications


class NotificationOutboxTests(TestCase):
    def setUp(self):
        self.job = Job.objects.create(
            name="Spring catalog", customer=Client.objects.create(name="Acme Corp")
        )

    def test_delivery_waits_for_commit(self):
        with self.captureOnCommitCallbacks(execute=False) as callbacks:
            notification = queue_notification(
                NotificationEventType.PO_CONFIRMED,
                "ops@example.com",
                "Subject",
                "Body",
                job=self.job,
            )
            self.assertEqual(len(mail.outbox), 0)

        self.assertEqual(len(callbacks), 1)
        notification.refresh_from_db()
        self.assertEqual(notification.status, NotificationStatus.PENDING)

    def test_delivery_after_commit(self):
        with self.captureOnCommitCallbacks(execute=True):
            notification = notify_job_inbox(
                NotificationEventType.STATUS_UPDATED,
                self.job,
                subject="[Job #J-1001] Vendor Status: Shipped",
                body="Shipped",
            )

        notification.refresh_from_db()
        self.assertEqual(notification.status, NotificationStatus.SENT)
        self.assertEqual(notification.attempts, 1)
        self.assertIsNotNone(notification.sent_at)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["job-j-1001@jobs.example.com"])
        self.assertEqual(mail.outbox[0].reply_to, ["job-j-1001@jobs.example.com"])

    def test_sender_comes_from_company_defaults(self):
        defaults = CompanyDefaults.get_instance()
        defaults.notification_from_email = "robot@broker.test"
        defaults.save()

        with self.captureOnCommitCallbacks(execute=True):
            queue_notification(
                NotificationEventType.PO_CONFIRMED, "ops@example.com", "S", "B"
            )

        self.assertEqual(mail.outbox[0].from_email, "robot@broker.test")

    def test_failing_delivery_is_retried_then_marked_failed(self):
        with patch(
            "apps.workflow.tasks.EmailMessage.send",
            side_effect=SMTPException("mailbox unavailable"),
        ):
            with self.captureOnCommitCallbacks(execute=True):
                notification = queue_notification(
                    NotificationEventType.PO_CONFIRMED, "ops@example.com", "S", "B"
                )

        notification.refresh_from_db()
        self.assertEqual(notification.status, NotificationStatus.FAILED)
        self.assertEqual(notification.attempts, 4)
        self.assertEqual(notification.last_error, "mailbox unavailable")

    def test_sent_notification_is_not_sent_again(self):
        notification = Notification.objects.create(
            event_type=NotificationEventType.PO_CONFIRMED,
            recipient="ops@example.com",
            subject="S",
            body="B",
            status=NotificationStatus.SENT,
        )

        deliver_notification.apply(args=[str(notification.id)])

        self.assertEqual(len(mail.outbox), 0)

    def test_missing_notification_is_ignored(self):
        result = deliver_notification.apply(args=["00000000-0000-0000-0000-000000000000"])

        self.assertTrue(result.successful())

    def test_broker_outage_leaves_row_pending(self):
        with patch("apps.workflow.tasks.deliver_notification") as task:
            task.delay.side_effect = ConnectionError("broker down")
            with self.captureOnCommitCallbacks(execute=True):
                notification = queue_notification(
                    NotificationEventType.PO_CONFIRMED, "ops@example.com", "S", "B"
                )

        notification.refresh_from_db()
        self.assertEqual(notification.status, NotificationStatus.PENDING)
        self.assertEqual(len(mail.outbox), 0)

    def test_pending_rows_are_redispatched(self):
        stale = Notification.objects.create(
            event_type=NotificationEventType.PO_CONFIRMED,
            recipient="ops@example.com",
            subject="Stale",
            body="B",
        )
        Notification.objects.filter(pk=stale.pk).update(
            created_at=timezone.now() - timedelta(hours=1)
        )
        Notification.objects.create(
            event_type=NotificationEventType.PO_CONFIRMED,
            recipient="ops@example.com",
            subject="Fresh",
            body="B",
        )

        count = retry_pending_notifications()

        self.assertEqual(count, 1)
        stale.refresh_from_db()
        self.assertEqual(stale.status, NotificationStatus.SENT)
        self.assertEqual([m.subject for m in mail.outbox], ["Stale"])

    def test_rows_in_a_retry_chain_are_not_redispatched(self):
        in_flight = Notification.objects.create(
            event_type=NotificationEventType.STATUS_UPDATED,
            recipient="ops@example.com",
            subject="Retrying",
            body="B",
            attempts=2,
            last_error="Connection refused",
        )
        Notification.objects.filter(pk=in_flight.pk).update(
            created_at=timezone.now() - timedelta(minutes=11)
        )

        with patch("apps.workflow.tasks.deliver_notification") as task:
            count = retry_pending_notifications()

        self.assertEqual(count, 0)
        task.delay.assert_not_called()
        in_flight.refresh_from_db()
        self.assertEqual(in_flight.status, NotificationStatus.PENDING)
        self.assertEqual(in_flight.attempts, 2)

    def test_job_inbox_address(self):
        self.assertEqual(get_job_email_address("J-1001"), "job-j-1001@jobs.example.com")
