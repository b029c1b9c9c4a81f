"""
Notification outbox.

State-changing services call into this module while their transaction is
still open. The outbox row commits (or rolls back) together with the change
it describes; delivery is handed to Celery only once the commit succeeded.
Nothing in here raises into the caller: a notification that cannot be queued
is logged and dropped, the state change stands.
"""

import logging
from typing import Optional

from django.db import DatabaseError, transaction

from apps.workflow.helpers import get_job_email_address
from apps.workflow.models import Notification

logger = logging.getLogger(__name__)


def queue_notification(
    event_type: str,
    recipient: str,
    subject: str,
    body: str,
    job=None,
    reply_to: Optional[str] = None,
) -> Optional[Notification]:
    try:
        # Savepoint so a failed insert does not poison the caller's transaction
        with transaction.atomic():
            notification = Notification.objects.create(
                event_type=event_type,
                job=job,
                recipient=recipient,
                reply_to=reply_to,
                subject=subject,
                body=body,
            )
    except DatabaseError as exc:
        logger.error(f"Could not queue {event_type} notification to {recipient}: {exc}")
        return None

    notification_id = str(notification.id)
    transaction.on_commit(lambda: dispatch_notification(notification_id))
    logger.debug(f"Queued {event_type} notification {notification_id} to {recipient}")
    return notification


def notify_job_inbox(event_type: str, job, subject: str, body: str):
    """Queue an internal notification to the job's shared inbox."""
    try:
        job_email = get_job_email_address(job.job_number)
    except DatabaseError as exc:
        logger.error(f"Could not resolve inbox for job {job.job_number}: {exc}")
        return None
    return queue_notification(
        event_type=event_type,
        recipient=job_email,
        subject=subject,
        body=body,
        job=job,
        reply_to=job_email,
    )


def dispatch_notification(notification_id: str):
    """Hand a committed outbox row to the worker."""
    from apps.workflow.tasks import deliver_notification

    try:
        deliver_notification.delay(notification_id)
    except Exception as exc:
        # Broker unavailable: the row stays PENDING for retry_pending_notifications
        logger.warning(
            f"Could not dispatch notification {notification_id}, left pending: {exc}"
        )
