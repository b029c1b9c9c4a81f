import logging
from datetime import timedelta

from celery import shared_task
from django.conf import settings
from django.core.mail import EmailMessage
from django.utils import timezone

logger = logging.getLogger(__name__)

MAX_DELIVERY_RETRIES = 3


@shared_task(bind=True, max_retries=MAX_DELIVERY_RETRIES)
def deliver_notification(self, notification_id):
    """
    Send one outbox notification by e-mail.

    Retries with exponential backoff; after the last retry the row is marked
    FAILED and left for an operator. Already-sent rows are skipped so a
    duplicate dispatch never sends twice.
    """
    from apps.workflow.helpers import get_company_defaults
    from apps.workflow.models import Notification, NotificationStatus

    try:
        notification = Notification.objects.get(id=notification_id)
    except Notification.DoesNotExist:
        logger.error(f"Notification {notification_id} not found, nothing to send")
        return

    if notification.status == NotificationStatus.SENT:
        logger.info(f"Notification {notification_id} already sent, skipping")
        return

    from_email = (
        get_company_defaults().notification_from_email or settings.DEFAULT_FROM_EMAIL
    )
    notification.attempts += 1

    try:
        message = EmailMessage(
            subject=notification.subject,
            body=notification.body,
            from_email=from_email,
            to=[notification.recipient],
            reply_to=[notification.reply_to] if notification.reply_to else None,
        )
        message.send(fail_silently=False)
    except Exception as exc:
        notification.last_error = str(exc)
        if self.request.retries >= self.max_retries:
            notification.status = NotificationStatus.FAILED
            notification.save(update_fields=["attempts", "last_error", "status"])
            logger.error(
                f"Giving up on notification {notification_id} to "
                f"{notification.recipient} after {notification.attempts} attempts: {exc}"
            )
            return
        notification.save(update_fields=["attempts", "last_error"])
        logger.warning(
            f"Notification {notification_id} failed (attempt {notification.attempts}), "
            f"retrying: {exc}"
        )
        raise self.retry(exc=exc, countdown=60 * 2**self.request.retries)

    notification.status = NotificationStatus.SENT
    notification.sent_at = timezone.now()
    notification.last_error = None
    notification.save(update_fields=["attempts", "last_error", "status", "sent_at"])
    logger.info(
        f"Sent {notification.event_type} notification to {notification.recipient}: "
        f"{notification.subject}"
    )


@shared_task
def retry_pending_notifications(older_than_minutes=10):
    """
    Re-dispatch outbox rows that never reached the worker.

    Rows with at least one attempt belong to a live retry chain, which ends
    in SENT or FAILED on its own, so they are left alone.
    """
    from apps.workflow.models import Notification, NotificationStatus

    cutoff = timezone.now() - timedelta(minutes=older_than_minutes)
    pending_ids = list(
        Notification.objects.filter(
            status=NotificationStatus.PENDING,
            attempts=0,
            created_at__lt=cutoff,
        ).values_list("id", flat=True)
    )
    for notification_id in pending_ids:
        deliver_notification.delay(str(notification_id))

    if pending_ids:
        logger.info(f"Re-dispatched {len(pending_ids)} pending notifications")
    return len(pending_ids)
