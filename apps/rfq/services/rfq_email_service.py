import logging

from django.conf import settings
from django.core.mail import EmailMessage
from django.utils import timezone

from apps.rfq.models import VendorRFQ
from apps.workflow.helpers import get_company_defaults, get_rfq_email_address
from apps.workflow.models import Notification, NotificationEventType, NotificationStatus

logger = logging.getLogger(__name__)


def build_rfq_email(rfq: VendorRFQ, vendor_name: str) -> tuple[str, str]:
    company_name = get_company_defaults().company_name
    subject = f"Request for Quote {rfq.rfq_number}: {rfq.title} - {company_name}"
    lines = [
        f"Hi {vendor_name},",
        "",
        f"{company_name} is requesting a quote for the job below.",
        "",
        f"RFQ: {rfq.rfq_number}",
        f"Title: {rfq.title}",
        f"Quote needed by: {rfq.due_date:%Y-%m-%d}",
        "",
        "Specifications:",
        rfq.specs,
    ]
    if rfq.notes:
        lines += ["", "Notes:", rfq.notes]
    lines += [
        "",
        "Please reply to this e-mail with your price, turnaround time and any notes.",
        "",
        f"Thanks,\n{company_name}",
    ]
    return subject, "\n".join(lines)


def send_rfq_email(rfq: VendorRFQ, recipient_email: str, vendor_name: str):
    """
    Send the RFQ to one vendor right away.

    Unlike other notifications this is not deferred to the worker: the caller
    reports per-vendor success. The attempt is still written to the
    notification log. Delivery errors propagate to the caller.
    """
    subject, body = build_rfq_email(rfq, vendor_name)
    reply_to = get_rfq_email_address(rfq.id)
    from_email = (
        get_company_defaults().notification_from_email or settings.DEFAULT_FROM_EMAIL
    )

    notification = Notification(
        event_type=NotificationEventType.RFQ_SENT,
        job=rfq.job,
        recipient=recipient_email,
        reply_to=reply_to,
        subject=subject,
        body=body,
        attempts=1,
    )
    try:
        EmailMessage(
            subject=subject,
            body=body,
            from_email=from_email,
            to=[recipient_email],
            reply_to=[reply_to],
        ).send(fail_silently=False)
    except Exception as exc:
        notification.status = NotificationStatus.FAILED
        notification.last_error = str(exc)
        notification.save()
        raise

    notification.status = NotificationStatus.SENT
    notification.sent_at = timezone.now()
    notification.save()
    logger.info(f"Sent {rfq.rfq_number} to {vendor_name} <{recipient_email}>")
