import logging
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.utils import timezone

from apps.portal.services.portal_token_service import (
    PortalTokenService,
    build_portal_url,
)
from apps.purchasing.models import PurchaseOrder, PurchaseOrderStatus
from apps.workflow.exceptions import NotFoundError, ValidationError
from apps.workflow.helpers import get_company_defaults, get_job_email_address
from apps.workflow.models import NotificationEventType
from apps.workflow.services.notification_service import queue_notification

logger = logging.getLogger(__name__)


def email_purchase_order_to_vendor(purchase_order_id: UUID) -> dict:
    """
    Send a purchase order to its vendor with a portal link.

    Issues (or rotates) the job's portal scoped to this PO and queues the
    vendor e-mail in the same transaction. Replies go to the job inbox.

    Args:
        purchase_order_id: The PurchaseOrder to send

    Returns:
        dict: recipient, portal link and expiry

    Raises:
        NotFoundError: If the purchase order does not exist
        ValidationError: If the vendor has no e-mail address on file
    """
    try:
        purchase_order = PurchaseOrder.objects.select_related("job", "vendor").get(
            id=purchase_order_id
        )
    except (PurchaseOrder.DoesNotExist, DjangoValidationError):
        raise NotFoundError("Purchase order not found")

    vendor = purchase_order.vendor
    email = vendor.get_notification_email()
    if not email:
        raise ValidationError(f"No email address for vendor {vendor.name}")

    job = purchase_order.job
    company_name = get_company_defaults().company_name

    with transaction.atomic():
        portal = PortalTokenService.issue(job.id, purchase_order_id=purchase_order.id)
        portal_url = build_portal_url(portal)

        subject = (
            f"Purchase Order #{purchase_order.po_number} - Job {job.job_number} "
            f"- {company_name}"
        )
        body = (
            f"Hi {vendor.name},\n\n"
            f"Please find Purchase Order #{purchase_order.po_number} for "
            f"job {job.job_number} ({job.name}).\n\n"
            f"Use the link below to confirm receipt, download artwork, upload "
            f"proofs and report production status. No login is needed.\n\n"
            f"{portal_url}\n\n"
            f"This link expires on {portal.expires_at:%Y-%m-%d}.\n\n"
            f"If you have any questions about this order, please reply to this e-mail.\n\n"
            f"Thanks,\n{company_name}"
        )
        queue_notification(
            event_type=NotificationEventType.PORTAL_LINK,
            recipient=email,
            subject=subject,
            body=body,
            job=job,
            reply_to=get_job_email_address(job.job_number),
        )

        purchase_order.emailed_at = timezone.now()
        purchase_order.emailed_to = email
        if purchase_order.status == PurchaseOrderStatus.DRAFT:
            purchase_order.status = PurchaseOrderStatus.SUBMITTED
        purchase_order.save(update_fields=["emailed_at", "emailed_to", "status", "updated_at"])

    logger.info(
        f"Queued PO {purchase_order.po_number} with portal link to {email} "
        f"for job {job.job_number}"
    )

    return {
        "success": True,
        "email": email,
        "poNumber": purchase_order.po_number,
        "portalUrl": portal_url,
        "expiresAt": portal.expires_at,
    }
