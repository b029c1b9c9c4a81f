"""
Portal Token Service

Issues, rotates and resolves the share tokens that stand in for a login on
the vendor portal. The token itself is the credential: it is generated from
``secrets``, looked up by its SHA-256 digest and compared in constant time.
"""

import hashlib
import hmac
import logging
import secrets
from datetime import timedelta
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.job.models import Job
from apps.portal.enums import VendorStatus
from apps.portal.models import JobPortal
from apps.purchasing.models import PurchaseOrder
from apps.workflow.exceptions import (
    NotFoundError,
    PortalExpiredError,
    PortalNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def generate_share_token() -> str:
    # 32 bytes of entropy, URL-safe
    return secrets.token_urlsafe(32)


def token_digest(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def build_portal_url(portal: JobPortal) -> str:
    return f"{settings.PORTAL_BASE_URL.rstrip('/')}/portal/{portal.share_token}"


class PortalTokenService:
    """
    Service layer for portal tokens.
    One active portal per job: issuing for a job that already has one
    rewrites that row in place.
    """

    @staticmethod
    def issue(
        job_id: UUID,
        purchase_order_id: Optional[UUID] = None,
        ttl_days: Optional[int] = None,
    ) -> JobPortal:
        """
        Create the job's portal, or rotate the existing one to a new token.

        Args:
            job_id: Job the portal is for
            purchase_order_id: Optional PO to scope the portal to. When omitted
                an existing portal keeps its current scope.
            ttl_days: Lifetime of the new token, PORTAL_EXPIRY_DAYS by default

        Returns:
            JobPortal: The portal carrying the fresh token

        Raises:
            NotFoundError: If the job or purchase order does not exist
            ValidationError: If the PO belongs to another job or ttl_days is invalid
        """
        if ttl_days is None:
            ttl_days = settings.PORTAL_EXPIRY_DAYS
        if not isinstance(ttl_days, int) or isinstance(ttl_days, bool) or ttl_days < 1:
            raise ValidationError("ttlDays must be a positive integer")

        with transaction.atomic():
            # Serialises concurrent issues for the same job
            try:
                job = Job.objects.select_for_update().get(id=job_id)
            except Job.DoesNotExist:
                raise NotFoundError("Job not found")

            purchase_order = None
            if purchase_order_id:
                try:
                    purchase_order = PurchaseOrder.objects.get(id=purchase_order_id)
                except (PurchaseOrder.DoesNotExist, DjangoValidationError):
                    raise NotFoundError("Purchase order not found")
                if purchase_order.job_id != job.id:
                    raise ValidationError("Purchase order does not belong to this job")

            token = generate_share_token()
            expires_at = timezone.now() + timedelta(days=ttl_days)

            portal = JobPortal.objects.filter(job=job).first()
            if portal is None:
                portal = JobPortal.objects.create(
                    job=job,
                    purchase_order=purchase_order,
                    share_token=token,
                    token_digest=token_digest(token),
                    expires_at=expires_at,
                )
                logger.info(f"Issued portal for job {job.job_number}")
                return portal

            # A different PO needs its own confirmation
            if purchase_order and purchase_order.id != portal.purchase_order_id:
                portal.purchase_order = purchase_order
                portal.confirmed_at = None
                portal.confirmed_by_name = None
                portal.confirmed_by_email = None
                portal.vendor_status = VendorStatus.PENDING
                portal.status_updated_at = None
                portal.tracking_number = None
                portal.tracking_carrier = None

            portal.share_token = token
            portal.token_digest = token_digest(token)
            portal.expires_at = expires_at
            portal.access_count = 0
            portal.accessed_at = None
            portal.save()
            logger.info(f"Rotated portal token for job {job.job_number}")
            return portal

    @staticmethod
    def get_or_issue(job_id: UUID) -> JobPortal:
        """Current unexpired portal for the job, or a freshly issued one."""
        portal = JobPortal.objects.filter(job_id=job_id).first()
        if portal is not None and not portal.is_expired:
            return portal
        return PortalTokenService.issue(job_id)

    @staticmethod
    def resolve(token: str) -> JobPortal:
        """
        Look up a portal by its share token and record the access.

        Expiry is checked against the clock on every call; nothing is cached.

        Raises:
            PortalNotFoundError: No portal carries this token
            PortalExpiredError: The portal exists but is past ``expires_at``
        """
        if not token:
            raise PortalNotFoundError()

        portal = (
            JobPortal.objects.select_related(
                "job", "job__customer", "job__vendor", "purchase_order"
            )
            .filter(token_digest=token_digest(token))
            .first()
        )
        if portal is None or not hmac.compare_digest(
            portal.share_token.encode("utf-8"), token.encode("utf-8")
        ):
            raise PortalNotFoundError()

        if portal.is_expired:
            logger.info(f"Rejected expired portal token for job {portal.job.job_number}")
            raise PortalExpiredError()

        now = timezone.now()
        JobPortal.objects.filter(pk=portal.pk).update(
            access_count=F("access_count") + 1, accessed_at=now
        )
        portal.refresh_from_db(fields=["access_count", "accessed_at"])
        return portal
