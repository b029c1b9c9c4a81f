"""
Vendor RFQ Service Layer

All business rules for the RFQ lifecycle live here: creation and editing
while DRAFT, distribution to vendors, manual quote entry, award and
conversion into a job. Views only parse input and render the results.
"""

import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Count
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from apps.client.models import Client, Supplier
from apps.job.enums import JobEventType, JobStatus
from apps.job.models import Job, JobEvent
from apps.job.specs import JobSpecs
from apps.rfq.enums import RFQStatus, VendorQuoteStatus
from apps.rfq.models import VendorQuote, VendorRFQ, VendorRFQVendor
from apps.rfq.services.rfq_email_service import send_rfq_email
from apps.workflow.exceptions import (
    AlreadyConvertedError,
    InvalidTransitionError,
    NoQuoteError,
    NotAssignedError,
    NotAwardedError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 50
MAX_LIST_LIMIT = 200

# States in which the RFQ is waiting on vendor answers
AWAITING_QUOTES = (RFQStatus.PENDING, RFQStatus.QUOTED)
CLOSED = (RFQStatus.CONVERTED, RFQStatus.CANCELLED)


def _parse_date(value, error_message: str = "Invalid due date") -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        parsed = parse_date(str(value))
        if parsed is None:
            parsed_dt = parse_datetime(str(value))
            parsed = parsed_dt.date() if parsed_dt else None
    except ValueError:
        parsed = None
    if parsed is None:
        raise ValidationError(error_message)
    return parsed


def _parse_amount(value) -> Decimal:
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError("Quote amount must be a number")
    if not amount.is_finite() or amount < 0:
        raise ValidationError("Quote amount must be a non-negative number")
    return amount.quantize(Decimal("0.01"))


def _parse_optional_int(value, field: str) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a whole number")
    if number < 0:
        raise ValidationError(f"{field} must not be negative")
    return number


class VendorRFQService:
    """
    Service layer for vendor RFQs.
    """

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @staticmethod
    def _get_rfq(rfq_id: UUID, for_update: bool = False) -> VendorRFQ:
        queryset = VendorRFQ.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        try:
            return queryset.get(id=rfq_id)
        except (VendorRFQ.DoesNotExist, DjangoValidationError):
            raise NotFoundError("RFQ not found")

    @staticmethod
    def _resolve_vendors(vendor_ids) -> List[Client]:
        """
        Load the vendors for a list of ids, preserving order.

        Raises:
            ValidationError: Empty list, or any id that is not a known vendor
        """
        if not vendor_ids or not isinstance(vendor_ids, list):
            raise ValidationError("At least one vendor must be selected")

        unique_ids = list(dict.fromkeys(str(v) for v in vendor_ids))
        try:
            vendors = {str(v.id): v for v in Supplier.objects.filter(id__in=unique_ids)}
        except DjangoValidationError:
            raise ValidationError("One or more vendors not found")
        if len(vendors) != len(unique_ids):
            raise ValidationError("One or more vendors not found")
        return [vendors[v] for v in unique_ids]

    @staticmethod
    def _refresh_quote_status(rfq: VendorRFQ) -> None:
        """
        Re-derive PENDING/QUOTED from the quotes on file.

        QUOTED holds exactly when every invitee has a RECEIVED quote. Only
        applies while the RFQ is awaiting answers.
        """
        if rfq.status not in AWAITING_QUOTES:
            return

        invited = set(rfq.invitees.values_list("vendor_id", flat=True))
        received = set(
            rfq.quotes.filter(status=VendorQuoteStatus.RECEIVED).values_list(
                "vendor_id", flat=True
            )
        )
        new_status = (
            RFQStatus.QUOTED if invited and invited <= received else RFQStatus.PENDING
        )
        if new_status != rfq.status:
            logger.info(f"{rfq.rfq_number} status {rfq.status} -> {new_status}")
            rfq.status = new_status
            rfq.save(update_fields=["status", "updated_at"])

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @staticmethod
    def list_rfqs(
        status: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        limit: Any = DEFAULT_LIST_LIMIT,
        offset: Any = 0,
    ) -> Dict[str, Any]:
        """
        Newest RFQs first, with the total matching count and counts per status
        across all RFQs.
        """
        queryset = VendorRFQ.objects.select_related("job").prefetch_related(
            "invitees__vendor__contacts", "quotes__vendor"
        )

        if status:
            if status not in RFQStatus.values:
                raise ValidationError(
                    f"Invalid status. Must be one of: {', '.join(RFQStatus.values)}"
                )
            queryset = queryset.filter(status=status)
        if start_date:
            start = _parse_date(start_date, "Invalid start date")
            queryset = queryset.filter(created_at__date__gte=start)
        if end_date:
            end = _parse_date(end_date, "Invalid end date")
            queryset = queryset.filter(created_at__date__lte=end)

        limit = _parse_optional_int(limit, "limit")
        offset = _parse_optional_int(offset, "offset") or 0
        limit = min(limit or DEFAULT_LIST_LIMIT, MAX_LIST_LIMIT)

        total = queryset.count()
        rfqs = list(queryset.order_by("-created_at")[offset : offset + limit])

        counts = {
            row["status"]: row["n"]
            for row in VendorRFQ.objects.order_by()
            .values("status")
            .annotate(n=Count("id"))
        }
        stats = {s.lower(): counts.get(s, 0) for s in RFQStatus.values}

        return {"rfqs": rfqs, "total": total, "stats": stats}

    @staticmethod
    def get_rfq(rfq_id: UUID) -> VendorRFQ:
        try:
            return (
                VendorRFQ.objects.select_related("job")
                .prefetch_related("invitees__vendor__contacts", "quotes__vendor")
                .get(id=rfq_id)
            )
        except (VendorRFQ.DoesNotExist, DjangoValidationError):
            raise NotFoundError("RFQ not found")

    # ------------------------------------------------------------------
    # DRAFT editing
    # ------------------------------------------------------------------

    @staticmethod
    def create_rfq(data: Dict[str, Any], user=None) -> VendorRFQ:
        """
        Create a DRAFT RFQ with its invited vendors.

        Expected data: title, specs, dueDate, vendorIds; optional notes, jobId.

        Raises:
            ValidationError: Missing fields, no vendors, unknown vendor or job
        """
        title = (data.get("title") or "").strip()
        specs = (data.get("specs") or "").strip()
        due_date = data.get("dueDate")
        if not title or not specs or not due_date:
            raise ValidationError("Title, specs, and due date are required")

        due_date = _parse_date(due_date)
        vendors = VendorRFQService._resolve_vendors(data.get("vendorIds"))

        job = None
        if data.get("jobId"):
            try:
                job = Job.objects.get(id=data["jobId"])
            except (Job.DoesNotExist, DjangoValidationError):
                raise ValidationError("Job not found")
            if VendorRFQ.objects.filter(job=job).exists():
                raise ValidationError("Job is already linked to another RFQ")

        with transaction.atomic():
            rfq = VendorRFQ(
                title=title,
                specs=specs,
                due_date=due_date,
                notes=data.get("notes") or None,
                job=job,
                created_by=user if user and user.is_authenticated else None,
            )
            rfq.save()
            VendorRFQVendor.objects.bulk_create(
                [VendorRFQVendor(rfq=rfq, vendor=vendor) for vendor in vendors]
            )

        logger.info(f"Created {rfq.rfq_number} for {len(vendors)} vendor(s)")
        return rfq

    @staticmethod
    def update_rfq(rfq_id: UUID, data: Dict[str, Any]) -> VendorRFQ:
        """
        Edit a DRAFT RFQ. Only keys present in ``data`` change; ``vendorIds``
        replaces the invitee list.

        Raises:
            InvalidTransitionError: If the RFQ is no longer DRAFT
        """
        with transaction.atomic():
            rfq = VendorRFQService._get_rfq(rfq_id, for_update=True)
            if rfq.status != RFQStatus.DRAFT:
                raise InvalidTransitionError("Can only update RFQs in DRAFT status")

            for key, attr in (("title", "title"), ("specs", "specs")):
                if key in data:
                    value = (data[key] or "").strip()
                    if not value:
                        raise ValidationError(f"{key.capitalize()} cannot be empty")
                    setattr(rfq, attr, value)
            if "dueDate" in data:
                rfq.due_date = _parse_date(data["dueDate"])
            if "notes" in data:
                rfq.notes = data["notes"] or None

            if "vendorIds" in data:
                vendors = VendorRFQService._resolve_vendors(data["vendorIds"])
                rfq.invitees.all().delete()
                VendorRFQVendor.objects.bulk_create(
                    [VendorRFQVendor(rfq=rfq, vendor=vendor) for vendor in vendors]
                )
                # Quotes from vendors no longer invited go with them
                rfq.quotes.exclude(vendor__in=vendors).delete()

            rfq.save()

        logger.info(f"Updated {rfq.rfq_number}")
        return rfq

    @staticmethod
    def delete_rfq(rfq_id: UUID) -> None:
        with transaction.atomic():
            rfq = VendorRFQService._get_rfq(rfq_id, for_update=True)
            if rfq.status != RFQStatus.DRAFT:
                raise InvalidTransitionError("Can only delete RFQs in DRAFT status")
            rfq_number = rfq.rfq_number
            rfq.delete()
        logger.info(f"Deleted {rfq_number}")

    # ------------------------------------------------------------------
    # Distribution
    # ------------------------------------------------------------------

    @staticmethod
    def _email_invitees(rfq: VendorRFQ, invitees) -> List[Dict[str, Any]]:
        """
        E-mail each invitee. Best effort: a failure for one vendor is
        reported and the rest still go out.
        """
        results = []
        for invitee in invitees:
            vendor = invitee.vendor
            result = {"vendorId": str(vendor.id), "vendorName": vendor.name}

            recipient = vendor.get_notification_email()
            if not recipient:
                logger.warning(f"{rfq.rfq_number}: {vendor.name} has no email address")
                results.append({**result, "success": False, "error": "No email address"})
                continue

            try:
                send_rfq_email(rfq, recipient, vendor.name)
            except Exception as exc:
                logger.warning(f"{rfq.rfq_number}: sending to {vendor.name} failed: {exc}")
                results.append({**result, "success": False, "error": str(exc)})
                continue

            invitee.sent_at = timezone.now()
            invitee.save(update_fields=["sent_at"])
            results.append({**result, "success": True})
        return results

    @staticmethod
    def send_rfq(rfq_id: UUID) -> Dict[str, Any]:
        """
        Send a DRAFT RFQ to every invited vendor and move it to PENDING.

        The RFQ becomes PENDING even when some (or all) e-mails fail; the
        per-vendor results say which ones need a manual follow-up.

        Raises:
            InvalidTransitionError: If the RFQ was already sent
        """
        # Claim the transition first so two concurrent sends cannot both mail out
        with transaction.atomic():
            rfq = VendorRFQService._get_rfq(rfq_id, for_update=True)
            if rfq.status != RFQStatus.DRAFT:
                raise InvalidTransitionError("RFQ has already been sent")
            rfq.status = RFQStatus.PENDING
            rfq.sent_at = timezone.now()
            rfq.save(update_fields=["status", "sent_at", "updated_at"])

        invitees = rfq.invitees.select_related("vendor").prefetch_related(
            "vendor__contacts"
        )
        results = VendorRFQService._email_invitees(rfq, invitees)

        # Quotes entered while DRAFT may already complete the set
        with transaction.atomic():
            rfq = VendorRFQService._get_rfq(rfq_id, for_update=True)
            VendorRFQService._refresh_quote_status(rfq)

        success_count = sum(1 for r in results if r["success"])
        logger.info(f"{rfq.rfq_number} sent to {success_count} of {len(results)} vendors")
        return {
            "success": True,
            "message": f"RFQ sent to {success_count} of {len(results)} vendors",
            "results": results,
        }

    @staticmethod
    def invite_vendors(rfq_id: UUID, vendor_ids) -> Dict[str, Any]:
        """
        Add vendors to an RFQ that is already out for quotes and send them the
        RFQ. A QUOTED RFQ drops back to PENDING until the new vendors answer.

        Raises:
            InvalidTransitionError: Unless the RFQ is PENDING or QUOTED
        """
        vendors = VendorRFQService._resolve_vendors(vendor_ids)

        with transaction.atomic():
            rfq = VendorRFQService._get_rfq(rfq_id, for_update=True)
            if rfq.status not in AWAITING_QUOTES:
                raise InvalidTransitionError(
                    "Vendors can only be added while the RFQ is awaiting quotes"
                )
            already_invited = set(rfq.invitees.values_list("vendor_id", flat=True))
            new_invitees = VendorRFQVendor.objects.bulk_create(
                [
                    VendorRFQVendor(rfq=rfq, vendor=vendor)
                    for vendor in vendors
                    if vendor.id not in already_invited
                ]
            )
            VendorRFQService._refresh_quote_status(rfq)

        logger.info(f"Invited {len(new_invitees)} more vendor(s) to {rfq.rfq_number}")
        results = VendorRFQService._email_invitees(rfq, new_invitees)
        return {"rfq": rfq, "results": results}

    # ------------------------------------------------------------------
    # Quotes and award
    # ------------------------------------------------------------------

    @staticmethod
    def record_quote(rfq_id: UUID, data: Dict[str, Any]) -> VendorQuote:
        """
        Record (or correct) a vendor's quote.

        Expected data: vendorId, quoteAmount; optional turnaroundDays, notes,
        status (RECEIVED by default).

        Raises:
            ValidationError: Missing or malformed fields
            NotAssignedError: The vendor was not invited to this RFQ
            InvalidTransitionError: The RFQ is converted or cancelled
        """
        vendor_id = data.get("vendorId")
        if not vendor_id or data.get("quoteAmount") in (None, ""):
            raise ValidationError("Vendor ID and quote amount are required")
        amount = _parse_amount(data["quoteAmount"])
        turnaround_days = _parse_optional_int(data.get("turnaroundDays"), "turnaroundDays")
        quote_status = data.get("status") or VendorQuoteStatus.RECEIVED
        if quote_status not in VendorQuoteStatus.values:
            raise ValidationError(
                f"Invalid quote status. Must be one of: {', '.join(VendorQuoteStatus.values)}"
            )

        with transaction.atomic():
            rfq = VendorRFQService._get_rfq(rfq_id, for_update=True)
            if rfq.status in CLOSED:
                raise InvalidTransitionError(
                    f"Cannot record quotes on a {rfq.get_status_display().lower()} RFQ"
                )

            try:
                invited = rfq.invitees.filter(vendor_id=vendor_id).exists()
            except DjangoValidationError:
                invited = False
            if not invited:
                raise NotAssignedError(rfq.id, vendor_id)

            quote, created = VendorQuote.objects.update_or_create(
                rfq=rfq,
                vendor_id=vendor_id,
                defaults={
                    "quote_amount": amount,
                    "turnaround_days": turnaround_days,
                    "notes": data.get("notes") or None,
                    "status": quote_status,
                    "responded_at": timezone.now(),
                },
            )

            # An awarded quote that is no longer a received price loses the award
            if quote.is_awarded and quote.status != VendorQuoteStatus.RECEIVED:
                quote.is_awarded = False
                quote.save(update_fields=["is_awarded", "updated_at"])
                if rfq.status == RFQStatus.AWARDED:
                    rfq.status = RFQStatus.PENDING
                    rfq.save(update_fields=["status", "updated_at"])

            VendorRFQService._refresh_quote_status(rfq)

        logger.info(
            f"{'Recorded' if created else 'Updated'} {quote.status} quote of {amount} "
            f"from vendor {vendor_id} on {rfq.rfq_number}"
        )
        return quote

    @staticmethod
    def award_vendor(rfq_id: UUID, vendor_id: UUID) -> VendorQuote:
        """
        Mark a vendor's received quote as the winner.

        Any previous award on the RFQ is cleared in the same transaction, so
        at no point are two quotes awarded. Can be repeated to change the
        winner until the RFQ is converted.

        Raises:
            AlreadyConvertedError: The RFQ was converted
            InvalidTransitionError: The RFQ was cancelled or has not been sent
            NoQuoteError: The vendor has no RECEIVED quote on this RFQ
        """
        with transaction.atomic():
            rfq = VendorRFQService._get_rfq(rfq_id, for_update=True)
            if rfq.status == RFQStatus.CONVERTED:
                raise AlreadyConvertedError()
            if rfq.status == RFQStatus.CANCELLED:
                raise InvalidTransitionError("Cannot award a cancelled RFQ")
            if rfq.status == RFQStatus.DRAFT:
                raise InvalidTransitionError("RFQ must be sent before awarding")

            quote = (
                rfq.quotes.select_related("vendor")
                .filter(vendor_id=vendor_id, status=VendorQuoteStatus.RECEIVED)
                .first()
            )
            if quote is None:
                raise NoQuoteError()

            rfq.quotes.filter(is_awarded=True).exclude(pk=quote.pk).update(
                is_awarded=False
            )
            if not quote.is_awarded:
                quote.is_awarded = True
                quote.save(update_fields=["is_awarded", "updated_at"])

            rfq.status = RFQStatus.AWARDED
            rfq.save(update_fields=["status", "updated_at"])

        logger.info(f"{rfq.rfq_number} awarded to {quote.vendor.name} at {quote.quote_amount}")
        return quote

    @staticmethod
    def cancel_rfq(rfq_id: UUID) -> VendorRFQ:
        with transaction.atomic():
            rfq = VendorRFQService._get_rfq(rfq_id, for_update=True)
            if rfq.status == RFQStatus.CONVERTED:
                raise AlreadyConvertedError()
            if rfq.status == RFQStatus.CANCELLED:
                raise InvalidTransitionError("RFQ is already cancelled")
            rfq.status = RFQStatus.CANCELLED
            rfq.save(update_fields=["status", "updated_at"])
        logger.info(f"Cancelled {rfq.rfq_number}")
        return rfq

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    @staticmethod
    def convert_to_job(
        rfq_id: UUID,
        customer_id: Optional[UUID] = None,
        title: Optional[str] = None,
        user=None,
    ) -> Dict[str, Any]:
        """
        Turn an awarded RFQ into a job. Irreversible.

        An RFQ already linked to a job updates that job's vendor and price.
        Otherwise a new ACTIVE job is created for ``customer_id`` carrying the
        RFQ specs and number in its specs.

        Raises:
            AlreadyConvertedError: The RFQ was converted before
            NotAwardedError: No quote is awarded
            ValidationError: A new job is needed and customer_id is missing or unknown
        """
        staff = user if user and user.is_authenticated else None

        with transaction.atomic():
            rfq = VendorRFQService._get_rfq(rfq_id, for_update=True)
            if rfq.status == RFQStatus.CONVERTED:
                raise AlreadyConvertedError()
            if rfq.status == RFQStatus.CANCELLED:
                raise InvalidTransitionError("Cannot convert a cancelled RFQ")

            awarded = rfq.quotes.select_related("vendor").filter(is_awarded=True).first()
            if awarded is None:
                raise NotAwardedError()

            if rfq.job_id:
                job = Job.objects.select_for_update().get(id=rfq.job_id)
                job.vendor = awarded.vendor
                job.sell_price = awarded.quote_amount
                job.save(update_fields=["vendor", "sell_price", "updated_at"])
                message = "Job updated with awarded vendor"
            else:
                if not customer_id:
                    raise ValidationError("Customer ID is required to create a new job")
                try:
                    customer = Client.objects.get(id=customer_id)
                except (Client.DoesNotExist, DjangoValidationError):
                    raise ValidationError("Customer not found")

                job = Job(
                    name=(title or "").strip() or rfq.title,
                    customer=customer,
                    vendor=awarded.vendor,
                    status=JobStatus.ACTIVE,
                    sell_price=awarded.quote_amount,
                )
                job.typed_specs = JobSpecs(rfqSpecs=rfq.specs, rfqNumber=rfq.rfq_number)
                job.save(staff=staff)
                rfq.job = job
                message = "Job created from RFQ"

            JobEvent.objects.create(
                job=job,
                event_type=JobEventType.RFQ_CONVERTED,
                description=(
                    f"{rfq.rfq_number} awarded to {awarded.vendor.name} "
                    f"at {awarded.quote_amount}"
                ),
                staff=staff,
            )

            rfq.status = RFQStatus.CONVERTED
            rfq.save(update_fields=["job", "status", "updated_at"])

        logger.info(f"{rfq.rfq_number} converted to job {job.job_number}")
        return {
            "success": True,
            "message": message,
            "jobId": str(job.id),
            "jobNo": job.job_number,
        }
