"""
Vendor Portal Service

Everything a vendor can do with a resolved portal: confirm the PO, report
production status, upload proofs and fetch job files. Callers resolve the
token first (``PortalTokenService.resolve``) so expiry is enforced in one
place for every operation.

Each mutation commits its state change, a ``JobEvent`` and an outbox
notification together. Delivery of the notification happens after commit and
can never undo the change.
"""

import hashlib
import logging
import os
import tempfile
import uuid
import zipfile
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.db import transaction
from django.utils import timezone
from django.utils.text import get_valid_filename

from apps.job.enums import ADMINISTRATIVE_FILE_KINDS, JobEventType, JobFileKind
from apps.job.helpers import get_job_folder_path
from apps.job.models import JobEvent, JobFile
from apps.job.serializers import JobFileSerializer
from apps.portal.enums import REPORTABLE_STATUSES, VendorStatus
from apps.portal.models import JobPortal
from apps.workflow.exceptions import (
    AlreadyConfirmedError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from apps.workflow.models import NotificationEventType
from apps.workflow.services.notification_service import notify_job_inbox

logger = logging.getLogger(__name__)

VENDOR_ACTOR = "vendor"

TRACKING_URLS = {
    "ups": "https://www.ups.com/track?tracknum={}",
    "fedex": "https://www.fedex.com/fedextrack/?trknbr={}",
    "usps": "https://tools.usps.com/go/TrackConfirmAction?tLabels={}",
}


def build_tracking_url(carrier: Optional[str], tracking_number: Optional[str]):
    """Carrier deep link, or None for carriers we do not recognise."""
    if not carrier or not tracking_number:
        return None
    carrier_key = carrier.lower()
    for name, url in TRACKING_URLS.items():
        if name in carrier_key:
            return url.format(tracking_number)
    return None


def _vendor_name(portal: JobPortal) -> str:
    job = portal.job
    if job.vendor:
        return job.vendor.name
    purchase_order = portal.get_purchase_order()
    if purchase_order:
        return purchase_order.vendor.name
    return "Vendor"


class VendorPortalService:
    """
    Service layer for vendor portal operations.
    All methods take an already-resolved portal.
    """

    @staticmethod
    def portal_state(portal: JobPortal) -> Dict[str, Any]:
        return {
            "confirmedAt": portal.confirmed_at,
            "confirmedByName": portal.confirmed_by_name,
            "confirmedByEmail": portal.confirmed_by_email,
            "vendorStatus": portal.vendor_status,
            "statusUpdatedAt": portal.status_updated_at,
            "trackingNumber": portal.tracking_number,
            "trackingCarrier": portal.tracking_carrier,
            "trackingUrl": build_tracking_url(
                portal.tracking_carrier, portal.tracking_number
            ),
        }

    @staticmethod
    def build_view(portal: JobPortal) -> Dict[str, Any]:
        """Payload rendered by the public portal page."""
        job = portal.job
        specs = job.typed_specs
        purchase_order = portal.get_purchase_order()

        files = JobFile.objects.filter(job=job).exclude(
            kind__in=ADMINISTRATIVE_FILE_KINDS
        )
        grouped: Dict[str, List[JobFile]] = {
            "artwork": [],
            "dataFiles": [],
            "proofs": [],
            "other": [],
        }
        for job_file in files:
            match job_file.kind:
                case JobFileKind.ARTWORK:
                    grouped["artwork"].append(job_file)
                case JobFileKind.DATA_FILE:
                    grouped["dataFiles"].append(job_file)
                case JobFileKind.PROOF | JobFileKind.VENDOR_PROOF:
                    grouped["proofs"].append(job_file)
                case _:
                    grouped["other"].append(job_file)

        return {
            "jobNumber": job.job_number,
            "jobTitle": job.name or "",
            "customer": job.customer.name if job.customer else "N/A",
            "vendor": _vendor_name(portal),
            "poNumber": purchase_order.po_number if purchase_order else "",
            "buyCost": str(purchase_order.buy_cost) if purchase_order else None,
            "quantity": job.quantity,
            "dueDate": job.delivery_date.isoformat() if job.delivery_date else None,
            "description": job.description or "",
            "specialInstructions": specs.specialInstructions or "",
            "vendorShipping": {
                "name": specs.shipToName or "",
                "address": specs.shipToAddress or "",
            },
            "specs": specs.vendor_view(),
            "files": {
                key: JobFileSerializer(value, many=True).data
                for key, value in grouped.items()
            },
            "portal": VendorPortalService.portal_state(portal),
            "expiresAt": portal.expires_at,
        }

    @staticmethod
    def confirm(portal: JobPortal, name: Optional[str], email: Optional[str]) -> JobPortal:
        """
        Record the vendor's acknowledgement of the PO.

        Confirmation happens once. The first confirmation also moves the
        vendor status from its initial value to PO_RECEIVED in the same
        transaction.

        Raises:
            ValidationError: If name or email is missing or the email is malformed
            AlreadyConfirmedError: If the portal was confirmed before
        """
        name = (name or "").strip()
        email = (email or "").strip()
        if not name or not email:
            raise ValidationError("Name and email are required")
        try:
            validate_email(email)
        except DjangoValidationError:
            raise ValidationError("A valid email address is required")

        with transaction.atomic():
            portal = JobPortal.objects.select_for_update().select_related("job").get(
                pk=portal.pk
            )
            if portal.confirmed_at:
                raise AlreadyConfirmedError()

            now = timezone.now()
            portal.confirmed_at = now
            portal.confirmed_by_name = name
            portal.confirmed_by_email = email
            if portal.vendor_status == VendorStatus.PENDING:
                portal.vendor_status = VendorStatus.PO_RECEIVED
                portal.status_updated_at = now
            portal.save()

            job = portal.job
            purchase_order = portal.get_purchase_order()
            po_label = f"PO {purchase_order.po_number}" if purchase_order else "PO"
            JobEvent.objects.create(
                job=job,
                event_type=JobEventType.VENDOR_CONFIRMED_PO,
                description=f"{po_label} confirmed by {name} ({email})",
                changed_by=VENDOR_ACTOR,
            )

            vendor_name = _vendor_name(portal)
            notify_job_inbox(
                NotificationEventType.PO_CONFIRMED,
                job,
                subject=f"[Job #{job.job_number}] Vendor Confirmed PO - {vendor_name}",
                body=(
                    f"{vendor_name} has confirmed receipt of {po_label} "
                    f"for job {job.job_number} ({job.name}).\n\n"
                    f"Confirmed by: {name} <{email}>\n"
                    f"Confirmed at: {now:%Y-%m-%d %H:%M %Z}\n"
                ),
            )

        logger.info(f"Vendor confirmed PO for job {job.job_number}: {name} <{email}>")
        return portal

    @staticmethod
    def update_status(
        portal: JobPortal,
        new_status: Optional[str],
        tracking_number: Optional[str] = None,
        tracking_carrier: Optional[str] = None,
    ) -> JobPortal:
        """
        Record a vendor-reported production status.

        Any of the reportable statuses is accepted, including moving
        backwards. SHIPPED must carry a tracking number; the tracking fields
        are only written on a SHIPPED update.

        Raises:
            ValidationError: Unknown status, or SHIPPED without tracking number
            InvalidTransitionError: The PO has not been confirmed yet
        """
        if new_status not in REPORTABLE_STATUSES:
            raise ValidationError(
                "Invalid status. Must be one of: "
                + ", ".join(str(s) for s in REPORTABLE_STATUSES)
            )
        tracking_number = (tracking_number or "").strip() or None
        tracking_carrier = (tracking_carrier or "").strip() or None
        if new_status == VendorStatus.SHIPPED and not tracking_number:
            raise ValidationError("Tracking number is required for SHIPPED status")

        with transaction.atomic():
            portal = JobPortal.objects.select_for_update().select_related("job").get(
                pk=portal.pk
            )
            if not portal.confirmed_at:
                raise InvalidTransitionError(
                    "PO must be confirmed before updating status"
                )

            old_status = portal.vendor_status
            portal.vendor_status = new_status
            portal.status_updated_at = timezone.now()
            if new_status == VendorStatus.SHIPPED:
                portal.tracking_number = tracking_number
                portal.tracking_carrier = tracking_carrier
            portal.save()

            job = portal.job
            old_label = VendorStatus(old_status).label
            new_label = VendorStatus(new_status).label
            JobEvent.objects.create(
                job=job,
                event_type=JobEventType.VENDOR_STATUS_UPDATE,
                description=f"Vendor status changed from {old_label} to {new_label}",
                field_name="vendor_status",
                old_value=old_status,
                new_value=new_status,
                changed_by=VENDOR_ACTOR,
            )

            body = (
                f"{_vendor_name(portal)} updated job {job.job_number} ({job.name}).\n\n"
                f"Status: {old_label} -> {new_label}\n"
            )
            if new_status == VendorStatus.SHIPPED:
                body += f"Tracking number: {portal.tracking_number}\n"
                if portal.tracking_carrier:
                    body += f"Carrier: {portal.tracking_carrier}\n"
                tracking_url = build_tracking_url(
                    portal.tracking_carrier, portal.tracking_number
                )
                if tracking_url:
                    body += f"Track shipment: {tracking_url}\n"

            notify_job_inbox(
                NotificationEventType.STATUS_UPDATED,
                job,
                subject=f"[Job #{job.job_number}] Vendor Status: {new_label}",
                body=body,
            )

        logger.info(
            f"Vendor status for job {job.job_number} changed {old_status} -> {new_status}"
        )
        return portal

    @staticmethod
    def upload_files(portal: JobPortal, files: list) -> List[JobFile]:
        """
        Store vendor proofs against the job.

        Files are written to ``Job-<jobNo>`` under PORTAL_UPLOAD_FOLDER with
        an MD5 checksum recorded per file. One notification covers the batch.

        Raises:
            ValidationError: No files, too many files, or a file over the size cap
        """
        if not files:
            raise ValidationError("No files uploaded")
        max_files = settings.PORTAL_MAX_UPLOAD_FILES
        if len(files) > max_files:
            raise ValidationError(f"Maximum {max_files} files per upload")
        max_size = settings.PORTAL_MAX_UPLOAD_SIZE
        for uploaded in files:
            if uploaded.size > max_size:
                raise ValidationError(
                    f"{uploaded.name} exceeds the {max_size // (1024 * 1024)}MB limit"
                )

        job = portal.job
        job_folder = get_job_folder_path(job.job_number)
        os.makedirs(job_folder, exist_ok=True)

        written = []
        try:
            for uploaded in files:
                written.append(VendorPortalService._write_upload(job_folder, uploaded))

            with transaction.atomic():
                job_files = [
                    JobFile.objects.create(
                        job=job,
                        kind=JobFileKind.VENDOR_PROOF,
                        filename=item["filename"],
                        file_path=os.path.relpath(
                            item["path"], settings.PORTAL_UPLOAD_FOLDER
                        ),
                        mime_type=item["mime_type"],
                        size=item["size"],
                        checksum=item["checksum"],
                        uploaded_by=VENDOR_ACTOR,
                    )
                    for item in written
                ]
                filenames = ", ".join(f.filename for f in job_files)
                JobEvent.objects.create(
                    job=job,
                    event_type=JobEventType.VENDOR_PROOF_UPLOADED,
                    description=f"Vendor uploaded {len(job_files)} file(s): {filenames}",
                    changed_by=VENDOR_ACTOR,
                )
                notify_job_inbox(
                    NotificationEventType.PROOF_UPLOADED,
                    job,
                    subject=(
                        f"[Job #{job.job_number}] Vendor Uploaded "
                        f"{len(job_files)} Proof(s) - {_vendor_name(portal)}"
                    ),
                    body=(
                        f"{_vendor_name(portal)} uploaded {len(job_files)} file(s) "
                        f"to job {job.job_number} ({job.name}):\n\n"
                        + "\n".join(f"- {f.filename}" for f in job_files)
                    ),
                )
        except Exception:
            for item in written:
                if os.path.exists(item["path"]):
                    os.remove(item["path"])
            raise

        logger.info(f"Vendor uploaded {len(job_files)} file(s) to job {job.job_number}")
        return job_files

    @staticmethod
    def _write_upload(job_folder: str, uploaded) -> Dict[str, Any]:
        filename = get_valid_filename(os.path.basename(uploaded.name)) or "upload"
        # Stored name is unique; the original name is kept on the row
        stored_name = f"{uuid.uuid4().hex[:8]}-{filename}"
        path = os.path.join(job_folder, stored_name)

        md5 = hashlib.md5()
        bytes_written = 0
        with open(path, "wb") as destination:
            for chunk in uploaded.chunks():
                destination.write(chunk)
                md5.update(chunk)
                bytes_written += len(chunk)

        logger.debug(f"Wrote {bytes_written} bytes to {path}")
        return {
            "filename": filename,
            "path": path,
            "mime_type": getattr(uploaded, "content_type", "") or "",
            "size": bytes_written,
            "checksum": md5.hexdigest(),
        }

    @staticmethod
    def get_file(portal: JobPortal, file_id) -> JobFile:
        """A vendor-visible file of the portal's job that exists on disk."""
        job_file = (
            JobFile.objects.filter(job=portal.job, id=file_id)
            .exclude(kind__in=ADMINISTRATIVE_FILE_KINDS)
            .first()
        )
        if job_file is None or not job_file.exists_on_disk:
            raise NotFoundError("File not found")
        return job_file

    @staticmethod
    def build_archive(portal: JobPortal):
        """
        Zip every vendor-visible file of the job into a temporary file.

        Returns:
            tuple: (open file positioned at 0, download filename)

        Raises:
            NotFoundError: If the job has no downloadable files
        """
        job = portal.job
        job_files = [
            f
            for f in JobFile.objects.filter(job=job).exclude(
                kind__in=ADMINISTRATIVE_FILE_KINDS
            )
            if f.exists_on_disk
        ]
        if not job_files:
            raise NotFoundError("No files available for download")

        archive = tempfile.TemporaryFile()
        used_names = set()
        try:
            with zipfile.ZipFile(archive, "w", zipfile.ZIP_DEFLATED) as zf:
                for job_file in job_files:
                    arcname = job_file.filename
                    base, ext = os.path.splitext(arcname)
                    counter = 1
                    while arcname in used_names:
                        arcname = f"{base} ({counter}){ext}"
                        counter += 1
                    used_names.add(arcname)
                    zf.write(job_file.full_path, arcname)
        except Exception:
            archive.close()
            raise
        archive.seek(0)

        logger.info(f"Built archive of {len(job_files)} file(s) for job {job.job_number}")
        return archive, f"Job-{job.job_number}-Files.zip"
