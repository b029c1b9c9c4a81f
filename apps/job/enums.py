from django.db import models


class JobStatus(models.TextChoices):
    """
    Commercial state of a job
    """

    ACTIVE = "ACTIVE", "Active"
    PAID = "PAID", "Paid"
    CANCELLED = "CANCELLED", "Cancelled"


class JobFileKind(models.TextChoices):
    """
    What a job file is for. PO_PDF and INVOICE are administrative and are
    never shown to vendors.
    """

    ARTWORK = "ARTWORK", "Artwork"
    DATA_FILE = "DATA_FILE", "Data File"
    PROOF = "PROOF", "Proof"
    VENDOR_PROOF = "VENDOR_PROOF", "Vendor Proof"
    PO_PDF = "PO_PDF", "PO PDF"
    INVOICE = "INVOICE", "Invoice"
    OTHER = "OTHER", "Other"


ADMINISTRATIVE_FILE_KINDS = (JobFileKind.PO_PDF, JobFileKind.INVOICE)


class JobEventType(models.TextChoices):
    JOB_CREATED = "job_created", "Job Created"
    JOB_UPDATED = "job_updated", "Job Updated"
    RFQ_CONVERTED = "rfq_converted", "Created From RFQ"
    VENDOR_CONFIRMED_PO = "VENDOR_CONFIRMED_PO", "Vendor Confirmed PO"
    VENDOR_STATUS_UPDATE = "VENDOR_STATUS_UPDATE", "Vendor Status Update"
    VENDOR_PROOF_UPLOADED = "VENDOR_PROOF_UPLOADED", "Vendor Proof Uploaded"
