from django.db import models


class RFQStatus(models.TextChoices):
    """
    Lifecycle of a vendor RFQ.

    DRAFT -> PENDING (sent) -> QUOTED (every invitee answered) -> AWARDED
    -> CONVERTED. CANCELLED is reachable from any state before CONVERTED.
    QUOTED is derived from the quotes and never set directly.
    """

    DRAFT = "DRAFT", "Draft"
    PENDING = "PENDING", "Pending"
    QUOTED = "QUOTED", "Quoted"
    AWARDED = "AWARDED", "Awarded"
    CONVERTED = "CONVERTED", "Converted"
    CANCELLED = "CANCELLED", "Cancelled"


class VendorQuoteStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    RECEIVED = "RECEIVED", "Received"
    DECLINED = "DECLINED", "Declined"
