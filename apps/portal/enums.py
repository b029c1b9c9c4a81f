from django.db import models


class VendorStatus(models.TextChoices):
    """
    Production stage as reported by the vendor. PENDING is the initial value
    until the vendor confirms the PO.
    """

    PENDING = "PENDING", "Awaiting Confirmation"
    PO_RECEIVED = "PO_RECEIVED", "PO Received"
    IN_PRODUCTION = "IN_PRODUCTION", "In Production"
    PRINTING_COMPLETE = "PRINTING_COMPLETE", "Printing Complete"
    SHIPPED = "SHIPPED", "Shipped"


# Values a vendor may report through the portal, in production order
REPORTABLE_STATUSES = [
    VendorStatus.PO_RECEIVED,
    VendorStatus.IN_PRODUCTION,
    VendorStatus.PRINTING_COMPLETE,
    VendorStatus.SHIPPED,
]
