"""
Domain errors raised by the service layer.

Each class carries the HTTP status the REST layer answers with, so views can
render any of them through ``BaseRestView.handle_service_error`` without
knowing which operation raised it.
"""


class BrokerError(Exception):
    """Base class for errors the caller can act on."""

    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(BrokerError):
    """Missing or malformed input."""

    status_code = 400


class NotAssignedError(ValidationError):
    """Raised when a vendor is not among an RFQ's invitees.

    Args:
        rfq_id: The RFQ being quoted.
        vendor_id: The vendor that was not invited.
    """

    def __init__(self, rfq_id, vendor_id):
        self.rfq_id = rfq_id
        self.vendor_id = vendor_id
        super().__init__("Vendor is not assigned to this RFQ")


class NotFoundError(BrokerError):
    status_code = 404


class PortalNotFoundError(NotFoundError):
    def __init__(self, message: str = "Portal not found"):
        super().__init__(message)


class ExpiredError(BrokerError):
    """The resource existed but is past its lifetime (HTTP 410 Gone)."""

    status_code = 410


class PortalExpiredError(ExpiredError):
    def __init__(self, message: str = "Portal link has expired"):
        super().__init__(message)


class ConflictError(BrokerError):
    """The request is well-formed but the current state does not allow it."""

    status_code = 400


class InvalidTransitionError(ConflictError):
    pass


class AlreadyConfirmedError(ConflictError):
    def __init__(self, message: str = "PO has already been confirmed"):
        super().__init__(message)


class NoQuoteError(ConflictError):
    def __init__(self, message: str = "No received quote found from this vendor"):
        super().__init__(message)


class NotAwardedError(ConflictError):
    def __init__(
        self, message: str = "No vendor has been awarded. Award a vendor first."
    ):
        super().__init__(message)


class AlreadyConvertedError(ConflictError):
    def __init__(self, message: str = "RFQ has already been converted to a job"):
        super().__init__(message)
