from .vendor_quote import VendorQuote
from .vendor_rfq import VendorRFQ, VendorRFQVendor

__all__ = ["VendorQuote", "VendorRFQ", "VendorRFQVendor"]
