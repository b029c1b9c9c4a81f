"""
Purchasing app models.
"""

from .purchase_order import PurchaseOrder, PurchaseOrderStatus

__all__ = [
    "PurchaseOrder",
    "PurchaseOrderStatus",
]
