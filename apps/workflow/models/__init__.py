from .app_error import AppError
from .company_defaults import CompanyDefaults
from .notification import Notification, NotificationEventType, NotificationStatus
from .number_sequence import NumberSequence

__all__ = [
    "AppError",
    "CompanyDefaults",
    "Notification",
    "NotificationEventType",
    "NotificationStatus",
    "NumberSequence",
]
