from sqlmodel import SQLModel

from pto_accrual.models.balance import PTOBalance
from pto_accrual.models.base import DocumentBase, TimestampMixin
from pto_accrual.models.enums import AccrualStatus, PayPeriodType, TimeEntryStatus
from pto_accrual.models.organization import Organization
from pto_accrual.models.time_entry import TimeEntry
from pto_accrual.models.user import AppUser

__all__ = [
    "AccrualStatus",
    "AppUser",
    "DocumentBase",
    "Organization",
    "PTOBalance",
    "PayPeriodType",
    "SQLModel",
    "TimeEntry",
    "TimeEntryStatus",
    "TimestampMixin",
]
