from __future__ import annotations

import enum


class PayPeriodType(enum.StrEnum):
    """Recurring pay-period schedules an organization can configure."""

    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    SEMI_MONTHLY = "semi-monthly"
    MONTHLY = "monthly"


class TimeEntryStatus(enum.StrEnum):
    """Lifecycle of a single clock-in/clock-out cycle."""

    CLOCKED_IN = "clocked-in"
    CLOCKED_OUT = "clocked-out"


class AccrualStatus(enum.StrEnum):
    """Outcome of applying one pay period to a balance."""

    RECORDED = "RECORDED"
    ALREADY_PROCESSED = "ALREADY_PROCESSED"
    NO_ACTIVITY = "NO_ACTIVITY"
