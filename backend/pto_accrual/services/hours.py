"""Worked-hours aggregation over clocked-out time entries."""

from __future__ import annotations

import logging
import math
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from pto_accrual.models.enums import TimeEntryStatus
from pto_accrual.models.time_entry import TimeEntry

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy.ext.asyncio import AsyncSession

    from pto_accrual.schemas.pay_period import PayPeriod

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600


def _parse_instant(value: datetime | str | None) -> datetime | None:
    """Parse a clock timestamp; naive values are taken as UTC."""
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


def entry_duration_seconds(entry: TimeEntry) -> float:
    """Worked seconds for one entry.

    Uses the stored duration when positive, otherwise rebuilds it from the
    clock-in/clock-out pair. Anything unusable counts as zero.
    """
    duration = entry.duration
    if isinstance(duration, (int, float)) and math.isfinite(duration) and duration > 0:
        return float(duration)

    clock_in = _parse_instant(entry.clock_in_time)
    clock_out = _parse_instant(entry.clock_out_time)
    if clock_in is None or clock_out is None or clock_out <= clock_in:
        logger.debug(
            "Ignoring time entry %s with unusable clock times in=%r out=%r",
            entry.id,
            entry.clock_in_time,
            entry.clock_out_time,
        )
        return 0.0
    return (clock_out - clock_in).total_seconds()


def aggregate_hours(entries: Iterable[TimeEntry]) -> float:
    """Total hours worked across pre-filtered, clocked-out entries."""
    total_seconds = sum(entry_duration_seconds(entry) for entry in entries)
    return total_seconds / SECONDS_PER_HOUR


async def get_clocked_out_entries(
    session: AsyncSession,
    organization_id: str,
    user_id: str,
    period: PayPeriod,
) -> list[TimeEntry]:
    """Fetch a user's completed time entries dated within the period."""
    result = await session.execute(
        select(TimeEntry)
        .where(
            col(TimeEntry.user_id) == user_id,
            col(TimeEntry.organization_id) == organization_id,
            col(TimeEntry.date) >= period.start,
            col(TimeEntry.date) <= period.end,
            col(TimeEntry.status) == TimeEntryStatus.CLOCKED_OUT.value,
        )
        .order_by(col(TimeEntry.date))
    )
    return list(result.scalars().all())
