from __future__ import annotations

import datetime
import uuid

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from pto_accrual.models.enums import TimeEntryStatus


def _entry_id() -> str:
    return uuid.uuid4().hex


class TimeEntry(SQLModel, table=True):
    """One clock-in/clock-out cycle, written by the time-tracking subsystem.

    Clock times are kept as the raw ISO-8601 strings the client sent; they are
    only parsed when a missing duration has to be reconstructed.
    """

    __tablename__ = "time_entry"
    __table_args__ = (sa.Index("ix_time_entry_user_org_date", "user_id", "organization_id", "date"),)

    id: str = Field(default_factory=_entry_id, primary_key=True, max_length=255)
    user_id: str = Field(max_length=255)
    organization_id: str = Field(max_length=255)
    date: datetime.date
    status: str = Field(default=TimeEntryStatus.CLOCKED_IN.value, max_length=50)
    duration: float | None = None
    clock_in_time: str | None = Field(default=None, max_length=64)
    clock_out_time: str | None = Field(default=None, max_length=64)
