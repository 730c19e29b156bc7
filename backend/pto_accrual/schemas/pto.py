# ruff: noqa: TC003
from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from pto_accrual.models.base import now_utc

_DOCUMENT_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def _coerce_hours(v: Any) -> float:
    """Decode a stored hours value, treating missing or garbage values as zero."""
    if isinstance(v, bool) or v is None:
        return 0.0
    if isinstance(v, (int, float)):
        number = float(v)
    elif isinstance(v, str):
        try:
            number = float(v)
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


# ---------------------------------------------------------------------------
# Organization PTO policy
# ---------------------------------------------------------------------------


class PTOSettings(BaseModel):
    """Hours-worked banking policy for an organization."""

    model_config = _DOCUMENT_CONFIG

    enabled: bool = False
    accrual_rate: float = Field(default=1.0, ge=0, description="PTO hours earned per completed block")
    accrual_period: float = Field(default=40.0, gt=0, description="Worked hours per accrual block")
    max_accrual: float = Field(default=240.0, ge=0, description="Cap on total PTO balance")

    @field_validator("accrual_rate", "accrual_period", "max_accrual", mode="before")
    @classmethod
    def _default_when_missing(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None and info.field_name is not None:
            return cls.model_fields[info.field_name].default
        return v


# ---------------------------------------------------------------------------
# Balance document
# ---------------------------------------------------------------------------


class ProcessedPeriod(BaseModel):
    """Record of one pay period applied to a balance; doubles as the idempotence marker."""

    model_config = _DOCUMENT_CONFIG

    start_date: date
    end_date: date
    label: str = ""
    hours_worked: float = 0.0
    pto_earned: float = 0.0
    banking_balance: float = 0.0
    processed_at: datetime | None = None

    @field_validator("hours_worked", "pto_earned", "banking_balance", mode="before")
    @classmethod
    def _hours(cls, v: Any) -> float:
        return _coerce_hours(v)

    @property
    def key(self) -> tuple[date, date]:
        return self.start_date, self.end_date

    def matches(self, start: date, end: date) -> bool:
        return self.start_date == start and self.end_date == end


def decode_processed_periods(raw: Any) -> list[ProcessedPeriod]:
    """Decode a stored processedPeriods list, skipping entries without a date range."""
    if not isinstance(raw, list):
        return []
    periods: list[ProcessedPeriod] = []
    for item in raw:
        # Early clients stored bare "YYYY-MM" markers that carry no date range.
        try:
            periods.append(ProcessedPeriod.model_validate(item))
        except ValidationError:
            continue
    return periods


class PTOBalanceState(BaseModel):
    """Decoded PTO balance.

    Every numeric field defaults to zero when the stored value is missing,
    null, non-numeric or NaN, so older rows never need patching downstream.
    """

    model_config = _DOCUMENT_CONFIG

    id: str
    user_id: str
    organization_id: str
    total_balance: float = 0.0
    banking_balance: float = 0.0
    used_this_year: float = 0.0
    pending_balance: float = 0.0
    processed_periods: list[ProcessedPeriod] = []
    created_at: datetime = Field(default_factory=now_utc)
    last_updated: datetime = Field(default_factory=now_utc)

    @field_validator("total_balance", "banking_balance", "used_this_year", "pending_balance", mode="before")
    @classmethod
    def _hours(cls, v: Any) -> float:
        return _coerce_hours(v)

    @field_validator("processed_periods", mode="before")
    @classmethod
    def _periods(cls, v: Any) -> Any:
        return decode_processed_periods(v)

    @field_validator("created_at", "last_updated", mode="before")
    @classmethod
    def _timestamp(cls, v: Any) -> Any:
        return now_utc() if v is None else v

    @property
    def available_balance(self) -> float:
        return max(0.0, self.total_balance - self.pending_balance)

    def has_processed(self, start: date, end: date) -> bool:
        return any(p.matches(start, end) for p in self.processed_periods)


# ---------------------------------------------------------------------------
# API response schemas
# ---------------------------------------------------------------------------


class ProcessedPeriodResponse(BaseModel):
    """One processed pay period as returned by the API."""

    start_date: date
    end_date: date
    label: str
    hours_worked: float
    pto_earned: float
    banking_balance: float
    processed_at: datetime | None


class BalanceResponse(BaseModel):
    """PTO balance for one user."""

    id: str
    user_id: str
    organization_id: str
    total_balance: float
    banking_balance: float
    used_this_year: float
    pending_balance: float
    available_balance: float
    processed_periods: list[ProcessedPeriodResponse]
    last_updated: datetime
