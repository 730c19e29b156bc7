# ruff: noqa: TC003
from __future__ import annotations

from datetime import date
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator
from pydantic.alias_generators import to_camel

from pto_accrual.dates import parse_calendar_date
from pto_accrual.exceptions import InvalidDateError
from pto_accrual.models.enums import PayPeriodType

# ---------------------------------------------------------------------------
# Stored configuration
# ---------------------------------------------------------------------------


class PayPeriodConfig(BaseModel):
    """Type-specific pay-period parameters.

    Only the fields relevant to the configured type are read; the rest keep
    their defaults.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    day_of_week: int = Field(default=1, ge=0, le=6, description="0=Sunday .. 6=Saturday")
    start_date: date | None = Field(default=None, description="Bi-weekly reference period start")
    first_date: int = Field(default=1, ge=1, le=31)
    second_date: int = Field(default=15, ge=2, le=31)
    day_of_month: int = Field(default=1, ge=1, le=31)

    @field_validator("day_of_week", "first_date", "second_date", "day_of_month", mode="before")
    @classmethod
    def _default_when_missing(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None and info.field_name is not None:
            return cls.model_fields[info.field_name].default
        return v

    @field_validator("start_date", mode="before")
    @classmethod
    def _parse_start_date(cls, v: Any) -> Any:
        if v is None or v == "":
            return None
        try:
            return parse_calendar_date(v)
        except InvalidDateError as exc:
            raise ValueError(exc.message) from exc

    @model_validator(mode="after")
    def _validate_semi_monthly(self) -> Self:
        if self.second_date <= self.first_date:
            msg = "secondDate must be after firstDate"
            raise ValueError(msg)
        return self


class PayPeriodSettings(BaseModel):
    """An organization's pay-period schedule."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    is_active: bool = False
    type: PayPeriodType
    config: PayPeriodConfig = Field(default_factory=PayPeriodConfig)

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().lower()
            if v == "biweekly":
                return PayPeriodType.BI_WEEKLY.value
        return v

    @field_validator("config", mode="before")
    @classmethod
    def _empty_config(cls, v: Any) -> Any:
        return {} if v is None else v


# ---------------------------------------------------------------------------
# Computed value object
# ---------------------------------------------------------------------------


class PayPeriod(BaseModel):
    """Inclusive calendar-day range of one pay period.

    Identity is the (start, end) pair; the label is for display only.
    """

    model_config = ConfigDict(frozen=True)

    start: date
    end: date
    label: str

    @property
    def key(self) -> tuple[date, date]:
        return self.start, self.end

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


# ---------------------------------------------------------------------------
# API response schemas
# ---------------------------------------------------------------------------


class PayPeriodListResponse(BaseModel):
    """Pay periods overlapping a requested window."""

    items: list[PayPeriod]
    total: int
