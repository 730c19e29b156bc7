# ruff: noqa: TC003
from __future__ import annotations

from datetime import date

from pydantic import BaseModel


class AccrualRunResponse(BaseModel):
    """Response from the accrual trigger endpoint."""

    target_date: date
    organizations_processed: int
    users_processed: int
    periods_recorded: int
    total_hours_added: float
    skipped: int
    errors: int


class PTOAccrualNotice(BaseModel):
    """Payload handed to the notification service after PTO is added."""

    organization_id: str
    user_id: str
    hours_added: float
    total_balance: float
    period_label: str

    @property
    def title(self) -> str:
        return "PTO Accrued"

    @property
    def body(self) -> str:
        return (
            f"You earned {self.hours_added:g} PTO hour{'' if self.hours_added == 1 else 's'} "
            f"for {self.period_label}. New balance: {self.total_balance:g} hours."
        )
