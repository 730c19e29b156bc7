# ruff: noqa: TC003
from __future__ import annotations

from datetime import datetime
from typing import Any

import sqlalchemy as sa
from sqlmodel import Field

from pto_accrual.models.base import DocumentBase, now_utc


class PTOBalance(DocumentBase, table=True):
    """Per-user PTO balance, keyed ``"{organization_id}_{user_id}"``.

    Numeric columns are nullable because rows written before banking existed
    may lack them. Read through ``PTOBalanceState`` rather than directly.
    """

    __tablename__ = "pto_balance"

    user_id: str = Field(index=True, max_length=255)
    organization_id: str = Field(index=True, max_length=255)
    total_balance: float | None = Field(default=0.0)
    banking_balance: float | None = Field(default=0.0)
    used_this_year: float | None = Field(default=0.0)
    pending_balance: float | None = Field(default=0.0)
    processed_periods: list[dict[str, Any]] | None = Field(default=None, sa_type=sa.JSON)
    created_at: datetime = Field(
        default_factory=now_utc,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
        sa_column_kwargs={"server_default": sa.func.now()},
    )
    last_updated: datetime = Field(
        default_factory=now_utc,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
    )
