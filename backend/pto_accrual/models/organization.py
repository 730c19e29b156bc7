from __future__ import annotations

from typing import Any

import sqlalchemy as sa
from sqlmodel import Field

from pto_accrual.models.base import DocumentBase, TimestampMixin


class Organization(DocumentBase, TimestampMixin, table=True):
    """Tenant carrying the PTO policy and pay-period configuration.

    Both settings columns hold the raw stored documents; they are decoded
    through the pydantic schemas before use.
    """

    __tablename__ = "organization"

    name: str = Field(default="", max_length=255)
    pto_settings: dict[str, Any] | None = Field(default=None, sa_type=sa.JSON)
    pay_period_settings: dict[str, Any] | None = Field(default=None, sa_type=sa.JSON)
