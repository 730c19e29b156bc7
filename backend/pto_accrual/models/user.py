from __future__ import annotations

from sqlmodel import Field

from pto_accrual.models.base import DocumentBase


class AppUser(DocumentBase, table=True):
    """Employee belonging to an organization."""

    __tablename__ = "app_user"

    organization_id: str = Field(index=True, max_length=255)
    first_name: str = Field(default="", max_length=255)
    last_name: str = Field(default="", max_length=255)
    email: str | None = Field(default=None, max_length=255)
    is_active: bool = Field(default=True, index=True)
