from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import ValidationError
from sqlalchemy import select
from sqlmodel import col

from pto_accrual.exceptions import InvalidSettingsError, NotFoundError
from pto_accrual.models.organization import Organization
from pto_accrual.models.user import AppUser
from pto_accrual.schemas.pay_period import PayPeriodSettings
from pto_accrual.schemas.pto import PTOSettings

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


def pto_enabled(raw: dict[str, Any] | None) -> bool:
    """Whether a stored PTO policy is switched on; only a literal ``true`` counts."""
    return bool(raw) and raw.get("enabled") is True


def decode_pto_settings(organization_id: str, raw: dict[str, Any] | None) -> PTOSettings:
    """Decode an organization's stored PTO policy."""
    try:
        return PTOSettings.model_validate(raw or {})
    except ValidationError as exc:
        msg = f"Invalid PTO settings for organization {organization_id}: {exc}"
        raise InvalidSettingsError(msg) from exc


def decode_pay_period_settings(organization_id: str, raw: dict[str, Any] | None) -> PayPeriodSettings | None:
    """Decode an organization's pay-period schedule, or None when unset."""
    if not raw:
        return None
    try:
        return PayPeriodSettings.model_validate(raw)
    except ValidationError as exc:
        msg = f"Invalid pay period settings for organization {organization_id}: {exc}"
        raise InvalidSettingsError(msg) from exc


async def get_organization(session: AsyncSession, organization_id: str) -> Organization:
    """Fetch an organization or raise NotFoundError."""
    organization = await session.get(Organization, organization_id)
    if organization is None:
        msg = f"Organization {organization_id} not found"
        raise NotFoundError(msg)
    return organization


async def get_pay_period_settings(session: AsyncSession, organization_id: str) -> PayPeriodSettings | None:
    """Load and decode one organization's pay-period schedule."""
    organization = await get_organization(session, organization_id)
    return decode_pay_period_settings(organization.id, organization.pay_period_settings)


async def list_organizations(
    session: AsyncSession,
    *,
    organization_id: str | None = None,
) -> list[Organization]:
    """List organizations, optionally narrowed to one id."""
    query = select(Organization).order_by(col(Organization.id))
    if organization_id is not None:
        query = query.where(col(Organization.id) == organization_id)
    result = await session.execute(query)
    return list(result.scalars().all())


async def list_active_user_ids(session: AsyncSession, organization_id: str) -> list[str]:
    """Ids of the organization's active users, in a stable order."""
    result = await session.execute(
        select(AppUser.id)
        .where(
            col(AppUser.organization_id) == organization_id,
            col(AppUser.is_active).is_(True),
        )
        .order_by(col(AppUser.id))
    )
    return list(result.scalars().all())
