# ruff: noqa: B008, TC003
"""Read-only pay-period lookups for an organization."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Query

from pto_accrual.config import get_settings
from pto_accrual.dates import today_in_timezone
from pto_accrual.db import SessionDep
from pto_accrual.exceptions import InvalidSettingsError, NotFoundError
from pto_accrual.schemas.pay_period import PayPeriod, PayPeriodListResponse
from pto_accrual.services.organization import get_pay_period_settings
from pto_accrual.services.pay_period import calculate_pay_period_boundaries, get_current_pay_period

pay_periods_router = APIRouter(
    prefix="/organizations/{organization_id}/pay-periods",
    tags=["pay-periods"],
)


@pay_periods_router.get("", response_model=PayPeriodListResponse)
async def list_pay_periods(
    organization_id: str,
    session: SessionDep,
    start: date = Query(),
    end: date = Query(),
) -> PayPeriodListResponse:
    """List the pay periods overlapping ``[start, end]``."""
    settings = await get_pay_period_settings(session, organization_id)
    if settings is None:
        msg = f"Organization {organization_id} has no pay period settings"
        raise InvalidSettingsError(msg)
    periods = calculate_pay_period_boundaries(start, end, settings)
    return PayPeriodListResponse(items=periods, total=len(periods))


@pay_periods_router.get("/current", response_model=PayPeriod)
async def current_pay_period(
    organization_id: str,
    session: SessionDep,
    target_date: date | None = Query(default=None),
) -> PayPeriod:
    """Return the pay period containing ``target_date`` (default today)."""
    settings = await get_pay_period_settings(session, organization_id)
    period = get_current_pay_period(settings, target_date or today_in_timezone(get_settings().accrual_timezone))
    if period is None:
        msg = f"No active pay period for organization {organization_id}"
        raise NotFoundError(msg)
    return period
