# ruff: noqa: B008, TC003
"""Manual trigger for the daily PTO accrual run."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Query

from pto_accrual.db import SessionDep
from pto_accrual.schemas.accrual import AccrualRunResponse
from pto_accrual.services.accrual import run_daily_accruals
from pto_accrual.services.organization import get_organization

accrual_trigger_router = APIRouter(
    prefix="/organizations/{organization_id}/pto",
    tags=["accruals"],
)


@accrual_trigger_router.post("/trigger", response_model=AccrualRunResponse)
async def trigger_accruals(
    organization_id: str,
    session: SessionDep,
    target_date: date | None = Query(default=None),
) -> AccrualRunResponse:
    """Run the accrual job for one organization as if today were ``target_date``.

    Useful for backfilling a missed run. Periods that were already applied
    are left untouched.
    """
    await get_organization(session, organization_id)
    result = await run_daily_accruals(session, target_date, organization_id=organization_id)
    return AccrualRunResponse(
        target_date=result.target_date,
        organizations_processed=result.organizations_processed,
        users_processed=result.users_processed,
        periods_recorded=result.periods_recorded,
        total_hours_added=result.total_hours_added,
        skipped=result.skipped,
        errors=result.errors,
    )
