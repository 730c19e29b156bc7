"""Read access to stored PTO balances."""

from __future__ import annotations

from fastapi import APIRouter

from pto_accrual.db import SessionDep
from pto_accrual.schemas.pto import BalanceResponse
from pto_accrual.services.balance import get_user_balance

balance_router = APIRouter(
    prefix="/organizations/{organization_id}/users/{user_id}",
    tags=["balances"],
)


@balance_router.get("/pto-balance", response_model=BalanceResponse)
async def get_pto_balance(organization_id: str, user_id: str, session: SessionDep) -> BalanceResponse:
    """Return a user's PTO balance and processed-period history."""
    return await get_user_balance(session, organization_id, user_id)
