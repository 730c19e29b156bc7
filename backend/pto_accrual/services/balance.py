from __future__ import annotations

from typing import TYPE_CHECKING

from pto_accrual.exceptions import NotFoundError
from pto_accrual.models.balance import PTOBalance
from pto_accrual.models.base import now_utc
from pto_accrual.schemas.pto import (
    BalanceResponse,
    ProcessedPeriodResponse,
    PTOBalanceState,
    decode_processed_periods,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


def balance_id(organization_id: str, user_id: str) -> str:
    """Document key of a user's balance."""
    return f"{organization_id}_{user_id}"


def new_balance_state(organization_id: str, user_id: str) -> PTOBalanceState:
    """Initial balance for a user with no stored record."""
    return PTOBalanceState(
        id=balance_id(organization_id, user_id),
        user_id=user_id,
        organization_id=organization_id,
    )


def decode_balance(row: PTOBalance) -> PTOBalanceState:
    """Decode a stored row, defaulting any missing or malformed field."""
    return PTOBalanceState.model_validate(
        {
            "id": row.id,
            "user_id": row.user_id,
            "organization_id": row.organization_id,
            "total_balance": row.total_balance,
            "banking_balance": row.banking_balance,
            "used_this_year": row.used_this_year,
            "pending_balance": row.pending_balance,
            "processed_periods": row.processed_periods,
            "created_at": row.created_at,
            "last_updated": row.last_updated,
        }
    )


# ---------------------------------------------------------------------------
# Store access
# ---------------------------------------------------------------------------


async def load_balance(session: AsyncSession, organization_id: str, user_id: str) -> PTOBalanceState:
    """Return the user's decoded balance, or a fresh one if none is stored."""
    row = await session.get(PTOBalance, balance_id(organization_id, user_id))
    if row is None:
        return new_balance_state(organization_id, user_id)
    return decode_balance(row)


async def save_balance(session: AsyncSession, state: PTOBalanceState) -> PTOBalance:
    """Write the accrual-owned columns of a balance in one flush.

    ``total_balance``, ``banking_balance`` and ``processed_periods`` are written
    together. Stored processed-period entries are kept verbatim, including ones
    that do not decode, and new records are appended after them.
    ``used_this_year`` and ``pending_balance`` belong to the time-off request
    workflow and are only set when the row is first created.
    """
    row = await session.get(PTOBalance, state.id)
    if row is None:
        row = PTOBalance(
            id=state.id,
            user_id=state.user_id,
            organization_id=state.organization_id,
            used_this_year=state.used_this_year,
            pending_balance=state.pending_balance,
            created_at=state.created_at,
        )
        session.add(row)

    stored = list(row.processed_periods) if isinstance(row.processed_periods, list) else []
    stored_keys = {p.key for p in decode_processed_periods(stored)}
    appended = [
        p.model_dump(mode="json", by_alias=True) for p in state.processed_periods if p.key not in stored_keys
    ]

    row.total_balance = state.total_balance
    row.banking_balance = state.banking_balance
    row.processed_periods = [*stored, *appended]
    row.last_updated = now_utc()

    await session.flush()
    return row


# ---------------------------------------------------------------------------
# Read path
# ---------------------------------------------------------------------------


async def get_user_balance(session: AsyncSession, organization_id: str, user_id: str) -> BalanceResponse:
    """Read a stored balance for the API; raises NotFoundError if absent."""
    row = await session.get(PTOBalance, balance_id(organization_id, user_id))
    if row is None:
        msg = f"No PTO balance for user {user_id} in organization {organization_id}"
        raise NotFoundError(msg)

    state = decode_balance(row)
    return BalanceResponse(
        id=state.id,
        user_id=state.user_id,
        organization_id=state.organization_id,
        total_balance=state.total_balance,
        banking_balance=state.banking_balance,
        used_this_year=state.used_this_year,
        pending_balance=state.pending_balance,
        available_balance=state.available_balance,
        processed_periods=[
            ProcessedPeriodResponse(
                start_date=p.start_date,
                end_date=p.end_date,
                label=p.label,
                hours_worked=p.hours_worked,
                pto_earned=p.pto_earned,
                banking_balance=p.banking_balance,
                processed_at=p.processed_at,
            )
            for p in state.processed_periods
        ],
        last_updated=state.last_updated,
    )
