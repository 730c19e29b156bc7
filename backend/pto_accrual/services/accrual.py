"""Banking accrual engine and the daily accrual run.

Worked hours accumulate in a per-user bank; every completed block of
``accrual_period`` hours converts into ``accrual_rate`` PTO hours, up to the
organization's ``max_accrual`` cap. Each pay period is applied to a balance at
most once, keyed on its (start, end) dates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from pto_accrual.config import get_settings
from pto_accrual.dates import today_in_timezone
from pto_accrual.models.base import now_utc
from pto_accrual.models.enums import AccrualStatus
from pto_accrual.schemas.accrual import PTOAccrualNotice
from pto_accrual.schemas.pto import ProcessedPeriod
from pto_accrual.services.balance import load_balance, save_balance
from pto_accrual.services.hours import aggregate_hours, get_clocked_out_entries
from pto_accrual.services.notification import get_notification_service
from pto_accrual.services.organization import (
    decode_pay_period_settings,
    decode_pto_settings,
    list_active_user_ids,
    list_organizations,
    pto_enabled,
)
from pto_accrual.services.pay_period import get_pay_period_ending_on

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from pto_accrual.schemas.pay_period import PayPeriod
    from pto_accrual.schemas.pto import PTOBalanceState, PTOSettings
    from pto_accrual.services.notification import NotificationService

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Result dataclasses
# ---------------------------------------------------------------------------


@dataclass
class AccrualOutcome:
    """Result of applying one pay period to one balance."""

    status: AccrualStatus
    balance: PTOBalanceState
    hours_worked: float = 0.0
    pto_earned: float = 0.0
    hours_added: float = 0.0


@dataclass
class AccrualRunResult:
    """Summary of a daily accrual run."""

    target_date: date
    organizations_processed: int = 0
    users_processed: int = 0
    periods_recorded: int = 0
    total_hours_added: float = 0.0
    skipped: int = 0
    errors: int = 0


# ---------------------------------------------------------------------------
# Pure computation (no DB)
# ---------------------------------------------------------------------------


def accrue_pto(
    balance: PTOBalanceState,
    hours_worked: float,
    policy: PTOSettings,
    period: PayPeriod,
    *,
    processed_at: datetime | None = None,
) -> AccrualOutcome:
    """Bank ``hours_worked`` and convert completed blocks into PTO.

    Returns a new balance; the input is never mutated. A period already in
    ``processed_periods`` is a no-op. A period with no hours and no PTO gain
    leaves no record, but one with hours and no PTO gain is still recorded so
    the banked hours are counted exactly once.
    """
    if balance.has_processed(period.start, period.end):
        return AccrualOutcome(status=AccrualStatus.ALREADY_PROCESSED, balance=balance)

    new_banking = balance.banking_balance + hours_worked
    blocks, remaining_banking = divmod(new_banking, policy.accrual_period)
    pto_earned = blocks * policy.accrual_rate

    new_total = min(balance.total_balance + pto_earned, policy.max_accrual)
    hours_added = max(new_total - balance.total_balance, 0.0)

    if hours_added <= 0 and hours_worked <= 0:
        return AccrualOutcome(status=AccrualStatus.NO_ACTIVITY, balance=balance, hours_worked=hours_worked)

    stamp = processed_at or now_utc()
    record = ProcessedPeriod(
        start_date=period.start,
        end_date=period.end,
        label=period.label,
        hours_worked=hours_worked,
        pto_earned=hours_added,
        banking_balance=remaining_banking,
        processed_at=stamp,
    )
    updated = balance.model_copy(
        update={
            "total_balance": new_total,
            "banking_balance": remaining_banking,
            "processed_periods": [*balance.processed_periods, record],
            "last_updated": stamp,
        }
    )
    return AccrualOutcome(
        status=AccrualStatus.RECORDED,
        balance=updated,
        hours_worked=hours_worked,
        pto_earned=pto_earned,
        hours_added=hours_added,
    )


# ---------------------------------------------------------------------------
# Per-user processing
# ---------------------------------------------------------------------------


async def process_user_accrual(
    session: AsyncSession,
    organization_id: str,
    user_id: str,
    period: PayPeriod,
    policy: PTOSettings,
    *,
    processed_at: datetime | None = None,
) -> AccrualOutcome:
    """Aggregate a user's hours for the period and apply them to their balance.

    Flushes the updated balance but leaves committing to the caller.
    """
    balance = await load_balance(session, organization_id, user_id)
    if balance.has_processed(period.start, period.end):
        logger.debug("Pay period %s_%s already processed for user %s", period.start, period.end, user_id)
        return AccrualOutcome(status=AccrualStatus.ALREADY_PROCESSED, balance=balance)

    entries = await get_clocked_out_entries(session, organization_id, user_id, period)
    hours_worked = aggregate_hours(entries)

    outcome = accrue_pto(balance, hours_worked, policy, period, processed_at=processed_at)
    if outcome.status != AccrualStatus.RECORDED:
        logger.debug("No hours worked for user %s in %s", user_id, period.label)
        return outcome

    await save_balance(session, outcome.balance)
    logger.info(
        "User %s: %.2f hours worked -> %.2f PTO hours added (balance=%.2f banking=%.2f)",
        user_id,
        hours_worked,
        outcome.hours_added,
        outcome.balance.total_balance,
        outcome.balance.banking_balance,
    )
    return outcome


async def _send_accrual_notice(
    notifier: NotificationService,
    organization_id: str,
    user_id: str,
    outcome: AccrualOutcome,
    period: PayPeriod,
) -> None:
    notice = PTOAccrualNotice(
        organization_id=organization_id,
        user_id=user_id,
        hours_added=outcome.hours_added,
        total_balance=outcome.balance.total_balance,
        period_label=period.label,
    )
    try:
        await notifier.notify_pto_accrued(notice)
    except Exception:
        logger.exception("Failed to send PTO notice to user=%s org=%s", user_id, organization_id)


# ---------------------------------------------------------------------------
# Daily orchestration
# ---------------------------------------------------------------------------


@dataclass
class _OrganizationInfo:
    """Detached copy of the columns needed for one organization."""

    id: str
    pto_settings: dict[str, Any] | None
    pay_period_settings: dict[str, Any] | None


async def run_daily_accruals(
    session: AsyncSession,
    today: date | None = None,
    *,
    organization_id: str | None = None,
    notifier: NotificationService | None = None,
) -> AccrualRunResult:
    """Accrue PTO for every organization whose pay period ends on ``today``.

    Users are processed one at a time and each balance write is committed on
    its own. A failing user or organization is logged and counted, and the
    run carries on. Safe to repeat for the same date.

    Args:
        session: Database session; committed after each user.
        today: Reference date for the whole run (defaults to today in the
            configured accrual timezone).
        organization_id: If provided, only process this organization.
        notifier: Notification service (defaults to the active one).
    """
    if today is None:
        today = today_in_timezone(get_settings().accrual_timezone)
    if notifier is None:
        notifier = get_notification_service()

    result = AccrualRunResult(target_date=today)
    processed_at = now_utc()

    organizations = [
        _OrganizationInfo(id=org.id, pto_settings=org.pto_settings, pay_period_settings=org.pay_period_settings)
        for org in await list_organizations(session, organization_id=organization_id)
    ]

    for info in organizations:
        try:
            if not pto_enabled(info.pto_settings):
                continue
            policy = decode_pto_settings(info.id, info.pto_settings)

            pay_period_settings = decode_pay_period_settings(info.id, info.pay_period_settings)
            if pay_period_settings is None or not pay_period_settings.is_active:
                logger.info("Skipping org %s: no active pay period settings", info.id)
                result.skipped += 1
                continue

            period = get_pay_period_ending_on(pay_period_settings, today)
            if period is None:
                logger.info("Skipping org %s: no pay period ending %s", info.id, today)
                result.skipped += 1
                continue

            logger.info("Processing org %s: pay period %s ended %s", info.id, period.label, today)
            user_ids = await list_active_user_ids(session, info.id)

            for user_id in user_ids:
                try:
                    outcome = await process_user_accrual(
                        session,
                        info.id,
                        user_id,
                        period,
                        policy,
                        processed_at=processed_at,
                    )
                    await session.commit()
                except Exception:
                    await session.rollback()
                    logger.exception("Error processing PTO for user=%s org=%s", user_id, info.id)
                    result.errors += 1
                    continue

                if outcome.status == AccrualStatus.RECORDED:
                    result.periods_recorded += 1
                if outcome.hours_added > 0:
                    result.users_processed += 1
                    result.total_hours_added += outcome.hours_added
                    await _send_accrual_notice(notifier, info.id, user_id, outcome, period)

            result.organizations_processed += 1

        except Exception:
            await session.rollback()
            logger.exception("Error processing PTO for org=%s", info.id)
            result.errors += 1

    logger.info(
        "PTO accrual run for %s: orgs=%d users=%d recorded=%d hours_added=%.2f skipped=%d errors=%d",
        today,
        result.organizations_processed,
        result.users_processed,
        result.periods_recorded,
        result.total_hours_added,
        result.skipped,
        result.errors,
    )
    return result
