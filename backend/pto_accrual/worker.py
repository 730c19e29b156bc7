"""Worker process for the scheduled PTO accrual job.

Sleeps until the configured local run time, then runs the accrual job for
that calendar date. Run standalone with ``pto-accrual-worker`` or inside the
API process with ``PTO_RUN_ACCRUAL_WORKER=true``.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime, time, timedelta
from zoneinfo import ZoneInfo

from pto_accrual.config import get_settings
from pto_accrual.db import get_session_factory
from pto_accrual.log import configure_logging

logger = logging.getLogger(__name__)


def next_run_at(now: datetime, run_time: time) -> datetime:
    """First occurrence of ``run_time`` strictly after ``now``, in ``now``'s timezone."""
    candidate = datetime.combine(now.date(), run_time, tzinfo=now.tzinfo)
    if candidate <= now:
        candidate = datetime.combine(now.date() + timedelta(days=1), run_time, tzinfo=now.tzinfo)
    return candidate


async def run_accrual_loop() -> None:
    """Run the accrual job once per local day, forever."""
    from pto_accrual.services.accrual import run_daily_accruals

    settings = get_settings()
    zone = ZoneInfo(settings.accrual_timezone)
    logger.info("Accrual worker started (timezone=%s run_time=%s)", zone, settings.accrual_run_time)
    session_factory = get_session_factory()

    while True:
        now = datetime.now(zone)
        wake_at = next_run_at(now, settings.accrual_run_time)
        logger.info("Next accrual run at %s", wake_at.isoformat())
        # Aware datetimes sharing a tzinfo subtract as wall time, so compare in UTC.
        await asyncio.sleep((wake_at.astimezone(UTC) - now.astimezone(UTC)).total_seconds())

        # Fixed once per run so users processed after midnight use the same day.
        today = wake_at.date()
        try:
            async with session_factory() as session:
                result = await run_daily_accruals(session, today)
            logger.info(
                "Accrual run complete for %s: orgs=%d users=%d hours_added=%.2f errors=%d",
                today,
                result.organizations_processed,
                result.users_processed,
                result.total_hours_added,
                result.errors,
            )
        except Exception:
            logger.exception("Accrual run failed for %s", today)


def main() -> None:
    """Entry point for the worker process."""
    configure_logging(get_settings().log_level)
    asyncio.run(run_accrual_loop())


if __name__ == "__main__":
    main()
