"""Seed script for development data.

Run with:  python -m pto_accrual.seed
"""

from __future__ import annotations

import asyncio
from datetime import date, datetime, time, timedelta

from pto_accrual.config import get_settings
from pto_accrual.dates import today_in_timezone
from pto_accrual.db import dispose_engine, get_session_factory, init_models
from pto_accrual.models.enums import TimeEntryStatus
from pto_accrual.models.organization import Organization
from pto_accrual.models.time_entry import TimeEntry
from pto_accrual.models.user import AppUser
from pto_accrual.services.organization import decode_pay_period_settings
from pto_accrual.services.pay_period import get_current_pay_period

ORGANIZATION_ID = "demo-studio"

ORGANIZATION = {
    "id": ORGANIZATION_ID,
    "name": "Demo Photo Studio",
    "pto_settings": {
        "enabled": True,
        "accrualRate": 1,
        "accrualPeriod": 40,
        "maxAccrual": 240,
    },
    "pay_period_settings": {
        "isActive": True,
        "type": "bi-weekly",
        "config": {"startDate": "2025-01-05"},
    },
}

USERS = [
    {"id": "alice", "first_name": "Alice", "last_name": "Johnson", "email": "alice@example.com", "is_active": True},
    {"id": "bob", "first_name": "Bob", "last_name": "Smith", "email": "bob@example.com", "is_active": True},
    {"id": "carol", "first_name": "Carol", "last_name": "Williams", "email": "carol@example.com", "is_active": False},
]

# Hours clocked per weekday for each seeded user.
DAILY_HOURS = {"alice": 8, "bob": 6, "carol": 8}


def _clock_times(day: date, hours: int) -> tuple[str, str]:
    clock_in = datetime.combine(day, time(9, 0))
    clock_out = clock_in + timedelta(hours=hours)
    return f"{clock_in.isoformat()}Z", f"{clock_out.isoformat()}Z"


async def main() -> None:
    print("=" * 60)
    print("  PTO Accrual: Development Seed Script")
    print("=" * 60)

    await init_models()
    session_factory = get_session_factory()

    async with session_factory() as session:
        if await session.get(Organization, ORGANIZATION_ID) is not None:
            print(f"\n[SKIP] Organization {ORGANIZATION_ID} already seeded")
            await dispose_engine()
            return

        session.add(Organization(**ORGANIZATION))
        for user in USERS:
            session.add(AppUser(organization_id=ORGANIZATION_ID, **user))
        print(f"\n[OK] Organization {ORGANIZATION_ID} with {len(USERS)} users")

        settings = decode_pay_period_settings(ORGANIZATION_ID, ORGANIZATION["pay_period_settings"])
        today = today_in_timezone(get_settings().accrual_timezone)
        period = get_current_pay_period(settings, today)
        if period is None:
            print("[WARN] No current pay period; time entries not seeded")
        else:
            day = period.start
            while day <= period.end:
                if day.weekday() < 5:
                    for user_id, hours in DAILY_HOURS.items():
                        clock_in, clock_out = _clock_times(day, hours)
                        # Every other entry omits the duration to exercise reconstruction.
                        duration = hours * 3600 if day.day % 2 == 0 else None
                        session.add(
                            TimeEntry(
                                user_id=user_id,
                                organization_id=ORGANIZATION_ID,
                                date=day,
                                status=TimeEntryStatus.CLOCKED_OUT.value,
                                duration=duration,
                                clock_in_time=clock_in,
                                clock_out_time=clock_out,
                            )
                        )
                day += timedelta(days=1)
            print(f"[OK] Time entries for {period.label}")

        await session.commit()

    await dispose_engine()

    print("\n" + "=" * 60)
    print("  Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
