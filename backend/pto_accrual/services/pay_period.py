"""Pay-period boundary calculation and current-period resolution.

All arithmetic is on calendar dates; periods are inclusive on both ends.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING

from pto_accrual.dates import format_label_date, js_weekday, last_day_of_month, parse_calendar_date
from pto_accrual.exceptions import InvalidDateError, InvalidSettingsError
from pto_accrual.models.enums import PayPeriodType
from pto_accrual.schemas.pay_period import PayPeriod

if TYPE_CHECKING:
    from collections.abc import Iterator

    from pto_accrual.schemas.pay_period import PayPeriodConfig, PayPeriodSettings

# Wide enough that any weekly, bi-weekly, semi-monthly or monthly period
# containing the target date is generated in full.
RESOLVER_WINDOW_DAYS = 35

_WEEK = timedelta(days=7)
_FORTNIGHT = timedelta(days=14)

# ---------------------------------------------------------------------------
# Per-type generators
# ---------------------------------------------------------------------------


def _week_start(day: date, start_day_of_week: int) -> date:
    """Return the latest ``start_day_of_week`` on or before ``day``."""
    diff = (js_weekday(day) - start_day_of_week + 7) % 7
    return day - timedelta(days=diff)


def _generate_weekly(start: date, end: date, config: PayPeriodConfig) -> list[PayPeriod]:
    periods: list[PayPeriod] = []
    current = _week_start(start, config.day_of_week)
    while current <= end:
        periods.append(
            PayPeriod(
                start=current,
                end=current + timedelta(days=6),
                label=f"Week of {format_label_date(current)}",
            )
        )
        current += _WEEK
    return periods


def _generate_bi_weekly(start: date, end: date, config: PayPeriodConfig) -> list[PayPeriod]:
    reference = config.start_date
    if reference is None:
        msg = "Bi-weekly pay periods require a reference startDate"
        raise InvalidDateError(msg)

    # Floor division keeps negative offsets on the earlier cycle.
    cycles = (start - reference).days // 14
    current = reference + timedelta(days=cycles * 14)

    periods: list[PayPeriod] = []
    while current <= end:
        period_end = current + timedelta(days=13)
        if period_end >= start:
            periods.append(
                PayPeriod(
                    start=current,
                    end=period_end,
                    label=f"{format_label_date(current)} - {format_label_date(period_end)}",
                )
            )
        current += _FORTNIGHT
    return periods


def _iter_months(first: date, last: date) -> Iterator[tuple[int, int]]:
    """Yield every (year, month) from ``first``'s month through ``last``'s month."""
    year, month = first.year, first.month
    while (year, month) <= (last.year, last.month):
        yield year, month
        month += 1
        if month > 12:
            year, month = year + 1, 1


def _generate_semi_monthly(start: date, end: date, config: PayPeriodConfig) -> list[PayPeriod]:
    periods: list[PayPeriod] = []
    for year, month in _iter_months(start, end):
        last_day = last_day_of_month(year, month)
        second_day = min(config.second_date, last_day)
        first_day = min(config.first_date, second_day - 1)
        month_abbr = f"{date(year, month, 1):%b}"

        first = PayPeriod(
            start=date(year, month, first_day),
            end=date(year, month, second_day - 1),
            label=f"{month_abbr} {first_day}-{second_day - 1}, {year}",
        )
        second = PayPeriod(
            start=date(year, month, second_day),
            end=date(year, month, last_day),
            label=f"{month_abbr} {second_day}-{last_day}, {year}",
        )
        periods.extend(p for p in (first, second) if p.end >= start and p.start <= end)
    return periods


def _monthly_start(year: int, month: int, day_of_month: int) -> date:
    return date(year, month, min(day_of_month, last_day_of_month(year, month)))


def _generate_monthly(start: date, end: date, config: PayPeriodConfig) -> list[PayPeriod]:
    # A period anchored mid-month can begin in the month before the window.
    previous_month = start.replace(day=1) - timedelta(days=1)

    periods: list[PayPeriod] = []
    for year, month in _iter_months(previous_month, end):
        period_start = _monthly_start(year, month, config.day_of_month)
        next_year, next_month = (year + 1, 1) if month == 12 else (year, month + 1)
        period_end = _monthly_start(next_year, next_month, config.day_of_month) - timedelta(days=1)
        if period_end >= start and period_start <= end:
            periods.append(
                PayPeriod(
                    start=period_start,
                    end=period_end,
                    label=f"{period_start:%B} {year}",
                )
            )
    return periods


_GENERATORS = {
    PayPeriodType.WEEKLY: _generate_weekly,
    PayPeriodType.BI_WEEKLY: _generate_bi_weekly,
    PayPeriodType.SEMI_MONTHLY: _generate_semi_monthly,
    PayPeriodType.MONTHLY: _generate_monthly,
}

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def calculate_pay_period_boundaries(
    range_start: date | datetime | str,
    range_end: date | datetime | str,
    settings: PayPeriodSettings,
) -> list[PayPeriod]:
    """Return every pay period overlapping ``[range_start, range_end]``, in order.

    Raises InvalidDateError for unparseable bounds or a missing bi-weekly
    reference date.
    """
    start = parse_calendar_date(range_start)
    end = parse_calendar_date(range_end)
    generator = _GENERATORS.get(settings.type)
    if generator is None:
        msg = f"Unsupported pay period type: {settings.type}"
        raise InvalidSettingsError(msg)
    return generator(start, end, settings.config)


def get_current_pay_period(
    settings: PayPeriodSettings | None,
    target_date: date | datetime | str,
) -> PayPeriod | None:
    """Return the period containing ``target_date``, or None.

    None means the schedule is missing or inactive, or the configuration
    leaves ``target_date`` uncovered.
    """
    if settings is None or not settings.is_active:
        return None

    target = parse_calendar_date(target_date)
    window = timedelta(days=RESOLVER_WINDOW_DAYS)
    periods = calculate_pay_period_boundaries(target - window, target + window, settings)
    return next((p for p in periods if p.contains(target)), None)


def get_pay_period_ending_on(
    settings: PayPeriodSettings | None,
    today: date,
) -> PayPeriod | None:
    """Return the current period only when it ends on ``today``.

    Accrual runs are triggered by a period closing, not by one merely being
    in progress.
    """
    period = get_current_pay_period(settings, today)
    if period is None or period.end != today:
        return None
    return period
