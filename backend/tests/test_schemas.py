"""Unit tests for decoding stored organization settings."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from pto_accrual.exceptions import InvalidSettingsError
from pto_accrual.models.enums import PayPeriodType
from pto_accrual.schemas.accrual import PTOAccrualNotice
from pto_accrual.schemas.pay_period import PayPeriodConfig, PayPeriodSettings
from pto_accrual.schemas.pto import PTOSettings
from pto_accrual.services.organization import decode_pay_period_settings, decode_pto_settings, pto_enabled

# ---------------------------------------------------------------------------
# PTOSettings
# ---------------------------------------------------------------------------


def test_pto_settings_defaults() -> None:
    s = PTOSettings()
    assert s.enabled is False
    assert s.accrual_rate == 1
    assert s.accrual_period == 40
    assert s.max_accrual == 240


def test_pto_settings_camel_case() -> None:
    s = PTOSettings.model_validate({"enabled": True, "accrualRate": 1.5, "accrualPeriod": 30, "maxAccrual": 120})
    assert s.accrual_rate == 1.5
    assert s.accrual_period == 30
    assert s.max_accrual == 120


def test_pto_settings_snake_case() -> None:
    s = PTOSettings.model_validate({"enabled": True, "accrual_rate": 2})
    assert s.accrual_rate == 2


def test_pto_settings_nulls_take_defaults() -> None:
    s = PTOSettings.model_validate({"enabled": True, "accrualRate": None, "accrualPeriod": None, "maxAccrual": None})
    assert (s.accrual_rate, s.accrual_period, s.max_accrual) == (1, 40, 240)


@pytest.mark.parametrize("payload", [{"accrualPeriod": 0}, {"accrualRate": -1}, {"maxAccrual": -5}])
def test_pto_settings_rejects_bad_numbers(payload: dict[str, float]) -> None:
    with pytest.raises(ValidationError):
        PTOSettings.model_validate(payload)


def test_decode_missing_pto_settings_is_disabled() -> None:
    assert decode_pto_settings("org", None).enabled is False


def test_decode_bad_pto_settings_raises() -> None:
    with pytest.raises(InvalidSettingsError, match="org-x"):
        decode_pto_settings("org-x", {"accrualPeriod": -40})


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ({"enabled": True, "accrualPeriod": 0}, True),
        ({"enabled": False, "accrualPeriod": 0}, False),
        ({"enabled": "true"}, False),
        ({}, False),
        (None, False),
    ],
)
def test_pto_enabled_reads_only_the_flag(raw: dict[str, object] | None, expected: bool) -> None:
    assert pto_enabled(raw) is expected


# ---------------------------------------------------------------------------
# PayPeriodSettings
# ---------------------------------------------------------------------------


def test_pay_period_settings_bi_weekly() -> None:
    s = PayPeriodSettings.model_validate(
        {"isActive": True, "type": "bi-weekly", "config": {"startDate": "2025-01-05T00:00:00Z"}}
    )
    assert s.is_active is True
    assert s.type == PayPeriodType.BI_WEEKLY
    assert s.config.start_date == date(2025, 1, 5)


def test_pay_period_config_defaults() -> None:
    c = PayPeriodConfig()
    assert (c.day_of_week, c.first_date, c.second_date, c.day_of_month) == (1, 1, 15, 1)
    assert c.start_date is None


def test_pay_period_config_null_config() -> None:
    s = PayPeriodSettings.model_validate({"isActive": True, "type": "monthly", "config": None})
    assert s.config.day_of_month == 1


def test_pay_period_config_empty_start_date() -> None:
    assert PayPeriodConfig.model_validate({"startDate": ""}).start_date is None


@pytest.mark.parametrize(
    "config",
    [{"dayOfWeek": 7}, {"firstDate": 15, "secondDate": 15}, {"dayOfMonth": 0}, {"startDate": "2025-02-30"}],
)
def test_pay_period_config_rejects(config: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        PayPeriodConfig.model_validate(config)


def test_pay_period_settings_unknown_type() -> None:
    with pytest.raises(ValidationError):
        PayPeriodSettings.model_validate({"isActive": True, "type": "quarterly"})


def test_decode_missing_schedule_is_none() -> None:
    assert decode_pay_period_settings("org", None) is None
    assert decode_pay_period_settings("org", {}) is None


def test_decode_bad_schedule_raises() -> None:
    with pytest.raises(InvalidSettingsError):
        decode_pay_period_settings("org", {"isActive": True})


# ---------------------------------------------------------------------------
# Notices
# ---------------------------------------------------------------------------


def test_notice_text_singular() -> None:
    notice = PTOAccrualNotice(
        organization_id="org",
        user_id="u1",
        hours_added=1,
        total_balance=12.5,
        period_label="Week of Jan 6, 2025",
    )
    assert notice.title == "PTO Accrued"
    assert notice.body == "You earned 1 PTO hour for Week of Jan 6, 2025. New balance: 12.5 hours."
