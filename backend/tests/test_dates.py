from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from backend.core.dates import (
    add_months_utc,
    clamp_day,
    days_between,
    last_day_of_month,
    parse_utc_date,
    to_utc_midnight,
)
from backend.domain.proration import InvalidDate


def test_to_utc_midnight_drops_time_and_converts_offsets():
    west = datetime(2025, 3, 1, 23, 30, tzinfo=timezone(timedelta(hours=-2)))
    east = datetime(2025, 3, 1, 1, 0, tzinfo=timezone(timedelta(hours=3)))

    assert to_utc_midnight(west) == date(2025, 3, 2)
    assert to_utc_midnight(east) == date(2025, 2, 28)
    assert to_utc_midnight(datetime(2025, 3, 1, 12, 45, 10)) == date(2025, 3, 1)


def test_to_utc_midnight_is_idempotent():
    value = datetime(2024, 2, 29, 18, 5, tzinfo=timezone.utc)
    once = to_utc_midnight(value)
    assert to_utc_midnight(once) == once
    assert type(once) is date


def test_days_between_is_signed_whole_days():
    assert days_between(date(2025, 1, 15), date(2025, 2, 15)) == 31
    assert days_between(date(2025, 2, 15), date(2025, 1, 15)) == -31
    assert days_between(datetime(2025, 1, 15, 23, 59), datetime(2025, 1, 16, 0, 1)) == 1
    assert days_between(date(2024, 2, 28), date(2024, 3, 1)) == 2


def test_parse_utc_date_reads_components_directly():
    assert parse_utc_date("2025-10-14") == date(2025, 10, 14)
    assert parse_utc_date(" 2025-3-5 ") == date(2025, 3, 5)
    assert parse_utc_date("2025") == date(2025, 1, 1)
    assert parse_utc_date("2025-03") == date(2025, 3, 1)
    assert parse_utc_date(datetime(2025, 10, 14, 23, 0)) == date(2025, 10, 14)


@pytest.mark.parametrize("raw", ["2025-02-30", "14/10/2025", "", "2025-10-14T10:00", 20251014])
def test_parse_utc_date_rejects_malformed_values(raw):
    with pytest.raises(InvalidDate) as exc_info:
        parse_utc_date(raw)
    assert exc_info.value.field == "activationDate"


def test_last_day_of_month_follows_gregorian_leap_rule():
    assert last_day_of_month(2024, 1) == 29
    assert last_day_of_month(2025, 1) == 28
    assert last_day_of_month(1900, 1) == 28
    assert last_day_of_month(2000, 1) == 29
    assert last_day_of_month(2025, 3) == 30
    assert last_day_of_month(2025, 11) == 31


def test_clamp_day_stays_inside_the_month():
    assert clamp_day(2025, 1, 31) == 28
    assert clamp_day(2024, 1, 31) == 29
    assert clamp_day(2025, 0, 0) == 1
    assert clamp_day(2025, 0, 15) == 15


def test_add_months_clamps_against_the_target_month():
    assert add_months_utc(date(2025, 1, 31), 1) == date(2025, 2, 28)
    assert add_months_utc(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months_utc(date(2025, 1, 15), -1) == date(2024, 12, 15)
    assert add_months_utc(date(2025, 11, 30), 14) == date(2027, 1, 30)
    assert add_months_utc(date(2025, 3, 31), -13) == date(2024, 2, 29)


def test_add_months_keep_day_restores_the_anchor():
    assert add_months_utc(date(2025, 2, 28), 1) == date(2025, 3, 28)
    assert add_months_utc(date(2025, 2, 28), 1, keep_day=31) == date(2025, 3, 31)
    assert add_months_utc(date(2025, 3, 31), -1, keep_day=31) == date(2025, 2, 28)
