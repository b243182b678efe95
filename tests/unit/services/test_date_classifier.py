from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from dealdesk.core.exceptions import ValidationError
from dealdesk.services.date_classifier import (
    AmountRange,
    amount_bucket,
    days_until,
    filter_by_amount_range,
    is_overdue,
    is_within_next_days,
    is_within_past_days,
    is_within_week,
    shift_months,
    start_of_week,
    time_range_start,
    to_amount,
    to_date,
)

TODAY = date(2026, 10, 19)


def test_overdue_is_strictly_before_today():
    assert is_overdue(date(2026, 10, 18), TODAY) is True
    assert is_overdue(date(2026, 10, 19), TODAY) is False
    assert is_overdue(date(2026, 10, 20), TODAY) is False
    assert is_overdue(None, TODAY) is False


def test_time_of_day_does_not_affect_classification():
    assert is_overdue(datetime(2026, 10, 19, 23, 59), TODAY) is False
    assert is_overdue("2026-10-18T23:59:59Z", TODAY) is True


def test_to_date_parses_iso_and_rejects_garbage():
    assert to_date("2026-02-03") == date(2026, 2, 3)
    assert to_date("") is None
    with pytest.raises(ValidationError):
        to_date("not-a-date")
    with pytest.raises(ValidationError):
        to_date(20261019)


def test_week_starts_on_monday():
    assert start_of_week(TODAY) == date(2026, 10, 19)
    assert start_of_week(date(2026, 10, 25)) == date(2026, 10, 19)
    assert is_within_week(date(2026, 10, 25), TODAY) is True
    assert is_within_week(date(2026, 10, 26), TODAY) is False


def test_relative_windows_include_both_ends():
    assert is_within_next_days(date(2026, 10, 26), 7, TODAY) is True
    assert is_within_next_days(date(2026, 10, 27), 7, TODAY) is False
    assert is_within_past_days(date(2026, 10, 12), 7, TODAY) is True
    assert is_within_past_days(date(2026, 10, 11), 7, TODAY) is False
    assert days_until(date(2026, 10, 16), TODAY) == -3
    assert days_until(None, TODAY) is None


def test_shift_months_clamps_to_month_end():
    assert shift_months(date(2026, 3, 31), -1) == date(2026, 2, 28)
    assert shift_months(date(2026, 10, 19), -12) == date(2025, 10, 19)
    assert shift_months(date(2026, 11, 30), 2) == date(2027, 1, 30)


def test_time_range_start():
    assert time_range_start("7days", TODAY) == date(2026, 10, 12)
    assert time_range_start("3months", TODAY) == date(2026, 7, 19)


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        (0, AmountRange.UNDER_500),
        (499.99, AmountRange.UNDER_500),
        (500, AmountRange.FROM_500_TO_1000),
        (1000, AmountRange.FROM_500_TO_1000),
        (1000.01, AmountRange.FROM_1000_TO_5000),
        (5000, AmountRange.FROM_1000_TO_5000),
        (5000.01, AmountRange.OVER_5000),
    ],
)
def test_amount_bucket_edges(amount, expected):
    assert amount_bucket(amount) is expected


def test_every_amount_lands_in_exactly_one_bucket():
    tags = [tag for tag in AmountRange if tag is not AmountRange.ALL]
    for amount in (Decimal("0"), Decimal("500"), Decimal("1000"), Decimal("5000"), Decimal("123456")):
        assert sum(filter_by_amount_range(amount, tag) for tag in tags) == 1
        assert filter_by_amount_range(amount, "all") is True


def test_amount_parsing_errors():
    assert to_amount("12.5") == Decimal("12.5")
    for bad in ("abc", None, True, "inf"):
        with pytest.raises(ValidationError):
            to_amount(bad)
    with pytest.raises(ValidationError):
        filter_by_amount_range(100, "huge")
