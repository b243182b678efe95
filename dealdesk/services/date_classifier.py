"""Calendar-day classification of deal dates and amounts.

Every predicate takes ``today`` explicitly; nothing here reads the clock.
Dates are compared as plain calendar days, so time of day and time zone never
influence the result.
"""

from __future__ import annotations

import enum
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation

from dealdesk.core.exceptions import ValidationError

DateLike = date | datetime | str | None


class AmountRange(str, enum.Enum):
    ALL = "all"
    UNDER_500 = "<500"
    FROM_500_TO_1000 = "500-1000"
    FROM_1000_TO_5000 = "1000-5000"
    OVER_5000 = ">5000"


class TimeRange(str, enum.Enum):
    LAST_7_DAYS = "7days"
    LAST_30_DAYS = "30days"
    LAST_3_MONTHS = "3months"
    LAST_6_MONTHS = "6months"
    LAST_YEAR = "1year"


_TIME_RANGE_DAYS = {TimeRange.LAST_7_DAYS: 7, TimeRange.LAST_30_DAYS: 30}
_TIME_RANGE_MONTHS = {TimeRange.LAST_3_MONTHS: 3, TimeRange.LAST_6_MONTHS: 6, TimeRange.LAST_YEAR: 12}


def to_date(value: DateLike) -> date | None:
    """Normalize a nullable date, datetime or ISO string to a calendar date."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        try:
            if len(raw) == 10:
                return date.fromisoformat(raw)
            return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
        except ValueError as exc:
            raise ValidationError(f"Invalid calendar date: {value!r}") from exc
    raise ValidationError(f"Unsupported date value: {value!r}")


def is_overdue(value: DateLike, today: date) -> bool:
    """True iff the date is set and falls strictly before today."""
    day = to_date(value)
    return day is not None and day < today


def start_of_week(today: date) -> date:
    """Monday of the week containing ``today``."""
    return today - timedelta(days=today.weekday())


def is_within_week(value: DateLike, today: date) -> bool:
    day = to_date(value)
    if day is None:
        return False
    monday = start_of_week(today)
    return monday <= day <= monday + timedelta(days=6)


def is_within_next_days(value: DateLike, days: int, today: date) -> bool:
    day = to_date(value)
    if day is None:
        return False
    return today <= day <= today + timedelta(days=days)


def is_within_past_days(value: DateLike, days: int, today: date) -> bool:
    day = to_date(value)
    if day is None:
        return False
    return today - timedelta(days=days) <= day <= today


def days_until(value: DateLike, today: date) -> int | None:
    """Signed number of days from today to the date (negative when past)."""
    day = to_date(value)
    if day is None:
        return None
    return (day - today).days


def shift_months(day: date, months: int) -> date:
    """Move ``day`` by whole months, clamping to the last day of the target month."""
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    next_month_first = date(year + (month == 12), month % 12 + 1, 1)
    last_day = (next_month_first - timedelta(days=1)).day
    return date(year, month, min(day.day, last_day))


def time_range_start(time_range: TimeRange | str, today: date) -> date:
    """First calendar day included by a relative time range filter."""
    resolved = TimeRange(time_range)
    if resolved in _TIME_RANGE_DAYS:
        return today - timedelta(days=_TIME_RANGE_DAYS[resolved])
    return shift_months(today, -_TIME_RANGE_MONTHS[resolved])


def to_amount(value: object) -> Decimal:
    """Parse a numeric amount into a Decimal."""
    if isinstance(value, bool) or value is None:
        raise ValidationError("Amount must be a number.")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Amount must be a number, got {value!r}.") from exc
    if not amount.is_finite():
        raise ValidationError("Amount must be a finite number.")
    return amount


def amount_bucket(amount: Decimal | int | float) -> AmountRange:
    """Bucket a non-negative amount.

    Edges: ``x < 500``, ``500 <= x <= 1000``, ``1000 < x <= 5000``, ``x > 5000``.
    """
    value = to_amount(amount)
    if value < 500:
        return AmountRange.UNDER_500
    if value <= 1000:
        return AmountRange.FROM_500_TO_1000
    if value <= 5000:
        return AmountRange.FROM_1000_TO_5000
    return AmountRange.OVER_5000


def filter_by_amount_range(amount: Decimal | int | float, range_tag: AmountRange | str) -> bool:
    try:
        resolved = AmountRange(range_tag)
    except ValueError as exc:
        raise ValidationError(f"Unknown amount range: {range_tag!r}") from exc
    if resolved is AmountRange.ALL:
        return True
    return amount_bucket(amount) is resolved
