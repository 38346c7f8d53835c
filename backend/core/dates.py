"""Calendar-day helpers for billing cycles.

Every value handled here is a UTC calendar day (``datetime.date``). Datetimes
are accepted at the edges and truncated with :func:`to_utc_midnight`; nothing
in this module reads the wall clock or the local timezone.

Month arguments are zero-based (January == 0).
"""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timezone
from typing import Optional, Union

from backend.domain.proration import InvalidDate

DateLike = Union[date, datetime]

_ISO_DAY = re.compile(r"^\s*(\d{1,4})(?:-(\d{1,2}))?(?:-(\d{1,2}))?\s*$")


def to_utc_midnight(value: DateLike) -> date:
    """Truncate ``value`` to its UTC calendar day.

    Aware datetimes are converted to UTC first, naive ones are taken as UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return date(value.year, value.month, value.day)
    if isinstance(value, date):
        return date(value.year, value.month, value.day)
    raise InvalidDate(f"expected a date, got {value!r}")


def utc_date(year: int, month0: int, day: int) -> date:
    return date(year, month0 + 1, day)


def days_between(a: DateLike, b: DateLike) -> int:
    """Signed whole days from ``a`` to ``b``."""
    return to_utc_midnight(b).toordinal() - to_utc_midnight(a).toordinal()


def parse_utc_date(value: Union[DateLike, str], field: str = "activationDate") -> date:
    """Build a UTC day from a date, datetime or ``"YYYY-MM-DD"`` string.

    Strings are split into their numeric parts; a missing month or day
    defaults to 1.
    """
    if isinstance(value, (date, datetime)):
        return to_utc_midnight(value)
    if not isinstance(value, str):
        raise InvalidDate(f"{field} must be a date or a YYYY-MM-DD string", field=field)

    match = _ISO_DAY.match(value)
    if match is None:
        raise InvalidDate(f"{field} must look like YYYY-MM-DD, got {value!r}", field=field)

    year, month, day = (int(part) if part else 1 for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidDate(f"{field} is not a calendar date: {value!r}", field=field) from exc


def last_day_of_month(year: int, month0: int) -> int:
    return calendar.monthrange(year, month0 + 1)[1]


def clamp_day(year: int, month0: int, day: int) -> int:
    return max(1, min(day, last_day_of_month(year, month0)))


def add_months_utc(base: DateLike, months: int, keep_day: Optional[int] = None) -> date:
    """Shift ``base`` by whole calendar months.

    The target month is resolved first and the day (``keep_day`` or the day of
    ``base``) is clamped to that month's length afterwards.
    """
    start = to_utc_midnight(base)
    target = start.month - 1 + months
    year = start.year + target // 12
    month0 = target % 12
    day = keep_day if keep_day is not None else start.day
    return utc_date(year, month0, clamp_day(year, month0, day))
