"""Parsing and normalization helpers."""

from __future__ import annotations

import calendar
import re
from datetime import UTC, datetime, timedelta

_LEADING_INT_RE = re.compile(r"^([+-]?)([0-9]+)")

# Counters saturate at the signed 64-bit maximum.
MAX_COUNTER = 2**63 - 1
_MAX_COUNTER_DIGITS = len(str(MAX_COUNTER))

# The plugins API reports dates such as "2025-07-15 9:33am GMT".
_API_DATE_FORMATS = (
    "%Y-%m-%d %I:%M%p %Z",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
)


def parse_leading_int(value: str | None) -> int | None:
    """Parse the leading base-10 integer of *value*.

    Returns None when no ASCII digits lead the stripped text. Negative values
    are not meaningful counters and are clamped to 0; oversized values
    saturate at MAX_COUNTER.
    """

    if value is None:
        return None
    match = _LEADING_INT_RE.match(value.strip())
    if not match:
        return None
    sign, digits = match.groups()
    if sign == "-":
        return 0
    digits = digits.lstrip("0") or "0"
    if len(digits) > _MAX_COUNTER_DIGITS:
        return MAX_COUNTER
    return min(int(digits), MAX_COUNTER)


def parse_api_date(raw: str | None) -> datetime | None:
    """Parse a plugins API date string into an aware UTC datetime."""

    if raw is None:
        return None
    cleaned = raw.strip()
    if not cleaned:
        return None
    for fmt in _API_DATE_FORMATS:
        try:
            parsed = datetime.strptime(cleaned, fmt)
        except ValueError:
            continue
        return parsed.replace(tzinfo=UTC)
    return None


def _add_months(moment: datetime, months: int) -> datetime:
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def _calendar_delta(start: datetime, end: datetime) -> tuple[int, int, int, int]:
    """Split the span between two datetimes into (years, months, days, hours)."""

    if end < start:
        start, end = end, start
    months = (end.year - start.year) * 12 + end.month - start.month
    if _add_months(start, months) > end:
        months -= 1
    remainder: timedelta = end - _add_months(start, months)
    years, months = divmod(months, 12)
    return years, months, remainder.days, remainder.seconds // 3600


def _plural(count: int, unit: str) -> str:
    return f"1 {unit} ago" if count == 1 else f"{count} {unit}s ago"


def format_relative_date(raw: str | None, *, now: datetime | None = None) -> str:
    """Format an API date string as a phrase such as "3 weeks ago"."""

    moment = parse_api_date(raw)
    if moment is None:
        return "N/A"
    now = now or datetime.now(UTC)
    years, months, days, hours = _calendar_delta(moment, now)

    if years > 0:
        return _plural(years, "year")
    if months > 0:
        return _plural(months, "month")
    if days >= 7:
        return _plural(days // 7, "week")
    if days > 0:
        return _plural(days, "day")
    if hours > 0:
        return _plural(hours, "hour")
    return "just now"
