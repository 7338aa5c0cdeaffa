"""Calendar-date helpers shared by the recurrence and due-status code.

Stored dates arrive as strings in one of three shapes:

- ``YYYY-MM-DD`` (what billwise writes),
- a full ISO-8601 datetime (``2024-06-12T00:00:00.000Z``), whose UTC date is used,
- ``DD/MM/YYYY`` (what the web forms used to submit).

``parse_date`` turns any of them into a ``date`` or raises the caller-chosen
``InvalidDate`` subclass, so each call site reports the field that was bad.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone

from dateutil.relativedelta import relativedelta

from billwise.constants import DISPLAY_DATE_FORMAT, ISO_DATE_FORMAT
from billwise.errors import InvalidDate

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DISPLAY_DATE_RE = re.compile(r"^\d{2}/\d{2}/\d{4}$")


def parse_date(value: str | date | None, error: type[InvalidDate] = InvalidDate) -> date:
    if isinstance(value, datetime):
        return _datetime_to_date(value)
    if isinstance(value, date):
        return value
    if value is None or not str(value).strip():
        raise error(value, "empty")

    text = str(value).strip()
    try:
        if _ISO_DATE_RE.match(text):
            return datetime.strptime(text, ISO_DATE_FORMAT).date()
        if _DISPLAY_DATE_RE.match(text):
            return datetime.strptime(text, DISPLAY_DATE_FORMAT).date()
        return _datetime_to_date(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError as exc:
        raise error(value, str(exc)) from exc


def _datetime_to_date(value: datetime) -> date:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).date()
    return value.date()


def format_date(value: date) -> str:
    return value.strftime(ISO_DATE_FORMAT)


def format_display(value: date) -> str:
    return value.strftime(DISPLAY_DATE_FORMAT)


def calendar_day_difference(later: date, earlier: date) -> int:
    """Signed whole days from ``earlier`` to ``later``, ignoring time of day."""
    return (later - earlier).days


def add_days(value: date, days: int) -> date:
    """Shift by whole days, stopping at ``date.max`` instead of overflowing."""
    if days >= (date.max - value).days:
        return date.max
    return value + timedelta(days=days)


def add_months(value: date, months: int) -> date:
    """Shift by calendar months, clamping to month end (Jan 31 + 1 -> Feb 28/29)."""
    return value + relativedelta(months=months)


def add_years(value: date, years: int) -> date:
    """Shift by calendar years, clamping Feb 29 to Feb 28 in non-leap years."""
    return value + relativedelta(years=years)


def months_between(earlier: date, later: date) -> int:
    """Whole calendar months from ``earlier`` to ``later`` counted by month index."""
    return (later.year - earlier.year) * 12 + (later.month - earlier.month)
