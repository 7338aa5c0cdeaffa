from __future__ import annotations

import logging
import re
from collections.abc import Callable
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from billwise.constants import UTC_OFFSET_TO_IANA, UTC_ZONE_NAME
from billwise.errors import InvalidTimezone
from billwise.settings import settings

logger = logging.getLogger(__name__)

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
_BARE_OFFSET_RE = re.compile(r"^[+-]\d{2}:\d{2}$")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_timezone_id(timezone_id: str) -> str:
    """Map legacy offset spellings ('UTC+05:30', '+05:30') to an IANA zone name."""
    name = timezone_id.strip()
    if "/" in name or name == UTC_ZONE_NAME:
        return name
    if _BARE_OFFSET_RE.match(name):
        name = f"UTC{name}"
    return UTC_OFFSET_TO_IANA.get(name, name)


def get_zone(timezone_id: str | None) -> ZoneInfo:
    """Return the ZoneInfo for ``timezone_id`` or raise InvalidTimezone."""
    if not timezone_id or not timezone_id.strip():
        raise InvalidTimezone(timezone_id or "")
    name = normalize_timezone_id(timezone_id)
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidTimezone(timezone_id) from exc


def is_valid_timezone(timezone_id: str | None) -> bool:
    try:
        get_zone(timezone_id)
    except InvalidTimezone:
        return False
    return True


def resolve_timezone(profile_tz: str | None = None, browser_tz: str | None = None) -> str:
    """Pick the owner's zone: profile, then browser, then the configured default, then UTC."""
    for candidate in (profile_tz, browser_tz, settings.default_timezone):
        if candidate and is_valid_timezone(candidate):
            return normalize_timezone_id(candidate)
        if candidate:
            logger.warning("Ignoring invalid timezone %r", candidate)
    return UTC_ZONE_NAME


def parse_hhmm(hhmm: str) -> tuple[int, int]:
    match = _HHMM_RE.match(hhmm.strip()) if hhmm else None
    if match is None:
        raise ValueError(f"Invalid time {hhmm!r}, expected HH:MM")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"Invalid time {hhmm!r}, expected HH:MM")
    return hour, minute


class TimezoneClock:
    """Current date and time as seen from a given IANA zone.

    The clock never reads process-wide state on its own: it is built from a
    now-function (``TimezoneClock()`` uses the real UTC clock) or pinned to one
    instant with ``TimezoneClock.at(instant)``. Each method reads the time
    source once, so a single call is consistent even across a minute boundary.

    Unknown zones fall back to UTC with a warning; use ``zone()`` directly to
    get the ``InvalidTimezone`` error instead.
    """

    def __init__(self, now: Callable[[], datetime] | None = None) -> None:
        self._now = now or _utcnow

    @classmethod
    def at(cls, instant: datetime) -> TimezoneClock:
        if instant.tzinfo is None:
            raise ValueError("TimezoneClock.at() needs a timezone-aware datetime")
        return cls(lambda: instant)

    def zone(self, timezone_id: str) -> ZoneInfo:
        return get_zone(timezone_id)

    def _zone_or_utc(self, timezone_id: str) -> ZoneInfo:
        try:
            return get_zone(timezone_id)
        except InvalidTimezone:
            logger.warning("Invalid timezone %r, falling back to UTC", timezone_id)
            return ZoneInfo(UTC_ZONE_NAME)

    def now(self, timezone_id: str) -> datetime:
        return self._now().astimezone(self._zone_or_utc(timezone_id))

    def today(self, timezone_id: str) -> date:
        return self.now(timezone_id).date()

    def has_time_passed(self, hhmm: str, timezone_id: str) -> bool:
        """True once the zone-local wall clock reaches HH:MM today (minute precision)."""
        hour, minute = parse_hhmm(hhmm)
        local = self.now(timezone_id)
        return (local.hour, local.minute) >= (hour, minute)
