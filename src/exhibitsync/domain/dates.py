"""Calendar-date handling for exhibition start/end dates.

Incoming dates are ``yyyy-mm-dd`` strings meaning midnight in the exhibition
time zone. ``None`` is the only representation of an unknown date; empty strings
are read as ``None``.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time
from functools import cache
from zoneinfo import ZoneInfo

from exhibitsync.config.reconciliation import EXHIBITION_TIMEZONE
from exhibitsync.domain.errors import InvalidDateError

_CALENDAR_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


@cache
def exhibition_timezone() -> ZoneInfo:
    return ZoneInfo(EXHIBITION_TIMEZONE)


def to_tokyo_instant(value: str | None) -> datetime | None:
    """Return 00:00 Asia/Tokyo on the given calendar date, or ``None`` if absent."""

    if value is None:
        return None
    stripped = value.strip()
    if not stripped:
        return None
    if not _CALENDAR_DATE_RE.fullmatch(stripped):
        raise InvalidDateError(f"Invalid calendar date: {value!r}")
    try:
        day = date.fromisoformat(stripped)
    except ValueError as exc:
        raise InvalidDateError(f"Invalid calendar date: {value!r}") from exc
    return datetime.combine(day, time.min, tzinfo=exhibition_timezone())


def dates_equal(stored: datetime | None, incoming: str | None) -> bool:
    """Compare a stored instant with an incoming date string.

    Absent equals absent; absent never equals a known date; two known dates are
    compared as instants.
    """

    incoming_instant = to_tokyo_instant(incoming)
    if stored is None and incoming_instant is None:
        return True
    if stored is None or incoming_instant is None:
        return False
    return stored == incoming_instant
