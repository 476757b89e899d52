"""Clock-of-day labels, timestamps and ISO-8601 durations.

Upstream series key their samples by wall-clock labels ("23:45",
"07:15:30") or by local ISO timestamps ("2026-02-03T07:15:00.000").
"""

from __future__ import annotations

import re
from datetime import date, datetime, time

from polardigest.errors import ClockFormatError

MINUTES_PER_DAY = 24 * 60

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2})(?:\.\d+)?)?$")
_DURATION_RE = re.compile(
    r"^PT(?:(\d+(?:\.\d+)?)H)?(?:(\d+(?:\.\d+)?)M)?(?:(\d+(?:\.\d+)?)S)?$"
)


def parse_clock(label: str) -> tuple[int, int]:
    """Return ``(hour, minute)`` for a clock label or an ISO timestamp.

    For timestamps only the time-of-day part is used.
    """
    text = label.strip()
    if "T" in text:
        text = text.split("T", 1)[1]
        # Drop a trailing UTC designator or offset
        text = re.split(r"[Z+-]", text, maxsplit=1)[0]
    m = _CLOCK_RE.match(text)
    if m is None:
        raise ClockFormatError(f"unrecognized clock label: {label!r}")
    hour, minute = int(m.group(1)), int(m.group(2))
    if hour > 23 or minute > 59:
        raise ClockFormatError(f"clock label out of range: {label!r}")
    return hour, minute


def clock_minutes(label: str) -> int:
    """Minutes since midnight for a clock label."""
    hour, minute = parse_clock(label)
    return hour * 60 + minute


def format_clock(minutes: int) -> str:
    """Format minutes since midnight as "HH:MM" (1440 renders as "24:00")."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_instant(stamp: str) -> datetime:
    """Parse an ISO timestamp, or a bare clock label anchored to 1970-01-01.

    Timezone designators are kept; comparing naive with aware instants is
    the caller's problem, the upstream never mixes them within a series.
    """
    text = stamp.strip()
    if "T" not in text and _CLOCK_RE.match(text):
        hour, minute = parse_clock(text)
        seconds = int(text.split(":")[2][:2]) if text.count(":") == 2 else 0
        return datetime.combine(date(1970, 1, 1), time(hour, minute, seconds))
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ClockFormatError(f"unrecognized timestamp: {stamp!r}") from exc


def parse_iso_duration(text: str | None) -> float | None:
    """Convert an ISO-8601 time duration ("PT1H2M3.5S") to seconds.

    Returns None when *text* is missing or not a time duration.
    """
    if not text:
        return None
    m = _DURATION_RE.match(text.strip())
    if m is None or not any(m.groups()):
        return None
    hours, minutes, seconds = (float(g) if g else 0.0 for g in m.groups())
    return hours * 3600.0 + minutes * 60.0 + seconds
