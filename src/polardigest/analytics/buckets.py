"""Clock-aligned bucketing of timestamped samples.

Buckets are anchored to wall-clock boundaries (00:00, 00:30, ...) rather
than to the first sample, so two days' buckets line up label for label.
Empty buckets are left out instead of being emitted with zeros.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from polardigest.config import HR_BUCKET_MIN, STEP_BUCKET_MIN
from polardigest.decoders.clock import clock_minutes, format_clock, parse_instant

logger = logging.getLogger(__name__)


@dataclass
class ClockBucket:
    """Aggregate of the samples falling in one fixed-width clock window."""

    window_label: str  # end of the window, e.g. "08:00" for 07:30-08:00
    avg: float
    min: float
    max: float
    sample_count: int


@dataclass
class StepBucket:
    hour_label: str  # start of the hour, e.g. "07:00"
    steps: int


class ActivityZone(str, Enum):
    """Activity intensity categories that accumulate time."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    VIGOROUS = "vigorous"


@dataclass
class ZoneMinutes:
    """Whole minutes spent in each activity zone."""

    sedentary_minutes: int = 0
    light_minutes: int = 0
    moderate_minutes: int = 0
    vigorous_minutes: int = 0

    @property
    def total_minutes(self) -> int:
        return (
            self.sedentary_minutes + self.light_minutes
            + self.moderate_minutes + self.vigorous_minutes
        )


# ---------------------------------------------------------------------------
# Heart rate: half-hour buckets
# ---------------------------------------------------------------------------


def bucket_index(clock: str, bucket_min: int = HR_BUCKET_MIN) -> int:
    """Index of the wall-clock window containing *clock*.

    With 30-minute windows this is ``hour * 2 + (minute >= 30)``.
    """
    return clock_minutes(clock) // bucket_min


def half_hour_buckets(
    samples: Iterable[tuple[str, float | None]],
    bucket_min: int = HR_BUCKET_MIN,
) -> list[ClockBucket]:
    """Aggregate ``(clock, value)`` samples into fixed clock windows.

    Args:
        samples: Clock label (or ISO timestamp) and reading pairs, any order.
        bucket_min: Window width in minutes.

    Returns:
        Non-empty buckets in ascending clock order, each labelled with the
        end of its window.
    """
    acc: dict[int, list[float]] = defaultdict(list)
    for clock, value in samples:
        if value is None:
            continue
        acc[bucket_index(clock, bucket_min)].append(float(value))

    buckets: list[ClockBucket] = []
    for idx in sorted(acc):
        vals = acc[idx]
        buckets.append(ClockBucket(
            window_label=format_clock((idx + 1) * bucket_min),
            avg=round(sum(vals) / len(vals), 1),
            min=min(vals),
            max=max(vals),
            sample_count=len(vals),
        ))
    return buckets


# ---------------------------------------------------------------------------
# Steps: hourly buckets across days
# ---------------------------------------------------------------------------


def hourly_step_buckets(
    days: Iterable[Sequence[tuple[str, float]]],
) -> list[StepBucket]:
    """Sum step counts per hour of day across every supplied day.

    Hours with no steps are omitted; the result is ordered by hour.
    """
    totals: dict[int, float] = defaultdict(float)
    for day in days:
        for stamp, steps in day:
            if not steps:
                continue
            totals[clock_minutes(stamp) // STEP_BUCKET_MIN] += steps

    return [
        StepBucket(hour_label=format_clock(hour * STEP_BUCKET_MIN), steps=int(round(total)))
        for hour, total in sorted(totals.items())
        if total > 0
    ]


# ---------------------------------------------------------------------------
# Activity zones: interval durations
# ---------------------------------------------------------------------------


def classify_zone(tag: str) -> ActivityZone | None:
    """Map an upstream zone tag onto an :class:`ActivityZone`.

    Qualified tags such as ``CONTINUOUS_MODERATE`` map by their last word.
    SLEEP, NON_WEAR and anything unknown return None.
    """
    word = tag.strip().upper().rsplit("_", 1)[-1]
    try:
        return ActivityZone(word.lower())
    except ValueError:
        return None


def zone_durations(events: Sequence[tuple[str, str]]) -> ZoneMinutes:
    """Minutes per activity zone from a chronological ``(timestamp, tag)`` list.

    The zone of each event runs until the next event's timestamp.  The
    last event opens no interval.  Unrecognized tags are skipped, and each
    category is rounded to whole minutes only once all intervals are summed.
    """
    seconds: dict[ActivityZone, float] = defaultdict(float)

    for (stamp, tag), (next_stamp, _) in zip(events, events[1:]):
        zone = classify_zone(tag)
        if zone is None:
            logger.debug("skipping zone %r at %s", tag, stamp)
            continue
        delta = (parse_instant(next_stamp) - parse_instant(stamp)).total_seconds()
        if delta <= 0:
            logger.debug("skipping non-increasing zone interval %s -> %s", stamp, next_stamp)
            continue
        seconds[zone] += delta

    return ZoneMinutes(
        sedentary_minutes=int(round(seconds[ActivityZone.SEDENTARY] / 60.0)),
        light_minutes=int(round(seconds[ActivityZone.LIGHT] / 60.0)),
        moderate_minutes=int(round(seconds[ActivityZone.MODERATE] / 60.0)),
        vigorous_minutes=int(round(seconds[ActivityZone.VIGOROUS] / 60.0)),
    )
