"""Daily activity: totals from the day record, hourly steps and zone minutes
from the optional per-day samples record.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from polardigest.decoders.records import pick
from polardigest.decoders.samples import parse_value
from polardigest.analytics.buckets import StepBucket, hourly_step_buckets, zone_durations
from polardigest.analytics.summary import ActivityDaySummary


def step_samples(samples: Mapping[str, Any]) -> list[tuple[str, float]]:
    """``(timestamp, steps)`` pairs from an activity samples record."""
    block = pick(samples, "steps") or {}
    if not isinstance(block, Mapping):
        return []
    return [
        (pick(s, "timestamp"), parse_value(pick(s, "steps")) or 0.0)
        for s in pick(block, "samples", []) or []
        if pick(s, "timestamp") is not None
    ]


def zone_events(samples: Mapping[str, Any]) -> list[tuple[str, str]]:
    """Chronological ``(timestamp, zone)`` events from an activity samples record."""
    block = pick(samples, "activity_zones") or {}
    if not isinstance(block, Mapping):
        return []
    return [
        (pick(z, "timestamp"), str(pick(z, "zone", "")))
        for z in pick(block, "samples", []) or []
        if pick(z, "timestamp") is not None
    ]


def activity_date(day: Mapping[str, Any]) -> str | None:
    """ISO date of a daily activity record (from "date" or "start_time")."""
    start = pick(day, "start_time")
    return pick(day, "date") or (start.split("T")[0] if start else None)


def summarize_activity_day(
    day: Mapping[str, Any],
    samples: Mapping[str, Any] | None = None,
) -> ActivityDaySummary:
    """Summarize one activity day.

    Args:
        day: Upstream daily activity dict.
        samples: Optional upstream activity samples dict for the same date.
    """
    summary = ActivityDaySummary(
        date=activity_date(day),
        calories=pick(day, "calories"),
        active_calories=pick(day, "active_calories"),
        steps=pick(day, "steps"),
        active_duration=pick(day, "active_duration"),
        inactive_duration=pick(day, "inactive_duration"),
        daily_activity=pick(day, "daily_activity"),
        distance_from_steps=pick(day, "distance_from_steps"),
        inactivity_alert_count=pick(day, "inactivity_alert_count"),
    )

    if samples:
        steps = step_samples(samples)
        if steps:
            summary.hourly_steps = hourly_step_buckets([steps]) or None
        events = zone_events(samples)
        if len(events) >= 2:
            summary.zones = zone_durations(events)
        stamps = pick(pick(samples, "inactivity_stamps"), "samples")
        if stamps is not None:
            summary.inactivity_stamps = len(stamps)

    return summary



def hourly_step_profile(days: Iterable[ActivityDaySummary]) -> list[StepBucket] | None:
    """Hour-of-day step totals summed over several summarized days.

    Returns None unless at least two days carry hourly steps; a single
    day's profile is already on that day's summary.
    """
    per_day = [
        [(b.hour_label, b.steps) for b in day.hourly_steps]
        for day in days
        if day.hourly_steps
    ]
    if len(per_day) < 2:
        return None
    return hourly_step_buckets(per_day) or None
