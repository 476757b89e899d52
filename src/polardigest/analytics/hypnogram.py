"""Sleep architecture from a hypnogram.

The upstream hypnogram maps clock labels to stage codes at each stage
change.  A stage holds from its label until the next label, so the last
point only closes the segment before it.

Derived metrics:
  - minutes from session start to the first deep-sleep segment
  - REM entries (transitions into REM), the fallback cycle count
  - average cycle length, preferring the device-reported cycle count
  - share of deep sleep before the session midpoint
  - share of REM after the session midpoint
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Mapping

from polardigest.config import ROLLOVER_HOUR
from polardigest.decoders.clock import parse_clock
from polardigest.analytics.timeline import build_timeline, normalize_minutes


class SleepStageCode(IntEnum):
    """Upstream hypnogram stage codes."""

    WAKE = 0
    REM = 1
    LIGHTER_NREM = 2  # N1
    LIGHT_NREM = 3  # N2
    DEEP_NREM = 4  # N3
    UNKNOWN = 5


LIGHT_STAGES = {SleepStageCode.LIGHTER_NREM, SleepStageCode.LIGHT_NREM}


@dataclass(frozen=True)
class StageSegment:
    stage_code: int
    start_offset_minutes: int  # relative to session start
    duration_minutes: int

    @property
    def end_offset_minutes(self) -> int:
        return self.start_offset_minutes + self.duration_minutes


@dataclass
class HypnogramSummary:
    """Stage totals and architecture metrics for one night."""

    light_min: int
    deep_min: int
    rem_min: int
    wake_min: int
    minutes_to_first_deep: int
    rem_entries: int
    cycle_count: int
    avg_cycle_min: float
    deep_before_midpoint_pct: float
    rem_after_midpoint_pct: float
    segment_count: int

    def __repr__(self) -> str:
        return (
            f"HypnogramSummary(light={self.light_min}m, deep={self.deep_min}m, "
            f"rem={self.rem_min}m, cycles={self.cycle_count})"
        )


def segment_hypnogram(
    hypnogram: Mapping[str, int],
    start_hour: int,
    origin_minutes: int | None = None,
    rollover_hour: int = ROLLOVER_HOUR,
) -> list[StageSegment]:
    """Turn a clock-keyed hypnogram into contiguous stage segments.

    Args:
        hypnogram: Clock label -> stage code.
        start_hour: Hour the session started (drives midnight rollover).
        origin_minutes: Normalized minute that offset 0 refers to.
            Defaults to the first hypnogram point.
        rollover_hour: See :func:`normalize_minutes`.
    """
    timeline = build_timeline(list(hypnogram), start_hour, rollover_hour)
    if len(timeline) < 2:
        return []
    origin = timeline[0].normalized_minutes if origin_minutes is None else origin_minutes

    return [
        StageSegment(
            stage_code=int(hypnogram[cur.clock_time]),
            start_offset_minutes=cur.normalized_minutes - origin,
            duration_minutes=nxt.normalized_minutes - cur.normalized_minutes,
        )
        for cur, nxt in zip(timeline, timeline[1:])
    ]


def _stage_total(segments: list[StageSegment], codes: set[int]) -> int:
    return sum(s.duration_minutes for s in segments if s.stage_code in codes)


def count_rem_entries(segments: list[StageSegment]) -> int:
    """Transitions into REM from another stage.

    Only an approximation of the number of sleep cycles; a REM segment at
    the very start of the record has no preceding stage and is not counted.
    """
    return sum(
        1
        for prev, cur in zip(segments, segments[1:])
        if cur.stage_code == SleepStageCode.REM and prev.stage_code != SleepStageCode.REM
    )


def _share_before(segments: list[StageSegment], code: int, midpoint: float) -> float:
    total = _stage_total(segments, {code})
    if total == 0:
        return 0.0
    before = sum(
        max(0.0, min(s.end_offset_minutes, midpoint) - s.start_offset_minutes)
        for s in segments if s.stage_code == code
    )
    return round(before / total * 100.0, 1)


def _share_after(segments: list[StageSegment], code: int, midpoint: float) -> float:
    total = _stage_total(segments, {code})
    if total == 0:
        return 0.0
    after = sum(
        max(0.0, s.end_offset_minutes - max(s.start_offset_minutes, midpoint))
        for s in segments if s.stage_code == code
    )
    return round(after / total * 100.0, 1)


def analyze_hypnogram(
    hypnogram: Mapping[str, int],
    session_start: str,
    session_end: str | None = None,
    device_cycles: int | None = None,
    rollover_hour: int = ROLLOVER_HOUR,
) -> HypnogramSummary | None:
    """Compute sleep architecture metrics for one night.

    Args:
        hypnogram: Clock label -> stage code.
        session_start: Sleep start (ISO timestamp or clock label); offsets
            are measured from here and its hour drives midnight rollover.
        session_end: Sleep end.  The midpoint lies halfway between start and
            end; without an end the last hypnogram point is used.
        device_cycles: Cycle count reported by the device, preferred over
            the REM-entry heuristic when positive.
        rollover_hour: See :func:`normalize_minutes`.

    Returns:
        HypnogramSummary, or None if the hypnogram has fewer than 2 points.
    """
    start_hour, _ = parse_clock(session_start)
    origin = normalize_minutes(session_start, start_hour, rollover_hour)
    segments = segment_hypnogram(hypnogram, start_hour, origin, rollover_hour)
    if not segments:
        return None

    if session_end is not None:
        end_offset = normalize_minutes(session_end, start_hour, rollover_hour) - origin
    else:
        end_offset = segments[-1].end_offset_minutes
    midpoint = end_offset / 2.0

    light = _stage_total(segments, LIGHT_STAGES)
    deep = _stage_total(segments, {SleepStageCode.DEEP_NREM})
    rem = _stage_total(segments, {SleepStageCode.REM})

    first_deep = next(
        (s for s in segments if s.stage_code == SleepStageCode.DEEP_NREM), None
    )
    to_first_deep = max(0, first_deep.start_offset_minutes) if first_deep else 0

    rem_entries = count_rem_entries(segments)
    cycles = device_cycles if device_cycles and device_cycles > 0 else rem_entries
    avg_cycle = round((light + deep + rem) / cycles, 1) if cycles else 0.0

    return HypnogramSummary(
        light_min=light,
        deep_min=deep,
        rem_min=rem,
        wake_min=_stage_total(segments, {SleepStageCode.WAKE}),
        minutes_to_first_deep=to_first_deep,
        rem_entries=rem_entries,
        cycle_count=cycles,
        avg_cycle_min=avg_cycle,
        deep_before_midpoint_pct=_share_before(segments, SleepStageCode.DEEP_NREM, midpoint),
        rem_after_midpoint_pct=_share_after(segments, SleepStageCode.REM, midpoint),
        segment_count=len(segments),
    )
