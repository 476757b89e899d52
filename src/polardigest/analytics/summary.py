"""Merged summary records, one per upstream entity.

Every field is optional and tracked on its own: a field is None when its
source channel or series was missing or empty, and ``to_dict()`` leaves
such fields out entirely so "not measured" never reads as zero.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, asdict
from typing import Any

from polardigest.analytics.buckets import ClockBucket, StepBucket, ZoneMinutes
from polardigest.analytics.channels import (
    AltitudeStats,
    HrvStats,
    PaceSummary,
    PowerStats,
    SimpleStats,
)
from polardigest.analytics.hypnogram import HypnogramSummary
from polardigest.analytics.timeline import TrendStats


def _compact(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _compact(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_compact(v) for v in value]
    return value


class _Record:
    """Serialization shared by the summary dataclasses."""

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict, dropping absent fields."""
        return _compact(asdict(self))

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


@dataclass
class SampleSummary(_Record):
    """Per-channel summaries of an exercise's recorded samples."""

    pace: PaceSummary | None = None
    cadence: SimpleStats | None = None
    running_cadence: SimpleStats | None = None
    altitude: AltitudeStats | None = None
    power: PowerStats | None = None
    power_pedaling_index: SimpleStats | None = None
    power_lr_balance: SimpleStats | None = None
    air_pressure: SimpleStats | None = None
    temperature: SimpleStats | None = None
    rr_intervals: HrvStats | None = None

    @property
    def is_empty(self) -> bool:
        return not self.to_dict()


@dataclass
class ExerciseSummary(_Record):
    id: str | None = None
    start_time: str | None = None
    start_time_utc_offset: int | None = None
    duration: str | None = None
    duration_seconds: float | None = None
    calories: float | None = None
    distance: float | None = None
    heart_rate: dict[str, Any] | None = None
    training_load: float | None = None
    sport: str | None = None
    detailed_sport_info: str | None = None
    fat_percentage: float | None = None
    carbohydrate_percentage: float | None = None
    protein_percentage: float | None = None
    running_index: float | None = None
    training_load_pro: dict[str, Any] | None = None
    heart_rate_zones: list[dict[str, Any]] | None = None
    samples: SampleSummary | None = None

    def to_dict(self) -> dict[str, Any]:
        """Flatten sample summaries into the exercise record."""
        data = _compact(asdict(self))
        data.update(data.pop("samples", {}))
        return data

    def __repr__(self) -> str:
        return (
            f"ExerciseSummary({self.sport or 'unknown'} @ {self.start_time}, "
            f"samples={'yes' if self.samples else 'no'})"
        )


@dataclass
class HeartRateDaySummary(_Record):
    date: str | None = None
    sample_count: int | None = None
    avg: int | None = None
    min: float | None = None
    max: float | None = None
    first_sample: dict[str, Any] | None = None
    last_sample: dict[str, Any] | None = None
    buckets: list[ClockBucket] | None = None

    def __repr__(self) -> str:
        return f"HeartRateDaySummary({self.date}: n={self.sample_count}, avg={self.avg})"


@dataclass
class SleepSummary(_Record):
    date: str | None = None
    sleep_start_time: str | None = None
    sleep_end_time: str | None = None
    sleep_score: float | None = None
    sleep_rating: int | None = None
    sleep_charge: int | None = None
    continuity: float | None = None
    continuity_class: int | None = None
    sleep_goal_min: int | None = None
    light_sleep_min: int | None = None
    deep_sleep_min: int | None = None
    rem_sleep_min: int | None = None
    unrecognized_sleep_min: int | None = None
    total_interruption_min: int | None = None
    short_interruption_min: int | None = None
    long_interruption_min: int | None = None
    sleep_cycles: int | None = None
    group_duration_score: float | None = None
    group_solidity_score: float | None = None
    group_regeneration_score: float | None = None
    architecture: HypnogramSummary | None = None
    heart_rate: TrendStats | None = None

    def __repr__(self) -> str:
        return f"SleepSummary({self.date}: score={self.sleep_score}, cycles={self.sleep_cycles})"


@dataclass
class RechargeSummary(_Record):
    date: str | None = None
    ans_charge: float | None = None
    ans_charge_status: int | None = None
    nightly_recharge_status: int | None = None
    hrv_rmssd: float | None = None
    breathing_rate: float | None = None
    heart_rate_avg: float | None = None
    beat_to_beat_avg: float | None = None
    hrv_avg: float | None = None
    hrv: TrendStats | None = None
    breathing: TrendStats | None = None

    def __repr__(self) -> str:
        return f"RechargeSummary({self.date}: ans={self.ans_charge}, hrv={self.hrv_rmssd})"


@dataclass
class ActivityDaySummary(_Record):
    date: str | None = None
    calories: float | None = None
    active_calories: float | None = None
    steps: int | None = None
    active_duration: str | None = None
    inactive_duration: str | None = None
    daily_activity: float | None = None
    distance_from_steps: float | None = None
    inactivity_alert_count: int | None = None
    hourly_steps: list[StepBucket] | None = None
    zones: ZoneMinutes | None = None
    inactivity_stamps: int | None = None

    def __repr__(self) -> str:
        return f"ActivityDaySummary({self.date}: steps={self.steps}, kcal={self.calories})"


@dataclass
class SummaryBatch(_Record):
    """A list of summaries of one entity kind."""

    kind: str
    items: list[Any] = field(default_factory=list)
    hourly_steps: list[StepBucket] | None = None  # activity across several days

    def to_dict(self) -> dict[str, Any]:
        data = {"kind": self.kind, "count": len(self.items),
                "items": [item.to_dict() for item in self.items]}
        if self.hourly_steps is not None:
            data["hourly_steps"] = [asdict(b) for b in self.hourly_steps]
        return data
