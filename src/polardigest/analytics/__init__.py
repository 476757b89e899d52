"""Summarization engine for Polar AccessLink time series.

Modules:
    channels   -- Per-channel exercise stats (pace splits, power, HRV, ...)
    exercise   -- Exercise records and sample preprocessing
    buckets    -- Clock-aligned buckets (heart rate, steps) and zone minutes
    timeline   -- Midnight-aware timeline, trend slope, nadir
    hypnogram  -- Sleep stage segmentation and architecture
    heart_rate -- Continuous heart rate days
    sleep      -- Sleep nights
    recharge   -- Nightly recharge
    activity   -- Daily activity
    summary    -- Merged per-entity summary records
    pipeline   -- Route upstream payloads to the summarizers
"""

from polardigest.analytics.channels import (
    speed_splits,
    altitude_stats,
    power_stats,
    normalized_power,
    rr_interval_stats,
    simple_stats,
)
from polardigest.analytics.exercise import preprocess_samples, summarize_exercise
from polardigest.analytics.buckets import (
    half_hour_buckets,
    hourly_step_buckets,
    zone_durations,
    ClockBucket,
    StepBucket,
    ZoneMinutes,
)
from polardigest.analytics.timeline import (
    normalize_minutes,
    build_timeline,
    trend_slope,
    nadir,
    trend_stats,
    TimelinePoint,
    TrendStats,
)
from polardigest.analytics.hypnogram import (
    segment_hypnogram,
    analyze_hypnogram,
    StageSegment,
    HypnogramSummary,
)
from polardigest.analytics.heart_rate import summarize_heart_rate_day
from polardigest.analytics.sleep import summarize_sleep
from polardigest.analytics.recharge import summarize_recharge
from polardigest.analytics.activity import summarize_activity_day
from polardigest.analytics.pipeline import summarize

__all__ = [
    # channels
    "speed_splits",
    "altitude_stats",
    "power_stats",
    "normalized_power",
    "rr_interval_stats",
    "simple_stats",
    # exercise
    "preprocess_samples",
    "summarize_exercise",
    # buckets
    "half_hour_buckets",
    "hourly_step_buckets",
    "zone_durations",
    "ClockBucket",
    "StepBucket",
    "ZoneMinutes",
    # timeline
    "normalize_minutes",
    "build_timeline",
    "trend_slope",
    "nadir",
    "trend_stats",
    "TimelinePoint",
    "TrendStats",
    # hypnogram
    "segment_hypnogram",
    "analyze_hypnogram",
    "StageSegment",
    "HypnogramSummary",
    # entities
    "summarize_heart_rate_day",
    "summarize_sleep",
    "summarize_recharge",
    "summarize_activity_day",
    "summarize",
]
