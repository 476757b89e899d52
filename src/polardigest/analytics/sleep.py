"""Sleep nights: device scores, hypnogram architecture, overnight heart rate.

Stage durations reported by the device arrive in seconds and are converted
to minutes.  The hypnogram and the per-minute heart rate map are both keyed
by clock labels and are put on the midnight-aware timeline anchored at the
sleep start hour.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from polardigest.config import DEFAULT_CONFIG, SummaryConfig
from polardigest.decoders.clock import parse_clock
from polardigest.decoders.records import pick, seconds_to_minutes
from polardigest.decoders.samples import parse_value
from polardigest.analytics.hypnogram import analyze_hypnogram
from polardigest.analytics.timeline import trend_stats
from polardigest.analytics.summary import SleepSummary

logger = logging.getLogger(__name__)


def _numeric_map(raw: Any) -> dict[str, float]:
    """Clock label -> value, skipping values that are not numeric."""
    if not isinstance(raw, Mapping):
        return {}
    series = {}
    for clock, value in raw.items():
        number = parse_value(value)
        if number is not None:
            series[clock] = number
    return series


def summarize_sleep(
    night: Mapping[str, Any],
    config: SummaryConfig = DEFAULT_CONFIG,
) -> SleepSummary:
    """Summarize one upstream sleep night.

    Args:
        night: Upstream sleep dict.
        config: Algorithm parameters (rollover hour, nadir window).

    Returns:
        SleepSummary; architecture and heart-rate fields stay None when the
        night carries no hypnogram or heart rate samples, or no start time
        to anchor them.
    """
    start = pick(night, "sleep_start_time")
    end = pick(night, "sleep_end_time")

    summary = SleepSummary(
        date=pick(night, "date"),
        sleep_start_time=start,
        sleep_end_time=end,
        sleep_score=pick(night, "sleep_score"),
        sleep_rating=pick(night, "sleep_rating"),
        sleep_charge=pick(night, "sleep_charge"),
        continuity=pick(night, "continuity"),
        continuity_class=pick(night, "continuity_class"),
        sleep_goal_min=seconds_to_minutes(pick(night, "sleep_goal")),
        light_sleep_min=seconds_to_minutes(pick(night, "light_sleep")),
        deep_sleep_min=seconds_to_minutes(pick(night, "deep_sleep")),
        rem_sleep_min=seconds_to_minutes(pick(night, "rem_sleep")),
        unrecognized_sleep_min=seconds_to_minutes(pick(night, "unrecognized_sleep_stage")),
        total_interruption_min=seconds_to_minutes(pick(night, "total_interruption_duration")),
        short_interruption_min=seconds_to_minutes(pick(night, "short_interruption_duration")),
        long_interruption_min=seconds_to_minutes(pick(night, "long_interruption_duration")),
        sleep_cycles=pick(night, "sleep_cycles"),
        group_duration_score=pick(night, "group_duration_score"),
        group_solidity_score=pick(night, "group_solidity_score"),
        group_regeneration_score=pick(night, "group_regeneration_score"),
    )

    hypnogram = {k: int(v) for k, v in _numeric_map(pick(night, "hypnogram")).items()}
    hr = _numeric_map(pick(night, "heart_rate_samples"))
    if start is None:
        if hypnogram or hr:
            logger.debug("night %s has no start time; skipping timeline metrics", summary.date)
        return summary

    if hypnogram:
        summary.architecture = analyze_hypnogram(
            hypnogram,
            session_start=start,
            session_end=end,
            device_cycles=summary.sleep_cycles,
            rollover_hour=config.rollover_hour,
        )

    if hr:
        start_hour, _ = parse_clock(start)
        summary.heart_rate = trend_stats(
            hr,
            start_hour,
            rollover_hour=config.rollover_hour,
            nadir_window=config.nadir_window,
        )

    return summary
