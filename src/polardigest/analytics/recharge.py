"""Nightly recharge: device recovery scores plus HRV and breathing trends.

ANS charge and the recharge status are device-computed and passed through.
The per-sample HRV (RMSSD, ms) and breathing-rate (breaths/min) series are
reduced with the same midnight-aware trend statistics used for sleep.
"""

from __future__ import annotations

from typing import Any, Mapping

from polardigest.config import DEFAULT_CONFIG, SummaryConfig
from polardigest.decoders.clock import parse_clock
from polardigest.decoders.records import pick
from polardigest.decoders.samples import parse_value
from polardigest.analytics.timeline import trend_stats
from polardigest.analytics.summary import RechargeSummary


def _series(samples: Any, value_key: str) -> dict[str, float]:
    """Clock label -> value, in upstream order.

    The upstream sends either a map of clock label to value or a list of
    ``{"time": ..., <value_key>: ...}`` samples.  Non-numeric values are
    skipped.
    """
    if isinstance(samples, Mapping):
        pairs = list(samples.items())
    else:
        pairs = [(pick(s, "time"), pick(s, value_key)) for s in samples or []]

    series: dict[str, float] = {}
    for clock, value in pairs:
        number = parse_value(value)
        if clock is None or number is None:
            continue
        series[clock] = number
    return series


def summarize_recharge(
    night: Mapping[str, Any],
    start_hour: int | None = None,
    config: SummaryConfig = DEFAULT_CONFIG,
) -> RechargeSummary:
    """Summarize one upstream nightly recharge record.

    Args:
        night: Upstream recharge dict.
        start_hour: Hour the night began.  Recharge records carry no start
            time, so by default the hour of the first HRV sample (or first
            breathing sample) is used.
        config: Algorithm parameters.
    """
    summary = RechargeSummary(
        date=pick(night, "date"),
        ans_charge=pick(night, "ans_charge"),
        ans_charge_status=pick(night, "ans_charge_status"),
        nightly_recharge_status=pick(night, "nightly_recharge_status"),
        hrv_rmssd=pick(night, "hrv_rmssd"),
        breathing_rate=pick(night, "breathing_rate"),
        heart_rate_avg=pick(night, "heart_rate_avg"),
        beat_to_beat_avg=pick(night, "beat_to_beat_avg"),
        hrv_avg=pick(night, "heart_rate_variability_avg"),
    )

    hrv = _series(pick(night, "heart_rate_variability_samples"), "hrv_rmssd")
    breathing = _series(pick(night, "breathing_samples"), "breathing_rate")
    if not hrv and not breathing:
        return summary

    if start_hour is None:
        first_clock = next(iter(hrv or breathing))
        start_hour, _ = parse_clock(first_clock)

    summary.hrv = trend_stats(
        hrv, start_hour,
        rollover_hour=config.rollover_hour,
        nadir_window=config.nadir_window,
    )
    summary.breathing = trend_stats(
        breathing, start_hour,
        rollover_hour=config.rollover_hour,
        nadir_window=None,
    )
    return summary
