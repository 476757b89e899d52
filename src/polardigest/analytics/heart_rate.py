"""Continuous heart rate: one day of samples reduced to stats and buckets."""

from __future__ import annotations

from typing import Any, Mapping

import numpy as np

from polardigest.config import DEFAULT_CONFIG, SummaryConfig
from polardigest.decoders.records import pick
from polardigest.decoders.samples import parse_value
from polardigest.analytics.buckets import half_hour_buckets
from polardigest.analytics.summary import HeartRateDaySummary


def _samples(day: Mapping[str, Any]) -> list[tuple[str, float]]:
    """``(sample_time, heart_rate)`` pairs, skipping unusable entries."""
    pairs: list[tuple[str, float]] = []
    for s in pick(day, "heart_rate_samples", []) or []:
        clock = pick(s, "sample_time")
        bpm = parse_value(pick(s, "heart_rate"))
        if clock is None or bpm is None:
            continue
        pairs.append((clock, bpm))
    return pairs


def summarize_heart_rate_day(
    day: Mapping[str, Any],
    config: SummaryConfig = DEFAULT_CONFIG,
) -> HeartRateDaySummary:
    """Summarize an upstream continuous heart rate day.

    Samples keep their upstream order for the first/last sample fields;
    buckets are clock-anchored and independent of that order.
    """
    summary = HeartRateDaySummary(date=pick(day, "date"))
    pairs = _samples(day)
    if not pairs:
        return summary

    bpm = np.asarray([v for _, v in pairs], dtype=np.float64)
    first, last = pairs[0], pairs[-1]

    summary.sample_count = len(pairs)
    summary.avg = int(round(float(np.mean(bpm))))
    summary.min = float(np.min(bpm))
    summary.max = float(np.max(bpm))
    summary.first_sample = {"sample_time": first[0], "heart_rate": first[1]}
    summary.last_sample = {"sample_time": last[0], "heart_rate": last[1]}
    summary.buckets = half_hour_buckets(pairs, bucket_min=config.hr_bucket_min)
    return summary
