"""Midnight-aware timeline normalization and trend statistics.

Overnight series are keyed by clock labels only ("23:40", "00:05", ...).
To order them, a session that started in the evening treats every label
with an hour before the rollover hour (18:00) as the following day::

    start 22:xx   "23:00" -> 1380 min    "00:00" -> 1440 min    "06:30" -> 1830 min

The normalized minute offsets feed hypnogram segmentation and the
least-squares trend slopes shared by sleep heart rate, HRV and breathing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

import numpy as np
from scipy import stats

from polardigest.config import NADIR_WINDOW, ROLLOVER_HOUR
from polardigest.decoders.clock import MINUTES_PER_DAY, parse_clock


@dataclass(frozen=True)
class TimelinePoint:
    clock_time: str
    normalized_minutes: int


@dataclass
class TrendStats:
    """Summary of one overnight series."""

    avg: float
    min: float
    max: float
    slope_per_hour: float
    sample_count: int
    nadir: float | None = None

    def __repr__(self) -> str:
        return (
            f"TrendStats(avg={self.avg:.1f}, range={self.min:g}-{self.max:g}, "
            f"slope={self.slope_per_hour:+.2f}/h, n={self.sample_count})"
        )


def normalize_minutes(
    clock: str,
    start_hour: int,
    rollover_hour: int = ROLLOVER_HOUR,
) -> int:
    """Minutes since midnight of the session's start day for *clock*."""
    hour, minute = parse_clock(clock)
    minutes = hour * 60 + minute
    if start_hour >= rollover_hour and hour < rollover_hour:
        minutes += MINUTES_PER_DAY
    return minutes


def build_timeline(
    clocks: Sequence[str],
    start_hour: int,
    rollover_hour: int = ROLLOVER_HOUR,
) -> list[TimelinePoint]:
    """Normalize clock labels and return them in timeline order."""
    points = [
        TimelinePoint(c, normalize_minutes(c, start_hour, rollover_hour))
        for c in clocks
    ]
    return sorted(points, key=lambda p: p.normalized_minutes)


def order_series(
    series: Mapping[str, float],
    start_hour: int,
    rollover_hour: int = ROLLOVER_HOUR,
) -> tuple[list[int], list[float]]:
    """Return ``(minutes, values)`` of a clock-keyed series in timeline order."""
    timeline = build_timeline(list(series), start_hour, rollover_hour)
    minutes = [p.normalized_minutes for p in timeline]
    values = [float(series[p.clock_time]) for p in timeline]
    return minutes, values


# ---------------------------------------------------------------------------
# Trend slope
# ---------------------------------------------------------------------------


def slope_per_hour(minutes: Sequence[float], values: Sequence[float]) -> float:
    """OLS slope of *values* against hours elapsed since the first sample.

    Returns 0.0 when the time axis has no variance (one sample, or every
    sample at the same minute).
    """
    if len(minutes) < 2:
        return 0.0
    t = np.asarray(minutes, dtype=np.float64)
    hours = (t - t[0]) / 60.0
    if np.ptp(hours) == 0:
        return 0.0
    result = stats.linregress(hours, np.asarray(values, dtype=np.float64))
    return round(float(result.slope), 2)


def trend_slope(
    series: Mapping[str, float],
    start_hour: int,
    rollover_hour: int = ROLLOVER_HOUR,
) -> float:
    """Per-hour trend of a clock-keyed overnight series."""
    minutes, values = order_series(series, start_hour, rollover_hour)
    return slope_per_hour(minutes, values)


# ---------------------------------------------------------------------------
# Nadir
# ---------------------------------------------------------------------------


def nadir(values: Sequence[float], window: int = NADIR_WINDOW) -> float | None:
    """Lowest value of the forward rolling mean over *window* points.

    With fewer than *window* points the plain minimum is returned.
    """
    if len(values) == 0:
        return None
    arr = np.asarray(values, dtype=np.float64)
    if len(arr) < window:
        return round(float(np.min(arr)), 2)
    rolling = np.convolve(arr, np.ones(window) / window, mode="valid")
    return round(float(np.min(rolling)), 2)


def trend_stats(
    series: Mapping[str, float],
    start_hour: int,
    rollover_hour: int = ROLLOVER_HOUR,
    nadir_window: int | None = NADIR_WINDOW,
) -> TrendStats | None:
    """Average, range, slope and (optionally) nadir of an overnight series.

    Returns None for an empty series.
    """
    if not series:
        return None
    minutes, values = order_series(series, start_hour, rollover_hour)
    arr = np.asarray(values, dtype=np.float64)
    return TrendStats(
        avg=round(float(np.mean(arr)), 1),
        min=float(np.min(arr)),
        max=float(np.max(arr)),
        slope_per_hour=slope_per_hour(minutes, values),
        sample_count=len(values),
        nadir=nadir(values, nadir_window) if nadir_window else None,
    )
