"""Per-channel statistical summarizers for exercise samples.

Each summarizer is a pure function over one decoded channel and returns a
small dataclass, or None when the channel has nothing usable in it.  None
means "not measured" and is never replaced by a zero-filled record.

  - Pace splits per kilometre (speed paired with distance)
  - Altitude ascent / descent / range
  - Power: average, max, normalized power (30 s rolling, 4th-power mean)
  - RR-interval HRV: mean, SDNN, RMSSD, pNN50
  - Simple stats for cadence, pressure, temperature, pedaling index, balance
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from polardigest.config import POWER_WINDOW_SEC
from polardigest.decoders.samples import filter_paired, filter_present

OVERALL = "overall"


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


@dataclass
class SpeedSplit:
    """Average speed and pace over one kilometre (or the whole session)."""

    km: int | str  # 1-based kilometre, or "overall"
    pace_min_per_km: float
    avg_speed_kmh: float


@dataclass
class PaceSummary:
    splits: list[SpeedSplit]

    def __repr__(self) -> str:
        return f"PaceSummary({len(self.splits)} splits)"


@dataclass
class AltitudeStats:
    total_ascent: float
    total_descent: float
    min_elevation: float
    max_elevation: float

    def __repr__(self) -> str:
        return (
            f"AltitudeStats(+{self.total_ascent:.0f}m/-{self.total_descent:.0f}m, "
            f"{self.min_elevation:.0f}-{self.max_elevation:.0f}m)"
        )


@dataclass
class PowerStats:
    avg_power: float
    normalized_power: float
    max_power: float
    variability_index: float

    def __repr__(self) -> str:
        return (
            f"PowerStats(avg={self.avg_power:.0f}W, NP={self.normalized_power:.0f}W, "
            f"VI={self.variability_index:.2f})"
        )


@dataclass
class HrvStats:
    """Time-domain HRV over a run of RR intervals (ms)."""

    rmssd: float
    sdnn: float
    mean_rr: float
    pnn50: float

    def __repr__(self) -> str:
        return (
            f"HrvStats(rmssd={self.rmssd:.1f}ms, sdnn={self.sdnn:.1f}ms, "
            f"pnn50={self.pnn50:.1f}%)"
        )


@dataclass
class SimpleStats:
    avg: float
    min: float | None = None
    max: float | None = None


# ---------------------------------------------------------------------------
# Pace / speed splits
# ---------------------------------------------------------------------------


def _pace(avg_speed_kmh: float) -> float:
    return 60.0 / avg_speed_kmh if avg_speed_kmh > 0 else 0.0


def _make_split(km: int | str, speeds: Sequence[float]) -> SpeedSplit:
    avg = float(np.mean(speeds))
    return SpeedSplit(
        km=km,
        pace_min_per_km=round(_pace(avg), 2),
        avg_speed_kmh=round(avg, 2),
    )


def _km_splits(speed: list[float], distance_m: list[float]) -> list[SpeedSplit]:
    """Cut a split each time the distance reaches the next whole kilometre.

    *speed* and *distance_m* must already be aligned and equal length.
    """
    splits: list[SpeedSplit] = []
    current_km = 1
    start = 0
    last = len(distance_m) - 1

    for i, dist in enumerate(distance_m):
        if dist / 1000.0 >= current_km or i == last:
            chunk = speed[start:i + 1]
            if chunk:
                splits.append(_make_split(current_km, chunk))
            current_km += 1
            start = i + 1

    return splits


def speed_splits(
    speed: Sequence[float | None],
    distance: Sequence[float | None] | None = None,
) -> PaceSummary | None:
    """Per-kilometre pace splits.

    Args:
        speed: Decoded speed channel (km/h), absent entries as None.
        distance: Optional co-indexed cumulative distance channel (m).
            Both channels are filtered together so index ``i`` of one
            still refers to index ``i`` of the other.

    Returns:
        PaceSummary with one split per kilometre, or a single "overall"
        split when no distance is available.  None if speed is empty.
    """
    if distance is not None:
        paired_speed, paired_dist = filter_paired(speed, distance)
        splits = _km_splits(paired_speed, paired_dist)
        if splits:
            return PaceSummary(splits=splits)

    values = filter_present(speed)
    if not values:
        return None
    return PaceSummary(splits=[_make_split(OVERALL, values)])


# ---------------------------------------------------------------------------
# Altitude
# ---------------------------------------------------------------------------


def altitude_stats(values: Sequence[float | None]) -> AltitudeStats | None:
    """Total ascent/descent from consecutive deltas, plus elevation range."""
    present = filter_present(values)
    if not present:
        return None

    arr = np.asarray(present, dtype=np.float64)
    deltas = np.diff(arr)
    ascent = float(np.sum(deltas[deltas > 0]))
    descent = float(np.sum(np.abs(deltas[deltas < 0])))

    return AltitudeStats(
        total_ascent=round(ascent, 2),
        total_descent=round(descent, 2),
        min_elevation=float(np.min(arr)),
        max_elevation=float(np.max(arr)),
    )


# ---------------------------------------------------------------------------
# Power
# ---------------------------------------------------------------------------


def power_window(recording_interval_sec: float, window_sec: float = POWER_WINDOW_SEC) -> int:
    """Number of samples spanning *window_sec* at the given recording rate."""
    interval = recording_interval_sec if recording_interval_sec > 0 else 1.0
    return max(1, math.ceil(window_sec / interval))


def normalized_power(values: Sequence[float], window: int) -> float:
    """Fourth root of the mean fourth power of the rolling-mean series.

    Falls back to the plain mean when the series is shorter than *window*.
    """
    arr = np.asarray(values, dtype=np.float64)
    if len(arr) < window:
        return float(np.mean(arr))
    rolling = np.convolve(arr, np.ones(window) / window, mode="valid")
    return float(np.mean(rolling ** 4) ** 0.25)


def power_stats(
    values: Sequence[float | None],
    recording_interval_sec: float,
    window_sec: float = POWER_WINDOW_SEC,
) -> PowerStats | None:
    """Average, max and normalized power for a power channel (W)."""
    present = filter_present(values)
    if not present:
        return None

    arr = np.asarray(present, dtype=np.float64)
    avg = float(np.mean(arr))
    np_watts = normalized_power(arr, power_window(recording_interval_sec, window_sec))
    vi = np_watts / avg if avg > 0 else 0.0

    return PowerStats(
        avg_power=round(avg, 2),
        normalized_power=round(np_watts, 2),
        max_power=round(float(np.max(arr)), 2),
        variability_index=round(vi, 2),
    )


# ---------------------------------------------------------------------------
# RR intervals
# ---------------------------------------------------------------------------


def rr_interval_stats(values: Sequence[float | None]) -> HrvStats | None:
    """Time-domain HRV for an RR-interval channel.

    SDNN is the population standard deviation; RMSSD and pNN50 are taken
    over successive differences.  Returns None with fewer than 2 intervals.
    """
    present = filter_present(values)
    if len(present) < 2:
        return None

    arr = np.asarray(present, dtype=np.float64)
    diffs = np.diff(arr)

    return HrvStats(
        rmssd=round(float(np.sqrt(np.mean(diffs ** 2))), 2),
        sdnn=round(float(np.std(arr, ddof=0)), 2),
        mean_rr=round(float(np.mean(arr)), 2),
        pnn50=round(float(np.sum(np.abs(diffs) > 50.0) / len(diffs) * 100.0), 2),
    )


# ---------------------------------------------------------------------------
# Simple stats
# ---------------------------------------------------------------------------


def simple_stats(
    values: Sequence[float | None],
    scale: float = 1.0,
    with_min: bool = False,
    with_max: bool = True,
) -> SimpleStats | None:
    """Average (and optionally min/max) of a channel after dividing by *scale*."""
    present = filter_present(values)
    if not present:
        return None

    arr = np.asarray(present, dtype=np.float64) / scale
    return SimpleStats(
        avg=round(float(np.mean(arr)), 2),
        min=round(float(np.min(arr)), 2) if with_min else None,
        max=round(float(np.max(arr)), 2) if with_max else None,
    )
