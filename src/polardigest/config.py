"""Tunable parameters for the summarizers.

Every algorithm takes its parameters as keyword arguments with the
defaults below; :class:`SummaryConfig` bundles them for the entity-level
summarizers so tests can swap in non-default windows.
"""

from __future__ import annotations

from dataclasses import dataclass

# Normalized power rolling window (seconds)
POWER_WINDOW_SEC = 30.0

# Raw temperature samples arrive in tenths of a degree C
TEMPERATURE_SCALE = 10.0

# Clock buckets
HR_BUCKET_MIN = 30
STEP_BUCKET_MIN = 60

# Clock times with an hour below this belong to the next day when the
# session started at or after it
ROLLOVER_HOUR = 18

# Points in the rolling mean used for nadir detection
NADIR_WINDOW = 3

# Per-day activity fetches issued concurrently
ACTIVITY_BATCH_SIZE = 5


@dataclass(frozen=True)
class SummaryConfig:
    """Parameter set passed through the entity summarizers."""

    power_window_sec: float = POWER_WINDOW_SEC
    temperature_scale: float = TEMPERATURE_SCALE
    hr_bucket_min: int = HR_BUCKET_MIN
    rollover_hour: int = ROLLOVER_HOUR
    nadir_window: int = NADIR_WINDOW
    activity_batch_size: int = ACTIVITY_BATCH_SIZE


DEFAULT_CONFIG = SummaryConfig()
