"""Shared fixtures and helpers for the polardigest test suite."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from polardigest.decoders.samples import ChannelType


# ---------------------------------------------------------------------------
# Upstream record builders
# ---------------------------------------------------------------------------


def make_channel(
    channel_type: int,
    values: list[float | None] | str,
    recording_rate: float = 1,
) -> dict[str, Any]:
    """Build an upstream exercise sample block.

    ``None`` entries are written as empty tokens.
    """
    if isinstance(values, str):
        data = values
    else:
        data = ",".join("" if v is None else f"{v:g}" for v in values)
    return {
        "recording-rate": recording_rate,
        "sample-type": int(channel_type),
        "data": data,
    }


def make_exercise(samples: list[dict] | None = None, **fields: Any) -> dict[str, Any]:
    """Build an upstream exercise record with sensible defaults."""
    record = {
        "id": "ex-1",
        "start_time": "2026-02-03T07:00:00",
        "start_time_utc_offset": 60,
        "duration": "PT30M",
        "calories": 320,
        "sport": "RUNNING",
    }
    record.update(fields)
    if samples is not None:
        record["samples"] = samples
    return record


def make_sleep_night(
    hypnogram: dict[str, int] | None = None,
    heart_rate: dict[str, float] | None = None,
    **fields: Any,
) -> dict[str, Any]:
    """Build an upstream sleep night starting at 22:00."""
    night = {
        "polar_user": "https://example.invalid/v3/users/1",
        "date": "2026-02-04",
        "sleep_start_time": "2026-02-03T22:00:00+01:00",
        "sleep_end_time": "2026-02-04T06:00:00+01:00",
        "light_sleep": 14400,
        "deep_sleep": 5400,
        "rem_sleep": 5400,
        "sleep_score": 78.5,
        "sleep_cycles": 4,
    }
    night.update(fields)
    if hypnogram is not None:
        night["hypnogram"] = hypnogram
    if heart_rate is not None:
        night["heart_rate_samples"] = heart_rate
    return night


def make_recharge(
    hrv: dict[str, float] | None = None,
    breathing: dict[str, float] | None = None,
    **fields: Any,
) -> dict[str, Any]:
    """Build an upstream nightly recharge record."""
    night = {
        "polar-user": "https://example.invalid/v3/users/1",
        "date": "2026-02-04",
        "ans_charge": 3.2,
        "ans-charge-status": 3,
        "hrv-rmssd": 42,
        "breathing-rate": 14.1,
        "heart-rate-avg": 55,
        "nightly-recharge-status": 4,
    }
    night.update(fields)
    if hrv is not None:
        night["heart-rate-variability-samples"] = [
            {"time": t, "hrv-rmssd": v} for t, v in hrv.items()
        ]
    if breathing is not None:
        night["breathing-samples"] = [
            {"time": t, "breathing-rate": v} for t, v in breathing.items()
        ]
    return night


def make_hr_day(samples: list[tuple[str, float]], date: str = "2026-02-03") -> dict[str, Any]:
    return {
        "polar_user": "https://example.invalid/v3/users/1",
        "date": date,
        "heart_rate_samples": [
            {"sample_time": t, "heart_rate": hr} for t, hr in samples
        ],
    }


def make_activity_day(date: str = "2026-02-03", **fields: Any) -> dict[str, Any]:
    day = {
        "start_time": f"{date}T00:00",
        "end_time": f"{date}T23:59",
        "calories": 2300,
        "active_calories": 650,
        "steps": 9120,
        "active_duration": "PT2H10M",
        "inactivity_alert_count": 1,
    }
    day.update(fields)
    return day


def make_activity_samples(
    date: str = "2026-02-03",
    steps: list[tuple[str, int]] | None = None,
    zones: list[tuple[str, str]] | None = None,
    stamps: list[str] | None = None,
) -> dict[str, Any]:
    record: dict[str, Any] = {"date": date}
    if steps is not None:
        record["steps"] = {
            "interval_ms": 60000,
            "total_steps": sum(s for _, s in steps),
            "samples": [{"timestamp": t, "steps": s} for t, s in steps],
        }
    if zones is not None:
        record["activity_zones"] = {
            "samples": [{"timestamp": t, "zone": z} for t, z in zones],
        }
    if stamps is not None:
        record["inactivity_stamps"] = {"samples": [{"stamp": s} for s in stamps]}
    return record


def write_json(path: Path, data: Any) -> Path:
    """Write *data* as JSON to *path*."""
    path.write_text(json.dumps(data))
    return path


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def cycling_channels() -> list[dict[str, Any]]:
    """A 60 s ride: constant 200 W, rising altitude, a few gaps."""
    return [
        make_channel(ChannelType.POWER, [200.0] * 60),
        make_channel(ChannelType.ALTITUDE, [100, 101, None, 103, 102, 104]),
        make_channel(ChannelType.CADENCE, [85, 90, None, 95]),
        make_channel(ChannelType.TEMPERATURE, [215, 225, None]),
    ]


@pytest.fixture
def night_hypnogram() -> dict[str, int]:
    """An 8 h night from 22:00 with two REM entries and early deep sleep."""
    return {
        "22:00": 0,   # wake
        "22:10": 2,   # lighter NREM
        "22:40": 4,   # deep
        "23:40": 3,   # light
        "00:30": 1,   # REM
        "01:00": 3,   # light
        "02:00": 4,   # deep
        "02:30": 3,   # light
        "04:30": 1,   # REM
        "05:30": 0,   # wake
        "06:00": 0,   # end marker
    }
