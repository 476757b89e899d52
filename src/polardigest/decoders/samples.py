"""Decoder for delimited exercise sample channels.

The upstream delivers each recorded channel as a block::

    {"recording-rate": 1, "sample-type": 4, "data": "210,215,,NULL,220"}

``data`` holds one token per recording interval.  Tokens that are empty,
a ``NULL`` sentinel, or not a finite number decode to ``None`` rather than
being dropped, so two channels recorded at the same rate stay index-aligned
(speed[i] and distance[i] describe the same instant) until a consumer
explicitly filters them.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Sequence

logger = logging.getLogger(__name__)

DELIMITER = ","
MISSING_TOKENS = {"", "NULL", "null"}


class ChannelType(IntEnum):
    """Upstream ``sample-type`` tags."""

    SPEED = 1  # km/h
    CADENCE = 2  # rpm
    ALTITUDE = 3  # m
    POWER = 4  # W
    POWER_PEDALING_INDEX = 5  # %
    POWER_LR_BALANCE = 6  # %
    AIR_PRESSURE = 7  # hPa
    RUNNING_CADENCE = 8  # spm
    TEMPERATURE = 9  # 0.1 C
    DISTANCE = 10  # m
    RR_INTERVAL = 11  # ms


@dataclass(frozen=True)
class RawChannel:
    """One undecoded sample block as delivered by the upstream."""

    recording_interval_sec: float
    channel_type: int
    values: str

    @classmethod
    def from_dict(cls, block: dict[str, Any]) -> RawChannel:
        """Build from an upstream sample dict (kebab- or snake-case keys)."""
        rate = block.get("recording-rate", block.get("recording_rate", 1))
        tag = block.get("sample-type", block.get("sample_type"))
        return cls(
            recording_interval_sec=float(rate),
            channel_type=int(tag),
            values=block.get("data", "") or "",
        )


@dataclass
class DecodedChannel:
    """A decoded channel: one optional reading per recording interval."""

    channel_type: int
    recording_interval_sec: float
    values: list[float | None]

    @property
    def present(self) -> list[float]:
        return filter_present(self.values)

    def __repr__(self) -> str:
        try:
            name = ChannelType(self.channel_type).name
        except ValueError:
            name = str(self.channel_type)
        return (
            f"DecodedChannel({name}, n={len(self.values)}, "
            f"present={len(self.present)}, every {self.recording_interval_sec:g}s)"
        )


def _parse_token(token: str) -> float | None:
    token = token.strip()
    if token in MISSING_TOKENS:
        return None
    try:
        value = float(token)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_value(value: Any) -> float | None:
    """Coerce one upstream series value to a finite float, or None.

    Numbers pass through; strings go through the same rules as sample
    tokens.  Anything else is absent.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, str):
        return _parse_token(value)
    return None


def decode(raw: str) -> list[float | None]:
    """Split a delimited sample string into optional floats.

    The result always has one entry per delimited token.  Never raises on
    malformed tokens; they degrade to ``None``.
    """
    if raw is None:
        return []
    return [_parse_token(tok) for tok in raw.split(DELIMITER)]


def decode_channel(channel: RawChannel) -> DecodedChannel:
    """Decode a :class:`RawChannel` into a :class:`DecodedChannel`."""
    values = decode(channel.values)
    missing = sum(1 for v in values if v is None)
    if missing:
        logger.debug(
            "channel %s: %d of %d samples absent",
            channel.channel_type, missing, len(values),
        )
    return DecodedChannel(
        channel_type=channel.channel_type,
        recording_interval_sec=channel.recording_interval_sec,
        values=values,
    )


def filter_present(series: Sequence[float | None]) -> list[float]:
    """Drop absent entries.  This is where index alignment is given up."""
    return [v for v in series if v is not None]


def filter_paired(
    first: Sequence[float | None],
    second: Sequence[float | None],
) -> tuple[list[float], list[float]]:
    """Filter two co-indexed series with one positional rule.

    Index ``i`` survives only if both ``first[i]`` and ``second[i]`` are
    present, so the returned lists stay aligned with each other.  Series of
    unequal length are compared over the shorter one.
    """
    kept_first: list[float] = []
    kept_second: list[float] = []
    for a, b in zip(first, second):
        if a is None or b is None:
            continue
        kept_first.append(a)
        kept_second.append(b)
    return kept_first, kept_second
