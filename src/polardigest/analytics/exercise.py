"""Exercise summaries: record pass-through plus per-channel sample stats."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from polardigest.config import DEFAULT_CONFIG, SummaryConfig
from polardigest.decoders.clock import parse_iso_duration
from polardigest.decoders.records import pick
from polardigest.decoders.samples import (
    ChannelType,
    DecodedChannel,
    RawChannel,
    decode_channel,
)
from polardigest.analytics.channels import (
    altitude_stats,
    power_stats,
    rr_interval_stats,
    simple_stats,
    speed_splits,
)
from polardigest.analytics.summary import ExerciseSummary, SampleSummary

logger = logging.getLogger(__name__)


def _index_channels(
    channels: Iterable[RawChannel | Mapping[str, Any]],
) -> dict[int, DecodedChannel]:
    """Decode each block and key it by channel type (later blocks win)."""
    by_type: dict[int, DecodedChannel] = {}
    for block in channels:
        raw = block if isinstance(block, RawChannel) else RawChannel.from_dict(block)
        if raw.channel_type in by_type:
            logger.debug("duplicate channel %s, keeping the later block", raw.channel_type)
        by_type[raw.channel_type] = decode_channel(raw)
    return by_type


def preprocess_samples(
    channels: Iterable[RawChannel | Mapping[str, Any]],
    config: SummaryConfig = DEFAULT_CONFIG,
) -> SampleSummary:
    """Reduce an exercise's raw sample blocks to per-channel summaries.

    Args:
        channels: Raw sample blocks, as :class:`RawChannel` or upstream dicts.
        config: Algorithm parameters.

    Returns:
        SampleSummary holding a summary for every channel that was present
        and had usable samples.  Distance is consumed by the pace splitter
        and not reported on its own.
    """
    by_type = _index_channels(channels)
    result = SampleSummary()

    def values(tag: ChannelType) -> list[float | None] | None:
        channel = by_type.get(tag)
        return channel.values if channel is not None else None

    speed = values(ChannelType.SPEED)
    if speed is not None:
        result.pace = speed_splits(speed, values(ChannelType.DISTANCE))

    cadence = values(ChannelType.CADENCE)
    if cadence is not None:
        result.cadence = simple_stats(cadence)

    running_cadence = values(ChannelType.RUNNING_CADENCE)
    if running_cadence is not None:
        result.running_cadence = simple_stats(running_cadence)

    altitude = values(ChannelType.ALTITUDE)
    if altitude is not None:
        result.altitude = altitude_stats(altitude)

    power = by_type.get(ChannelType.POWER)
    if power is not None:
        result.power = power_stats(
            power.values,
            power.recording_interval_sec,
            window_sec=config.power_window_sec,
        )

    pedaling = values(ChannelType.POWER_PEDALING_INDEX)
    if pedaling is not None:
        result.power_pedaling_index = simple_stats(pedaling, with_max=False)

    balance = values(ChannelType.POWER_LR_BALANCE)
    if balance is not None:
        result.power_lr_balance = simple_stats(balance, with_max=False)

    pressure = values(ChannelType.AIR_PRESSURE)
    if pressure is not None:
        result.air_pressure = simple_stats(pressure, with_min=True)

    temperature = values(ChannelType.TEMPERATURE)
    if temperature is not None:
        result.temperature = simple_stats(
            temperature, scale=config.temperature_scale, with_min=True,
        )

    rr = values(ChannelType.RR_INTERVAL)
    if rr is not None:
        result.rr_intervals = rr_interval_stats(rr)

    unknown = set(by_type) - {int(t) for t in ChannelType}
    if unknown:
        logger.debug("ignoring unknown channel types %s", sorted(unknown))

    return result


def summarize_exercise(
    exercise: Mapping[str, Any],
    include_samples: bool = True,
    config: SummaryConfig = DEFAULT_CONFIG,
) -> ExerciseSummary:
    """Build an :class:`ExerciseSummary` from an upstream exercise record.

    Args:
        exercise: Upstream exercise dict.
        include_samples: Summarize the ``samples`` blocks when present.
        config: Algorithm parameters.
    """
    duration = pick(exercise, "duration")
    summary = ExerciseSummary(
        id=pick(exercise, "id"),
        start_time=pick(exercise, "start_time"),
        start_time_utc_offset=pick(exercise, "start_time_utc_offset"),
        duration=duration,
        duration_seconds=parse_iso_duration(duration),
        calories=pick(exercise, "calories"),
        distance=pick(exercise, "distance"),
        heart_rate=pick(exercise, "heart_rate"),
        training_load=pick(exercise, "training_load"),
        sport=pick(exercise, "sport"),
        detailed_sport_info=pick(exercise, "detailed_sport_info"),
        fat_percentage=pick(exercise, "fat_percentage"),
        carbohydrate_percentage=pick(exercise, "carbohydrate_percentage"),
        protein_percentage=pick(exercise, "protein_percentage"),
        running_index=pick(exercise, "running_index"),
        training_load_pro=pick(exercise, "training_load_pro"),
        heart_rate_zones=pick(exercise, "heart_rate_zones") or None,
    )

    blocks = pick(exercise, "samples")
    if include_samples and blocks:
        samples = preprocess_samples(blocks, config)
        if not samples.is_empty:
            summary.samples = samples

    return summary
