"""Decoders for raw upstream sample data."""

from polardigest.decoders.samples import (
    ChannelType,
    RawChannel,
    DecodedChannel,
    decode,
    decode_channel,
    parse_value,
    filter_present,
    filter_paired,
)
from polardigest.decoders.records import pick, seconds_to_minutes
from polardigest.decoders.clock import (
    parse_clock,
    clock_minutes,
    format_clock,
    parse_instant,
    parse_iso_duration,
)

__all__ = [
    "ChannelType",
    "RawChannel",
    "DecodedChannel",
    "decode",
    "decode_channel",
    "parse_value",
    "filter_present",
    "filter_paired",
    "parse_clock",
    "clock_minutes",
    "format_clock",
    "parse_instant",
    "parse_iso_duration",
    "pick",
    "seconds_to_minutes",
]
