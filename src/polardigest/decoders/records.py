"""Field access for upstream records.

The upstream is inconsistent about key style: some endpoints use
``"start-time"``, others ``"start_time"``, sometimes within one record.
"""

from __future__ import annotations

from typing import Any, Mapping

from polardigest.decoders.samples import parse_value


def pick(record: Mapping[str, Any], name: str, default: Any = None) -> Any:
    """Look up *name* as given, then in kebab-case, then in snake_case.

    Anything that is not a mapping has no fields and yields *default*.
    """
    if not isinstance(record, Mapping):
        return default
    for key in (name, name.replace("_", "-"), name.replace("-", "_")):
        if key in record and record[key] is not None:
            return record[key]
    return default


def seconds_to_minutes(value: Any) -> int | None:
    """Convert a duration in seconds to whole minutes, keeping None.

    Non-numeric durations are treated as absent.
    """
    seconds = parse_value(value)
    if seconds is None:
        return None
    return int(round(seconds / 60.0))
