"""Analytics pipeline: route upstream payloads to the entity summarizers.

A payload is either one upstream record or the list wrapper the upstream
returns for that kind (``{"nights": [...]}``, ``{"exercises": [...]}``, or
a bare JSON list).  Each record becomes one summary.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

from polardigest.config import DEFAULT_CONFIG, SummaryConfig
from polardigest.decoders.records import pick
from polardigest.errors import UnknownEntityError
from polardigest.analytics.activity import (
    activity_date,
    hourly_step_profile,
    summarize_activity_day,
)
from polardigest.analytics.exercise import summarize_exercise
from polardigest.analytics.heart_rate import summarize_heart_rate_day
from polardigest.analytics.recharge import summarize_recharge
from polardigest.analytics.sleep import summarize_sleep
from polardigest.analytics.summary import SummaryBatch

# kind -> keys under which the upstream wraps lists of that kind
LIST_KEYS: dict[str, tuple[str, ...]] = {
    "exercise": ("exercises",),
    "sleep": ("nights",),
    "recharge": ("recharges",),
    "heart-rate": ("continuous_heart_rate", "continuous-heart-rate"),
    "activity": ("activities",),
}


def _unwrap(kind: str, payload: Any) -> list[Mapping[str, Any]]:
    if isinstance(payload, list):
        return payload
    for key in LIST_KEYS[kind]:
        if key in payload:
            return payload[key] or []
    return [payload]


def _activity_batch(payload: Any) -> list:
    """Pair each activity day with the samples record of the same date."""
    days = _unwrap("activity", payload)
    samples_by_date: dict[str, Mapping[str, Any]] = {}
    if isinstance(payload, Mapping):
        for s in payload.get("samples", []) or []:
            if pick(s, "date"):
                samples_by_date[pick(s, "date")] = s

    summaries = []
    for day in days:
        summaries.append(summarize_activity_day(day, samples_by_date.get(activity_date(day))))
    return summaries


def summarize(
    kind: str,
    payload: Any,
    config: SummaryConfig = DEFAULT_CONFIG,
    include_samples: bool = True,
) -> SummaryBatch:
    """Summarize every record of *kind* found in *payload*.

    Args:
        kind: One of ``exercise``, ``sleep``, ``recharge``, ``heart-rate``,
            ``activity``.
        payload: Decoded upstream JSON.
        config: Algorithm parameters.
        include_samples: For exercises, summarize the sample channels.

    Raises:
        UnknownEntityError: If *kind* is not supported.
    """
    summarizers: dict[str, Callable[[Mapping[str, Any]], Any]] = {
        "exercise": lambda r: summarize_exercise(r, include_samples, config),
        "sleep": lambda r: summarize_sleep(r, config),
        "recharge": lambda r: summarize_recharge(r, config=config),
        "heart-rate": lambda r: summarize_heart_rate_day(r, config),
    }

    if kind == "activity":
        days = _activity_batch(payload)
        return SummaryBatch(kind=kind, items=days, hourly_steps=hourly_step_profile(days))
    if kind not in summarizers:
        raise UnknownEntityError(f"unknown entity kind: {kind!r}")

    fn = summarizers[kind]
    return SummaryBatch(kind=kind, items=[fn(r) for r in _unwrap(kind, payload)])
