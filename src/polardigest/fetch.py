"""Batched retrieval of per-day activity for a date range.

Transport lives elsewhere: callers pass two coroutine functions, one for
the daily activity record and one for the optional samples record.  Dates
are fetched in fixed-size batches, all dates of a batch in parallel and one
batch after another, so at most ``batch_size`` primary requests (plus their
sample requests) are in flight.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date, timedelta
from typing import Any, Awaitable, Callable, Mapping, Sequence

from polardigest.config import DEFAULT_CONFIG
from polardigest.analytics.activity import hourly_step_profile, summarize_activity_day
from polardigest.analytics.summary import ActivityDaySummary, SummaryBatch

logger = logging.getLogger(__name__)

DayFetcher = Callable[[str], Awaitable[Mapping[str, Any] | None]]


def date_range(start: date | str, end: date | str) -> list[str]:
    """Inclusive list of ISO dates from *start* to *end*."""
    first = date.fromisoformat(start) if isinstance(start, str) else start
    last = date.fromisoformat(end) if isinstance(end, str) else end
    days = (last - first).days
    return [(first + timedelta(days=i)).isoformat() for i in range(days + 1)]


def batched(items: Sequence[str], size: int) -> list[Sequence[str]]:
    if size < 1:
        raise ValueError("batch size must be at least 1")
    return [items[i:i + size] for i in range(0, len(items), size)]


async def _fetch_one(
    day: str,
    fetch_day: DayFetcher,
    fetch_samples: DayFetcher | None,
) -> ActivityDaySummary | None:
    """Fetch and summarize one date; None when the primary fetch fails."""
    requests = [fetch_day(day)]
    if fetch_samples is not None:
        requests.append(fetch_samples(day))
    results = await asyncio.gather(*requests, return_exceptions=True)

    record = results[0]
    if isinstance(record, Exception):
        logger.warning("activity fetch for %s failed: %s", day, record)
        return None

    samples = None
    if len(results) > 1:
        if isinstance(results[1], Exception):
            logger.info("activity samples for %s unavailable: %s", day, results[1])
        else:
            samples = results[1]

    if not record:
        logger.debug("no activity record for %s", day)
        return None
    return summarize_activity_day(record, samples)


async def gather_activity_days(
    dates: Sequence[str],
    fetch_day: DayFetcher,
    fetch_samples: DayFetcher | None = None,
    batch_size: int = DEFAULT_CONFIG.activity_batch_size,
) -> list[ActivityDaySummary]:
    """Fetch and summarize activity for every date, in batches.

    Args:
        dates: ISO dates, in the order results should come back.
        fetch_day: Coroutine function returning the daily activity record.
        fetch_samples: Optional coroutine function returning the samples
            record for a date.  Its failures only drop the samples.
        batch_size: Dates fetched concurrently per batch.

    Returns:
        Summaries for the dates whose primary fetch succeeded, in date order.
    """
    summaries: list[ActivityDaySummary] = []
    for batch in batched(list(dates), batch_size):
        results = await asyncio.gather(
            *[_fetch_one(day, fetch_day, fetch_samples) for day in batch]
        )
        summaries.extend(r for r in results if r is not None)
    return summaries


async def gather_activity_range(
    start: date | str,
    end: date | str,
    fetch_day: DayFetcher,
    fetch_samples: DayFetcher | None = None,
    batch_size: int = DEFAULT_CONFIG.activity_batch_size,
) -> SummaryBatch:
    """Fetch every day from *start* to *end* and summarize them as one batch.

    The batch carries the per-day summaries plus, when two or more days
    have step samples, the hour-of-day step profile across the range.
    """
    days = await gather_activity_days(
        date_range(start, end), fetch_day, fetch_samples, batch_size,
    )
    return SummaryBatch(kind="activity", items=days, hourly_steps=hourly_step_profile(days))
