"""Feed-level temporal statistics derived from normalized entries."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional, Sequence

from .models import FeedStatistics, NormalizedEntry
from .utils import validate_date


def average_entry_interval(timestamps: Sequence[datetime]) -> Optional[timedelta]:
    """Mean gap between consecutive timestamps, ``None`` for fewer than two."""
    if len(timestamps) < 2:
        return None
    ordered = sorted(timestamps)
    gaps = [abs(later - earlier) for earlier, later in zip(ordered, ordered[1:])]
    return sum(gaps, timedelta()) / len(gaps)


def aggregate(
    entries: Sequence[NormalizedEntry],
    declared_published: Optional[datetime],
    now: datetime,
) -> FeedStatistics:
    published = validate_date(declared_published, now, null_to_now=False)
    if not entries:
        return FeedStatistics(last_published_date=published)

    timestamps = [entry.updated for entry in entries]
    last_entry_date = max(timestamps)
    if published is None or published < last_entry_date:
        published = last_entry_date

    return FeedStatistics(
        last_entry_date=last_entry_date,
        last_published_date=published,
        average_entry_interval=average_entry_interval(timestamps),
    )
