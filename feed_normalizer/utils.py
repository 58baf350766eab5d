"""Date, URL and string helpers shared by the normalization stages."""

from __future__ import annotations

import calendar
import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Optional
from urllib.parse import urljoin, urlparse

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Timestamps outside this window are treated as corrupt.
MIN_PLAUSIBLE_DATE = EPOCH + timedelta(days=1)
MAX_PLAUSIBLE_DATE = EPOCH + timedelta(seconds=2**31 - 1) - timedelta(days=1)

MAX_URL_LENGTH = 2048
NO_TITLE = "(no title)"


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def trim_to_none(value: Optional[str]) -> Optional[str]:
    """Strip whitespace, returning ``None`` for empty results."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def truncate(value: Optional[str], limit: int = MAX_URL_LENGTH) -> Optional[str]:
    """Limit a string to ``limit`` characters."""
    if value is None or len(value) <= limit:
        return value
    logger.debug("Truncating value to %d characters", limit)
    return value[:limit]


def struct_to_datetime(value: Optional[time.struct_time]) -> Optional[datetime]:
    """Convert feedparser's UTC struct_time values to aware datetimes."""
    if value is None:
        return None
    try:
        return datetime.fromtimestamp(calendar.timegm(value), tz=timezone.utc)
    except (OverflowError, ValueError, OSError):
        # Out of range for the platform; the caller will substitute "now".
        return EPOCH


def validate_date(
    date: Optional[datetime], now: datetime, null_to_now: bool
) -> Optional[datetime]:
    """Replace missing, implausible or future dates.

    Missing dates become ``now`` when ``null_to_now`` is set and ``None``
    otherwise. Dates outside ``MIN_PLAUSIBLE_DATE``..``MAX_PLAUSIBLE_DATE`` and
    dates after ``now`` are replaced with ``now``.
    """
    if date is None:
        return now if null_to_now else None
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)
    if date < MIN_PLAUSIBLE_DATE or date > MAX_PLAUSIBLE_DATE:
        return now
    if date > now:
        return now
    return date


def is_absolute_url(url: str) -> bool:
    parsed = urlparse(url)
    return bool(parsed.scheme and parsed.netloc)


def to_absolute_url(
    relative_url: Optional[str],
    feed_link: Optional[str],
    fallback_url: Optional[str],
) -> Optional[str]:
    """Resolve an entry link against the feed link or the fetch URL."""
    if is_blank(relative_url):
        return None
    relative_url = relative_url.strip()
    if is_absolute_url(relative_url):
        return relative_url

    base_url = feed_link if feed_link and is_absolute_url(feed_link) else fallback_url
    if is_blank(base_url):
        logger.debug("No base URL to resolve relative link %s", relative_url)
        return None
    return urljoin(base_url, relative_url)
