"""Parse a fetched feed into its normalized representation."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from .document import decode_document
from .entries import normalize_entries
from .errors import FeedParseError
from .header import normalize_header
from .models import FetchedFeed, NormalizedFeed
from .stats import aggregate

logger = logging.getLogger(__name__)


def parse_feed(
    feed_url: str,
    raw_bytes: bytes,
    url_after_redirect: Optional[str] = None,
    now: Optional[datetime] = None,
) -> FetchedFeed:
    """Decode ``raw_bytes`` and normalize the feed header, entries and statistics.

    ``url_after_redirect`` is only used as a base for relative entry links and
    defaults to ``feed_url``. ``now`` is the reference time for missing and
    future dates; it is read once per call when not given.

    Any failure is raised as ``FeedParseError``; entries lacking both an id
    and a link are skipped.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    if url_after_redirect is None:
        url_after_redirect = feed_url

    try:
        document = decode_document(raw_bytes)
        header = normalize_header(document, feed_url)
        entries = normalize_entries(
            document.entries, header.link, url_after_redirect, now
        )
        stats = aggregate(entries, document.published, now)
    except Exception as exc:
        raise FeedParseError(feed_url, exc) from exc

    skipped = len(document.entries) - len(entries)
    if skipped:
        logger.debug("Skipped %d entries without identity in %s", skipped, feed_url)
    logger.info("Parsed %d entries from feed %s", len(entries), feed_url)

    feed = NormalizedFeed(
        url=header.url,
        link=header.link,
        url_after_redirect=url_after_redirect,
        push_hub=header.push_hub,
        push_topic=header.push_topic,
        last_published_date=stats.last_published_date,
        last_entry_date=stats.last_entry_date,
        average_entry_interval=stats.average_entry_interval,
    )
    return FetchedFeed(feed=feed, entries=tuple(entries), title=header.title)
