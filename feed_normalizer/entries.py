"""Per-entry normalization: identity, timestamp, URL and content."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Iterable, List, Optional

from .models import EntryContent, NormalizedEntry, RawEntry
from .utils import (
    MAX_URL_LENGTH,
    NO_TITLE,
    is_blank,
    to_absolute_url,
    trim_to_none,
    truncate,
    validate_date,
)

logger = logging.getLogger(__name__)


def get_content(entry: RawEntry) -> Optional[str]:
    """Join typed content blocks, falling back to the description."""
    if entry.contents:
        content = os.linesep.join(block.value or "" for block in entry.contents)
    else:
        content = entry.description
    return trim_to_none(content)


def get_title(entry: RawEntry) -> str:
    """Return the entry title or a placeholder built from the published date."""
    title = trim_to_none(entry.title)
    if title:
        return title
    if entry.published is not None:
        # Locale's default date and time representation.
        return entry.published.strftime("%x %X")
    return NO_TITLE


def _entry_date(entry: RawEntry, now: datetime) -> datetime:
    return entry.updated or entry.published or now


def normalize_entry(
    entry: RawEntry,
    feed_link: Optional[str],
    url_after_redirect: Optional[str],
    now: datetime,
) -> Optional[NormalizedEntry]:
    """Build the canonical entry, or return ``None`` when it has no identity."""
    guid = entry.uri
    if is_blank(guid):
        guid = entry.link
    if is_blank(guid):
        logger.debug("Skipping entry without guid or link: %r", entry.title)
        return None
    guid = truncate(guid, MAX_URL_LENGTH)

    updated = validate_date(_entry_date(entry, now), now, null_to_now=True)

    url = truncate(
        to_absolute_url(entry.link, feed_link, url_after_redirect), MAX_URL_LENGTH
    )
    if is_blank(url) and guid.startswith("http"):
        url = guid

    enclosure = entry.enclosures[0] if entry.enclosures else None
    content = EntryContent(
        title=get_title(entry),
        body=get_content(entry),
        author=trim_to_none(entry.author),
        enclosure_url=truncate(enclosure.url, MAX_URL_LENGTH) if enclosure else None,
        enclosure_type=enclosure.type if enclosure else None,
    )

    return NormalizedEntry(guid=guid, url=url, updated=updated, content=content)


def normalize_entries(
    entries: Iterable[RawEntry],
    feed_link: Optional[str],
    url_after_redirect: Optional[str],
    now: datetime,
) -> List[NormalizedEntry]:
    """Normalize entries in document order, dropping those without identity."""
    normalized: List[NormalizedEntry] = []
    for entry in entries:
        result = normalize_entry(entry, feed_link, url_after_redirect, now)
        if result is not None:
            normalized.append(result)
    return normalized
