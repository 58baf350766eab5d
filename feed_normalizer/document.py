"""Decoding of raw feed bytes into a RawDocument."""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

import feedparser
from bs4 import BeautifulSoup

from .errors import DocumentDecodeError
from .models import (
    ForeignElement,
    RawContent,
    RawDocument,
    RawEnclosure,
    RawEntry,
    RawLink,
)
from .utils import struct_to_datetime

logger = logging.getLogger(__name__)


def _local_name(name: str) -> str:
    # The xml builder keeps the prefix in the tag name ("atom:link").
    return name.rsplit(":", 1)[-1]


def extract_foreign_markup(raw_bytes: bytes) -> Tuple[ForeignElement, ...]:
    """Return feed-level elements living outside the container's namespace."""
    soup = BeautifulSoup(raw_bytes, "xml")
    root = soup.find(True)
    if root is None:
        return ()

    container = root.find("channel", recursive=False) or root
    elements: List[ForeignElement] = []
    for child in container.find_all(True, recursive=False):
        if child.namespace == container.namespace:
            continue
        elements.append(
            ForeignElement(
                namespace=child.namespace,
                name=_local_name(child.name),
                attributes={str(key): str(value) for key, value in child.attrs.items()},
            )
        )
    return tuple(elements)


def _raw_entry(entry: Any) -> RawEntry:
    contents = tuple(
        RawContent(value=block.get("value"), type=block.get("type"))
        for block in entry.get("content") or []
    )
    enclosures = tuple(
        RawEnclosure(url=enclosure.get("href"), type=enclosure.get("type"))
        for enclosure in entry.get("enclosures") or []
    )
    # feedparser's "updated" lookup silently falls back to "published".
    updated = entry.get("updated_parsed") if "updated_parsed" in entry else None
    return RawEntry(
        uri=entry.get("id"),
        link=entry.get("link"),
        updated=struct_to_datetime(updated),
        published=struct_to_datetime(entry.get("published_parsed")),
        title=entry.get("title"),
        description=entry.get("summary"),
        contents=contents,
        author=entry.get("author"),
        enclosures=enclosures,
    )


def _declared_published(feed: Any) -> Optional[Any]:
    return feed.get("published_parsed") or feed.get("updated_parsed")


def decode_document(raw_bytes: bytes) -> RawDocument:
    """Decode RSS or Atom bytes with feedparser.

    Encoding detection and entity handling are left to feedparser. Documents
    that feedparser cannot identify as any feed format raise
    ``DocumentDecodeError``.
    """
    if not raw_bytes:
        raise DocumentDecodeError("Input is empty")

    parsed = feedparser.parse(raw_bytes)
    if not parsed.get("version"):
        cause = parsed.get("bozo_exception")
        raise DocumentDecodeError(
            f"Unrecognised feed format: {cause}" if cause else "Unrecognised feed format"
        )
    if parsed.get("bozo"):
        logger.debug("Feed parsed with errors: %s", parsed.get("bozo_exception"))

    feed = parsed.get("feed", {})
    links = tuple(
        RawLink(rel=link.get("rel"), href=link.get("href"))
        for link in feed.get("links") or []
    )
    entries = tuple(_raw_entry(entry) for entry in parsed.get("entries") or [])

    return RawDocument(
        title=feed.get("title"),
        link=feed.get("link"),
        published=struct_to_datetime(_declared_published(feed)),
        links=links,
        entries=entries,
        foreign_markup=extract_foreign_markup(raw_bytes),
    )
