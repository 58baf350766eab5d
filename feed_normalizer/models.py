"""Shared data models for feed_normalizer."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class FeedSource:
    """A single feed listed in the OPML configuration."""

    category: str
    title: str
    url: str


@dataclass(frozen=True)
class ForeignElement:
    """Feed-level element outside the schema the decoder understands."""

    namespace: Optional[str]
    name: str
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RawLink:
    rel: Optional[str]
    href: Optional[str]


@dataclass(frozen=True)
class RawContent:
    value: Optional[str]
    type: Optional[str] = None


@dataclass(frozen=True)
class RawEnclosure:
    url: Optional[str]
    type: Optional[str] = None


@dataclass(frozen=True)
class RawEntry:
    """Entry as declared by the decoded document, before any cleanup."""

    uri: Optional[str] = None
    link: Optional[str] = None
    updated: Optional[datetime] = None
    published: Optional[datetime] = None
    title: Optional[str] = None
    description: Optional[str] = None
    contents: Tuple[RawContent, ...] = ()
    author: Optional[str] = None
    enclosures: Tuple[RawEnclosure, ...] = ()


@dataclass(frozen=True)
class RawDocument:
    """Decoded syndication document, independent of RSS or Atom flavour."""

    title: Optional[str] = None
    link: Optional[str] = None
    published: Optional[datetime] = None
    links: Tuple[RawLink, ...] = ()
    entries: Tuple[RawEntry, ...] = ()
    foreign_markup: Tuple[ForeignElement, ...] = ()


@dataclass(frozen=True)
class FeedHeader:
    url: str
    link: Optional[str]
    title: Optional[str] = None
    push_hub: Optional[str] = None
    push_topic: Optional[str] = None


@dataclass(frozen=True)
class EntryContent:
    title: str
    body: Optional[str] = None
    author: Optional[str] = None
    enclosure_url: Optional[str] = None
    enclosure_type: Optional[str] = None


@dataclass(frozen=True)
class NormalizedEntry:
    """Storage-ready entry with a stable guid and a validated timestamp."""

    guid: str
    url: Optional[str]
    updated: datetime
    content: EntryContent


@dataclass(frozen=True)
class FeedStatistics:
    last_entry_date: Optional[datetime] = None
    last_published_date: Optional[datetime] = None
    average_entry_interval: Optional[timedelta] = None


@dataclass(frozen=True)
class NormalizedFeed:
    url: str
    link: Optional[str]
    url_after_redirect: Optional[str] = None
    push_hub: Optional[str] = None
    push_topic: Optional[str] = None
    last_published_date: Optional[datetime] = None
    last_entry_date: Optional[datetime] = None
    average_entry_interval: Optional[timedelta] = None


@dataclass(frozen=True)
class FetchedFeed:
    """Result of a single parse: the feed record plus its entries."""

    feed: NormalizedFeed
    entries: Tuple[NormalizedEntry, ...] = ()
    title: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serialisable representation."""
        return _jsonable(asdict(self))


def _jsonable(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, timedelta):
        return value.total_seconds()
    return value
