import os
from datetime import datetime, timedelta, timezone

import pytest

from feed_normalizer.entries import (
    get_content,
    get_title,
    normalize_entries,
    normalize_entry,
)
from feed_normalizer.models import RawContent, RawEnclosure, RawEntry
from feed_normalizer.utils import MAX_PLAUSIBLE_DATE, MIN_PLAUSIBLE_DATE

FEED_LINK = "http://example.com/blog/"
FETCH_URL = "http://feeds.example.com/blog.xml"


def _normalize(entry, now):
    return normalize_entry(entry, FEED_LINK, FETCH_URL, now)


def test_entry_without_uri_or_link_is_dropped(now):
    assert _normalize(RawEntry(uri=" ", link="", title="Orphan"), now) is None
    assert _normalize(RawEntry(title="Orphan"), now) is None


def test_guid_prefers_uri_and_falls_back_to_link(now):
    with_uri = _normalize(RawEntry(uri="tag:example.com,1", link="http://example.com/a"), now)
    without_uri = _normalize(RawEntry(uri="  ", link="http://example.com/b"), now)

    assert with_uri.guid == "tag:example.com,1"
    assert without_uri.guid == "http://example.com/b"


def test_guid_and_url_are_truncated(now):
    long_link = "http://example.com/" + "x" * 3000
    entry = _normalize(RawEntry(link=long_link), now)

    assert len(entry.guid) == 2048
    assert len(entry.url) == 2048


def test_updated_prefers_updated_then_published_then_now(now):
    updated = now - timedelta(days=1)
    published = now - timedelta(days=2)

    both = _normalize(RawEntry(link="http://a", updated=updated, published=published), now)
    only_published = _normalize(RawEntry(link="http://a", published=published), now)
    neither = _normalize(RawEntry(link="http://a"), now)

    assert both.updated == updated
    assert only_published.updated == published
    assert neither.updated == now


@pytest.mark.parametrize(
    "declared",
    [
        datetime(1970, 1, 1, tzinfo=timezone.utc),
        datetime(2200, 1, 1, tzinfo=timezone.utc),
        datetime(2030, 1, 1, tzinfo=timezone.utc),
    ],
)
def test_updated_is_clamped_to_now(now, declared):
    entry = _normalize(RawEntry(link="http://a", updated=declared), now)

    assert entry.updated == now
    assert MIN_PLAUSIBLE_DATE <= entry.updated <= MAX_PLAUSIBLE_DATE


def test_relative_link_is_resolved_against_feed_link(now):
    entry = _normalize(RawEntry(uri="id-1", link="/post/1"), now)
    assert entry.url == "http://example.com/post/1"


def test_relative_link_uses_fetch_url_without_feed_link(now):
    entry = normalize_entry(RawEntry(uri="id-1", link="post/1"), None, FETCH_URL, now)
    assert entry.url == "http://feeds.example.com/post/1"


def test_guid_is_used_as_url_when_link_missing(now):
    permalink = _normalize(RawEntry(uri="https://example.com/p/1"), now)
    opaque = _normalize(RawEntry(uri="urn:uuid:1234"), now)

    assert permalink.url == "https://example.com/p/1"
    assert opaque.url is None


def test_content_blocks_are_joined_in_order():
    entry = RawEntry(
        contents=(RawContent(value=" first", type="text/html"), RawContent(value="second ")),
        description="ignored",
    )
    assert get_content(entry) == "first" + os.linesep + "second"


def test_content_falls_back_to_description():
    assert get_content(RawEntry(description="  summary text  ")) == "summary text"
    assert get_content(RawEntry(description="   ")) is None
    assert get_content(RawEntry()) is None


def test_title_defaults(now):
    published = datetime(2023, 3, 4, 5, 6, 7, tzinfo=timezone.utc)

    assert get_title(RawEntry(title="  Hello  ")) == "Hello"
    assert get_title(RawEntry(title=" ", published=published)) == published.strftime("%x %X")
    assert get_title(RawEntry(title=" ", published=published)).strip()
    assert get_title(RawEntry(title=None)) == "(no title)"


def test_author_and_first_enclosure(now):
    entry = _normalize(
        RawEntry(
            link="http://example.com/ep1",
            author="  Jane Doe ",
            enclosures=(
                RawEnclosure(url="http://cdn.example.com/ep1.mp3", type="audio/mpeg"),
                RawEnclosure(url="http://cdn.example.com/ep1.ogg", type="audio/ogg"),
            ),
        ),
        now,
    )

    assert entry.content.author == "Jane Doe"
    assert entry.content.enclosure_url == "http://cdn.example.com/ep1.mp3"
    assert entry.content.enclosure_type == "audio/mpeg"


def test_blank_author_and_missing_enclosure(now):
    entry = _normalize(RawEntry(link="http://example.com/a", author="   "), now)

    assert entry.content.author is None
    assert entry.content.enclosure_url is None
    assert entry.content.enclosure_type is None


def test_normalize_entries_preserves_order_and_skips_orphans(now):
    entries = [
        RawEntry(link="http://example.com/2"),
        RawEntry(title="no identity"),
        RawEntry(link="http://example.com/1"),
    ]

    result = normalize_entries(entries, FEED_LINK, FETCH_URL, now)

    assert [entry.guid for entry in result] == [
        "http://example.com/2",
        "http://example.com/1",
    ]
