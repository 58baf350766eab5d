"""Exception types raised by feed_normalizer."""

from __future__ import annotations


class FeedNormalizerError(Exception):
    """Base class for feed_normalizer failures."""


class DocumentDecodeError(FeedNormalizerError):
    """Raised when bytes cannot be read as an RSS or Atom document."""


class FeedParseError(FeedNormalizerError):
    """Raised by ``parse_feed`` for any failure while parsing a feed."""

    def __init__(self, feed_url: str, cause: BaseException):
        super().__init__(f"Could not parse feed from {feed_url} : {cause}")
        self.feed_url = feed_url
