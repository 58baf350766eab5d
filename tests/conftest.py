import textwrap
from datetime import datetime, timezone

import pytest


@pytest.fixture
def now():
    return datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def rss_bytes():
    """Build an RSS 2.0 document around the given channel/item markup."""

    def build(items: str = "", extra_channel: str = "") -> bytes:
        document = textwrap.dedent(
            """\
            <?xml version="1.0" encoding="utf-8"?>
            <rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">
              <channel>
                <title>Example Feed</title>
                <link>http://example.com/</link>
                <description>Example description</description>
                {extra_channel}
                {items}
              </channel>
            </rss>
            """
        ).format(items=items, extra_channel=extra_channel)
        return document.encode("utf-8")

    return build
