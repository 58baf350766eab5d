"""HTTP retrieval of feed documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import requests

from .config import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    content: bytes
    url_after_redirect: str


def fetch_feed(
    url: str, timeout: float = 10.0, user_agent: str = DEFAULT_USER_AGENT
) -> FetchResult:
    """Download a feed, following redirects. Raises ``requests.RequestException``."""
    logger.info("Fetching feed %s", url)
    response = requests.get(url, timeout=timeout, headers={"User-Agent": user_agent})
    response.raise_for_status()
    if response.url and response.url != url:
        logger.debug("Feed %s redirected to %s", url, response.url)
    return FetchResult(content=response.content, url_after_redirect=response.url or url)
