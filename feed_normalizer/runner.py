"""High-level orchestration: fetch configured feeds and normalize them."""

from __future__ import annotations

import concurrent.futures
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

from .config import DEFAULT_USER_AGENT, parse_feeds_config
from .errors import FeedParseError
from .fetcher import fetch_feed
from .models import FeedSource
from .parser import parse_feed

logger = logging.getLogger(__name__)


@dataclass
class RunConfig:
    """Runtime options for executing the application."""

    feeds_file: Optional[str] = None
    timeout: float = 10.0
    concurrency: int = 10
    user_agent: str = DEFAULT_USER_AGENT
    input_path: Optional[str] = None
    input_url: Optional[str] = None


@dataclass
class RunResult:
    """Returned data after executing the app."""

    output_text: str
    feeds: List[Dict[str, Any]]
    failed: int = 0


def _process_source(source: FeedSource, config: RunConfig) -> Optional[Dict[str, Any]]:
    try:
        fetched = fetch_feed(source.url, timeout=config.timeout, user_agent=config.user_agent)
    except requests.RequestException as exc:
        logger.warning("Failed to fetch feed '%s' (%s): %s", source.title, source.url, exc)
        return None

    try:
        result = parse_feed(source.url, fetched.content, fetched.url_after_redirect)
    except FeedParseError as exc:
        logger.warning("%s", exc)
        return None

    payload = result.to_dict()
    payload["category"] = source.category
    payload["source_title"] = source.title
    return payload


def _collect_feeds(config: RunConfig) -> List[Optional[Dict[str, Any]]]:
    if not config.feeds_file:
        raise RuntimeError("No feeds file configured.")
    sources = parse_feeds_config(config.feeds_file)
    if not sources:
        raise RuntimeError("No feeds found in the configuration.")

    results: List[Optional[Dict[str, Any]]] = [None] * len(sources)
    with concurrent.futures.ThreadPoolExecutor(
        max_workers=config.concurrency
    ) as executor:
        future_to_index = {
            executor.submit(_process_source, source, config): index
            for index, source in enumerate(sources)
        }
        for future in concurrent.futures.as_completed(future_to_index):
            results[future_to_index[future]] = future.result()
    return results


def _parse_local_file(config: RunConfig) -> Dict[str, Any]:
    location = Path(config.input_path)
    try:
        raw_bytes = location.read_bytes()
    except FileNotFoundError as exc:
        raise RuntimeError(f"Feed file not found: {location}") from exc

    feed_url = config.input_url or location.resolve().as_uri()
    try:
        result = parse_feed(feed_url, raw_bytes)
    except FeedParseError as exc:
        raise RuntimeError(str(exc)) from exc
    return result.to_dict()


def execute(config: RunConfig) -> RunResult:
    """Run the application logic and return the result payload."""
    if config.input_path:
        feeds = [_parse_local_file(config)]
        failed = 0
    else:
        results = _collect_feeds(config)
        feeds = [result for result in results if result is not None]
        failed = len(results) - len(feeds)

    logger.info("Completed processing. Normalized %d feeds (%d failed).", len(feeds), failed)
    output_text = json.dumps(feeds, indent=2, ensure_ascii=False)
    return RunResult(output_text=output_text, feeds=feeds, failed=failed)
