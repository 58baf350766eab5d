"""Configuration loading for feed sources and runtime options."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
from xml.etree import ElementTree as ET

from .models import FeedSource

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "feed-normalizer/0.1"


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class AppConfig:
    feeds_file: str
    timeout: float = 10.0
    concurrency: int = 10
    user_agent: str = DEFAULT_USER_AGENT
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def parse_feeds_config(path: str) -> List[FeedSource]:
    """Parse the OPML configuration file and return feed definitions."""
    logger.info("Loading feed configuration from %s", path)
    tree = ET.parse(path)
    root = tree.getroot()
    body = root.find("body")
    feeds: List[FeedSource] = []

    def walk(outline: ET.Element, current_category: Optional[str]) -> None:
        title = outline.attrib.get("title") or outline.attrib.get("text")
        feed_url = outline.attrib.get("xmlUrl")
        outline_type = outline.attrib.get("type")

        if outline_type == "rss" and feed_url:
            feeds.append(
                FeedSource(
                    category=current_category or title or "Uncategorized",
                    title=title or feed_url,
                    url=feed_url,
                )
            )
            logger.debug(
                "Registered feed '%s' (category='%s')", feed_url, feeds[-1].category
            )
            return

        next_category = title if title else current_category
        for child in outline.findall("outline"):
            walk(child, next_category)

    if body is None:
        raise ValueError("feeds.xml is missing the <body> section.")

    for outline in body.findall("outline"):
        walk(outline, outline.attrib.get("title") or outline.attrib.get("text"))

    logger.info("Loaded %d feed endpoints from configuration", len(feeds))
    return feeds


def _resolve_path(base_path: Path, target_path: str) -> str:
    """Resolve a path relative to the base config file if it's not absolute."""
    target = Path(target_path)
    if target.is_absolute():
        return str(target)
    return str((base_path.parent / target).resolve())


def parse_app_config(path: str) -> AppConfig:
    """Parse the main application configuration XML."""
    config_path = Path(path).resolve()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    logger.info("Loading application configuration from %s", config_path)
    tree = ET.parse(config_path)
    root = tree.getroot()

    feeds_node = root.find("feeds")
    if feeds_node is None or not feeds_node.text:
        raise ValueError("Config missing <feeds> path")
    feeds_file = _resolve_path(config_path, feeds_node.text.strip())

    timeout = float(root.findtext("timeout", "10"))
    concurrency = int(root.findtext("concurrency", "10"))
    if concurrency <= 0:
        raise ValueError("<concurrency> must be positive.")
    user_agent = (root.findtext("user-agent") or DEFAULT_USER_AGENT).strip()

    log_node = root.find("logging")
    logging_config = LoggingConfig()
    if log_node is not None:
        logging_config.level = log_node.findtext("level", "INFO")
        log_file = log_node.findtext("file")
        if log_file:
            logging_config.file = _resolve_path(config_path, log_file)

    return AppConfig(
        feeds_file=feeds_file,
        timeout=timeout,
        concurrency=concurrency,
        user_agent=user_agent,
        logging=logging_config,
    )
