"""Feed-level metadata: homepage link, title and push hub/topic links."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Optional

from .models import FeedHeader, RawDocument, RawLink

logger = logging.getLogger(__name__)

ATOM_10_NS = "http://www.w3.org/2005/Atom"


def recover_foreign_links(document: RawDocument) -> RawDocument:
    """Add Atom ``<link>`` elements embedded in RSS foreign markup to the links."""
    recovered = [
        RawLink(rel=element.attributes.get("rel"), href=element.attributes.get("href"))
        for element in document.foreign_markup
        if element.name == "link" and element.namespace == ATOM_10_NS
    ]
    if not recovered:
        return document
    logger.debug("Recovered %d atom links from foreign markup", len(recovered))
    return replace(document, links=document.links + tuple(recovered))


def find_link(links: Iterable[RawLink], rel: str) -> Optional[str]:
    """Return the href of the first link whose relation matches ``rel``."""
    for link in links:
        if link.rel and link.rel.lower() == rel.lower():
            return link.href
    return None


def normalize_header(document: RawDocument, feed_url: str) -> FeedHeader:
    document = recover_foreign_links(document)

    push_hub = find_link(document.links, "hub")
    if push_hub:
        logger.debug("found hub %s for feed %s", push_hub, document.link)
    push_topic = find_link(document.links, "self")
    if push_topic:
        logger.debug("found self %s for feed %s", push_topic, document.link)

    return FeedHeader(
        url=feed_url,
        link=document.link,
        title=document.title,
        push_hub=push_hub,
        push_topic=push_topic,
    )
