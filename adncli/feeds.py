"""Feed retrieval, parsing and description cleanup."""

from __future__ import annotations

import html
import logging
import re
import time
from typing import Iterable, Iterator, List, Optional
from xml.etree import ElementTree as ET

import requests

from .exceptions import HTTPStatusError, MalformedDocumentError, TransportError
from .models import Feed, Item

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0
DEFAULT_USER_AGENT = "adncli/0.1"
HTML_TAG_PATTERN = r"<[^>]*>"
ENTITY_MODES = ("full", "nbsp")

_CHUNK_SIZE = 8192


def _child_text(element: ET.Element, tag: str) -> str:
    return (element.findtext(tag) or "").strip()


def _item_from_element(element: ET.Element) -> Item:
    return Item(
        title=_child_text(element, "title"),
        link=_child_text(element, "link"),
        description=_child_text(element, "description"),
        pub_date=_child_text(element, "pubDate"),
    )


class _FeedBuilder:
    """Collect channel data from pull-parser events as they arrive."""

    def __init__(self) -> None:
        self._path: List[str] = []
        self._channel: Optional[ET.Element] = None
        self._items: List[Item] = []

    def consume(self, events: Iterable[tuple]) -> None:
        for event, element in events:
            if event == "start":
                if not self._path and element.tag != "rss":
                    raise MalformedDocumentError(
                        f"expected <rss> root element, got <{element.tag}>"
                    )
                self._path.append(element.tag)
                continue

            self._path.pop()
            if self._channel is not None:
                continue
            if self._path == ["rss", "channel"] and element.tag == "item":
                self._items.append(_item_from_element(element))
                element.clear()
            elif self._path == ["rss"] and element.tag == "channel":
                self._channel = element

    def result(self) -> Feed:
        if self._channel is None:
            raise MalformedDocumentError("RSS document has no <channel> element")
        return Feed(
            title=_child_text(self._channel, "title"),
            description=_child_text(self._channel, "description"),
            link=_child_text(self._channel, "link"),
            items=self._items,
        )


def parse_feed(chunks: Iterable[bytes]) -> Feed:
    """Incrementally decode an RSS document from byte chunks.

    Raises MalformedDocumentError for XML that is not well formed, ends
    before the root element closes, or lacks the rss > channel structure.
    """
    parser = ET.XMLPullParser(events=("start", "end"))
    builder = _FeedBuilder()
    try:
        for chunk in chunks:
            parser.feed(chunk)
            builder.consume(parser.read_events())
        parser.close()
        builder.consume(parser.read_events())
    except ET.ParseError as exc:
        raise MalformedDocumentError(f"invalid RSS document: {exc}") from exc
    return builder.result()


class FeedPipeline:
    """Fetch RSS feeds over HTTP and clean their text for display."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        strict_status: bool = False,
        entity_mode: str = "full",
        tag_pattern: str = HTML_TAG_PATTERN,
        session: Optional[requests.Session] = None,
    ) -> None:
        if timeout <= 0:
            raise ValueError("timeout must be positive.")
        if entity_mode not in ENTITY_MODES:
            raise ValueError(
                f"Unsupported entity mode: {entity_mode} (expected one of {', '.join(ENTITY_MODES)})"
            )
        try:
            self.html_tag_regex = re.compile(tag_pattern)
        except re.error as exc:
            raise RuntimeError(f"Cannot compile tag pattern {tag_pattern!r}: {exc}") from exc

        self.timeout = timeout
        self.strict_status = strict_status
        self.entity_mode = entity_mode
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = user_agent

    @classmethod
    def from_config(cls, config) -> "FeedPipeline":
        """Build a pipeline from an ``AppConfig``."""
        return cls(
            timeout=config.timeout,
            user_agent=config.user_agent,
            strict_status=config.strict_status,
            entity_mode=config.entity_mode,
        )

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "FeedPipeline":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def is_success(self, status_code: int) -> bool:
        if self.strict_status:
            return status_code == 200
        return status_code < 300

    def fetch(self, url: str, timeout: Optional[float] = None) -> Feed:
        """Download and parse the feed at ``url``.

        ``timeout`` (seconds, defaulting to the pipeline's) bounds each socket
        operation as well as the total time spent reading the body.
        """
        limit = self.timeout if timeout is None else timeout
        if limit <= 0:
            raise ValueError("timeout must be positive.")
        deadline = time.monotonic() + limit
        logger.info("Fetching feed %s", url)
        try:
            with self.session.get(url, timeout=limit, stream=True) as response:
                if not self.is_success(response.status_code):
                    logger.info(
                        "Feed %s answered with status %d", url, response.status_code
                    )
                    raise HTTPStatusError(response.status_code, response.reason)
                feed = parse_feed(self._iter_body(response, deadline))
        except requests.RequestException as exc:
            logger.info("Failed to fetch feed %s: %s", url, exc)
            raise TransportError(f"failed to fetch {url}: {exc}") from exc
        except MalformedDocumentError as exc:
            logger.info("Feed %s is not a valid RSS document: %s", url, exc)
            raise

        logger.info("Collected %d items from feed '%s'", len(feed.items), feed.title)
        return feed

    @staticmethod
    def _iter_body(response, deadline: float) -> Iterator[bytes]:
        for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
            if time.monotonic() > deadline:
                raise requests.Timeout("deadline exceeded while reading feed body")
            yield chunk

    def _decode_entities(self, text: str) -> str:
        if self.entity_mode == "full":
            return html.unescape(text).replace("\xa0", " ")
        return text.replace("&nbsp;", " ")

    def sanitize(self, text: str) -> str:
        """Strip HTML tags and decode entities from feed text.

        Stripping and decoding repeat until the text stops changing, so
        markup that only appears once entities are decoded (``&lt;b&gt;``)
        is removed as well and a second call returns the same text.
        """
        clean = text
        while True:
            decoded = self._decode_entities(self.html_tag_regex.sub("", clean))
            if decoded == clean:
                return clean.strip()
            clean = decoded
