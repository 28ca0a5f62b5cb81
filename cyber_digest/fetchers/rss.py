from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

import feedparser
import requests

from ..errors import SourceFetchError
from ..models import Article, Source
from ..processors.extract import (
    extract_description,
    extract_link,
    extract_published,
    extract_title,
)
from ..utils.logging import get_logger

logger = get_logger("cyber_digest.fetchers.rss")

DEFAULT_MAX_ITEMS = 5

_DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/127.0.0.0 Safari/537.36"
    ),
    "Accept": "application/rss+xml, application/atom+xml, application/xml;q=0.9, */*;q=0.8",
}


@dataclass(frozen=True, slots=True)
class FetchResult:
    """Outcome of fetching one source.

    Either success with zero or more articles (``error is None``) or failure
    with a reason and no articles.
    """

    source: Source
    articles: Tuple[Article, ...] = ()
    error: Optional[SourceFetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, source: Source, error: SourceFetchError) -> "FetchResult":
        return cls(source=source, articles=(), error=error)


def fetch_rss_entries(source: Source, *, timeout: int = 30) -> List[Any]:
    """Fetch and parse RSS/Atom feed entries with timeouts.

    The network request is done with ``requests`` to get consistent timeouts
    and headers; the body is then parsed by ``feedparser``. Transport errors,
    HTTP error statuses and feeds that are malformed with no usable entries
    raise :class:`SourceFetchError`.
    """
    logger.debug("Fetching RSS from %s", source.url)
    try:
        resp = requests.get(source.url, headers=_DEFAULT_HEADERS, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise SourceFetchError(source.name, str(exc)) from exc

    parsed = feedparser.parse(resp.content)
    entries = list(getattr(parsed, "entries", None) or [])

    if getattr(parsed, "bozo", False):
        bozo_exc = getattr(parsed, "bozo_exception", None)
        if not entries:
            raise SourceFetchError(source.name, f"Invalid RSS/Atom feed ({bozo_exc})")
        # feedparser sets bozo on recoverable problems but may still parse entries
        logger.debug("Feed 'bozo' flagged for %s: %s", source.url, bozo_exc)

    return entries


def entry_to_article(source: Source, entry: Any) -> Article:
    return Article(
        source_name=source.name,
        title=extract_title(entry),
        link=extract_link(entry),
        published_at=extract_published(entry),
        description=extract_description(entry),
    )


class FeedFetcher:
    """Retrieve and normalize the newest items of a single source.

    This is the pipeline's fault-isolation boundary: failures are logged and
    returned as a failed :class:`FetchResult`, never raised.
    """

    def __init__(self, *, max_items: int = DEFAULT_MAX_ITEMS, timeout: int = 30) -> None:
        self.max_items = max_items
        self.timeout = timeout

    def fetch(self, source: Source) -> FetchResult:
        try:
            entries = fetch_rss_entries(source, timeout=self.timeout)
            # feeds are newest-first by convention; keep native order
            articles = tuple(entry_to_article(source, e) for e in entries[: self.max_items])
        except SourceFetchError as exc:
            logger.error("Error fetching %s: %s", source.name, exc.message)
            return FetchResult.failure(source, exc)
        except Exception as exc:  # noqa: BLE001
            error = SourceFetchError(source.name, str(exc) or type(exc).__name__)
            error.__cause__ = exc
            logger.error("Error fetching %s: %s", source.name, error.message)
            return FetchResult.failure(source, error)

        logger.info("Fetched %d article(s) from %s", len(articles), source.name)
        return FetchResult(source=source, articles=articles)
