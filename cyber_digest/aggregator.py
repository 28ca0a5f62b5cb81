from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional, Sequence

from dateutil.parser import parse as parse_date

from .errors import SourceFetchError
from .fetchers import FeedFetcher, FetchResult
from .models import Article, RankedArticleSet, Source
from .utils.logging import get_logger

logger = get_logger("cyber_digest.aggregator")

DEFAULT_MAX_TOTAL = 10

EARLIEST = datetime.min.replace(tzinfo=timezone.utc)

# two distinct fill-ins expose date parts missing from the input
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)

# Timezone abbreviations seen in RSS pubDate strings
TZINFOS = {
    "EST": timezone(timedelta(hours=-5)),
    "EDT": timezone(timedelta(hours=-4)),
    "CST": timezone(timedelta(hours=-6)),
    "CDT": timezone(timedelta(hours=-5)),
    "MST": timezone(timedelta(hours=-7)),
    "MDT": timezone(timedelta(hours=-6)),
    "PST": timezone(timedelta(hours=-8)),
    "PDT": timezone(timedelta(hours=-7)),
    "GMT": timezone.utc,
    "UTC": timezone.utc,
    "BST": timezone(timedelta(hours=1)),
    "KST": timezone(timedelta(hours=9)),
}


def parse_published(value: str) -> Optional[datetime]:
    """Parse a published date string to an aware datetime, or ``None``.

    Naive values are taken as UTC. Fragments lacking a year, month or day
    ("Monday", "10", "May") are rejected rather than completed from today.
    """
    if not value or not value.strip():
        return None
    try:
        dt = parse_date(value, tzinfos=TZINFOS, default=_DEFAULT_A)
        alt = parse_date(value, tzinfos=TZINFOS, default=_DEFAULT_B)
    except (ValueError, OverflowError, TypeError):
        return None
    if (dt.year, dt.month, dt.day) != (alt.year, alt.month, alt.day):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def recency_key(article: Article) -> datetime:
    """Sort key for recency ranking; empty or unparsable dates rank as earliest."""
    return parse_published(article.published_at) or EARLIEST


def rank_articles(pool: Iterable[Article], *, limit: int = DEFAULT_MAX_TOTAL) -> RankedArticleSet:
    # sorted() is stable with reverse=True, so ties keep pool order
    ordered = sorted(pool, key=recency_key, reverse=True)
    return RankedArticleSet.of(ordered[: max(limit, 0)])


class Aggregator:
    """Fetch every source, merge, rank by recency and cap the result."""

    def __init__(
        self,
        fetcher: FeedFetcher | None = None,
        *,
        max_total_items: int = DEFAULT_MAX_TOTAL,
        max_workers: int = 4,
    ) -> None:
        self.fetcher = fetcher or FeedFetcher()
        self.max_total_items = max_total_items
        self.max_workers = max_workers

    def collect(self, sources: Iterable[Source]) -> List[FetchResult]:
        """Fetch all sources; results come back in source order once all are done."""
        src_list: Sequence[Source] = list(sources)
        if not src_list:
            return []

        workers = max(1, min(self.max_workers, len(src_list)))
        logger.debug("Fetching %d source(s) (workers=%d)", len(src_list), workers)
        if workers == 1:
            return [self._fetch_isolated(s) for s in src_list]

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(self._fetch_isolated, s) for s in src_list]
            return [f.result() for f in futures]

    def _fetch_isolated(self, source: Source) -> FetchResult:
        try:
            return self.fetcher.fetch(source)
        except Exception as exc:  # noqa: BLE001
            logger.error("Fetch failed for %s: %s", source.name, exc)
            error = SourceFetchError(source.name, str(exc) or type(exc).__name__)
            error.__cause__ = exc
            return FetchResult.failure(source, error)

    def rank(self, results: Iterable[FetchResult]) -> RankedArticleSet:
        pool: List[Article] = []
        for result in results:
            pool.extend(result.articles)
        ranked = rank_articles(pool, limit=self.max_total_items)
        logger.debug("Ranked %d of %d pooled article(s)", len(ranked), len(pool))
        return ranked

    def aggregate(self, sources: Iterable[Source]) -> RankedArticleSet:
        return self.rank(self.collect(sources))
