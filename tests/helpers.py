"""Builders and fakes shared across test modules."""

from typing import Dict, List, Union

from cyber_digest.errors import SourceFetchError
from cyber_digest.fetchers import FetchResult
from cyber_digest.models import Article, Source


def make_article(source: str = "Feed", n: int = 1, published_at: str = "", **kwargs) -> Article:
    return Article(
        source_name=source,
        title=kwargs.get("title", f"{source} story {n}"),
        link=kwargs.get("link", f"https://example.com/{source.lower().replace(' ', '-')}/{n}"),
        published_at=published_at,
        description=kwargs.get("description", f"Details for {source} story {n}"),
    )


def hourly(source: str, count: int, *, day: int = 1, start_hour: int = 0) -> List[Article]:
    """Articles with distinct ISO timestamps, newest first like a real feed."""
    hours = range(start_hour + count - 1, start_hour - 1, -1)
    return [
        make_article(source, n=i, published_at=f"2024-03-{day:02d}T{h:02d}:00:00+00:00")
        for i, h in enumerate(hours, start=1)
    ]


class FakeFetcher:
    """Feed fetcher stand-in keyed by source name.

    A value that is an exception instance simulates a broken feed.
    """

    def __init__(self, responses: Dict[str, Union[List[Article], Exception]], *, raise_errors: bool = False):
        self.responses = responses
        self.raise_errors = raise_errors
        self.calls: List[str] = []

    def fetch(self, source: Source) -> FetchResult:
        self.calls.append(source.name)
        response = self.responses.get(source.name, [])
        if isinstance(response, Exception):
            if self.raise_errors:
                raise response
            return FetchResult.failure(source, SourceFetchError(source.name, str(response)))
        return FetchResult(source=source, articles=tuple(response))
