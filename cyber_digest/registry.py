"""Static registry of the security-news feeds polled on each run."""

from __future__ import annotations

from typing import Iterable, Iterator, Tuple

from .models import Source

DEFAULT_SOURCES: Tuple[Source, ...] = (
    Source(name="The Hacker News", url="https://feeds.feedburner.com/TheHackersNews?format=xml"),
    Source(name="BleepingComputer", url="https://www.bleepingcomputer.com/feed/"),
    Source(name="Dark Reading", url="https://www.darkreading.com/rss.xml"),
)


class SourceRegistry:
    """Ordered, fixed set of feed sources.

    Iteration follows declaration order. Endpoints are not probed here; an
    unreachable feed shows up as a fetch failure for that source only.
    """

    def __init__(self, sources: Iterable[Source] = DEFAULT_SOURCES) -> None:
        self._sources: Tuple[Source, ...] = tuple(sources)

    def __iter__(self) -> Iterator[Source]:
        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    @property
    def sources(self) -> Tuple[Source, ...]:
        return self._sources

    def names(self) -> list[str]:
        return [s.name for s in self._sources]
