from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple, overload


@dataclass(frozen=True, slots=True)
class Article:
    source_name: str
    title: str = ""
    link: str = ""
    published_at: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        if not self.source_name:
            raise ValueError("Article.source_name must not be empty")


@dataclass(frozen=True, slots=True)
class RankedArticleSet:
    """Recency-ordered, length-capped articles for one run.

    Built once by the aggregator and never edited; a new set is created
    instead of mutating this one.
    """

    articles: Tuple[Article, ...] = ()

    @classmethod
    def of(cls, articles: Iterable[Article]) -> "RankedArticleSet":
        return cls(tuple(articles))

    def __len__(self) -> int:
        return len(self.articles)

    def __iter__(self) -> Iterator[Article]:
        return iter(self.articles)

    def __bool__(self) -> bool:
        return bool(self.articles)

    @overload
    def __getitem__(self, index: int) -> Article: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[Article, ...]: ...

    def __getitem__(self, index):
        return self.articles[index]
