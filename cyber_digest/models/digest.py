from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from .article import Article, RankedArticleSet


@dataclass(frozen=True, slots=True)
class Digest:
    text: str


def article_to_wire(article: Article) -> Dict[str, str]:
    """Render an article with the field names webhook consumers map."""
    return {
        "source": article.source_name,
        "title": article.title,
        "link": article.link,
        "isoDate": article.published_at,
        "description": article.description,
    }


@dataclass(frozen=True, slots=True)
class DeliveryPayload:
    summary: str
    articles: RankedArticleSet

    def to_dict(self) -> Dict[str, Any]:
        items: List[Dict[str, str]] = [article_to_wire(a) for a in self.articles]
        return {"summary": self.summary, "articles": items}
