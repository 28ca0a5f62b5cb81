"""Typed models used across the application."""

from .source import Source
from .article import Article, RankedArticleSet
from .digest import Digest, DeliveryPayload, article_to_wire

__all__ = [
    "Source",
    "Article",
    "RankedArticleSet",
    "Digest",
    "DeliveryPayload",
    "article_to_wire",
]
