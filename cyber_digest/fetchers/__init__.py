"""Content fetching layer for RSS/Atom sources."""

from .rss import FeedFetcher, FetchResult, fetch_rss_entries

__all__ = ["FeedFetcher", "FetchResult", "fetch_rss_entries"]
