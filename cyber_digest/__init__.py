"""Top-level package for the security-news digest.

Fetches security-news feeds, ranks the latest articles, summarizes them with
Gemini and forwards the digest to a webhook consumer.
"""

__all__ = []
