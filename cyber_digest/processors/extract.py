"""Pure field extractors over raw feed entries.

Feed entries are mapping-like (``feedparser.FeedParserDict`` or a plain
dict). Each fallback chain is an ordered tuple of extractors evaluated
first-match-wins; an extractor returns ``""`` when its field is absent.
"""

from __future__ import annotations

import html
import re
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Sequence

from bs4 import BeautifulSoup

Entry = Mapping[str, Any]
Extractor = Callable[[Entry], str]

_whitespace_re = re.compile(r"\s+")


def clean_html_to_text(raw_html: str | None) -> str:
    """Strip tags, unescape entities and collapse whitespace."""
    if not raw_html:
        return ""

    soup = BeautifulSoup(raw_html, "html.parser")
    text = soup.get_text(" ")
    text = html.unescape(text)
    text = _whitespace_re.sub(" ", text)
    return text.strip()


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def full_content(entry: Entry) -> str:
    # feedparser exposes content:encoded / atom:content as a list of dicts
    contents = entry.get("content")
    if isinstance(contents, list) and contents:
        first = contents[0]
        if isinstance(first, Mapping):
            return _text(first.get("value"))
    return ""


def summary(entry: Entry) -> str:
    return _text(entry.get("summary"))


def content_snippet(entry: Entry) -> str:
    return clean_html_to_text(full_content(entry) or summary(entry))


def iso_timestamp(entry: Entry) -> str:
    for key in ("published_parsed", "updated_parsed"):
        tm = entry.get(key)
        if tm:
            try:
                return datetime(*tm[:6], tzinfo=timezone.utc).isoformat()
            except (TypeError, ValueError):
                continue
    return ""


def raw_pub_date(entry: Entry) -> str:
    for key in ("published", "updated"):
        value = _text(entry.get(key)).strip()
        if value:
            return value
    return ""


DESCRIPTION_EXTRACTORS: tuple[Extractor, ...] = (content_snippet, full_content, summary)
PUBLISHED_EXTRACTORS: tuple[Extractor, ...] = (iso_timestamp, raw_pub_date)


def first_match(extractors: Sequence[Extractor], entry: Entry) -> str:
    """Return the first non-empty value produced by ``extractors``, else ``""``."""
    for extract in extractors:
        value = extract(entry)
        if value:
            return value
    return ""


def extract_title(entry: Entry) -> str:
    return _text(entry.get("title"))


def extract_link(entry: Entry) -> str:
    return _text(entry.get("link"))


def extract_description(entry: Entry) -> str:
    return first_match(DESCRIPTION_EXTRACTORS, entry)


def extract_published(entry: Entry) -> str:
    return first_match(PUBLISHED_EXTRACTORS, entry)
