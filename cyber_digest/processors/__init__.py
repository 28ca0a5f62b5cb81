"""Processing: feed field extraction and digest composition."""

from .extract import clean_html_to_text, first_match
from .digest import DigestComposer, build_prompt

__all__ = [
    "clean_html_to_text",
    "first_match",
    "DigestComposer",
    "build_prompt",
]
