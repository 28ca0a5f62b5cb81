from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Source:
    """A named feed endpoint polled once per run."""

    name: str
    url: str
