from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class PipelineReport:
    sources_total: int = 0
    sources_failed: int = 0
    articles_fetched: int = 0
    articles_ranked: int = 0
    delivered: bool = False
    failed_sources: List[str] = field(default_factory=list)

    def to_log_line(self) -> str:
        failed = f" ({', '.join(self.failed_sources)})" if self.failed_sources else ""
        return (
            f"sources={self.sources_total}, failed={self.sources_failed}{failed}, "
            f"fetched={self.articles_fetched}, ranked={self.articles_ranked}, "
            f"delivered={self.delivered}"
        )
