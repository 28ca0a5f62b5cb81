from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .aggregator import Aggregator
from .fetchers import FeedFetcher
from .models import Source
from .output.dispatcher import Dispatcher
from .output.pipeline_reporter import PipelineReport
from .processors.digest import DigestComposer
from .utils.logging import get_logger
from .utils.settings import Settings

logger = get_logger("cyber_digest.orchestrator")


class PipelineState(str, enum.Enum):
    FETCHING = "fetching"
    COMPOSING = "composing"
    DISPATCHING = "dispatching"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class PipelineResult:
    state: PipelineState
    error: Optional[BaseException] = None
    failed_stage: Optional[PipelineState] = None
    report: PipelineReport = field(default_factory=PipelineReport)

    @property
    def ok(self) -> bool:
        return self.state is PipelineState.DONE


class Pipeline:
    """Sequence aggregation, digest composition and delivery for one run.

    This is the single top-level error boundary: ``run`` never raises. Any
    error from composing or dispatching ends the run in ``FAILED`` with the
    original exception kept on the result.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        aggregator: Aggregator | None = None,
        composer: DigestComposer | None = None,
        dispatcher: Dispatcher | None = None,
    ) -> None:
        self.settings = settings
        self.aggregator = aggregator or Aggregator(
            FeedFetcher(max_items=settings.max_items_per_source, timeout=settings.request_timeout),
            max_total_items=settings.max_total_items,
            max_workers=settings.fetch_workers,
        )
        self.composer = composer or DigestComposer(settings)
        self.dispatcher = dispatcher or Dispatcher(settings)
        self.state = PipelineState.FETCHING

    def _enter(self, state: PipelineState) -> None:
        logger.debug("Pipeline state %s -> %s", self.state.value, state.value)
        self.state = state

    def run(self, sources: Iterable[Source]) -> PipelineResult:
        report = PipelineReport()
        self.state = PipelineState.FETCHING
        try:
            logger.info("Fetching cybersecurity news...")
            src_list = list(sources)
            results = self.aggregator.collect(src_list)
            report.sources_total = len(src_list)
            report.failed_sources = [r.source.name for r in results if not r.ok]
            report.sources_failed = len(report.failed_sources)
            report.articles_fetched = sum(len(r.articles) for r in results)

            articles = self.aggregator.rank(results)
            report.articles_ranked = len(articles)
            if not articles:
                logger.info("No articles found.")
                self._enter(PipelineState.DONE)
                return PipelineResult(state=self.state, report=report)

            logger.info("Fetched %d article(s). Summarizing with Gemini...", len(articles))
            self._enter(PipelineState.COMPOSING)
            digest = self.composer.compose(articles)

            logger.info("Sending digest to webhook...")
            self._enter(PipelineState.DISPATCHING)
            self.dispatcher.dispatch(digest, articles)
            report.delivered = not self.settings.dry_run
        except Exception as exc:  # noqa: BLE001 - top-level pipeline boundary
            stage = self.state
            logger.error("Pipeline failed while %s: %s: %s", stage.value, type(exc).__name__, exc)
            logger.debug("Failure details", exc_info=exc)
            self._enter(PipelineState.FAILED)
            return PipelineResult(state=self.state, error=exc, failed_stage=stage, report=report)

        self._enter(PipelineState.DONE)
        logger.info("Done! %s", report.to_log_line())
        return PipelineResult(state=self.state, report=report)
