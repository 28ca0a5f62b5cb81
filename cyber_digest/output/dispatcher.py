from __future__ import annotations

from typing import Optional

from ..models import DeliveryPayload, Digest, RankedArticleSet
from ..utils.logging import get_logger
from ..utils.settings import Settings
from .webhook_client import WebhookClient

logger = get_logger("cyber_digest.output.dispatcher")


def build_payload(digest: Digest, articles: RankedArticleSet) -> DeliveryPayload:
    return DeliveryPayload(summary=digest.text, articles=articles)


class Dispatcher:
    """Package the digest with its articles and deliver it to the sink once."""

    def __init__(self, settings: Settings, *, client: Optional[WebhookClient] = None) -> None:
        self.settings = settings
        self._client = client

    def _get_client(self) -> WebhookClient:
        if self._client is not None:
            return self._client
        return WebhookClient(
            self.settings.webhook_url,
            timeout=self.settings.request_timeout,
            dry_run=self.settings.dry_run,
        )

    def dispatch(self, digest: Digest, articles: RankedArticleSet) -> None:
        if not self.settings.dry_run:
            self.settings.require_webhook_url()
        client = self._get_client()

        payload = build_payload(digest, articles)
        client.post_json(payload.to_dict())
        logger.info("Sent digest with %d article(s) to webhook", len(articles))
