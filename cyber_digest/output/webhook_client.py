from __future__ import annotations

import json
from typing import Any, Dict, Optional

import requests

from ..errors import DeliveryError
from ..utils.logging import get_logger

logger = get_logger("cyber_digest.output.webhook")


class WebhookClient:
    """Single-attempt JSON POST to the delivery sink (e.g. a Zapier catch hook)."""

    def __init__(
        self,
        url: Optional[str],
        *,
        timeout: int = 30,
        dry_run: bool = False,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.dry_run = dry_run
        self.session = session

    def _post(self, payload: Dict[str, Any]) -> requests.Response:
        if self.session is not None:
            return self.session.post(self.url, json=payload, timeout=self.timeout)
        with requests.Session() as session:
            return session.post(self.url, json=payload, timeout=self.timeout)

    def post_json(self, payload: Dict[str, Any]) -> Optional[int]:
        """POST ``payload`` once; return the HTTP status, or ``None`` in dry-run."""
        if self.dry_run:
            logger.info(
                "[DRY-RUN] Would POST %d article(s) to webhook: %s",
                len(payload.get("articles") or []),
                json.dumps(payload, ensure_ascii=False)[:500],
            )
            return None
        if not self.url:
            raise DeliveryError("Webhook URL not provided")

        try:
            resp = self._post(payload)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise DeliveryError(f"Webhook delivery failed: {exc}") from exc

        logger.debug("Webhook accepted payload (%s)", resp.status_code)
        return resp.status_code
