from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from ...errors import UpstreamServiceError
from ...utils.logging import get_logger
from .base import AIClient

logger = get_logger("cyber_digest.ai.gemini")

API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"


class GeminiClient(AIClient):
    """HTTP client for Gemini via the Google AI Studio API."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout: int = 120,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.session = session

    def _endpoint(self) -> str:
        return f"{API_BASE}/{self.model}:generateContent"

    @staticmethod
    def _extract_text(data: Dict[str, Any]) -> str:
        candidates = data.get("candidates") or []
        if not candidates:
            feedback = data.get("promptFeedback") or {}
            raise UpstreamServiceError(
                f"Gemini returned no candidates (blockReason={feedback.get('blockReason')})"
            )
        parts = (candidates[0].get("content") or {}).get("parts") or []
        text = "".join(p.get("text", "") for p in parts if isinstance(p, dict))
        if not text.strip():
            reason = candidates[0].get("finishReason")
            raise UpstreamServiceError(f"Gemini returned an empty response (finishReason={reason})")
        return text

    def _post(self, payload: Dict[str, Any], headers: Dict[str, str]) -> requests.Response:
        if self.session is not None:
            return self.session.post(self._endpoint(), json=payload, headers=headers, timeout=self.timeout)
        with requests.Session() as session:
            return session.post(self._endpoint(), json=payload, headers=headers, timeout=self.timeout)

    def generate(self, prompt: str) -> str:
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        headers = {"x-goog-api-key": self.api_key, "Content-Type": "application/json"}
        logger.debug("Calling Gemini model %s (prompt chars=%d)", self.model, len(prompt))
        try:
            resp = self._post(payload, headers)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as exc:
            raise UpstreamServiceError(f"Gemini request failed: {exc}") from exc
        except ValueError as exc:
            raise UpstreamServiceError(f"Gemini returned invalid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise UpstreamServiceError("Gemini returned an unexpected response shape")
        return self._extract_text(data)
