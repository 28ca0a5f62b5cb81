from __future__ import annotations

from ...utils.settings import Settings
from .base import AIClient


def create_ai_client(settings: Settings) -> AIClient:
    """Create the Gemini client from settings.

    Raises ``ConfigurationError`` when ``GEMINI_API_KEY`` is absent.
    """
    api_key = settings.require_gemini_api_key()

    from .gemini import GeminiClient  # lazy import

    return GeminiClient(
        api_key=api_key,
        model=settings.gemini_model,
        timeout=settings.generation_timeout,
    )
