from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ..errors import ConfigurationError

DEFAULT_GEMINI_MODEL = "gemini-2.5-pro"


def _env_str(environ: Mapping[str, str], key: str) -> Optional[str]:
    value = environ.get(key)
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_int(environ: Mapping[str, str], key: str, default: int, *, minimum: int = 0) -> int:
    raw = _env_str(environ, key)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer, got '{raw}'") from exc
    if value < minimum:
        raise ConfigurationError(f"{key} must be >= {minimum}, got {value}")
    return value


@dataclass(slots=True)
class Settings:
    """Run configuration, built once at process start and passed explicitly.

    Environment:
      - GEMINI_API_KEY (required for composing the digest)
      - GEMINI_MODEL (default: gemini-2.5-pro)
      - ZAPIER_WEBHOOK_URL (required for delivery unless dry-run)
      - DIGEST_REQUEST_TIMEOUT, DIGEST_GENERATION_TIMEOUT (seconds)
      - DIGEST_MAX_ITEMS_PER_SOURCE, DIGEST_MAX_TOTAL_ITEMS
      - DIGEST_MAX_DESCRIPTION_CHARS (0 disables trimming)
      - DIGEST_FETCH_WORKERS (1 fetches sources sequentially)
    """

    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    webhook_url: Optional[str] = None
    request_timeout: int = 30
    generation_timeout: int = 120
    max_items_per_source: int = 5
    max_total_items: int = 10
    max_description_chars: int = 1000
    fetch_workers: int = 4
    dry_run: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, *, dry_run: bool = False) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            gemini_api_key=_env_str(env, "GEMINI_API_KEY"),
            gemini_model=_env_str(env, "GEMINI_MODEL") or DEFAULT_GEMINI_MODEL,
            webhook_url=_env_str(env, "ZAPIER_WEBHOOK_URL"),
            request_timeout=_env_int(env, "DIGEST_REQUEST_TIMEOUT", 30, minimum=1),
            generation_timeout=_env_int(env, "DIGEST_GENERATION_TIMEOUT", 120, minimum=1),
            max_items_per_source=_env_int(env, "DIGEST_MAX_ITEMS_PER_SOURCE", 5),
            max_total_items=_env_int(env, "DIGEST_MAX_TOTAL_ITEMS", 10),
            max_description_chars=_env_int(env, "DIGEST_MAX_DESCRIPTION_CHARS", 1000),
            fetch_workers=_env_int(env, "DIGEST_FETCH_WORKERS", 4, minimum=1),
            dry_run=dry_run,
        )

    def require_gemini_api_key(self) -> str:
        if not self.gemini_api_key:
            raise ConfigurationError("GEMINI_API_KEY is required to compose the digest")
        return self.gemini_api_key

    def require_webhook_url(self) -> str:
        if not self.webhook_url:
            raise ConfigurationError("ZAPIER_WEBHOOK_URL is required to deliver the digest")
        return self.webhook_url
