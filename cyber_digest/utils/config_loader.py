from __future__ import annotations

from pathlib import Path
from typing import Iterable, List
from urllib.parse import urlparse

import yaml

from ..errors import ConfigurationError
from ..models import Source
from ..registry import SourceRegistry


class ConfigError(ConfigurationError):
    """Raised when the sources file is invalid or missing required fields."""


REQUIRED_FIELDS = {"name", "url"}


def _validate_source_dict(entry: dict) -> None:
    """Validate a single source mapping from YAML.

    Required fields: name (non-empty str), url (absolute http/https).
    """
    missing = REQUIRED_FIELDS - set(entry)
    if missing:
        raise ConfigError(f"Missing required fields: {sorted(missing)} in {entry}")

    if not str(entry["name"] or "").strip():
        raise ConfigError(f"Source name must not be empty: {entry}")

    url_str = str(entry["url"] or "").strip()
    parsed = urlparse(url_str)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"Invalid URL '{url_str}'. Must be absolute http(s) URL.")


def _coerce_source(entry: dict) -> Source:
    return Source(name=str(entry["name"]).strip(), url=str(entry["url"]).strip())


def load_sources_config(path: Path | str) -> SourceRegistry:
    """Load a sources YAML file into a :class:`SourceRegistry`.

    YAML structure:
      - Top-level mapping
      - Key ``sources``: list of mappings with ``name`` and ``url``

    Order in the file is the registry order. Unknown keys are ignored.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Top level of the sources file must be a mapping")

    sources_raw: Iterable[dict] = data.get("sources") or []
    if not isinstance(sources_raw, list):
        raise ConfigError("'sources' must be a list in the YAML configuration")

    sources: List[Source] = []
    seen: set[str] = set()
    for item in sources_raw:
        if not isinstance(item, dict):
            raise ConfigError(f"Each source must be a mapping, got: {type(item)}")
        _validate_source_dict(item)
        source = _coerce_source(item)
        if source.name in seen:
            raise ConfigError(f"Duplicate source name '{source.name}'")
        seen.add(source.name)
        sources.append(source)
    return SourceRegistry(sources)
