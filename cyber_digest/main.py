"""Application entrypoint for the security-news digest.

This script orchestrates the high-level flow:
1) load settings and the source registry
2) fetch, rank and summarize the latest articles
3) deliver the digest to the webhook (or dry-run)
"""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from dotenv import load_dotenv

from .errors import ConfigurationError
from .orchestrator import Pipeline
from .registry import SourceRegistry
from .utils.config_loader import load_sources_config
from .utils.logging import configure_logging, get_logger
from .utils.settings import Settings


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fetch security news, summarize it with Gemini and send it to a webhook"
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a sources YAML file (defaults to the built-in feed list)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log the webhook payload instead of sending it",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (defaults to LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv(override=False)
    args = parse_args(argv)
    configure_logging(level=args.log_level)
    logger = get_logger("cyber_digest.main")

    try:
        settings = Settings.from_env(dry_run=args.dry_run)
        if args.config:
            logger.info("Loading sources configuration from %s", args.config)
            registry = load_sources_config(args.config)
        else:
            registry = SourceRegistry()
    except ConfigurationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1

    logger.info("Loaded %d source(s): %s", len(registry), ", ".join(registry.names()))
    result = Pipeline(settings).run(registry)
    return 0 if result.ok else 1


if __name__ == "__main__":  # pragma: no cover - script entrypoint
    raise SystemExit(main())
