"""Logging configuration utilities.

Provides a single function to initialize the root logger. Progress lines go
to stdout and warnings/errors to stderr so cron and CI captures keep the two
apart; a rotating log file can be enabled alongside or instead.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Literal, Optional

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_OUTPUT = os.environ.get("LOG_OUTPUT", "console").lower()
LOG_FILE_PATH = os.environ.get("LOG_FILE_PATH", "logs/cyber-digest.log")
LOG_FORMAT = os.environ.get("LOG_FORMAT", "text").lower()

LogOutput = Literal["console", "file", "both"]
LogFormat = Literal["text", "json"]


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int) -> None:
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.max_level


def _build_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return logging.Formatter(
            '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'
        )
    return logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")


def configure_logging(
    level: str | int | None = None,
    output: LogOutput | None = None,
    file_path: str | None = None,
    log_format: LogFormat | None = None,
    module: Optional[str] = None,
) -> None:
    """Configure application logging.

    Parameters
    ----------
    level:
        Logging level as a string (e.g., "INFO") or numeric value.
    output:
        Logging output destination: "console", "file", or "both".
    file_path:
        Path to the log file if output is "file" or "both".
    log_format:
        Logging format: "text" or "json".
    module:
        Optional module name to set a specific logger level for; if not
        provided, config applies to the root logger only.
    """
    # Resolve effective settings at call-time so .env variables loaded in main() are respected
    if level is None:
        level = os.environ.get("LOG_LEVEL", LOG_LEVEL).upper()
    if log_format is None:
        log_format = (os.environ.get("LOG_FORMAT") or LOG_FORMAT).lower()
    if output is None:
        output = (os.environ.get("LOG_OUTPUT") or LOG_OUTPUT).lower()
    if file_path is None:
        file_path = os.environ.get("LOG_FILE_PATH") or LOG_FILE_PATH

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    formatter = _build_formatter(log_format)

    if output in ("console", "both"):
        stdout_handler = logging.StreamHandler(sys.stdout)
        stdout_handler.setFormatter(formatter)
        stdout_handler.addFilter(_MaxLevelFilter(logging.WARNING))
        root_logger.addHandler(stdout_handler)

        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(formatter)
        stderr_handler.setLevel(logging.WARNING)
        root_logger.addHandler(stderr_handler)

    if output in ("file", "both"):
        log_dir = os.path.dirname(file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = RotatingFileHandler(file_path, maxBytes=10 * 1024 * 1024, backupCount=5)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    if module:
        logging.getLogger(module).setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
