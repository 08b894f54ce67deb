"""Logging setup shared by the CLI and the HTTP service."""

import logging
import sys
from collections.abc import Iterable
from typing import Optional, TextIO

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# aiohttp's per-request and connection loggers, routed alongside ours when serving
SERVER_LOGGERS = ("aiohttp.access", "aiohttp.server")


def _build_handlers(
    numeric_level: int,
    formatter: logging.Formatter,
    stream: TextIO,
    log_file: Optional[str],
) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(stream)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    force: bool = False,
    stream: Optional[TextIO] = None,
    extra_loggers: Iterable[str] = (),
) -> logging.Logger:
    """
    Set up logging for chatdown.

    Log records go to stderr by default so converted markdown written to
    stdout can be piped without interleaved log lines.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging output
        format_string: Optional custom format string for log messages
        force: If True, reconfigure even if handlers exist
        stream: Console stream for log output (default: stderr)
        extra_loggers: Other loggers to send to the same handlers,
            e.g. SERVER_LOGGERS when running the HTTP service

    Returns:
        The configured "chatdown" logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger("chatdown")

    if force or not logger.handlers:
        formatter = logging.Formatter(format_string or DEFAULT_FORMAT)
        handlers = _build_handlers(numeric_level, formatter, stream or sys.stderr, log_file)

        for name in ("chatdown", *extra_loggers):
            target = logging.getLogger(name)
            target.handlers.clear()
            target.setLevel(numeric_level)
            for handler in handlers:
                target.addHandler(handler)
            # Prevent duplicate records through the root logger
            target.propagate = False

    logger.setLevel(numeric_level)
    return logger
