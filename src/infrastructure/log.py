"""
Centralised logging configuration - powered by **loguru**.

Usage (any module)::

    from loguru import logger
    logger.info("Routed to {}", decision.target_agent)

Usage (entry-points - console chat, notebooks)::

    from infrastructure.log import setup_logging
    setup_logging()                   # level from SIA_LOG_LEVEL, else INFO
    setup_logging("DEBUG")            # more verbose
    setup_logging(for_notebook=True)  # minimal format for Jupyter

A single ``setup_logging()`` call configures format and level and, by
default, intercepts stdlib ``logging`` so httpx / openai / LangChain
records are emitted through the same loguru sinks.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from loguru import logger


_FMT_FULL = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

_FMT_NOTEBOOK = "<level>{level.icon}</level> <level>{message}</level>"

# Chatty third-party loggers that drown the routing trace at DEBUG
_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "urllib3")


class _InterceptHandler(logging.Handler):
    """Route stdlib ``logging`` records into **loguru**."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk back to the frame that issued the logging call
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(
    level: Optional[str] = None,
    *,
    for_notebook: bool = False,
    intercept_stdlib: bool = True,
    log_file: Optional[str] = None,
) -> None:
    """
    Configure loguru for the current process.

    Args:
        level: Minimum log level. Defaults to ``$SIA_LOG_LEVEL`` or ``INFO``.
        for_notebook: Use a minimal icon + message format on stdout.
        intercept_stdlib: Route stdlib ``logging`` through loguru.
        log_file: Optional path to a rotating log file.
    """
    level = (level or os.getenv("SIA_LOG_LEVEL", "INFO")).upper()

    logger.remove()

    logger.add(
        sys.stdout if for_notebook else sys.stderr,
        format=_FMT_NOTEBOOK if for_notebook else _FMT_FULL,
        level=level,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    if log_file:
        logger.add(
            log_file,
            format=_FMT_FULL,
            level=level,
            rotation="10 MB",
            retention="7 days",
            compression="gz",
        )

    if intercept_stdlib:
        logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug("Loguru configured - level={}, notebook={}", level, for_notebook)
