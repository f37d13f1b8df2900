from __future__ import annotations

"""Centralised Loguru configuration.

Use setup_logger() at program start. Idempotent – repeated calls are no-ops.
Library code never calls it; embedding services decide where logs go.
"""
import sys
from pathlib import Path
from typing import Literal

from loguru import logger

from evstats.settings import settings

_INITIALISED = False


def setup_logger(
    level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] | None = None,
    log_dir: str | Path | None = None,
) -> None:
    """Configure Loguru sinks once per process.

    If *level* is *None* the value of ``settings.LOG_LEVEL`` is used.  File
    sinks are added when ``settings.LOG_TO_FILE`` is enabled or *log_dir* is
    passed explicitly.
    """

    global _INITIALISED
    if _INITIALISED:
        return

    if level is None:
        level = settings.LOG_LEVEL  # type: ignore[assignment]

    logger.remove()  # remove default stderr sink

    if log_dir is not None or settings.LOG_TO_FILE:
        directory = Path(log_dir if log_dir is not None else settings.LOG_DIR)
        directory.mkdir(parents=True, exist_ok=True)
        logger.add(directory / "evstats.log", level="INFO", rotation="1 MB", retention="10 days")
        logger.add(directory / "debug.log", level="DEBUG", rotation="1 MB", retention="10 days")

    logger.add(
        sys.stderr,
        level=level,
        format="<level>{message}</level>",
        colorize=True,
    )

    logger.debug("Logger initialised (level: {})", level)

    _INITIALISED = True


def reset_logger() -> None:
    """Drop every sink and allow :func:`setup_logger` to run again."""

    global _INITIALISED
    logger.remove()
    _INITIALISED = False
