"""Logging configuration."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(verbose: bool = False, log_dir: Path | None = None):
    """Install the console sink and, when ``log_dir`` is given, a daily file sink."""
    logger.remove()

    logger.add(
        sys.stderr,
        colorize=True,
        format=CONSOLE_FORMAT,
        level="DEBUG" if verbose else "INFO",
    )

    if log_dir is not None:
        logger.add(
            str(log_dir / "daily_brief_{time:YYYY-MM-DD}.log"),
            rotation="00:00",
            retention="30 days",
            level="DEBUG" if verbose else "INFO",
        )

    return logger


log = logger
