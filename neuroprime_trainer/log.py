from __future__ import annotations

import sys

from loguru import logger

from .config import log_level


def configure_logging(level: str | None = None) -> None:
    """Replace loguru's default sink with a single stderr sink for the host."""

    logger.remove()
    logger.add(
        sys.stderr,
        level=level or log_level(),
        format="<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | {name}:{line} - {message}",
    )
