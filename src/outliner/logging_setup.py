"""Logging configuration for command line use.

Library code only ever calls ``logging.getLogger(__name__)``; handlers are
installed here, by the CLI, and never as an import side effect.
"""

from __future__ import annotations

import logging
import sys

from .settings import settings

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a stderr handler to the ``outliner`` logger.

    Args:
        level: Level name or number. Defaults to ``settings.log_level``.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("outliner")

    resolved = level if level is not None else settings.log_level
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            resolved = logging.INFO
    logger.setLevel(resolved)

    # Calling twice must not duplicate output.
    if not any(getattr(h, "_outliner_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._outliner_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
