"""Runtime settings, read from the environment once at import.

Environment variables:
    OUTLINER_LOG_LEVEL: Level for ``configure_logging`` (default ``INFO``).
    OUTLINER_EXPORT_SEPARATOR: Default ``export`` separator; ``\\r``, ``\\n``
        and ``\\t`` escapes are decoded (default CRLF).
    OUTLINER_ID_PREFIX: Prefix of generated block ids (default ``block``).
    OUTLINER_ID_HEX_LENGTH: Random hex digits per id, clamped to 8..32
        (default 12).

Tests replace ``settings`` with a ``Settings(...)`` built by hand.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

_ESCAPES = {"\\r": "\r", "\\n": "\n", "\\t": "\t"}


def _env_int(name: str, default: int, *, minimum: int, maximum: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return max(minimum, min(maximum, value))


def decode_escapes(raw: str) -> str:
    """Turn literal \\r, \\n and \\t sequences into the characters they name."""
    for escaped, actual in _ESCAPES.items():
        raw = raw.replace(escaped, actual)
    return raw


def _env_separator(name: str, default: str) -> str:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return decode_escapes(raw)


@dataclass(frozen=True)
class Settings:
    """Static settings for the outline store.

    Everything is read from the environment once, at import time.
    """

    log_level: str = os.environ.get("OUTLINER_LOG_LEVEL", "INFO")

    # Joins block contents in DocumentStore.export() when no separator is given.
    export_separator: str = _env_separator("OUTLINER_EXPORT_SEPARATOR", "\r\n")

    # Block ids look like "<prefix>-<hex>", hex taken from uuid4.
    id_prefix: str = os.environ.get("OUTLINER_ID_PREFIX", "block")
    id_hex_length: int = _env_int("OUTLINER_ID_HEX_LENGTH", 12, minimum=8, maximum=32)


settings = Settings()
