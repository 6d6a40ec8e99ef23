"""Outliner - in-memory document outline store.

Usage:
    python -m outliner [command] [args...]
    outliner help            Show the command list

Environment Variables:
    OUTLINER_LOG_LEVEL          Logging level (default: INFO)
    OUTLINER_EXPORT_SEPARATOR   Export separator, escapes allowed (default: \\r\\n)
    OUTLINER_ID_PREFIX          Block id prefix (default: block)
    OUTLINER_ID_HEX_LENGTH      Hex digits per block id, 8..32 (default: 12)
"""

from __future__ import annotations

import sys

from .outline_cli import main

if __name__ == "__main__":
    sys.exit(main())
