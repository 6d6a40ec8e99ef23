"""Render outline blocks to Markdown.

Every block becomes a ``- `` bullet on a single line; children are nested
one indent step deeper. Content is escaped so that ``parse_outline`` reads
back exactly the text and tree that were rendered:

- ASCII punctuation is backslash-escaped, so content such as ``- dash``,
  ``1. item``, ``# title`` or ``a *b* c`` stays literal text.
- Line breaks inside content and whitespace at either end of it are written
  as numeric character references (``&#10;``, ``&#32;``), which the parser
  decodes.

Content holding C0 or C1 control characters other than tab, line feed,
carriage return and form feed is not guaranteed to survive the round trip.
"""

from __future__ import annotations

import string
from collections.abc import Iterable

from .blocks_models import Block

_PUNCTUATION = frozenset(string.punctuation)

# Characters str.splitlines() breaks on that html.unescape() gives back intact
_LINE_BREAKS = frozenset("\n\r\f\u2028\u2029")


def render_markdown(blocks: Iterable[Block], indent: str = "  ") -> str:
    """Render block trees as a nested Markdown bullet list.

    Args:
        blocks: Top-level blocks to render, children included.
        indent: Indentation added per nesting level. Must be at least
            two spaces for nested lists to parse back as nested.

    Returns:
        Markdown text without a trailing newline.
    """
    lines: list[str] = []
    pending = [(block, 0) for block in reversed(list(blocks))]
    while pending:
        block, depth = pending.pop()
        prefix = indent * depth
        text = escape_content(block.content)
        lines.append(f"{prefix}- {text}" if text else f"{prefix}-")
        pending.extend((child, depth + 1) for child in reversed(block.children))
    return "\n".join(lines)


def escape_content(text: str) -> str:
    """Escape block content for use as the text of one list item line."""
    leading = len(text) - len(text.lstrip())
    trailing = len(text.rstrip())

    out: list[str] = []
    for index, char in enumerate(text):
        if char in _PUNCTUATION:
            out.append("\\" + char)
        elif char in _LINE_BREAKS or (char.isspace() and (index < leading or index >= trailing)):
            out.append(f"&#{ord(char)};")
        else:
            out.append(char)
    return "".join(out)
