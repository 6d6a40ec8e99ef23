"""Parse Markdown into outline blocks.

This module converts Markdown text into Block trees using the mistletoe
library for parsing. List items become blocks and nested lists become
their children; other block-level elements become top-level blocks
holding their plain text.
"""

from __future__ import annotations

import logging
from typing import Any

from mistletoe import Document
from mistletoe.block_token import (
    BlockCode,
    CodeFence,
    Heading,
    List,
    ListItem,
    Paragraph,
    ThematicBreak,
)
from mistletoe.span_token import LineBreak, RawText

from .blocks_models import Block

logger = logging.getLogger(__name__)


def parse_outline(markdown: str) -> list[Block]:
    """Parse Markdown text into unattached block trees.

    Args:
        markdown: The Markdown text to parse.

    Returns:
        Top-level blocks in document order, children already attached.
        Insert them with ``DocumentStore.insert``.
    """
    doc = Document(markdown)
    blocks: list[Block] = []

    for token in doc.children:
        blocks.extend(_convert_token(token))

    logger.debug("Parsed %d top-level block(s) from Markdown", len(blocks))
    return blocks


def _convert_token(token: Any) -> list[Block]:
    """Convert a top-level mistletoe token to blocks."""
    if isinstance(token, List):
        return _convert_list(token, parent=None)
    elif isinstance(token, (Heading, Paragraph)):
        return [Block(content=_extract_text(token))]
    elif isinstance(token, (BlockCode, CodeFence)):
        return [Block(content=_extract_text(token).rstrip("\n"))]
    elif isinstance(token, ThematicBreak):
        return []
    else:
        # Unknown token type - keep whatever text it carries
        text = _extract_text(token)
        if text.strip():
            return [Block(content=text)]
    return []


def _convert_list(token: List, parent: Block | None) -> list[Block]:
    """Convert every item of a list, recursing into nested lists."""
    blocks = []

    for item in token.children:
        if not isinstance(item, ListItem):
            continue

        block = Block(content="", parent_id=parent.id if parent else None)
        texts = []
        for child in item.children:
            if isinstance(child, List):
                block.children.extend(_convert_list(child, parent=block))
            elif isinstance(child, (BlockCode, CodeFence)):
                texts.append(_extract_text(child).rstrip("\n"))
            else:
                texts.append(_extract_text(child))
        block.content = "\n".join(texts)
        blocks.append(block)

    return blocks


def _extract_text(token: Any) -> str:
    """Extract plain text from a token."""
    if isinstance(token, RawText):
        return token.content
    elif isinstance(token, LineBreak):
        return "\n"
    elif getattr(token, "children", None):
        return "".join(_extract_text(child) for child in token.children)
    return ""
