"""Outliner - in-memory document outline store.

Keeps an ordered tree of text blocks and supports structural edits:
insert, delete, move (with cycle checks), duplicate (deep copy) and
export to plain text.

Usage:
    from outliner import Block, DocumentStore

    store = DocumentStore()
    intro = Block("line 1")
    store.insert([intro, Block("line 2")])
    store.insert([Block("detail")], parent_id=intro.id)
    print(store.export("\\n"))
"""

from __future__ import annotations

from .blocks import ROOT_ID, Block, DocumentStore, parse_outline, render_markdown
from .errors import CycleError, InvalidArgumentError, NotFoundError, OutlineError, ValidationError

__version__ = "0.1.0"

__all__ = [
    "ROOT_ID",
    "Block",
    "CycleError",
    "DocumentStore",
    "InvalidArgumentError",
    "NotFoundError",
    "OutlineError",
    "ValidationError",
    "parse_outline",
    "render_markdown",
]
