"""Block tree: models, sequence editing helpers and the document store."""

from .blocks_models import ROOT_ID, Block, new_block_id
from .document_store import DocumentStore
from .markdown_parser import parse_outline
from .markdown_renderer import render_markdown
from .sequence_ops import insert_after_item, insert_at_index, remove_matching

__all__ = [
    "ROOT_ID",
    "Block",
    "DocumentStore",
    "insert_after_item",
    "insert_at_index",
    "new_block_id",
    "parse_outline",
    "remove_matching",
    "render_markdown",
]
