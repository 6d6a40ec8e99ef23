"""Data models for the outline block tree.

This module defines the Block node and the helpers the document store
uses to create identities and copy subtrees.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from ..settings import settings

# Synthetic id of the document root. Top-level blocks are its children.
ROOT_ID = ""

# Assigned once in __init__; rebinding either would desync the store indices.
_READ_ONLY_FIELDS = frozenset({"id", "children"})


def new_block_id() -> str:
    """Generate a new unique block ID."""
    return f"{settings.id_prefix}-{uuid4().hex[: settings.id_hex_length]}"


@dataclass(eq=False)
class Block:
    """A node in the document outline.

    Blocks compare by identity. ``parent_id`` is a weak back-reference:
    the parent is looked up through the store, never held directly.
    ``None`` and ``ROOT_ID`` both mean top-level.
    """

    content: str = ""
    parent_id: str | None = None
    id: str = field(default_factory=new_block_id)
    children: list[Block] = field(default_factory=list)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _READ_ONLY_FIELDS and name in self.__dict__:
            raise AttributeError(f"Block.{name} is read-only")
        super().__setattr__(name, value)

    @property
    def is_top_level(self) -> bool:
        return not self.parent_id

    def is_same(self, other: Block | None) -> bool:
        """Check that ``other`` is this very block (identity and id)."""
        return other is not None and other is self and other.id == self.id

    def has_children(self) -> bool:
        return len(self.children) > 0

    def clone(self, parent_id: str | None) -> tuple[Block, list[Block]]:
        """Deep-copy this block and its subtree with fresh ids.

        Args:
            parent_id: Parent id for the copy of this block. Nested copies
                point at the copy of their own parent.

        Returns:
            The copied block and a pre-order list of every block created,
            the copy itself first.
        """
        copy = Block(content=self.content, parent_id=parent_id)
        created: list[Block] = []
        pending = [(self, copy)]
        while pending:
            source, target = pending.pop()
            created.append(target)
            for child in source.children:
                target.children.append(Block(content=child.content, parent_id=target.id))
            pending.extend(reversed(list(zip(source.children, target.children))))
        return copy, created

    def to_dict(self, include_children: bool = False) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        result: dict[str, Any] = {
            "id": self.id,
            "content": self.content,
            "parent_id": self.parent_id or None,
        }
        if include_children:
            result["children"] = [child.to_dict(include_children=True) for child in self.children]
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Block:
        """Create from dictionary.

        Nested ``children`` are rebuilt too and re-parented to the new node.
        """
        kwargs: dict[str, Any] = {
            "content": data.get("content", ""),
            "parent_id": data.get("parent_id"),
        }
        if data.get("id"):
            kwargs["id"] = data["id"]
        block = cls(**kwargs)
        for child_data in data.get("children", []):
            child = cls.from_dict(child_data)
            child.parent_id = block.id
            block.children.append(child)
        return block

    def __repr__(self) -> str:
        preview = self.content if len(self.content) <= 30 else self.content[:27] + "..."
        return f"Block(id={self.id!r}, content={preview!r}, children={len(self.children)})"
