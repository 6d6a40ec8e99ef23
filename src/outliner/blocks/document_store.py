"""In-memory store for the document outline.

The store keeps two derived indices over the block tree:
- blocks by id
- children list by id (the root id maps to the top-level list)

Every children index entry is the very list object held by the block's
``children`` field, so splicing one splices the other. Structural edits
(insert, delete, move, duplicate) resolve the affected lists through the
index, splice them with ``sequence_ops`` and then update both indices.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from ..errors import CycleError, InvalidArgumentError, NotFoundError
from ..settings import settings
from .blocks_models import ROOT_ID, Block
from .sequence_ops import insert_after_item, insert_at_index, remove_matching

logger = logging.getLogger(__name__)


class DocumentStore:
    """Ordered block tree with id and children indices.

    Not thread-safe: a host that shares one store between threads must hold
    a lock for the whole of each structural operation.
    """

    def __init__(self) -> None:
        self._blocks: dict[str, Block] = {}
        self._children_by_id: dict[str, list[Block]] = {ROOT_ID: []}

    @property
    def children(self) -> list[Block]:
        """The live top-level sequence."""
        return self._children_by_id[ROOT_ID]

    def __len__(self) -> int:
        return len(self._blocks)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Block):
            return self._is_indexed(item)
        return isinstance(item, str) and item in self._blocks

    def __iter__(self) -> Iterator[Block]:
        return self.walk()

    # =========================================================================
    # Lookup
    # =========================================================================

    def get_by_id(self, block_id: str) -> Block:
        """Get an indexed block by ID.

        Raises:
            NotFoundError: If no block with this id is in the store.
        """
        block = self._blocks.get(block_id)
        if block is None:
            raise NotFoundError(f"Block not found: {block_id}", resource_type="block", resource_id=block_id)
        return block

    def find(self, block_id: str) -> Block | None:
        """Get an indexed block by ID, or None."""
        return self._blocks.get(block_id)

    def fetch(self, parent: Block | None = None) -> list[Block]:
        """Fetch the live children list of ``parent``.

        The returned list is store state, not a copy. Callers must not
        mutate it.

        Args:
            parent: Block whose children to return. None returns the
                top-level blocks.

        Raises:
            NotFoundError: If ``parent`` is not in the store.
        """
        if parent is None:
            return self.children
        self._require_indexed(parent)
        return self._children_by_id[parent.id]

    # =========================================================================
    # Structural Edits
    # =========================================================================

    def insert(self, blocks: Iterable[Block], parent_id: str | None = None) -> list[Block]:
        """Append blocks to the end of their parent's children.

        Blocks whose id is already indexed are skipped, so inserting the
        same block twice (in one call or across calls) keeps one copy.
        Children already attached to an inserted block are indexed with it.

        The whole batch is checked before anything is attached: if any
        block is rejected, the store is left unchanged. A block may name
        an earlier block of the same batch (or one of its attached
        descendants) as its parent.

        Args:
            blocks: Blocks to insert, in order.
            parent_id: If given, overrides each block's ``parent_id``.
                ``ROOT_ID`` inserts at top level.

        Returns:
            The blocks actually inserted.

        Raises:
            NotFoundError: If a block's parent is neither in the store nor
                earlier in the batch.
            InvalidArgumentError: If an attached descendant is already
                indexed or appears twice in the batch.
        """
        planned: list[Block] = []
        planned_ids: set[str] = set()

        for block in blocks:
            if block.id in self._blocks or block.id in planned_ids:
                logger.debug("Skipping insert of already indexed block %s", block.id)
                continue

            target_parent = parent_id if parent_id is not None else block.parent_id
            key = target_parent or ROOT_ID
            if key not in self._children_by_id and key not in planned_ids:
                raise NotFoundError(f"Parent block not found: {key}", resource_type="block", resource_id=key)

            planned_ids |= self._new_subtree_ids(block, planned_ids)
            planned.append(block)

        inserted: list[Block] = []
        for block in planned:
            if parent_id is not None:
                block.parent_id = parent_id
            insert_at_index(self._sequence_of(block.parent_id), block)
            self._register(block)
            inserted.append(block)

        logger.debug("Inserted %d block(s) under %r", len(inserted), parent_id)
        return inserted

    def delete(self, blocks: Iterable[Block]) -> int:
        """Delete blocks together with their whole subtrees.

        Children are deleted before their parent. Blocks that are not in
        the store (including repeats in ``blocks``) are skipped.

        Returns:
            Number of blocks removed, descendants included.
        """
        removed = 0

        for block in list(blocks):
            if not self._is_indexed(block):
                continue

            for node in self._post_order(block):
                remove_matching(self._siblings_of(node), node.is_same)
                del self._blocks[node.id]
                del self._children_by_id[node.id]
                removed += 1
                logger.debug("Deleted block %s", node.id)

        return removed

    def move(self, block: Block, new_index: int, new_parent: Block | None = None) -> None:
        """Move a block, with its subtree, to another position.

        The target can be on any level. ``new_index`` is checked against
        the destination length before the block is taken out, so
        ``len(fetch(new_parent))`` always means "append".

        Args:
            block: Block to move.
            new_index: Position in the destination children.
            new_parent: New parent block. None moves to top level.

        Raises:
            NotFoundError: If ``block`` or ``new_parent`` is not in the store.
            CycleError: If ``new_parent`` is ``block`` or one of its descendants.
            InvalidArgumentError: If ``new_index`` is outside
                ``[0, len(destination)]``.
        """
        self._require_indexed(block)

        if new_parent is not None:
            if new_parent is block or new_parent.id == block.id:
                raise CycleError(
                    "Cannot move a block under itself",
                    block_id=block.id,
                    parent_id=new_parent.id,
                )
            self._require_indexed(new_parent)
            if self.is_descendant(new_parent, block):
                raise CycleError(
                    "Cannot move a block into its own subtree",
                    block_id=block.id,
                    parent_id=new_parent.id,
                )

        destination = self.fetch(new_parent)
        if new_index < 0 or new_index > len(destination):
            raise InvalidArgumentError(
                f"Index {new_index} is outside 0..{len(destination)}",
                field="new_index",
                value=new_index,
                constraint=f"0 <= new_index <= {len(destination)}",
            )

        remove_matching(self._siblings_of(block), block.is_same)
        block.parent_id = new_parent.id if new_parent is not None else None
        insert_at_index(destination, block, new_index)

        logger.debug("Moved block %s to index %d under %r", block.id, new_index, block.parent_id)

    def duplicate(self, block: Block) -> Block:
        """Copy a block and all of its descendants, with fresh ids.

        The copy is placed right after the original among its siblings.

        Returns:
            The copy of ``block``.

        Raises:
            NotFoundError: If ``block`` is not in the store.
        """
        self._require_indexed(block)

        copy, created = block.clone(block.parent_id)
        insert_after_item(self._siblings_of(block), copy, block)
        for node in created:
            self._blocks[node.id] = node
            self._children_by_id[node.id] = node.children

        logger.debug("Duplicated block %s as %s (%d block(s))", block.id, copy.id, len(created))
        return copy

    # =========================================================================
    # Export
    # =========================================================================

    def export(self, separator: str | None = None) -> str:
        """Export the whole document as one string.

        Contents are taken depth-first, each parent before its children,
        and joined with ``separator`` (``settings.export_separator`` when
        None). No trailing separator.
        """
        if separator is None:
            separator = settings.export_separator
        return separator.join(self.export_lines())

    def export_lines(self) -> list[str]:
        """Block contents in export order."""
        return [block.content for block in self.walk()]

    # =========================================================================
    # Traversal
    # =========================================================================

    def walk(self, parent: Block | None = None) -> Iterator[Block]:
        """Yield the descendants of ``parent`` (or the whole document) pre-order."""
        stack = [iter(self.fetch(parent))]
        while stack:
            block = next(stack[-1], None)
            if block is None:
                stack.pop()
                continue
            yield block
            stack.append(iter(block.children))

    def get_ancestors(self, block: Block) -> list[Block]:
        """Get all ancestors of a block, from immediate parent to top level."""
        ancestors = []
        current = block

        while current.parent_id:
            parent = self._blocks.get(current.parent_id)
            if parent is None:
                break
            ancestors.append(parent)
            current = parent

        return ancestors

    def get_descendants(self, block: Block) -> list[Block]:
        """Get all descendants of a block (depth-first)."""
        return list(self.walk(block))

    def get_depth(self, block: Block) -> int:
        """Nesting depth of a block (0 for top-level blocks)."""
        return len(self.get_ancestors(block))

    def get_root_block(self, block: Block) -> Block:
        """Top-level ancestor of a block, or the block itself."""
        ancestors = self.get_ancestors(block)
        return ancestors[-1] if ancestors else block

    def is_descendant(self, candidate: Block, ancestor: Block) -> bool:
        """Check whether ``candidate`` sits anywhere below ``ancestor``."""
        return any(a is ancestor for a in self.get_ancestors(candidate))

    # =========================================================================
    # Integrity
    # =========================================================================

    def check_integrity(self) -> list[str]:
        """Check the indices against the tree.

        Returns:
            Problem descriptions; empty when the store is consistent.
        """
        problems: list[str] = []

        for block_id, block in self._blocks.items():
            if block.id != block_id:
                problems.append(f"Block {block.id} is indexed under {block_id}")
            if self._children_by_id.get(block_id) is not block.children:
                problems.append(f"Children index for {block_id} is not the block's children list")
            if block.parent_id and block.parent_id not in self._blocks:
                problems.append(f"Block {block_id} has unknown parent {block.parent_id}")

        for key in self._children_by_id:
            if key != ROOT_ID and key not in self._blocks:
                problems.append(f"Children index has stale entry {key}")

        seen: set[int] = set()
        pending: list[tuple[str, list[Block]]] = [(ROOT_ID, self.children)]
        while pending:
            owner_id, sequence = pending.pop()
            for block in sequence:
                if id(block) in seen:
                    problems.append(f"Block {block.id} appears more than once in the tree")
                    continue
                seen.add(id(block))
                if not self._is_indexed(block):
                    problems.append(f"Block {block.id} is in the tree but not indexed")
                if (block.parent_id or ROOT_ID) != owner_id:
                    problems.append(
                        f"Block {block.id} has parent {block.parent_id!r} but is owned by {owner_id!r}"
                    )
                pending.append((block.id, block.children))

        for block_id, block in self._blocks.items():
            if id(block) not in seen:
                problems.append(f"Block {block_id} is indexed but not reachable from the root")

        return problems

    # =========================================================================
    # Internals
    # =========================================================================

    def _is_indexed(self, block: Block) -> bool:
        return self._blocks.get(block.id) is block

    def _require_indexed(self, block: Block) -> None:
        if not self._is_indexed(block):
            raise NotFoundError(f"Block not found: {block.id}", resource_type="block", resource_id=block.id)

    def _sequence_of(self, parent_id: str | None) -> list[Block]:
        """Children list for a parent id; None and ROOT_ID give the top level."""
        key = parent_id or ROOT_ID
        sequence = self._children_by_id.get(key)
        if sequence is None:
            raise NotFoundError(f"Parent block not found: {key}", resource_type="block", resource_id=key)
        return sequence

    def _siblings_of(self, block: Block) -> list[Block]:
        return self._sequence_of(block.parent_id)

    def _new_subtree_ids(self, block: Block, planned_ids: set[str]) -> set[str]:
        """Ids of ``block`` and its attached descendants, all of which must be new."""
        seen = {block.id}
        pending = list(block.children)
        while pending:
            child = pending.pop()
            if child.id in self._blocks:
                raise InvalidArgumentError(
                    f"Block {child.id} under {block.id} is already in the document",
                    field="blocks",
                    value=child.id,
                )
            if child.id in seen or child.id in planned_ids:
                raise InvalidArgumentError(
                    f"Block {child.id} under {block.id} appears more than once",
                    field="blocks",
                    value=child.id,
                )
            seen.add(child.id)
            pending.extend(child.children)
        return seen

    def _post_order(self, block: Block) -> list[Block]:
        """``block``'s subtree with every child listed before its parent."""
        order: list[Block] = []
        stack = [(block, False)]
        while stack:
            node, expanded = stack.pop()
            if expanded:
                order.append(node)
                continue
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(node.children))
        return order

    def _register(self, block: Block) -> None:
        pending = [block]
        while pending:
            node = pending.pop()
            self._blocks[node.id] = node
            self._children_by_id[node.id] = node.children
            for child in node.children:
                child.parent_id = node.id
                pending.append(child)
