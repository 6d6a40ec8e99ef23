"""In-place editing helpers for ordered block sequences.

The document store never rebinds a children list; every splice goes
through these functions so the list objects shared with the indices
stay the same objects.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from ..errors import InvalidArgumentError, NotFoundError

T = TypeVar("T")


def insert_at_index(items: list[T], item: T, index: int | None = None) -> list[T]:
    """Insert ``item`` at ``index``, shifting later elements right.

    Args:
        items: Sequence to modify in place.
        item: Element to insert.
        index: Target position. ``None`` or anything past the end appends.

    Returns:
        ``items`` itself.

    Raises:
        InvalidArgumentError: If ``index`` is negative.
    """
    if index is None or index > len(items):
        index = len(items)
    if index < 0:
        raise InvalidArgumentError("Index must not be negative", field="index", value=index)

    items.insert(index, item)
    return items


def insert_after_item(items: list[T], item: T, after_item: T) -> list[T]:
    """Insert ``item`` directly after the last element equal to ``after_item``.

    Raises:
        NotFoundError: If ``after_item`` is not in ``items``.
    """
    for position in range(len(items) - 1, -1, -1):
        if items[position] == after_item:
            items.insert(position + 1, item)
            return items

    raise NotFoundError(
        "Anchor item is not in the sequence",
        resource_type="anchor",
        resource_id=getattr(after_item, "id", None),
    )


def remove_matching(items: list[T], predicate: Callable[[T], bool]) -> int:
    """Remove every element matching ``predicate``; survivors keep their order.

    Returns:
        Number of elements removed.
    """
    survivors = [o for o in items if not predicate(o)]
    removed = len(items) - len(survivors)
    if removed:
        items[:] = survivors
    return removed
