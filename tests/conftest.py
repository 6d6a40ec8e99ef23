from __future__ import annotations

from dataclasses import dataclass

import pytest

from outliner.blocks import Block, DocumentStore


@dataclass
class SampleDocument:
    """The two-line document most store tests start from."""

    store: DocumentStore
    block_a: Block
    block_b: Block

    @property
    def initial(self) -> list[Block]:
        return [self.block_a, self.block_b]


@pytest.fixture
def store() -> DocumentStore:
    """Empty store."""
    return DocumentStore()


@pytest.fixture
def sample(store: DocumentStore) -> SampleDocument:
    """Store holding "line 1" and "line 2" at top level."""
    block_a = Block("line 1")
    block_b = Block("line 2")
    store.insert([block_a, block_b])
    return SampleDocument(store=store, block_a=block_a, block_b=block_b)


def assert_consistent(store: DocumentStore) -> None:
    """Fail with the integrity report if the store indices are out of sync."""
    problems = store.check_integrity()
    assert problems == [], "\n".join(problems)
