import pytest

from gift_builder.core.block_store import BlockStore
from gift_builder.persistence.memory import InMemoryAdapter


@pytest.fixture
def adapter():
    return InMemoryAdapter(key="test-config")


@pytest.fixture
def store(adapter):
    return BlockStore.open(adapter)


@pytest.fixture
def abc_store(store):
    """Store holding three notes A, B, C."""
    for text in ("A", "B", "C"):
        block = store.add_block("note")
        store.update_content(block.id, {"text": text})
    return store
