"""Durable storage adapters for the gift document."""

from gift_builder.persistence.base import PersistenceAdapter
from gift_builder.persistence.file import FileAdapter
from gift_builder.persistence.memory import InMemoryAdapter

__all__ = [
    "PersistenceAdapter",
    "FileAdapter",
    "InMemoryAdapter",
]
