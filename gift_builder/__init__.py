"""
Gift Builder — assemble, theme, persist and exchange block-based gift documents.
"""

__version__ = "0.1.0"

from typing import Optional

from gift_builder.core.block import Block, BlockStyle, BlockType
from gift_builder.core.block_store import BlockStore
from gift_builder.core.document import Document
from gift_builder.core.selection import SelectionManager
from gift_builder.core.serializer import ConfigSerializer
from gift_builder.core.theme import PRESET_THEMES, ThemeDef, resolve_theme
from gift_builder.errors import (
    ExternalServiceError,
    GenerationTimeoutError,
    GiftBuilderError,
    MediaAccessError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from gift_builder.persistence import FileAdapter, InMemoryAdapter, PersistenceAdapter


def open_store(data_dir: Optional[str] = None, **kwargs):  # type: ignore[no-untyped-def]
    """Convenience function to open the file-backed store for ``data_dir``."""
    return BlockStore.open(FileAdapter(data_dir=data_dir), **kwargs)


def ai_assistant(**kwargs):  # type: ignore[no-untyped-def]
    """Convenience function to create an AI assistant backed by LiteLLM."""
    from gift_builder.generation import AIAssistant, LiteLLMGenerator

    return AIAssistant(LiteLLMGenerator(**kwargs))


def document_view(source, **kwargs):  # type: ignore[no-untyped-def]
    """Convenience function to create an HTML view of a store or document."""
    from gift_builder.render.html import DocumentView

    return DocumentView(source, **kwargs)


__all__ = [
    "Block",
    "BlockStyle",
    "BlockType",
    "BlockStore",
    "Document",
    "SelectionManager",
    "ConfigSerializer",
    "PRESET_THEMES",
    "ThemeDef",
    "resolve_theme",
    "GiftBuilderError",
    "ValidationError",
    "NotFoundError",
    "ExternalServiceError",
    "GenerationTimeoutError",
    "MediaAccessError",
    "PersistenceError",
    "PersistenceAdapter",
    "FileAdapter",
    "InMemoryAdapter",
    "open_store",
    "ai_assistant",
    "document_view",
    "__version__",
]
