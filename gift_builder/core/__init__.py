"""Core document model and mutation engine."""

from gift_builder.core.block import (
    Align,
    Background,
    Block,
    BlockContent,
    BlockStyle,
    BlockType,
    Padding,
    UnknownContent,
    Width,
)
from gift_builder.core.block_store import BlockStore
from gift_builder.core.document import Document
from gift_builder.core.selection import SelectionManager
from gift_builder.core.serializer import ConfigSerializer
from gift_builder.core.theme import PRESET_THEMES, ThemeDef, resolve_theme

__all__ = [
    "Align",
    "Background",
    "Block",
    "BlockContent",
    "BlockStyle",
    "BlockType",
    "Padding",
    "UnknownContent",
    "Width",
    "BlockStore",
    "Document",
    "SelectionManager",
    "ConfigSerializer",
    "PRESET_THEMES",
    "ThemeDef",
    "resolve_theme",
]
