"""Mapping from block type tags to renderers."""

import html
import logging
from typing import Any, Callable, Dict, Optional, Protocol

from gift_builder.core.block import Block, BlockContent, BlockStyle, BlockType
from gift_builder.core.theme import ThemeDef

logger = logging.getLogger(__name__)

OnUpdate = Callable[[BlockContent], None]


class Renderer(Protocol):
    def __call__(
        self,
        content: BlockContent,
        theme: ThemeDef,
        is_editing: bool,
        on_update: Optional[OnUpdate],
        style: BlockStyle,
    ) -> str: ...


def unknown_block_placeholder(type_tag: str) -> str:
    """Fixed diagnostic shown for tags with no renderer."""
    return (
        '<div class="gb-unknown" style="padding:1rem;background:#fee2e2;'
        f'color:#ef4444;border-radius:0.25rem;">Unknown Block: {html.escape(type_tag)}</div>'
    )


class RendererRegistry:
    """Total mapping from type tag to renderer.

    Tags without a registered renderer render
    :func:`unknown_block_placeholder`; :meth:`render` never raises for an
    unknown tag.
    """

    def __init__(self) -> None:
        self._renderers: Dict[str, Renderer] = {}

    def register(self, block_type: Any, renderer: Renderer) -> None:
        tag = block_type.value if isinstance(block_type, BlockType) else str(block_type)
        self._renderers[tag] = renderer

    def unregister(self, block_type: Any) -> None:
        tag = block_type.value if isinstance(block_type, BlockType) else str(block_type)
        self._renderers.pop(tag, None)

    def has_renderer(self, type_tag: str) -> bool:
        return type_tag in self._renderers

    def render(
        self,
        block: Block,
        theme: ThemeDef,
        is_editing: bool = False,
        on_update: Optional[OnUpdate] = None,
    ) -> str:
        renderer = self._renderers.get(block.type)
        if renderer is None:
            logger.debug("No renderer for block type %r", block.type)
            return unknown_block_placeholder(block.type)
        return renderer(block.content, theme, is_editing, on_update, block.style)


_default_registry: Optional[RendererRegistry] = None


def default_registry() -> RendererRegistry:
    """Registry with the built-in HTML renderers, created on first use."""
    global _default_registry
    if _default_registry is None:
        from gift_builder.render.html import register_builtin_renderers

        _default_registry = RendererRegistry()
        register_builtin_renderers(_default_registry)
    return _default_registry
