"""Renderer dispatch and HTML rendering of gift documents."""

from gift_builder.render.dispatch import RendererRegistry, default_registry
from gift_builder.render.html import DocumentView

__all__ = [
    "RendererRegistry",
    "default_registry",
    "DocumentView",
]
