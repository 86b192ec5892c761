"""HTML renderers and the whole-document view."""

import html
import uuid
from typing import TYPE_CHECKING, Any, List, Optional, Union

from gift_builder.core.block import (
    Background,
    Block,
    BlockStyle,
    BlockType,
    Width,
)
from gift_builder.core.document import Document
from gift_builder.core.theme import ThemeDef
from gift_builder.render.dispatch import OnUpdate, RendererRegistry, default_registry
from gift_builder.styles.block_styles import (
    BACKGROUND_COLORS,
    BLOCK_ICONS,
    BLOCK_LABELS,
    FLEX_ALIGN,
    FONT_STACKS,
    PADDING,
    THEME_BACKGROUNDS,
)

if TYPE_CHECKING:
    from gift_builder.core.block_store import BlockStore

_e = html.escape


def css_value(value: str) -> str:
    """Make a theme value safe inside a ``style=""`` attribute.

    Anything after the first ``;`` is dropped and quotes are escaped, so an
    imported theme cannot add declarations or leave the attribute.
    """
    return _e(str(value).split(";", 1)[0].strip(), quote=True)


def wrapper_css(style: BlockStyle, theme: ThemeDef) -> str:
    """Inline CSS for the box around a block."""
    if style.background is Background.PRIMARY_TINT:
        background = css_value(theme.secondary_color)
    else:
        background = BACKGROUND_COLORS[style.background]
    shadow = "none" if style.background is Background.TRANSPARENT else "0 10px 15px -3px rgba(0,0,0,0.1)"
    color = "white" if style.background is Background.DARK else "inherit"
    return (
        f"background-color:{background};padding:{PADDING[style.padding]};"
        f"border-radius:1rem;color:{color};box-shadow:{shadow};"
        f"display:flex;flex-direction:column;align-items:{FLEX_ALIGN[style.align]};"
        f"text-align:{style.align.value};"
    )


def theme_background_css(theme: ThemeDef) -> str:
    return css_value(THEME_BACKGROUNDS.get(theme.background, theme.background))


# Renderers


def render_hero(content, theme, is_editing, on_update, style) -> str:
    return (
        f'<h1 class="gb-hero-title" style="color:{css_value(theme.primary_color)};">{_e(content.title)}</h1>'
        f'<p class="gb-hero-subtitle">{_e(content.subtitle)}</p>'
    )


def render_section(content, theme, is_editing, on_update, style) -> str:
    return (
        f'<div class="gb-section"><hr style="border-color:{css_value(theme.primary_color)};">'
        f"<h2>{_e(content.title)}</h2></div>"
    )


def render_note(content, theme, is_editing, on_update, style) -> str:
    paragraphs = "".join(f"<p>{_e(line)}</p>" for line in content.text.split("\n") if line)
    return f'<div class="gb-note">{paragraphs}</div>'


def render_coupon(content, theme, is_editing, on_update, style) -> str:
    return (
        f'<div class="gb-coupon" style="border:2px dashed {css_value(theme.primary_color)};'
        f'padding:1.5rem;">{BLOCK_ICONS[BlockType.COUPON]} {_e(content.text)}</div>'
    )


def render_wisdom(content, theme, is_editing, on_update, style) -> str:
    quotes = content.quotes if is_editing else content.quotes[:1]
    items = "".join(f"<blockquote>{_e(q)}</blockquote>" for q in quotes)
    return f'<div class="gb-wisdom">{items}</div>'


def _options_list(options: List[str], marked: Optional[int] = None) -> str:
    items = []
    for i, option in enumerate(options):
        mark = " ✓" if i == marked else ""
        items.append(f"<li>{_e(option)}{mark}</li>")
    return f"<ol>{''.join(items)}</ol>"


def render_quiz(content, theme, is_editing, on_update, style) -> str:
    marked = content.correct_index if is_editing else None
    return (
        f'<div class="gb-quiz"><h3 style="color:{css_value(theme.primary_color)};">{_e(content.question)}</h3>'
        f"{_options_list(content.options, marked)}</div>"
    )


def render_poll(content, theme, is_editing, on_update, style) -> str:
    header = "Poll Editor" if is_editing else "Your Opinion?"
    return (
        f'<div class="gb-poll"><div style="background:{css_value(theme.primary_color)};color:white;'
        f'padding:1rem;font-weight:bold;">{header}</div>'
        f"<h3>{_e(content.question)}</h3>{_options_list(content.options)}</div>"
    )


def render_timeline(content, theme, is_editing, on_update, style) -> str:
    items = "".join(
        f'<li><span class="gb-date" style="color:{css_value(theme.primary_color)};">{_e(ev.date)}</span> '
        f"<strong>{_e(ev.title)}</strong><p>{_e(ev.desc)}</p></li>"
        for ev in content.events
    )
    return f'<ul class="gb-timeline">{items}</ul>'


def render_card(content, theme, is_editing, on_update, style) -> str:
    """Generic key/value card for blocks without a dedicated renderer."""
    block_type = content.block_type
    label = BLOCK_LABELS.get(block_type, "Block") if block_type else "Block"
    icon = BLOCK_ICONS.get(block_type, "") if block_type else ""
    rows = []
    for key, value in content.to_dict().items():
        if value in (None, "", [], {}):
            continue
        if isinstance(value, list):
            value = ", ".join(str(v) for v in value)
        rows.append(f"<dt>{_e(str(key))}</dt><dd>{_e(str(value))}</dd>")
    return (
        f'<div class="gb-card"><div class="gb-card-label" style="color:{css_value(theme.primary_color)};">'
        f"{icon} {_e(label)}</div><dl>{''.join(rows)}</dl></div>"
    )


DEDICATED_RENDERERS = {
    BlockType.HERO: render_hero,
    BlockType.SECTION: render_section,
    BlockType.NOTE: render_note,
    BlockType.COUPON: render_coupon,
    BlockType.WISDOM: render_wisdom,
    BlockType.QUIZ: render_quiz,
    BlockType.POLL: render_poll,
    BlockType.TIMELINE: render_timeline,
}


def register_builtin_renderers(registry: RendererRegistry) -> None:
    for block_type in BlockType:
        registry.register(block_type, DEDICATED_RENDERERS.get(block_type, render_card))


class DocumentView:
    """Renders a whole gift document as standalone HTML.

    Parameters
    ----------
    source : BlockStore or Document
        What to render. A store also contributes its selection.
    registry : RendererRegistry, optional
        Renderer dispatch. Defaults to the built-in renderers.
    is_editing : bool
        Render blocks in editing mode.
    """

    def __init__(
        self,
        source: Union["BlockStore", Document],
        registry: Optional[RendererRegistry] = None,
        is_editing: bool = False,
    ) -> None:
        self._source = source
        self.registry = registry or default_registry()
        self.is_editing = is_editing
        self._uid = uuid.uuid4().hex[:12]

    @property
    def document(self) -> Document:
        if isinstance(self._source, Document):
            return self._source
        return self._source.document

    def _is_selected(self, block_id: str) -> bool:
        if isinstance(self._source, Document):
            return False
        return block_id in self._source.selection

    def _on_update(self, block: Block) -> Optional[OnUpdate]:
        if isinstance(self._source, Document):
            return None
        store = self._source
        return lambda content: store.update_content(block.id, content)

    def _repr_html_(self) -> str:
        """Jupyter auto-display."""
        return self.to_html()

    def display(self) -> None:
        """Display in IPython/Jupyter."""
        from IPython.display import HTML
        from IPython.display import display as ipy_display

        ipy_display(HTML(self.to_html()))

    def to_html(self) -> str:
        """Generate the full HTML string."""
        document = self.document
        theme = document.theme
        font = css_value(FONT_STACKS.get(theme.font_family, theme.font_family))
        parts = [
            f'<div id="gb-{self._uid}" class="gb-document" style="background:{theme_background_css(theme)};'
            f'color:{css_value(theme.text_color)};font-family:{font};">',
            f'<div class="gb-particles" aria-hidden="true">{_e(" ".join(theme.particles))}</div>',
            '<div class="gb-blocks" style="display:flex;flex-wrap:wrap;">',
        ]
        for block in document.blocks:
            parts.append(self._block_html(block, theme))
        parts.append("</div>")
        parts.append("</div>")
        return "\n".join(parts)

    def _block_html(self, block: Block, theme: ThemeDef) -> str:
        width = "50%" if block.style.width is Width.HALF else "100%"
        ring = "outline:2px solid #6366f1;" if self._is_selected(block.id) else ""
        inner = self.registry.render(block, theme, self.is_editing, self._on_update(block))
        return (
            f'<div class="gb-block" data-block-id="{_e(block.id)}" '
            f'style="box-sizing:border-box;width:{width};padding:0.5rem;{ring}">'
            f'<div style="{wrapper_css(block.style, theme)}">{inner}</div></div>'
        )

    def to_file(self, path: Any) -> None:
        with open(path, "w", encoding="utf-8") as f:
            f.write(f"<!DOCTYPE html><html><head><meta charset=\"utf-8\"><title>{_e(self.document.title)}</title></head>")
            f.write(f"<body>{self.to_html()}</body></html>")
