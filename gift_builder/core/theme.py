"""Theme definitions and resolution."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

CUSTOM_THEME_KEY = "custom"
DEFAULT_THEME_KEY = "modern"

FONTS = {
    "font-sans": "Clean (Sans)",
    "font-serif": "Elegant (Serif)",
    "font-mono": "Code (Mono)",
    "font-handwriting": "Handwritten",
}


@dataclass
class ThemeDef:
    """A named bundle of colors, font and decorative glyphs.

    Attributes
    ----------
    name : str
        Display name.
    background : str
        Page background (a utility class such as ``bg-slate-50`` or a CSS color).
    primary_color, secondary_color, text_color : str
        Hex colors.
    font_family : str
        One of the keys of :data:`FONTS`.
    particles : List[str]
        Decorative glyphs floated over the document.
    """

    name: str
    background: str
    primary_color: str
    secondary_color: str
    text_color: str
    font_family: str = "font-sans"
    particles: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "bg": self.background,
            "primary": self.primary_color,
            "secondary": self.secondary_color,
            "text": self.text_color,
            "font": self.font_family,
            "particles": list(self.particles),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ThemeDef":
        return cls(
            name=data["name"],
            background=data["bg"],
            primary_color=data["primary"],
            secondary_color=data["secondary"],
            text_color=data["text"],
            font_family=data.get("font", "font-sans"),
            particles=list(data.get("particles", [])),
        )

    @property
    def font_label(self) -> str:
        return FONTS.get(self.font_family, self.font_family)


PRESET_THEMES: Dict[str, ThemeDef] = {
    "romantic": ThemeDef(
        name="Romantic Red",
        background="bg-gradient-to-br from-rose-50 to-pink-100",
        primary_color="#f43f5e",
        secondary_color="#ffe4e6",
        text_color="#881337",
        font_family="font-serif",
        particles=["❤️", "🌹", "💋", "💌"],
    ),
    "friendship": ThemeDef(
        name="Sunny Friendship",
        background="bg-gradient-to-br from-amber-50 to-orange-100",
        primary_color="#fb923c",
        secondary_color="#ffedd5",
        text_color="#7c2d12",
        font_family="font-sans",
        particles=["☀️", "🌻", "🍦", "💛"],
    ),
    "modern": ThemeDef(
        name="Modern Minimalist",
        background="bg-slate-50",
        primary_color="#1e293b",
        secondary_color="#e2e8f0",
        text_color="#0f172a",
        font_family="font-mono",
        particles=["✨", "◼️", "🖊️", "🏐"],
    ),
    "party": ThemeDef(
        name="Neon Party",
        background="bg-slate-900",
        primary_color="#a855f7",
        secondary_color="#581c87",
        text_color="#ffffff",
        font_family="font-sans",
        particles=["🎉", "🎈", "🪩", "🥂"],
    ),
}


def preset(theme_key: str) -> ThemeDef:
    """Return a fresh copy of the preset stored under ``theme_key``."""
    return ThemeDef.from_dict(PRESET_THEMES[theme_key].to_dict())


def resolve_theme(theme_key: str, custom_theme: Optional[ThemeDef]) -> ThemeDef:
    """Resolve the active theme.

    ``"custom"`` returns ``custom_theme`` unchanged. Any other key is looked
    up in :data:`PRESET_THEMES` and returned as a copy; unknown keys (and
    ``"custom"`` with no custom theme) fall back to the ``modern`` preset.
    """
    if theme_key == CUSTOM_THEME_KEY and custom_theme is not None:
        return custom_theme
    if theme_key not in PRESET_THEMES:
        logger.warning("Unknown theme key %r, using %r", theme_key, DEFAULT_THEME_KEY)
        theme_key = DEFAULT_THEME_KEY
    return preset(theme_key)


def is_valid_theme_key(theme_key: str) -> bool:
    return theme_key == CUSTOM_THEME_KEY or theme_key in PRESET_THEMES
