"""Tests for theme presets and resolution."""

from gift_builder.core.theme import (
    CUSTOM_THEME_KEY,
    PRESET_THEMES,
    ThemeDef,
    is_valid_theme_key,
    preset,
    resolve_theme,
)


def _custom():
    return ThemeDef(
        name="Ocean",
        background="#e0f2fe",
        primary_color="#0284c7",
        secondary_color="#bae6fd",
        text_color="#0c4a6e",
        font_family="font-handwriting",
        particles=["🌊", "🐚"],
    )


def test_exactly_four_presets():
    assert set(PRESET_THEMES) == {"romantic", "friendship", "modern", "party"}


def test_modern_preset():
    modern = PRESET_THEMES["modern"]
    assert modern.name == "Modern Minimalist"
    assert modern.primary_color == "#1e293b"
    assert modern.font_family == "font-mono"
    assert modern.font_label == "Code (Mono)"
    assert len(modern.particles) == 4


def test_resolve_preset():
    assert resolve_theme("party", _custom()).name == "Neon Party"


def test_resolve_custom_returns_custom_unchanged():
    custom = _custom()
    assert resolve_theme(CUSTOM_THEME_KEY, custom) is custom


def test_resolve_unknown_key_falls_back_to_modern():
    assert resolve_theme("vaporwave", _custom()) == PRESET_THEMES["modern"]


def test_resolve_custom_without_definition_falls_back():
    assert resolve_theme(CUSTOM_THEME_KEY, None) == PRESET_THEMES["modern"]


def test_preset_returns_copy():
    copy = preset("romantic")
    copy.particles.append("x")
    assert "x" not in PRESET_THEMES["romantic"].particles


def test_theme_def_roundtrip():
    d = _custom().to_dict()
    assert d["bg"] == "#e0f2fe"
    assert d["primary"] == "#0284c7"
    assert d["font"] == "font-handwriting"
    assert ThemeDef.from_dict(d) == _custom()


def test_is_valid_theme_key():
    assert is_valid_theme_key("custom")
    assert is_valid_theme_key("friendship")
    assert not is_valid_theme_key("vaporwave")


def test_resolved_preset_is_a_copy():
    theme = resolve_theme("party", None)
    theme.particles.append("x")
    theme.primary_color = "#000000"
    assert "x" not in PRESET_THEMES["party"].particles
    assert resolve_theme("party", None) == PRESET_THEMES["party"]
