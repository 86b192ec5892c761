"""Tests for block data structures."""

from gift_builder.core.block import (
    Block,
    BlockStyle,
    BlockType,
    GameContent,
    HeroContent,
    OpenWhenItem,
    QuizContent,
    SpacerContent,
    TimelineContent,
    TimelineEvent,
    UnknownContent,
    VoiceContent,
    content_from_dict,
    default_content,
)


def test_block_type_values():
    assert BlockType.HERO.value == "hero"
    assert BlockType.OPEN_WHEN.value == "openwhen"
    assert BlockType.SPIN_WHEEL.value == "spinwheel"
    assert len(BlockType) == 21


def test_block_type_parse():
    assert BlockType.parse("quiz") is BlockType.QUIZ
    assert BlockType.parse("sparkles") is None


def test_default_style():
    assert BlockStyle().to_dict() == {
        "bg": "transparent",
        "align": "center",
        "padding": "normal",
        "width": "full",
    }


def test_style_roundtrip():
    data = {"bg": "primary", "align": "left", "padding": "spacious", "width": "half"}
    assert BlockStyle.from_dict(data).to_dict() == data


def test_hero_defaults():
    assert default_content("hero").to_dict() == {
        "title": "Celebrate!",
        "subtitle": "This is for you.",
    }


def test_wire_names_are_camel_case():
    assert QuizContent().to_dict()["correctIndex"] == 0
    assert VoiceContent().to_dict() == {"audioURL": None}
    spacer = SpacerContent().to_dict()
    assert spacer["customHeight"] == "50px"
    assert spacer["showDivider"] is False


def test_nested_records():
    content = default_content("timeline")
    assert isinstance(content, TimelineContent)
    assert content.events == [TimelineEvent(date="2023", title="Start", desc="A special moment.")]
    openwhen = default_content("openwhen")
    assert openwhen.items[0] == OpenWhenItem(
        id=1, label="Open when you're happy", text="I'm glad you're smiling!"
    )


def test_defaults_are_independent():
    a = QuizContent()
    b = QuizContent()
    a.options.append("Hulk")
    assert b.options == ["Batman", "Superman", "Iron Man", "Thor"]


def test_empty_content_for_game():
    assert GameContent().to_dict() == {}


def test_unknown_tag_gets_empty_content():
    content = default_content("sparkles")
    assert isinstance(content, UnknownContent)
    assert content.to_dict() == {}


def test_unknown_content_keeps_raw_data():
    content = content_from_dict("sparkles", {"count": 3})
    assert isinstance(content, UnknownContent)
    assert content.to_dict() == {"count": 3}


def test_extra_keys_preserved():
    content = HeroContent.from_dict({"title": "Hi", "color": "red"})
    assert content.title == "Hi"
    assert content.subtitle == "This is for you."
    assert content.extra == {"color": "red"}
    assert content.to_dict() == {"title": "Hi", "subtitle": "This is for you.", "color": "red"}


def test_block_create():
    block = Block.create("hero")
    assert block.type == "hero"
    assert block.block_type is BlockType.HERO
    assert isinstance(block.content, HeroContent)
    assert block.style == BlockStyle()
    assert block.id


def test_block_roundtrip():
    block = Block.create("timeline", block_id="b1")
    block.content.events.append(TimelineEvent(date="2024", title="Trip", desc="Rome"))
    restored = Block.from_dict(block.to_dict())
    assert restored == block
    assert isinstance(restored.content.events[1], TimelineEvent)
