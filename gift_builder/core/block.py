"""
Block data structures for the gift document.

A block is one addressable unit of content and style. Its ``content`` is a
typed record chosen by the block's type tag; tags with no registered record
keep their raw mapping in :class:`UnknownContent`.
"""

import uuid
from dataclasses import MISSING, dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Type


class BlockType(Enum):
    """Recognized block type tags."""

    HERO = "hero"
    SECTION = "section"
    NOTE = "note"
    QUIZ = "quiz"
    COUNTDOWN = "countdown"
    MAP = "map"
    VIDEO = "video"
    SECRET = "secret"
    TIMELINE = "timeline"
    MUSIC = "music"
    GALLERY = "gallery"
    COUPON = "coupon"
    POLL = "poll"
    GAME = "game"
    WISDOM = "wisdom"
    OPEN_WHEN = "openwhen"
    VOICE = "voice"
    SPIN_WHEEL = "spinwheel"
    DRAWING = "drawing"
    DICE = "dice"
    SPACER = "spacer"

    @classmethod
    def parse(cls, tag: str) -> Optional["BlockType"]:
        """Return the enum member for ``tag``, or None if unrecognized."""
        try:
            return cls(tag)
        except ValueError:
            return None


class Background(Enum):
    TRANSPARENT = "transparent"
    WHITE = "white"
    PRIMARY_TINT = "primary"
    DARK = "dark"


class Align(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class Padding(Enum):
    COMPACT = "compact"
    NORMAL = "normal"
    SPACIOUS = "spacious"


class Width(Enum):
    FULL = "full"
    HALF = "half"


def generate_id() -> str:
    """Return a fresh opaque block identifier."""
    return uuid.uuid4().hex[:12]


@dataclass
class BlockStyle:
    """Per-block presentation hints."""

    background: Background = Background.TRANSPARENT
    align: Align = Align.CENTER
    padding: Padding = Padding.NORMAL
    width: Width = Width.FULL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bg": self.background.value,
            "align": self.align.value,
            "padding": self.padding.value,
            "width": self.width.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BlockStyle":
        return cls(
            background=Background(data.get("bg", Background.TRANSPARENT.value)),
            align=Align(data.get("align", Align.CENTER.value)),
            padding=Padding(data.get("padding", Padding.NORMAL.value)),
            width=Width(data.get("width", Width.FULL.value)),
        )


def _wire(name: str, default: Any = MISSING, factory: Any = MISSING, item: Any = None) -> Any:
    """Declare a record field stored under a different key in the wire format."""
    metadata = {"wire": name, "item": item}
    if factory is not MISSING:
        return field(default_factory=factory, metadata=metadata)
    return field(default=default, metadata=metadata)


@dataclass
class ContentRecord:
    """Base for content records.

    Keys a record does not declare are kept in ``extra`` so that renderer
    additions and hand-edited keys survive export and import unchanged.
    """

    extra: Dict[str, Any] = field(default_factory=dict, kw_only=True)

    @classmethod
    def _record_fields(cls):
        return [f for f in fields(cls) if f.name != "extra"]

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = dict(self.extra)
        for f in self._record_fields():
            value = getattr(self, f.name)
            if f.metadata.get("item") is not None:
                value = [v.to_dict() for v in value]
            elif isinstance(value, list):
                value = list(value)
            data[f.metadata.get("wire") or f.name] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContentRecord":
        kwargs: Dict[str, Any] = {}
        known = set()
        for f in cls._record_fields():
            key = f.metadata.get("wire") or f.name
            known.add(key)
            if key not in data:
                continue
            value = data[key]
            item_cls = f.metadata.get("item")
            if item_cls is not None:
                value = [item_cls.from_dict(v) for v in value]
            elif isinstance(value, list):
                value = list(value)
            kwargs[f.name] = value
        extra = {k: v for k, v in data.items() if k not in known}
        return cls(extra=extra, **kwargs)


@dataclass
class BlockContent(ContentRecord):
    """Base for the typed content of a block."""

    block_type: ClassVar[Optional[BlockType]] = None


@dataclass
class HeroContent(BlockContent):
    block_type: ClassVar[Optional[BlockType]] = BlockType.HERO

    title: str = "Celebrate!"
    subtitle: str = "This is for you."


@dataclass
class SectionContent(BlockContent):
    block_type: ClassVar[Optional[BlockType]] = BlockType.SECTION

    title: str = "New Chapter"


@dataclass
class NoteContent(BlockContent):
    block_type: ClassVar[Optional[BlockType]] = BlockType.NOTE

    text: str = "Write a heartfelt message..."


@dataclass
class QuizContent(BlockContent):
    block_type: ClassVar[Optional[BlockType]] = BlockType.QUIZ

    question: str = "Who is my favorite superhero?"
    options: List[str] = field(
        default_factory=lambda: ["Batman", "Superman", "Iron Man", "Thor"]
    )
    correct_index: int = _wire("correctIndex", 0)


@dataclass
class CountdownContent(BlockContent):
    block_type: ClassVar[Optional[BlockType]] = BlockType.COUNTDOWN

    date: str = "2025-01-01"
    label: str = "Countdown"


@dataclass
class MapContent(BlockContent):
    block_type: ClassVar[Optional[BlockType]] = BlockType.MAP

    location: str = "Paris, France"
    caption: str = "Where it all began."


@dataclass
class VideoContent(BlockContent):
    block_type: ClassVar[Optional[BlockType]] = BlockType.VIDEO

    url: str = ""


@dataclass
class SecretContent(BlockContent):
    block_type: ClassVar[Optional[BlockType]] = BlockType.SECRET

    code: str = "1234"
    hint: str = "Password is 1234"
    message: str = "Surprise!"


@dataclass
class TimelineEvent(ContentRecord):
    date: str = ""
    title: str = ""
    desc: str = ""


@dataclass
class TimelineContent(BlockContent):
    block_type: ClassVar[Optional[BlockType]] = BlockType.TIMELINE

    events: List[TimelineEvent] = _wire(
        "events",
        factory=lambda: [TimelineEvent(date="2023", title="Start", desc="A special moment.")],
        item=TimelineEvent,
    )


@dataclass
class MusicContent(BlockContent):
    block_type: ClassVar[Optional[BlockType]] = BlockType.MUSIC

    title: str = "Our Song"
    artist: str = "Artist"
    link: str = ""


@dataclass
class GalleryContent(BlockContent):
    block_type: ClassVar[Optional[BlockType]] = BlockType.GALLERY

    images: List[Any] = field(default_factory=list)


@dataclass
class CouponContent(BlockContent):
    block_type: ClassVar[Optional[BlockType]] = BlockType.COUPON

    text: str = "Good for One Hug"


@dataclass
class PollContent(BlockContent):
    block_type: ClassVar[Optional[BlockType]] = BlockType.POLL

    question: str = "What should we do next?"
    options: List[str] = field(default_factory=lambda: ["Dinner", "Movie", "Trip"])


@dataclass
class GameContent(BlockContent):
    block_type: ClassVar[Optional[BlockType]] = BlockType.GAME


@dataclass
class WisdomContent(BlockContent):
    block_type: ClassVar[Optional[BlockType]] = BlockType.WISDOM

    quotes: List[str] = field(
        default_factory=lambda: ["The best thing to hold onto in life is each other."]
    )


@dataclass
class OpenWhenItem(ContentRecord):
    id: int = 1
    label: str = ""
    text: str = ""


@dataclass
class OpenWhenContent(BlockContent):
    block_type: ClassVar[Optional[BlockType]] = BlockType.OPEN_WHEN

    items: List[OpenWhenItem] = _wire(
        "items",
        factory=lambda: [
            OpenWhenItem(id=1, label="Open when you're happy", text="I'm glad you're smiling!")
        ],
        item=OpenWhenItem,
    )


@dataclass
class VoiceContent(BlockContent):
    block_type: ClassVar[Optional[BlockType]] = BlockType.VOICE

    audio_url: Optional[str] = _wire("audioURL", None)


@dataclass
class SpinWheelContent(BlockContent):
    block_type: ClassVar[Optional[BlockType]] = BlockType.SPIN_WHEEL

    options: List[str] = field(
        default_factory=lambda: ["Option 1", "Option 2", "Option 3", "Option 4"]
    )


@dataclass
class DrawingContent(BlockContent):
    block_type: ClassVar[Optional[BlockType]] = BlockType.DRAWING

    drawing_data: Optional[str] = _wire("drawingData", None)


@dataclass
class DiceContent(BlockContent):
    block_type: ClassVar[Optional[BlockType]] = BlockType.DICE

    dice_count: int = _wire("diceCount", 1)


@dataclass
class SpacerContent(BlockContent):
    block_type: ClassVar[Optional[BlockType]] = BlockType.SPACER

    height: str = "medium"  # small, medium, large, custom
    custom_height: str = _wire("customHeight", "50px")
    show_divider: bool = _wire("showDivider", False)
    divider_style: str = _wire("dividerStyle", "line")  # line, dots, pattern, custom
    custom_pattern: str = _wire("customPattern", "❤️")
    pattern_spacing: str = _wire("patternSpacing", "medium")


@dataclass
class UnknownContent(BlockContent):
    """Content of a block whose type tag has no registered record."""

    raw: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.raw)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UnknownContent":
        return cls(raw=dict(data))


CONTENT_TYPES: Dict[BlockType, Type[BlockContent]] = {
    cls.block_type: cls
    for cls in (
        HeroContent,
        SectionContent,
        NoteContent,
        QuizContent,
        CountdownContent,
        MapContent,
        VideoContent,
        SecretContent,
        TimelineContent,
        MusicContent,
        GalleryContent,
        CouponContent,
        PollContent,
        GameContent,
        WisdomContent,
        OpenWhenContent,
        VoiceContent,
        SpinWheelContent,
        DrawingContent,
        DiceContent,
        SpacerContent,
    )
}


def content_class_for(type_tag: str) -> Type[BlockContent]:
    block_type = BlockType.parse(type_tag)
    if block_type is None:
        return UnknownContent
    return CONTENT_TYPES[block_type]


def default_content(type_tag: str) -> BlockContent:
    """Fresh default content for ``type_tag`` (empty for unrecognized tags)."""
    return content_class_for(type_tag)()


def content_from_dict(type_tag: str, data: Dict[str, Any]) -> BlockContent:
    return content_class_for(type_tag).from_dict(data)


@dataclass
class Block:
    """One block of the gift document.

    Attributes
    ----------
    id : str
        Opaque identifier, unique within its document.
    type : str
        Type tag. Unrecognized tags are kept verbatim.
    content : BlockContent
        Typed content record for ``type``.
    style : BlockStyle
        Presentation hints.
    """

    id: str
    type: str
    content: BlockContent
    style: BlockStyle = field(default_factory=BlockStyle)

    @property
    def block_type(self) -> Optional[BlockType]:
        return BlockType.parse(self.type)

    @classmethod
    def create(cls, type_tag: str, block_id: Optional[str] = None) -> "Block":
        """Create a block with default content and default style."""
        return cls(
            id=block_id or generate_id(),
            type=type_tag,
            content=default_content(type_tag),
            style=BlockStyle(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "content": self.content.to_dict(),
            "style": self.style.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Block":
        return cls(
            id=data["id"],
            type=data["type"],
            content=content_from_dict(data["type"], data["content"]),
            style=BlockStyle.from_dict(data["style"]),
        )
