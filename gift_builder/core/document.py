"""The gift document: theme selection, custom theme and ordered blocks."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from gift_builder.core.block import Block, BlockType, HeroContent, generate_id
from gift_builder.core.theme import DEFAULT_THEME_KEY, ThemeDef, preset, resolve_theme

SCHEMA_VERSION = 1
DEFAULT_TITLE = "My Gift"


@dataclass
class Document:
    """The persisted and exported unit.

    Attributes
    ----------
    theme_key : str
        A preset key or ``"custom"``.
    custom_theme : ThemeDef
        Authoritative theme when ``theme_key == "custom"``.
    blocks : List[Block]
        Blocks in render order.
    document_id : str
        Identifier assigned when the document was created.
    """

    theme_key: str = DEFAULT_THEME_KEY
    custom_theme: ThemeDef = field(default_factory=lambda: preset(DEFAULT_THEME_KEY))
    blocks: List[Block] = field(default_factory=list)
    document_id: str = field(default_factory=generate_id)
    schema_version: int = SCHEMA_VERSION

    @classmethod
    def default(cls) -> "Document":
        """Fresh empty document on the ``modern`` preset."""
        return cls()

    @property
    def theme(self) -> ThemeDef:
        return resolve_theme(self.theme_key, self.custom_theme)

    @property
    def title(self) -> str:
        """Title of the first hero block, used to name exported artifacts."""
        for block in self.blocks:
            if block.block_type is BlockType.HERO and isinstance(block.content, HeroContent):
                if block.content.title:
                    return block.content.title
        return DEFAULT_TITLE

    @property
    def block_ids(self) -> List[str]:
        return [b.id for b in self.blocks]

    def find(self, block_id: str) -> Optional[Block]:
        for block in self.blocks:
            if block.id == block_id:
                return block
        return None

    def index_of(self, block_id: str) -> int:
        """Position of ``block_id`` in render order, or -1 if absent."""
        for i, block in enumerate(self.blocks):
            if block.id == block_id:
                return i
        return -1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schemaVersion": self.schema_version,
            "themeKey": self.theme_key,
            "customTheme": self.custom_theme.to_dict(),
            "blocks": [b.to_dict() for b in self.blocks],
            "documentId": self.document_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Document":
        # Files written before the rename use "theme" and "id".
        theme_key = data.get("themeKey", data.get("theme", DEFAULT_THEME_KEY))
        document_id = data.get("documentId", data.get("id")) or generate_id()
        custom = data.get("customTheme")
        return cls(
            theme_key=theme_key,
            custom_theme=ThemeDef.from_dict(custom) if custom else preset(DEFAULT_THEME_KEY),
            blocks=[Block.from_dict(b) for b in data.get("blocks", [])],
            document_id=document_id,
            schema_version=data.get("schemaVersion", SCHEMA_VERSION),
        )
