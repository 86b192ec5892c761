"""BlockStore — owner of the gift document and its mutation engine."""

import copy
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from gift_builder.core.block import (
    Block,
    BlockContent,
    BlockStyle,
    content_class_for,
    content_from_dict,
    generate_id,
)
from gift_builder.core.document import Document
from gift_builder.core.selection import SelectionManager
from gift_builder.core.serializer import ConfigSerializer
from gift_builder.core.theme import CUSTOM_THEME_KEY, ThemeDef
from gift_builder.errors import NotFoundError, PersistenceError, ValidationError
from gift_builder.persistence.base import PersistenceAdapter

logger = logging.getLogger(__name__)

ContentLike = Union[BlockContent, Dict[str, Any]]
StyleLike = Union[BlockStyle, Dict[str, Any]]


def _keep_backup(adapter: PersistenceAdapter, text: str) -> None:
    """Copy unreadable stored text aside before the first save replaces it."""
    try:
        adapter.backup(text)
    except PersistenceError as e:
        logger.warning("Could not back up stored document %r: %s", adapter.key, e.message)
    else:
        logger.warning("Kept a backup of stored document %r", adapter.key)


class BlockStore:
    """Owns the ordered block sequence and applies every structural mutation.

    Each accepted mutation is written through to ``adapter`` before the call
    returns. Mutations that reference a missing block id are no-ops and do
    not save. Removing a block also removes it from the selection.

    Parameters
    ----------
    adapter : PersistenceAdapter
        Durable storage for the serialized document.
    document : Document, optional
        Initial document. Use :meth:`open` to load it from ``adapter``.
    serializer : ConfigSerializer, optional
        Codec shared by persistence, export and import.
    on_persistence_error : callable, optional
        Called with the :class:`PersistenceError` when a save fails.

    Examples
    --------
    >>> store = BlockStore.open(InMemoryAdapter())
    >>> hero = store.add_block("hero")
    >>> store.duplicate_block(hero.id)
    >>> store.toggle_selection(hero.id)
    >>> store.duplicate_selected()
    """

    def __init__(
        self,
        adapter: PersistenceAdapter,
        document: Optional[Document] = None,
        serializer: Optional[ConfigSerializer] = None,
        on_persistence_error: Optional[Callable[[PersistenceError], None]] = None,
    ) -> None:
        self._adapter = adapter
        self._document = document if document is not None else Document.default()
        self._serializer = serializer or ConfigSerializer()
        self._on_persistence_error = on_persistence_error
        self.selection = SelectionManager(lambda: self._document.block_ids)
        self.last_persistence_error: Optional[PersistenceError] = None

    @classmethod
    def open(
        cls,
        adapter: PersistenceAdapter,
        serializer: Optional[ConfigSerializer] = None,
        on_persistence_error: Optional[Callable[[PersistenceError], None]] = None,
    ) -> "BlockStore":
        """Load the document from ``adapter``, or start from the default one.

        A missing, unreadable or malformed stored document is replaced by
        :meth:`Document.default`; the failure is logged, not raised. Malformed
        text is handed to ``adapter.backup`` first so the next save cannot
        destroy it.
        """
        serializer = serializer or ConfigSerializer()
        document = None
        try:
            text = adapter.load()
            if text is not None:
                document = serializer.import_config(text)
        except PersistenceError as e:
            logger.warning("Could not load stored document %r: %s", adapter.key, e.message)
        except ValidationError as e:
            logger.warning("Discarding malformed stored document %r: %s", adapter.key, e.message)
            _keep_backup(adapter, text)
        if document is None:
            document = Document.default()
        return cls(
            adapter,
            document=document,
            serializer=serializer,
            on_persistence_error=on_persistence_error,
        )

    # Read access

    @property
    def document(self) -> Document:
        return self._document

    @property
    def blocks(self) -> List[Block]:
        return self._document.blocks

    @property
    def theme(self) -> ThemeDef:
        return self._document.theme

    def __len__(self) -> int:
        return len(self._document.blocks)

    def get_block(self, block_id: str) -> Optional[Block]:
        return self._document.find(block_id)

    def index_of(self, block_id: str) -> int:
        return self._document.index_of(block_id)

    def require_block(self, block_id: str) -> Block:
        """Like :meth:`get_block`, but raises :class:`NotFoundError` when absent."""
        block = self.get_block(block_id)
        if block is None:
            raise NotFoundError(f"No block {block_id}", context={"block_id": block_id})
        return block

    # Single-block mutations

    def add_block(self, type_tag: str) -> Block:
        """Append a block of ``type_tag`` with default content and style.

        Unrecognized tags are accepted with empty content.
        """
        block = Block.create(type_tag, block_id=self._new_id())
        self._document.blocks.append(block)
        logger.debug("Added %s block %s", type_tag, block.id)
        self._save()
        return block

    def update_content(self, block_id: str, content: ContentLike) -> None:
        """Replace the whole content record of ``block_id``.

        Raises
        ------
        ValidationError
            If ``content`` does not fit the block's type, for example a
            string ``correctIndex``. The block is left unchanged.
        """
        try:
            block = self.require_block(block_id)
        except NotFoundError as e:
            logger.debug("update_content ignored: %s", e.message)
            return
        if isinstance(content, BlockContent):
            self._serializer.validate_content(block.type, content.to_dict())
            if not isinstance(content, content_class_for(block.type)):
                content = content_from_dict(block.type, content.to_dict())
        else:
            self._serializer.validate_content(block.type, content)
            content = content_from_dict(block.type, content)
        block.content = copy.deepcopy(content)
        self._save()

    def update_style(self, block_id: str, style: StyleLike) -> None:
        """Replace the whole style record of ``block_id``."""
        try:
            block = self.require_block(block_id)
        except NotFoundError as e:
            logger.debug("update_style ignored: %s", e.message)
            return
        if isinstance(style, dict):
            try:
                style = BlockStyle.from_dict(style)
            except ValueError as e:
                raise ValidationError(
                    f"Invalid block style: {e}", context={"reason": "schema", "block_id": block_id}
                ) from e
        block.style = copy.deepcopy(style)
        self._save()

    def move_block(self, index: int, direction: int) -> None:
        """Swap the block at ``index`` with its neighbor in ``direction``.

        ``direction`` is -1 (towards the start) or +1 (towards the end).
        Moves past either end of the sequence are ignored.
        """
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or +1, got {direction!r}")
        blocks = self._document.blocks
        target = index + direction
        if not (0 <= index < len(blocks)) or not (0 <= target < len(blocks)):
            return
        blocks[index], blocks[target] = blocks[target], blocks[index]
        self._save()

    def duplicate_block(self, block_id: str) -> Optional[Block]:
        """Insert a deep copy of ``block_id`` right after it, with a new id."""
        index = self.index_of(block_id)
        if index < 0:
            return None
        duplicate = self._copy(self._document.blocks[index])
        self._document.blocks.insert(index + 1, duplicate)
        logger.debug("Duplicated block %s as %s", block_id, duplicate.id)
        self._save()
        return duplicate

    def remove_block(self, block_id: str) -> None:
        index = self.index_of(block_id)
        if index < 0:
            return
        del self._document.blocks[index]
        self.selection.discard(block_id)
        logger.debug("Removed block %s", block_id)
        self._save()

    # Bulk mutations

    def bulk_duplicate(self, block_ids: Iterable[str]) -> List[Block]:
        """Duplicate every block in ``block_ids``.

        Copies keep the relative order of their sources and are inserted as
        one batch after the selected block with the highest index. The
        selection becomes the new copies.
        """
        wanted = set(block_ids)
        blocks = self._document.blocks
        positions = [i for i, b in enumerate(blocks) if b.id in wanted]
        if not positions:
            return []
        duplicates: List[Block] = []
        for i in positions:
            duplicates.append(self._copy(blocks[i], reserved=[d.id for d in duplicates]))
        insert_at = max(positions) + 1
        blocks[insert_at:insert_at] = duplicates
        self.selection.replace(d.id for d in duplicates)
        logger.debug("Duplicated %d blocks after index %d", len(duplicates), insert_at - 1)
        self._save()
        return duplicates

    def bulk_delete(self, block_ids: Iterable[str]) -> int:
        """Remove every block in ``block_ids`` and clear the selection.

        Returns the number of blocks removed. Confirmation is the caller's job.
        """
        wanted = set(block_ids)
        before = len(self._document.blocks)
        self._document.blocks = [b for b in self._document.blocks if b.id not in wanted]
        removed = before - len(self._document.blocks)
        self.selection.clear()
        if removed:
            logger.debug("Deleted %d blocks", removed)
            self._save()
        return removed

    # Selection

    def toggle_selection(self, block_id: str) -> None:
        self.selection.toggle(block_id)

    def select_all(self) -> None:
        self.selection.select_all()

    def clear_selection(self) -> None:
        self.selection.clear()

    def duplicate_selected(self) -> List[Block]:
        return self.bulk_duplicate(self.selection.ids)

    def delete_selected(self) -> int:
        if not len(self.selection):
            return 0
        return self.bulk_delete(self.selection.ids)

    # Theme

    def set_theme(self, theme_key: str) -> None:
        """Select a preset by key, or ``"custom"`` for the custom theme.

        Unknown keys are stored as given and resolve to the default preset.
        """
        if not isinstance(theme_key, str) or not theme_key:
            raise ValidationError(
                f"Invalid theme key {theme_key!r}", context={"reason": "schema", "path": "$.themeKey"}
            )
        self._document.theme_key = theme_key
        self._save()

    def set_custom_theme(self, theme: ThemeDef) -> None:
        """Replace the custom theme and make it the active one."""
        self._serializer.validate_theme(theme.to_dict())
        self._document.custom_theme = copy.deepcopy(theme)
        self._document.theme_key = CUSTOM_THEME_KEY
        self._save()

    # Whole-document operations

    def reset(self) -> None:
        """Start over with a fresh default document."""
        self._document = Document.default()
        self.selection.clear()
        self._save()

    def export_config(self) -> str:
        return self._serializer.export_config(self._document)

    def import_config(self, text: str) -> None:
        """Replace the whole document with the one encoded in ``text``.

        Raises
        ------
        ValidationError
            If ``text`` is malformed; the current document is left untouched.
        """
        document = self._serializer.import_config(text)
        self._document = document
        self.selection.clear()
        logger.info("Imported document %s (%d blocks)", document.document_id, len(document.blocks))
        self._save()

    def save(self) -> bool:
        """Write the document through to storage. Returns False on failure."""
        return self._save()

    # Internals

    def _new_id(self, reserved: Iterable[str] = ()) -> str:
        existing = set(self._document.block_ids)
        existing.update(reserved)
        block_id = generate_id()
        while block_id in existing:
            block_id = generate_id()
        return block_id

    def _copy(self, block: Block, reserved: Iterable[str] = ()) -> Block:
        duplicate = copy.deepcopy(block)
        duplicate.id = self._new_id(reserved)
        return duplicate

    def _save(self) -> bool:
        try:
            self._adapter.save(self._serializer.export_config(self._document))
        except PersistenceError as e:
            self.last_persistence_error = e
            logger.warning("Unsaved changes: %s", e.message)
            if self._on_persistence_error is not None:
                self._on_persistence_error(e)
            return False
        self.last_persistence_error = None
        return True
