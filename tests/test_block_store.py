"""Tests for BlockStore mutations, selection cascade and write-through."""

import json

import pytest

from gift_builder.core.block import BlockStyle, BlockType, HeroContent, NoteContent, Width
from gift_builder.core.block_store import BlockStore
from gift_builder.core.theme import PRESET_THEMES, ThemeDef
from gift_builder.errors import NotFoundError, PersistenceError, ValidationError
from gift_builder.persistence.memory import InMemoryAdapter


def _texts(store):
    return [b.content.text for b in store.blocks]


def _without_id(block):
    d = block.to_dict()
    d.pop("id")
    return d


# --- add / update ---


def test_add_hero_to_empty_document(store):
    block = store.add_block("hero")
    assert len(store) == 1
    assert store.blocks[0] is block
    assert block.type == "hero"
    assert block.content.to_dict() == {"title": "Celebrate!", "subtitle": "This is for you."}
    assert block.style.to_dict() == {
        "bg": "transparent",
        "align": "center",
        "padding": "normal",
        "width": "full",
    }


def test_add_appends_at_end(abc_store):
    block = abc_store.add_block("coupon")
    assert abc_store.blocks[-1] is block


def test_add_unknown_type_is_permissive(store):
    block = store.add_block("sparkles")
    assert block.type == "sparkles"
    assert block.content.to_dict() == {}


def test_update_content_replaces_whole_record(store):
    block = store.add_block("hero")
    store.update_content(block.id, {"title": "Old", "subtitle": "Old sub"})
    store.update_content(block.id, {"title": "New"})
    assert block.content.title == "New"
    assert block.content.subtitle == "This is for you."


def test_update_content_accepts_record(store):
    block = store.add_block("hero")
    store.update_content(block.id, HeroContent(title="Happy Birthday", subtitle="Sam"))
    assert store.get_block(block.id).content == HeroContent(title="Happy Birthday", subtitle="Sam")


def test_update_content_coerces_mismatched_record(store):
    block = store.add_block("hero")
    store.update_content(block.id, NoteContent(text="hi"))
    assert isinstance(block.content, HeroContent)
    assert block.content.extra == {"text": "hi"}


def test_require_block(store):
    block = store.add_block("note")
    assert store.require_block(block.id) is block
    with pytest.raises(NotFoundError) as exc_info:
        store.require_block("missing")
    assert exc_info.value.context == {"block_id": "missing"}


def test_update_missing_block_is_noop(store, adapter):
    store.add_block("note")
    saves = adapter.save_count
    store.update_content("missing", {"text": "late AI answer"})
    store.update_style("missing", BlockStyle(width=Width.HALF))
    assert adapter.save_count == saves


def test_update_style(store):
    block = store.add_block("note")
    store.update_style(block.id, {"bg": "dark", "align": "left", "padding": "compact", "width": "half"})
    assert block.style.width is Width.HALF
    assert block.style.to_dict()["bg"] == "dark"


# --- move ---


def test_move_down_and_back(abc_store):
    for i in range(1, len(abc_store)):
        before = [b.id for b in abc_store.blocks]
        abc_store.move_block(i, -1)
        abc_store.move_block(i - 1, 1)
        assert [b.id for b in abc_store.blocks] == before


def test_move_swaps_neighbors(abc_store):
    abc_store.move_block(0, 1)
    assert _texts(abc_store) == ["B", "A", "C"]


def test_move_clamps_at_edges(abc_store, adapter):
    saves = adapter.save_count
    abc_store.move_block(0, -1)
    abc_store.move_block(2, 1)
    abc_store.move_block(7, -1)
    assert _texts(abc_store) == ["A", "B", "C"]
    assert adapter.save_count == saves


def test_move_rejects_bad_direction(abc_store):
    with pytest.raises(ValueError):
        abc_store.move_block(1, 2)


# --- duplicate / remove ---


def test_duplicate_inserts_copy_after_source(abc_store):
    a, b, c = abc_store.blocks
    copy = abc_store.duplicate_block(b.id)
    assert len(abc_store) == 4
    assert [x.id for x in abc_store.blocks] == [a.id, b.id, copy.id, c.id]
    assert copy.id != b.id
    assert _without_id(copy) == _without_id(b)


def test_duplicate_is_deep(store):
    quiz = store.add_block("quiz")
    copy = store.duplicate_block(quiz.id)
    copy.content.options.append("Hulk")
    assert "Hulk" not in quiz.content.options


def test_duplicate_missing_block(abc_store):
    assert abc_store.duplicate_block("missing") is None
    assert len(abc_store) == 3


def test_ids_stay_unique(store):
    first = store.add_block("note")
    for _ in range(5):
        store.duplicate_block(first.id)
        store.add_block("poll")
        store.move_block(len(store) - 1, -1)
    store.remove_block(first.id)
    ids = [b.id for b in store.blocks]
    assert len(ids) == len(set(ids))


def test_remove_block_prunes_selection(abc_store):
    b = abc_store.blocks[1]
    abc_store.toggle_selection(b.id)
    abc_store.remove_block(b.id)
    assert b.id not in abc_store.selection
    assert _texts(abc_store) == ["A", "C"]


def test_remove_missing_block(abc_store, adapter):
    saves = adapter.save_count
    abc_store.remove_block("missing")
    assert len(abc_store) == 3
    assert adapter.save_count == saves


# --- bulk ---


def test_bulk_duplicate_inserts_after_highest_selected(abc_store):
    a, b, c = abc_store.blocks
    abc_store.toggle_selection(a.id)
    abc_store.toggle_selection(c.id)
    copies = abc_store.duplicate_selected()
    assert len(abc_store) == 5
    assert _texts(abc_store) == ["A", "B", "C", "A", "C"]
    assert [x.id for x in abc_store.blocks[3:]] == [x.id for x in copies]
    assert set(abc_store.selection.ids) == {copies[0].id, copies[1].id}


def test_bulk_duplicate_ignores_argument_order(abc_store):
    a, b, c = abc_store.blocks
    abc_store.bulk_duplicate([c.id, a.id])
    assert _texts(abc_store) == ["A", "B", "C", "A", "C"]


def test_bulk_duplicate_middle_block(abc_store):
    a, b, c = abc_store.blocks
    abc_store.bulk_duplicate([a.id, b.id])
    assert _texts(abc_store) == ["A", "B", "A", "B", "C"]


def test_bulk_duplicate_nothing(abc_store):
    assert abc_store.bulk_duplicate(["missing"]) == []
    assert len(abc_store) == 3


def test_bulk_delete_clears_selection(abc_store):
    a, b, c = abc_store.blocks
    abc_store.toggle_selection(a.id)
    abc_store.toggle_selection(b.id)
    assert abc_store.delete_selected() == 2
    assert _texts(abc_store) == ["C"]
    assert len(abc_store.selection) == 0


def test_delete_selected_with_empty_selection(abc_store):
    assert abc_store.delete_selected() == 0
    assert len(abc_store) == 3


def test_select_all_via_store(abc_store):
    abc_store.select_all()
    assert len(abc_store.selection) == 3
    abc_store.select_all()
    assert len(abc_store.selection) == 0


# --- theme ---


def test_default_theme_is_modern(store):
    assert store.document.theme_key == "modern"
    assert store.theme == PRESET_THEMES["modern"]


def test_set_theme(store):
    store.set_theme("romantic")
    assert store.theme.name == "Romantic Red"


def test_set_unknown_theme_resolves_to_default(store):
    store.set_theme("vaporwave")
    assert store.theme == PRESET_THEMES["modern"]


def test_set_custom_theme(store):
    custom = ThemeDef("Mine", "#000", "#111", "#222", "#fff", "font-sans", ["*"])
    store.set_custom_theme(custom)
    assert store.document.theme_key == "custom"
    assert store.theme == custom


# --- write-through persistence ---


def test_every_mutation_saves(store, adapter):
    block = store.add_block("hero")
    assert adapter.save_count == 1
    store.update_content(block.id, {"title": "x"})
    store.duplicate_block(block.id)
    store.move_block(0, 1)
    store.remove_block(block.id)
    assert adapter.save_count == 5
    saved = json.loads(adapter.load())
    assert [b["id"] for b in saved["blocks"]] == [b.id for b in store.blocks]


def test_reopen_restores_document(adapter):
    store = BlockStore.open(adapter)
    store.add_block("hero")
    store.add_block("poll")
    reopened = BlockStore.open(InMemoryAdapter(key=adapter.key, storage=adapter.storage))
    assert reopened.document == store.document


def test_open_with_malformed_storage_falls_back(adapter):
    adapter.save("{not json")
    store = BlockStore.open(adapter)
    assert store.blocks == []
    assert store.document.theme_key == "modern"


class _FailingAdapter(InMemoryAdapter):
    def save(self, text):
        raise PersistenceError("disk full")

    def load(self):
        raise PersistenceError("unreadable")


def test_open_with_unreadable_storage_falls_back():
    store = BlockStore.open(_FailingAdapter())
    assert store.blocks == []


def test_failed_save_keeps_mutation_and_reports():
    reported = []
    store = BlockStore(_FailingAdapter(), on_persistence_error=reported.append)
    block = store.add_block("note")
    assert store.blocks == [block]
    assert isinstance(store.last_persistence_error, PersistenceError)
    assert reported and reported[0].message == "disk full"
    assert store.save() is False


# --- import / export / reset ---


def test_import_replaces_document_and_clears_selection(abc_store):
    other = BlockStore(InMemoryAdapter())
    other.add_block("hero")
    other.set_theme("party")
    abc_store.select_all()
    abc_store.import_config(other.export_config())
    assert abc_store.document == other.document
    assert len(abc_store.selection) == 0


def test_import_malformed_leaves_document_untouched(abc_store, adapter):
    before = abc_store.export_config()
    saves = adapter.save_count
    with pytest.raises(ValidationError):
        abc_store.import_config("not valid json")
    assert abc_store.export_config() == before
    assert adapter.save_count == saves


def test_reset(abc_store):
    old_id = abc_store.document.document_id
    abc_store.select_all()
    abc_store.reset()
    assert abc_store.blocks == []
    assert abc_store.document.document_id != old_id
    assert len(abc_store.selection) == 0


# --- everything the store saves opens again ---


def _reopen(adapter):
    return BlockStore.open(InMemoryAdapter(key=adapter.key, storage=adapter.storage))


def test_reopen_keeps_unknown_type_block(store, adapter):
    store.add_block("hero")
    store.add_block("note")
    odd = store.add_block("sparkles")
    reopened = _reopen(adapter)
    assert len(reopened) == 3
    assert reopened.get_block(odd.id).type == "sparkles"
    assert reopened.document == store.document


def test_export_of_every_block_type_imports_again(store):
    for block_type in BlockType:
        store.add_block(block_type.value)
    store.add_block("sparkles")
    store.set_custom_theme(ThemeDef("Mine", "#000", "#111", "#222", "#fff", "font-sans", ["*"]))
    restored = BlockStore(InMemoryAdapter())
    restored.import_config(store.export_config())
    assert restored.document == store.document


@pytest.mark.parametrize(
    "block_type, content",
    [
        ("quiz", {"question": "Q?", "options": ["a", "b"], "correctIndex": "1"}),
        ("hero", {"title": None}),
        ("timeline", {"events": "soon"}),
        ("dice", {"diceCount": 0}),
        ("note", "just text"),
    ],
    ids=["quiz-index-string", "hero-null-title", "timeline-events-string", "dice-zero", "not-a-dict"],
)
def test_update_content_rejects_content_that_would_not_reopen(store, adapter, block_type, content):
    block = store.add_block(block_type)
    before = block.content
    saves = adapter.save_count
    with pytest.raises(ValidationError):
        store.update_content(block.id, content)
    assert block.content == before
    assert adapter.save_count == saves
    assert len(_reopen(adapter)) == 1


def test_update_content_rejects_invalid_record(store):
    block = store.add_block("hero")
    with pytest.raises(ValidationError):
        store.update_content(block.id, HeroContent(title=None))
    assert block.content.title == "Celebrate!"


def test_update_style_rejects_unknown_value(store, adapter):
    block = store.add_block("note")
    saves = adapter.save_count
    with pytest.raises(ValidationError):
        store.update_style(block.id, {"bg": "neon"})
    assert block.style == BlockStyle()
    assert adapter.save_count == saves


def test_set_theme_rejects_empty_key(store):
    with pytest.raises(ValidationError):
        store.set_theme("")
    assert store.document.theme_key == "modern"


def test_set_custom_theme_rejects_invalid_theme(store):
    with pytest.raises(ValidationError):
        store.set_custom_theme(ThemeDef("Mine", "#000", None, "#222", "#fff"))
    assert store.document.theme_key == "modern"


def test_malformed_storage_is_backed_up(adapter):
    adapter.save("{not json")
    store = BlockStore.open(adapter)
    store.add_block("note")
    assert adapter.storage[adapter.backup_key] == "{not json"
