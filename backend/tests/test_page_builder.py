"""Tests for the page builder editor against an in-memory content store."""

import pytest

from portfolio.application.page_builder import DELETE_PROMPT, EditorRegistry, PageBuilderEditor
from portfolio.domain.exceptions import InvariantViolation, NotFound, ValidationError
from portfolio.domain.sections import TextBlockSection, UnknownSection
from portfolio.store import PROJECTS_TABLE, SECTIONS_TABLE


def seed_section(store, section_type="text_block", parent="home", display_order=0, **fields):
    return store.seed(
        SECTIONS_TABLE,
        section_type=section_type,
        parent=parent,
        display_order=display_order,
        title=fields.pop("title", None),
        content=fields.pop("content", None),
        image_url=fields.pop("image_url", None),
        images=fields.pop("images", []),
        settings=fields.pop("settings", {}),
    )


@pytest.fixture
def editor(memory_store, clock):
    return PageBuilderEditor(memory_store, clock=clock)


@pytest.fixture
def abc_editor(memory_store, editor):
    """Page "home" with sections A, B and C at orders 0, 1 and 2."""
    for order, title in enumerate("ABC"):
        seed_section(memory_store, title=title, display_order=order)
    editor.load()
    return editor


def titles(editor):
    return [s.title for s in editor.sections]


def orders(editor):
    return [s.display_order for s in editor.sections]


class TestLoad:
    def test_load_orders_by_display_order(self, memory_store, editor):
        seed_section(memory_store, title="second", display_order=1)
        seed_section(memory_store, title="first", display_order=0)
        seed_section(memory_store, title="other page", parent="acme", display_order=0)

        assert editor.load() is True
        assert titles(editor) == ["first", "second"]
        assert editor.loaded

    def test_load_other_parent_closes_open_section(self, memory_store, abc_editor):
        abc_editor.toggle(abc_editor.sections[0].id)
        seed_section(memory_store, parent="acme", title="Acme intro")

        abc_editor.load("acme")

        assert abc_editor.parent == "acme"
        assert titles(abc_editor) == ["Acme intro"]
        assert abc_editor.expanded_id is None

    def test_failed_load_leaves_state(self, memory_store, abc_editor):
        memory_store.failing.add("select")

        assert abc_editor.load("acme") is False
        assert abc_editor.parent == "home"
        assert titles(abc_editor) == ["A", "B", "C"]
        assert abc_editor.status.is_error

    def test_unknown_types_are_loaded_inert(self, memory_store, editor):
        seed_section(memory_store, section_type="carousel")
        editor.load()
        assert isinstance(editor.sections[0], UnknownSection)
        assert editor.preview() == []

    def test_load_parents(self, memory_store, editor):
        memory_store.seed(PROJECTS_TABLE, slug="zeta")
        memory_store.seed(PROJECTS_TABLE, slug="acme")
        seed_section(memory_store, parent="orphan")

        assert editor.load_parents() == ["acme", "home", "orphan", "zeta"]


class TestCreate:
    def test_create_appends_and_expands(self, abc_editor):
        created = abc_editor.create("quote")

        assert created.id is not None
        assert abc_editor.sections[-1].id == created.id
        assert created.display_order == 3
        assert created.parent == "home"
        assert abc_editor.expanded_id == created.id

    def test_create_on_empty_page_starts_at_zero(self, editor):
        editor.load("acme")
        created = editor.create("divider")
        assert created.display_order == 0
        assert created.parent == "acme"

    def test_create_unknown_type(self, abc_editor):
        with pytest.raises(ValidationError):
            abc_editor.create("carousel")

    def test_failed_create_leaves_list(self, memory_store, abc_editor):
        memory_store.failing.add("insert")

        assert abc_editor.create("text_block") is None
        assert titles(abc_editor) == ["A", "B", "C"]
        assert abc_editor.message == "insert rejected by store"


class TestDuplicate:
    def test_duplicate_copies_content(self, memory_store, editor):
        source = seed_section(memory_store, title="Quote", content="Hi", section_type="quote",
                              settings={"bg_color": "#000"}, display_order=0)
        seed_section(memory_store, display_order=6)
        editor.load()

        copy = editor.duplicate(source["id"])

        assert copy.id != source["id"]
        assert copy.section_type == "quote"
        assert copy.content == "Hi"
        assert copy.settings.to_dict() == {"bg_color": "#000"}
        assert copy.display_order == 7

    def test_duplicate_missing_section(self, abc_editor):
        with pytest.raises(NotFound):
            abc_editor.duplicate("nope")


class TestDelete:
    def test_declined_confirmation_keeps_section(self, memory_store, abc_editor):
        prompts = []
        target = abc_editor.sections[1].id

        def decline(prompt):
            prompts.append(prompt)
            return False

        assert abc_editor.delete(target, confirm=decline) is False
        assert prompts == [DELETE_PROMPT]
        assert len(abc_editor.sections) == 3
        assert ("delete", target) not in memory_store.calls

    def test_failed_delete_keeps_section(self, memory_store, abc_editor):
        target = abc_editor.sections[1].id
        memory_store.failing_ids.add(target)

        assert abc_editor.delete(target, confirm=lambda prompt: True) is False
        assert titles(abc_editor) == ["A", "B", "C"]
        assert abc_editor.status.is_error

    def test_delete_closes_open_section(self, abc_editor):
        target = abc_editor.sections[0].id
        abc_editor.toggle(target)

        abc_editor.delete(target, confirm=lambda prompt: True)

        assert abc_editor.expanded_id is None


class TestReorder:
    def test_move_up_then_delete(self, abc_editor):
        assert abc_editor.reorder(1, -1) is True
        assert titles(abc_editor) == ["B", "A", "C"]
        assert orders(abc_editor) == [0, 1, 2]

        b_id = abc_editor.sections[0].id
        abc_editor.delete(b_id, confirm=lambda prompt: True)

        assert titles(abc_editor) == ["A", "C"]
        assert orders(abc_editor) == [1, 2]

    @pytest.mark.parametrize("index,direction", [(0, -1), (2, 1), (5, -1), (-1, 1)])
    def test_out_of_range_is_noop(self, abc_editor, index, direction):
        assert abc_editor.reorder(index, direction) is False
        assert titles(abc_editor) == ["A", "B", "C"]
        assert orders(abc_editor) == [0, 1, 2]

    def test_invalid_direction(self, abc_editor):
        with pytest.raises(ValidationError):
            abc_editor.reorder(0, 2)

    def test_orders_stay_dense(self, memory_store, editor):
        for order in (3, 7, 7, 12, 20):
            seed_section(memory_store, display_order=order)
        editor.load()

        for index, direction in [(0, 1), (4, -1), (2, 1), (1, -1), (3, 1), (0, -1)]:
            editor.reorder(index, direction)
            assert orders(editor) == list(range(5))

    def test_reorder_does_not_touch_store(self, memory_store, abc_editor):
        calls = len(memory_store.calls)
        abc_editor.reorder(0, 1)
        assert len(memory_store.calls) == calls


class TestSaveOrder:
    def test_order_round_trip(self, abc_editor):
        abc_editor.create("divider")
        abc_editor.reorder(3, -1)
        abc_editor.reorder(1, -1)
        expected = [s.id for s in abc_editor.sections]

        assert abc_editor.save_order() == []
        assert abc_editor.message == "Order saved!"

        abc_editor.load()
        assert [s.id for s in abc_editor.sections] == expected

    def test_partial_failure_reports_positions(self, memory_store, abc_editor):
        abc_editor.reorder(0, 1)
        memory_store.failing_ids.add(abc_editor.sections[1].id)

        assert abc_editor.save_order() == [1]
        assert abc_editor.message == "Order not saved for position(s) 2"
        assert abc_editor.status.is_error
        # the loop carried on past the failure
        assert ("update", abc_editor.sections[2].id) in memory_store.calls
        assert abc_editor.saving is False

    def test_can_save_order_needs_two_sections(self, memory_store, editor):
        seed_section(memory_store)
        editor.load()
        assert editor.can_save_order is False
        editor.create("quote")
        assert editor.can_save_order is True


class TestUpdateAndSave:
    def test_update_is_local(self, memory_store, abc_editor):
        target = abc_editor.sections[0].id
        abc_editor.update(target, {"title": "Edited"})

        assert abc_editor.get(target).title == "Edited"
        assert memory_store.tables[SECTIONS_TABLE][0]["title"] == "A"

    def test_badly_typed_value_is_a_validation_error(self, abc_editor):
        target = abc_editor.sections[0].id
        with pytest.raises(ValidationError, match="Invalid value for title"):
            abc_editor.update(target, {"title": 5})
        assert abc_editor.get(target).title == "A"

    def test_save_pushes_section(self, memory_store, abc_editor, clock):
        target = abc_editor.sections[0].id
        abc_editor.update(target, {"title": "Edited", "settings": {"alignment": "right"}})

        assert abc_editor.save(target) is True
        row = memory_store.tables[SECTIONS_TABLE][0]
        assert row["title"] == "Edited"
        assert row["settings"] == {"alignment": "right"}
        assert row["updated_at"] is not None
        assert abc_editor.message == "Saved!"

        clock.advance(3)
        assert abc_editor.message is None

    def test_failed_save_keeps_edit(self, memory_store, abc_editor):
        target = abc_editor.sections[0].id
        abc_editor.update(target, {"content": "Unsaved body"})
        memory_store.failing.add("update")

        assert abc_editor.save(target) is False
        assert abc_editor.get(target).content == "Unsaved body"
        assert abc_editor.saving is False

        memory_store.failing.clear()
        assert abc_editor.save(target) is True
        assert memory_store.tables[SECTIONS_TABLE][0]["content"] == "Unsaved body"

    def test_settings_merge_and_remove(self, memory_store, editor):
        seed_section(memory_store, settings={"alignment": "center", "bg_color": "#111"})
        editor.load()
        target = editor.sections[0].id

        editor.update(target, {"settings": {"bg_color": None}})
        assert editor.get(target).settings.to_dict() == {"alignment": "center"}

    def test_type_cannot_change(self, abc_editor):
        with pytest.raises(InvariantViolation):
            abc_editor.update(abc_editor.sections[0].id, {"section_type": "quote"})

    def test_fields_outside_variant_rejected(self, abc_editor):
        with pytest.raises(ValidationError):
            abc_editor.update(abc_editor.sections[0].id, {"image_url": "https://x/y.png"})

    def test_settings_outside_variant_rejected(self, abc_editor):
        with pytest.raises(InvariantViolation):
            abc_editor.update(abc_editor.sections[0].id, {"settings": {"columns": 2}})

    def test_unknown_sections_cannot_be_edited(self, memory_store, editor):
        row = seed_section(memory_store, section_type="carousel")
        editor.load()
        with pytest.raises(InvariantViolation):
            editor.update(row["id"], {"title": "x"})


class TestToggleAndPreview:
    def test_toggle(self, abc_editor):
        target = abc_editor.sections[2].id
        assert abc_editor.toggle(target) == target
        assert abc_editor.toggle(target) is None

    def test_preview_modes(self, editor):
        assert editor.toggle_preview() == "desktop"
        editor.set_preview_mode("mobile")
        assert editor.preview_mode == "mobile"
        assert editor.toggle_preview() is None
        with pytest.raises(ValidationError):
            editor.set_preview_mode("tablet")

    def test_preview_renders_current_edits(self, abc_editor):
        target = abc_editor.sections[0].id
        abc_editor.update(target, {"title": "Draft"})
        assert abc_editor.preview()[0].title == "Draft"

    def test_to_dict(self, abc_editor):
        state = abc_editor.to_dict()
        assert state["parent"] == "home"
        assert [s["title"] for s in state["sections"]] == ["A", "B", "C"]
        assert state["can_save_order"] is True
        assert {"type": "two_column", "label": "Two Column"} in state["block_types"]


class TestEditorRegistry:
    def test_one_editor_per_user(self, memory_store):
        registry = EditorRegistry()
        first = registry.for_user("u1", memory_store)

        assert registry.for_user("u1", memory_store) is first
        assert registry.for_user("u2", memory_store) is not first

        registry.discard("u1")
        assert registry.for_user("u1", memory_store) is not first

    def test_sections_are_typed(self, memory_store, editor):
        seed_section(memory_store, title="x")
        editor.load()
        assert isinstance(editor.sections[0], TextBlockSection)
