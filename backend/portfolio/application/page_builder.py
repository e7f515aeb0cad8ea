# portfolio/application/page_builder.py
"""
Page builder editor.

Holds the ordered section list of one page in memory and persists it on
explicit commands. The in-memory list is the source of truth for the admin
between saves:

- ``update`` never touches the store; ``save`` pushes one section
- ``reorder`` only rewrites local ``display_order`` values; ``save_order``
  pushes them one section at a time
- ``create``, ``duplicate`` and ``delete`` hit the store immediately and only
  change the list once the store accepted the call

A failed read leaves the list as it was. A failed save leaves the attempted
value in place; local edits are never discarded by a rejected write.
No version check is made against other admins: last write wins.
"""
from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import pydantic

from portfolio.domain.exceptions import (
    InvariantViolation,
    NotFound,
    QueryError,
    ValidationError,
    WriteError,
)
from portfolio.domain.invariants.section import (
    assert_known_type,
    assert_settings_meaningful,
    assert_type_unchanged,
)
from portfolio.domain.sections import (
    HOME_PAGE,
    SECTION_LABELS,
    STORE_MANAGED_FIELDS,
    UnknownSection,
    editable_fields,
    new_section,
    parse_section,
    section_to_row,
)
from portfolio.rendering.sections import render_sections
from portfolio.store import PROJECTS_TABLE, SECTIONS_TABLE
from portfolio.utils.order import next_order, renumber
from portfolio.utils.status import StatusMessage

logger = logging.getLogger(__name__)

PREVIEW_MODES = ("desktop", "mobile")
DELETE_PROMPT = "Delete this section?"


def _payload(section) -> Dict[str, Any]:
    row = section_to_row(section)
    for field in STORE_MANAGED_FIELDS:
        row.pop(field, None)
    return row


class PageBuilderEditor:
    def __init__(self, store, parent: str = HOME_PAGE, message_ttl: float = 3.0,
                 clock: Callable[[], float] = time.monotonic):
        self.store = store
        self.parent = parent
        self.sections: List = []
        self.parents: List[str] = [HOME_PAGE]
        self.expanded_id: Optional[str] = None
        self.preview_mode: Optional[str] = None
        self.saving = False
        self.loaded = False
        self.status = StatusMessage(ttl=message_ttl, clock=clock)

    # -------------------------------
    # Helpers
    # -------------------------------
    def _sections_table(self):
        return self.store.table(SECTIONS_TABLE)

    def _fail(self, error) -> None:
        logger.warning("Page builder (%s): %s", self.parent, error.message)
        self.status.show(error.message, error=True)

    @property
    def message(self) -> Optional[str]:
        return self.status.text

    @property
    def can_save_order(self) -> bool:
        return len(self.sections) > 1

    def index_of(self, section_id: str) -> int:
        for index, section in enumerate(self.sections):
            if section.id == section_id:
                return index
        raise NotFound(f"No section {section_id} on page {self.parent}")

    def get(self, section_id: str):
        return self.sections[self.index_of(section_id)]

    # -------------------------------
    # Loading
    # -------------------------------
    def load(self, parent: Optional[str] = None) -> bool:
        """
        Replace the in-memory list with the store's sections for ``parent``
        (defaults to the current page), ordered by ``display_order``.
        """
        target = parent or self.parent
        try:
            rows = (
                self._sections_table()
                .select("*")
                .eq("parent", target)
                .order("display_order")
                .execute()
            )
        except QueryError as e:
            self._fail(e)
            return False

        if target != self.parent:
            self.expanded_id = None
        self.parent = target
        self.sections = [parse_section(row) for row in rows]
        self.loaded = True

        if self.expanded_id and all(s.id != self.expanded_id for s in self.sections):
            self.expanded_id = None
        return True

    def load_parents(self) -> List[str]:
        """
        Every page key that can carry sections: home, each project slug and
        any key already used by a section.
        """
        try:
            projects = self.store.table(PROJECTS_TABLE).select("slug").execute()
            used = self._sections_table().select("parent").execute()
        except QueryError as e:
            self._fail(e)
            return self.parents

        parents = {HOME_PAGE}
        parents.update(row["slug"] for row in projects if row.get("slug"))
        parents.update(row["parent"] for row in used if row.get("parent"))
        self.parents = sorted(parents)
        return self.parents

    # -------------------------------
    # Store-backed mutations
    # -------------------------------
    def create(self, section_type: str):
        """
        Persist a new empty section at the end of the page and open it for
        editing. Returns ``None`` when the store rejects the insert.
        """
        try:
            assert_known_type(section_type)
        except InvariantViolation as e:
            raise ValidationError(e.message) from e

        section = new_section(section_type, parent=self.parent, display_order=next_order(self.sections))
        try:
            row = self._sections_table().insert(_payload(section))
        except WriteError as e:
            self._fail(e)
            return None

        created = parse_section(row)
        self.sections.append(created)
        self.expanded_id = created.id
        logger.info("Created %s section %s on %s", section_type, created.id, self.parent)
        return created

    def duplicate(self, section_id: str):
        """Copy a section (new id, same content and settings) to the end of the page."""
        source = self.get(section_id)

        payload = _payload(source)
        payload["display_order"] = next_order(self.sections)
        try:
            row = self._sections_table().insert(payload)
        except WriteError as e:
            self._fail(e)
            return None

        copy = parse_section(row)
        self.sections.append(copy)
        self.expanded_id = copy.id
        return copy

    def delete(self, section_id: str, confirm: Callable[[str], bool]) -> bool:
        """
        Remove a section from the store, then from the list. Nothing happens
        unless ``confirm`` accepts the prompt. Remaining orders are left as is.
        """
        self.index_of(section_id)

        if not confirm(DELETE_PROMPT):
            return False

        try:
            self._sections_table().delete(section_id)
        except WriteError as e:
            self._fail(e)
            return False

        self.sections = [s for s in self.sections if s.id != section_id]
        if self.expanded_id == section_id:
            self.expanded_id = None
        logger.info("Deleted section %s from %s", section_id, self.parent)
        return True

    def save(self, section_id: str) -> bool:
        """
        Push one section's current in-memory value to the store.

        On failure the edited value stays in memory so it can be saved again.
        """
        index = self.index_of(section_id)
        section = self.sections[index]

        now = datetime.now(timezone.utc)
        payload = _payload(section)
        payload["updated_at"] = now.isoformat()

        self.saving = True
        try:
            self._sections_table().update(section.id, payload)
        except WriteError as e:
            self._fail(e)
            return False
        finally:
            self.saving = False

        self.sections[index] = section.model_copy(update={"updated_at": now})
        self.status.show("Saved!")
        return True

    def save_order(self) -> List[int]:
        """
        Persist every section's ``display_order``, one update per section, in
        list order. A failure does not stop the loop; the 0-based indices
        that were not persisted are returned and reported.
        """
        failed = []

        self.saving = True
        try:
            for index, section in enumerate(list(self.sections)):
                try:
                    self._sections_table().update(section.id, {"display_order": section.display_order})
                except WriteError as e:
                    logger.warning("Order of %s not saved: %s", section.id, e.message)
                    failed.append(index)
        finally:
            self.saving = False

        if failed:
            positions = ", ".join(str(i + 1) for i in failed)
            self.status.show(f"Order not saved for position(s) {positions}", error=True)
        else:
            self.status.show("Order saved!")
        return failed

    # -------------------------------
    # In-memory edits
    # -------------------------------
    def update(self, section_id: str, patch: Dict[str, Any]):
        """
        Apply ``patch`` to one section in memory. ``settings`` merges key by
        key and a ``None`` value removes that setting.
        """
        index = self.index_of(section_id)
        section = self.sections[index]

        if isinstance(section, UnknownSection):
            raise InvariantViolation(f"Sections of type {section.section_type} cannot be edited")

        assert_type_unchanged(section, patch)
        if patch.get("settings"):
            assert_settings_meaningful(section.section_type, patch["settings"])

        allowed = set(editable_fields(section.section_type)) | {"settings", "display_order", "section_type"}
        rejected = sorted(set(patch) - allowed)
        if rejected:
            raise ValidationError(
                f"{SECTION_LABELS[section.section_type]} sections have no {', '.join(rejected)}"
            )

        data = section.model_dump()
        for key, value in patch.items():
            if key == "settings":
                merged = {**section.settings.to_dict(), **(value or {})}
                data["settings"] = {k: v for k, v in merged.items() if v is not None}
            elif key == "images":
                if value is not None and not isinstance(value, list):
                    raise ValidationError("images must be a list of URLs")
                data["images"] = list(value or [])
            else:
                data[key] = value

        try:
            updated = parse_section(data)
        except pydantic.ValidationError as e:
            fields = sorted({str(err["loc"][-1]) for err in e.errors() if err["loc"]})
            raise ValidationError(f"Invalid value for {', '.join(fields) or section.section_type}") from e
        self.sections[index] = updated
        return updated

    def reorder(self, index: int, direction: int) -> bool:
        """
        Swap the section at ``index`` with its neighbour and rewrite every
        ``display_order`` to its new 0-based position. Out of range is a no-op.
        """
        if direction not in (-1, 1):
            raise ValidationError("Direction must be -1 or 1")

        target = index + direction
        if not (0 <= index < len(self.sections)) or not (0 <= target < len(self.sections)):
            return False

        sections = list(self.sections)
        sections[index], sections[target] = sections[target], sections[index]
        self.sections = renumber(sections)
        return True

    def toggle(self, section_id: str) -> Optional[str]:
        """Open a section for editing, or close it if it is already open."""
        self.index_of(section_id)
        self.expanded_id = None if self.expanded_id == section_id else section_id
        return self.expanded_id

    # -------------------------------
    # Preview
    # -------------------------------
    def set_preview_mode(self, mode: Optional[str]) -> None:
        if mode is not None and mode not in PREVIEW_MODES:
            raise ValidationError(f"Unknown preview mode: {mode}")
        self.preview_mode = mode

    def toggle_preview(self) -> Optional[str]:
        self.preview_mode = "desktop" if self.preview_mode is None else None
        return self.preview_mode

    def preview(self):
        return render_sections(self.sections)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "parent": self.parent,
            "parents": self.parents,
            "sections": [section_to_row(s) for s in self.sections],
            "expanded_id": self.expanded_id,
            "preview_mode": self.preview_mode,
            "can_save_order": self.can_save_order,
            "saving": self.saving,
            "message": self.status.to_dict(),
            "block_types": [{"type": t, "label": label} for t, label in SECTION_LABELS.items()],
        }


class EditorRegistry:
    """One page builder editor per signed-in admin."""

    def __init__(self):
        self._editors: Dict[str, PageBuilderEditor] = {}

    def for_user(self, user_id: str, store, message_ttl: float = 3.0) -> PageBuilderEditor:
        editor = self._editors.get(user_id)
        if editor is None:
            editor = PageBuilderEditor(store, message_ttl=message_ttl)
            self._editors[user_id] = editor
        return editor

    def discard(self, user_id: str) -> None:
        self._editors.pop(user_id, None)
