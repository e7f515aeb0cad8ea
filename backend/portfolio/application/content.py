# portfolio/application/content.py
"""
Supporting editors: profile, projects, skills and methodology items.

Plain store-backed CRUD. Each record is edited client-side and pushed back
whole on save; nothing here composes or orders content beyond
``display_order``.
"""
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from portfolio.domain.exceptions import ConfirmationRequired, ValidationError
from portfolio.store import METHODOLOGY_TABLE, PROFILE_TABLE, PROJECTS_TABLE, SKILLS_TABLE

PROFILE_FIELDS = (
    "name", "subtitle", "role_title", "headline", "headline_accent", "description",
    "job_title", "location", "experience", "specialization", "email", "linkedin_url",
    "twitter_url", "github_url", "methodology_quote", "methodology_description",
    "cta_headline", "cta_accent", "avatar_url", "hero_image_url",
)

PROJECT_FIELDS = (
    "slug", "category", "number", "title", "description", "long_description",
    "stat_label_1", "stat_value_1", "stat_label_2", "stat_value_2", "bg_color",
    "display_order", "thumbnail_url", "images",
)

SKILL_FIELDS = ("name", "display_order")

METHODOLOGY_FIELDS = ("number", "title", "items", "display_order")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _only(data: Dict[str, Any], allowed) -> Dict[str, Any]:
    unknown = sorted(set(data) - set(allowed) - {"id", "created_at", "updated_at"})
    if unknown:
        raise ValidationError(f"Unknown field(s): {', '.join(unknown)}")
    return {k: v for k, v in data.items() if k in allowed}


def _require_confirmation(confirmed: bool, prompt: str) -> None:
    if not confirmed:
        raise ConfirmationRequired(prompt)


def _ordered(store, table: str) -> List[Dict[str, Any]]:
    return store.table(table).select("*").order("display_order").execute()


# ------------------------
# Profile
# ------------------------

def get_profile(store) -> Optional[Dict[str, Any]]:
    return store.table(PROFILE_TABLE).select("*").maybe_single()


def save_profile(store, *, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Push the edited profile. The first save creates the singleton record.
    """
    updates = _only(data, PROFILE_FIELDS)
    current = get_profile(store)

    if current is None:
        return store.table(PROFILE_TABLE).insert(updates)

    store.table(PROFILE_TABLE).update(current["id"], {**updates, "updated_at": _now()})
    return {**current, **updates}


# ------------------------
# Projects
# ------------------------

def list_projects(store) -> List[Dict[str, Any]]:
    return _ordered(store, PROJECTS_TABLE)


def get_project(store, slug: str) -> Optional[Dict[str, Any]]:
    return store.table(PROJECTS_TABLE).select("*").eq("slug", slug).maybe_single()


def add_project(store) -> Dict[str, Any]:
    """Insert a placeholder case study at the end of the list."""
    order = len(list_projects(store)) + 1
    return store.table(PROJECTS_TABLE).insert({
        "slug": f"project-{int(time.time() * 1000)}",
        "number": str(order).zfill(2),
        "title": "New Project",
        "category": "CATEGORY",
        "description": "Project description",
        "long_description": "Full case study description.",
        "stat_label_1": "STAT",
        "stat_value_1": "0",
        "stat_label_2": "STAT",
        "stat_value_2": "0",
        "bg_color": "#e8f5e9",
        "display_order": order,
        "thumbnail_url": "",
        "images": [],
    })


def save_project(store, *, project_id: str, data: Dict[str, Any], max_images: int = 8) -> None:
    updates = _only(data, PROJECT_FIELDS)
    if "slug" in updates and not updates["slug"]:
        raise ValidationError("Slug is required")
    if len(updates.get("images") or []) > max_images:
        raise ValidationError(f"Maximum {max_images} images allowed.")

    store.table(PROJECTS_TABLE).update(project_id, {**updates, "updated_at": _now()})


def delete_project(store, *, project_id: str, confirmed: bool) -> None:
    _require_confirmation(confirmed, "Delete this project?")
    store.table(PROJECTS_TABLE).delete(project_id)


# ------------------------
# Skills
# ------------------------

def list_skills(store) -> List[Dict[str, Any]]:
    return _ordered(store, SKILLS_TABLE)


def add_skill(store) -> Dict[str, Any]:
    order = len(list_skills(store)) + 1
    return store.table(SKILLS_TABLE).insert({"name": "New Skill", "display_order": order})


def save_skills(store, *, skills: List[Dict[str, Any]]) -> None:
    """One update per skill, in the order given."""
    for skill in skills:
        if "id" not in skill:
            raise ValidationError("Each skill needs an id")
        store.table(SKILLS_TABLE).update(skill["id"], _only(skill, SKILL_FIELDS))


def delete_skill(store, *, skill_id: str) -> None:
    store.table(SKILLS_TABLE).delete(skill_id)


# ------------------------
# Methodology
# ------------------------

def list_methodology(store) -> List[Dict[str, Any]]:
    return _ordered(store, METHODOLOGY_TABLE)


def add_methodology_item(store) -> Dict[str, Any]:
    order = len(list_methodology(store)) + 1
    return store.table(METHODOLOGY_TABLE).insert({
        "number": str(order).zfill(2),
        "title": "New Item",
        "items": ["Item 1"],
        "display_order": order,
    })


def save_methodology_item(store, *, item_id: str, data: Dict[str, Any]) -> None:
    updates = _only(data, METHODOLOGY_FIELDS)
    if "items" in updates and not isinstance(updates["items"], list):
        raise ValidationError("items must be a list of bullet points")

    store.table(METHODOLOGY_TABLE).update(item_id, updates)


def delete_methodology_item(store, *, item_id: str, confirmed: bool) -> None:
    _require_confirmation(confirmed, "Delete this item?")
    store.table(METHODOLOGY_TABLE).delete(item_id)
