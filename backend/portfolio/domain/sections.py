# portfolio/domain/sections.py
"""
Page content blocks ("sections") for the page builder.

A section is one of a closed set of variants keyed by ``section_type``. Each
variant only carries the fields meaningful to it and its own settings record,
so a gallery never has an ``image_position`` and a divider never has a body.

Rows coming from the store are parsed leniently: unknown or invalid settings
are dropped (the renderer falls back to its defaults) and an unknown
``section_type`` becomes an inert ``UnknownSection`` instead of an error.
"""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, ClassVar, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

HOME_PAGE = "home"

SectionType = Literal[
    "text_block",
    "full_image",
    "image_gallery",
    "two_column",
    "quote",
    "divider",
]

# Columns managed by the store, never sent back on save
STORE_MANAGED_FIELDS = ("id", "created_at", "updated_at")


# ------------------------
# Settings
# ------------------------
def is_choice(value: Any, choices: tuple) -> bool:
    """Exact match against ``choices``; ``2.0`` or ``True`` never stand in for an int."""
    return any(type(value) is type(choice) and value == choice for choice in choices)


class SectionSettings(BaseModel):
    """
    Optional layout parameters shared by every variant.

    ``CHOICES`` lists the accepted values per key; anything else is
    discarded on parse so the documented default applies.
    """

    model_config = ConfigDict(extra="ignore")

    CHOICES: ClassVar[Dict[str, tuple]] = {}

    bg_color: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _drop_invalid(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return {}

        cleaned = {}
        for key, value in data.items():
            if key not in cls.model_fields or value is None:
                continue
            choices = cls.CHOICES.get(key)
            if choices is not None and not is_choice(value, choices):
                continue
            if key == "bg_color" and not isinstance(value, str):
                continue
            cleaned[key] = value
        return cleaned

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class TextBlockSettings(SectionSettings):
    CHOICES = {"alignment": ("left", "center", "right")}

    alignment: Optional[Literal["left", "center", "right"]] = None


class FullImageSettings(SectionSettings):
    pass


class GallerySettings(SectionSettings):
    CHOICES = {"columns": (2, 3, 4)}

    columns: Optional[Literal[2, 3, 4]] = None


class TwoColumnSettings(SectionSettings):
    CHOICES = {"image_position": ("left", "right")}

    image_position: Optional[Literal["left", "right"]] = None


class QuoteSettings(SectionSettings):
    pass


class DividerSettings(SectionSettings):
    CHOICES = {"spacing": ("small", "medium", "large")}

    spacing: Optional[Literal["small", "medium", "large"]] = None


# ------------------------
# Variants
# ------------------------

class BaseSection(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    display_order: int = 0
    parent: str = HOME_PAGE
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TextBlockSection(BaseSection):
    section_type: Literal["text_block"] = "text_block"
    title: Optional[str] = None
    content: Optional[str] = None
    settings: TextBlockSettings = Field(default_factory=TextBlockSettings)


class FullImageSection(BaseSection):
    section_type: Literal["full_image"] = "full_image"
    title: Optional[str] = None
    image_url: Optional[str] = None
    settings: FullImageSettings = Field(default_factory=FullImageSettings)


class ImageGallerySection(BaseSection):
    section_type: Literal["image_gallery"] = "image_gallery"
    title: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    settings: GallerySettings = Field(default_factory=GallerySettings)


class TwoColumnSection(BaseSection):
    section_type: Literal["two_column"] = "two_column"
    title: Optional[str] = None
    content: Optional[str] = None
    image_url: Optional[str] = None
    settings: TwoColumnSettings = Field(default_factory=TwoColumnSettings)


class QuoteSection(BaseSection):
    section_type: Literal["quote"] = "quote"
    title: Optional[str] = None  # attribution
    content: Optional[str] = None  # the quote itself
    settings: QuoteSettings = Field(default_factory=QuoteSettings)


class DividerSection(BaseSection):
    section_type: Literal["divider"] = "divider"
    settings: DividerSettings = Field(default_factory=DividerSettings)


class UnknownSection(BaseSection):
    """A row whose ``section_type`` this version does not know. Renders nothing."""

    section_type: str
    raw: Dict[str, Any] = Field(default_factory=dict)


Section = Annotated[
    Union[
        TextBlockSection,
        FullImageSection,
        ImageGallerySection,
        TwoColumnSection,
        QuoteSection,
        DividerSection,
    ],
    Field(discriminator="section_type"),
]

AnySection = Union[
    TextBlockSection,
    FullImageSection,
    ImageGallerySection,
    TwoColumnSection,
    QuoteSection,
    DividerSection,
    UnknownSection,
]

SECTION_MODELS: Dict[str, type] = {
    "text_block": TextBlockSection,
    "full_image": FullImageSection,
    "image_gallery": ImageGallerySection,
    "two_column": TwoColumnSection,
    "quote": QuoteSection,
    "divider": DividerSection,
}

SECTION_LABELS: Dict[str, str] = {
    "text_block": "Text Block",
    "full_image": "Full Image",
    "image_gallery": "Gallery",
    "two_column": "Two Column",
    "quote": "Quote",
    "divider": "Divider",
}

_section_adapter: TypeAdapter = TypeAdapter(Section)


def is_known_type(section_type: Any) -> bool:
    return section_type in SECTION_MODELS


def parse_section(row: Dict[str, Any]) -> AnySection:
    """
    Build a section from a store row (or any mapping with the same keys).

    Missing columns fall back to the variant's defaults. ``None`` for a list
    column is treated as empty.
    """
    data = dict(row)
    if data.get("images") is None:
        data.pop("images", None)
    if data.get("settings") is None:
        data.pop("settings", None)

    if not is_known_type(data.get("section_type")):
        return UnknownSection(
            id=data.get("id"),
            section_type=str(data.get("section_type")),
            display_order=data.get("display_order") or 0,
            parent=data.get("parent") or HOME_PAGE,
            raw=data,
        )

    return _section_adapter.validate_python(data)


def new_section(section_type: str, *, parent: str, display_order: int) -> AnySection:
    """An unsaved section of ``section_type`` with every content field empty."""
    return parse_section({
        "section_type": section_type,
        "parent": parent,
        "display_order": display_order,
    })


def section_to_row(section: AnySection) -> Dict[str, Any]:
    """
    Serialize a section into a full store row.

    Columns the variant does not use are emptied, so a row never carries a
    stale image or body that its type cannot show.
    """
    if isinstance(section, UnknownSection):
        row = dict(section.raw)
        row["display_order"] = section.display_order
        row["parent"] = section.parent
        return row

    row: Dict[str, Any] = {
        "id": section.id,
        "section_type": section.section_type,
        "title": getattr(section, "title", None),
        "content": getattr(section, "content", None),
        "image_url": getattr(section, "image_url", None),
        "images": list(getattr(section, "images", [])),
        "display_order": section.display_order,
        "parent": section.parent,
        "settings": section.settings.to_dict(),
        "created_at": section.created_at.isoformat() if section.created_at else None,
        "updated_at": section.updated_at.isoformat() if section.updated_at else None,
    }
    return row


def editable_fields(section_type: str) -> tuple:
    """Top-level content fields the variant carries (besides settings)."""
    model = SECTION_MODELS.get(section_type)
    if model is None:
        return ()
    return tuple(
        name for name in ("title", "content", "image_url", "images")
        if name in model.model_fields
    )


def settings_keys(section_type: str) -> tuple:
    model = SECTION_MODELS.get(section_type)
    if model is None:
        return ()
    settings_model = model.model_fields["settings"].annotation
    return tuple(settings_model.model_fields)


def settings_choices(section_type: str) -> Dict[str, tuple]:
    model = SECTION_MODELS.get(section_type)
    if model is None:
        return {}
    return dict(model.model_fields["settings"].annotation.CHOICES)
