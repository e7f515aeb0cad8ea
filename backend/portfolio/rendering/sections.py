# portfolio/rendering/sections.py
"""
Section renderer.

Maps each section to a block view model consumed by the templates in
``templates/sections``. Pure: no store access, no mutation of the input.

Contract:
- output keeps input order
- a section missing its required content (image without ``image_url``,
  gallery without images) renders nothing
- unknown section types render nothing and never raise
- absent settings take the defaults below
"""
from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Tuple

from flask import render_template
from pydantic import BaseModel, ConfigDict

from portfolio.domain.sections import (
    DividerSection,
    FullImageSection,
    ImageGallerySection,
    QuoteSection,
    TextBlockSection,
    TwoColumnSection,
)

DEFAULT_ALIGNMENT = "left"
DEFAULT_COLUMNS = 3
DEFAULT_IMAGE_POSITION = "right"
DEFAULT_SPACING = "medium"
DEFAULT_BACKGROUND = "transparent"

ALIGNMENT_CLASSES = {
    "left": "text-left",
    "center": "text-center mx-auto",
    "right": "text-right ml-auto",
}

GRID_CLASSES = {
    2: "grid-cols-1 sm:grid-cols-2",
    3: "grid-cols-1 sm:grid-cols-2 lg:grid-cols-3",
    4: "grid-cols-2 lg:grid-cols-4",
}

SPACING_CLASSES = {
    "small": "py-6",
    "medium": "py-12",
    "large": "py-20",
}


# ------------------------
# View models
# ------------------------

class RenderedBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: str
    section_id: Optional[str] = None
    background: str = DEFAULT_BACKGROUND


class TextBlock(RenderedBlock):
    kind: str = "text_block"
    title: Optional[str] = None
    content: Optional[str] = None
    alignment: str = DEFAULT_ALIGNMENT
    align_class: str = ALIGNMENT_CLASSES[DEFAULT_ALIGNMENT]


class ImageBlock(RenderedBlock):
    kind: str = "full_image"
    image_url: str
    alt: str = ""
    caption: Optional[str] = None


class GalleryBlock(RenderedBlock):
    kind: str = "image_gallery"
    title: Optional[str] = None
    images: Tuple[str, ...] = ()
    columns: int = DEFAULT_COLUMNS
    grid_class: str = GRID_CLASSES[DEFAULT_COLUMNS]


class TwoColumnBlock(RenderedBlock):
    kind: str = "two_column"
    title: Optional[str] = None
    content: Optional[str] = None
    image_url: Optional[str] = None
    alt: str = ""
    image_position: str = DEFAULT_IMAGE_POSITION


class QuoteBlock(RenderedBlock):
    kind: str = "quote"
    quote: Optional[str] = None
    attribution: Optional[str] = None


class DividerBlock(RenderedBlock):
    kind: str = "divider"
    spacing: str = DEFAULT_SPACING
    padding_class: str = SPACING_CLASSES[DEFAULT_SPACING]


# ------------------------
# Per-type renderers
# ------------------------

def _background(section) -> str:
    return section.settings.bg_color or DEFAULT_BACKGROUND


def render_text_block(section: TextBlockSection) -> TextBlock:
    alignment = section.settings.alignment or DEFAULT_ALIGNMENT
    return TextBlock(
        section_id=section.id,
        background=_background(section),
        title=section.title,
        content=section.content,
        alignment=alignment,
        align_class=ALIGNMENT_CLASSES[alignment],
    )


def render_full_image(section: FullImageSection) -> Optional[ImageBlock]:
    if not section.image_url:
        return None
    return ImageBlock(
        section_id=section.id,
        background=_background(section),
        image_url=section.image_url,
        alt=section.title or "",
        caption=section.title,
    )


def render_gallery(section: ImageGallerySection) -> Optional[GalleryBlock]:
    if not section.images:
        return None
    columns = section.settings.columns or DEFAULT_COLUMNS
    return GalleryBlock(
        section_id=section.id,
        background=_background(section),
        title=section.title,
        images=tuple(section.images),
        columns=columns,
        grid_class=GRID_CLASSES.get(columns, GRID_CLASSES[DEFAULT_COLUMNS]),
    )


def render_two_column(section: TwoColumnSection) -> TwoColumnBlock:
    return TwoColumnBlock(
        section_id=section.id,
        background=_background(section),
        title=section.title,
        content=section.content,
        image_url=section.image_url or None,
        alt=section.title or "",
        image_position=section.settings.image_position or DEFAULT_IMAGE_POSITION,
    )


def render_quote(section: QuoteSection) -> QuoteBlock:
    return QuoteBlock(
        section_id=section.id,
        background=_background(section),
        quote=section.content,
        attribution=section.title,
    )


def render_divider(section: DividerSection) -> DividerBlock:
    spacing = section.settings.spacing or DEFAULT_SPACING
    return DividerBlock(
        section_id=section.id,
        background=_background(section),
        spacing=spacing,
        padding_class=SPACING_CLASSES[spacing],
    )


RENDERERS: Dict[type, Callable] = {
    TextBlockSection: render_text_block,
    FullImageSection: render_full_image,
    ImageGallerySection: render_gallery,
    TwoColumnSection: render_two_column,
    QuoteSection: render_quote,
    DividerSection: render_divider,
}


def render_section(section) -> Optional[RenderedBlock]:
    renderer = RENDERERS.get(type(section))
    if renderer is None:
        return None
    return renderer(section)


def render_sections(sections: Iterable) -> List[RenderedBlock]:
    blocks = []
    for section in sections:
        block = render_section(section)
        if block is not None:
            blocks.append(block)
    return blocks


def render_sections_html(sections: Iterable) -> str:
    """HTML for a page's sections. Needs an application context."""
    return render_template("sections/blocks.html", blocks=render_sections(sections))
