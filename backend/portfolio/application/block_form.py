# portfolio/application/block_form.py
"""
Property editor for the section currently open in the page builder.

Only the controls meaningful to the section's type are offered (plus the
background colour every type has). Each control validates its value and
immediately forwards it to ``PageBuilderEditor.update``; saving is still a
separate, explicit step.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from portfolio.domain.exceptions import ValidationError
from portfolio.domain.sections import (
    SECTION_LABELS,
    editable_fields,
    is_choice,
    settings_choices,
    settings_keys,
)
from portfolio.utils.media import MAX_GALLERY_IMAGES, MAX_IMAGE_BYTES, upload_image, upload_images

PICKER_BLANK = "#ffffff"

SETTING_DEFAULTS = {
    "alignment": "left",
    "columns": 3,
    "image_position": "right",
    "spacing": "medium",
}

SETTING_LABELS = {
    "alignment": "Alignment",
    "columns": "Columns",
    "image_position": "Image Position",
    "spacing": "Spacing",
    "bg_color": "Background Color",
}

# (label, placeholder, multiline) per field and type
FIELD_LABELS = {
    "quote": {
        "content": ("Quote", "Enter the quote...", True),
        "title": ("Attribution", "Who said it...", False),
    },
    "image_gallery": {
        "title": ("Gallery Title", "Optional gallery title...", False),
    },
}
DEFAULT_FIELD_LABELS = {
    "title": ("Title", "Optional title...", False),
    "content": ("Content", "Write your content...", True),
}

IMAGE_FOLDERS = {
    "image_url": "sections",
    "images": "galleries",
}


def _text(field: str, value: Optional[str]) -> Optional[str]:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field} must be text")
    return value if value else None


class SectionBlockForm:
    def __init__(self, editor, section_id: str,
                 max_images: int = MAX_GALLERY_IMAGES,
                 max_bytes: int = MAX_IMAGE_BYTES):
        self.editor = editor
        self.section_id = section_id
        self.max_images = max_images
        self.max_bytes = max_bytes

    @property
    def section(self):
        return self.editor.get(self.section_id)

    @property
    def section_type(self) -> str:
        return self.section.section_type

    def _require_field(self, field: str) -> None:
        if field not in editable_fields(self.section_type):
            label = SECTION_LABELS.get(self.section_type, self.section_type)
            raise ValidationError(f"{label} sections have no {field} control")

    def _patch(self, patch: Dict[str, Any]):
        return self.editor.update(self.section_id, patch)

    # -------------------------------
    # Text controls
    # -------------------------------
    def set_title(self, value: Optional[str]):
        self._require_field("title")
        return self._patch({"title": _text("title", value)})

    def set_content(self, value: Optional[str]):
        self._require_field("content")
        return self._patch({"content": _text("content", value)})

    # -------------------------------
    # Image controls
    # -------------------------------
    def set_image_url(self, url: Optional[str]):
        self._require_field("image_url")
        return self._patch({"image_url": _text("image_url", url)})

    def upload_image(self, file):
        """Validate and upload a single image, then point ``image_url`` at it."""
        self._require_field("image_url")
        url = upload_image(self.editor.store, file, folder=IMAGE_FOLDERS["image_url"], max_bytes=self.max_bytes)
        return self.set_image_url(url)

    def set_images(self, urls: List[str]):
        self._require_field("images")
        if not isinstance(urls, list) or not all(isinstance(u, str) for u in urls):
            raise ValidationError("images must be a list of URLs")
        urls = [u for u in urls if u]
        if len(urls) > self.max_images:
            raise ValidationError(f"Maximum {self.max_images} images allowed.")
        return self._patch({"images": urls})

    def add_images(self, files):
        """Upload gallery images and append the ones that made it."""
        self._require_field("images")
        current = list(self.section.images)
        urls = upload_images(
            self.editor.store,
            files,
            existing=len(current),
            folder=IMAGE_FOLDERS["images"],
            max_images=self.max_images,
            max_bytes=self.max_bytes,
        )
        return self._patch({"images": current + urls})

    def remove_image(self, index: int):
        self._require_field("images")
        current = list(self.section.images)
        if not 0 <= index < len(current):
            raise ValidationError(f"No image at position {index}")
        del current[index]
        return self._patch({"images": current})

    # -------------------------------
    # Settings
    # -------------------------------
    def set_setting(self, key: str, value: Any):
        if key == "bg_color":
            return self.set_bg_color(value)

        if key not in settings_keys(self.section_type):
            label = SECTION_LABELS.get(self.section_type, self.section_type)
            raise ValidationError(f"{label} sections have no {key} setting")

        choices = settings_choices(self.section_type).get(key, ())
        if not is_choice(value, choices):
            raise ValidationError(
                f"{SETTING_LABELS[key]} must be one of {', '.join(str(c) for c in choices)}"
            )
        return self._patch({"settings": {key: value}})

    def set_bg_color(self, value: Optional[str]):
        """Free-text colour input; an empty value clears the background."""
        if value is not None and not isinstance(value, str):
            raise ValidationError("Background color must be a string")
        return self._patch({"settings": {"bg_color": _text("bg_color", value)}})

    def pick_bg_color(self, value: str):
        """Colour picker; picking plain white clears the background."""
        if value and value.lower() == PICKER_BLANK:
            value = None
        return self.set_bg_color(value)

    def clear_bg_color(self):
        return self._patch({"settings": {"bg_color": None}})

    def apply(self, changes: Dict[str, Any]):
        """
        Route a batch of control changes (as sent by the admin API) through
        the individual controls so each one is validated.
        """
        handlers = {
            "title": self.set_title,
            "content": self.set_content,
            "image_url": self.set_image_url,
            "images": self.set_images,
        }
        section = self.section
        for key, value in changes.items():
            if key == "settings":
                if not isinstance(value, dict):
                    raise ValidationError("settings must be an object")
                for setting, setting_value in value.items():
                    if setting_value is None and setting != "bg_color":
                        section = self._patch({"settings": {setting: None}})
                    else:
                        section = self.set_setting(setting, setting_value)
            elif key in handlers:
                section = handlers[key](value)
            else:
                raise ValidationError(f"Unknown control: {key}")
        return section

    # -------------------------------
    # Description for the admin UI
    # -------------------------------
    def controls(self) -> List[Dict[str, Any]]:
        section = self.section
        section_type = section.section_type
        if section_type not in SECTION_LABELS:
            raise ValidationError(f"Sections of type {section_type} cannot be edited")
        fields = editable_fields(section_type)
        labels = FIELD_LABELS.get(section_type, {})
        controls: List[Dict[str, Any]] = []

        # Quote asks for the quote before the attribution
        text_order = ("content", "title") if section_type == "quote" else ("title", "content")
        for field in text_order:
            if field not in fields:
                continue
            label, placeholder, multiline = labels.get(field, DEFAULT_FIELD_LABELS[field])
            controls.append({
                "name": field,
                "control": "textarea" if multiline else "text",
                "label": label,
                "placeholder": placeholder,
                "value": getattr(section, field) or "",
            })

        if "image_url" in fields:
            controls.append({
                "name": "image_url",
                "control": "image",
                "label": "Image",
                "value": section.image_url or "",
            })

        if "images" in fields:
            controls.append({
                "name": "images",
                "control": "images",
                "label": "Images",
                "value": list(section.images),
                "max": self.max_images,
            })

        for key, choices in settings_choices(section_type).items():
            controls.append({
                "name": f"settings.{key}",
                "control": "choice",
                "label": SETTING_LABELS[key],
                "options": list(choices),
                "value": getattr(section.settings, key) or SETTING_DEFAULTS[key],
            })

        controls.append({
            "name": "settings.bg_color",
            "control": "color",
            "label": SETTING_LABELS["bg_color"],
            "placeholder": "transparent",
            "value": section.settings.bg_color or "",
            "picker_value": section.settings.bg_color or PICKER_BLANK,
        })
        return controls
