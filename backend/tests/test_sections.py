"""Tests for the section model: parsing store rows into typed variants and back."""

from portfolio.domain.sections import (
    DividerSection,
    ImageGallerySection,
    QuoteSection,
    TextBlockSection,
    TwoColumnSection,
    UnknownSection,
    editable_fields,
    new_section,
    parse_section,
    section_to_row,
    settings_choices,
    settings_keys,
)


class TestParseSection:
    """Store rows become the variant named by ``section_type``."""

    def test_text_block(self):
        section = parse_section({
            "id": "s1",
            "section_type": "text_block",
            "title": "Hello",
            "content": "Body",
            "image_url": "https://x/stale.png",
            "display_order": 2,
            "parent": "home",
            "settings": {"alignment": "center"},
        })
        assert isinstance(section, TextBlockSection)
        assert section.title == "Hello"
        assert section.settings.alignment == "center"
        assert not hasattr(section, "image_url")

    def test_gallery_with_null_images(self):
        section = parse_section({"section_type": "image_gallery", "images": None, "settings": None})
        assert isinstance(section, ImageGallerySection)
        assert section.images == []
        assert section.settings.columns is None

    def test_invalid_settings_are_dropped(self):
        section = parse_section({
            "section_type": "image_gallery",
            "settings": {"columns": 7, "bg_color": 12, "spacing": "large"},
        })
        assert section.settings.to_dict() == {}

    def test_float_column_count_is_dropped(self):
        section = parse_section({"section_type": "image_gallery", "settings": {"columns": 2.0}})
        assert section.settings.columns is None

    def test_unknown_type_is_inert(self):
        row = {"id": "s9", "section_type": "carousel", "display_order": 4, "parent": "home"}
        section = parse_section(row)
        assert isinstance(section, UnknownSection)
        assert section.section_type == "carousel"
        assert section.display_order == 4

    def test_quote_keeps_attribution_in_title(self):
        section = parse_section({"section_type": "quote", "title": "Ada", "content": "Be curious"})
        assert isinstance(section, QuoteSection)
        assert (section.content, section.title) == ("Be curious", "Ada")


class TestSectionToRow:
    def test_unused_columns_are_emptied(self):
        section = DividerSection(id="d1", display_order=3, settings={"spacing": "small"})
        row = section_to_row(section)
        assert row["section_type"] == "divider"
        assert row["title"] is None
        assert row["content"] is None
        assert row["image_url"] is None
        assert row["images"] == []
        assert row["settings"] == {"spacing": "small"}

    def test_unknown_section_keeps_raw_row(self):
        section = parse_section({"id": "u1", "section_type": "map", "content": "x", "display_order": 1})
        section.display_order = 5
        row = section_to_row(section)
        assert row["content"] == "x"
        assert row["display_order"] == 5

    def test_round_trip(self):
        section = TwoColumnSection(
            id="t1", title="Side", content="Body", image_url="https://x/a.png",
            settings={"image_position": "left", "bg_color": "#eee"},
        )
        assert parse_section(section_to_row(section)) == section


class TestVariantMetadata:
    def test_editable_fields(self):
        assert editable_fields("text_block") == ("title", "content")
        assert editable_fields("full_image") == ("title", "image_url")
        assert editable_fields("image_gallery") == ("title", "images")
        assert editable_fields("two_column") == ("title", "content", "image_url")
        assert editable_fields("divider") == ()
        assert editable_fields("carousel") == ()

    def test_settings_keys_include_background(self):
        assert set(settings_keys("divider")) == {"bg_color", "spacing"}
        assert set(settings_keys("quote")) == {"bg_color"}

    def test_settings_choices(self):
        assert settings_choices("image_gallery") == {"columns": (2, 3, 4)}
        assert settings_choices("two_column") == {"image_position": ("left", "right")}
        assert settings_choices("full_image") == {}

    def test_new_section_is_empty(self):
        section = new_section("two_column", parent="case-study", display_order=4)
        assert isinstance(section, TwoColumnSection)
        assert section.id is None
        assert section.parent == "case-study"
        assert section.display_order == 4
        assert section.title is None and section.image_url is None
