from portfolio.domain.exceptions import InvariantViolation
from portfolio.domain.sections import SECTION_MODELS, settings_keys

def assert_type_unchanged(section, patch):
    new_type = patch.get("section_type", section.section_type)
    if new_type != section.section_type:
        raise InvariantViolation(
            f"Section type cannot change from {section.section_type} to {new_type}; "
            "delete the section and create a new one instead."
        )

def assert_known_type(section_type):
    if section_type not in SECTION_MODELS:
        raise InvariantViolation(f"Unknown section type: {section_type}")

def assert_settings_meaningful(section_type, settings):
    allowed = set(settings_keys(section_type))
    extra = sorted(set(settings or {}) - allowed)
    if extra:
        raise InvariantViolation(
            f"Settings {extra} are not meaningful for a {section_type} section."
        )
