from portfolio.domain.sections import SECTION_LABELS, section_to_row

def normalize_section(section, expanded=False):
    data = section_to_row(section)
    data["label"] = SECTION_LABELS.get(section.section_type, section.section_type)
    data["display_title"] = getattr(section, "title", None) or data["label"]
    data["expanded"] = expanded
    return data
