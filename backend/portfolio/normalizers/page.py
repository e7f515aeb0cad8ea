from .section import normalize_section

def normalize_editor(editor):
    """Editor state as the admin page builder UI consumes it."""
    data = editor.to_dict()
    data["sections"] = [
        normalize_section(s, expanded=(s.id == editor.expanded_id))
        for s in editor.sections
    ]
    return data
