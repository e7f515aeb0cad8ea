from flask import current_app, g, jsonify, request
from portfolio.application.block_form import SectionBlockForm
from portfolio.application.page_builder import DELETE_PROMPT
from portfolio.domain.exceptions import ConfirmationRequired, ValidationError
from portfolio.normalizers.page import normalize_editor
from portfolio.normalizers.section import normalize_section
from portfolio.rendering.sections import render_sections_html
from portfolio.store import get_store
from portfolio.utils.decorators import admin_required, confirmed
from . import v1_bp


def current_editor():
    editor = current_app.extensions["page_builder_editors"].for_user(
        g.current_session.user_id,
        get_store(),
        message_ttl=current_app.config["STATUS_MESSAGE_TTL"],
    )
    if not editor.loaded:
        editor.load()
        editor.load_parents()
    return editor


def block_form(editor, section_id):
    return SectionBlockForm(
        editor,
        section_id,
        max_images=current_app.config["MAX_GALLERY_IMAGES"],
        max_bytes=current_app.config["MAX_IMAGE_BYTES"],
    )


def editor_state(editor, ok=True, status=200):
    # A rejected store call is reported in the editor's message; the state is still returned
    return jsonify(normalize_editor(editor)), (status if ok else 502)


# ------------------------
# Loading
# ------------------------
@v1_bp.route("/page-builder", methods=["GET"])
@admin_required
def get_page_builder():
    editor = current_editor()

    parent = request.args.get("parent")
    ok = True
    if parent or request.args.get("reload"):
        ok = editor.load(parent)
        editor.load_parents()

    return editor_state(editor, ok)


# ------------------------
# Sections
# ------------------------
@v1_bp.route("/page-builder/sections", methods=["POST"])
@admin_required
def create_section():
    editor = current_editor()
    data = request.get_json(silent=True) or {}

    section_type = data.get("section_type")
    if not section_type:
        raise ValidationError("Section type is required")

    created = editor.create(section_type)
    return editor_state(editor, created is not None, status=201)


@v1_bp.route("/page-builder/sections/<section_id>", methods=["PATCH"])
@admin_required
def update_section(section_id):
    editor = current_editor()
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Invalid payload")

    section = block_form(editor, section_id).apply(data)
    return jsonify(normalize_section(section, expanded=(section.id == editor.expanded_id))), 200


@v1_bp.route("/page-builder/sections/<section_id>/controls", methods=["GET"])
@admin_required
def section_controls(section_id):
    editor = current_editor()
    return jsonify({"controls": block_form(editor, section_id).controls()}), 200


@v1_bp.route("/page-builder/sections/<section_id>/save", methods=["POST"])
@admin_required
def save_section(section_id):
    editor = current_editor()
    return editor_state(editor, editor.save(section_id))


@v1_bp.route("/page-builder/sections/<section_id>/duplicate", methods=["POST"])
@admin_required
def duplicate_section(section_id):
    editor = current_editor()
    copy = editor.duplicate(section_id)
    return editor_state(editor, copy is not None, status=201)


@v1_bp.route("/page-builder/sections/<section_id>", methods=["DELETE"])
@admin_required
def delete_section(section_id):
    editor = current_editor()

    if not confirmed(request.args):
        editor.index_of(section_id)
        raise ConfirmationRequired(DELETE_PROMPT)

    deleted = editor.delete(section_id, confirm=lambda prompt: True)
    return editor_state(editor, deleted)


@v1_bp.route("/page-builder/sections/<section_id>/toggle", methods=["POST"])
@admin_required
def toggle_section(section_id):
    editor = current_editor()
    editor.toggle(section_id)
    return editor_state(editor)


# ------------------------
# Images
# ------------------------
@v1_bp.route("/page-builder/sections/<section_id>/images", methods=["POST"])
@admin_required
def upload_section_images(section_id):
    editor = current_editor()
    form = block_form(editor, section_id)

    files = request.files.getlist("files")
    if files:
        section = form.add_images(files)
    elif "file" in request.files:
        section = form.upload_image(request.files["file"])
    else:
        raise ValidationError("No valid files selected.")

    return jsonify(normalize_section(section, expanded=(section.id == editor.expanded_id))), 200


@v1_bp.route("/page-builder/sections/<section_id>/images/<int:index>", methods=["DELETE"])
@admin_required
def remove_section_image(section_id, index):
    editor = current_editor()
    section = block_form(editor, section_id).remove_image(index)
    return jsonify(normalize_section(section, expanded=(section.id == editor.expanded_id))), 200


# ------------------------
# Ordering
# ------------------------
@v1_bp.route("/page-builder/move", methods=["POST"])
@admin_required
def move_section():
    editor = current_editor()
    data = request.get_json(silent=True) or {}

    try:
        index = int(data["index"])
        direction = int(data["direction"])
    except (KeyError, TypeError, ValueError):
        raise ValidationError("index and direction are required integers")

    editor.reorder(index, direction)
    return editor_state(editor)


@v1_bp.route("/page-builder/order", methods=["POST"])
@admin_required
def save_order():
    editor = current_editor()
    failed = editor.save_order()

    body = normalize_editor(editor)
    body["failed_indices"] = failed
    return jsonify(body), (502 if failed else 200)


# ------------------------
# Preview
# ------------------------
@v1_bp.route("/page-builder/preview", methods=["GET"])
@admin_required
def preview():
    editor = current_editor()
    return jsonify({
        "mode": editor.preview_mode,
        "html": render_sections_html(editor.sections),
        "empty": not editor.sections,
    }), 200


@v1_bp.route("/page-builder/preview", methods=["POST"])
@admin_required
def set_preview_mode():
    editor = current_editor()
    data = request.get_json(silent=True) or {}

    if "mode" in data:
        editor.set_preview_mode(data["mode"])
    else:
        editor.toggle_preview()

    return jsonify({"mode": editor.preview_mode}), 200
