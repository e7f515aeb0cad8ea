from flask import current_app, jsonify, request
from portfolio.application import content
from portfolio.domain.exceptions import ValidationError
from portfolio.store import get_store
from portfolio.utils.decorators import admin_required, confirmed
from . import v1_bp


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        raise ValidationError("Invalid request body")
    return data


# ------------------------
# Profile
# ------------------------
@v1_bp.route("/profile", methods=["GET"])
@admin_required
def get_profile():
    return jsonify(content.get_profile(get_store())), 200


@v1_bp.route("/profile", methods=["PUT"])
@admin_required
def save_profile():
    profile = content.save_profile(get_store(), data=_json_body())
    return jsonify({"profile": profile, "message": "Profile saved!"}), 200


# ------------------------
# Projects
# ------------------------
@v1_bp.route("/projects", methods=["GET"])
@admin_required
def list_projects():
    return jsonify(content.list_projects(get_store())), 200


@v1_bp.route("/projects", methods=["POST"])
@admin_required
def add_project():
    return jsonify(content.add_project(get_store())), 201


@v1_bp.route("/projects/<project_id>", methods=["PUT"])
@admin_required
def save_project(project_id):
    content.save_project(
        get_store(),
        project_id=project_id,
        data=_json_body(),
        max_images=current_app.config["MAX_PROJECT_IMAGES"],
    )
    return jsonify({"message": "Saved!"}), 200


@v1_bp.route("/projects/<project_id>", methods=["DELETE"])
@admin_required
def delete_project(project_id):
    content.delete_project(get_store(), project_id=project_id, confirmed=confirmed(request.args))
    return jsonify({"message": "Project deleted"}), 200


# ------------------------
# Skills
# ------------------------
@v1_bp.route("/skills", methods=["GET"])
@admin_required
def list_skills():
    return jsonify(content.list_skills(get_store())), 200


@v1_bp.route("/skills", methods=["POST"])
@admin_required
def add_skill():
    return jsonify(content.add_skill(get_store())), 201


@v1_bp.route("/skills", methods=["PUT"])
@admin_required
def save_skills():
    skills = _json_body()
    if not isinstance(skills, list):
        raise ValidationError("Expected a list of skills")

    content.save_skills(get_store(), skills=skills)
    return jsonify({"message": "All skills saved!"}), 200


@v1_bp.route("/skills/<skill_id>", methods=["DELETE"])
@admin_required
def delete_skill(skill_id):
    content.delete_skill(get_store(), skill_id=skill_id)
    return jsonify({"message": "Skill deleted"}), 200


# ------------------------
# Methodology
# ------------------------
@v1_bp.route("/methodology", methods=["GET"])
@admin_required
def list_methodology():
    return jsonify(content.list_methodology(get_store())), 200


@v1_bp.route("/methodology", methods=["POST"])
@admin_required
def add_methodology_item():
    return jsonify(content.add_methodology_item(get_store())), 201


@v1_bp.route("/methodology/<item_id>", methods=["PUT"])
@admin_required
def save_methodology_item(item_id):
    content.save_methodology_item(get_store(), item_id=item_id, data=_json_body())
    return jsonify({"message": "Saved!"}), 200


@v1_bp.route("/methodology/<item_id>", methods=["DELETE"])
@admin_required
def delete_methodology_item(item_id):
    content.delete_methodology_item(get_store(), item_id=item_id, confirmed=confirmed(request.args))
    return jsonify({"message": "Item deleted"}), 200
