from flask import current_app, g, jsonify, request
from portfolio.store import get_store
from portfolio.utils.decorators import admin_required
from . import v1_bp


@v1_bp.route("/auth/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "ValidationError", "message": "Invalid request body"}), 400

    # AuthError propagates to the error handler (401)
    session = get_store().sign_in_with_password(data.get("email"), data.get("password"))

    return jsonify({
        "access_token": session.access_token,
        "user": {"id": session.user_id, "email": session.email}
    }), 200


@v1_bp.route("/auth/session", methods=["GET"])
@admin_required
def current_session():
    session = g.current_session
    return jsonify({"user": {"id": session.user_id, "email": session.email}}), 200


@v1_bp.route("/auth/logout", methods=["POST"])
@admin_required
def logout():
    get_store().sign_out()
    current_app.extensions["page_builder_editors"].discard(g.current_session.user_id)
    return jsonify({"message": "Signed out"}), 200
