from flask import current_app, redirect, render_template, request, url_for
from flask_jwt_extended import set_access_cookies, unset_jwt_cookies
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from portfolio.application import content
from portfolio.domain.exceptions import AuthError, QueryError, ValidationError
from portfolio.normalizers.page import normalize_editor
from portfolio.rendering.sections import render_sections_html
from portfolio.store import get_store
from . import site_bp

DASHBOARD_TABS = ("profile", "projects", "skills", "methodology", "page-builder")

TAB_LOADERS = {
    "profile": ("profile", content.get_profile),
    "projects": ("projects", content.list_projects),
    "skills": ("skills", content.list_skills),
    "methodology": ("methodology", content.list_methodology),
}


def current_admin(store):
    """The signed-in admin, or None when the cookie is missing, expired or revoked."""
    try:
        return store.get_session()
    except (JWTExtendedException, PyJWTError) as e:
        current_app.logger.info(f"Admin cookie rejected: {e}")
        return None


def _load_tab(store, tab):
    key, loader = TAB_LOADERS[tab]
    return {key: loader(store)}


def _editor_for(session, store):
    return current_app.extensions["page_builder_editors"].for_user(
        session.user_id, store, message_ttl=current_app.config["STATUS_MESSAGE_TTL"]
    )


@site_bp.route("/admin/login", methods=["GET", "POST"])
def admin_login():
    if request.method == "GET":
        return render_template("admin/login.html", error=None)

    email = request.form.get("email", "")
    try:
        session = get_store().sign_in_with_password(email, request.form.get("password", ""))
    except AuthError as e:
        return render_template("admin/login.html", error=e.message, email=email), 401

    response = redirect(url_for("site.admin_dashboard"))
    set_access_cookies(response, session.access_token)
    return response


@site_bp.route("/admin/logout", methods=["POST"])
def admin_logout():
    store = get_store()
    session = current_admin(store)
    if session is not None:
        store.sign_out()
        current_app.extensions["page_builder_editors"].discard(session.user_id)

    response = redirect(url_for("site.admin_login"))
    unset_jwt_cookies(response)
    return response


@site_bp.route("/admin", methods=["GET"])
def admin_dashboard():
    store = get_store()
    session = current_admin(store)
    if session is None:
        return redirect(url_for("site.admin_login"))

    tab = request.args.get("tab", "profile")
    if tab not in DASHBOARD_TABS:
        tab = "profile"

    context = {"tab": tab, "tabs": DASHBOARD_TABS, "admin_session": session, "error": None}

    if tab != "page-builder":
        try:
            context.update(_load_tab(store, tab))
        except QueryError as e:
            current_app.logger.error(f"Failed to load {tab} tab: {e.message}")
            context["error"] = e.message
    else:
        editor = _editor_for(session, store)
        parent = request.args.get("parent")
        if parent or not editor.loaded:
            editor.load(parent)
            editor.load_parents()
        context["editor"] = normalize_editor(editor)
        context["preview_html"] = render_sections_html(editor.sections)

    return render_template("admin/dashboard.html", **context)


# -------------------------------
# Page builder form actions
# -------------------------------
def _page_builder_action(action):
    """
    Run ``action(editor)`` for the signed-in admin and return to the page
    builder tab. Rejected input is shown in the editor's status line.
    """
    store = get_store()
    session = current_admin(store)
    if session is None:
        return redirect(url_for("site.admin_login"))

    editor = _editor_for(session, store)
    if not editor.loaded:
        editor.load()
        editor.load_parents()
    try:
        action(editor)
    except ValidationError as e:
        editor.status.show(e.message, error=True)

    return redirect(url_for("site.admin_dashboard", tab="page-builder"))


def _form_int(name):
    try:
        return int(request.form.get(name, ""))
    except ValueError as e:
        raise ValidationError(f"{name} must be an integer") from e


@site_bp.route("/admin/page-builder/sections", methods=["POST"])
def admin_add_section():
    return _page_builder_action(lambda editor: editor.create(request.form.get("section_type", "")))


@site_bp.route("/admin/page-builder/move", methods=["POST"])
def admin_move_section():
    return _page_builder_action(
        lambda editor: editor.reorder(_form_int("index"), _form_int("direction"))
    )


@site_bp.route("/admin/page-builder/order", methods=["POST"])
def admin_save_order():
    return _page_builder_action(lambda editor: editor.save_order())
