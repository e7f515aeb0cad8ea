from flask import current_app, render_template, send_from_directory
from portfolio.application.portfolio import load_portfolio, load_project_page
from portfolio.domain.exceptions import QueryError
from portfolio.rendering.sections import render_sections
from portfolio.store import get_store
from . import site_bp


@site_bp.route("/", methods=["GET"])
def home():
    data = load_portfolio(get_store())
    return render_template(
        "home.html",
        data=data,
        blocks=render_sections(data.sections),
    )


@site_bp.route("/project/<slug>", methods=["GET"])
def project_detail(slug):
    # NotFound renders the not-found view through the error handler
    try:
        page = load_project_page(get_store(), slug)
    except QueryError as e:
        current_app.logger.error(f"Failed to load project {slug}: {e.message}")
        return render_template("not_found.html", heading="Unable to load project", error=e.message)

    return render_template(
        "project_detail.html",
        page=page,
        project=page.project,
        blocks=render_sections(page.sections),
    )


@site_bp.route("/media/<path:path>", methods=["GET"])
def media(path):
    return send_from_directory(get_store().storage.root, path)
