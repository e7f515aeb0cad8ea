from flask import current_app, jsonify, request
from portfolio.domain.exceptions import ValidationError
from portfolio.store import get_store
from portfolio.utils.decorators import admin_required
from portfolio.utils.media import upload_image, upload_images
from . import v1_bp


@v1_bp.route("/uploads", methods=["POST"])
@admin_required
def upload():
    """
    Image upload for the supporting editors (avatar, hero, project thumbnails
    and galleries). ``existing`` and ``max`` bound multi-file uploads.
    """
    folder = request.form.get("folder", "general")
    max_bytes = current_app.config["MAX_IMAGE_BYTES"]

    files = request.files.getlist("files")
    if files:
        urls = upload_images(
            get_store(),
            files,
            existing=request.form.get("existing", 0, type=int),
            folder=folder,
            max_images=request.form.get("max", current_app.config["MAX_PROJECT_IMAGES"], type=int),
            max_bytes=max_bytes,
        )
        return jsonify({"urls": urls}), 201

    if "file" not in request.files:
        raise ValidationError("No valid files selected.")

    url = upload_image(get_store(), request.files["file"], folder=folder, max_bytes=max_bytes)
    return jsonify({"url": url}), 201
