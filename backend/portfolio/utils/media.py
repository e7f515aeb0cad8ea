import os
import random
import string
import time

from flask import current_app
from werkzeug.utils import secure_filename

from portfolio.domain.exceptions import ValidationError, WriteError

MAX_IMAGE_BYTES = 5 * 1024 * 1024
MAX_GALLERY_IMAGES = 12
ACCEPTED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp", "image/gif")

TYPE_ERROR = "Only JPG, PNG, WebP, and GIF files are supported."
SIZE_ERROR = "File must be under 5 MB."
NO_FILES_ERROR = "No valid files selected."


def file_size(file):
    stream = getattr(file, "stream", file)
    position = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size


def content_type(file):
    return getattr(file, "mimetype", None) or getattr(file, "content_type", None) or ""


def is_valid_image(file, max_bytes=MAX_IMAGE_BYTES):
    return content_type(file) in ACCEPTED_IMAGE_TYPES and file_size(file) <= max_bytes


def validate_image(file, max_bytes=MAX_IMAGE_BYTES):
    """Reject wrong media types and oversized files before anything is sent."""
    if content_type(file) not in ACCEPTED_IMAGE_TYPES:
        raise ValidationError(TYPE_ERROR)
    if file_size(file) > max_bytes:
        raise ValidationError(SIZE_ERROR)


def object_path(folder, filename):
    """
    ``{folder}/{millis}-{random6}.{ext}``; the original name only lends its extension.
    """
    name = secure_filename(filename or "")
    ext = name.rsplit(".", 1)[1].lower() if "." in name else "bin"
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=6))
    return f"{folder.strip('/')}/{int(time.time() * 1000)}-{suffix}.{ext}"


def upload_image(store, file, folder="general", max_bytes=MAX_IMAGE_BYTES):
    validate_image(file, max_bytes)

    path = object_path(folder, file.filename)
    store.storage.upload(path, file, overwrite=True)
    return store.storage.get_public_url(path)


def upload_images(store, files, existing=0, folder="general",
                  max_images=MAX_GALLERY_IMAGES, max_bytes=MAX_IMAGE_BYTES):
    """
    Upload several images in sequence and return the URLs that made it.

    Invalid files are dropped silently; the call is rejected only when none
    remain or when they would push the total past ``max_images``. A file the
    store refuses is skipped.
    """
    to_upload = [f for f in files if is_valid_image(f, max_bytes)]

    if not to_upload:
        raise ValidationError(NO_FILES_ERROR)

    if existing + len(to_upload) > max_images:
        raise ValidationError(f"Maximum {max_images} images allowed.")

    urls = []
    for file in to_upload:
        path = object_path(folder, file.filename)
        try:
            store.storage.upload(path, file, overwrite=True)
        except WriteError as e:
            current_app.logger.warning(f"Skipping {file.filename}: {e.message}")
            continue
        urls.append(store.storage.get_public_url(path))

    return urls
