import os
import posixpath

from flask import current_app

from portfolio.domain.exceptions import WriteError
from .base import ObjectStorage


class LocalObjectStorage(ObjectStorage):
    """
    Object store on the local filesystem.

    Objects live under ``root``; public URLs are ``{url_prefix}/{path}`` and are
    served by the ``/media`` route.
    """

    def __init__(self, root: str, url_prefix: str = "/media"):
        self.root = root
        self.url_prefix = url_prefix.rstrip("/")

    def _resolve(self, path: str) -> str:
        normalized = posixpath.normpath(path.replace("\\", "/")).lstrip("/")
        if not normalized or normalized.startswith("..") or normalized == ".":
            raise WriteError(f"Invalid object path: {path}")
        return os.path.join(self.root, *normalized.split("/"))

    def upload(self, path, file, overwrite=False):
        dest = self._resolve(path)

        if os.path.exists(dest) and not overwrite:
            raise WriteError("The resource already exists")

        try:
            os.makedirs(os.path.dirname(dest), exist_ok=True)
            if hasattr(file, "seek"):
                file.seek(0)
            if hasattr(file, "save"):
                file.save(dest)
            else:
                with open(dest, "wb") as fh:
                    fh.write(file.read())
        except OSError as e:
            current_app.logger.error(f"Failed to store object {path}: {e}")
            raise WriteError(f"Upload failed: {e.strerror or e}") from e

        return path

    def get_public_url(self, path):
        return f"{self.url_prefix}/{path.lstrip('/')}"
