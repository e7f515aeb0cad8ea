import os
from typing import Optional

from flask import current_app

from .base import ContentStore, ObjectStorage, Session, TableQuery
from .sql import SqlContentStore
from .storage import LocalObjectStorage

SECTIONS_TABLE = "portfolio_sections"
PROJECTS_TABLE = "projects"
PROFILE_TABLE = "profile"
SKILLS_TABLE = "skills"
METHODOLOGY_TABLE = "methodology_items"


def storage_root(app) -> str:
    folder = app.config["UPLOAD_FOLDER"]
    if not os.path.isabs(folder):
        folder = os.path.join(app.instance_path, folder)
    return os.path.join(folder, app.config["STORAGE_BUCKET"])


def init_store(app, store: Optional[ContentStore] = None) -> ContentStore:
    if store is None:
        storage = LocalObjectStorage(storage_root(app), app.config["MEDIA_URL_PREFIX"])
        store = SqlContentStore(storage)
    app.extensions["content_store"] = store
    return store


def get_store() -> ContentStore:
    return current_app.extensions["content_store"]
