import copy
import itertools
import uuid
from datetime import datetime, timedelta, timezone

import pytest
from flask_jwt_extended import create_access_token

from portfolio import create_app
from portfolio.domain.exceptions import AuthError, QueryError, WriteError
from portfolio.extensions import db
from portfolio.models.user import User
from portfolio.store.base import ContentStore, ObjectStorage, Session
from portfolio.store.sql import SqlContentStore
from portfolio.store.storage import LocalObjectStorage

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct-horse"


class MemoryStorage(ObjectStorage):
    """Object storage kept in a dict. ``failing`` rejects every upload."""

    def __init__(self):
        self.objects = {}
        self.failing = False

    def upload(self, path, file, overwrite=False):
        if self.failing:
            raise WriteError("Upload rejected")
        if path in self.objects and not overwrite:
            raise WriteError("The resource already exists")
        self.objects[path] = file.read()
        return path

    def get_public_url(self, path):
        return f"https://cdn.example.com/{path}"


class MemoryContentStore(ContentStore):
    """
    Content store kept in memory, with switchable failures.

    ``failing`` holds operation names ("select", "insert", "update",
    "delete") that are rejected outright; ``failing_ids`` rejects updates and
    deletes of specific rows.
    """

    def __init__(self):
        self.storage = MemoryStorage()
        self.tables = {}
        self.failing = set()
        self.failing_ids = set()
        self.calls = []
        self.session = None
        self._clock = itertools.count()

    def _check(self, operation, row_id=None):
        self.calls.append((operation, row_id))
        if operation in self.failing or (row_id is not None and row_id in self.failing_ids):
            error_cls = QueryError if operation == "select" else WriteError
            raise error_cls(f"{operation} rejected by store")

    def _stamp(self):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        return (base + timedelta(seconds=next(self._clock))).isoformat()

    def seed(self, table, **values):
        row = {"id": str(uuid.uuid4()), "created_at": self._stamp(), "updated_at": None}
        row.update(values)
        self.tables.setdefault(table, []).append(row)
        return copy.deepcopy(row)

    # -------------------------------
    # Sessions
    # -------------------------------
    def get_session(self):
        return self.session

    def sign_in_with_password(self, email, password):
        if (email, password) != (ADMIN_EMAIL, ADMIN_PASSWORD):
            raise AuthError("Invalid login credentials")
        self.session = Session(user_id="admin-1", email=email, access_token="token")
        return self.session

    def sign_out(self):
        self.session = None

    # -------------------------------
    # Tables
    # -------------------------------
    def fetch_rows(self, query):
        self._check("select")
        rows = [r for r in self.tables.get(query.name, [])
                if all(r.get(k) == v for k, v in query.filters.items())]
        rows.sort(key=lambda r: r["created_at"])
        if query.order_by is not None:
            column, ascending = query.order_by
            rows.sort(key=lambda r: r.get(column), reverse=not ascending)
        rows = copy.deepcopy(rows)
        if query.columns:
            rows = [{c: r.get(c) for c in query.columns} for r in rows]
        return rows

    def insert_row(self, table, record):
        self._check("insert")
        values = {k: v for k, v in record.items() if k not in ("id", "created_at", "updated_at")}
        return self.seed(table, **values)

    def _find(self, table, row_id):
        for row in self.tables.get(table, []):
            if row["id"] == row_id:
                return row
        raise WriteError(f"No row with id {row_id} in {table}")

    def update_row(self, table, row_id, patch):
        self._check("update", row_id)
        row = self._find(table, row_id)
        row.update({k: copy.deepcopy(v) for k, v in patch.items() if k not in ("id", "created_at")})

    def delete_row(self, table, row_id):
        self._check("delete", row_id)
        row = self._find(table, row_id)
        self.tables[table].remove(row)


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def memory_store():
    return MemoryContentStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def app(tmp_path):
    storage = LocalObjectStorage(str(tmp_path / "media"), "/media")
    app = create_app("testing", store=SqlContentStore(storage))

    with app.app_context():
        db.create_all()

        user = User(email=ADMIN_EMAIL)
        user.set_password(ADMIN_PASSWORD)
        db.session.add(user)
        db.session.commit()

        yield app

        db.session.remove()
        db.drop_all()


@pytest.fixture
def store(app):
    return app.extensions["content_store"]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_user(app):
    return User.query.filter_by(email=ADMIN_EMAIL).first()


@pytest.fixture
def auth_headers(app, admin_user):
    token = create_access_token(identity=admin_user.id, additional_claims={"email": admin_user.email})
    return {"Authorization": f"Bearer {token}"}
