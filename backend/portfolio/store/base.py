# portfolio/store/base.py
"""
Content store client contract.

Everything the admin panel and the public site persist goes through a
``ContentStore``: password sessions, a small query interface over named
tables, and an object store for uploaded images. Callers only ever see plain
dict rows; failures surface as ``AuthError``, ``QueryError`` or ``WriteError``.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel


class Session(BaseModel):
    user_id: str
    email: str
    access_token: Optional[str] = None


class TableQuery:
    """
    Chainable query over one table.

    ``select``/``eq``/``order`` narrow the read, ``execute``/``maybe_single``
    run it. Mutations run immediately against the table.
    """

    def __init__(self, store: "ContentStore", name: str):
        self._store = store
        self.name = name
        self.columns: Tuple[str, ...] = ()
        self.filters: Dict[str, Any] = {}
        self.order_by: Optional[Tuple[str, bool]] = None

    def select(self, *columns: str) -> "TableQuery":
        self.columns = tuple(c for c in columns if c != "*")
        return self

    def eq(self, column: str, value: Any) -> "TableQuery":
        self.filters[column] = value
        return self

    def order(self, column: str, ascending: bool = True) -> "TableQuery":
        self.order_by = (column, ascending)
        return self

    def execute(self) -> List[Dict[str, Any]]:
        return self._store.fetch_rows(self)

    def maybe_single(self) -> Optional[Dict[str, Any]]:
        """At most one row; ``None`` when nothing matches."""
        rows = self.execute()
        return rows[0] if rows else None

    def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return self._store.insert_row(self.name, record)

    def update(self, row_id: str, patch: Dict[str, Any]) -> None:
        self._store.update_row(self.name, row_id, patch)

    def delete(self, row_id: str) -> None:
        self._store.delete_row(self.name, row_id)


class ObjectStorage(ABC):
    @abstractmethod
    def upload(self, path: str, file, overwrite: bool = False) -> str:
        """Store ``file`` under ``path``. Raises ``WriteError`` on failure."""

    @abstractmethod
    def get_public_url(self, path: str) -> str:
        ...


class ContentStore(ABC):
    storage: ObjectStorage

    # -------------------------------
    # Sessions
    # -------------------------------
    @abstractmethod
    def get_session(self) -> Optional[Session]:
        ...

    @abstractmethod
    def sign_in_with_password(self, email: str, password: str) -> Session:
        ...

    @abstractmethod
    def sign_out(self) -> None:
        ...

    # -------------------------------
    # Tables
    # -------------------------------
    def table(self, name: str) -> TableQuery:
        return TableQuery(self, name)

    @abstractmethod
    def fetch_rows(self, query: TableQuery) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    def insert_row(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        ...

    @abstractmethod
    def update_row(self, table: str, row_id: str, patch: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    def delete_row(self, table: str, row_id: str) -> None:
        ...
