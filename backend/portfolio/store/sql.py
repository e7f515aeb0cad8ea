# portfolio/store/sql.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from dateutil.parser import isoparse
from flask import current_app, has_request_context
from flask_jwt_extended import (
    create_access_token,
    get_jwt,
    get_jwt_identity,
    verify_jwt_in_request,
)
from sqlalchemy.exc import SQLAlchemyError

from portfolio.domain.exceptions import AuthError, QueryError, WriteError
from portfolio.extensions import db, jwt
from portfolio.models import (
    MethodologyItem,
    PortfolioSection,
    Profile,
    Project,
    RevokedToken,
    Skill,
    User,
)
from portfolio.models.base import utc_now
from portfolio.utils.transaction import transactional
from .base import ContentStore, ObjectStorage, Session, TableQuery

TABLES = {
    "profile": Profile,
    "projects": Project,
    "skills": Skill,
    "methodology_items": MethodologyItem,
    "portfolio_sections": PortfolioSection,
}

TIMESTAMP_COLUMNS = ("created_at", "updated_at")


def _model_for(name: str, error_cls):
    model = TABLES.get(name)
    if model is None:
        raise error_cls(f"Unknown table: {name}")
    return model


def _check_columns(model, columns, error_cls):
    known = set(model.column_names())
    unknown = sorted(set(columns) - known)
    if unknown:
        raise error_cls(f"Unknown column(s) on {model.__tablename__}: {', '.join(unknown)}")


def _coerce_timestamps(values: Dict[str, Any]) -> Dict[str, Any]:
    coerced = dict(values)
    for column in TIMESTAMP_COLUMNS:
        if isinstance(coerced.get(column), str):
            coerced[column] = isoparse(coerced[column])
    return coerced


class SqlContentStore(ContentStore):
    """
    Content store backed by the app's SQLAlchemy session.

    Must be used inside an application context. Every mutation runs in its
    own transaction; a failed write is rolled back and reported as
    ``WriteError`` so the caller's in-memory state is never half-applied.
    """

    def __init__(self, storage: ObjectStorage):
        self.storage = storage

    # -------------------------------
    # Sessions
    # -------------------------------
    def get_session(self) -> Optional[Session]:
        if not has_request_context():
            return None

        verify_jwt_in_request(optional=True)
        user_id = get_jwt_identity()
        if not user_id:
            return None

        return Session(user_id=user_id, email=get_jwt().get("email", ""))

    def sign_in_with_password(self, email: str, password: str) -> Session:
        if not email or not password:
            raise AuthError("Email and password required")

        user = User.query.filter_by(email=email).first()
        if not user or not user.check_password(password):
            current_app.logger.info("Failed sign-in for %s", email)
            raise AuthError("Invalid login credentials")

        if not user.is_active:
            raise AuthError("User account disabled")

        try:
            with transactional():
                user.last_sign_in_at = utc_now()
        except SQLAlchemyError as exc:
            raise AuthError(_describe(exc)) from exc

        token = create_access_token(identity=user.id, additional_claims={"email": user.email})
        return Session(user_id=user.id, email=user.email, access_token=token)

    def sign_out(self) -> None:
        verify_jwt_in_request()
        claims = get_jwt()

        revoked = RevokedToken()
        revoked.jti = claims["jti"]
        revoked.user_id = get_jwt_identity()

        try:
            with transactional():
                db.session.add(revoked)
        except SQLAlchemyError as exc:
            raise WriteError(_describe(exc)) from exc

    # -------------------------------
    # Tables
    # -------------------------------
    def fetch_rows(self, query: TableQuery) -> List[Dict[str, Any]]:
        model = _model_for(query.name, QueryError)
        _check_columns(model, list(query.columns) + list(query.filters), QueryError)

        sql = model.query.filter_by(**query.filters)
        if query.order_by is not None:
            column, ascending = query.order_by
            _check_columns(model, [column], QueryError)
            attr = getattr(model, column)
            sql = sql.order_by(attr.asc() if ascending else attr.desc())
        # Stable tie-break for equal order values
        sql = sql.order_by(model.created_at.asc(), model.id.asc())

        try:
            rows = [item.to_dict() for item in sql.all()]
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.error("Query on %s failed: %s", query.name, exc)
            raise QueryError(str(exc)) from exc

        if query.columns:
            rows = [{c: row[c] for c in query.columns} for row in rows]
        return rows

    def insert_row(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        model = _model_for(table, WriteError)
        values = {k: v for k, v in record.items() if k not in ("id", *TIMESTAMP_COLUMNS)}
        _check_columns(model, values, WriteError)

        item = model()
        for column, value in values.items():
            setattr(item, column, value)

        try:
            with transactional():
                db.session.add(item)
                db.session.flush()
        except SQLAlchemyError as exc:
            current_app.logger.error("Insert into %s failed: %s", table, exc)
            raise WriteError(_describe(exc)) from exc

        return item.to_dict()

    def update_row(self, table: str, row_id: str, patch: Dict[str, Any]) -> None:
        model = _model_for(table, WriteError)
        values = _coerce_timestamps({k: v for k, v in patch.items() if k not in ("id", "created_at")})
        _check_columns(model, values, WriteError)

        try:
            with transactional():
                item = _existing(model, table, row_id)
                for column, value in values.items():
                    setattr(item, column, value)
        except SQLAlchemyError as exc:
            current_app.logger.error("Update of %s/%s failed: %s", table, row_id, exc)
            raise WriteError(_describe(exc)) from exc

    def delete_row(self, table: str, row_id: str) -> None:
        model = _model_for(table, WriteError)

        try:
            with transactional():
                db.session.delete(_existing(model, table, row_id))
        except SQLAlchemyError as exc:
            current_app.logger.error("Delete of %s/%s failed: %s", table, row_id, exc)
            raise WriteError(_describe(exc)) from exc


def _existing(model, table, row_id):
    item = db.session.get(model, row_id)
    if item is None:
        raise WriteError(f"No row with id {row_id} in {table}")
    return item


def _describe(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


@jwt.token_in_blocklist_loader
def token_revoked(jwt_header, jwt_payload) -> bool:
    return RevokedToken.query.filter_by(jti=jwt_payload["jti"]).first() is not None
