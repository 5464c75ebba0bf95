# docfolio/content_store/client.py
"""
Thin table-oriented wrapper over the SQLAlchemy session.

Callers address tables by name and filter with plain equality,
membership and null checks, mirroring a hosted table API. Every
mutation is its own transaction; concurrent writers are not
coordinated, the last committed write wins.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from docfolio.extensions import db
from docfolio.models import Page, Section, PortfolioContent, User, RevokedToken
from docfolio.utils.transaction import transactional
from .errors import ContentStoreError, ConstraintViolation
from .realtime import ChangeFeed, Callback, Subscription, change_feed, DEFAULT_SCHEMA

logger = logging.getLogger(__name__)

TABLES = {
    "pages": Page,
    "sections": Section,
    "portfolio_content": PortfolioContent,
    "users": User,
    "revoked_tokens": RevokedToken,
}


class ContentStore:
    def __init__(self, feed: Optional[ChangeFeed] = None):
        self.feed = feed or change_feed

    # -------------------------------------------------
    # Query building
    # -------------------------------------------------
    def _model(self, table: str):
        try:
            return TABLES[table]
        except KeyError:
            raise ValueError(f"Unknown table: {table}") from None

    def _column(self, model, name: str):
        column = getattr(model, name, None)
        if column is None or not hasattr(column, "expression"):
            raise ValueError(f"Unknown column {model.__tablename__}.{name}")
        return column

    def _statement(
        self,
        table: str,
        *,
        eq: Optional[Mapping[str, Any]] = None,
        in_: Optional[Mapping[str, Iterable[Any]]] = None,
        is_null: Sequence[str] = (),
        order: Sequence[str] = (),
        limit: Optional[int] = None,
    ):
        model = self._model(table)
        stmt = select(model)

        for name, value in (eq or {}).items():
            stmt = stmt.where(self._column(model, name) == value)

        for name, values in (in_ or {}).items():
            stmt = stmt.where(self._column(model, name).in_(list(values)))

        for name in is_null:
            stmt = stmt.where(self._column(model, name).is_(None))

        for key in order:
            descending = key.startswith("-")
            column = self._column(model, key.lstrip("-"))
            stmt = stmt.order_by(column.desc() if descending else column.asc())

        if limit is not None:
            stmt = stmt.limit(limit)

        return stmt

    def _fail(self, operation: str, table: str, exc: Exception):
        db.session.rollback()
        if isinstance(exc, IntegrityError):
            logger.warning("Constraint violation on %s %s: %s", operation, table, exc.orig)
            raise ConstraintViolation(f"{operation} on {table} violates a constraint") from exc
        logger.error("Content store %s on %s failed: %s", operation, table, exc)
        raise ContentStoreError(f"{operation} on {table} failed") from exc

    # -------------------------------------------------
    # Reads
    # -------------------------------------------------
    def select(self, table: str, **filters) -> List[Any]:
        stmt = self._statement(table, **filters)
        try:
            return list(db.session.execute(stmt).scalars())
        except SQLAlchemyError as exc:
            self._fail("select", table, exc)

    def single(self, table: str, **filters) -> Optional[Any]:
        rows = self.select(table, limit=1, **filters)
        return rows[0] if rows else None

    # -------------------------------------------------
    # Writes
    # -------------------------------------------------
    def insert(self, table: str, values: Mapping[str, Any]) -> Any:
        model = self._model(table)
        row = model()
        for name, value in values.items():
            self._column(model, name)
            setattr(row, name, value)

        try:
            with transactional() as session:
                session.add(row)
        except SQLAlchemyError as exc:
            self._fail("insert", table, exc)

        return row

    def update(self, table: str, values: Mapping[str, Any], *, eq: Mapping[str, Any]) -> List[Any]:
        if not eq:
            raise ValueError("update requires at least one equality filter")

        model = self._model(table)
        for name in values:
            self._column(model, name)

        rows = self.select(table, eq=eq)
        try:
            with transactional():
                for row in rows:
                    for name, value in values.items():
                        setattr(row, name, value)
        except SQLAlchemyError as exc:
            self._fail("update", table, exc)

        return rows

    def delete(
        self,
        table: str,
        *,
        eq: Optional[Mapping[str, Any]] = None,
        in_: Optional[Mapping[str, Iterable[Any]]] = None,
    ) -> List[str]:
        if not eq and not in_:
            raise ValueError("delete requires a filter")

        rows = self.select(table, eq=eq, in_=in_)
        deleted_ids = [row.id for row in rows]
        try:
            with transactional() as session:
                # ORM deletes so that relationship cascades and change events fire
                for row in rows:
                    session.delete(row)
        except SQLAlchemyError as exc:
            self._fail("delete", table, exc)

        return deleted_ids

    def release(self) -> None:
        """End the read transaction held by long-lived readers."""
        db.session.rollback()

    # -------------------------------------------------
    # Realtime
    # -------------------------------------------------
    def subscribe(self, table: str, callback: Callback, *, schema: str = DEFAULT_SCHEMA) -> Subscription:
        self._model(table)
        return self.feed.subscribe(table, callback, schema=schema)


def column_values(row, columns: Sequence[str]) -> Dict[str, Any]:
    """Project an ORM row onto plain column values."""
    return {name: getattr(row, name) for name in columns}
