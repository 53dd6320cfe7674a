"""Versioned, tenant-scoped, soft-deleting CRUD primitives shared by every record kind.

Mutations are single conditional statements keyed on the tenant, the record
key, the expected version and ``is_deleted = false``. Zero affected rows is
reported as not found; the caller cannot tell a wrong key from a stale
version or a deleted row.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.inspection import inspect as sa_inspect
from sqlalchemy.orm import Session

from addrbook.context import CallContext
from addrbook.errors import (
    RecordNotFound,
    StatementExecutionError,
    StatementPrepareError,
    QueryError,
)

logger = logging.getLogger(__name__)

TModel = TypeVar("TModel")
TOutcome = TypeVar("TOutcome")

DEADLINE_EXCEEDED = "deadline exceeded"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _backend_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def _apply_deadline(db: Session, ctx: CallContext) -> None:
    """Bound the statements of this transaction by the call's remaining time."""
    remaining = ctx.remaining()
    if remaining is None or db.get_bind().dialect.name != "postgresql":
        return
    db.execute(
        select(func.set_config("statement_timeout", str(max(int(remaining * 1000), 1)), True))
    )


class VersionedRecordStore(Generic[TModel]):
    """Reusable primitives; subclasses set ``model`` and ``key_fields``."""

    model: type[TModel] | None = None
    key_fields: tuple[str, ...] = ()

    @classmethod
    def _require_model(cls) -> type[TModel]:
        if cls.model is None:
            raise RuntimeError(f"{cls.__name__}.model must be set")
        return cls.model

    @classmethod
    def _key_clauses(cls, mservice_id: int, key: Mapping[str, Any]) -> list:
        model = cls._require_model()
        clauses = [model.mservice_id == mservice_id]
        for name in cls.key_fields:
            clauses.append(getattr(model, name) == key[name])
        return clauses

    @staticmethod
    def _prepare(db: Session, stmt):
        try:
            stmt.compile(dialect=db.get_bind().dialect)
        except SQLAlchemyError as exc:
            logger.error("what=prepare error=%s", exc)
            raise StatementPrepareError() from exc
        return stmt

    @staticmethod
    def _write(db: Session, ctx: CallContext, action: Callable[[], TOutcome]) -> TOutcome:
        if ctx.expired():
            raise StatementExecutionError(DEADLINE_EXCEEDED)
        try:
            _apply_deadline(db, ctx)
            outcome = action()
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("what=exec error=%s", _backend_message(exc))
            raise StatementExecutionError(_backend_message(exc)) from exc
        return outcome

    @staticmethod
    def _read(db: Session, ctx: CallContext, stmt, reader: Callable[[Any], TOutcome]) -> TOutcome:
        if ctx.expired():
            raise QueryError(DEADLINE_EXCEEDED)
        try:
            _apply_deadline(db, ctx)
            return reader(db.execute(stmt))
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("what=query error=%s", _backend_message(exc))
            raise QueryError(_backend_message(exc)) from exc

    @classmethod
    def _insert(cls, db: Session, ctx: CallContext, mservice_id: int, values: Mapping[str, Any]):
        """Insert a fresh version-1 row and return its primary key identity."""
        model = cls._require_model()
        now = _utcnow()
        entity = model(
            mservice_id=mservice_id,
            created=now,
            modified=now,
            deleted=None,
            is_deleted=False,
            version=1,
            **values,
        )

        def _add():
            db.add(entity)
            db.flush()
            return sa_inspect(entity).identity

        return cls._write(db, ctx, _add)

    @classmethod
    def _update_versioned(
        cls,
        db: Session,
        ctx: CallContext,
        mservice_id: int,
        key: Mapping[str, Any],
        expected_version: int,
        values: Mapping[str, Any],
    ) -> int:
        model = cls._require_model()
        stmt = cls._prepare(
            db,
            update(model)
            .where(
                *cls._key_clauses(mservice_id, key),
                model.version == expected_version,
                model.is_deleted.is_(False),
            )
            .values(modified=_utcnow(), version=expected_version + 1, **values)
            .execution_options(synchronize_session=False),
        )
        rows = cls._write(db, ctx, lambda: db.execute(stmt).rowcount)
        if rows != 1:
            raise RecordNotFound()
        return expected_version + 1

    @classmethod
    def _soft_delete(
        cls,
        db: Session,
        ctx: CallContext,
        mservice_id: int,
        key: Mapping[str, Any],
        expected_version: int,
    ) -> int:
        return cls._update_versioned(
            db,
            ctx,
            mservice_id,
            key,
            expected_version,
            {"deleted": _utcnow(), "is_deleted": True},
        )

    @classmethod
    def _get_active(cls, db: Session, ctx: CallContext, mservice_id: int, key: Mapping[str, Any]) -> TModel:
        model = cls._require_model()
        stmt = cls._prepare(
            db,
            select(model).where(*cls._key_clauses(mservice_id, key), model.is_deleted.is_(False)),
        )
        entity = cls._read(db, ctx, stmt, lambda result: result.scalars().first())
        if entity is None:
            raise RecordNotFound()
        return entity

    @classmethod
    def _list_active(
        cls,
        db: Session,
        ctx: CallContext,
        mservice_id: int,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
    ) -> list[TModel]:
        model = cls._require_model()
        stmt = select(model).where(model.mservice_id == mservice_id, model.is_deleted.is_(False))
        for name, value in (filters or {}).items():
            stmt = stmt.where(getattr(model, name) == value)
        if order_by:
            stmt = stmt.order_by(getattr(model, order_by).asc())
        stmt = cls._prepare(db, stmt)
        return cls._read(db, ctx, stmt, lambda result: list(result.scalars().all()))
