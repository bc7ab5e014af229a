from __future__ import annotations

from typing import Any, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import ErrorKind, translate_db_error
from core.gateway import dialect_of
from core.routines import StoredRoutine


def execute_mutation(
    db: Session,
    stmt,
    params: Optional[Mapping[str, Any]] = None,
    *,
    action: str,
    messages: Optional[Mapping[ErrorKind, str]] = None,
) -> int:
    """Run one write statement, commit, and return the affected row count.

    Any database failure is rolled back and re-raised as an ``HRError``
    whose kind comes from the vendor error table; ``messages`` only chooses
    the client-facing wording per kind.
    """
    try:
        result = db.execute(stmt, dict(params) if params else {})
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise translate_db_error(exc, dialect_of(db), action=action, messages=messages) from exc
    return result.rowcount


def call_routine(
    db: Session,
    routine: StoredRoutine,
    params: Mapping[str, Any],
    *,
    action: str,
    messages: Optional[Mapping[ErrorKind, str]] = None,
) -> int:
    stmt = routine.statement_for(dialect_of(db))
    return execute_mutation(db, stmt, params, action=action, messages=messages)


def query_routine(db: Session, routine: StoredRoutine, params: Mapping[str, Any], *, action: str) -> Any:
    """Evaluate a stored function and return its scalar result."""
    stmt = routine.statement_for(dialect_of(db))
    try:
        return db.execute(stmt, dict(params)).scalar()
    except SQLAlchemyError as exc:
        db.rollback()
        raise translate_db_error(exc, dialect_of(db), action=action) from exc
