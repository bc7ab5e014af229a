"""Existence pre-checks run before a mutation is attempted.

These checks and the mutation that follows are separate statements. A row can
be deleted by another request between the count and the write, so the store's
foreign key constraint stays the final authority; its violation surfaces as
``ErrorKind.INVALID_REFERENCE`` through the dispatcher.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from sqlalchemy import func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from core.errors import ReferenceNotFound, StillReferenced


@dataclass(frozen=True)
class Reference:
    attr: str      # payload attribute holding the id
    field: str     # name the client sent
    column: InstrumentedAttribute
    message: str


def count_matching(db: Session, column: InstrumentedAttribute, value: Any) -> int:
    stmt = select(func.count()).select_from(column.class_).where(column == value)
    return db.scalar(stmt) or 0


def check_references(db: Session, references: Iterable[Reference], values: Mapping[str, Any]) -> None:
    """Check each supplied foreign key in order; stop at the first dangling one."""
    for ref in references:
        value = values.get(ref.attr)
        if value is None:
            continue
        if count_matching(db, ref.column, value) == 0:
            raise ReferenceNotFound(ref.message, field=ref.field)


def guard_delete(db: Session, column: InstrumentedAttribute, value: Any, message: str) -> None:
    """Refuse to delete a row that employees still point at."""
    if count_matching(db, column, value) > 0:
        raise StillReferenced(message)
