"""Result shaping helpers shared by the read side of every entity service."""
from typing import Any, Optional

from sqlalchemy.orm import Session


def dialect_of(db: Session) -> str:
    return db.get_bind().dialect.name


def fetch_all(db: Session, stmt, params: Optional[dict] = None) -> list[dict[str, Any]]:
    return [dict(row) for row in db.execute(stmt, params or {}).mappings()]


def fetch_one(db: Session, stmt, params: Optional[dict] = None) -> Optional[dict[str, Any]]:
    row = db.execute(stmt, params or {}).mappings().first()
    return dict(row) if row is not None else None


def fetch_scalar(db: Session, stmt, params: Optional[dict] = None) -> Any:
    return db.execute(stmt, params or {}).scalar()
