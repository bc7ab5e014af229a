"""Error taxonomy for the write pipeline and the vendor-code table that feeds it.

Every failure a client can see is an ``HRError`` tagged with an ``ErrorKind``.
Database errors are turned into one by ``translate_db_error``, which looks the
vendor code up in ``VENDOR_ERROR_KINDS``; nothing else in the code base
inspects driver error codes.
"""
from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Mapping, Optional

from sqlalchemy.exc import DBAPIError, SQLAlchemyError

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    VALIDATION = "validation_error"
    REFERENCE_NOT_FOUND = "reference_not_found"
    INVALID_REFERENCE = "invalid_reference"
    VALUE_TOO_LONG = "value_too_long"
    NUMERIC_OVERFLOW = "numeric_overflow"
    STILL_REFERENCED = "still_referenced"
    BUSINESS_RULE = "business_rule_violation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal_error"


STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.REFERENCE_NOT_FOUND: 400,
    ErrorKind.INVALID_REFERENCE: 400,
    ErrorKind.VALUE_TOO_LONG: 400,
    ErrorKind.NUMERIC_OVERFLOW: 400,
    ErrorKind.STILL_REFERENCED: 400,
    ErrorKind.BUSINESS_RULE: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}

DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.VALIDATION: "Invalid input",
    ErrorKind.REFERENCE_NOT_FOUND: "Referenced record not found",
    ErrorKind.INVALID_REFERENCE: "Invalid foreign key reference",
    ErrorKind.VALUE_TOO_LONG: "One or more field values exceed maximum length",
    ErrorKind.NUMERIC_OVERFLOW: "Numeric value is too large for the field precision",
    ErrorKind.STILL_REFERENCED: "Record is still referenced",
    ErrorKind.BUSINESS_RULE: "Operation rejected by a business rule",
    ErrorKind.NOT_FOUND: "Record not found",
    ErrorKind.CONFLICT: "Record already exists",
    ErrorKind.INTERNAL: "Operation failed",
}


class HRError(Exception):
    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: Optional[str] = None, *, field: Optional[str] = None, kind: Optional[ErrorKind] = None):
        if kind is not None:
            self.kind = kind
        self.message = message or DEFAULT_MESSAGES[self.kind]
        self.field = field
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    def to_dict(self) -> dict:
        body = {"detail": self.message, "kind": self.kind.value}
        if self.field:
            body["field"] = self.field
        return body


class ValidationError(HRError):
    kind = ErrorKind.VALIDATION


class ReferenceNotFound(HRError):
    kind = ErrorKind.REFERENCE_NOT_FOUND


class StillReferenced(HRError):
    kind = ErrorKind.STILL_REFERENCED


class NotFound(HRError):
    kind = ErrorKind.NOT_FOUND


class Conflict(HRError):
    kind = ErrorKind.CONFLICT


class BusinessRuleViolation(HRError):
    kind = ErrorKind.BUSINESS_RULE


class InternalError(HRError):
    kind = ErrorKind.INTERNAL


# (dialect name, vendor code) -> kind. Codes are normalized to strings.
VENDOR_ERROR_KINDS: dict[tuple[str, str], ErrorKind] = {
    # PostgreSQL SQLSTATE
    ("postgresql", "23505"): ErrorKind.CONFLICT,
    ("postgresql", "23503"): ErrorKind.INVALID_REFERENCE,
    ("postgresql", "22001"): ErrorKind.VALUE_TOO_LONG,
    ("postgresql", "22003"): ErrorKind.NUMERIC_OVERFLOW,
    ("postgresql", "P0001"): ErrorKind.BUSINESS_RULE,
    # SQLite extended result codes
    ("sqlite", "SQLITE_CONSTRAINT_UNIQUE"): ErrorKind.CONFLICT,
    ("sqlite", "SQLITE_CONSTRAINT_PRIMARYKEY"): ErrorKind.CONFLICT,
    ("sqlite", "SQLITE_CONSTRAINT_FOREIGNKEY"): ErrorKind.INVALID_REFERENCE,
    ("sqlite", "SQLITE_CONSTRAINT_TRIGGER"): ErrorKind.BUSINESS_RULE,
    # MySQL server error numbers
    ("mysql", "1062"): ErrorKind.CONFLICT,
    ("mysql", "1451"): ErrorKind.INVALID_REFERENCE,
    ("mysql", "1452"): ErrorKind.INVALID_REFERENCE,
    ("mysql", "1406"): ErrorKind.VALUE_TOO_LONG,
    ("mysql", "1264"): ErrorKind.NUMERIC_OVERFLOW,
    ("mysql", "1644"): ErrorKind.BUSINESS_RULE,
    # Oracle ORA- numbers
    ("oracle", "1"): ErrorKind.CONFLICT,
    ("oracle", "2291"): ErrorKind.INVALID_REFERENCE,
    ("oracle", "2292"): ErrorKind.INVALID_REFERENCE,
    ("oracle", "12899"): ErrorKind.VALUE_TOO_LONG,
    ("oracle", "1438"): ErrorKind.NUMERIC_OVERFLOW,
}

# RAISE_APPLICATION_ERROR range
_ORACLE_APPLICATION_ERRORS = range(20000, 21000)

# for sqlite3 builds that do not expose sqlite_errorname
_SQLITE_MESSAGE_CODES = (
    ("UNIQUE constraint failed", "SQLITE_CONSTRAINT_UNIQUE"),
    ("FOREIGN KEY constraint failed", "SQLITE_CONSTRAINT_FOREIGNKEY"),
)

_ORA_PREFIX = re.compile(r"^ORA-\d+:\s*")


def vendor_code(dialect: str, orig: BaseException) -> Optional[str]:
    """Extract the driver-specific error code from a DBAPI exception."""
    if dialect == "postgresql":
        code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
        return str(code) if code else None
    if dialect == "sqlite":
        name = getattr(orig, "sqlite_errorname", None)
        if name:
            return name
        text = str(orig)
        for fragment, code in _SQLITE_MESSAGE_CODES:
            if fragment in text:
                return code
        return None
    if dialect == "mysql":
        args = getattr(orig, "args", ())
        return str(args[0]) if args and isinstance(args[0], int) else None
    if dialect == "oracle":
        args = getattr(orig, "args", ())
        code = getattr(args[0], "code", None) if args else None
        return str(code) if code is not None else None
    return None


def vendor_message(orig: BaseException) -> str:
    """Return the human readable text a trigger or routine raised."""
    diag = getattr(orig, "diag", None)
    primary = getattr(diag, "message_primary", None) if diag is not None else None
    if primary:
        return primary
    args = getattr(orig, "args", ())
    if len(args) == 2 and isinstance(args[1], str):
        return args[1]
    lines = str(orig).strip().splitlines()
    return _ORA_PREFIX.sub("", lines[0]) if lines else ""


def classify(dialect: str, orig: BaseException) -> ErrorKind:
    code = vendor_code(dialect, orig)
    if code is None:
        return ErrorKind.INTERNAL
    kind = VENDOR_ERROR_KINDS.get((dialect, code))
    if kind is not None:
        return kind
    if dialect == "oracle" and code.isdigit() and int(code) in _ORACLE_APPLICATION_ERRORS:
        return ErrorKind.BUSINESS_RULE
    return ErrorKind.INTERNAL


def translate_db_error(
    exc: SQLAlchemyError,
    dialect: str,
    *,
    action: str,
    messages: Optional[Mapping[ErrorKind, str]] = None,
) -> HRError:
    """Map a failed statement onto the taxonomy and log it."""
    messages = messages or {}
    orig = exc.orig if isinstance(exc, DBAPIError) else None
    kind = classify(dialect, orig) if orig is not None else ErrorKind.INTERNAL

    if kind is ErrorKind.INTERNAL:
        logger.error("%s failed", action, exc_info=exc)
        return InternalError(messages.get(kind) or f"Failed to {action}")

    logger.warning("%s rejected by the database (%s): %s", action, kind.value, orig)
    if kind is ErrorKind.BUSINESS_RULE:
        message = vendor_message(orig) or messages.get(kind)
    else:
        message = messages.get(kind)
    return HRError(message, kind=kind)
