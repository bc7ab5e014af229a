from __future__ import annotations

from typing import Iterable, Iterator, NamedTuple, Optional

from core.errors import ValidationError


class Violation(NamedTuple):
    field: str
    message: str


def is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def missing_fields(values: dict) -> Iterator[Violation]:
    """Yield one violation listing every blank required field, or nothing."""
    missing = [name for name, value in values.items() if is_blank(value)]
    if missing:
        yield Violation(missing[0], f"Missing required fields: {', '.join(missing)}")


def too_long(field: str, value: Optional[str], limit: int, label: str) -> Iterator[Violation]:
    if value is not None and len(value) > limit:
        yield Violation(field, f"{label} cannot exceed {limit} characters")


def out_of_range(field: str, value, low, high, message: str) -> Iterator[Violation]:
    # NaN compares false both ways
    if value is not None and (value != value or value < low or value > high):
        yield Violation(field, message)


def first_violation(violations: Iterable[Violation]) -> Optional[Violation]:
    return next(iter(violations), None)


def ensure_valid(violations: Iterable[Violation]) -> None:
    """Raise for the earliest violation; later rules are never evaluated."""
    violation = first_violation(violations)
    if violation is not None:
        raise ValidationError(violation.message, field=violation.field)
