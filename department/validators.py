from typing import Iterator

from core.validation import Violation, is_blank, too_long
from .schema import DepartmentPayload


def department_violations(payload: DepartmentPayload) -> Iterator[Violation]:
    if is_blank(payload.department_name):
        yield Violation("departmentName", "Department name is required")
    yield from too_long("departmentName", payload.department_name, 30, "Department name")
