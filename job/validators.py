from typing import Iterator

from core.validation import Violation, is_blank, out_of_range, too_long
from .schema import JobPayload

MAX_SALARY = 999999


def job_violations(payload: JobPayload, *, creating: bool = True) -> Iterator[Violation]:
    """Field rules for a job; the id is only checked when the caller supplies it."""
    if creating and (is_blank(payload.job_id) or is_blank(payload.job_title)):
        field = "jobId" if is_blank(payload.job_id) else "jobTitle"
        yield Violation(field, "Job ID and Job Title are required")
    if not creating and is_blank(payload.job_title):
        yield Violation("jobTitle", "Job title is required")
    if creating:
        yield from too_long("jobId", payload.job_id, 10, "Job ID")
    yield from too_long("jobTitle", payload.job_title, 35, "Job title")
    yield from out_of_range(
        "minSalary", payload.min_salary, 0, MAX_SALARY, "Minimum salary must be between 0 and 999,999"
    )
    yield from out_of_range(
        "maxSalary", payload.max_salary, 0, MAX_SALARY, "Maximum salary must be between 0 and 999,999"
    )
    if (
        payload.min_salary is not None
        and payload.max_salary is not None
        and payload.min_salary > payload.max_salary
    ):
        yield Violation("minSalary", "Minimum salary cannot be greater than maximum salary")
