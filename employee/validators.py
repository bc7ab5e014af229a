from typing import Iterator

from core.validation import Violation, missing_fields, out_of_range, too_long
from .schema import EmployeePayload

MAX_SALARY = 999999.99
MAX_COMMISSION = 0.99


def employee_violations(payload: EmployeePayload) -> Iterator[Violation]:
    """Field rules for an employee record, in evaluation order."""
    yield from missing_fields({
        "firstName": payload.first_name,
        "lastName": payload.last_name,
        "email": payload.email,
        "jobId": payload.job_id,
    })
    yield from too_long("firstName", payload.first_name, 20, "First name")
    yield from too_long("lastName", payload.last_name, 25, "Last name")
    yield from too_long("email", payload.email, 25, "Email")
    yield from too_long("phoneNumber", payload.phone_number, 20, "Phone number")
    yield from out_of_range("salary", payload.salary, 0, MAX_SALARY, "Salary must be between 0 and 999,999.99")
    yield from out_of_range(
        "commissionPct", payload.commission_pct, 0, MAX_COMMISSION,
        "Commission percentage must be between 0.00 and 0.99",
    )
