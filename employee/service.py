from __future__ import annotations
import math
from datetime import date
from typing import Optional
from sqlalchemy import String, case, cast, delete, func, insert, or_, select, update
from sqlalchemy.orm import Session, aliased

from core.dispatcher import call_routine, execute_mutation
from core.errors import ErrorKind, NotFound
from core.gateway import fetch_all, fetch_one
from core.integrity import Reference, check_references
from core.routines import EMPLOYEE_HIRE
from core.validation import ensure_valid
from department.models import Department
from job.models import Job
from .models import Employee
from .schema import EmployeePayload
from .validators import employee_violations

Manager = aliased(Employee, name="manager")

# checked in this order, first dangling one wins
EMPLOYEE_REFERENCES = (
    Reference("job_id", "jobId", Job.id, "Invalid job ID - job not found"),
    Reference("manager_id", "managerId", Employee.id, "Invalid manager ID - employee not found"),
    Reference("department_id", "departmentId", Department.id, "Invalid department ID - department not found"),
)

WRITE_MESSAGES = {
    ErrorKind.CONFLICT: "Employee with this email already exists",
    ErrorKind.INVALID_REFERENCE: "Invalid foreign key reference (job, manager, or department)",
}


def _employee_select():
    manager_name = (Manager.first_name + " " + Manager.last_name).label("manager_name")
    return (
        select(
            Employee.id.label("employee_id"),
            Employee.first_name,
            Employee.last_name,
            Employee.email,
            Employee.phone_number,
            Employee.hire_date,
            Employee.salary,
            Employee.commission_pct,
            Employee.job_id,
            Job.title.label("job_title"),
            Employee.department_id,
            Department.name.label("department_name"),
            Employee.manager_id,
            manager_name,
        )
        .select_from(Employee)
        .outerjoin(Job, Employee.job_id == Job.id)
        .outerjoin(Department, Employee.department_id == Department.id)
        .outerjoin(Manager, Employee.manager_id == Manager.id)
    )


def _write_params(payload: EmployeePayload) -> dict:
    return {
        "first_name": payload.first_name,
        "last_name": payload.last_name,
        "email": payload.email,
        "phone_number": payload.phone_number,
        "job_id": payload.job_id,
        "salary": payload.salary,
        "commission_pct": payload.commission_pct,
        "manager_id": payload.manager_id,
        "department_id": payload.department_id,
    }


def count_employees(db: Session) -> int:
    return db.scalar(select(func.count()).select_from(Employee)) or 0


def list_employees(db: Session, *, page: Optional[int] = None, limit: Optional[int] = None) -> dict:
    stmt = _employee_select().order_by(Employee.id)
    if page and limit:
        total = count_employees(db)
        rows = fetch_all(db, stmt.offset((page - 1) * limit).limit(limit))
        return {
            "data": rows,
            "total": total,
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "total_pages": math.ceil(total / limit),
            },
        }
    rows = fetch_all(db, stmt)
    return {"data": rows, "total": len(rows)}


def search_employees(db: Session, q: str) -> list[dict]:
    pattern = f"%{q}%"
    stmt = (
        _employee_select()
        .where(
            or_(
                Employee.first_name.ilike(pattern),
                Employee.last_name.ilike(pattern),
                Employee.email.ilike(pattern),
                cast(Employee.id, String).like(pattern),
                Job.title.ilike(pattern),
                Department.name.ilike(pattern),
            )
        )
        .order_by(Employee.last_name, Employee.first_name)
    )
    return fetch_all(db, stmt)


def get_employee(db: Session, employee_id: int) -> Optional[dict]:
    return fetch_one(db, _employee_select().where(Employee.id == employee_id))


def get_employees_where(db: Session, *criteria) -> list[dict]:
    stmt = _employee_select().where(*criteria).order_by(Employee.last_name, Employee.first_name)
    return fetch_all(db, stmt)


def employee_stats(db: Session) -> dict:
    def salary_columns():
        return (
            func.count(Employee.id).label("employee_count"),
            func.avg(Employee.salary).label("average_salary"),
            func.min(Employee.salary).label("min_salary"),
            func.max(Employee.salary).label("max_salary"),
            func.sum(Employee.salary).label("total_salary"),
        )

    dept_stmt = (
        select(Department.name.label("name"), *salary_columns())
        .select_from(Department)
        .outerjoin(Employee, Employee.department_id == Department.id)
        .group_by(Department.id, Department.name)
        .order_by(func.count(Employee.id).desc(), Department.name)
    )
    job_stmt = (
        select(Job.title.label("name"), *salary_columns())
        .select_from(Job)
        .outerjoin(Employee, Employee.job_id == Job.id)
        .group_by(Job.id, Job.title)
        .order_by(func.count(Employee.id).desc(), Job.title)
    )
    overall_stmt = select(
        func.count(Employee.id).label("total_employees"),
        func.avg(Employee.salary).label("overall_average_salary"),
        func.min(Employee.salary).label("overall_min_salary"),
        func.max(Employee.salary).label("overall_max_salary"),
        func.sum(Employee.salary).label("total_payroll"),
        func.count(case((Employee.manager_id.is_(None), 1))).label("top_level_managers"),
        func.count(case((Employee.commission_pct.is_not(None), 1))).label("employees_with_commission"),
    )
    return {
        "department_stats": fetch_all(db, dept_stmt),
        "job_stats": fetch_all(db, job_stmt),
        "overall_stats": fetch_one(db, overall_stmt),
    }


def create_employee(db: Session, payload: EmployeePayload) -> None:
    ensure_valid(employee_violations(payload))
    check_references(db, EMPLOYEE_REFERENCES, payload.model_dump())
    values = _write_params(payload)
    values["hire_date"] = payload.hire_date or date.today()
    execute_mutation(db, insert(Employee).values(**values), action="create employee", messages=WRITE_MESSAGES)


def hire_employee(db: Session, payload: EmployeePayload) -> None:
    # job and salary-range rules are enforced by the routine and the table triggers
    ensure_valid(employee_violations(payload))
    call_routine(db, EMPLOYEE_HIRE, _write_params(payload), action="hire employee", messages=WRITE_MESSAGES)


def update_employee(db: Session, employee_id: int, payload: EmployeePayload) -> int:
    """Replace every editable column; omitted optional fields become NULL.

    The hire date is never touched by an update.
    """
    ensure_valid(employee_violations(payload))
    check_references(db, EMPLOYEE_REFERENCES, payload.model_dump())
    stmt = (
        update(Employee)
        .where(Employee.id == employee_id)
        .values(**_write_params(payload))
        .execution_options(synchronize_session=False)
    )
    affected = execute_mutation(db, stmt, action="update employee", messages=WRITE_MESSAGES)
    if affected == 0:
        raise NotFound("Employee not found")
    return affected


def delete_employee(db: Session, employee_id: int) -> int:
    stmt = delete(Employee).where(Employee.id == employee_id).execution_options(synchronize_session=False)
    affected = execute_mutation(
        db, stmt, action="delete employee",
        messages={ErrorKind.INVALID_REFERENCE: "Cannot delete employee who is still referenced as a manager"},
    )
    if affected == 0:
        raise NotFound("Employee not found")
    return affected
