from __future__ import annotations
from typing import Optional
from sqlalchemy import String, case, cast, delete, func, insert, or_, select, update
from sqlalchemy.orm import Session, aliased

from core.dispatcher import execute_mutation
from core.errors import ErrorKind, NotFound
from core.gateway import fetch_all, fetch_one
from core.integrity import Reference, check_references, guard_delete
from core.validation import ensure_valid
from employee.models import Employee
from employee.service import get_employees_where
from location.models import Country, Location
from .models import Department
from .schema import DepartmentPayload
from .validators import department_violations

Manager = aliased(Employee, name="manager")

DEPARTMENT_REFERENCES = (
    Reference("manager_id", "managerId", Employee.id, "Invalid manager ID - employee not found"),
    Reference("location_id", "locationId", Location.id, "Invalid location ID - location not found"),
)

WRITE_MESSAGES = {
    ErrorKind.CONFLICT: "Department with this name already exists",
    ErrorKind.INVALID_REFERENCE: "Invalid foreign key reference (manager or location)",
    ErrorKind.VALUE_TOO_LONG: "Department name exceeds maximum length (30 characters)",
}


def _manager_name():
    return (Manager.first_name + " " + Manager.last_name).label("manager_name")


def _employee_count():
    return (
        select(func.count(Employee.id))
        .where(Employee.department_id == Department.id)
        .correlate(Department)
        .scalar_subquery()
        .label("employee_count")
    )


def _location_text(rows: list[dict], *parts: str) -> list[dict]:
    """Collapse the selected address columns into one display string, skipping blanks."""
    for row in rows:
        values = [row.pop(part) for part in parts]
        row["location"] = ", ".join(v for v in values if v) or None
    return rows


def _department_select():
    return (
        select(
            Department.id.label("department_id"),
            Department.name.label("department_name"),
            Department.manager_id,
            _manager_name(),
            Location.street_address,
            Location.city,
            Location.state_province,
            _employee_count(),
        )
        .select_from(Department)
        .outerjoin(Manager, Department.manager_id == Manager.id)
        .outerjoin(Location, Department.location_id == Location.id)
    )


def list_departments(db: Session) -> list[dict]:
    rows = fetch_all(db, _department_select().order_by(Department.name))
    return _location_text(rows, "street_address", "city", "state_province")


def search_departments(db: Session, q: str) -> list[dict]:
    pattern = f"%{q}%"
    stmt = (
        _department_select()
        .where(
            or_(
                Department.name.ilike(pattern),
                cast(Department.id, String).like(pattern),
                Location.city.ilike(pattern),
            )
        )
        .order_by(Department.name)
    )
    return _location_text(fetch_all(db, stmt), "street_address", "city", "state_province")


def get_department(db: Session, department_id: int) -> Optional[dict]:
    stmt = (
        select(
            Department.id.label("department_id"),
            Department.name.label("department_name"),
            Department.manager_id,
            _manager_name(),
            Department.location_id,
            Location.street_address,
            Location.city,
            Location.state_province,
            Location.postal_code,
            Country.name.label("country_name"),
        )
        .select_from(Department)
        .outerjoin(Manager, Department.manager_id == Manager.id)
        .outerjoin(Location, Department.location_id == Location.id)
        .outerjoin(Country, Location.country_id == Country.id)
        .where(Department.id == department_id)
    )
    return fetch_one(db, stmt)


def department_employees(db: Session, department_id: int) -> list[dict]:
    return get_employees_where(db, Employee.department_id == department_id)


def department_stats(db: Session) -> dict:
    employee_count = func.count(Employee.id)
    stmt = (
        select(
            Department.id.label("department_id"),
            Department.name.label("department_name"),
            employee_count.label("employee_count"),
            func.avg(Employee.salary).label("average_salary"),
            func.min(Employee.salary).label("min_salary"),
            func.max(Employee.salary).label("max_salary"),
            func.sum(Employee.salary).label("total_salary_cost"),
            func.count(case((Employee.manager_id.is_(None), Employee.id))).label("managers_count"),
            _manager_name(),
            Location.city,
            Location.state_province,
        )
        .select_from(Department)
        .outerjoin(Employee, Employee.department_id == Department.id)
        .outerjoin(Manager, Department.manager_id == Manager.id)
        .outerjoin(Location, Department.location_id == Location.id)
        .group_by(
            Department.id, Department.name, Manager.first_name, Manager.last_name,
            Location.city, Location.state_province,
        )
        .order_by(employee_count.desc(), Department.name)
    )
    summary_stmt = (
        select(
            func.count(func.distinct(Department.id)).label("total_departments"),
            func.count(Employee.id).label("total_employees"),
            func.avg(Employee.salary).label("overall_average_salary"),
            func.sum(Employee.salary).label("total_payroll"),
        )
        .select_from(Department)
        .outerjoin(Employee, Employee.department_id == Department.id)
    )
    rows = _location_text(fetch_all(db, stmt), "city", "state_province")
    return {"data": rows, "summary": fetch_one(db, summary_stmt)}


def _write_params(payload: DepartmentPayload) -> dict:
    return {
        "name": payload.department_name,
        "manager_id": payload.manager_id,
        "location_id": payload.location_id,
    }


def create_department(db: Session, payload: DepartmentPayload) -> None:
    ensure_valid(department_violations(payload))
    check_references(db, DEPARTMENT_REFERENCES, payload.model_dump())
    stmt = insert(Department).values(**_write_params(payload))
    execute_mutation(db, stmt, action="create department", messages=WRITE_MESSAGES)


def update_department(db: Session, department_id: int, payload: DepartmentPayload) -> int:
    ensure_valid(department_violations(payload))
    check_references(db, DEPARTMENT_REFERENCES, payload.model_dump())
    stmt = (
        update(Department)
        .where(Department.id == department_id)
        .values(**_write_params(payload))
        .execution_options(synchronize_session=False)
    )
    affected = execute_mutation(db, stmt, action="update department", messages=WRITE_MESSAGES)
    if affected == 0:
        raise NotFound("Department not found")
    return affected


def delete_department(db: Session, department_id: int) -> int:
    guard_delete(db, Employee.department_id, department_id, "Cannot delete department with active employees")
    stmt = delete(Department).where(Department.id == department_id).execution_options(synchronize_session=False)
    affected = execute_mutation(db, stmt, action="delete department")
    if affected == 0:
        raise NotFound("Department not found")
    return affected
