from __future__ import annotations
from typing import Optional
from sqlalchemy import delete, exists, func, insert, or_, select, update
from sqlalchemy.orm import Session

from core.dispatcher import call_routine, execute_mutation, query_routine
from core.errors import ErrorKind, NotFound
from core.gateway import fetch_all, fetch_one
from core.integrity import count_matching, guard_delete
from core.routines import CREATE_NEW_JOB, GET_JOB_DESCRIPTION, UPDATE_JOB_INFO
from core.validation import ensure_valid
from employee.models import Employee
from employee.service import get_employees_where
from .models import Job
from .schema import JobPayload
from .validators import job_violations

WRITE_MESSAGES = {
    ErrorKind.CONFLICT: "Job with this ID already exists",
    ErrorKind.VALUE_TOO_LONG: "One or more field values exceed maximum length",
    ErrorKind.NUMERIC_OVERFLOW: "Salary value is too large for the field precision",
}


def _job_columns():
    return (
        Job.id.label("job_id"),
        Job.title.label("job_title"),
        Job.min_salary,
        Job.max_salary,
    )


def _job_list_select():
    return (
        select(*_job_columns(), func.count(Employee.id).label("employee_count"))
        .select_from(Job)
        .outerjoin(Employee, Employee.job_id == Job.id)
        .group_by(Job.id, Job.title, Job.min_salary, Job.max_salary)
    )


def list_jobs(db: Session) -> list[dict]:
    return fetch_all(db, _job_list_select().order_by(Job.title))


def search_jobs(db: Session, q: str) -> list[dict]:
    pattern = f"%{q}%"
    stmt = (
        _job_list_select()
        .where(or_(Job.id.ilike(pattern), Job.title.ilike(pattern)))
        .order_by(Job.title)
    )
    return fetch_all(db, stmt)


def get_job(db: Session, job_id: str) -> Optional[dict]:
    return fetch_one(db, select(*_job_columns()).where(Job.id == job_id))


def job_employees(db: Session, job_id: str) -> list[dict]:
    return get_employees_where(db, Employee.job_id == job_id)


def job_description(db: Session, job_id: str) -> Optional[str]:
    return query_routine(db, GET_JOB_DESCRIPTION, {"job_id": job_id}, action="fetch job description")


def salary_range_utilization(row: dict) -> Optional[float]:
    """Where the average salary sits inside the job's range, as a percentage."""
    low, high, average = row["min_salary"], row["max_salary"], row["actual_average_salary"]
    if not row["employee_count"] or None in (low, high, average) or high == low:
        return None
    return round((float(average) - float(low)) / (float(high) - float(low)) * 100, 2)


def job_stats(db: Session) -> dict:
    employee_count = func.count(Employee.id)
    stmt = (
        select(
            *_job_columns(),
            employee_count.label("employee_count"),
            func.avg(Employee.salary).label("actual_average_salary"),
            func.min(Employee.salary).label("actual_min_salary"),
            func.max(Employee.salary).label("actual_max_salary"),
            func.sum(Employee.salary).label("total_salary_cost"),
        )
        .select_from(Job)
        .outerjoin(Employee, Employee.job_id == Job.id)
        .group_by(Job.id, Job.title, Job.min_salary, Job.max_salary)
        .order_by(employee_count.desc(), Job.title)
    )
    rows = fetch_all(db, stmt)
    for row in rows:
        row["salary_range_utilization_pct"] = salary_range_utilization(row)

    staffed = exists().where(Employee.job_id == Job.id).correlate(Job)
    summary_stmt = select(
        func.count(Job.id).label("total_jobs"),
        func.count(Job.id).filter(staffed).label("active_jobs"),
        func.count(Job.id).filter(~staffed).label("vacant_jobs"),
        func.avg(Job.min_salary).label("average_min_salary"),
        func.avg(Job.max_salary).label("average_max_salary"),
        func.min(Job.min_salary).label("lowest_min_salary"),
        func.max(Job.max_salary).label("highest_max_salary"),
    ).select_from(Job)
    return {"job_stats": rows, "summary": fetch_one(db, summary_stmt)}


def _routine_params(job_id: str, payload: JobPayload) -> dict:
    return {
        "job_id": job_id,
        "job_title": payload.job_title,
        "min_salary": payload.min_salary,
        "max_salary": payload.max_salary,
    }


def create_job(db: Session, payload: JobPayload) -> None:
    ensure_valid(job_violations(payload))
    stmt = insert(Job).values(
        id=payload.job_id,
        title=payload.job_title,
        min_salary=payload.min_salary,
        max_salary=payload.max_salary,
    )
    execute_mutation(db, stmt, action="create job", messages=WRITE_MESSAGES)


def create_job_via_routine(db: Session, payload: JobPayload) -> None:
    ensure_valid(job_violations(payload))
    call_routine(
        db, CREATE_NEW_JOB, _routine_params(payload.job_id, payload),
        action="create job", messages=WRITE_MESSAGES,
    )


def update_job(db: Session, job_id: str, payload: JobPayload) -> int:
    ensure_valid(job_violations(payload, creating=False))
    stmt = (
        update(Job)
        .where(Job.id == job_id)
        .values(title=payload.job_title, min_salary=payload.min_salary, max_salary=payload.max_salary)
        .execution_options(synchronize_session=False)
    )
    affected = execute_mutation(db, stmt, action="update job", messages=WRITE_MESSAGES)
    if affected == 0:
        raise NotFound("Job not found")
    return affected


def update_job_via_routine(db: Session, job_id: str, payload: JobPayload) -> None:
    ensure_valid(job_violations(payload, creating=False))
    # the routine reports nothing for an unknown id, so look first
    if count_matching(db, Job.id, job_id) == 0:
        raise NotFound("Job not found")
    call_routine(
        db, UPDATE_JOB_INFO, _routine_params(job_id, payload),
        action="update job", messages=WRITE_MESSAGES,
    )


def delete_job(db: Session, job_id: str) -> int:
    guard_delete(db, Employee.job_id, job_id, "Cannot delete job with active employees")
    stmt = delete(Job).where(Job.id == job_id).execution_options(synchronize_session=False)
    affected = execute_mutation(db, stmt, action="delete job")
    if affected == 0:
        raise NotFound("Job not found")
    return affected
