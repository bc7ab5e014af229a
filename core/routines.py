"""Stored routines the write pipeline delegates business rules to.

Each routine has a call statement per dialect that ships the routine (see
``core/business_rules.py``) and a portable equivalent for stores without
stored procedures. The portable form still runs through the table triggers,
so the same rules reject the same input.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from sqlalchemy import text
from sqlalchemy.sql.elements import TextClause


@dataclass(frozen=True)
class StoredRoutine:
    name: str
    fallback: str
    statements: Mapping[str, str] = field(default_factory=dict)

    def statement_for(self, dialect: str) -> TextClause:
        return text(self.statements.get(dialect, self.fallback))


EMPLOYEE_HIRE = StoredRoutine(
    name="employee_hire_sp",
    statements={
        "postgresql": (
            "CALL employee_hire_sp("
            "CAST(:first_name AS VARCHAR), CAST(:last_name AS VARCHAR), CAST(:email AS VARCHAR), "
            "CAST(:phone_number AS VARCHAR), CAST(:job_id AS VARCHAR), CAST(:salary AS NUMERIC), "
            "CAST(:commission_pct AS NUMERIC), CAST(:manager_id AS INTEGER), CAST(:department_id AS INTEGER))"
        ),
    },
    fallback=(
        "INSERT INTO employees (first_name, last_name, email, phone_number, hire_date, "
        "job_id, salary, commission_pct, manager_id, department_id) "
        "VALUES (:first_name, :last_name, :email, :phone_number, CURRENT_DATE, "
        ":job_id, :salary, :commission_pct, :manager_id, :department_id)"
    ),
)

CREATE_NEW_JOB = StoredRoutine(
    name="create_new_job_sp",
    statements={
        "postgresql": (
            "CALL create_new_job_sp(CAST(:job_id AS VARCHAR), CAST(:job_title AS VARCHAR), "
            "CAST(:min_salary AS NUMERIC), CAST(:max_salary AS NUMERIC))"
        ),
    },
    fallback=(
        "INSERT INTO jobs (id, title, min_salary, max_salary) "
        "VALUES (:job_id, :job_title, :min_salary, :max_salary)"
    ),
)

UPDATE_JOB_INFO = StoredRoutine(
    name="update_job_info_sp",
    statements={
        "postgresql": (
            "CALL update_job_info_sp(CAST(:job_id AS VARCHAR), CAST(:job_title AS VARCHAR), "
            "CAST(:min_salary AS NUMERIC), CAST(:max_salary AS NUMERIC))"
        ),
    },
    fallback=(
        "UPDATE jobs SET title = :job_title, min_salary = :min_salary, max_salary = :max_salary "
        "WHERE id = :job_id"
    ),
)

GET_JOB_DESCRIPTION = StoredRoutine(
    name="get_job_description",
    statements={
        "postgresql": "SELECT get_job_description(CAST(:job_id AS VARCHAR))",
    },
    fallback="SELECT title FROM jobs WHERE id = :job_id",
)
