"""Database-side business rules: triggers and stored routines.

Installed by the schema migration and by the test fixtures. The rules live in
the store so that every write path (direct statements and stored routines)
is held to them.
"""
from __future__ import annotations

import logging

from sqlalchemy.engine import Connection

logger = logging.getLogger(__name__)

INVALID_JOB_MESSAGE = "Invalid job ID specified"
SALARY_RANGE_MESSAGE = "Salary out of range for the selected job position"
JOB_RANGE_MESSAGE = "Minimum salary cannot exceed maximum salary"


def _sqlite_statements() -> list[str]:
    statements = []
    for event in ("INSERT", "UPDATE"):
        suffix = event.lower()
        statements.append(f"""
CREATE TRIGGER IF NOT EXISTS trg_employees_job_{suffix}
BEFORE {event} ON employees
FOR EACH ROW
WHEN NOT EXISTS (SELECT 1 FROM jobs WHERE id = NEW.job_id)
BEGIN
    SELECT RAISE(ABORT, '{INVALID_JOB_MESSAGE}');
END
""")
        statements.append(f"""
CREATE TRIGGER IF NOT EXISTS trg_employees_salary_{suffix}
BEFORE {event} ON employees
FOR EACH ROW
WHEN NEW.salary IS NOT NULL AND EXISTS (
    SELECT 1 FROM jobs
    WHERE id = NEW.job_id
      AND ((min_salary IS NOT NULL AND NEW.salary < min_salary)
        OR (max_salary IS NOT NULL AND NEW.salary > max_salary))
)
BEGIN
    SELECT RAISE(ABORT, '{SALARY_RANGE_MESSAGE}');
END
""")
        statements.append(f"""
CREATE TRIGGER IF NOT EXISTS trg_jobs_salary_range_{suffix}
BEFORE {event} ON jobs
FOR EACH ROW
WHEN NEW.min_salary IS NOT NULL AND NEW.max_salary IS NOT NULL
     AND NEW.min_salary > NEW.max_salary
BEGIN
    SELECT RAISE(ABORT, '{JOB_RANGE_MESSAGE}');
END
""")
    return statements


_POSTGRES_STATEMENTS = [
    f"""
CREATE OR REPLACE FUNCTION hr_check_employee_job() RETURNS trigger AS $$
DECLARE
    v_min NUMERIC;
    v_max NUMERIC;
BEGIN
    SELECT min_salary, max_salary INTO v_min, v_max FROM jobs WHERE id = NEW.job_id;
    IF NOT FOUND THEN
        RAISE EXCEPTION '{INVALID_JOB_MESSAGE}' USING ERRCODE = 'P0001';
    END IF;
    IF NEW.salary IS NOT NULL
       AND ((v_min IS NOT NULL AND NEW.salary < v_min) OR (v_max IS NOT NULL AND NEW.salary > v_max)) THEN
        RAISE EXCEPTION '{SALARY_RANGE_MESSAGE}' USING ERRCODE = 'P0001';
    END IF;
    RETURN NEW;
END;
$$ LANGUAGE plpgsql
""",
    "DROP TRIGGER IF EXISTS trg_employees_job_check ON employees",
    """
CREATE TRIGGER trg_employees_job_check
BEFORE INSERT OR UPDATE ON employees
FOR EACH ROW EXECUTE FUNCTION hr_check_employee_job()
""",
    f"""
CREATE OR REPLACE FUNCTION hr_check_job_range() RETURNS trigger AS $$
BEGIN
    IF NEW.min_salary IS NOT NULL AND NEW.max_salary IS NOT NULL AND NEW.min_salary > NEW.max_salary THEN
        RAISE EXCEPTION '{JOB_RANGE_MESSAGE}' USING ERRCODE = 'P0001';
    END IF;
    RETURN NEW;
END;
$$ LANGUAGE plpgsql
""",
    "DROP TRIGGER IF EXISTS trg_jobs_salary_range ON jobs",
    """
CREATE TRIGGER trg_jobs_salary_range
BEFORE INSERT OR UPDATE ON jobs
FOR EACH ROW EXECUTE FUNCTION hr_check_job_range()
""",
    """
CREATE OR REPLACE PROCEDURE employee_hire_sp(
    p_first_name VARCHAR,
    p_last_name VARCHAR,
    p_email VARCHAR,
    p_phone_number VARCHAR,
    p_job_id VARCHAR,
    p_salary NUMERIC,
    p_commission_pct NUMERIC,
    p_manager_id INTEGER,
    p_department_id INTEGER
)
LANGUAGE plpgsql AS $$
BEGIN
    INSERT INTO employees (
        first_name, last_name, email, phone_number, hire_date,
        job_id, salary, commission_pct, manager_id, department_id
    ) VALUES (
        p_first_name, p_last_name, p_email, p_phone_number, CURRENT_DATE,
        p_job_id, p_salary, p_commission_pct, p_manager_id, p_department_id
    );
END;
$$
""",
    """
CREATE OR REPLACE PROCEDURE create_new_job_sp(
    p_job_id VARCHAR,
    p_job_title VARCHAR,
    p_min_salary NUMERIC,
    p_max_salary NUMERIC
)
LANGUAGE plpgsql AS $$
BEGIN
    INSERT INTO jobs (id, title, min_salary, max_salary)
    VALUES (p_job_id, p_job_title, p_min_salary, p_max_salary);
END;
$$
""",
    f"""
CREATE OR REPLACE PROCEDURE update_job_info_sp(
    p_job_id VARCHAR,
    p_job_title VARCHAR,
    p_min_salary NUMERIC,
    p_max_salary NUMERIC
)
LANGUAGE plpgsql AS $$
BEGIN
    UPDATE jobs
       SET title = p_job_title, min_salary = p_min_salary, max_salary = p_max_salary
     WHERE id = p_job_id;
    IF NOT FOUND THEN
        RAISE EXCEPTION '{INVALID_JOB_MESSAGE}' USING ERRCODE = 'P0001';
    END IF;
END;
$$
""",
    """
CREATE OR REPLACE FUNCTION get_job_description(p_job_id VARCHAR) RETURNS VARCHAR AS $$
DECLARE
    v_title VARCHAR;
BEGIN
    SELECT title INTO v_title FROM jobs WHERE id = p_job_id;
    RETURN v_title;
END;
$$ LANGUAGE plpgsql
""",
]

_POSTGRES_DROP = [
    "DROP FUNCTION IF EXISTS get_job_description(VARCHAR)",
    "DROP PROCEDURE IF EXISTS update_job_info_sp(VARCHAR, VARCHAR, NUMERIC, NUMERIC)",
    "DROP PROCEDURE IF EXISTS create_new_job_sp(VARCHAR, VARCHAR, NUMERIC, NUMERIC)",
    "DROP PROCEDURE IF EXISTS employee_hire_sp(VARCHAR, VARCHAR, VARCHAR, VARCHAR, VARCHAR, NUMERIC, NUMERIC, INTEGER, INTEGER)",
    "DROP TRIGGER IF EXISTS trg_jobs_salary_range ON jobs",
    "DROP FUNCTION IF EXISTS hr_check_job_range()",
    "DROP TRIGGER IF EXISTS trg_employees_job_check ON employees",
    "DROP FUNCTION IF EXISTS hr_check_employee_job()",
]

_SQLITE_DROP = [
    f"DROP TRIGGER IF EXISTS {name}_{suffix}"
    for name in ("trg_employees_job", "trg_employees_salary", "trg_jobs_salary_range")
    for suffix in ("insert", "update")
]


def install_business_rules(connection: Connection) -> None:
    dialect = connection.dialect.name
    if dialect == "sqlite":
        statements = _sqlite_statements()
    elif dialect == "postgresql":
        statements = _POSTGRES_STATEMENTS
    else:
        logger.warning("No business rules available for dialect %s; skipping", dialect)
        return
    for statement in statements:
        connection.exec_driver_sql(statement)
    logger.info("Installed %d business rule statements (%s)", len(statements), dialect)


def drop_business_rules(connection: Connection) -> None:
    dialect = connection.dialect.name
    statements = {"sqlite": _SQLITE_DROP, "postgresql": _POSTGRES_DROP}.get(dialect, [])
    for statement in statements:
        connection.exec_driver_sql(statement)
