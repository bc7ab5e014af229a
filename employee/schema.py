from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EmployeeRow(BaseModel):
    employee_id: int
    first_name: str
    last_name: str
    email: str
    phone_number: Optional[str] = None
    hire_date: Optional[date] = None
    salary: Optional[float] = None
    commission_pct: Optional[float] = None
    job_id: Optional[str] = None
    job_title: Optional[str] = None
    department_id: Optional[int] = None
    department_name: Optional[str] = None
    manager_id: Optional[int] = None
    manager_name: Optional[str] = None
    model_config = CAMEL


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
    model_config = CAMEL


class EmployeeList(BaseModel):
    data: list[EmployeeRow]
    total: int
    pagination: Optional[Pagination] = None
    model_config = CAMEL


class EmployeeSearchResult(BaseModel):
    data: list[EmployeeRow]


class EmployeeDetail(BaseModel):
    data: EmployeeRow


# PUBLIC payload, what clients send. Required fields are checked by the
# validators so that the first failing rule decides the error.
class EmployeePayload(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    hire_date: Optional[date] = None
    job_id: Optional[str] = None
    salary: Optional[float] = None
    commission_pct: Optional[float] = None
    manager_id: Optional[int] = None
    department_id: Optional[int] = None
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid", allow_inf_nan=False
    )


class EmployeeCreated(BaseModel):
    message: str
    data: dict


class GroupSalaryStats(BaseModel):
    name: Optional[str] = None
    employee_count: int
    average_salary: Optional[float] = None
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None
    total_salary: Optional[float] = None
    model_config = CAMEL


class OverallEmployeeStats(BaseModel):
    total_employees: int
    overall_average_salary: Optional[float] = None
    overall_min_salary: Optional[float] = None
    overall_max_salary: Optional[float] = None
    total_payroll: Optional[float] = None
    top_level_managers: int
    employees_with_commission: int
    model_config = CAMEL


class EmployeeStats(BaseModel):
    department_stats: list[GroupSalaryStats]
    job_stats: list[GroupSalaryStats]
    overall_stats: OverallEmployeeStats
    model_config = CAMEL
