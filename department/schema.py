from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from employee.schema import EmployeeRow

CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DepartmentRow(BaseModel):
    department_id: int
    department_name: str
    manager_id: Optional[int] = None
    manager_name: Optional[str] = None
    location: Optional[str] = None
    employee_count: int = 0
    model_config = CAMEL


class DepartmentDetailRow(BaseModel):
    department_id: int
    department_name: str
    manager_id: Optional[int] = None
    manager_name: Optional[str] = None
    location_id: Optional[int] = None
    street_address: Optional[str] = None
    city: Optional[str] = None
    state_province: Optional[str] = None
    postal_code: Optional[str] = None
    country_name: Optional[str] = None
    model_config = CAMEL


class DepartmentList(BaseModel):
    data: list[DepartmentRow]


class DepartmentDetail(BaseModel):
    data: DepartmentDetailRow


class DepartmentEmployees(BaseModel):
    data: list[EmployeeRow]


class DepartmentStatsRow(BaseModel):
    department_id: int
    department_name: str
    employee_count: int
    average_salary: Optional[float] = None
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None
    total_salary_cost: Optional[float] = None
    managers_count: int = 0
    manager_name: Optional[str] = None
    location: Optional[str] = None
    model_config = CAMEL


class DepartmentSummary(BaseModel):
    total_departments: int
    total_employees: int
    overall_average_salary: Optional[float] = None
    total_payroll: Optional[float] = None
    model_config = CAMEL


class DepartmentStats(BaseModel):
    data: list[DepartmentStatsRow]
    summary: DepartmentSummary


# PUBLIC payload, what clients send
class DepartmentPayload(BaseModel):
    department_name: Optional[str] = None
    manager_id: Optional[int] = None
    location_id: Optional[int] = None
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class DepartmentCreated(BaseModel):
    message: str
    data: dict
