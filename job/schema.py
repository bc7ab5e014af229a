from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from employee.schema import EmployeeRow

CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JobRow(BaseModel):
    job_id: str
    job_title: str
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None
    employee_count: Optional[int] = None
    model_config = CAMEL


class JobList(BaseModel):
    data: list[JobRow]


class JobDetail(BaseModel):
    data: JobRow


class JobEmployees(BaseModel):
    data: list[EmployeeRow]


class JobDescription(BaseModel):
    job_id: str
    job_description: str
    model_config = CAMEL


class JobDescriptionOut(BaseModel):
    data: JobDescription


class JobStatsRow(BaseModel):
    job_id: str
    job_title: str
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None
    employee_count: int
    actual_average_salary: Optional[float] = None
    actual_min_salary: Optional[float] = None
    actual_max_salary: Optional[float] = None
    total_salary_cost: Optional[float] = None
    salary_range_utilization_pct: Optional[float] = None
    model_config = CAMEL


class JobSummary(BaseModel):
    total_jobs: int
    active_jobs: int
    vacant_jobs: int
    average_min_salary: Optional[float] = None
    average_max_salary: Optional[float] = None
    lowest_min_salary: Optional[float] = None
    highest_max_salary: Optional[float] = None
    model_config = CAMEL


class JobStats(BaseModel):
    job_stats: list[JobStatsRow]
    summary: JobSummary
    model_config = CAMEL


# PUBLIC payload; on update the id comes from the path
class JobPayload(BaseModel):
    job_id: Optional[str] = None
    job_title: Optional[str] = None
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid", allow_inf_nan=False
    )


class JobCreated(BaseModel):
    message: str
    data: dict
