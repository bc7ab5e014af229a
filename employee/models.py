from __future__ import annotations
from datetime import date
from decimal import Decimal
from typing import Optional
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import CheckConstraint, Date, ForeignKey, Numeric, String
from core.database import Base

class Employee(Base):
    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(primary_key=True)
    first_name: Mapped[str] = mapped_column(String(20), nullable=False)
    last_name: Mapped[str] = mapped_column(String(25), nullable=False)
    email: Mapped[str] = mapped_column(String(25), nullable=False, unique=True)
    phone_number: Mapped[Optional[str]] = mapped_column(String(20))
    hire_date: Mapped[date] = mapped_column(Date, nullable=False)
    job_id: Mapped[str] = mapped_column(ForeignKey("jobs.id"), nullable=False, index=True)
    salary: Mapped[Optional[Decimal]] = mapped_column(Numeric(8, 2))
    commission_pct: Mapped[Optional[Decimal]] = mapped_column(Numeric(2, 2))

    # self reference; a manager is just another employee
    manager_id: Mapped[Optional[int]] = mapped_column(ForeignKey("employees.id"), index=True)
    department_id: Mapped[Optional[int]] = mapped_column(ForeignKey("departments.id"), index=True)

    __table_args__ = (
        CheckConstraint("salary >= 0", name="ck_employees_salary_min"),
        CheckConstraint("commission_pct >= 0", name="ck_employees_commission_min"),
    )
