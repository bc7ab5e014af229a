from __future__ import annotations
from decimal import Decimal
from typing import Optional
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Numeric, String
from core.database import Base

class Job(Base):
    __tablename__ = "jobs"

    # caller supplied, e.g. "IT_PROG"
    id: Mapped[str] = mapped_column(String(10), primary_key=True)
    title: Mapped[str] = mapped_column(String(35), nullable=False)
    min_salary: Mapped[Optional[Decimal]] = mapped_column(Numeric(6, 0))
    max_salary: Mapped[Optional[Decimal]] = mapped_column(Numeric(6, 0))
