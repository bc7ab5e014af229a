from __future__ import annotations
from typing import Optional
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, ForeignKey
from core.database import Base

class Department(Base):
    __tablename__ = "departments"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(30), nullable=False, unique=True)

    # employees.department_id points back here, so this side is added after both tables exist
    manager_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("employees.id", use_alter=True, name="fk_departments_manager_id"), index=True
    )
    location_id: Mapped[Optional[int]] = mapped_column(ForeignKey("locations.id"), index=True)
