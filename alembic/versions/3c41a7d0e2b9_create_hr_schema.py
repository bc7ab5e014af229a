"""create hr schema

Revision ID: 3c41a7d0e2b9
Revises:
Create Date: 2026-10-17 09:12:31.418207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from core.business_rules import drop_business_rules, install_business_rules


# revision identifiers, used by Alembic.
revision: str = '3c41a7d0e2b9'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "countries",
        sa.Column("id", sa.String(length=2), primary_key=True),
        sa.Column("name", sa.String(length=40), nullable=False),
    )
    op.create_table(
        "locations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("street_address", sa.String(length=40), nullable=True),
        sa.Column("postal_code", sa.String(length=12), nullable=True),
        sa.Column("city", sa.String(length=30), nullable=False),
        sa.Column("state_province", sa.String(length=25), nullable=True),
        sa.Column("country_id", sa.String(length=2), sa.ForeignKey("countries.id"), nullable=True),
    )
    op.create_index("ix_locations_country_id", "locations", ["country_id"])
    op.create_table(
        "jobs",
        sa.Column("id", sa.String(length=10), primary_key=True),
        sa.Column("title", sa.String(length=35), nullable=False),
        sa.Column("min_salary", sa.Numeric(6, 0), nullable=True),
        sa.Column("max_salary", sa.Numeric(6, 0), nullable=True),
    )
    # manager FK is added once employees exists
    op.create_table(
        "departments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=30), nullable=False, unique=True),
        sa.Column("manager_id", sa.Integer(), nullable=True),
        sa.Column("location_id", sa.Integer(), sa.ForeignKey("locations.id"), nullable=True),
    )
    op.create_index("ix_departments_manager_id", "departments", ["manager_id"])
    op.create_index("ix_departments_location_id", "departments", ["location_id"])
    op.create_table(
        "employees",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("first_name", sa.String(length=20), nullable=False),
        sa.Column("last_name", sa.String(length=25), nullable=False),
        sa.Column("email", sa.String(length=25), nullable=False, unique=True),
        sa.Column("phone_number", sa.String(length=20), nullable=True),
        sa.Column("hire_date", sa.Date(), nullable=False),
        sa.Column("job_id", sa.String(length=10), sa.ForeignKey("jobs.id"), nullable=False),
        sa.Column("salary", sa.Numeric(8, 2), nullable=True),
        sa.Column("commission_pct", sa.Numeric(2, 2), nullable=True),
        sa.Column("manager_id", sa.Integer(), sa.ForeignKey("employees.id"), nullable=True),
        sa.Column("department_id", sa.Integer(), sa.ForeignKey("departments.id"), nullable=True),
        sa.CheckConstraint("salary >= 0", name="ck_employees_salary_min"),
        sa.CheckConstraint("commission_pct >= 0", name="ck_employees_commission_min"),
    )
    op.create_index("ix_employees_job_id", "employees", ["job_id"])
    op.create_index("ix_employees_manager_id", "employees", ["manager_id"])
    op.create_index("ix_employees_department_id", "employees", ["department_id"])

    with op.batch_alter_table("departments") as batch_op:
        batch_op.create_foreign_key("fk_departments_manager_id", "employees", ["manager_id"], ["id"])

    install_business_rules(op.get_bind())


def downgrade() -> None:
    drop_business_rules(op.get_bind())
    with op.batch_alter_table("departments") as batch_op:
        batch_op.drop_constraint("fk_departments_manager_id", type_="foreignkey")
    op.drop_table("employees")
    op.drop_table("departments")
    op.drop_table("jobs")
    op.drop_table("locations")
    op.drop_table("countries")
