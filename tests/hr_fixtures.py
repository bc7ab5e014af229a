import unittest
from datetime import date

from sqlalchemy import insert, update

from core.business_rules import install_business_rules
from core.database import Base, Database, build_engine
from department.models import Department
from employee.models import Employee
from job.models import Job
from location.models import Country, Location
import models_bootstrap  # noqa: F401


def seed(db):
    """Small slice of the classic HR sample data."""
    db.execute(insert(Country), [{"id": "US", "name": "United States of America"}])
    db.execute(insert(Location), [{
        "id": 1700, "street_address": "2004 Charade Rd", "postal_code": "98199",
        "city": "Seattle", "state_province": "Washington", "country_id": "US",
    }])
    db.execute(insert(Job), [
        {"id": "AD_PRES", "title": "President", "min_salary": 20080, "max_salary": 40000},
        {"id": "IT_PROG", "title": "Programmer", "min_salary": 4000, "max_salary": 10000},
        {"id": "SA_REP", "title": "Sales Representative", "min_salary": 6000, "max_salary": 12008},
        {"id": "HR_REP", "title": "Human Resources Representative", "min_salary": 4000, "max_salary": 9000},
    ])
    db.execute(insert(Department), [
        {"id": 90, "name": "Executive", "location_id": 1700},
        {"id": 60, "name": "IT", "location_id": 1700},
        {"id": 80, "name": "Sales", "location_id": 1700},
        {"id": 110, "name": "Payroll", "location_id": None},
    ])
    db.execute(insert(Employee), [
        {"id": 100, "first_name": "Steven", "last_name": "King", "email": "SKING",
         "phone_number": "515.123.4567", "hire_date": date(2003, 6, 17), "job_id": "AD_PRES",
         "salary": 24000, "commission_pct": None, "manager_id": None, "department_id": 90},
        {"id": 103, "first_name": "Alexander", "last_name": "Hunold", "email": "AHUNOLD",
         "phone_number": "590.423.4567", "hire_date": date(2006, 1, 3), "job_id": "IT_PROG",
         "salary": 9000, "commission_pct": None, "manager_id": 100, "department_id": 60},
        {"id": 104, "first_name": "Bruce", "last_name": "Ernst", "email": "BERNST",
         "phone_number": "590.423.4568", "hire_date": date(2007, 5, 21), "job_id": "IT_PROG",
         "salary": 6000, "commission_pct": None, "manager_id": 103, "department_id": 60},
        {"id": 145, "first_name": "John", "last_name": "Russell", "email": "JRUSSEL",
         "phone_number": None, "hire_date": date(2004, 10, 1), "job_id": "SA_REP",
         "salary": 11000, "commission_pct": 0.4, "manager_id": 100, "department_id": 80},
    ])
    for dept_id, manager_id in ((90, 100), (60, 103), (80, 145)):
        db.execute(update(Department).where(Department.id == dept_id).values(manager_id=manager_id))
    db.commit()


class HRDatabaseTestCase(unittest.TestCase):
    """Fresh in-memory database with the business-rule triggers and sample rows."""

    def setUp(self):
        self.engine = build_engine("sqlite://")
        Base.metadata.create_all(self.engine)
        with self.engine.begin() as conn:
            install_business_rules(conn)
        self.database = Database(self.engine)
        self.db = self.database.session_factory()
        seed(self.db)

    def tearDown(self):
        self.db.close()
        self.engine.dispose()
