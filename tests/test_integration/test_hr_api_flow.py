import unittest

from fastapi.testclient import TestClient

from core.config_loader import Settings
from main import create_app
from hr_fixtures import HRDatabaseTestCase


NEW_HIRE = {
    "firstName": "Diana",
    "lastName": "Lorentz",
    "email": "DLORENTZ",
    "phoneNumber": "590.423.5567",
    "jobId": "IT_PROG",
    "salary": 4200,
    "managerId": 103,
    "departmentId": 60,
}


class HRApiFlowTests(HRDatabaseTestCase):
    def setUp(self):
        super().setUp()
        settings = Settings(ENVIRONMENT="test", DATABASE_URL="sqlite://")
        self.app = create_app(settings=settings, database=self.database)
        self.client = TestClient(self.app)

    def employee_count(self):
        return self.client.get("/api/employees").json()["total"]

    # --- service endpoints ---

    def test_health_does_not_need_database(self):
        for path in ("/health", "/api/health"):
            resp = self.client.get(path)
            self.assertEqual(resp.status_code, 200)
            body = resp.json()
            self.assertEqual(body["status"], "OK")
            self.assertEqual(body["environment"], "test")
            self.assertIn("timestamp", body)

    def test_capabilities_report_search_endpoints(self):
        resp = self.client.get("/api/capabilities")
        self.assertEqual(resp.json(), {"search": {"employees": True, "departments": True, "jobs": True}})

    # --- employees ---

    def test_create_then_read_round_trip(self):
        resp = self.client.post("/api/employees", json=NEW_HIRE)
        self.assertEqual(resp.status_code, 201, resp.text)
        found = self.client.get("/api/employees/search", params={"q": "DLORENTZ"}).json()["data"]
        self.assertEqual(len(found), 1)
        emp_id = found[0]["employeeId"]

        row = self.client.get(f"/api/employees/{emp_id}").json()["data"]
        for key in ("firstName", "lastName", "email", "phoneNumber", "jobId", "managerId", "departmentId"):
            self.assertEqual(row[key], NEW_HIRE[key])
        self.assertEqual(row["salary"], 4200)

    def test_missing_required_field_inserts_nothing(self):
        body = {k: v for k, v in NEW_HIRE.items() if k != "lastName"}
        resp = self.client.post("/api/employees", json=body)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["field"], "lastName")
        self.assertEqual(self.employee_count(), 4)

    def test_overlong_first_name_rejected(self):
        resp = self.client.post("/api/employees", json={**NEW_HIRE, "firstName": "x" * 21})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "First name cannot exceed 20 characters")
        self.assertEqual(self.employee_count(), 4)

    def test_salary_and_commission_bounds(self):
        for body in ({**NEW_HIRE, "salary": -0.01}, {**NEW_HIRE, "commissionPct": 1.5}):
            with self.subTest(body=body):
                self.assertEqual(self.client.post("/api/employees", json=body).status_code, 400)
        self.assertEqual(self.employee_count(), 4)

    def test_non_finite_salary_rejected(self):
        body = '{"firstName": "Diana", "lastName": "Lorentz", "email": "DLORENTZ", "jobId": "IT_PROG", "salary": NaN}'
        resp = self.client.post("/api/employees", content=body, headers={"Content-Type": "application/json"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["kind"], "validation_error")
        self.assertEqual(resp.json()["field"], "salary")
        self.assertEqual(self.employee_count(), 4)

    def test_invalid_manager_rejected(self):
        resp = self.client.post("/api/employees", json={**NEW_HIRE, "managerId": 999})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {
            "detail": "Invalid manager ID - employee not found",
            "kind": "reference_not_found",
            "field": "managerId",
        })

    def test_duplicate_email_conflict(self):
        resp = self.client.post("/api/employees", json={**NEW_HIRE, "email": "SKING"})
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["kind"], "conflict")

    def test_hire_salary_outside_job_range(self):
        resp = self.client.post("/api/employees/hire", json={**NEW_HIRE, "salary": 50000})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {
            "detail": "Salary out of range for the selected job position",
            "kind": "business_rule_violation",
        })
        self.assertEqual(self.employee_count(), 4)

    def test_hire_within_range(self):
        resp = self.client.post("/api/employees/hire", json=NEW_HIRE)
        self.assertEqual(resp.status_code, 201, resp.text)
        self.assertEqual(self.employee_count(), 5)

    def test_put_is_idempotent(self):
        body = {**NEW_HIRE, "email": "BERNST"}
        self.assertEqual(self.client.put("/api/employees/104", json=body).status_code, 200)
        first = self.client.get("/api/employees/104").json()
        self.assertEqual(self.client.put("/api/employees/104", json=body).status_code, 200)
        self.assertEqual(self.client.get("/api/employees/104").json(), first)
        self.assertEqual(first["data"]["hireDate"], "2007-05-21")

    def test_missing_ids_are_404(self):
        self.assertEqual(self.client.get("/api/employees/999").status_code, 404)
        self.assertEqual(self.client.put("/api/employees/999", json=NEW_HIRE).status_code, 404)
        self.assertEqual(self.client.delete("/api/employees/999").status_code, 404)
        self.assertEqual(self.client.delete("/api/departments/999").status_code, 404)
        self.assertEqual(self.client.delete("/api/jobs/NOPE").status_code, 404)

    def test_rejections_are_logged(self):
        with self.assertLogs("core.handlers", level="INFO") as logs:
            self.client.post("/api/employees", json={**NEW_HIRE, "managerId": 999})
            self.client.delete("/api/departments/60")
            self.client.get("/api/employees/999")
        output = "\n".join(logs.output)
        self.assertIn("POST /api/employees rejected (reference_not_found)", output)
        self.assertIn("DELETE /api/departments/60 rejected (still_referenced)", output)
        self.assertIn("GET /api/employees/999 rejected (not_found)", output)

    def test_pagination(self):
        body = self.client.get("/api/employees", params={"page": 2, "limit": 3}).json()
        self.assertEqual(body["pagination"], {"page": 2, "limit": 3, "total": 4, "totalPages": 2})
        self.assertEqual(len(body["data"]), 1)

    # --- departments ---

    def test_delete_department_with_employees_keeps_row(self):
        resp = self.client.delete("/api/departments/60")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Cannot delete department with active employees")
        self.assertEqual(self.client.get("/api/departments/60").status_code, 200)

    def test_department_name_too_long(self):
        resp = self.client.post("/api/departments", json={"departmentName": "x" * 31})
        self.assertEqual(resp.status_code, 400)
        names = [d["departmentName"] for d in self.client.get("/api/departments").json()["data"]]
        self.assertNotIn("x" * 31, names)

    def test_department_lifecycle(self):
        resp = self.client.post("/api/departments", json={"departmentName": "Marketing", "locationId": 1700})
        self.assertEqual(resp.status_code, 201, resp.text)
        dept = self.client.get("/api/departments/search", params={"q": "market"}).json()["data"][0]
        dept_id = dept["departmentId"]
        self.assertEqual(dept["employeeCount"], 0)

        resp = self.client.put(f"/api/departments/{dept_id}", json={"departmentName": "Marketing EU", "managerId": 145})
        self.assertEqual(resp.status_code, 200, resp.text)
        detail = self.client.get(f"/api/departments/{dept_id}").json()["data"]
        self.assertEqual(detail["managerName"], "John Russell")
        self.assertIsNone(detail["locationId"])

        self.assertEqual(self.client.delete(f"/api/departments/{dept_id}").status_code, 200)
        self.assertEqual(self.client.get(f"/api/departments/{dept_id}").status_code, 404)

    # --- jobs ---

    def test_job_routines(self):
        resp = self.client.post("/api/jobs/new-job", json={
            "jobId": "AC_MGR", "jobTitle": "Accounting Manager", "minSalary": 8200, "maxSalary": 16000,
        })
        self.assertEqual(resp.status_code, 201, resp.text)

        resp = self.client.put("/api/jobs/AC_MGR/update-info", json={
            "jobTitle": "Finance Manager", "minSalary": 8200, "maxSalary": 16000,
        })
        self.assertEqual(resp.status_code, 200, resp.text)

        resp = self.client.get("/api/jobs/AC_MGR/description")
        self.assertEqual(resp.json(), {"data": {"jobId": "AC_MGR", "jobDescription": "Finance Manager"}})

    def test_duplicate_job_id_conflict(self):
        resp = self.client.post("/api/jobs", json={"jobId": "IT_PROG", "jobTitle": "Programmer"})
        self.assertEqual(resp.status_code, 409)

    def test_delete_job_guard(self):
        self.assertEqual(self.client.delete("/api/jobs/IT_PROG").status_code, 400)
        self.assertEqual(self.client.delete("/api/jobs/HR_REP").status_code, 200)
        self.assertEqual(self.client.get("/api/jobs/HR_REP").status_code, 404)

    def test_job_employees(self):
        rows = self.client.get("/api/jobs/IT_PROG/employees").json()["data"]
        self.assertEqual([r["lastName"] for r in rows], ["Ernst", "Hunold"])


if __name__ == "__main__":
    unittest.main()
