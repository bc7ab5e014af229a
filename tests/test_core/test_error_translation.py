import unittest
from types import SimpleNamespace as Obj

from sqlalchemy.exc import IntegrityError, OperationalError

from core.errors import (
    ErrorKind,
    InternalError,
    VENDOR_ERROR_KINDS,
    classify,
    translate_db_error,
    vendor_code,
    vendor_message,
)


class FakePgError(Exception):
    def __init__(self, sqlstate, message):
        super().__init__(message)
        self.sqlstate = sqlstate
        self.diag = Obj(message_primary=message)


class FakeSqliteError(Exception):
    def __init__(self, message, errorname=None):
        super().__init__(message)
        if errorname:
            self.sqlite_errorname = errorname


class FakeOracleError(Exception):
    def __init__(self, code, message):
        super().__init__(Obj(code=code, message=message))
        self.text = message

    def __str__(self):
        return self.text


class VendorCodeTests(unittest.TestCase):
    def test_postgres_sqlstate(self):
        self.assertEqual(vendor_code("postgresql", FakePgError("23505", "dup")), "23505")

    def test_sqlite_errorname(self):
        orig = FakeSqliteError("UNIQUE constraint failed: employees.email", "SQLITE_CONSTRAINT_UNIQUE")
        self.assertEqual(vendor_code("sqlite", orig), "SQLITE_CONSTRAINT_UNIQUE")

    def test_sqlite_falls_back_to_message(self):
        orig = FakeSqliteError("FOREIGN KEY constraint failed")
        self.assertEqual(vendor_code("sqlite", orig), "SQLITE_CONSTRAINT_FOREIGNKEY")

    def test_mysql_errno(self):
        self.assertEqual(vendor_code("mysql", Exception(1062, "Duplicate entry")), "1062")

    def test_oracle_code(self):
        self.assertEqual(vendor_code("oracle", FakeOracleError(2291, "ORA-02291: parent key not found")), "2291")

    def test_unknown_dialect(self):
        self.assertIsNone(vendor_code("mssql", Exception("boom")))


class ClassifyTests(unittest.TestCase):
    def test_same_meaning_across_dialects(self):
        self.assertIs(classify("postgresql", FakePgError("23505", "dup")), ErrorKind.CONFLICT)
        self.assertIs(classify("mysql", Exception(1062, "dup")), ErrorKind.CONFLICT)
        self.assertIs(classify("oracle", FakeOracleError(1, "ORA-00001: unique constraint")), ErrorKind.CONFLICT)
        self.assertIs(
            classify("sqlite", FakeSqliteError("UNIQUE constraint failed", "SQLITE_CONSTRAINT_UNIQUE")),
            ErrorKind.CONFLICT,
        )

    def test_oracle_application_error_range(self):
        orig = FakeOracleError(20001, "ORA-20001: Salary out of range")
        self.assertIs(classify("oracle", orig), ErrorKind.BUSINESS_RULE)

    def test_unmapped_code_is_internal(self):
        self.assertIs(classify("postgresql", FakePgError("40001", "serialization")), ErrorKind.INTERNAL)

    def test_every_table_entry_has_known_dialect(self):
        dialects = {dialect for dialect, _ in VENDOR_ERROR_KINDS}
        self.assertEqual(dialects, {"postgresql", "sqlite", "mysql", "oracle"})


class VendorMessageTests(unittest.TestCase):
    def test_postgres_primary_message(self):
        self.assertEqual(vendor_message(FakePgError("P0001", "Invalid job ID specified")), "Invalid job ID specified")

    def test_mysql_second_arg(self):
        self.assertEqual(vendor_message(Exception(1644, "Salary out of range")), "Salary out of range")

    def test_oracle_prefix_stripped(self):
        orig = FakeOracleError(20002, "ORA-20002: Salary out of range\nORA-06512: at line 5")
        self.assertEqual(vendor_message(orig), "Salary out of range")


class TranslateTests(unittest.TestCase):
    def _wrap(self, orig, cls=IntegrityError):
        return cls("INSERT INTO employees ...", {}, orig)

    def test_call_site_message_used_for_kind(self):
        exc = self._wrap(FakePgError("23505", "duplicate key"))
        err = translate_db_error(exc, "postgresql", action="create employee",
                                 messages={ErrorKind.CONFLICT: "Employee with this email already exists"})
        self.assertIs(err.kind, ErrorKind.CONFLICT)
        self.assertEqual(err.status_code, 409)
        self.assertEqual(err.message, "Employee with this email already exists")

    def test_default_message_when_call_site_is_silent(self):
        err = translate_db_error(self._wrap(FakePgError("22001", "too long")), "postgresql", action="update job")
        self.assertIs(err.kind, ErrorKind.VALUE_TOO_LONG)
        self.assertEqual(err.status_code, 400)
        self.assertTrue(err.message)

    def test_business_rule_passes_vendor_text_through(self):
        exc = self._wrap(FakePgError("P0001", "Salary out of range for the selected job position"))
        err = translate_db_error(exc, "postgresql", action="hire employee",
                                 messages={ErrorKind.BUSINESS_RULE: "ignored"})
        self.assertEqual(err.message, "Salary out of range for the selected job position")

    def test_unknown_error_is_internal_and_logged(self):
        exc = self._wrap(FakePgError("08006", "connection failure"), cls=OperationalError)
        with self.assertLogs("core.errors", level="ERROR") as logs:
            err = translate_db_error(exc, "postgresql", action="delete job")
        self.assertIsInstance(err, InternalError)
        self.assertEqual(err.status_code, 500)
        self.assertEqual(err.message, "Failed to delete job")
        self.assertIn("delete job failed", logs.output[0])


if __name__ == "__main__":
    unittest.main()
