import unittest
from unittest.mock import MagicMock

from sqlalchemy import text

from core.database import Database, build_engine
from core.gateway import dialect_of, fetch_all, fetch_one, fetch_scalar


class DatabaseTests(unittest.TestCase):
    def setUp(self):
        self.database = Database(build_engine("sqlite://"))

    def tearDown(self):
        self.database.dispose()

    def test_ping(self):
        self.assertTrue(self.database.ping())
        self.assertEqual(self.database.dialect, "sqlite")

    def test_foreign_keys_enabled_for_sqlite(self):
        with self.database.session() as db:
            self.assertEqual(fetch_scalar(db, text("PRAGMA foreign_keys")), 1)
            self.assertEqual(dialect_of(db), "sqlite")

    def test_result_shapes(self):
        with self.database.session() as db:
            rows = fetch_all(db, text("SELECT 1 AS a UNION ALL SELECT 2"))
            self.assertEqual(rows, [{"a": 1}, {"a": 2}])
            self.assertEqual(fetch_one(db, text("SELECT 'x' AS v")), {"v": "x"})
            self.assertIsNone(fetch_one(db, text("SELECT 1 WHERE 1 = 0")))

    def test_session_rolled_back_and_released_on_error(self):
        session = MagicMock()
        self.database.session_factory = lambda: session
        with self.assertRaises(RuntimeError):
            with self.database.session():
                raise RuntimeError("boom")
        session.rollback.assert_called_once()
        session.close.assert_called_once()

    def test_failed_release_is_logged_not_raised(self):
        session = MagicMock()
        session.close.side_effect = RuntimeError("socket closed")
        self.database.session_factory = lambda: session
        with self.assertLogs("core.database", level="ERROR") as logs:
            with self.database.session():
                pass
        self.assertIn("Failed to release database session", logs.output[0])


if __name__ == "__main__":
    unittest.main()
