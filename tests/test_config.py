import os
import tempfile
import unittest
from unittest import mock

from config import Settings, build_state
from infrastructure.db.counter_repository_sqlite import SqliteIdCounter
from infrastructure.db.user_repository_sqlite import SqliteUserRepository


class ConfigTests(unittest.TestCase):
    def test_settings_read_environment(self):
        env = {"DB_BACKEND": "postgres", "POSTGRES_PORT": "6543", "LOG_LEVEL": "DEBUG"}
        with mock.patch.dict(os.environ, env, clear=True):
            settings = Settings()
        self.assertEqual(settings.db_backend, "postgres")
        self.assertEqual(settings.postgres_params["port"], 6543)
        self.assertEqual(settings.log_level, "DEBUG")
        self.assertIsNone(settings.telegram_token)
        self.assertEqual(settings.db_path, "feeds.db")

    def test_build_state_for_sqlite(self):
        with tempfile.TemporaryDirectory() as tmp:
            settings = Settings(db_backend="sqlite", db_path=os.path.join(tmp, "f.db"))
            state = build_state(settings)
            self.assertIsInstance(state.counter, SqliteIdCounter)
            self.assertIsInstance(state.users, SqliteUserRepository)
            self.assertEqual(state.counter.next_id(), 0)

    def test_build_state_rejects_unknown_backend(self):
        with self.assertRaises(ValueError):
            build_state(Settings(db_backend="redis"))


if __name__ == "__main__":
    unittest.main()
