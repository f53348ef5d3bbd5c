"""Unit tests for tvtracker.core.config field validation."""

import unittest

from pydantic import ValidationError

from tvtracker.core.config import Settings


def _settings(**overrides: object) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestDatabaseUrl(unittest.TestCase):
    def test_postgres_and_sqlite_accepted(self) -> None:
        self.assertEqual(
            _settings(DATABASE_URL=" postgresql+psycopg2://u:p@h/db ").DATABASE_URL,
            "postgresql+psycopg2://u:p@h/db",
        )
        self.assertEqual(_settings(DATABASE_URL="sqlite:///./t.db").DATABASE_URL, "sqlite:///./t.db")

    def test_other_scheme_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mysql://u:p@h/db")

    def test_empty_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="  ")


class TestTokenSettings(unittest.TestCase):
    def test_algorithm_normalized(self) -> None:
        self.assertEqual(_settings(JWT_ALGORITHM="hs512").JWT_ALGORITHM, "HS512")

    def test_asymmetric_algorithm_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_ALGORITHM="RS256")

    def test_blank_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="   ")


class TestMiscSettings(unittest.TestCase):
    def test_bcrypt_rounds_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(BCRYPT_ROUNDS=3)
        with self.assertRaises(ValidationError):
            _settings(BCRYPT_ROUNDS=17)
        self.assertEqual(_settings(BCRYPT_ROUNDS=10).BCRYPT_ROUNDS, 10)

    def test_api_prefix(self) -> None:
        self.assertEqual(_settings(API_PREFIX="").API_PREFIX, "")
        self.assertEqual(_settings(API_PREFIX="/api/").API_PREFIX, "/api")
        with self.assertRaises(ValidationError):
            _settings(API_PREFIX="api")

    def test_log_level(self) -> None:
        self.assertEqual(_settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")
        with self.assertRaises(ValidationError):
            _settings(LOG_LEVEL="chatty")


if __name__ == "__main__":
    unittest.main()
