"""Unit tests for app.core.config: env-driven settings and their validation rules."""

import unittest

from pydantic import ValidationError

from app.core.config import DEFAULT_JWT_SECRET, Settings


class TestSettings(unittest.TestCase):
    def test_prod_requires_non_default_secret(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(APP_ENV="prod", JWT_SECRET=DEFAULT_JWT_SECRET, DATABASE_URL="sqlite://")

    def test_prod_with_real_secret(self) -> None:
        settings = Settings(APP_ENV="prod", JWT_SECRET="s3cr3t-value", DATABASE_URL="sqlite://")
        self.assertTrue(settings.cookie_secure)

    def test_dev_allows_default_secret(self) -> None:
        settings = Settings(APP_ENV="dev", JWT_SECRET=DEFAULT_JWT_SECRET, DATABASE_URL="sqlite://")
        self.assertFalse(settings.cookie_secure)

    def test_rejects_unsupported_database_url(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="mysql://root@localhost/users")

    def test_rejects_blank_secret(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_SECRET="   ", DATABASE_URL="sqlite://")

    def test_log_level_normalized(self) -> None:
        self.assertEqual(Settings(LOG_LEVEL="debug", DATABASE_URL="sqlite://").LOG_LEVEL, "DEBUG")
        with self.assertRaises(ValidationError):
            Settings(LOG_LEVEL="loud", DATABASE_URL="sqlite://")

    def test_cors_origins_parsed(self) -> None:
        settings = Settings(
            APP_ENV="test",
            CORS_ORIGINS="https://a.example.org, https://b.example.org ,",
            DATABASE_URL="sqlite://",
        )
        self.assertEqual(settings.cors_origins, ["https://a.example.org", "https://b.example.org"])

    def test_cors_defaults(self) -> None:
        self.assertEqual(Settings(APP_ENV="dev", CORS_ORIGINS="", DATABASE_URL="sqlite://").cors_origins, ["*"])
        self.assertEqual(Settings(APP_ENV="test", CORS_ORIGINS="", DATABASE_URL="sqlite://").cors_origins, [])

    def test_cookie_max_age_follows_token_lifetime(self) -> None:
        settings = Settings(JWT_EXPIRE_MINUTES=30, DATABASE_URL="sqlite://")
        self.assertEqual(settings.cookie_max_age, 1800)


if __name__ == "__main__":
    unittest.main()
