"""Validation rules of app.core.config.Settings."""

import unittest

from pydantic import ValidationError

from app.core.config import Settings
from app.core.security import TokenConfig


def _settings(**overrides: object) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestSettingsDefaults(unittest.TestCase):
    def test_token_ttl_defaults_to_ten_hours(self) -> None:
        cfg = Settings.model_fields["JWT_EXPIRE_SECONDS"].default
        self.assertEqual(cfg, 36000)

    def test_token_config_from_settings(self) -> None:
        cfg = _settings(JWT_SECRET="s3cret", JWT_EXPIRE_SECONDS=600, EMAIL_TOKEN_EXPIRE_HOURS=2)
        token_cfg = TokenConfig.from_settings(cfg)
        self.assertEqual(token_cfg.secret, "s3cret")
        self.assertEqual(token_cfg.ttl_seconds, 600)
        self.assertEqual(token_cfg.email_token_ttl.total_seconds(), 7200)

    def test_email_token_expiry_disabled_when_unset(self) -> None:
        token_cfg = TokenConfig.from_settings(_settings())
        self.assertIsNone(token_cfg.email_token_ttl)


class TestSettingsValidation(unittest.TestCase):
    def test_database_url_schemes(self) -> None:
        for url in ("postgresql://u:p@h/db", "postgresql+psycopg2://u:p@h/db", "sqlite://"):
            self.assertEqual(_settings(DATABASE_URL=url).DATABASE_URL, url)
        for url in ("", "mysql://u:p@h/db", "mongodb://localhost"):
            with self.assertRaises(ValidationError):
                _settings(DATABASE_URL=url)

    def test_jwt_secret_must_be_non_empty(self) -> None:
        for secret in ("", "   "):
            with self.assertRaises(ValidationError):
                _settings(JWT_SECRET=secret)

    def test_jwt_algorithm_must_be_hmac(self) -> None:
        self.assertEqual(_settings(JWT_ALGORITHM="hs512").JWT_ALGORITHM, "HS512")
        for alg in ("RS256", "none", ""):
            with self.assertRaises(ValidationError):
                _settings(JWT_ALGORITHM=alg)

    def test_numeric_bounds(self) -> None:
        bad = [
            {"JWT_EXPIRE_SECONDS": 10},
            {"BCRYPT_ROUNDS": 3},
            {"BCRYPT_ROUNDS": 16},
            {"EMAIL_TOKEN_BYTES": 8},
            {"EMAIL_TOKEN_EXPIRE_HOURS": 0},
            {"DB_POOL_TIMEOUT_SEC": 0},
            {"DB_STATEMENT_TIMEOUT_MS": -1},
        ]
        for overrides in bad:
            with self.subTest(overrides=overrides):
                with self.assertRaises(ValidationError):
                    _settings(**overrides)

    def test_log_level_normalized(self) -> None:
        self.assertEqual(_settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")
        with self.assertRaises(ValidationError):
            _settings(LOG_LEVEL="chatty")


if __name__ == "__main__":
    unittest.main()
