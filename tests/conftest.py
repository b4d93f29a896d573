"""Test environment: set before any app module reads settings."""

import os

os.environ.setdefault("APP_ENV", "dev")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")
# Cheapest bcrypt cost so password hashing does not dominate test time.
os.environ.setdefault("BCRYPT_ROUNDS", "4")
