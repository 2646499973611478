"""Configuration helpers."""
from __future__ import annotations

import os


class BaseConfig:
    """Default configuration that can be overridden per environment."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///tally.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # bcrypt work factor for new password hashes.
    BCRYPT_LOG_ROUNDS = int(os.environ.get("BCRYPT_LOG_ROUNDS", 10))

    # Returned by GET /config until a value has been stored.
    DEFAULT_VALUE_PER_CLICK = 0.5

    LOG_LEVEL = os.environ.get("TALLY_LOG_LEVEL", "INFO")
    PORT = int(os.environ.get("PORT", 3000))


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    BCRYPT_LOG_ROUNDS = 4
