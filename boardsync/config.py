import enum
import os
import secrets

from boardsync.constants import DEFAULT_REALTIME_URL, DEFAULT_TOKEN_MAX_AGE


class Config:
    """Base configuration."""

    SECRET_KEY = os.environ.get("BOARDSYNC_SECRET_KEY") or secrets.token_hex(24)
    JSON_SORT_KEYS = False
    SITE_NAME = "Board"
    REALTIME_URL = os.environ.get("BOARDSYNC_REALTIME_URL", DEFAULT_REALTIME_URL)
    TOKEN_MAX_AGE = int(os.environ.get("BOARDSYNC_TOKEN_MAX_AGE", DEFAULT_TOKEN_MAX_AGE))
    CORS_ALLOWED_ORIGINS = os.environ.get("BOARDSYNC_CORS_ORIGINS", "*")
    # Lets clients fetch channel tokens over HTTP without a login in front
    ALLOW_TOKEN_ISSUE = False


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True
    ALLOW_TOKEN_ISSUE = True


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""

    TESTING = True
    DEBUG = True
    SECRET_KEY = "testing-secret"
    ALLOW_TOKEN_ISSUE = True


class ConfigType(enum.Enum):
    DEVELOPMENT = DevelopmentConfig
    PRODUCTION = ProductionConfig
    TESTING = TestingConfig
