"""
Configuration objects for the local library application.

Values are read from the environment once, when this module is imported,
and handed to ``create_app``. Nothing else in the package reads
``os.environ``.
"""

import os


class Config:
    SECRET_KEY = os.environ.get("LOCALLIBRARY_SECRET") or "change-me-to-a-secure-random-value"
    # relative sqlite paths land in the instance folder
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL") or "sqlite:///locallibrary.db"
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.environ.get("LOCALLIBRARY_LOG_LEVEL", "INFO")
    # Include the underlying exception text on the error page
    SHOW_ERROR_DETAIL = False

    WTF_CSRF_ENABLED = True
    TALISMAN_FORCE_HTTPS = False
    CONTENT_SECURITY_POLICY = {
        'default-src': ["'self'"],
        'script-src': ["'self'", "https://cdn.jsdelivr.net", "https://code.jquery.com"],
        'style-src': ["'self'", "https://cdn.jsdelivr.net", "'unsafe-inline'"],
        'img-src': ["'self'", "data:"],
    }


class DevelopmentConfig(Config):
    LOG_LEVEL = os.environ.get("LOCALLIBRARY_LOG_LEVEL", "DEBUG")
    SHOW_ERROR_DETAIL = True


class ProductionConfig(Config):
    TALISMAN_FORCE_HTTPS = True


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "testing"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    WTF_CSRF_ENABLED = False
    SHOW_ERROR_DETAIL = True
    LOG_LEVEL = "WARNING"


CONFIGS = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config(name=None):
    """Return the config class for ``name`` (default: $LOCALLIBRARY_ENV)."""
    name = name or os.environ.get("LOCALLIBRARY_ENV", "development")
    try:
        return CONFIGS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown configuration '{name}'. Expected one of: {', '.join(CONFIGS)}")
