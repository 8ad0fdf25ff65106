"""
Configuration classes selected by name in create_app().

Values come from the environment (a .env file is loaded by app.py).
"""

import os
from datetime import timedelta


def _env_int(name, default):
    return int(os.environ.get(name, default))


class Config:
    """Settings shared by every environment."""

    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    APP_NAME = 'Lesson Studio'
    APP_VERSION = '1.0.0'
    TIMEZONE = os.environ.get('TIMEZONE', 'Asia/Tokyo')

    # Single operator account; only its hash is kept on app.config
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD', '')

    # Spreadsheet web-app endpoint. The token travels as `auth` on every call.
    BACKEND_URL = os.environ.get('BACKEND_URL', '')
    BACKEND_AUTH_TOKEN = os.environ.get('BACKEND_AUTH_TOKEN') or ADMIN_PASSWORD
    BACKEND_TIMEOUT = _env_int('BACKEND_TIMEOUT', 30)
    SNAPSHOT_MAX_AGE_SECONDS = _env_int('SNAPSHOT_MAX_AGE_SECONDS', 60)

    WTF_CSRF_ENABLED = True
    WTF_CSRF_TIME_LIMIT = 3600
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_SECURE = False
    PERMANENT_SESSION_LIFETIME = timedelta(hours=_env_int('SESSION_TIMEOUT_HOURS', 8))


class DevelopmentConfig(Config):
    DEBUG = True
    TESTING = False
    WTF_CSRF_SSL_STRICT = False


class ProductionConfig(Config):
    """Served behind gunicorn; cookies are HTTPS-only unless told otherwise."""

    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = os.environ.get('SESSION_COOKIE_SECURE', 'true').lower() == 'true'
    WTF_CSRF_SSL_STRICT = SESSION_COOKIE_SECURE
    PREFERRED_URL_SCHEME = 'https' if SESSION_COOKIE_SECURE else 'http'

    REQUIRED_ENV = ('ADMIN_PASSWORD', 'BACKEND_URL')

    @classmethod
    def validate(cls) -> None:
        """Refuse to start without a strong secret and the backend settings."""
        secret_key = os.environ.get('SECRET_KEY', '')
        if len(secret_key) < 32:
            raise ValueError("SECRET_KEY must be set to at least 32 characters in production")
        missing = [name for name in cls.REQUIRED_ENV if not os.environ.get(name)]
        if missing:
            raise ValueError(f"Missing production environment variables: {', '.join(missing)}")


class TestConfig(Config):
    TESTING = True
    DEBUG = True
    WTF_CSRF_ENABLED = False
    SECRET_KEY = 'test-secret-key'
    ADMIN_PASSWORD = 'test-password'
    BACKEND_URL = 'https://backend.invalid/exec'
    BACKEND_AUTH_TOKEN = 'test-password'
    SNAPSHOT_MAX_AGE_SECONDS = 300


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'test': TestConfig,
    'default': DevelopmentConfig,
}
