# reset_api/config.py

import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

# Get the base directory of the application
basedir = os.path.abspath(os.path.dirname(__file__))

# Finds the .env file in the project root and loads it.
# Variables already present in the environment take precedence.
load_dotenv(os.path.join(basedir, '..', '.env'))

DEFAULT_PORT = 5000
DEFAULT_HOST = '0.0.0.0'
DEFAULT_MONGODB_URI = 'mongodb://localhost:27017/passwordreset'
DEFAULT_DATABASE_NAME = 'passwordreset'
DEFAULT_MONGODB_TIMEOUT_MS = 5000
# Same body limit as the JSON parser of the original Node service (100kb)
DEFAULT_MAX_CONTENT_LENGTH = 100 * 1024


class ConfigError(ValueError):
    """Raised when an environment variable holds a value we cannot use."""
    pass


def _get(environ, name):
    """Returns the stripped value of `name`, or None if unset or blank."""
    value = environ.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _get_int(environ, name, default):
    value = _get(environ, name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}")


def _split_origins(value):
    if not value:
        return []
    return [origin.strip() for origin in value.split(',') if origin.strip()]


@dataclass(frozen=True)
class Settings:
    """
    Process-wide configuration, read once at startup.

    Instances are immutable: build one with `Settings.from_env()` and pass it
    to `create_app()`. Nothing else in the package reads `os.environ`.
    """
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    frontend_url: str = None
    allowed_origins: tuple = field(default_factory=tuple)
    mongodb_uri: str = DEFAULT_MONGODB_URI
    environment: str = 'development'
    log_level: str = 'INFO'
    mongodb_timeout_ms: int = DEFAULT_MONGODB_TIMEOUT_MS
    max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH

    @property
    def is_production(self):
        # Anything other than an exact 'production' is a development setup
        return self.environment == 'production'

    @classmethod
    def from_env(cls, environ=None):
        """
        Builds the settings from environment variables.

        Recognised variables:
            PORT, HOST, FRONTEND_URL, CORS_ALLOWED_ORIGINS, MONGODB_URI,
            NODE_ENV, LOG_LEVEL, MONGODB_TIMEOUT_MS, MAX_CONTENT_LENGTH

        FRONTEND_URL and CORS_ALLOWED_ORIGINS may both hold comma separated
        lists; together they form the CORS allow-list.

        Raises:
            ConfigError: If a numeric variable is not an integer.
        """
        if environ is None:
            environ = os.environ

        frontend_url = _get(environ, 'FRONTEND_URL')

        # Keep declaration order, drop duplicates
        origins = []
        for origin in _split_origins(frontend_url) + _split_origins(_get(environ, 'CORS_ALLOWED_ORIGINS')):
            if origin not in origins:
                origins.append(origin)

        return cls(
            port=_get_int(environ, 'PORT', DEFAULT_PORT),
            host=_get(environ, 'HOST') or DEFAULT_HOST,
            frontend_url=frontend_url,
            allowed_origins=tuple(origins),
            mongodb_uri=_get(environ, 'MONGODB_URI') or DEFAULT_MONGODB_URI,
            environment=_get(environ, 'NODE_ENV') or 'development',
            log_level=(_get(environ, 'LOG_LEVEL') or 'INFO').upper(),
            mongodb_timeout_ms=_get_int(environ, 'MONGODB_TIMEOUT_MS', DEFAULT_MONGODB_TIMEOUT_MS),
            max_content_length=_get_int(environ, 'MAX_CONTENT_LENGTH', DEFAULT_MAX_CONTENT_LENGTH),
        )
