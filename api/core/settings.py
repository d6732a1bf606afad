"""
Environment-driven settings.

Values are read on every call so tests can tweak `os.environ` freely.
A local `.env` file is loaded once at import time if present.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CORS_ORIGINS = ("http://localhost:5173",)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return url


def database_ssl_mode() -> str:
    return os.environ.get("DATABASE_SSL", "disable").strip().lower() or "disable"


def db_pool_min_size() -> int:
    return _env_int("DB_POOL_MIN_SIZE", 1)


def db_pool_max_size() -> int:
    return _env_int("DB_POOL_MAX_SIZE", 5)


def db_command_timeout() -> int:
    return _env_int("DB_COMMAND_TIMEOUT", 30)


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    # Browsers send Origin without a trailing slash.
    origins = [item.strip().rstrip("/") for item in raw.split(",")]
    return [origin for origin in origins if origin]


def app_env() -> str:
    return os.environ.get("APP_ENV", "development").strip().lower() or "development"


def is_development() -> bool:
    return app_env() == "development"


def app_version() -> str:
    return os.environ.get("APP_VERSION", "1.0.0").strip() or "1.0.0"


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def port() -> int:
    return _env_int("PORT", 5000)
