"""Configuration module for the dealerhub application."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlparse

from dotenv import load_dotenv

from dealerhub.core.exceptions import ConfigurationError

load_dotenv()

PLACEHOLDER_JWT_SECRET = "change_me_jwt_secret"


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Config:
    """Runtime configuration with validation."""

    APP_NAME: str
    APP_VERSION: str
    ENV: str
    DEBUG: bool
    DATABASE_URL: str
    DB_CONNECTIVITY_REQUIRED: bool
    JWT_SECRET: str
    JWT_ACCESS_TTL_MINUTES: int
    JWT_REFRESH_TTL_DAYS: int
    PASSWORD_PEPPER: str
    API_PREFIX: str
    LOG_LEVEL: str
    LOG_FILE: str
    CSV_BATCH_SIZE: int
    CSV_MAX_BYTES: int
    DOCUMENT_STORAGE_DIR: str
    DOCUMENT_MAX_BYTES: int
    DOCUMENT_MAX_PER_CONTRACT: int
    DEFAULT_UTC_OFFSET_HOURS: int
    CONTRACT_STRICT_TRANSITIONS: bool

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"


def _build_config(env: str | None = None) -> Config:
    resolved_env = (env or os.getenv("ENV", "development")).strip().lower()
    debug = _as_bool(os.getenv("DEBUG"), default=False)

    config = Config(
        APP_NAME="dealerhub",
        APP_VERSION=os.getenv("APP_VERSION", "1.0.0"),
        ENV=resolved_env,
        DEBUG=debug if resolved_env != "production" else False,
        DATABASE_URL=os.getenv("DATABASE_URL", "sqlite:///./dealerhub.db"),
        DB_CONNECTIVITY_REQUIRED=_as_bool(
            os.getenv("DB_CONNECTIVITY_REQUIRED"), default=(resolved_env == "production")
        ),
        JWT_SECRET=os.getenv("JWT_SECRET", PLACEHOLDER_JWT_SECRET),
        JWT_ACCESS_TTL_MINUTES=int(os.getenv("JWT_ACCESS_TTL_MINUTES", "15")),
        JWT_REFRESH_TTL_DAYS=int(os.getenv("JWT_REFRESH_TTL_DAYS", "7")),
        PASSWORD_PEPPER=os.getenv("PASSWORD_PEPPER", ""),
        API_PREFIX=os.getenv("API_PREFIX", "/api/v1"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        LOG_FILE=os.getenv("LOG_FILE", ""),
        CSV_BATCH_SIZE=int(os.getenv("CSV_BATCH_SIZE", "1000")),
        CSV_MAX_BYTES=int(os.getenv("CSV_MAX_BYTES", str(10 * 1024 * 1024))),
        DOCUMENT_STORAGE_DIR=os.getenv("DOCUMENT_STORAGE_DIR", "./storage/documents"),
        DOCUMENT_MAX_BYTES=int(os.getenv("DOCUMENT_MAX_BYTES", str(10 * 1024 * 1024))),
        DOCUMENT_MAX_PER_CONTRACT=int(os.getenv("DOCUMENT_MAX_PER_CONTRACT", "10")),
        DEFAULT_UTC_OFFSET_HOURS=int(os.getenv("DEFAULT_UTC_OFFSET_HOURS", "9")),
        CONTRACT_STRICT_TRANSITIONS=_as_bool(os.getenv("CONTRACT_STRICT_TRANSITIONS")),
    )
    _validate_config(config)
    return config


def _validate_database_url(database_url: str) -> None:
    parsed = urlparse(database_url)
    if parsed.scheme not in {"sqlite", "postgresql", "postgresql+psycopg2"}:
        raise ConfigurationError(
            "DATABASE_URL must use sqlite:// or postgresql:// style URL."
        )
    if parsed.scheme.startswith("postgresql") and not parsed.hostname:
        raise ConfigurationError("PostgreSQL DATABASE_URL is missing hostname.")


def _validate_config(config: Config) -> None:
    _validate_database_url(config.DATABASE_URL)

    if config.JWT_ACCESS_TTL_MINUTES < 1:
        raise ConfigurationError("JWT_ACCESS_TTL_MINUTES must be >= 1.")
    if config.JWT_REFRESH_TTL_DAYS < 1:
        raise ConfigurationError("JWT_REFRESH_TTL_DAYS must be >= 1.")
    if config.CSV_BATCH_SIZE < 1:
        raise ConfigurationError("CSV_BATCH_SIZE must be >= 1.")
    if config.CSV_MAX_BYTES < 1 or config.DOCUMENT_MAX_BYTES < 1:
        raise ConfigurationError("Upload size limits must be >= 1 byte.")
    if config.DOCUMENT_MAX_PER_CONTRACT < 1:
        raise ConfigurationError("DOCUMENT_MAX_PER_CONTRACT must be >= 1.")
    if not -12 <= config.DEFAULT_UTC_OFFSET_HOURS <= 14:
        raise ConfigurationError("DEFAULT_UTC_OFFSET_HOURS must be between -12 and 14.")
    if config.LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise ConfigurationError("LOG_LEVEL must be one of DEBUG/INFO/WARNING/ERROR/CRITICAL.")
    if config.is_production and config.JWT_SECRET == PLACEHOLDER_JWT_SECRET:
        raise ConfigurationError("Production JWT_SECRET uses the placeholder value.")


@lru_cache(maxsize=8)
def get_config(env: str | None = None) -> Config:
    """Get validated configuration for the requested environment."""
    return _build_config(env)
