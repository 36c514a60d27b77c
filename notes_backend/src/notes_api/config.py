"""Configuration management for the auth and notes services."""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv

from notes_database.db import DEFAULT_STORE_TIMEOUT_SECONDS, ConfigurationError

DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "https://localhost:5173")


def get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get environment variable with optional default."""
    return os.getenv(key, default)


def get_env_int(key: str, default: int) -> int:
    """Get environment variable as integer."""
    value = os.getenv(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer, got {value!r}") from exc


def get_env_float(key: str, default: float) -> float:
    """Get environment variable as float."""
    value = os.getenv(key)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be a number, got {value!r}") from exc


def get_env_list(key: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    value = os.getenv(key)
    if not value:
        return default
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, read once at startup and never mutated."""

    database_url: Optional[str] = None
    secret_key: str = "temporary_dev_secret"
    algorithm: str = "HS256"
    # 0 disables the exp claim
    access_token_expire_minutes: int = 0
    store_timeout_seconds: float = DEFAULT_STORE_TIMEOUT_SECONDS
    cors_origins: Tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)
    log_level: str = "INFO"
    notes_host: str = "0.0.0.0"
    notes_port: int = 3000
    auth_host: str = "0.0.0.0"
    auth_port: int = 3001

    def require_database_url(self) -> str:
        if not self.database_url:
            raise ConfigurationError("DATABASE_URL environment variable not set.")
        return self.database_url


# PUBLIC_INTERFACE
def load_settings() -> Settings:
    """
    Reads settings from the environment (and a .env file, if present).
    """
    load_dotenv()
    return Settings(
        database_url=get_env("DATABASE_URL"),
        secret_key=get_env("SECRET_KEY", "temporary_dev_secret"),
        algorithm=get_env("JWT_ALGORITHM", "HS256"),
        access_token_expire_minutes=get_env_int("ACCESS_TOKEN_EXPIRE_MINUTES", 0),
        store_timeout_seconds=get_env_float("STORE_TIMEOUT_SECONDS", DEFAULT_STORE_TIMEOUT_SECONDS),
        cors_origins=get_env_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
        log_level=get_env("LOG_LEVEL", "INFO").upper(),
        notes_host=get_env("NOTES_HOST", "0.0.0.0"),
        notes_port=get_env_int("NOTES_PORT", 3000),
        auth_host=get_env("AUTH_HOST", "0.0.0.0"),
        auth_port=get_env_int("AUTH_PORT", 3001),
    )
