"""Settings loaded from environment variables (+ optional .env)."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

ENV_PREFIX = "TASK_API"
MEMORY_URL = "memory://"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///./tasks.db"
    api_prefix: str = ""
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])
    log_level: str = "INFO"
    sql_echo: bool = False

    @property
    def uses_memory_store(self) -> bool:
        return self.database_url == MEMORY_URL


def load_settings(*, dotenv: bool = True) -> Settings:
    """Read settings from the environment, loading ``.env`` first unless told not to."""
    if dotenv:
        load_dotenv(override=False)
    defaults = Settings()
    return Settings(
        database_url=_env(_k("DATABASE_URL"), defaults.database_url),
        api_prefix=_env(_k("PREFIX"), defaults.api_prefix).rstrip("/"),
        cors_origins=_env_list(_k("CORS_ORIGINS"), defaults.cors_origins),
        log_level=_env(_k("LOG_LEVEL"), defaults.log_level).upper(),
        sql_echo=_env_bool(_k("SQL_ECHO"), defaults.sql_echo),
    )
