"""
Application configuration using python-dotenv.

Settings are loaded from environment variables (and a .env file outside of
test runs) into an immutable Settings object. The object is passed explicitly
to the database layer, the services and the application factory.
"""

import os
import pathlib
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from dotenv import load_dotenv


def _is_testing() -> bool:
    """Return True when running under pytest."""
    return os.getenv("PYTEST_VERSION") is not None or os.getenv("PYTEST_CURRENT_TEST") is not None


def load_env_file() -> None:
    """
    Load the first .env file found into os.environ.

    Skipped during testing so test behavior does not depend on a developer's
    local .env file.
    """
    if _is_testing():
        return

    possible_paths = [
        pathlib.Path(__file__).parent.parent.parent / ".env",  # repository root
        pathlib.Path.cwd() / ".env",
    ]
    for env_path in possible_paths:
        if env_path.exists():
            load_dotenv(env_path)
            break


def _get_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _get_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _get_list(env: Mapping[str, str], name: str, default: List[str]) -> List[str]:
    raw = env.get(name)
    if raw is None:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the booking backend."""

    database_url: str = "postgresql://localhost/slot_booking"
    environment: str = "development"
    log_level: str = "INFO"
    db_echo: bool = False

    # Connection pool and timeouts. Every store interaction is bounded by these.
    db_pool_size: int = 5
    db_pool_timeout_seconds: int = 10
    db_pool_recycle_seconds: int = 300
    db_connect_timeout_seconds: int = 10
    db_statement_timeout_ms: int = 15000
    db_lock_timeout_ms: int = 5000

    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:5173"])

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            env: Mapping to read from. Defaults to os.environ after loading .env.

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        if env is None:
            load_env_file()
            env = os.environ

        defaults = cls()
        return cls(
            database_url=env.get("DATABASE_URL", defaults.database_url),
            environment=env.get("ENVIRONMENT", defaults.environment),
            log_level=env.get("LOG_LEVEL", defaults.log_level).upper(),
            db_echo=_get_bool(env, "DB_ECHO", defaults.db_echo),
            db_pool_size=_get_int(env, "DB_POOL_SIZE", defaults.db_pool_size),
            db_pool_timeout_seconds=_get_int(env, "DB_POOL_TIMEOUT_SECONDS", defaults.db_pool_timeout_seconds),
            db_pool_recycle_seconds=_get_int(env, "DB_POOL_RECYCLE_SECONDS", defaults.db_pool_recycle_seconds),
            db_connect_timeout_seconds=_get_int(
                env, "DB_CONNECT_TIMEOUT_SECONDS", defaults.db_connect_timeout_seconds
            ),
            db_statement_timeout_ms=_get_int(env, "DB_STATEMENT_TIMEOUT_MS", defaults.db_statement_timeout_ms),
            db_lock_timeout_ms=_get_int(env, "DB_LOCK_TIMEOUT_MS", defaults.db_lock_timeout_ms),
            cors_origins=_get_list(env, "CORS_ORIGINS", defaults.cors_origins),
        )
