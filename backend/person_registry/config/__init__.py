"""Centralised configuration helper.

Settings come from environment variables (after ``python-dotenv`` has loaded
an optional ``.env`` file) and are exposed through :func:`get_settings`.

There is deliberately no process-wide "current environment" switch: callers
turn :class:`Settings` into an explicit :class:`DatabaseConfig` and hand that
to the storage layer, so two stores pointed at different databases can live
side by side (which is what the test-suite does).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# ``_PROJECT_ROOT`` points at the repository root (one level above "backend").
_PROJECT_ROOT = Path(__file__).resolve().parents[3]


def _truthy(value: str | None) -> bool:  # noqa: D401 – small helper
    """Return *True* when *value* looks like an affirmative string."""

    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


class DatabaseEnvironment(str, Enum):
    """Named database targets, each resolving to a connection URL."""

    DEVELOPMENT = "development"
    TEST = "test"
    IN_MEMORY = "in_memory"

    @property
    def url(self) -> str:
        return _ENVIRONMENT_URLS[self]

    @classmethod
    def from_name(cls, name: str) -> DatabaseEnvironment:
        """Resolve a case-insensitive environment name (``"in-memory"`` works too)."""

        normalised = name.strip().lower().replace("-", "_")
        for member in cls:
            if member.value == normalised:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Unknown database environment '{name}' (expected one of: {valid})")


_ENVIRONMENT_URLS = {
    DatabaseEnvironment.DEVELOPMENT: "sqlite:///database.db",
    DatabaseEnvironment.TEST: "sqlite:///test.db",
    DatabaseEnvironment.IN_MEMORY: "sqlite:///:memory:",
}


@dataclass(frozen=True)
class DatabaseConfig:
    """Explicit database target passed into the storage layer."""

    environment: DatabaseEnvironment = DatabaseEnvironment.DEVELOPMENT
    url_override: Optional[str] = None
    echo: bool = False

    @property
    def url(self) -> str:
        return self.url_override or self.environment.url

    @property
    def is_in_memory(self) -> bool:
        return ":memory:" in self.url

    @classmethod
    def for_environment(cls, environment: DatabaseEnvironment | str, echo: bool = False) -> DatabaseConfig:
        if isinstance(environment, str) and not isinstance(environment, DatabaseEnvironment):
            environment = DatabaseEnvironment.from_name(environment)
        return cls(environment=environment, echo=echo)


@dataclass
class Settings:  # noqa: D401 – simple data container
    """Lightweight settings container populated from environment variables."""

    # Database ---------------------------------------------------------
    database_environment: DatabaseEnvironment
    database_url: str
    sql_echo: bool

    # Misc
    log_level: str

    def database_config(self) -> DatabaseConfig:
        """Return the explicit :class:`DatabaseConfig` these settings describe."""

        return DatabaseConfig(
            environment=self.database_environment,
            url_override=self.database_url or None,
            echo=self.sql_echo,
        )


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


def _load_settings() -> Settings:  # noqa: D401 – helper
    """Populate :class:`Settings` from environment variables."""

    env_path = _PROJECT_ROOT / ".env"
    if env_path.exists():
        # Real environment variables win over the file.
        load_dotenv(env_path, override=False)

    return Settings(
        database_environment=DatabaseEnvironment.from_name(os.getenv("PERSON_DB_ENV", "development")),
        database_url=os.getenv("DATABASE_URL", ""),
        sql_echo=_truthy(os.getenv("SQL_ECHO")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def get_settings() -> Settings:  # noqa: D401 – public accessor
    """Return :class:`Settings` instance loaded from environment."""

    return _load_settings()


__all__ = [
    "DatabaseConfig",
    "DatabaseEnvironment",
    "Settings",
    "get_settings",
]
