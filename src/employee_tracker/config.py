"""Database connection settings.

Centralized config: this is the ONLY place environment variables are
read.  A ``.env`` file in the working directory is loaded first (local
dev); variables already present in the environment take precedence.

Example ``.env``::

    DB_NAME=employees_db
    DB_USER=postgres
    DB_PASSWORD=password
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from sqlalchemy.engine import URL, make_url

from employee_tracker.exceptions import ConfigurationError

DEFAULT_HOST: str = "localhost"
DEFAULT_PORT: int = 5432
DRIVERNAME: str = "postgresql+psycopg2"


@dataclass(frozen=True, slots=True)
class DatabaseSettings:
    """Resolved connection settings for the tracker database."""

    name: str | None
    user: str | None
    password: str | None
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    database_url: str | None = None
    """Full SQLAlchemy URL; overrides every other field when set."""

    @property
    def url(self) -> URL:
        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            DRIVERNAME,
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.name,
        )

    def describe(self) -> str:
        """Render the target without the password, for diagnostics."""
        return self.url.render_as_string(hide_password=True)


def _getenv(name: str, default: str | None = None) -> str | None:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def load_settings(
    *,
    dotenv: bool = True,
    env_file: str | Path | None = None,
) -> DatabaseSettings:
    """Build :class:`DatabaseSettings` from the environment.

    *env_file* names the ``.env`` file to load; by default it is searched
    for upwards from the current working directory.

    Raises
    ------
    ConfigurationError
        If ``DB_NAME`` is missing (and no ``DATABASE_URL`` is given) or
        ``DB_PORT`` is not an integer.
    """
    if dotenv:
        load_dotenv(env_file or find_dotenv(usecwd=True), override=False)

    database_url = _getenv("DATABASE_URL")
    if database_url:
        return DatabaseSettings(
            name=None,
            user=None,
            password=None,
            database_url=database_url,
        )

    name = _getenv("DB_NAME")
    if name is None:
        raise ConfigurationError(
            "DB_NAME is not set.",
            hint="Add DB_NAME=employees_db to your .env file or set DATABASE_URL.",
        )

    raw_port = _getenv("DB_PORT", str(DEFAULT_PORT))
    try:
        port = int(raw_port or DEFAULT_PORT)
    except ValueError as exc:
        raise ConfigurationError(
            f"DB_PORT must be an integer, got {raw_port!r}.",
        ) from exc

    return DatabaseSettings(
        name=name,
        user=_getenv("DB_USER"),
        password=_getenv("DB_PASSWORD"),
        host=_getenv("DB_HOST", DEFAULT_HOST) or DEFAULT_HOST,
        port=port,
    )
