"""solid-scaffold configuration.

Typed configuration for a single ``make-solid`` run. Every path the
scaffolder touches is derived from an explicit project root instead of
framework globals, so the generator can be pointed at any Laravel tree
(including a temporary one in tests).
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import dotenv_values
from pydantic import BaseModel, Field
from sqlalchemy.engine import URL

_DEFAULT_STUB_DIR = Path(__file__).parent / "scaffolder" / "stubs"

# Laravel DB_CONNECTION -> SQLAlchemy drivername
_DRIVERS: dict[str, str] = {
    "mysql": "mysql+pymysql",
    "mariadb": "mysql+pymysql",
    "pgsql": "postgresql+psycopg2",
    "sqlsrv": "mssql+pyodbc",
}


class Config(BaseModel):
    """Configuration for one scaffolding run.

    Holds the Laravel project root plus the conventional sub-directories the
    command reads from and writes to. Instances are usually created by the
    CLI entry point and passed to ``SolidGenerator``.
    """

    root_dir: Path = Field(default=Path("."))
    app_dir: str = Field(default="app")
    migrations_dir: str = Field(default="database/migrations")
    feature_tests_dir: str = Field(default="tests/Feature")
    stub_dir: Path | None = Field(default=None, description="Override for the shipped stubs")
    database_url: str | None = Field(
        default=None, description="SQLAlchemy URL used for live table introspection"
    )
    per_page: int = Field(default=15, ge=1, description="Default page size for repositories")

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def app_path(self) -> Path:
        """The Laravel ``app/`` directory."""
        return self.root_dir / self.app_dir

    @property
    def models_path(self) -> Path:
        """Directory holding the Eloquent models."""
        return self.app_path / "Models"

    @property
    def migrations_path(self) -> Path:
        return self.root_dir / self.migrations_dir

    @property
    def feature_tests_path(self) -> Path:
        return self.root_dir / self.feature_tests_dir

    @property
    def provider_path(self) -> Path:
        """The shared repository service provider."""
        return self.app_path / "Providers" / "RepositoryServiceProvider.php"

    @property
    def stubs_path(self) -> Path:
        return self.stub_dir or _DEFAULT_STUB_DIR

    def model_path(self, name: str) -> Path:
        """Path of the model file ``app/Models/<name>.php``."""
        return self.models_path / f"{name}.php"

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            SOLID_ROOT, SOLID_DATABASE_URL, SOLID_STUB_DIR, SOLID_PER_PAGE.

        Raises:
            pydantic.ValidationError: If a value does not validate, e.g. a
                non-numeric ``SOLID_PER_PAGE``.
        """
        kwargs: dict[str, object] = {}
        if os.environ.get("SOLID_ROOT"):
            kwargs["root_dir"] = Path(os.environ["SOLID_ROOT"])
        if os.environ.get("SOLID_DATABASE_URL"):
            kwargs["database_url"] = os.environ["SOLID_DATABASE_URL"]
        if os.environ.get("SOLID_STUB_DIR"):
            kwargs["stub_dir"] = Path(os.environ["SOLID_STUB_DIR"])
        if os.environ.get("SOLID_PER_PAGE"):
            kwargs["per_page"] = os.environ["SOLID_PER_PAGE"]
        return cls(**kwargs)


def database_url_from_dotenv(root: Path) -> str | None:
    """Derive a SQLAlchemy URL from a Laravel project's ``.env`` file.

    Reads ``DB_CONNECTION`` and the matching ``DB_*`` keys. Returns ``None``
    when there is no ``.env`` file, the connection type is unknown, or the
    SQLite database file does not exist (connecting would create it).

    Args:
        root: The Laravel project root.

    Returns:
        A URL string suitable for ``sqlalchemy.create_engine`` or ``None``.
    """
    env_file = Path(root) / ".env"
    if not env_file.is_file():
        return None

    values = dotenv_values(env_file)
    connection = (values.get("DB_CONNECTION") or "").strip().lower()
    database = values.get("DB_DATABASE") or None

    if connection == "sqlite":
        db_path = Path(database) if database else Path("database/database.sqlite")
        if not db_path.is_absolute():
            db_path = Path(root) / db_path
        if not db_path.is_file():
            return None
        return URL.create("sqlite", database=str(db_path)).render_as_string()

    drivername = _DRIVERS.get(connection)
    if drivername is None:
        return None

    port = values.get("DB_PORT")
    url = URL.create(
        drivername,
        username=values.get("DB_USERNAME") or None,
        password=values.get("DB_PASSWORD") or None,
        host=values.get("DB_HOST") or None,
        port=int(port) if port else None,
        database=database,
    )
    return url.render_as_string(hide_password=False)
