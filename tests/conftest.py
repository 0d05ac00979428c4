"""Shared pytest fixtures for the solid-scaffold test suite.

Provides reusable fixtures for:
- Temporary Laravel project trees with models and migrations
- ``Config`` instances pointed at those trees
- Real SQLite databases for table introspection
- Literal RepositoryServiceProvider sources for binding tests
"""

from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest
from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table, Text, create_engine

from solid_scaffold.config import Config


# ---------------------------------------------------------------------------
# Laravel project tree
# ---------------------------------------------------------------------------

MODEL_SOURCE = """\
<?php

namespace App\\Models;

use Illuminate\\Database\\Eloquent\\Model;

class {name} extends Model
{{
    protected $guarded = [];
}}
"""


@pytest.fixture
def laravel_project(tmp_path: Path) -> Path:
    """Temporary Laravel root containing ``app/Models/Post.php``."""
    root = tmp_path / "shop"
    (root / "app" / "Models").mkdir(parents=True)
    (root / "database" / "migrations").mkdir(parents=True)
    (root / "app" / "Models" / "Post.php").write_text(
        MODEL_SOURCE.format(name="Post"), encoding="utf-8"
    )
    yield root


@pytest.fixture
def make_model(laravel_project: Path) -> Callable[[str], Path]:
    """Factory that adds ``app/Models/<name>.php`` to the project."""

    def _make(name: str) -> Path:
        path = laravel_project / "app" / "Models" / f"{name}.php"
        path.write_text(MODEL_SOURCE.format(name=name), encoding="utf-8")
        return path

    return _make


@pytest.fixture
def write_migration(laravel_project: Path) -> Callable[..., Path]:
    """Factory that writes a ``create_<table>_table`` migration with *body*."""

    def _write(table: str, body: str, prefix: str = "2024_01_01_000000") -> Path:
        path = laravel_project / "database" / "migrations" / f"{prefix}_create_{table}_table.php"
        columns = textwrap.indent(textwrap.dedent(body).strip(), " " * 12)
        path.write_text(
            "<?php\n\n"
            "use Illuminate\\Database\\Migrations\\Migration;\n"
            "use Illuminate\\Database\\Schema\\Blueprint;\n"
            "use Illuminate\\Support\\Facades\\Schema;\n\n"
            "return new class extends Migration\n"
            "{\n"
            "    public function up(): void\n"
            "    {\n"
            f"        Schema::create('{table}', function (Blueprint $table) {{\n"
            f"{columns}\n"
            "        });\n"
            "    }\n"
            "};\n",
            encoding="utf-8",
        )
        return path

    return _write


@pytest.fixture
def config(laravel_project: Path) -> Config:
    """Config rooted at the temporary project with no database."""
    return Config(root_dir=laravel_project)


# ---------------------------------------------------------------------------
# Databases
# ---------------------------------------------------------------------------


@pytest.fixture
def sqlite_url(tmp_path: Path) -> Callable[..., str]:
    """Factory creating a SQLite database with one table; returns its URL."""

    def _create(table: str, columns: list[str], filename: str = "database.sqlite") -> str:
        url = f"sqlite:///{tmp_path / filename}"
        engine = create_engine(url)
        metadata = MetaData()
        cols = [Column("id", Integer, primary_key=True)]
        for name in columns:
            if name == "id":
                continue
            if name.endswith("_at"):
                cols.append(Column(name, DateTime, nullable=True))
            elif name in ("body", "description"):
                cols.append(Column(name, Text))
            else:
                cols.append(Column(name, String(255)))
        Table(table, metadata, *cols)
        metadata.create_all(engine)
        engine.dispose()
        return url

    return _create


# ---------------------------------------------------------------------------
# Provider sources
# ---------------------------------------------------------------------------


@pytest.fixture
def provider_source() -> str:
    """A RepositoryServiceProvider with a typed, empty ``register()``."""
    return textwrap.dedent(
        """\
        <?php

        namespace App\\Providers;

        use Illuminate\\Support\\ServiceProvider;

        class RepositoryServiceProvider extends ServiceProvider
        {
            public function register(): void
            {
            }

            public function boot(): void
            {
                //
            }
        }
        """
    )
