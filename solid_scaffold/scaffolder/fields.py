"""Field inference for the generated Form Requests.

Determines which fields a model has so the Store/Update requests can be
pre-filled with validation rules.  The live database table is consulted
first; when it is missing or cannot be read, the model's ``create_*_table``
migration is scanned instead.  If neither source yields anything a commented
placeholder block is returned, so inference never fails a run.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Protocol

from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import SQLAlchemyError

from ..utils import camel, pluralize, print_warning, snake

# Columns that never get a validation rule.
EXCLUDED_FIELDS: frozenset[str] = frozenset({
    "id",
    "created_at",
    "updated_at",
    "deleted_at",
    "remember_token",
})

RULE_INDENT = " " * 12

DEFAULT_FIELDS_COMMENT = (
    f"{RULE_INDENT}// TODO: Add the validation rules for your model here\n"
    f"{RULE_INDENT}// Example:\n"
    f"{RULE_INDENT}// 'name' => 'required|string|max:255',\n"
    f"{RULE_INDENT}// 'email' => 'required|email|unique:users',"
)

# $table->string('title') / $table->foreignId("user_id", ...)
_MIGRATION_FIELD_RE = re.compile(r"""\$table->\w+\(\s*['"](\w+)['"]\s*[,)]""")


class SchemaIntrospectionError(Exception):
    """Raised when a live table cannot be inspected."""


# ---------------------------------------------------------------------------
# Schema providers
# ---------------------------------------------------------------------------


class SchemaProvider(Protocol):
    """Read-only view of a database schema."""

    def has_table(self, table: str) -> bool: ...

    def column_listing(self, table: str) -> list[str]: ...


class SQLAlchemySchemaProvider:
    """Schema provider backed by a SQLAlchemy inspector.

    The engine is created lazily and disposed by :meth:`close`.  Driver
    import errors and connection failures are re-raised as
    :class:`SchemaIntrospectionError`.
    """

    def __init__(self, url: str) -> None:
        self.url = url
        self._engine = None

    def _inspector(self):
        try:
            if self._engine is None:
                self._engine = create_engine(self.url)
            return inspect(self._engine)
        except (SQLAlchemyError, ImportError) as e:
            raise SchemaIntrospectionError(str(e)) from e

    def has_table(self, table: str) -> bool:
        try:
            return self._inspector().has_table(table)
        except SQLAlchemyError as e:
            raise SchemaIntrospectionError(str(e)) from e

    def column_listing(self, table: str) -> list[str]:
        try:
            return [column["name"] for column in self._inspector().get_columns(table)]
        except SQLAlchemyError as e:
            raise SchemaIntrospectionError(str(e)) from e

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None


# ---------------------------------------------------------------------------
# Rule guessing
# ---------------------------------------------------------------------------

RuleGuesser = Callable[[str, str | None, str, str | None], str]


def required_rule(
    field: str,
    table: str | None = None,
    request_type: str = "store",
    model_variable: str | None = None,
) -> str:
    """Default rule guesser: every field is ``required``."""
    return "required"


# ---------------------------------------------------------------------------
# Migration parsing
# ---------------------------------------------------------------------------


def extract_fields_from_migration(content: str) -> list[str]:
    """Return the column names declared in a migration, in order of appearance.

    Matches schema-builder calls of the form ``$table->type('name')`` and
    ``$table->type('name', ...)``; excluded columns and duplicates are dropped.
    """
    fields: list[str] = []
    for match in _MIGRATION_FIELD_RE.finditer(content):
        field = match.group(1)
        if field in EXCLUDED_FIELDS or field in fields:
            continue
        fields.append(field)
    return fields


def find_create_migration(migrations_dir: Path, table: str) -> Path | None:
    """Return the first ``*_create_<table>_table.php`` migration, if any."""
    if not migrations_dir.is_dir():
        return None
    matches = sorted(migrations_dir.glob(f"*_create_{table}_table.php"))
    return matches[0] if matches else None


# ---------------------------------------------------------------------------
# FieldInference
# ---------------------------------------------------------------------------


class FieldInference:
    """Produces the validation-rule block for a model's Form Requests.

    Attributes:
        migrations_dir: Directory scanned for ``create_*_table`` migrations.
        schema: Optional live schema provider; ``None`` skips straight to the
            migration fallback.
        rule_guesser: Strategy returning the rule string for one field.
    """

    def __init__(
        self,
        migrations_dir: str | Path,
        schema: SchemaProvider | None = None,
        rule_guesser: RuleGuesser = required_rule,
    ) -> None:
        self.migrations_dir = Path(migrations_dir)
        self.schema = schema
        self.rule_guesser = rule_guesser

    def rules_for(self, model: str, request_type: str = "store") -> str:
        """Return the formatted rules block for *model*.

        Args:
            model: Model class name, e.g. ``"BlogPost"``.
            request_type: ``"store"`` or ``"update"``; forwarded to the rule
                guesser.

        Returns:
            Newline-joined ``'field' => 'rule',`` lines, or
            :data:`DEFAULT_FIELDS_COMMENT` when no fields are known.
        """
        table = snake(pluralize(model))

        columns = self.table_fields(table)
        if columns is not None:
            return self.format_rules(columns, table, request_type, model)

        return self.format_rules(self.migration_fields(table), None, request_type, model)

    def table_fields(self, table: str) -> list[str] | None:
        """Return the live columns of *table* minus excluded ones.

        ``None`` means the table could not be used (no provider, no table, or
        an introspection error) and the migration fallback should run.
        """
        if self.schema is None:
            return None
        try:
            if not self.schema.has_table(table):
                return None
            columns = self.schema.column_listing(table)
        except SchemaIntrospectionError as e:
            print_warning(f"Could not read table {table}: {e}")
            return None
        return [column for column in columns if column not in EXCLUDED_FIELDS]

    def migration_fields(self, table: str) -> list[str]:
        migration = find_create_migration(self.migrations_dir, table)
        if migration is None:
            return []
        return extract_fields_from_migration(migration.read_text(encoding="utf-8"))

    def format_rules(
        self,
        fields: Iterable[str],
        table: str | None,
        request_type: str,
        model: str,
    ) -> str:
        fields = list(fields)
        if not fields:
            return DEFAULT_FIELDS_COMMENT

        model_variable = camel(model)
        lines = [
            f"{RULE_INDENT}'{field}' => '{self.rule_guesser(field, table, request_type, model_variable)}',"
            for field in fields
        ]
        return "\n".join(lines)
