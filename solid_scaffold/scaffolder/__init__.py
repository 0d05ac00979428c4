"""SOLID scaffolder -- generates the layers around an existing model.

This package takes a model name and renders a Controller, Service,
Repository, Repository Interface, Store/Update Form Requests and optionally a
feature test into a Laravel project, registering the repository binding in
``RepositoryServiceProvider``.

Quick usage::

    from solid_scaffold.config import Config
    from solid_scaffold.scaffolder import ScaffoldOptions, SolidGenerator

    generator = SolidGenerator(Config(root_dir=Path("/srv/shop")))
    result = generator.generate(ScaffoldOptions(name="Product", custom_path="V1/Admin"))
"""

from solid_scaffold.scaffolder.binding import BindingStatus, ensure_binding, insert_binding
from solid_scaffold.scaffolder.fields import FieldInference, SQLAlchemySchemaProvider
from solid_scaffold.scaffolder.generator import (
    ArtifactStatus,
    InvalidPathError,
    MissingTemplatesError,
    ModelNotFoundError,
    ScaffoldError,
    ScaffoldOptions,
    ScaffoldResult,
    SolidGenerator,
)
from solid_scaffold.scaffolder.templates import ArtifactKind, TemplateRenderer

__all__ = [
    "ArtifactKind",
    "ArtifactStatus",
    "BindingStatus",
    "FieldInference",
    "InvalidPathError",
    "MissingTemplatesError",
    "ModelNotFoundError",
    "SQLAlchemySchemaProvider",
    "ScaffoldError",
    "ScaffoldOptions",
    "ScaffoldResult",
    "SolidGenerator",
    "TemplateRenderer",
    "ensure_binding",
    "insert_binding",
]
