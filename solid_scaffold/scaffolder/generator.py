"""Main scaffolding orchestrator.

Takes a model name plus ``ScaffoldOptions`` and generates the SOLID layer
around an existing Eloquent model: controller, Store/Update form requests,
repository interface, repository, service, the shared repository service
provider and, optionally, a feature test.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Any

from jinja2 import TemplateNotFound
from pydantic import BaseModel, Field

from ..config import Config
from ..utils import pluralize, print_info, print_success, print_warning
from .binding import BindingStatus, ensure_binding
from .fields import FieldInference, SchemaProvider, SQLAlchemySchemaProvider
from .templates import (
    REQUIRED_STUBS,
    ArtifactKind,
    TemplateRenderer,
    controller_namespace,
    route_path,
)

# Colons, backslashes, surrounding whitespace and drive letters (``C:``)
_INVALID_PATH_RE = re.compile(r"[:\\]|^\s|\s$|^[A-Z]:")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Raised when a precondition fails and nothing may be generated.

    Attributes:
        hints: Extra lines telling the user how to fix the problem.
    """

    def __init__(self, message: str, hints: list[str] | None = None) -> None:
        self.hints = hints or []
        super().__init__(message)


class ModelNotFoundError(ScaffoldError):
    def __init__(self, name: str, path: Path) -> None:
        self.name = name
        self.path = path
        super().__init__(
            f"The model {name} does not exist ({path}).",
            [f"Create the model first with: php artisan make:model {name} -mf"],
        )


class InvalidPathError(ScaffoldError):
    def __init__(self, custom_path: str) -> None:
        self.custom_path = custom_path
        super().__init__(
            "The custom path contains invalid characters.",
            [
                "Valid example: V1/Admin",
                "Avoid: leading/trailing spaces, colons, backslashes",
            ],
        )


class MissingTemplatesError(ScaffoldError):
    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(
            "The following stubs do not exist:",
            [f"- {stub}" for stub in missing],
        )


# ---------------------------------------------------------------------------
# Options and results
# ---------------------------------------------------------------------------


class ScaffoldOptions(BaseModel):
    """What to scaffold, as given on the command line."""

    name: str = Field(..., min_length=1, description="Existing model class name")
    custom_path: str | None = Field(default=None, description="Controller sub-path, e.g. V1/Admin")
    per_page: int = Field(default=15, ge=1, description="Items per page in the repository")
    with_tests: bool = Field(default=False, description="Also generate a feature test")
    force: bool = Field(default=False, description="Overwrite existing files")


class ArtifactStatus(str, Enum):
    CREATED = "created"
    OVERWRITTEN = "overwritten"
    SKIPPED = "skipped"
    FAILED = "failed"


class ArtifactResult(BaseModel):
    """Outcome for a single generated file."""

    kind: ArtifactKind
    path: Path
    status: ArtifactStatus
    message: str = ""


class ScaffoldResult(BaseModel):
    """Everything a run did, in generation order."""

    name: str
    artifacts: list[ArtifactResult] = Field(default_factory=list)
    created_directories: list[Path] = Field(default_factory=list)
    binding: BindingStatus | None = Field(
        default=None, description="Set when an existing provider was patched"
    )

    def artifact(self, kind: ArtifactKind) -> ArtifactResult | None:
        """Return the result for *kind*, if it was attempted."""
        for result in self.artifacts:
            if result.kind is kind:
                return result
        return None

    @property
    def written(self) -> list[Path]:
        return [
            a.path
            for a in self.artifacts
            if a.status in (ArtifactStatus.CREATED, ArtifactStatus.OVERWRITTEN)
        ]

    @property
    def skipped(self) -> list[Path]:
        return [a.path for a in self.artifacts if a.status is ArtifactStatus.SKIPPED]


def has_invalid_path_characters(path: str) -> bool:
    return _INVALID_PATH_RE.search(path) is not None


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class SolidGenerator:
    """Scaffolding orchestrator for one Laravel project.

    Given a ``Config`` (project root, stub directory, database URL), checks
    the preconditions, creates the target directories and writes one file
    per ``ArtifactKind``.  Existing files are skipped unless ``force`` is
    set; the repository service provider is created once and afterwards only
    patched with new bindings.
    """

    def __init__(
        self,
        config: Config,
        *,
        schema: SchemaProvider | None = None,
        fields: FieldInference | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer(config.stubs_path)
        self._owned_schema: SQLAlchemySchemaProvider | None = None
        if fields is None:
            if schema is None and config.database_url:
                self._owned_schema = SQLAlchemySchemaProvider(config.database_url)
                schema = self._owned_schema
            fields = FieldInference(config.migrations_path, schema=schema)
        self.fields = fields

    # -- Public API --------------------------------------------------------

    def validate(self, options: ScaffoldOptions) -> None:
        """Check every precondition; raises a ``ScaffoldError`` subclass on failure."""
        model_path = self.config.model_path(options.name)
        if not model_path.is_file():
            raise ModelNotFoundError(options.name, model_path)

        if options.custom_path and has_invalid_path_characters(options.custom_path):
            raise InvalidPathError(options.custom_path)

        missing = self.renderer.missing_stubs(REQUIRED_STUBS)
        if missing:
            raise MissingTemplatesError(missing)

    def generate(self, options: ScaffoldOptions) -> ScaffoldResult:
        """Generate the SOLID layer for ``options.name``.

        Args:
            options: Model name and command-line flags.

        Returns:
            A ``ScaffoldResult`` describing every directory and file touched.

        Raises:
            ModelNotFoundError: The model file does not exist.
            InvalidPathError: The custom path contains illegal characters.
            MissingTemplatesError: One or more stubs are missing.
        """
        self.validate(options)
        print_success("All stubs found")

        result = ScaffoldResult(name=options.name)
        try:
            result.created_directories = self._create_directories(options.custom_path)
            self._generate_artifacts(options, result)
        finally:
            self.close()
        return result

    def close(self) -> None:
        """Dispose of the database engine created for introspection, if any."""
        if self._owned_schema is not None:
            self._owned_schema.close()

    # -- Paths -------------------------------------------------------------

    def controller_dir(self, custom_path: str | None = None) -> Path:
        base = self.config.app_path / "Http" / "Controllers"
        if custom_path:
            base = base.joinpath(*custom_path.split("/"))
        return base

    def controller_path(self, name: str, custom_path: str | None = None) -> Path:
        return self.controller_dir(custom_path) / f"{name}Controller.php"

    def artifact_paths(self, options: ScaffoldOptions) -> dict[ArtifactKind, Path]:
        """Output path for every artifact kind."""
        name = options.name
        app = self.config.app_path
        return {
            ArtifactKind.CONTROLLER: self.controller_path(name, options.custom_path),
            ArtifactKind.REQUEST_STORE: app / "Http" / "Requests" / f"Store{name}Request.php",
            ArtifactKind.REQUEST_UPDATE: app / "Http" / "Requests" / f"Update{name}Request.php",
            ArtifactKind.INTERFACE: app / "Contracts" / f"{name}RepositoryInterface.php",
            ArtifactKind.REPOSITORY: app / "Repositories" / f"{name}Repository.php",
            ArtifactKind.SERVICE: app / "Services" / f"{name}Service.php",
            ArtifactKind.PROVIDER: self.config.provider_path,
            ArtifactKind.TEST: self.config.feature_tests_path / f"{name}Test.php",
        }

    # -- Directory structure -----------------------------------------------

    def _create_directories(self, custom_path: str | None = None) -> list[Path]:
        """Create the layer directories; returns the ones that did not exist."""
        app = self.config.app_path
        dirs = [
            app / "Contracts",
            app / "Repositories",
            app / "Services",
            app / "Http" / "Requests",
        ]
        if custom_path:
            dirs.append(self.controller_dir(custom_path))

        created: list[Path] = []
        for directory in dirs:
            if not directory.is_dir():
                directory.mkdir(parents=True, exist_ok=True)
                created.append(directory)
                print_success(f"Directory created: {directory}")
        return created

    # -- Artifact rendering ------------------------------------------------

    def _generate_artifacts(self, options: ScaffoldOptions, result: ScaffoldResult) -> None:
        paths = self.artifact_paths(options)
        namespace = controller_namespace(options.custom_path)

        result.artifacts.append(self._create_from_stub(
            ArtifactKind.CONTROLLER, options, paths[ArtifactKind.CONTROLLER],
            {"controllerNamespace": namespace},
        ))

        store_rules = self.fields.rules_for(options.name, "store")
        update_rules = self.fields.rules_for(options.name, "update")

        result.artifacts.append(self._create_from_stub(
            ArtifactKind.REQUEST_STORE, options, paths[ArtifactKind.REQUEST_STORE],
            {"controllerNamespace": namespace, "storeRules": store_rules},
        ))
        result.artifacts.append(self._create_from_stub(
            ArtifactKind.REQUEST_UPDATE, options, paths[ArtifactKind.REQUEST_UPDATE],
            {"controllerNamespace": namespace, "updateRules": update_rules},
        ))

        for kind in (ArtifactKind.INTERFACE, ArtifactKind.REPOSITORY, ArtifactKind.SERVICE):
            result.artifacts.append(self._create_from_stub(kind, options, paths[kind]))

        provider_path = paths[ArtifactKind.PROVIDER]
        if provider_path.exists():
            result.binding = self._add_binding(provider_path, options.name)
        else:
            provider = self._create_from_stub(ArtifactKind.PROVIDER, options, provider_path)
            result.artifacts.append(provider)
            if provider.status is ArtifactStatus.CREATED:
                print_warning(
                    "IMPORTANT: register the provider in config/app.php or bootstrap/providers.php"
                )

        if options.with_tests:
            result.artifacts.append(
                self._create_from_stub(ArtifactKind.TEST, options, paths[ArtifactKind.TEST])
            )

    def _create_from_stub(
        self,
        kind: ArtifactKind,
        options: ScaffoldOptions,
        output_path: Path,
        extra: dict[str, Any] | None = None,
    ) -> ArtifactResult:
        """Render one stub to *output_path*, honouring ``force``."""
        existed = output_path.exists()
        if existed and not options.force:
            message = f"{output_path.name} already exists (use --force to overwrite)"
            print_warning(message)
            return ArtifactResult(
                kind=kind, path=output_path, status=ArtifactStatus.SKIPPED, message=message
            )

        try:
            content = self.renderer.render(
                kind,
                options.name,
                extra,
                custom_path=options.custom_path,
                per_page=options.per_page,
            )
        except TemplateNotFound:
            message = f"Stub not found: {self.renderer.stub_dir / kind.stub_name}"
            print_warning(message)
            return ArtifactResult(
                kind=kind, path=output_path, status=ArtifactStatus.FAILED, message=message
            )

        _write_file(output_path, content)
        print_success(f"{output_path.name} created")
        status = ArtifactStatus.OVERWRITTEN if existed else ArtifactStatus.CREATED
        return ArtifactResult(kind=kind, path=output_path, status=status)

    def _add_binding(self, provider_path: Path, name: str) -> BindingStatus:
        status = ensure_binding(provider_path, name)
        if status is BindingStatus.ADDED:
            print_success(f"Binding added to {provider_path.name}")
        elif status is BindingStatus.ALREADY_PRESENT:
            print_info("  (binding already exists)")
        else:
            print_info(f"  (no register() method found in {provider_path.name})")
        return status

    # -- Next steps --------------------------------------------------------

    def next_steps(self, options: ScaffoldOptions) -> str:
        """Render the post-run guide (provider registration, routes, endpoints)."""
        name = options.name
        controller_class = f"{name}Controller"
        if options.custom_path:
            controller_class = options.custom_path.replace("/", "\\") + "\\" + controller_class
        context = {
            "name": name,
            "plural": pluralize(name),
            "custom_path": options.custom_path,
            "controller_class": controller_class,
            "route_path": route_path(name, options.custom_path),
            "per_page": options.per_page,
            "with_tests": options.with_tests,
        }
        return self.renderer.render_template("next_steps.txt.j2", context)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Create parent dirs and write content, replacing any existing file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
