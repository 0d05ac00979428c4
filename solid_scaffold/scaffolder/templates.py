"""Stub loading and placeholder substitution for SOLID scaffolding.

Provides the TemplateRenderer class which loads ``.stub`` files from the
``solid_scaffold/scaffolder/stubs/`` directory and fills in their
``{{placeholder}}`` tokens with names derived from the model.  Stubs are PHP
source, so they are not rendered as Jinja2 templates: substitution is a single
literal pass and unknown tokens are left untouched.  Jinja2 is still used to
look stubs up (so a missing stub surfaces as ``TemplateNotFound``) and to
render the console guide shown after a run.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from ..utils import camel, class_name_to_title, kebab, pluralize, snake


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_STUB_DIR = Path(__file__).parent / "stubs"
_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

DEFAULT_CONTROLLER_NAMESPACE = "App\\Http\\Controllers"

_PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")


# ---------------------------------------------------------------------------
# Artifact kinds
# ---------------------------------------------------------------------------


class ArtifactKind(str, Enum):
    """One generated file type; each maps to exactly one stub."""

    CONTROLLER = "controller"
    INTERFACE = "interface"
    REPOSITORY = "repository"
    SERVICE = "service"
    REQUEST_STORE = "request-store"
    REQUEST_UPDATE = "request-update"
    PROVIDER = "provider"
    TEST = "test"

    @property
    def stub_name(self) -> str:
        """File name of the stub backing this kind, e.g. ``request.store.stub``."""
        return f"{self.value.replace('-', '.')}.stub"


REQUIRED_STUBS: tuple[str, ...] = tuple(kind.stub_name for kind in ArtifactKind)


# ---------------------------------------------------------------------------
# Name derivation
# ---------------------------------------------------------------------------


def controller_namespace(custom_path: str | None = None) -> str:
    """``V1/Admin`` -> ``App\\Http\\Controllers\\V1\\Admin``."""
    if custom_path:
        return DEFAULT_CONTROLLER_NAMESPACE + "\\" + custom_path.replace("/", "\\")
    return DEFAULT_CONTROLLER_NAMESPACE


def route_path(model: str, custom_path: str | None = None) -> str:
    """API route for a model: ``v1/admin/user-profiles`` for ``V1/Admin``."""
    route = kebab(pluralize(model))
    if custom_path:
        return f"{custom_path.lower()}/{route}"
    return route


def build_placeholders(
    model: str,
    *,
    custom_path: str | None = None,
    per_page: int = 15,
    extra: dict[str, Any] | None = None,
) -> dict[str, str]:
    """Build the placeholder table for *model*.

    Keys are token names without braces (``class`` for ``{{class}}``).
    Entries in *extra* override the computed defaults.
    """
    plural = pluralize(model)
    variable = camel(model)
    variable_plural = camel(plural)

    values: dict[str, str] = {
        "namespace": "App",
        "controllerNamespace": DEFAULT_CONTROLLER_NAMESPACE,
        "class": model,
        "variable": variable,
        "variablePlural": variable_plural,
        "model": model,
        "modelVariable": variable,
        "modelVariablePlural": variable_plural,
        "modelTitle": class_name_to_title(model),
        "modelTitlePlural": class_name_to_title(plural),
        "routeName": kebab(plural),
        "routePath": route_path(model, custom_path),
        "tableName": snake(plural),
        "storeRules": "",
        "updateRules": "",
        "perPage": str(per_page),
    }
    for key, value in (extra or {}).items():
        values[key] = str(value)
    return values


def substitute(text: str, values: dict[str, str]) -> str:
    """Replace every known ``{{token}}`` in one pass.

    Replacement text is never rescanned and unknown tokens stay verbatim.
    """
    return _PLACEHOLDER_RE.sub(lambda m: values.get(m.group(1), m.group(0)), text)


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders scaffolding stubs for a model.

    The renderer resolves ``.stub`` files under a configurable stub directory
    and the console guide template under the package's ``templates/``
    directory.
    """

    def __init__(
        self,
        stub_dir: str | Path | None = None,
        template_dir: str | Path | None = None,
    ) -> None:
        self.stub_dir = Path(stub_dir) if stub_dir is not None else _DEFAULT_STUB_DIR
        self.template_dir = (
            Path(template_dir) if template_dir is not None else _DEFAULT_TEMPLATE_DIR
        )
        self.stub_loader = FileSystemLoader(str(self.stub_dir))
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    # -- Stub access -------------------------------------------------------

    def load_stub(self, stub_name: str) -> str:
        """Return the raw contents of *stub_name*.

        Raises:
            TemplateNotFound: If the stub does not exist in the stub directory.
        """
        source, _filename, _uptodate = self.stub_loader.get_source(self.env, stub_name)
        return source

    def missing_stubs(self, stub_names: tuple[str, ...] = REQUIRED_STUBS) -> list[str]:
        """Return the subset of *stub_names* that cannot be loaded."""
        missing: list[str] = []
        for name in stub_names:
            try:
                self.load_stub(name)
            except TemplateNotFound:
                missing.append(name)
        return missing

    # -- Rendering ---------------------------------------------------------

    def render(
        self,
        kind: ArtifactKind,
        model: str,
        extra: dict[str, Any] | None = None,
        *,
        custom_path: str | None = None,
        per_page: int = 15,
    ) -> str:
        """Render the stub for *kind* with placeholders derived from *model*.

        Args:
            kind: Which artifact to render.
            model: The model class name, e.g. ``"UserProfile"``.
            extra: Additional or overriding placeholder values, keyed by
                token name without braces (``controllerNamespace``,
                ``storeRules``, ...).
            custom_path: Optional controller sub-path such as ``"V1/Admin"``.
            per_page: Page size substituted for ``{{perPage}}``.

        Returns:
            The rendered file content.
        """
        stub = self.load_stub(kind.stub_name)
        values = build_placeholders(
            model, custom_path=custom_path, per_page=per_page, extra=extra
        )
        return substitute(stub, values)

    def render_template(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a Jinja2 template from the template directory."""
        template = self.env.get_template(template_path)
        return template.render(**context)
