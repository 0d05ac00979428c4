"""Idempotent repository binding registration.

Patches ``RepositoryServiceProvider::register()`` so that it binds a model's
repository interface to its implementation.  The patch is a plain text
transform: locate the opening brace of ``register()``, check that the exact
binding fragment is not already in the file, and insert it right after the
brace.  Existing content is never removed or reordered.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path

# public function register() {  /  public function register(): void {
REGISTER_METHOD_RE = re.compile(r"public function register\(\)(?::\s*void)?\s*\{")


class BindingStatus(str, Enum):
    ADDED = "added"
    ALREADY_PRESENT = "already_present"
    PATTERN_NOT_FOUND = "pattern_not_found"


def binding_fragment(model: str) -> str:
    """Return the exact ``$this->app->bind(...)`` block registered for *model*."""
    return (
        "        $this->app->bind(\n"
        f"            \\App\\Contracts\\{model}RepositoryInterface::class,\n"
        f"            \\App\\Repositories\\{model}Repository::class\n"
        "        );\n"
    )


def insert_binding(content: str, model: str) -> tuple[str, BindingStatus]:
    """Insert the binding for *model* into provider source *content*.

    Returns:
        The (possibly unchanged) content and what happened.  When the
        fragment is already present, or ``register()`` cannot be found, the
        content is returned as-is.
    """
    fragment = binding_fragment(model)
    if fragment in content:
        return content, BindingStatus.ALREADY_PRESENT

    match = REGISTER_METHOD_RE.search(content)
    if match is None:
        return content, BindingStatus.PATTERN_NOT_FOUND

    position = match.end()
    return content[:position] + "\n" + fragment + content[position:], BindingStatus.ADDED


def ensure_binding(provider_path: Path, model: str) -> BindingStatus:
    """Apply :func:`insert_binding` to the provider file on disk.

    The file is rewritten only when the binding was actually added.
    """
    content = provider_path.read_text(encoding="utf-8")
    patched, status = insert_binding(content, model)
    if status is BindingStatus.ADDED:
        provider_path.write_text(patched, encoding="utf-8")
    return status
