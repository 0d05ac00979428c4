"""Shared utility functions for solid-scaffold.

Provides Rich-based status reporting and the string casing helpers used to
derive class names, variables, routes and table names from a model name.
The casing helpers follow the conventions of Laravel's ``Str`` helper so the
generated code lines up with what ``artisan`` itself would produce.
"""

from __future__ import annotations

import re

from rich.console import Console
from rich.markup import escape

console = Console()


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def print_info(message: str) -> None:
    """Print a plain informational line."""
    console.print(escape(message), highlight=False)


# ---------------------------------------------------------------------------
# Casing helpers
# ---------------------------------------------------------------------------


def studly(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``.

    Words that are already capitalised keep their inner casing, so
    ``UserProfile`` is returned unchanged.
    """
    parts = re.split(r"[-_\s]+", value)
    return "".join(word[:1].upper() + word[1:] for word in parts if word)


def camel(value: str) -> str:
    """Convert ``UserProfile`` or ``user_profile`` to ``userProfile``."""
    pascal = studly(value)
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""


def snake(value: str, delimiter: str = "_") -> str:
    """Convert ``UserProfile`` to ``user_profile``.

    A delimiter is inserted before every capital letter that follows another
    character, so acronyms are split letter by letter (``HTTPLog`` becomes
    ``h_t_t_p_log``).
    """
    if value.islower():
        return value
    compact = re.sub(r"\s+", "", studly(value))
    return re.sub(r"(.)(?=[A-Z])", rf"\1{delimiter}", compact).lower()


def kebab(value: str) -> str:
    """Convert ``UserProfile`` to ``user-profile``."""
    return snake(value, "-")


def class_name_to_title(class_name: str) -> str:
    """Insert a space before every interior capital: ``UserProfile`` -> ``User Profile``."""
    return re.sub(r"(?<!^)([A-Z])", r" \1", class_name)


# ---------------------------------------------------------------------------
# Pluralisation
# ---------------------------------------------------------------------------

_UNCOUNTABLE: frozenset[str] = frozenset({
    "audio",
    "data",
    "equipment",
    "feedback",
    "fish",
    "information",
    "metadata",
    "money",
    "news",
    "police",
    "rice",
    "series",
    "sheep",
    "species",
    "staff",
})

_IRREGULAR: dict[str, str] = {
    "child": "children",
    "foot": "feet",
    "goose": "geese",
    "man": "men",
    "mouse": "mice",
    "ox": "oxen",
    "person": "people",
    "tooth": "teeth",
    "woman": "women",
}

# Ordered: the first matching rule wins.
_PLURAL_RULES: list[tuple[str, str]] = [
    (r"(quiz)$", r"\1zes"),
    (r"(matr|vert|ind)(ix|ex)$", r"\1ices"),
    (r"(octop|vir)us$", r"\1i"),
    (r"(alias|status|campus|bus)$", r"\1es"),
    (r"(ax|test)is$", r"\1es"),
    (r"(analy|ba|cri|diagno|parenthe|progno|synop|the)sis$", r"\1ses"),
    (r"(x|ch|ss|sh|zz)$", r"\1es"),
    (r"([^aeiouy])y$", r"\1ies"),
    (r"(?:([^f])fe|([lr])f)$", r"\1\2ves"),
    (r"(hive)$", r"\1s"),
    (r"s$", "s"),
]


def _plural_word(word: str) -> str:
    lower = word.lower()
    if lower in _UNCOUNTABLE:
        return lower
    if lower in _IRREGULAR:
        return _IRREGULAR[lower]
    for pattern, replacement in _PLURAL_RULES:
        if re.search(pattern, lower):
            return re.sub(pattern, replacement, lower)
    return lower + "s"


def _match_case(plural: str, original: str) -> str:
    if original.isupper() and len(original) > 1:
        return plural.upper()
    if original[:1].isupper():
        return plural[:1].upper() + plural[1:]
    return plural


def pluralize(value: str) -> str:
    """Return the plural of a (StudlyCase) word.

    Only the last word of a compound class name is inflected:
    ``UserCategory`` -> ``UserCategories``, ``Person`` -> ``People``.
    """
    if not value:
        return value
    match = re.search(r"[A-Z]?[a-z0-9]*$", value)
    head, last = value[: match.start()], match.group(0)
    if not last:
        head, last = "", value
    return head + _match_case(_plural_word(last), last)
