"""Derive identifiers and type names from OpenAPI documents.

Examples:
  GET  /v1/devices/{id}              -> operation id "v1-devices-id-get"
  title "Contact Point"              -> type name "ContactPoint"
  summary "list all widgets"         -> operation name "ListAllWidgets"
                                        method name "list"
  resource "CareTeam"                -> namespace key "care_team"
"""

from __future__ import annotations

import keyword
import re
from typing import Callable


def _camel_to_snake(name: str) -> str:
    """Convert camelCase or PascalCase to snake_case."""
    s1 = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    return re.sub(r"([a-z\d])([A-Z])", r"\1_\2", s1).lower()


def slugify_operation_id(path: str, method: str) -> str:
    """Build a stable operation id from a path and method."""
    slug = re.sub(r"[^A-Za-z0-9-]", "-", f"{path}-{method}")
    slug = re.sub(r"--+", "-", slug)
    return slug.strip("-")


def type_name(title: str) -> str:
    """Turn a schema display title into a type name."""
    return "".join(title.split())


def operation_name(summary: str | None) -> str:
    """Build a PascalCase name from an operation summary."""
    if not summary:
        return "UnknownOperation"
    return "".join(word[:1].upper() + word[1:].lower() for word in summary.split(" ") if word)


def method_name(summary: str | None, operation_id: str) -> str:
    """Pick the method name used on the generated context class.

    The first word of the summary ("Retrieve a widget" -> "retrieve"),
    falling back to the operation id.
    """
    words = (summary or "").split()
    if words:
        return to_identifier(words[0].lower())
    return to_identifier(operation_id)


def namespace_key(name: str) -> str:
    """Key under which a resource is exposed by the index file."""
    return to_identifier(_camel_to_snake(type_name(name)))


def to_identifier(value: str) -> str:
    """Sanitize any string into a valid Python identifier."""
    name = _camel_to_snake(value)
    name = re.sub(r"[^A-Za-z0-9_]", "_", name)
    name = re.sub(r"_+", "_", name).strip("_")
    if not name:
        return "_"
    if name[0].isdigit():
        name = f"_{name}"
    if keyword.iskeyword(name):
        name += "_"
    return name


def templatize_path(
    path: str, template: str = "${%s}", rename: Callable[[str], str] | None = None
) -> str:
    """Replace `{param}` segments of a path with a language placeholder."""
    rename = rename or (lambda name: name)
    return re.sub(r"\{(\w+)\}", lambda m: template % rename(m.group(1)), path)
