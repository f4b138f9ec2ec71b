"""Schema primitives used throughout the generator.

Handles:
- `$ref` detection and assertion
- Registry-name stamps added before dereferencing
- Classification of a JSON Schema node into a closed set of shapes
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from .errors import UnexpectedReferenceError

# Vendor key carrying the components/schemas name through dereferencing
ORIGIN_KEY = "x-openapi-name"

_UNION_KEYS = ("oneOf", "anyOf", "allOf")


class SchemaShape(enum.Enum):
    ARRAY = "array"
    OBJECT = "object"
    UNION = "union"
    ANY = "any"
    PRIMITIVE = "primitive"


@dataclass(frozen=True)
class SchemaKind:
    """Result of classifying a schema node."""

    shape: SchemaShape
    primitive: str | None = None


def is_reference(node: Any) -> bool:
    """Check whether a node is a `$ref` indirection."""
    return isinstance(node, dict) and "$ref" in node


def assert_not_reference(node: Any) -> Any:
    """Return the node, refusing anything the dereferencer left behind."""
    if is_reference(node):
        raise UnexpectedReferenceError(node["$ref"])
    return node


def schema_origin(schema: dict[str, Any] | None) -> str | None:
    """Return the components/schemas name a schema was inlined from."""
    if not schema:
        return None
    return schema.get(ORIGIN_KEY)


def classify(schema: dict[str, Any]) -> SchemaKind:
    """Classify a schema node, most specific shape first."""
    assert_not_reference(schema)
    schema_type = schema.get("type")

    if schema_type == "array":
        return SchemaKind(SchemaShape.ARRAY)
    if schema_type == "object" or (schema_type is None and "properties" in schema):
        return SchemaKind(SchemaShape.OBJECT)
    if any(key in schema for key in _UNION_KEYS):
        return SchemaKind(SchemaShape.UNION)
    if schema_type is None:
        return SchemaKind(SchemaShape.ANY)
    return SchemaKind(SchemaShape.PRIMITIVE, schema_type)
