"""Infer which resource an operation belongs to.

The default response tells us: an operation returning a Widget (or a list
envelope of Widgets) belongs to the Widget resource.
"""

from __future__ import annotations

from typing import Any

from .models import default_media_type
from .schema import assert_not_reference, schema_origin

# Bucket for operations whose resource cannot be inferred
SHARED_RESOURCE = "shared"


def _list_item_schema(schema: dict[str, Any]) -> dict[str, Any] | None:
    """Unwrap `{object: "list", data: [...]}` envelopes to their item schema.

    Returns the schema unchanged when it is not a list envelope and None when
    the envelope has no array payload.
    """
    properties = schema.get("properties") or {}
    object_property = properties.get("object")
    if not object_property:
        return schema

    enum = assert_not_reference(object_property).get("enum") or []
    if not enum or enum[0] != "list":
        return schema

    data_property = properties.get("data")
    if not data_property or assert_not_reference(data_property).get("type") != "array":
        return None
    return assert_not_reference(data_property.get("items") or {})


def extract_resource(operation: dict[str, Any]) -> str | None:
    """Return the resource name of a raw dereferenced operation, if any."""
    responses = operation.get("responses") or {}
    default_response = responses.get("default")
    if not default_response:
        return None

    content = assert_not_reference(default_response).get("content")
    media_type = default_media_type(content)
    if media_type is None:
        return None

    schema = content[media_type].get("schema")
    if not schema:
        return None

    schema = _list_item_schema(assert_not_reference(schema))
    if schema is None:
        return None
    return schema_origin(schema)
