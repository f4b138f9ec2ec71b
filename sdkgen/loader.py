"""Load, stamp and dereference an OpenAPI 3 document.

Component schemas are stamped with their registry name before `$ref`
nodes are inlined, so every inlined copy still says which schema it was.
"""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx
import jsonref
import yaml

from .errors import DereferenceError, LoadError, UnexpectedReferenceError
from .schema import ORIGIN_KEY

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")


@dataclass(frozen=True)
class ParsedDocument:
    """A document before and after dereferencing."""

    raw: dict[str, Any]
    dereferenced: dict[str, Any]

    @property
    def schemas(self) -> dict[str, Any]:
        return get_schemas(self.raw)


def _string_keys(node: Any) -> Any:
    """Turn every mapping key into a string.

    YAML reads `200:` as an int and `on:`/`yes:` as booleans; keys are spelled
    the way JSON spells those scalars ("200", "true").
    """
    if isinstance(node, dict):
        return {
            key if isinstance(key, str) else json.dumps(key): _string_keys(value)
            for key, value in node.items()
        }
    if isinstance(node, list):
        return [_string_keys(item) for item in node]
    return node


def _parse(text: str, yaml_format: bool, source: str) -> dict[str, Any]:
    try:
        spec = _string_keys(yaml.safe_load(text)) if yaml_format else json.loads(text)
    except (ValueError, yaml.YAMLError) as e:
        raise LoadError(f"Unable to parse {source}: {e}") from e
    if not isinstance(spec, dict):
        raise LoadError(f"{source} does not hold an OpenAPI document")
    return spec


def load_spec(source: str | Path | dict[str, Any]) -> dict[str, Any]:
    """Load an OpenAPI document from a mapping, a URL or a JSON/YAML file."""
    if isinstance(source, dict):
        return source

    source_str = str(source)
    yaml_format = source_str.endswith(_YAML_SUFFIXES)
    if source_str.startswith(("http://", "https://")):
        logger.info("Fetching %s", source_str)
        try:
            response = httpx.get(source_str, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise LoadError(f"Unable to fetch {source_str}: {e}") from e
        return _parse(response.text, yaml_format, source_str)

    spec_file = Path(source_str)
    logger.info("Reading %s", spec_file)
    try:
        text = spec_file.read_text(encoding="utf-8")
    except OSError as e:
        raise LoadError(f"Unable to read {spec_file}: {e}") from e
    return _parse(text, yaml_format, source_str)


def get_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the spec."""
    return spec.get("paths") or {}


def get_schemas(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract component schemas from the spec."""
    return (spec.get("components") or {}).get("schemas") or {}


def stamp_schema_origins(spec: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of the spec with each component schema stamped with its name."""
    stamped = copy.deepcopy(spec)
    for name, schema in get_schemas(stamped).items():
        if isinstance(schema, dict) and "$ref" not in schema:
            schema[ORIGIN_KEY] = name
    return stamped


def find_reference(node: Any) -> str | None:
    """Return the first `$ref` left in a tree, or None."""
    seen: set[int] = set()
    stack = [node]
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        if isinstance(current, dict):
            ref = current.get("$ref")
            if isinstance(ref, str):
                return ref
            stack.extend(current.values())
        elif isinstance(current, list):
            stack.extend(current)
    return None


def dereference(spec: dict[str, Any]) -> dict[str, Any]:
    """Inline every `$ref` of the spec."""
    try:
        resolved = jsonref.replace_refs(spec, proxies=False, lazy_load=False)
    except jsonref.JsonRefError as e:
        raise DereferenceError(f"Unable to dereference document: {e}") from e

    leftover = find_reference(resolved)
    if leftover is not None:
        raise UnexpectedReferenceError(leftover)
    return resolved


def parse_document(source: str | Path | dict[str, Any]) -> ParsedDocument:
    """Load a document and dereference a stamped copy of it."""
    raw = load_spec(source)
    dereferenced = dereference(stamp_schema_origins(raw))
    logger.info(
        "Loaded %d path(s), %d component schema(s)",
        len(get_paths(dereferenced)),
        len(get_schemas(raw)),
    )
    return ParsedDocument(raw=raw, dereferenced=dereferenced)
