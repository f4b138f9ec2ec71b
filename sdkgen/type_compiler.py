"""Compile JSON Schema nodes into named type definitions.

Handles:
- Arrays (sequence of the item type)
- Objects and untyped schemas with properties (registered record types)
- Titles as type names, naming chains as fallback
- Schemas owned by another resource (opaque imported placeholder)
- oneOf/anyOf/allOf and free-form schemas (opaque placeholder)
- string/number/boolean primitives
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from .errors import TypeCollisionError, UnsupportedTypeError
from .naming import type_name
from .schema import SchemaShape, assert_not_reference, classify, schema_origin

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class FieldDefinition:
    name: str
    type: str
    optional: bool
    comment: str | None = None
    readonly: bool = True


@dataclass(frozen=True)
class TypeDefinition:
    name: str
    fields: tuple[FieldDefinition, ...] = ()


@dataclass
class TypeRegistry:
    """Types registered while compiling a single resource.

    Names are only unique within one registry; create a new one per resource.
    """

    strict: bool = False
    types: dict[str, TypeDefinition] = field(default_factory=dict)

    def add(self, definition: TypeDefinition) -> None:
        existing = self.types.get(definition.name)
        if existing is not None and existing != definition:
            if self.strict:
                raise TypeCollisionError(
                    f"Type {definition.name} was defined twice with different fields"
                )
            logger.warning("Type %s redefined with different fields", definition.name)
        self.types[definition.name] = definition

    def __contains__(self, name: str) -> bool:
        return name in self.types

    def __len__(self) -> int:
        return len(self.types)

    @property
    def all_types(self) -> list[TypeDefinition]:
        return list(self.types.values())


class TypeCompiler:
    """Turns schemas into type references of a target language.

    Subclasses choose how references are spelled by overriding the
    attributes and hooks below.
    """

    # Reference used for unions and free-form schemas
    opaque = "unknown"
    # Reference used for a schema owned by another resource
    imported = "ImportedType"
    primitives: dict[str, str] = {
        "string": "string",
        "number": "number",
        "boolean": "boolean",
    }

    def array_of(self, item_type: str) -> str:
        return f"Array<{item_type}>"

    def format_name(self, name: str) -> str:
        """Drop characters that cannot appear in a type name."""
        return re.sub(r"[^A-Za-z0-9_]", "", name)

    def compile(
        self,
        namespace: str,
        schema: dict[str, Any],
        chain: list[str],
        registry: TypeRegistry,
    ) -> str:
        """Return the type reference for `schema`, registering object types."""
        kind = classify(schema)

        if kind.shape is SchemaShape.ARRAY:
            items = assert_not_reference(schema.get("items") or {})
            return self.array_of(self.compile(namespace, items, chain, registry))
        if kind.shape is SchemaShape.OBJECT:
            return self.compile_object(namespace, schema, chain, registry)
        if kind.shape in (SchemaShape.UNION, SchemaShape.ANY):
            return self.opaque
        return self.compile_primitive(kind.primitive)

    def compile_primitive(self, kind: Any) -> str:
        if not isinstance(kind, str) or kind not in self.primitives:
            raise UnsupportedTypeError(f"Unable to convert type {kind!r}")
        return self.primitives[kind]

    def compile_object(
        self,
        namespace: str,
        schema: dict[str, Any],
        chain: list[str],
        registry: TypeRegistry,
    ) -> str:
        origin = schema_origin(schema)
        if origin and origin != namespace:
            return self.imported

        title = schema.get("title")
        well_known = type_name(title) if title else None
        name = self.format_name(well_known or "".join(chain))
        parent_chain = [well_known] if well_known else chain

        required = set(schema.get("required") or ())
        fields = []
        for prop_name, prop_schema in (schema.get("properties") or {}).items():
            prop_schema = assert_not_reference(prop_schema)
            fields.append(
                FieldDefinition(
                    name=prop_name,
                    type=self.compile(namespace, prop_schema, parent_chain + [prop_name], registry),
                    optional=prop_name not in required,
                    comment=prop_schema.get("description"),
                )
            )

        registry.add(TypeDefinition(name=name, fields=tuple(fields)))
        return name
