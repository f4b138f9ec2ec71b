"""Python output: one module per resource plus an `__init__.py` index.

Types become frozen dataclasses; each resource gets a context class whose
methods forward to the client's `request()`.
"""

from __future__ import annotations

import json
from typing import Any

from ..models import ResourceModel
from ..naming import namespace_key, to_identifier
from ..type_compiler import FieldDefinition, TypeCompiler, TypeDefinition
from .base import ResourcePlatformGenerator


class PythonTypeCompiler(TypeCompiler):
    opaque = "Any"
    primitives = {
        "string": "str",
        "number": "float",
        "boolean": "bool",
    }

    def array_of(self, item_type: str) -> str:
        return f"list[{item_type}]"


class PythonGenerator(ResourcePlatformGenerator):
    name = "python"
    extension = ".py"
    resource_template = "resource.py.j2"
    index_template = "__init__.py.j2"
    index_filename = "__init__.py"
    path_placeholder = "{%s}"

    def create_compiler(self) -> TypeCompiler:
        return PythonTypeCompiler()

    def filename(self, resource: ResourceModel) -> str:
        return namespace_key(self.base_name(resource)) + self.extension

    def parameter_name(self, name: str) -> str:
        return to_identifier(name)

    def field_view(self, field: FieldDefinition) -> dict[str, Any]:
        view = super().field_view(field)
        view["name"] = to_identifier(field.name)

        arguments = []
        if field.optional:
            view["type"] = f"{field.type} | None"
            arguments.append("default=None")
        if view["name"] != field.name:
            arguments.append(f'metadata={{"name": {json.dumps(field.name)}}}')
        view["default"] = f" = dataclasses.field({', '.join(arguments)})" if arguments else ""
        return view

    def type_view(self, definition: TypeDefinition) -> dict[str, Any]:
        view = super().type_view(definition)
        # Dataclass fields without defaults must come first
        view["fields"].sort(key=lambda f: f["optional"])
        return view
