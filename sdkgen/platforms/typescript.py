"""TypeScript output: one `<Title>.ts` per resource plus `index.ts`."""

from __future__ import annotations

import re
from typing import Any

from ..type_compiler import FieldDefinition, TypeCompiler
from .base import ResourcePlatformGenerator

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class TypescriptTypeCompiler(TypeCompiler):
    pass


class TypescriptGenerator(ResourcePlatformGenerator):
    name = "typescript"
    extension = ".ts"
    resource_template = "resource.ts.j2"
    index_template = "index.ts.j2"
    index_filename = "index.ts"

    def create_compiler(self) -> TypeCompiler:
        return TypescriptTypeCompiler()

    def field_view(self, field: FieldDefinition) -> dict[str, Any]:
        view = super().field_view(field)
        # Property keys that are not identifiers must be quoted
        if not _IDENTIFIER.match(field.name):
            view["name"] = f'"{field.name}"'
        return view
