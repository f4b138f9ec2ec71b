"""Contract shared by every target language.

A platform turns the DocumentModel into source files: one file per
resource holding its types and an operation wrapper class, plus an index
file exposing every resource.
"""

from __future__ import annotations

import abc
import logging
from typing import Any

from ..codegen import GeneratorContext
from ..models import DocumentModel, OperationModel, ResourceModel
from ..naming import method_name, namespace_key, operation_name, templatize_path, type_name
from ..type_compiler import FieldDefinition, TypeCompiler, TypeDefinition, TypeRegistry

logger = logging.getLogger(__name__)


class PlatformGenerator(abc.ABC):
    """Emits source files for one target language."""

    #: Registry key and template directory name
    name: str = ""

    def __init__(self, strict_types: bool = False) -> None:
        self.strict_types = strict_types

    @abc.abstractmethod
    def generate(self, context: GeneratorContext, document: DocumentModel) -> None:
        """Compile every resource of the document and write its files.

        A resource's view model must be complete before its file is written.
        """


def _deduplicate_method_names(operations: list[dict[str, Any]]) -> None:
    """Ensure method names are unique within a class by appending the HTTP method."""
    seen: set[str] = set()
    for operation in operations:
        name = operation["method_name"]
        if name in seen:
            name = f"{name}_{operation['method'].lower()}"
        counter = 1
        candidate = name
        while candidate in seen:
            counter += 1
            candidate = f"{name}_{counter}"
        operation["method_name"] = candidate
        seen.add(candidate)


class ResourcePlatformGenerator(PlatformGenerator):
    """Shared resource/operation compilation; subclasses pick the spelling."""

    extension: str = ""
    resource_template: str = ""
    index_template: str = ""
    index_filename: str = ""
    path_placeholder: str = "${%s}"

    def __init__(self, strict_types: bool = False) -> None:
        super().__init__(strict_types)
        self.compiler = self.create_compiler()

    @abc.abstractmethod
    def create_compiler(self) -> TypeCompiler:
        """Return the compiler spelling types for this language."""

    # -- naming hooks --------------------------------------------------

    def base_name(self, resource: ResourceModel) -> str:
        return type_name(resource.title)

    def filename(self, resource: ResourceModel) -> str:
        return self.base_name(resource) + self.extension

    def class_name(self, resource: ResourceModel) -> str:
        return f"{self.base_name(resource)}Context"

    def parameter_name(self, name: str) -> str:
        return name

    def field_view(self, field: FieldDefinition) -> dict[str, Any]:
        return {
            "name": field.name,
            "type": field.type,
            "optional": field.optional,
            "comment": field.comment,
            "readonly": field.readonly,
        }

    def type_view(self, definition: TypeDefinition) -> dict[str, Any]:
        return {
            "name": definition.name,
            "fields": [self.field_view(f) for f in definition.fields],
        }

    # -- compilation ---------------------------------------------------

    def namespaces(self, document: DocumentModel) -> list[dict[str, Any]]:
        return [
            {
                "name": resource.name,
                "key": namespace_key(resource.name),
                "filename": self.filename(resource),
                "module": self.filename(resource)[: -len(self.extension)],
                "class_name": self.class_name(resource),
                "resource": resource,
            }
            for resource in document.resources
        ]

    def convert_operation(
        self,
        resource: ResourceModel,
        operation: OperationModel,
        registry: TypeRegistry,
    ) -> dict[str, Any]:
        """Build the view model of one operation, registering its types."""
        name = operation_name(operation.summary)

        if operation.method.upper() == "GET":
            parameter_schema = operation.query_schema
        else:
            default = operation.request.default if operation.request else None
            parameter_schema = default.schema if default else None

        params_optional = bool(parameter_schema) and not parameter_schema.get("required")

        parameters = [
            {
                "name": self.parameter_name(parameter.name),
                "type": self.compiler.compile(
                    resource.name, parameter.schema, [name, parameter.name, "Path"], registry
                ),
                "description": parameter.description,
                "optional": False,
            }
            for parameter in operation.path_parameters
        ]
        if parameter_schema:
            parameters.append(
                {
                    "name": "params",
                    "type": self.compiler.compile(
                        resource.name, parameter_schema, [name, "Params"], registry
                    ),
                    "description": "Parameters for this operation",
                    "optional": params_optional,
                }
            )

        response_schema = operation.default_response.content.require_default().schema
        return {
            "id": operation.id,
            "description": operation.description,
            "summary": operation.summary,
            "method": operation.method.upper(),
            "path": operation.path,
            "templatized_path": templatize_path(
                operation.path, self.path_placeholder, self.parameter_name
            ),
            "method_name": method_name(operation.summary, operation.id),
            "parameters": parameters,
            "has_params": bool(parameter_schema),
            "return_type": self.compiler.compile(
                resource.name, response_schema, [name, "Response"], registry
            ),
        }

    def compile_resource(self, namespace: dict[str, Any]) -> dict[str, Any]:
        """Build the full template context for one resource file."""
        resource: ResourceModel = namespace["resource"]
        registry = TypeRegistry(strict=self.strict_types)

        self.compiler.compile(resource.name, resource.schema, [resource.name], registry)
        operations = [
            self.convert_operation(resource, operation, registry)
            for operation in resource.operations
        ]
        _deduplicate_method_names(operations)

        types = [self.type_view(t) for t in registry.all_types]
        logger.debug(
            "%s: %d type(s), %d operation(s)", resource.name, len(types), len(operations)
        )

        references = [f["type"] for t in types for f in t["fields"]]
        for operation in operations:
            references.append(operation["return_type"])
            references.extend(p["type"] for p in operation["parameters"])

        return {
            "name": resource.name,
            "title": resource.title,
            "class_name": namespace["class_name"],
            "operations": operations,
            "types": types,
            "uses_imported": any(self.compiler.imported in ref for ref in references),
        }

    def generate(self, context: GeneratorContext, document: DocumentModel) -> None:
        namespaces = self.namespaces(document)

        for namespace in namespaces:
            variables = self.compile_resource(namespace)
            context.render_and_write(self.resource_template, namespace["filename"], variables)

        context.render_and_write(
            self.index_template,
            self.index_filename,
            {"namespaces": [{k: v for k, v in n.items() if k != "resource"} for n in namespaces]},
        )
