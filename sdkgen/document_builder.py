"""Group the operations of a dereferenced document into resources.

Walks every path and HTTP method, normalizes each operation, infers its
resource from the default response and pairs every group with the
component schema of the same name.
"""

from __future__ import annotations

import logging
from typing import Any

from .loader import get_paths, get_schemas
from .models import DocumentModel, OperationModel, ResourceModel
from .resource import SHARED_RESOURCE, extract_resource
from .schema import assert_not_reference

logger = logging.getLogger(__name__)

# The eight operation keys of an OpenAPI 3 path item, in walk order
HTTP_METHODS: tuple[str, ...] = (
    "get",
    "put",
    "post",
    "delete",
    "options",
    "head",
    "patch",
    "trace",
)


def group_operations(document: dict[str, Any]) -> dict[str, list[OperationModel]]:
    """Normalize every operation and bucket it by inferred resource name."""
    groups: dict[str, list[OperationModel]] = {}

    for path, path_item in get_paths(document).items():
        path_item = assert_not_reference(path_item) or {}
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if not operation:
                continue

            model = OperationModel.from_raw(path, method, operation)
            resource_name = extract_resource(operation) or SHARED_RESOURCE
            logger.debug("%s %s -> %s (%s)", method.upper(), path, resource_name, model.id)
            groups.setdefault(resource_name, []).append(model)

    return groups


def build_document(
    document: dict[str, Any],
    schemas: dict[str, Any] | None = None,
) -> DocumentModel:
    """Build the document model handed to a platform generator.

    `document` is the dereferenced tree. `schemas` is the raw component
    registry deciding which groups become resources; it defaults to the
    dereferenced one. The schema attached to each resource is always the
    dereferenced entry of the same name.
    """
    dereferenced_schemas = get_schemas(document)
    registry = dereferenced_schemas if schemas is None else schemas

    resources: list[ResourceModel] = []
    for name, operations in group_operations(document).items():
        if name not in registry or name not in dereferenced_schemas:
            logger.debug("Dropping %d operation(s) of unknown resource %r", len(operations), name)
            continue

        schema = assert_not_reference(dereferenced_schemas[name])
        resources.append(ResourceModel(raw=schema, name=name, operations=tuple(operations)))

    logger.info("Found %d resource(s)", len(resources))
    return DocumentModel(resources=tuple(resources))
