"""Normalized views over raw OpenAPI objects.

Each model keeps the raw mapping it was built from and exposes uniform
accessors on top of it. Models are built from a dereferenced document, so
any `$ref` met here is a precondition violation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import MissingContentError, MissingValueError
from .naming import slugify_operation_id
from .schema import assert_not_reference

# Media type preferred when a content map declares several
PREFERRED_MEDIA_TYPE = "application/json"


@dataclass(frozen=True)
class Model:
    raw: dict[str, Any] = field(repr=False, compare=False)

    def get_raw(self, key: str, required: bool = False) -> Any:
        """Read a key of the underlying raw object.

        Raises MissingValueError when `required` is set and the value is empty.
        """
        value = self.raw.get(key)
        if not value and required:
            raise MissingValueError(f"Value was required for key {key}")
        return value

    def get_extension(self, key: str) -> Any:
        """Read an `x-` vendor extension of the underlying raw object."""
        return self.raw.get(f"x-{key}")


@dataclass(frozen=True)
class MediaTypeModel(Model):
    type: str = ""
    schema: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, media_type: str, raw: dict[str, Any]) -> MediaTypeModel:
        schema = raw.get("schema")
        return cls(
            raw=raw,
            type=media_type,
            schema=assert_not_reference(schema) if schema else {},
        )


@dataclass(frozen=True)
class ContentModel(Model):
    media_types: tuple[MediaTypeModel, ...] = ()

    @property
    def default(self) -> MediaTypeModel | None:
        """The media type used for typing: JSON when declared, else the first one."""
        for media in self.media_types:
            if media.type == PREFERRED_MEDIA_TYPE:
                return media
        return self.media_types[0] if self.media_types else None

    def require_default(self) -> MediaTypeModel:
        default = self.default
        if default is None:
            raise MissingContentError("Content declares no media types")
        return default

    @classmethod
    def from_raw(cls, raw: dict[str, Any] | None) -> ContentModel:
        raw = raw or {}
        return cls(
            raw=raw,
            media_types=tuple(MediaTypeModel.from_raw(t, m) for t, m in raw.items()),
        )


def default_media_type(content: dict[str, Any] | None) -> str | None:
    """Pick the default media type key of a raw content map."""
    if not content:
        return None
    if PREFERRED_MEDIA_TYPE in content:
        return PREFERRED_MEDIA_TYPE
    return next(iter(content))


@dataclass(frozen=True)
class ParameterModel(Model):
    name: str = ""
    location: str = "query"
    required: bool = False
    schema: dict[str, Any] = field(default_factory=dict)

    @property
    def description(self) -> str | None:
        return self.get_raw("description")

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> ParameterModel:
        raw = assert_not_reference(raw)
        schema = raw.get("schema")
        return cls(
            raw=raw,
            name=raw["name"],
            location=raw.get("in", "query"),
            required=bool(raw.get("required", False)),
            schema=assert_not_reference(schema) if schema else {},
        )


@dataclass(frozen=True)
class ResponseModel(Model):
    code: str = ""
    content: ContentModel = field(default_factory=lambda: ContentModel(raw={}))

    @property
    def description(self) -> str | None:
        return self.get_raw("description")

    @classmethod
    def from_raw(cls, code: str, raw: dict[str, Any]) -> ResponseModel:
        raw = assert_not_reference(raw)
        return cls(raw=raw, code=str(code), content=ContentModel.from_raw(raw.get("content")))


@dataclass(frozen=True)
class OperationModel(Model):
    """One path + method pair of the document."""

    id: str = ""
    path: str = ""
    method: str = ""
    summary: str | None = None
    description: str | None = None
    tags: tuple[str, ...] = ()
    path_parameters: tuple[ParameterModel, ...] = ()
    query_parameters: tuple[ParameterModel, ...] = ()
    header_parameters: tuple[ParameterModel, ...] = ()
    cookie_parameters: tuple[ParameterModel, ...] = ()
    request: ContentModel | None = None
    responses: tuple[ResponseModel, ...] = ()

    @property
    def default_response(self) -> ResponseModel:
        """First declared response, used for the return type."""
        if not self.responses:
            raise MissingContentError(f"Operation {self.id} declares no responses")
        return self.responses[0]

    @property
    def query_schema(self) -> dict[str, Any] | None:
        """Object schema combining all query parameters."""
        if not self.query_parameters:
            return None
        return {
            "type": "object",
            "properties": {p.name: p.schema for p in self.query_parameters},
            "required": [p.name for p in self.query_parameters if p.required],
        }

    @classmethod
    def from_raw(cls, path: str, method: str, operation: dict[str, Any]) -> OperationModel:
        parameters = [ParameterModel.from_raw(p) for p in operation.get("parameters") or []]

        def located(location: str) -> tuple[ParameterModel, ...]:
            return tuple(p for p in parameters if p.location == location)

        request_body = operation.get("requestBody")
        request = None
        if request_body:
            request = ContentModel.from_raw(assert_not_reference(request_body).get("content"))

        responses = tuple(
            ResponseModel.from_raw(code, response)
            for code, response in (operation.get("responses") or {}).items()
        )

        return cls(
            raw=operation,
            id=operation.get("operationId") or slugify_operation_id(path, method),
            path=path,
            method=method,
            summary=operation.get("summary"),
            description=operation.get("description"),
            tags=tuple(operation.get("tags") or ()),
            path_parameters=located("path"),
            query_parameters=located("query"),
            header_parameters=located("header"),
            cookie_parameters=located("cookie"),
            request=request,
            responses=responses,
        )


@dataclass(frozen=True)
class ResourceModel(Model):
    """A named schema and the operations attributed to it."""

    name: str = ""
    operations: tuple[OperationModel, ...] = ()

    @property
    def schema(self) -> dict[str, Any]:
        return self.raw

    @property
    def title(self) -> str:
        return self.raw.get("title") or self.name


@dataclass(frozen=True)
class DocumentModel:
    resources: tuple[ResourceModel, ...] = ()
