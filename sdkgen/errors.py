"""Errors raised while generating an SDK.

Every error here is fatal: the run stops at the first one and no partial
output is written for the resource being compiled.
"""

from __future__ import annotations


class GeneratorError(Exception):
    """Base class for all generator failures."""


class PreconditionError(GeneratorError):
    """The dereferenced document does not have the shape the compiler needs."""


class UnexpectedReferenceError(PreconditionError):
    """A `$ref` node survived dereferencing."""

    def __init__(self, ref: str | None = None) -> None:
        self.ref = ref
        message = "Unexpected reference was found"
        if ref:
            message += f": {ref}"
        super().__init__(message)


class MissingContentError(PreconditionError):
    """An operation or response lacks content the compiler requires."""


class MissingValueError(PreconditionError):
    """A required key of a raw OpenAPI object is empty."""


class UnsupportedTypeError(PreconditionError):
    """A primitive schema declares a kind the compiler cannot map."""


class UnknownPlatformError(GeneratorError):
    """No generator is registered for the requested language."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'No known platform "{name}"')


class DereferenceError(GeneratorError):
    """The document could not be dereferenced."""


class TypeCollisionError(GeneratorError):
    """Two structurally different types resolved to the same name."""


class LoadError(GeneratorError):
    """The document could not be read, fetched or parsed."""
