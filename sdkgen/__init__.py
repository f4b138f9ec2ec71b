"""Generate resource SDKs from OpenAPI 3 documents."""

__version__ = "0.1.0"

from .document_builder import build_document
from .errors import GeneratorError, UnknownPlatformError
from .generator import CodeGenerator, GenerateOptions, generate
from .loader import parse_document
from .platforms import create_platform

__all__ = [
    "CodeGenerator",
    "GenerateOptions",
    "GeneratorError",
    "UnknownPlatformError",
    "build_document",
    "create_platform",
    "generate",
    "parse_document",
]
