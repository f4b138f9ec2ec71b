"""Run a full generation: load, dereference, group, compile, write."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .codegen import TEMPLATE_DIR, Filesystem, GeneratorContext
from .document_builder import build_document
from .loader import parse_document
from .platforms import create_platform

logger = logging.getLogger(__name__)


@dataclass
class GenerateOptions:
    """Options of one generation run."""

    #: Path, URL or already-loaded mapping of the OpenAPI document
    specification: str | Path | dict[str, Any]
    #: Platform to generate for
    language: str = "typescript"
    #: Directory receiving the generated files
    output_dir: str | Path = "generated"
    #: Directory holding the platform templates; defaults to the bundled ones
    template_dir: str | Path | None = None
    #: Fail on type name collisions instead of keeping the last definition
    strict_types: bool = False


class CodeGenerator:
    def run(self, options: GenerateOptions) -> list[Path]:
        # Resolve the platform first so an unknown language fails before any I/O
        platform = create_platform(options.language, strict_types=options.strict_types)

        parsed = parse_document(options.specification)
        document = build_document(parsed.dereferenced, parsed.schemas)

        template_dir = options.template_dir or TEMPLATE_DIR / platform.name
        context = GeneratorContext(Filesystem(template_dir), Filesystem(options.output_dir))
        platform.generate(context, document)

        logger.info("Wrote %d file(s) to %s", len(context.written), options.output_dir)
        return context.written


def generate(options: GenerateOptions) -> list[Path]:
    """Generate an SDK and return the written paths."""
    return CodeGenerator().run(options)
