"""Render templates and write generated output.

Platform generators hand view models to a GeneratorContext, which renders
them with Jinja2 and writes the result below the output directory.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any

import jinja2

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"


class Filesystem:
    """Reads and writes files relative to a root directory."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def read_file(self, path: str) -> str:
        return (self.root / path).read_text(encoding="utf-8")

    def write_file(self, path: str, contents: str) -> Path:
        """Write a file atomically, creating parent directories."""
        target = self.root / path
        target.parent.mkdir(parents=True, exist_ok=True)

        fd, temp_path = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(contents)
            os.replace(temp_path, target)
        except BaseException:
            Path(temp_path).unlink(missing_ok=True)
            raise
        return target


def json_filter(value: Any) -> str:
    """Serialize a value the way JSON.stringify does."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def wrap_filter(value: str, width: int) -> str:
    """Break lines longer than `width` at whitespace."""
    pattern = rf"(?![^\n]{{1,{width}}}\Z)([^\n]{{1,{width}}})\s"
    return re.sub(pattern, r"\1\n", str(value))


def prefix_filter(value: str, prefix: str, start: int = 0) -> str:
    """Prefix every line from line index `start` on."""
    return "\n".join(
        f"{prefix}{line}" if i >= start else line for i, line in enumerate(str(value).split("\n"))
    )


class GeneratorContext:
    """Template rendering and output writing for one generation run."""

    def __init__(self, template_fs: Filesystem, output_fs: Filesystem) -> None:
        self.template_fs = template_fs
        self.output_fs = output_fs
        self.written: list[Path] = []
        self.env = jinja2.Environment(
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=jinja2.StrictUndefined,
        )
        self.env.filters["json"] = json_filter
        self.env.filters["wrap"] = wrap_filter
        self.env.filters["prefix"] = prefix_filter

    def render(self, template: str, variables: dict[str, Any]) -> str:
        """Render a template file with the given variables."""
        source = self.template_fs.read_file(template)
        return self.env.from_string(source).render(**variables)

    def render_and_write(self, template: str, destination: str, variables: dict[str, Any]) -> Path:
        """Render a template and write it to `destination` in the output directory."""
        rendered = self.render(template, variables)
        path = self.output_fs.write_file(destination, rendered)
        self.written.append(path)
        logger.info("Generated %s", path)
        return path
