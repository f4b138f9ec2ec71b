"""Entry point: python -m sdkgen openapi.json -l typescript -o generated/

Reads an OpenAPI 3 document and writes one file per resource plus an index.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .errors import GeneratorError
from .generator import GenerateOptions, generate
from .platforms import available_platforms


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sdkgen", description="Generate resource SDK files from an OpenAPI 3 document"
    )
    parser.add_argument("specification", help="Path or URL of the OpenAPI document")
    parser.add_argument(
        "-l", "--language", default="typescript", help=f"One of: {', '.join(available_platforms())}"
    )
    parser.add_argument("-o", "--output", default="generated", help="Output directory")
    parser.add_argument("--templates", default=None, help="Override the template directory")
    parser.add_argument(
        "--strict-types",
        action="store_true",
        help="Fail when two different types resolve to the same name",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    options = GenerateOptions(
        specification=args.specification,
        language=args.language,
        output_dir=args.output,
        template_dir=args.templates,
        strict_types=args.strict_types,
    )
    try:
        written = generate(options)
    except GeneratorError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(f"Generated {len(written)} file(s) in {options.output_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
