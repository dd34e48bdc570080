"""Command line interface for schema-mdx."""

from __future__ import annotations

import argparse
import logging
from typing import Any, Callable

from schema_mdx.config import GRANULARITIES, FilesConfig, GenerateConfig, load_config
from schema_mdx.errors import ConfigurationError, SchemaMdxError
from schema_mdx.generate import generate_all, generate_files, generate_tags

Handler = Callable[[argparse.Namespace], int]

logger = logging.getLogger("schema_mdx")


def _options(args: argparse.Namespace) -> dict[str, Any]:
    """Merge config file values with explicit command line values."""
    values: dict[str, Any] = load_config(args.config) if args.config else {}
    for key in ("input", "output", "per", "cwd"):
        value = getattr(args, key, None)
        if value:
            values[key] = value
    return values


def _single_input(options: dict[str, Any], command: str) -> str | None:
    inputs = options.get("input")
    if not isinstance(inputs, list):
        return inputs
    if len(inputs) > 1:
        raise ConfigurationError(
            f"{command} takes a single input, use 'files' for several",
            details={"option": "input", "value": inputs},
        )
    return inputs[0] if inputs else None


def _handle_generate(args: argparse.Namespace) -> int:
    """Write one file per schema member."""
    options = _options(args)
    inputs = _single_input(options, "generate")
    generate_all(GenerateConfig(input=inputs, output=options.get("output"), cwd=options.get("cwd")))
    return 0


def _handle_files(args: argparse.Namespace) -> int:
    """Write documents for every input matched by the given globs."""
    options = _options(args)
    written = generate_files(
        FilesConfig(
            input=options.get("input") or [],
            output=options.get("output"),
            per=options.get("per", "entity"),
            cwd=options.get("cwd"),
        )
    )
    for path in written:
        print(path)
    return 0


def _handle_tags(args: argparse.Namespace) -> int:
    """Print tag documents of an OpenAPI schema to stdout."""
    options = _options(args)
    source = _single_input(options, "tags")
    if not source:
        raise ConfigurationError("an input schema is required", details={"option": "input"})
    for index, tag in enumerate(generate_tags(source, cwd=options.get("cwd"))):
        if index:
            print()
        print(f"<!-- {tag.output_path} -->")
        print(tag.content)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="schema-mdx",
        description="Generate MDX documentation from GraphQL or OpenAPI schemas.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="one file per operation and type")
    generate.add_argument("input", nargs="?", help="schema file (GraphQL SDL may be a glob)")
    generate.add_argument("-o", "--output", help="output directory")
    generate.add_argument("--cwd", help="base directory for relative paths")
    generate.add_argument("-c", "--config", help="TOML file with a [generate] table")
    generate.set_defaults(func=_handle_generate)

    files = subparsers.add_parser("files", help="documents for several glob expanded inputs")
    files.add_argument("input", nargs="*", help="schema files or glob patterns")
    files.add_argument("-o", "--output", help="output directory")
    files.add_argument("--per", choices=GRANULARITIES, help="one file per entity or per input")
    files.add_argument("--cwd", help="base directory for relative paths")
    files.add_argument("-c", "--config", help="TOML file with a [generate] table")
    files.set_defaults(func=_handle_files)

    tags = subparsers.add_parser("tags", help="print tag grouped documents of an OpenAPI schema")
    tags.add_argument("input", nargs="?", help="OpenAPI document")
    tags.add_argument("--cwd", help="base directory for relative paths")
    tags.add_argument("-c", "--config", help="TOML file with a [generate] table")
    tags.set_defaults(func=_handle_tags)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    handler: Handler = args.func
    try:
        return handler(args)
    except SchemaMdxError as err:
        logger.error("%s", err.message)
        return 1
    except OSError as err:
        logger.error("cannot write output: %s", err)
        return 1


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
