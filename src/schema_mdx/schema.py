"""Schema loading utilities."""

from __future__ import annotations

import glob
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Literal

import yaml
from graphql import GraphQLError, GraphQLSchema, build_client_schema, build_schema

from schema_mdx.errors import SchemaParseError

logger = logging.getLogger(__name__)

SchemaFormat = Literal["graphql", "openapi"]

GRAPHQL_SUFFIXES = {".graphql", ".graphqls", ".gql"}
DATA_SUFFIXES = {".json", ".yaml", ".yml"}
_GLOB_CHARS = set("*?[")


@dataclass(frozen=True)
class LoadedSchema:
    """A parsed schema source, read-only once loaded."""

    source: Path
    format: SchemaFormat
    graphql: GraphQLSchema | None = None
    openapi: dict[str, Any] | None = None


def is_glob(pattern: str | Path) -> bool:
    return any(char in _GLOB_CHARS for char in str(pattern))


def resolve_path(path: str | Path, cwd: str | Path | None = None) -> Path:
    """Resolve *path* against *cwd* unless it is already absolute."""
    candidate = Path(path).expanduser()
    if candidate.is_absolute():
        return candidate
    base = Path(cwd) if cwd is not None else Path.cwd()
    return base / candidate


def expand_inputs(patterns: Iterable[str | Path], cwd: str | Path | None = None) -> list[Path]:
    """Expand glob *patterns* into a sorted, de-duplicated list of files.

    Patterns without glob characters are passed through even when the file
    does not exist, so that loading reports it. A glob matching nothing
    yields no paths.
    """
    seen: set[Path] = set()
    ordered: list[Path] = []
    for pattern in patterns:
        resolved = resolve_path(pattern, cwd)
        if is_glob(pattern):
            matches = sorted(Path(match) for match in glob.glob(str(resolved), recursive=True))
            matches = [match for match in matches if match.is_file()]
            if not matches:
                logger.debug("pattern %s matched no files", pattern)
        else:
            matches = [resolved]
        for match in matches:
            if match not in seen:
                seen.add(match)
                ordered.append(match)
    return ordered


def load_schema(path: str | Path, *, cwd: str | Path | None = None) -> LoadedSchema:
    """Load a schema definition from *path*.

    Parameters
    ----------
    path:
        Location of the schema file. GraphQL SDL may be given as a glob, in
        which case all matching files are merged into one schema.
    cwd:
        Base directory for relative paths. Defaults to the working directory.
    """
    if is_glob(path):
        sources = expand_inputs([path], cwd)
        if not sources:
            raise SchemaParseError(
                f"no schema files match '{path}'", details={"pattern": str(path)}
            )
        unsupported = [source for source in sources if source.suffix not in GRAPHQL_SUFFIXES]
        if unsupported:
            raise SchemaParseError(
                "only GraphQL SDL files can be merged from a glob",
                details={"pattern": str(path), "files": [str(item) for item in unsupported]},
            )
        text = "\n".join(_read_text(source) for source in sources)
        return LoadedSchema(
            source=resolve_path(path, cwd),
            format="graphql",
            graphql=_build_sdl(text, resolve_path(path, cwd)),
        )

    source = resolve_path(path, cwd)
    text = _read_text(source)
    suffix = source.suffix.lower()
    if suffix in GRAPHQL_SUFFIXES:
        return LoadedSchema(source=source, format="graphql", graphql=_build_sdl(text, source))
    if suffix in DATA_SUFFIXES:
        return _load_data_schema(text, source)
    raise SchemaParseError(
        f"unsupported schema file type '{source.suffix}'", details={"path": str(source)}
    )


def _read_text(source: Path) -> str:
    try:
        return source.read_text(encoding="utf-8")
    except FileNotFoundError as err:
        raise SchemaParseError(
            f"schema file '{source}' does not exist", details={"path": str(source)}
        ) from err
    except (OSError, UnicodeDecodeError) as err:
        raise SchemaParseError(
            f"cannot read schema file '{source}': {err}", details={"path": str(source)}
        ) from err


def _build_sdl(text: str, source: Path) -> GraphQLSchema:
    try:
        schema = build_schema(text)
    except (GraphQLError, TypeError) as err:
        raise SchemaParseError(
            f"invalid GraphQL schema in '{source}': {err}", details={"path": str(source)}
        ) from err
    logger.debug("loaded GraphQL SDL from %s", source)
    return schema


def _load_data_schema(text: str, source: Path) -> LoadedSchema:
    try:
        if source.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as err:
        raise SchemaParseError(
            f"cannot parse '{source}': {err}", details={"path": str(source)}
        ) from err

    if not isinstance(data, dict):
        raise SchemaParseError(
            f"schema root in '{source}' must be a mapping", details={"path": str(source)}
        )

    introspection = data.get("data", data)
    if isinstance(introspection, dict) and "__schema" in introspection:
        try:
            schema = build_client_schema(introspection)
        except (GraphQLError, TypeError, KeyError, ValueError) as err:
            raise SchemaParseError(
                f"invalid GraphQL introspection result in '{source}': {err}",
                details={"path": str(source)},
            ) from err
        logger.debug("loaded GraphQL introspection result from %s", source)
        return LoadedSchema(source=source, format="graphql", graphql=schema)

    if "openapi" in data or "swagger" in data:
        paths = data.get("paths", {})
        if paths is not None and not isinstance(paths, dict):
            raise SchemaParseError(
                f"'paths' in '{source}' must be a mapping", details={"path": str(source)}
            )
        logger.debug("loaded OpenAPI document from %s", source)
        return LoadedSchema(source=source, format="openapi", openapi=data)

    raise SchemaParseError(
        f"'{source}' is neither an OpenAPI document nor a GraphQL introspection result",
        details={"path": str(source), "keys": sorted(str(key) for key in data)[:10]},
    )

