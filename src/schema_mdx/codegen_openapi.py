"""Tag grouped documents for OpenAPI operations."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Iterator

from schema_mdx.errors import SchemaParseError
from schema_mdx.model import (
    DEFAULT_TAG,
    Document,
    Entry,
    MemberKind,
    OperationMember,
    TagDocument,
    TypeMember,
    tag_slug,
)
from schema_mdx.render import render_member, render_tag

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")
PARAMETER_LOCATIONS = ("path", "query", "header", "cookie")

_WORD = re.compile(r"[A-Za-z0-9]+")
_MAX_REF_DEPTH = 32


@dataclass
class TagGroup:
    """Operations collected under one tag, in document order."""

    name: str
    description: str | None = None
    operations: list[OperationMember] = field(default_factory=list)


def generate_tags(document: dict[str, Any]) -> list[TagDocument]:
    """Render one combined document per tag of *document*."""
    tags = [
        TagDocument(
            tag=group.name,
            content=render_tag(group.name, group.operations, group.description),
        )
        for group in group_by_tag(document)
    ]
    logger.debug("rendered %d OpenAPI tag documents", len(tags))
    return tags


def generate_documents(document: dict[str, Any]) -> list[Document]:
    """Tag documents followed by one document per object schema."""
    documents = [tag.to_document() for tag in generate_tags(document)]
    documents.extend(
        Document(output_path=member.output_path, content=render_member(member))
        for member in iter_types(document)
    )
    return documents


def group_by_tag(document: dict[str, Any]) -> list[TagGroup]:
    """Group operations by tag.

    Tags declared at the top level of the document come first, in their
    declared order, followed by undeclared tags in order of first use.
    Tags that share a file name (see :func:`~schema_mdx.model.tag_slug`)
    form one group named after the first spelling seen, so a declared
    `Default` tag also collects untagged operations. Declared tags without
    operations are dropped.
    """
    groups: dict[str, TagGroup] = {}
    for declared in document.get("tags") or []:
        if isinstance(declared, dict) and isinstance(declared.get("name"), str):
            name = declared["name"]
            groups.setdefault(
                tag_slug(name), TagGroup(name=name, description=declared.get("description"))
            )

    for operation in iter_operations(document):
        tag = operation.tag or DEFAULT_TAG
        group = groups.setdefault(tag_slug(tag), TagGroup(name=tag))
        # an operation tagged with two spellings of one tag is listed once
        if any(
            listed.method == operation.method and listed.path == operation.path
            for listed in group.operations
        ):
            continue
        group.operations.append(operation)

    return [group for group in groups.values() if group.operations]


def iter_operations(document: dict[str, Any]) -> Iterator[OperationMember]:
    """Yield one member per (tag, operation) pair of *document*."""
    paths = document.get("paths") or {}
    for path, path_item in paths.items():
        if str(path).startswith("x-"):
            continue
        path_item = _resolve(document, path_item)
        if not isinstance(path_item, dict):
            continue
        shared_parameters = path_item.get("parameters") or []
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if not isinstance(operation, dict):
                continue
            arguments = tuple(
                _operation_arguments(document, shared_parameters, operation)
            )
            name = operation.get("operationId") or operation_name(method, path)
            description = operation.get("description") or operation.get("summary")
            for tag in operation.get("tags") or [None]:
                yield OperationMember(
                    name=name,
                    kind=MemberKind.OPERATION,
                    description=description,
                    arguments=arguments,
                    tag=tag,
                    method=method,
                    path=path,
                )


def iter_types(document: dict[str, Any]) -> Iterator[TypeMember]:
    """Yield object schemas from ``components.schemas`` or ``definitions``."""
    schemas = (document.get("components") or {}).get("schemas")
    if schemas is None:
        schemas = document.get("definitions") or {}
    for name, schema in schemas.items():
        if not isinstance(schema, dict) or "enum" in schema:
            continue
        if schema.get("type", "object") != "object" or "properties" not in schema:
            continue
        required = set(schema.get("required") or [])
        yield TypeMember(
            name=name,
            description=schema.get("description"),
            fields=tuple(
                Entry(
                    name=prop_name,
                    type_signature=type_signature(
                        document, prop_schema, required=prop_name in required
                    ),
                )
                for prop_name, prop_schema in schema["properties"].items()
            ),
        )


def operation_name(method: str, path: str) -> str:
    """Identifier for an operation without ``operationId``.

    >>> operation_name("get", "/pets/{petId}")
    'getPetsPetId'
    """
    words = _WORD.findall(path)
    return method.lower() + "".join(word[:1].upper() + word[1:] for word in words)


def type_signature(document: dict[str, Any], schema: Any, *, required: bool = False) -> str:
    """Render a JSON schema as a compact type reference like ``[Pet]!``."""
    signature = _schema_signature(document, schema, 0)
    return f"{signature}!" if required else signature


def _schema_signature(document: dict[str, Any], schema: Any, depth: int) -> str:
    if not isinstance(schema, dict):
        return "any"
    if "$ref" in schema:
        return str(schema["$ref"]).rsplit("/", 1)[-1]
    if depth > _MAX_REF_DEPTH:
        return "any"
    for keyword, joiner in (("allOf", " & "), ("oneOf", " | "), ("anyOf", " | ")):
        variants = schema.get(keyword)
        if isinstance(variants, list) and variants:
            return joiner.join(_schema_signature(document, item, depth + 1) for item in variants)

    schema_type = schema.get("type")
    if isinstance(schema_type, list):
        return " | ".join(str(item) for item in schema_type)
    if schema_type == "array":
        return f"[{_schema_signature(document, schema.get('items'), depth + 1)}]"
    if schema_type is None:
        return "object" if "properties" in schema else "any"
    if "format" in schema:
        return f"{schema_type}({schema['format']})"
    return str(schema_type)


def _operation_arguments(
    document: dict[str, Any],
    shared_parameters: list[Any],
    operation: dict[str, Any],
) -> Iterator[Entry]:
    parameters: dict[tuple[str, str], dict[str, Any]] = {}
    for raw in list(shared_parameters) + list(operation.get("parameters") or []):
        parameter = _resolve(document, raw)
        if isinstance(parameter, dict) and "name" in parameter:
            parameters[(parameter["name"], parameter.get("in", ""))] = parameter

    body: dict[str, Any] | None = None
    for (name, location), parameter in parameters.items():
        if location == "body":
            body = parameter
            continue
        if location not in PARAMETER_LOCATIONS:
            continue
        required = bool(parameter.get("required")) or location == "path"
        yield Entry(
            name=name,
            type_signature=type_signature(
                document, parameter.get("schema", parameter), required=required
            ),
        )

    if body is not None:
        yield Entry(
            name="body",
            type_signature=type_signature(
                document, body.get("schema"), required=bool(body.get("required"))
            ),
        )
        return

    request_body = _resolve(document, operation.get("requestBody"))
    if isinstance(request_body, dict):
        yield Entry(
            name="body",
            type_signature=type_signature(
                document,
                _media_schema(request_body.get("content") or {}),
                required=bool(request_body.get("required")),
            ),
        )


def _media_schema(content: dict[str, Any]) -> Any:
    media = content.get("application/json")
    if media is None and content:
        media = next(iter(content.values()))
    return media.get("schema") if isinstance(media, dict) else None


def _resolve(document: dict[str, Any], node: Any) -> Any:
    """Follow local ``$ref`` pointers until a concrete node is reached."""
    for _ in range(_MAX_REF_DEPTH):
        if not isinstance(node, dict) or "$ref" not in node:
            return node
        ref = node["$ref"]
        if not isinstance(ref, str) or not ref.startswith("#/"):
            raise SchemaParseError(
                f"unsupported reference '{ref}'", details={"ref": ref}
            )
        node = document
        for part in ref[2:].split("/"):
            key = part.replace("~1", "/").replace("~0", "~")
            if not isinstance(node, dict) or key not in node:
                raise SchemaParseError(
                    f"unresolvable reference '{ref}'", details={"ref": ref}
                )
            node = node[key]
    raise SchemaParseError("reference chain too deep", details={"node": str(node)[:80]})
