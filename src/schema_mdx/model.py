"""Members extracted from a schema and the documents rendered from them."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Union


class MemberKind(str, Enum):
    """Classification of a documented schema member."""

    QUERY = "query"
    MUTATION = "mutation"
    SUBSCRIPTION = "subscription"
    OPERATION = "operation"
    TYPE = "type"


# OpenAPI operations are only written through their tag document.
KIND_DIRECTORIES = {
    MemberKind.QUERY: "query",
    MemberKind.MUTATION: "mutation",
    MemberKind.SUBSCRIPTION: "subscription",
    MemberKind.TYPE: "types",
}

DEFAULT_TAG = "default"
_UNSAFE_FILENAME = re.compile(r"[^\w-]+")


def tag_slug(tag: str) -> str:
    """Lowercased file name stem for *tag*, free of path separators.

    >>> tag_slug("../Museum Hours")
    'museum-hours'
    """
    return _UNSAFE_FILENAME.sub("-", tag.lower()).strip("-") or DEFAULT_TAG


@dataclass(frozen=True)
class Entry:
    """A named argument or field with its rendered type reference."""

    name: str
    type_signature: str


@dataclass(frozen=True)
class OperationMember:
    """A root operation field (GraphQL) or an HTTP operation (OpenAPI)."""

    name: str
    kind: MemberKind
    description: str | None = None
    arguments: tuple[Entry, ...] = ()
    tag: str | None = None
    method: str | None = None
    path: str | None = None

    def __post_init__(self) -> None:
        if self.kind is MemberKind.TYPE:
            raise ValueError("operation members cannot be of kind 'type'")

    @property
    def output_path(self) -> str:
        directory = KIND_DIRECTORIES.get(self.kind)
        if directory is None:
            raise ValueError(f"'{self.name}' is written as part of its tag document")
        return f"{directory}/{self.name}.mdx"


@dataclass(frozen=True)
class TypeMember:
    """A named object type and its fields."""

    name: str
    description: str | None = None
    fields: tuple[Entry, ...] = ()

    @property
    def kind(self) -> MemberKind:
        return MemberKind.TYPE

    @property
    def output_path(self) -> str:
        return f"{KIND_DIRECTORIES[MemberKind.TYPE]}/{self.name}.mdx"


Member = Union[OperationMember, TypeMember]


@dataclass(frozen=True)
class Document:
    """A rendered MDX file relative to the output root."""

    output_path: str
    content: str


@dataclass(frozen=True)
class TagDocument:
    """Operations sharing a tag, combined into one MDX file."""

    tag: str
    content: str

    @property
    def output_path(self) -> str:
        return f"{tag_slug(self.tag)}.mdx"

    def to_document(self) -> Document:
        return Document(output_path=self.output_path, content=self.content)
