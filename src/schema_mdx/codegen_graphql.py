"""Documents for GraphQL operations and object types."""

from __future__ import annotations

import logging
from typing import Iterator

from graphql import GraphQLObjectType, GraphQLSchema

from schema_mdx.model import Document, Entry, Member, MemberKind, OperationMember, TypeMember
from schema_mdx.render import render_member

logger = logging.getLogger(__name__)


def generate_documents(schema: GraphQLSchema) -> list[Document]:
    """Render one document per root operation field and per object type."""
    documents = [
        Document(output_path=member.output_path, content=render_member(member))
        for member in iter_members(schema)
    ]
    logger.debug("rendered %d GraphQL documents", len(documents))
    return documents


def iter_members(schema: GraphQLSchema) -> Iterator[Member]:
    """Yield query, mutation and subscription fields, then object types."""
    roots = (
        (MemberKind.QUERY, schema.query_type),
        (MemberKind.MUTATION, schema.mutation_type),
        (MemberKind.SUBSCRIPTION, schema.subscription_type),
    )
    for kind, root_type in roots:
        # a type serving as several roots is documented under the first one
        if root_type is None or operation_kind(schema, root_type) is not kind:
            continue
        for name, field in root_type.fields.items():
            yield OperationMember(
                name=name,
                kind=kind,
                description=field.description,
                arguments=tuple(
                    Entry(name=arg_name, type_signature=str(arg.type))
                    for arg_name, arg in field.args.items()
                ),
            )

    for name, named_type in schema.type_map.items():
        if not isinstance(named_type, GraphQLObjectType) or name.startswith("__"):
            continue
        if operation_kind(schema, named_type) is not MemberKind.TYPE:
            continue
        yield TypeMember(
            name=name,
            description=named_type.description,
            fields=tuple(
                Entry(name=field_name, type_signature=str(field.type))
                for field_name, field in named_type.fields.items()
            ),
        )


def operation_kind(schema: GraphQLSchema, object_type: GraphQLObjectType) -> MemberKind:
    """Classify *object_type* by identity with the schema's root types."""
    if object_type is schema.query_type:
        return MemberKind.QUERY
    if object_type is schema.mutation_type:
        return MemberKind.MUTATION
    if object_type is schema.subscription_type:
        return MemberKind.SUBSCRIPTION
    return MemberKind.TYPE
