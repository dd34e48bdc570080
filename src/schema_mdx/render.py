"""MDX rendering of schema members."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

import yaml
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from schema_mdx.model import Member, OperationMember, TypeMember
from schema_mdx.titles import id_to_title

_TEMPLATE_ENV = Environment(
    loader=FileSystemLoader(Path(__file__).resolve().parent / "templates"),
    trim_blocks=True,
    lstrip_blocks=False,
    keep_trailing_newline=True,
    undefined=StrictUndefined,
)
_TEMPLATE_ENV.filters["id_to_title"] = id_to_title


def render_member(member: Member) -> str:
    """Render one operation or type member as an MDX document."""
    if isinstance(member, TypeMember):
        fallback = f"Type definition for {member.name}"
        section = "Fields"
        entries = member.fields
    else:
        fallback = f"Description for {member.name}"
        section = "Arguments"
        entries = member.arguments

    rendered = _TEMPLATE_ENV.get_template("member.mdx.j2").render(
        front_matter=front_matter(member.name, member.description or fallback),
        member=member,
        section=section,
        entries=entries,
    )
    return rendered.strip()


def render_tag(
    tag: str,
    operations: Sequence[OperationMember],
    description: str | None = None,
) -> str:
    """Render all *operations* sharing *tag* as one MDX document."""
    rendered = _TEMPLATE_ENV.get_template("tag.mdx.j2").render(
        front_matter=front_matter(tag, description or f"Operations tagged {tag}"),
        tag=tag,
        description=description,
        operations=operations,
    )
    return rendered.strip()


def front_matter(title: str, description: str) -> str:
    """YAML front-matter body (without delimiters) for a document."""
    values: dict[str, Any] = {"title": title, "description": description}
    return yaml.safe_dump(values, sort_keys=False, allow_unicode=True, width=float("inf"))

