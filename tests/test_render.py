"""Tests for MDX rendering."""

from __future__ import annotations

import yaml

from schema_mdx.model import Entry, MemberKind, OperationMember, TypeMember
from schema_mdx.render import render_member, render_tag


def _front_matter(content: str) -> dict:
    _, block, _ = content.split("---\n", 2)
    return yaml.safe_load(block)


def test_render_operation_without_description() -> None:
    member = OperationMember(
        name="getKey",
        kind=MemberKind.QUERY,
        arguments=(Entry("id", "ID"),),
    )

    assert render_member(member) == (
        "---\n"
        "title: getKey\n"
        "description: Description for getKey\n"
        "---\n"
        "\n"
        "# getKey\n"
        "\n"
        "## Arguments\n"
        "\n"
        "- id: ID"
    )


def test_render_operation_with_description_keeps_argument_order() -> None:
    member = OperationMember(
        name="listKeys",
        kind=MemberKind.QUERY,
        description="List keys owned by an API.",
        arguments=(Entry("limit", "Int"), Entry("apiId", "ID!")),
    )

    content = render_member(member)

    assert _front_matter(content) == {
        "title": "listKeys",
        "description": "List keys owned by an API.",
    }
    assert "# listKeys\n\nList keys owned by an API.\n\n## Arguments" in content
    assert content.endswith("- limit: Int\n- apiId: ID!")


def test_render_operation_without_arguments_omits_section() -> None:
    member = OperationMember(name="keyCreated", kind=MemberKind.SUBSCRIPTION)

    content = render_member(member)

    assert "## Arguments" not in content
    assert content.endswith("# keyCreated")


def test_render_type_uses_fields_section() -> None:
    member = TypeMember(
        name="Key",
        fields=(Entry("id", "ID!"), Entry("tags", "[String!]!")),
    )

    content = render_member(member)

    assert _front_matter(content)["description"] == "Type definition for Key"
    assert "## Arguments" not in content
    assert content.endswith("## Fields\n\n- id: ID!\n- tags: [String!]!")


def test_render_type_without_fields_omits_section() -> None:
    content = render_member(TypeMember(name="Empty", description="Nothing here."))

    assert "## Fields" not in content
    assert content.endswith("# Empty\n\nNothing here.")


def test_render_front_matter_stays_valid_yaml() -> None:
    member = OperationMember(
        name="search",
        kind=MemberKind.QUERY,
        description="Search keys: supports prefix matching.\n\nResults are paged.",
    )

    content = render_member(member)

    assert _front_matter(content)["description"] == member.description
    assert "Search keys: supports prefix matching.\n\nResults are paged." in content


def test_render_member_is_trimmed() -> None:
    content = render_member(TypeMember(name="Key"))
    assert content == content.strip()
    assert "\n\n\n" not in content


def test_render_tag_lists_operations() -> None:
    operations = [
        OperationMember(
            name="listPets",
            kind=MemberKind.OPERATION,
            description="List all pets",
            arguments=(Entry("limit", "integer(int32)"),),
            tag="Pets",
            method="get",
            path="/pets",
        ),
        OperationMember(
            name="getHealth",
            kind=MemberKind.OPERATION,
            tag="Pets",
            method="get",
            path="/health",
        ),
    ]

    content = render_tag("Pets", operations, "Everything about your pets")

    assert _front_matter(content) == {
        "title": "Pets",
        "description": "Everything about your pets",
    }
    assert (
        "# Pets\n\nEverything about your pets\n\n"
        "## List Pets\n\n`GET /pets`\n\nList all pets\n\n"
        "### Arguments\n\n- limit: integer(int32)\n\n"
        "## Get Health\n\n`GET /health`"
    ) in content
    assert content.endswith("`GET /health`")


def test_render_tag_without_description_uses_fallback() -> None:
    content = render_tag("default", [])

    assert _front_matter(content)["description"] == "Operations tagged default"
    assert content.endswith("# default")


def test_render_keeps_blank_lines_inside_descriptions() -> None:
    description = "First.\n\n\n```\ncode\n\n\n\nmore\n```"
    member = OperationMember(name="getKey", kind=MemberKind.QUERY, description=description)

    content = render_member(member)

    assert _front_matter(content)["description"] == description
    assert content.endswith(f"# getKey\n\n{description}")


def test_render_tag_keeps_blank_lines_inside_operation_descriptions() -> None:
    description = "Paged.\n\n\n    indented\n\n\nblock"
    operation = OperationMember(
        name="listKeys",
        kind=MemberKind.OPERATION,
        description=description,
        tag="Keys",
        method="get",
        path="/keys",
    )

    content = render_tag("Keys", [operation])

    assert content.endswith(f"`GET /keys`\n\n{description}")


def test_render_ignores_blank_description() -> None:
    content = render_member(TypeMember(name="Key", description="  \n"))

    assert content.endswith("# Key")
