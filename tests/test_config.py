"""Tests for configuration handling."""

from __future__ import annotations

from pathlib import Path

import pytest

from schema_mdx.config import FilesConfig, GenerateConfig, load_config
from schema_mdx.errors import ConfigurationError


def test_load_config_reads_generate_table(tmp_path: Path) -> None:
    config_path = tmp_path / "schema-mdx.toml"
    config_path.write_text(
        '[generate]\ninput = "specs/*.yaml"\noutput = "docs"\nper = "file"\n'
    )

    values = load_config(config_path)

    assert values == {
        "input": ["specs/*.yaml"],
        "output": "docs",
        "per": "file",
        "cwd": str(tmp_path.resolve()),
    }


def test_load_config_resolves_relative_cwd(tmp_path: Path) -> None:
    config_path = tmp_path / "schema-mdx.toml"
    config_path.write_text('[generate]\ninput = ["a.graphql", "b.graphql"]\ncwd = "schemas"\n')

    values = load_config(config_path)

    assert values["input"] == ["a.graphql", "b.graphql"]
    assert values["cwd"] == str(tmp_path.resolve() / "schemas")


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="does not exist"):
        load_config(tmp_path / "missing.toml")


def test_load_config_invalid_toml(tmp_path: Path) -> None:
    config_path = tmp_path / "schema-mdx.toml"
    config_path.write_text("[generate\n")

    with pytest.raises(ConfigurationError, match="invalid TOML"):
        load_config(config_path)


def test_load_config_rejects_wrong_types(tmp_path: Path) -> None:
    config_path = tmp_path / "schema-mdx.toml"
    config_path.write_text("[generate]\ninput = [1, 2]\n")

    with pytest.raises(ConfigurationError, match="'input' must be a string or a list"):
        load_config(config_path)


def test_generate_config_requires_output() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        GenerateConfig(input="schema.graphql", output=None).validate()
    assert excinfo.value.to_dict() == {
        "type": "ConfigurationError",
        "message": "an output directory is required",
        "details": {"option": "output"},
    }


def test_files_config_accepts_single_pattern() -> None:
    config = FilesConfig(input="*.yaml", output="docs")  # type: ignore[arg-type]
    config.validate()
    assert config.input == ["*.yaml"]


def test_files_config_requires_input() -> None:
    with pytest.raises(ConfigurationError, match="at least one input pattern"):
        FilesConfig(input=[], output="docs").validate()
