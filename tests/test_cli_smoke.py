"""Smoke tests for the command line interface."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from schema_mdx.cli import main


def test_cli_help_shows_subcommands(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--help"])
    assert excinfo.value.code == 0
    stdout = capsys.readouterr().out
    for sub in ["generate", "files", "tags"]:
        assert sub in stdout


def test_cli_generate_writes_documents(fixtures: Path, tmp_path: Path) -> None:
    code = main(["generate", str(fixtures / "basic.graphql"), "-o", str(tmp_path)])

    assert code == 0
    assert (tmp_path / "query" / "getKey.mdx").is_file()
    assert (tmp_path / "types" / "Key.mdx").is_file()


def test_cli_generate_without_input_fails(tmp_path: Path) -> None:
    assert main(["generate", "-o", str(tmp_path)]) == 1
    assert list(tmp_path.iterdir()) == []


def test_cli_generate_reports_parse_errors(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    assert main(["generate", str(tmp_path / "missing.graphql"), "-o", str(tmp_path)]) == 1
    assert "does not exist" in caplog.text


def test_cli_files_from_config(fixtures: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    shutil.copy(fixtures / "museum.yaml", tmp_path)
    shutil.copy(fixtures / "petstore.yaml", tmp_path)
    config_path = tmp_path / "schema-mdx.toml"
    config_path.write_text('[generate]\ninput = "*.yaml"\noutput = "out"\nper = "file"\n')

    code = main(["files", "-c", str(config_path)])

    assert code == 0
    assert sorted(path.name for path in (tmp_path / "out").iterdir()) == [
        "museum.mdx",
        "petstore.mdx",
    ]
    assert "petstore.mdx" in capsys.readouterr().out


def test_cli_tags_prints_documents(fixtures: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["tags", "petstore.yaml", "--cwd", str(fixtures)])

    assert code == 0
    stdout = capsys.readouterr().out
    assert stdout.startswith("<!-- pets.mdx -->\n---\ntitle: Pets")


def test_cli_tags_from_config(fixtures: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    shutil.copy(fixtures / "museum.yaml", tmp_path)
    config_path = tmp_path / "schema-mdx.toml"
    config_path.write_text('[generate]\ninput = "museum.yaml"\n')

    code = main(["tags", "-c", str(config_path)])

    assert code == 0
    assert "<!-- events.mdx -->" in capsys.readouterr().out


def test_cli_tags_rejects_several_inputs(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    config_path = tmp_path / "schema-mdx.toml"
    config_path.write_text('[generate]\ninput = ["a.yaml", "b.yaml"]\n')

    assert main(["tags", "-c", str(config_path)]) == 1
    assert "takes a single input" in caplog.text
