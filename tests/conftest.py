"""Shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES = Path(__file__).resolve().parent / "fixtures"


class FakeFileSystem:
    """Records directory and file operations instead of performing them."""

    def __init__(self, fail_on: str | None = None) -> None:
        self.dirs: list[Path] = []
        self.files: dict[Path, str] = {}
        self.fail_on = fail_on

    def ensure_dir(self, path: Path) -> None:
        self.dirs.append(path)

    def write_file(self, path: Path, content: str) -> None:
        if self.fail_on is not None and path.name == self.fail_on:
            raise PermissionError(f"permission denied: '{path}'")
        self.files[path] = content


@pytest.fixture
def fixtures() -> Path:
    return FIXTURES


@pytest.fixture
def fake_fs() -> FakeFileSystem:
    return FakeFileSystem()
