"""Writing rendered documents to disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Protocol

from schema_mdx.model import Document

logger = logging.getLogger(__name__)


class FileSystem(Protocol):
    """Filesystem operations needed by the writer."""

    def ensure_dir(self, path: Path) -> None:
        """Create *path* and its parents, tolerating existing directories."""

    def write_file(self, path: Path, content: str) -> None:
        """Write *content* to *path*, replacing any existing file."""


class LocalFileSystem:
    """:class:`FileSystem` backed by :mod:`pathlib`."""

    encoding = "utf-8"

    def ensure_dir(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def write_file(self, path: Path, content: str) -> None:
        path.write_text(content, encoding=self.encoding)


def write_documents(
    output: str | Path,
    documents: Iterable[Document],
    fs: FileSystem | None = None,
) -> list[Path]:
    """Write *documents* below *output* and return the written paths.

    Every distinct parent directory is ensured once before its first file is
    written. Errors from the filesystem propagate and leave files written so
    far in place.
    """
    fs = fs or LocalFileSystem()
    root = Path(output)
    ensured: set[Path] = set()
    written: list[Path] = []
    for document in documents:
        target = root / document.output_path
        if target.parent not in ensured:
            fs.ensure_dir(target.parent)
            ensured.add(target.parent)
        fs.write_file(target, document.content)
        logger.debug("wrote %s", target)
        written.append(target)
    return written
