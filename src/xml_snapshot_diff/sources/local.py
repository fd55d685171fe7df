"""LocalSource: reads file content from the local filesystem."""

from __future__ import annotations

from pathlib import Path


class LocalSource:
    """Content source for files on the machine running the comparison."""

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        return Path(path).read_bytes().decode(encoding)

    def __repr__(self) -> str:
        return "LocalSource()"
