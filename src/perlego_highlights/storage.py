"""Helpers for persisting book documents inside a vault folder."""
from __future__ import annotations

from pathlib import Path, PurePosixPath

from .markdown import sanitise_filename


def build_document_path(subdir: str, title: str, extension: str = "md") -> PurePosixPath:
    """Return the vault-relative path of the document for ``title``."""

    safe_title = sanitise_filename(title)
    return PurePosixPath(subdir) / f"{safe_title}.{extension.lstrip('.')}"


class VaultStore:
    """Document store backed by a folder on disk.

    Paths handed to the store are relative to ``root``.
    """

    def __init__(self, root: Path) -> None:
        self.root = root.expanduser()

    def resolve(self, path: PurePosixPath | str) -> Path:
        return self.root / Path(path)

    def exists(self, path: PurePosixPath | str) -> bool:
        return self.resolve(path).exists()

    def create_collection(self, path: PurePosixPath | str) -> None:
        self.resolve(path).mkdir(parents=True, exist_ok=True)

    def write(self, path: PurePosixPath | str, content: str) -> None:
        # Overwrites any existing document with the same key.
        self.resolve(path).write_text(content, encoding="utf-8")
