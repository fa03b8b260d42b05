"""Markdown rendering for imported books."""
from __future__ import annotations

import re
from typing import List, Sequence

from .models import BookMetadata, ImportedDocument

ILLEGAL_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f\x7f]+')


def sanitise_filename(value: str) -> str:
    """Return a filesystem-safe filename derived from ``value``."""

    safe = ILLEGAL_FILENAME_CHARS.sub(" ", value)
    safe = re.sub(r"\s+", " ", safe).strip(" .")
    return safe or "untitled"


def _section(heading: str, lines: Sequence[str]) -> str:
    return "\n".join([heading, *lines])


def compose_document(
    metadata: BookMetadata,
    highlights: Sequence[str],
    notes: Sequence[str],
) -> ImportedDocument:
    """Render the document for one book.

    Sections always appear in the same order and are never omitted, so an
    unchanged book renders to identical text on every import.
    """

    metadata_lines = [
        f"- Author(s): {', '.join(metadata.authors)}",
        f"- Full title: {metadata.full_title}",
    ]
    sections: List[str] = [
        f"# {metadata.main_title}",
        f"![]({metadata.cover_image_url})",
        _section("## Metadata", metadata_lines),
        _section("## Highlights", highlights),
        _section("## Notes", notes),
    ]
    return ImportedDocument(title=metadata.main_title, body="\n\n".join(sections) + "\n")
