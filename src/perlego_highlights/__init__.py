"""Utilities for importing Perlego highlights into Markdown."""

from .config import ImportConfig
from .importer import ImportAborted, Importer, import_all
from .models import BookMetadata, HighlightRecord, ImportOutcome, ImportSummary

__all__ = [
    "ImportConfig",
    "ImportAborted",
    "Importer",
    "import_all",
    "BookMetadata",
    "HighlightRecord",
    "ImportOutcome",
    "ImportSummary",
]
