"""Data models for Perlego highlight imports."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import List, Optional


@dataclass(frozen=True)
class BookReference:
    """A book the user has interacted with."""

    book_id: str


@dataclass(frozen=True)
class HighlightRecord:
    """A highlighted passage and the notes attached to it."""

    highlighted_text: str
    notes: tuple[str, ...] = ()


@dataclass
class HighlightResponse:
    success: bool
    results: List[HighlightRecord] = field(default_factory=list)


@dataclass(frozen=True)
class BookMetadata:
    """Catalogue information for a single book."""

    main_title: str
    subtitle: str = ""
    cover_image_url: str = ""
    authors: tuple[str, ...] = ()

    @property
    def full_title(self) -> str:
        if self.subtitle:
            return f"{self.main_title}; {self.subtitle}"
        return self.main_title


@dataclass
class AggregatedHighlights:
    highlights: List[str]
    notes: List[str]


@dataclass(frozen=True)
class ImportedDocument:
    """A rendered book document ready to be written."""

    title: str
    body: str


class OutcomeStatus(str, Enum):
    IMPORTED = "imported"
    SKIPPED_NO_DATA = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ImportOutcome:
    """Result of importing a single book."""

    book_id: str
    status: OutcomeStatus
    reason: Optional[str] = None
    path: Optional[PurePosixPath] = None

    @classmethod
    def imported(cls, book_id: str, path: PurePosixPath) -> "ImportOutcome":
        return cls(book_id, OutcomeStatus.IMPORTED, path=path)

    @classmethod
    def skipped(cls, book_id: str) -> "ImportOutcome":
        return cls(book_id, OutcomeStatus.SKIPPED_NO_DATA)

    @classmethod
    def failed(cls, book_id: str, reason: str) -> "ImportOutcome":
        return cls(book_id, OutcomeStatus.FAILED, reason=reason)


@dataclass
class ImportSummary:
    """Outcomes of a full import run, in book list order."""

    outcomes: List[ImportOutcome] = field(default_factory=list)

    def _count(self, status: OutcomeStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)

    @property
    def imported(self) -> int:
        return self._count(OutcomeStatus.IMPORTED)

    @property
    def skipped(self) -> int:
        return self._count(OutcomeStatus.SKIPPED_NO_DATA)

    @property
    def failed(self) -> int:
        return self._count(OutcomeStatus.FAILED)
