"""Fetch books, highlights and metadata from the Perlego API."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from perlego_highlights.models import (
    BookMetadata,
    BookReference,
    HighlightRecord,
    HighlightResponse,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.perlego.com"


class PerlegoFetchError(RuntimeError):
    """Raised when a Perlego API request fails or returns an unexpected payload."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PerlegoClient:
    """Authenticated client for the three Perlego endpoints used by the importer.

    Each call is a single GET attempt carrying ``Authorization: Bearer
    <token>``. Failures surface as :class:`PerlegoFetchError`; deciding
    whether a failure skips a book or aborts the run is left to the caller.

    Parameters
    ----------
    token:
        Bearer token copied from an authenticated Perlego web session.
    base_url:
        API root, without a trailing slash.
    session:
        Optional ``requests.Session`` instance. Primarily intended for tests so
        that HTTP requests can be mocked.
    """

    BOOKS_PATH = "/book-activity/books"
    HIGHLIGHTS_PATH = "/ugc/v2/packaged-highlights"
    METADATA_PATH = "/catalogue-service/v1/book"

    def __init__(
        self,
        token: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._session = session if session is not None else requests.Session()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def fetch_book_list(self) -> List[BookReference]:
        """Return every book the user has interacted with."""

        payload = self._get(self.BOOKS_PATH)
        books = payload.get("data")
        if not isinstance(books, list):
            raise PerlegoFetchError("Unexpected book list format from Perlego API")

        references: List[BookReference] = []
        for entry in books:
            book_id = entry.get("bookId") if isinstance(entry, dict) else None
            if book_id is None or book_id == "":
                raise PerlegoFetchError("Book list entry without a bookId")
            references.append(BookReference(book_id=str(book_id)))
        return references

    def fetch_highlights(self, book_id: str) -> Optional[HighlightResponse]:
        """Return the highlights for ``book_id``, or ``None`` when the book has none."""

        payload = self._get(self.HIGHLIGHTS_PATH, params={"book_id": book_id})
        data = payload.get("data")
        if payload.get("success") is False or data is None:
            return None
        if not isinstance(data, dict) or not isinstance(data.get("results") or [], list):
            raise PerlegoFetchError(f"Unexpected highlight format for book {book_id}")

        records = [self._parse_highlight(result) for result in data.get("results") or []]
        return HighlightResponse(success=True, results=records)

    def fetch_metadata(self, book_id: str) -> BookMetadata:
        """Return catalogue metadata for ``book_id``."""

        payload = self._get(self.METADATA_PATH, params={"book_id": book_id})
        data = payload.get("data")
        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list) or not results or not isinstance(results[0], dict):
            raise PerlegoFetchError(f"No catalogue entry returned for book {book_id}")
        return self._parse_metadata(book_id, results[0])

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @property
    def _default_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/json",
            "User-Agent": "Perlego-Highlights-Importer/1.0",
        }

    def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        url = f"{self._base_url}{path}"
        logger.debug("GET %s params=%s", url, params)
        try:
            response = self._session.get(url, params=params, headers=self._default_headers)
        except requests.RequestException as exc:
            raise PerlegoFetchError(f"Request to {path} failed: {exc}") from exc
        self._ensure_success(path, response)
        try:
            payload = response.json()
        except ValueError as exc:
            raise PerlegoFetchError(f"Received invalid JSON from {path}") from exc
        if not isinstance(payload, dict):
            raise PerlegoFetchError(f"Unexpected response format from {path}")
        return payload

    def _ensure_success(self, path: str, response: object) -> None:
        status = getattr(response, "status_code", None)
        if status is None or status >= 400:
            raise PerlegoFetchError(
                f"Perlego request to {path} failed with status code {status}.",
                status_code=status,
            )

    def _parse_highlight(self, payload: object) -> HighlightRecord:
        if not isinstance(payload, dict):
            raise PerlegoFetchError("Unexpected highlight entry in Perlego response")
        raw_notes = payload.get("notes")
        if raw_notes is None:
            raw_notes = []
        if not isinstance(raw_notes, list):
            raise PerlegoFetchError("Unexpected notes format in Perlego highlight entry")
        notes: List[str] = []
        for note in raw_notes:
            text = note.get("text") if isinstance(note, dict) else note
            notes.append(str(text) if text is not None else "")
        return HighlightRecord(
            highlighted_text=str(payload.get("highlighted_text") or ""),
            notes=tuple(notes),
        )

    def _parse_metadata(self, book_id: str, entry: Dict[str, Any]) -> BookMetadata:
        title = entry.get("title")
        if isinstance(title, dict):
            main_title = title.get("mainTitle")
            subtitle = title.get("subtitle") or ""
        else:
            main_title, subtitle = title, ""
        if not main_title:
            raise PerlegoFetchError(f"Catalogue entry for book {book_id} has no title")

        image_links = entry.get("imageLinks")
        if image_links is not None and not isinstance(image_links, dict):
            raise PerlegoFetchError(f"Unexpected imageLinks format for book {book_id}")
        cover = image_links.get("coverThumbnail") if image_links else None

        contributors = entry.get("contributors")
        if contributors is None:
            contributors = []
        if not isinstance(contributors, list):
            raise PerlegoFetchError(f"Unexpected contributors format for book {book_id}")
        authors = [
            str(contributor.get("name"))
            for contributor in contributors
            if isinstance(contributor, dict)
            and str(contributor.get("type") or "").lower() == "author"
            and contributor.get("name")
        ]
        return BookMetadata(
            main_title=str(main_title),
            subtitle=str(subtitle),
            cover_image_url=str(cover or ""),
            authors=tuple(authors),
        )
