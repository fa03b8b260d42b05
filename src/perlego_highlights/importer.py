"""Import every highlighted Perlego book into the vault."""
from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import Optional, Protocol

import requests

from .aggregator import aggregate
from .config import ImportConfig
from .fetchers import PerlegoClient, PerlegoFetchError
from .markdown import compose_document
from .models import BookReference, ImportOutcome, ImportSummary
from .reporting import NullReporter, ProgressEvent, Reporter
from .storage import VaultStore, build_document_path

logger = logging.getLogger(__name__)

CREDENTIALS_MESSAGE = "Perlego import failed, please check your credentials."


class ImportAborted(RuntimeError):
    """Raised when the run stops before any book is processed."""


class DocumentStore(Protocol):
    def exists(self, path: PurePosixPath) -> bool:
        ...

    def create_collection(self, path: PurePosixPath) -> None:
        ...

    def write(self, path: PurePosixPath, content: str) -> None:
        ...


class Importer:
    """Drives a single import run.

    Books are processed one at a time: each is fetched, rendered and
    written before the next request is issued. Only a failing book list
    aborts the run; every other failure is recorded against its book.
    """

    def __init__(
        self,
        client: PerlegoClient,
        store: DocumentStore,
        *,
        subdir: str = "Perlego",
        extension: str = "md",
        reporter: Optional[Reporter] = None,
        dry_run: bool = False,
    ) -> None:
        self.client = client
        self.store = store
        self.subdir = subdir
        self.extension = extension
        self.reporter: Reporter = reporter or NullReporter()
        self.dry_run = dry_run
        self._collection_ready = False

    def import_all(self) -> ImportSummary:
        self._notify(ProgressEvent("Importing Perlego highlights..."))
        try:
            books = self.client.fetch_book_list()
        except PerlegoFetchError as exc:
            logger.debug("Could not fetch the Perlego book list: %s", exc)
            self._notify(ProgressEvent(CREDENTIALS_MESSAGE, urgent=True, duration=0, force=True))
            raise ImportAborted(CREDENTIALS_MESSAGE) from exc

        logger.debug("Found %d book(s) with reading activity", len(books))
        self._notify(ProgressEvent(f"Saving highlights for {len(books)} book(s)..."))

        self._collection_ready = False
        summary = ImportSummary()
        for book in books:
            summary.outcomes.append(self.import_book(book))

        self._notify(
            ProgressEvent(
                f"Perlego import complete: {summary.imported} imported, "
                f"{summary.skipped} without highlights, {summary.failed} failed."
            )
        )
        return summary

    def import_book(self, book: BookReference) -> ImportOutcome:
        try:
            response = self.client.fetch_highlights(book.book_id)
        except PerlegoFetchError as exc:
            logger.warning("Skipping book %s: highlights unavailable (%s)", book.book_id, exc)
            return ImportOutcome.failed(book.book_id, str(exc))
        if response is None:
            logger.debug("Book %s has no highlights", book.book_id)
            return ImportOutcome.skipped(book.book_id)

        aggregated = aggregate(response)

        try:
            metadata = self.client.fetch_metadata(book.book_id)
        except PerlegoFetchError as exc:
            logger.warning("Skipping book %s: metadata unavailable (%s)", book.book_id, exc)
            return ImportOutcome.failed(book.book_id, str(exc))

        document = compose_document(metadata, aggregated.highlights, aggregated.notes)
        path = build_document_path(self.subdir, document.title, self.extension)

        if self.dry_run:
            logger.debug("[DRY-RUN] Would write %s", path)
            return ImportOutcome.imported(book.book_id, path)

        try:
            self._ensure_collection()
            self.store.write(path, document.body)
        except OSError as exc:
            logger.warning("Could not write %s: %s", path, exc)
            return ImportOutcome.failed(book.book_id, f"Could not write {path}: {exc}")

        logger.debug("Wrote %s", path)
        return ImportOutcome.imported(book.book_id, path)

    def _ensure_collection(self) -> None:
        if self._collection_ready:
            return
        collection = PurePosixPath(self.subdir)
        if not self.store.exists(collection):
            self.store.create_collection(collection)
        self._collection_ready = True

    def _notify(self, event: ProgressEvent) -> None:
        try:
            self.reporter.report(event)
        except Exception:  # noqa: BLE001
            logger.exception("Progress reporter failed for %r", event.message)


def import_all(
    config: ImportConfig,
    *,
    session: Optional[requests.Session] = None,
    store: Optional[DocumentStore] = None,
    reporter: Optional[Reporter] = None,
) -> ImportSummary:
    """Run a full import using ``config``."""

    client = PerlegoClient(config.token, base_url=config.api_base_url, session=session)
    importer = Importer(
        client,
        store if store is not None else VaultStore(config.vault_root),
        subdir=config.vault_subdir,
        extension=config.file_extension,
        reporter=reporter,
        dry_run=config.dry_run,
    )
    return importer.import_all()
