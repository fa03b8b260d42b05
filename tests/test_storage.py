from pathlib import Path, PurePosixPath

from perlego_highlights.storage import VaultStore, build_document_path


def test_build_document_path_preserves_spaces() -> None:
    assert build_document_path("Perlego", "My Book Title") == PurePosixPath("Perlego/My Book Title.md")


def test_build_document_path_sanitises_and_uses_extension() -> None:
    assert build_document_path("Perlego", "Why/Not?", ".txt") == PurePosixPath("Perlego/Why Not.txt")


def test_vault_store_creates_collection_and_overwrites(tmp_path: Path) -> None:
    store = VaultStore(tmp_path / "vault")
    collection = PurePosixPath("Perlego")
    document = collection / "Book.md"

    assert not store.exists(collection)
    store.create_collection(collection)
    store.create_collection(collection)
    assert store.exists(collection)

    store.write(document, "first\n")
    store.write(document, "second\n")

    assert (tmp_path / "vault" / "Perlego" / "Book.md").read_text(encoding="utf-8") == "second\n"
