"""Tests for the command line entry point."""
from __future__ import annotations

import json
from pathlib import Path, PurePosixPath

import pytest

import import_highlights
from perlego_highlights.importer import ImportAborted
from perlego_highlights.models import ImportOutcome, ImportSummary
from tests.fakes import FakeSession


@pytest.fixture
def captured(monkeypatch):
    calls = []

    def fake_import_all(config, **kwargs):
        calls.append(config)
        return ImportSummary([ImportOutcome.imported("1", PurePosixPath("Perlego/My Book.md"))])

    monkeypatch.setattr(import_highlights, "import_all", fake_import_all)
    return calls


def test_missing_token_exits_with_usage_error(tmp_path: Path, captured) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text("{}", encoding="utf-8")

    assert import_highlights.main(["--config", str(config_path)]) == 2
    assert captured == []


def test_cli_flags_override_config_file(tmp_path: Path, captured) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"token": "from-file", "vault_subdir": "Books"}), encoding="utf-8")

    code = import_highlights.main(
        ["--config", str(config_path), "--token", "from-cli", "--vault", str(tmp_path), "--dry-run"]
    )

    assert code == 0
    config = captured[0]
    assert config.token == "from-cli"
    assert config.vault_subdir == "Books"
    assert config.vault_root == tmp_path
    assert config.dry_run is True


def test_save_config_persists_merged_settings(tmp_path: Path, captured) -> None:
    config_path = tmp_path / "settings" / "config.json"

    code = import_highlights.main(["--config", str(config_path), "--token", "abc", "--save-config"])

    assert code == 0
    assert json.loads(config_path.read_text(encoding="utf-8"))["token"] == "abc"


def test_aborted_import_exits_non_zero(tmp_path: Path, monkeypatch) -> None:
    def aborting_import_all(config, **kwargs):
        raise ImportAborted("check your credentials")

    monkeypatch.setattr(import_highlights, "import_all", aborting_import_all)
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"token": "abc"}), encoding="utf-8")

    assert import_highlights.main(["--config", str(config_path)]) == 1


def test_missing_config_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        import_highlights.main(["--config", str(tmp_path / "absent.json"), "--token", "abc"])


def test_written_files_are_reported_once(tmp_path: Path, monkeypatch, capsys) -> None:
    routes = {
        ("/book-activity/books", None): {"data": [{"bookId": "1"}]},
        ("/ugc/v2/packaged-highlights", "1"): {
            "success": True,
            "data": {"results": [{"highlighted_text": "A quote", "notes": []}]},
        },
        ("/catalogue-service/v1/book", "1"): {"data": {"results": [{"title": {"mainTitle": "My Book"}}]}},
    }
    monkeypatch.setattr("perlego_highlights.fetchers.perlego_api.requests.Session", lambda: FakeSession(routes))
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"token": "abc", "vault_root": str(tmp_path / "vault")}), encoding="utf-8")

    assert import_highlights.main(["--config", str(config_path)]) == 0

    captured = capsys.readouterr()
    assert (captured.out + captured.err).count("My Book.md") == 1
