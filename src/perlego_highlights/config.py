"""Configuration helpers for the Perlego importer."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .fetchers import DEFAULT_BASE_URL

CONFIG_DIR = Path.home() / ".perlego_highlights"
CONFIG_FILE = CONFIG_DIR / "config.json"


@dataclass
class ImportConfig:
    """Holds configuration for importing highlights."""

    token: str = ""
    vault_root: Path = Path("./vault")
    vault_subdir: str = "Perlego"
    file_extension: str = "md"
    api_base_url: str = DEFAULT_BASE_URL
    dry_run: bool = False

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "ImportConfig":
        kwargs: Dict[str, Any] = {}
        if data.get("token"):
            kwargs["token"] = str(data["token"]).strip()
        if data.get("vault_root"):
            kwargs["vault_root"] = Path(data["vault_root"])
        if data.get("vault_subdir"):
            kwargs["vault_subdir"] = str(data["vault_subdir"])
        if data.get("file_extension"):
            kwargs["file_extension"] = str(data["file_extension"]).lstrip(".")
        if data.get("api_base_url"):
            kwargs["api_base_url"] = str(data["api_base_url"])
        if "dry_run" in data:
            kwargs["dry_run"] = bool(data["dry_run"])
        return cls(**kwargs)

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "token": self.token,
            "vault_root": str(self.vault_root),
            "vault_subdir": self.vault_subdir,
            "file_extension": self.file_extension,
            "api_base_url": self.api_base_url,
            "dry_run": self.dry_run,
        }

    def __repr__(self) -> str:
        masked = "***" if self.token else "''"
        return (
            f"ImportConfig(token={masked}, vault_root={self.vault_root!r}, "
            f"vault_subdir={self.vault_subdir!r}, file_extension={self.file_extension!r}, "
            f"api_base_url={self.api_base_url!r}, dry_run={self.dry_run!r})"
        )


def load_config(path: Optional[Path]) -> Dict[str, Any]:
    """Load a JSON configuration file if provided."""

    if path is None:
        return {}
    with path.expanduser().resolve().open("r", encoding="utf-8") as handle:
        return json.load(handle)


def save_config(path: Path, config: ImportConfig) -> None:
    """Write ``config`` as JSON, creating the parent folder if needed."""

    path = path.expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(config.to_mapping(), handle, indent=2)
