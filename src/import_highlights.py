"""Command line entry point for importing Perlego highlights into an Obsidian vault."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Iterable

from perlego_highlights.config import CONFIG_FILE, ImportConfig, load_config, save_config
from perlego_highlights.importer import ImportAborted, import_all
from perlego_highlights.models import OutcomeStatus
from perlego_highlights.reporting import ConsoleReporter


def _parse_args(argv: Iterable[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--config",
        type=Path,
        help=f"Path to JSON configuration file (default: {CONFIG_FILE})",
        default=None,
    )
    parser.add_argument("--token", help="Perlego bearer token", default=None)
    parser.add_argument("--vault", type=Path, help="Path to the root of the Obsidian vault", default=None)
    parser.add_argument("--subdir", help="Folder inside the vault for book documents", default=None)
    parser.add_argument("--extension", help="File extension for book documents", default=None)
    parser.add_argument("--base-url", dest="base_url", help="Perlego API root URL", default=None)
    parser.add_argument("--dry-run", action="store_true", help="Run without writing files")
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the resulting settings to the configuration file",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(list(argv))


def _config_path(args: argparse.Namespace) -> Path:
    return args.config if args.config is not None else CONFIG_FILE


def _combine_config(args: argparse.Namespace) -> ImportConfig:
    path = _config_path(args)
    file_config: Dict[str, Any] = {}
    if path.expanduser().exists():
        try:
            file_config = load_config(path)
        except (OSError, ValueError) as exc:
            raise SystemExit(f"Failed to read configuration file: {exc}") from exc
    elif args.config is not None and not args.save_config:
        raise SystemExit(f"Configuration file not found: {path}")
    config = ImportConfig.from_mapping(file_config)

    if args.token is not None:
        config.token = args.token.strip()
    if args.vault is not None:
        config.vault_root = args.vault
    if args.subdir is not None:
        config.vault_subdir = args.subdir
    if args.extension is not None:
        config.file_extension = args.extension.lstrip(".")
    if args.base_url is not None:
        config.api_base_url = args.base_url
    if args.dry_run:
        config.dry_run = True
    return config


def main(argv: Iterable[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = _combine_config(args)

    if args.save_config:
        save_config(_config_path(args), config)
        print(f"Saved configuration to {_config_path(args)}.")

    if not config.token:
        print("No Perlego token configured; pass --token or set it in the config file.", file=sys.stderr)
        return 2

    try:
        summary = import_all(config, reporter=ConsoleReporter())
    except ImportAborted:
        return 1

    for outcome in summary.outcomes:
        if outcome.status is OutcomeStatus.IMPORTED:
            prefix = "[DRY-RUN] Would write" if config.dry_run else "Wrote"
            print(f"{prefix} {config.vault_root / outcome.path}")
        elif outcome.status is OutcomeStatus.FAILED:
            print(f"Failed to import book {outcome.book_id}: {outcome.reason}", file=sys.stderr)

    return 1 if summary.failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
