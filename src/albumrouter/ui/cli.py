from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from albumrouter.app import import_directory, list_albums, open_library
from albumrouter.config import ConfigurationError, configure_logging, get_importer_config
from albumrouter.config.importer import parse_timezone
from albumrouter.domain.errors import RepositoryDiscoveryError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from albumrouter.config import ImporterConfig

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="File incoming media into album repositories")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    importer = subparsers.add_parser("import", help="Import all files of a directory")
    importer.add_argument("source", type=Path, help="Directory holding the incoming files")
    importer.add_argument(
        "--root",
        type=Path,
        help="Directory containing the album repositories (defaults to config)",
    )
    importer.add_argument(
        "--timezone",
        type=str,
        help="IANA time zone used for target filenames (defaults to config)",
    )
    importer.add_argument(
        "--delete-imported",
        action="store_true",
        help="Remove source files once they have been committed",
    )

    albums = subparsers.add_parser("albums", help="List albums and their autoadd boundaries")
    albums.add_argument(
        "--root",
        type=Path,
        help="Directory containing the album repositories (defaults to config)",
    )

    return parser.parse_args(list(argv))


def _build_config(args: argparse.Namespace) -> ImporterConfig:
    source: Path | None = getattr(args, "source", None)
    if source is not None and not source.is_dir():
        raise ValueError(f"Source is not a directory: {source}")
    config = get_importer_config(repository_root=args.root)
    timezone = getattr(args, "timezone", None)
    if timezone:
        config = config.with_overrides(timezone=parse_timezone(timezone))
    return config


def _run_import(args: argparse.Namespace, config: ImporterConfig) -> int:
    result = import_directory(
        args.source,
        config=config,
        delete_imported=args.delete_imported,
    )
    log.info(
        "Imported %s of %s files (%s skipped)", result.imported, result.seen, result.skipped
    )
    if not result.committed:
        log.error("At least one album could not be committed")
        return 1
    return 0


def _run_albums(config: ImporterConfig) -> int:
    library = open_library(config)
    entries = list_albums(library)
    for entry in entries:
        log.info("%s -> %s", entry.timestamp.isoformat(), entry.repository)
    without_boundaries = set(library.repositories) - {entry.repository for entry in entries}
    for repository in sorted(without_boundaries):
        log.info("(no autoadd) -> %s", repository)
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        config = _build_config(parsed_args)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "import":
            exit_code = _run_import(parsed_args, config)
        elif parsed_args.command == "albums":
            exit_code = _run_albums(config)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except RepositoryDiscoveryError:
        log.exception("Cannot open album repositories")
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during import")
        sys.exit(1)

    if exit_code:
        sys.exit(exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
