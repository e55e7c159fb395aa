# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Command line interface for browsing installed applications."""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from appinv.model import Record
from appinv.scanner import ScanReport, scan_inventory
from appinv.store import ConfigStore, StoreError
from appinv.stores import REGISTRY_HIVES, InMemoryStore

logger = logging.getLogger(__name__)

TABLE_COLUMN_RATIOS: dict[str, int] = {
    "name": 4,
    "version": 2,
    "publisher": 3,
    "install_date": 2,
    "location": 5,
}

QUIT_KEY = "q"


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(prog="appinv")
    parser.add_argument(
        "--verbose", action="store_true", help="Log skipped entries."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    list_parser = subparsers.add_parser("list")
    list_parser.add_argument(
        "--snapshot",
        required=False,
        help="Read entries from a JSON snapshot instead of the registry.",
    )
    list_parser.add_argument(
        "--hive",
        choices=REGISTRY_HIVES,
        default="HKLM",
        help="Registry hive holding the uninstall entries.",
    )
    list_parser.add_argument(
        "--format",
        choices=("pager", "table", "json"),
        default="pager",
        help="Output format.",
    )
    list_parser.add_argument(
        "--output",
        required=False,
        help="Optional output file path for raw JSON when --format json is used.",
    )
    return parser


def run(argv: list[str], stdout: TextIO, stderr: TextIO, stdin: TextIO) -> int:
    """Run CLI command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.
        stdin: Standard input stream used by the pager.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning(f"Argument parsing failed (argv={argv})")
        return 2
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    if args.command == "list":
        return _run_list(args=args, stdout=stdout, stderr=stderr, stdin=stdin)

    logger.warning(f"Unsupported command (command={args.command})")
    stderr.write(f"Unsupported command: {args.command}\n")
    return 2


def _run_list(
    args: argparse.Namespace, stdout: TextIO, stderr: TextIO, stdin: TextIO
) -> int:
    """Run list command.

    Args:
        args: Parsed CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.
        stdin: Standard input stream.

    Returns:
        Exit code.
    """
    if args.snapshot is None and sys.platform != "win32":
        logger.warning(f"Registry is not available (platform={sys.platform})")
        stderr.write("Registry access requires Windows; use --snapshot.\n")
        return 2

    try:
        store = build_store(snapshot=args.snapshot, hive=args.hive)
        report = scan_inventory(store)
    except StoreError as exc:
        logger.warning(f"Inventory scan failed (error={exc})")
        stderr.write(f"Inventory scan failed: {exc}\n")
        return 2

    if args.format == "json":
        if args.output:
            try:
                _write_json_file(report=report, output_path=Path(args.output))
            except OSError as exc:
                logger.warning(
                    f"Failed to write JSON output file (output_path={args.output} error={exc})"
                )
                stderr.write(f"Failed to write JSON output file: {args.output}\n")
                return 2
        else:
            _write_json(report=report, stdout=stdout)
    elif args.format == "table":
        _write_table(records=report.records, stdout=stdout)
    else:
        page_records(records=report.records, stdout=stdout, stdin=stdin)
    return 0


def build_store(snapshot: str | None, hive: str) -> ConfigStore:
    """Create the configured store adapter.

    Args:
        snapshot: Optional JSON snapshot path.
        hive: Registry hive short name, used when no snapshot is given.

    Returns:
        Configured store adapter.

    Raises:
        StoreOpenError: If the snapshot cannot be loaded.
    """
    if snapshot is not None:
        return InMemoryStore.from_snapshot(Path(snapshot))

    from appinv.stores.winreg_store import WinregStore

    return WinregStore(hive=hive)


def page_records(records: list[Record], stdout: TextIO, stdin: TextIO) -> None:
    """Show records one at a time, advancing on each input line.

    Args:
        records: Records to show.
        stdout: Standard output stream.
        stdin: Standard input stream; a ``q`` line stops paging.
    """
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    console.print(f"Found {len(records)} applications:", markup=False, highlight=False)
    console.print("Any key to show the list", markup=False, highlight=False)
    stdin.readline()

    for record in records:
        console.clear()
        console.print("Any key to next, q to exit\n", markup=False, highlight=False)
        console.print(
            record.render(), markup=False, highlight=False, soft_wrap=True, end=""
        )
        if stdin.readline().strip().lower() == QUIT_KEY:
            break

    console.print("The end!", markup=False, highlight=False)


def _report_payload(report: ScanReport) -> dict[str, Any]:
    return {
        "records": [record.to_dict() for record in report.records],
        "skipped": [asdict(skipped) for skipped in report.skipped],
        "incomplete_count": report.incomplete_count,
    }


def _write_json(report: ScanReport, stdout: TextIO) -> None:
    """Write the scan report in JSON format.

    Args:
        report: Scan report.
        stdout: Standard output stream.
    """
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    console.print(
        json.dumps(_report_payload(report), indent=2, sort_keys=True),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


def _write_json_file(report: ScanReport, output_path: Path) -> None:
    """Write raw JSON payload to an output file.

    Args:
        report: Scan report.
        output_path: Target file path.

    Raises:
        OSError: If directory creation or file writing fails.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(_report_payload(report), indent=2, sort_keys=True),
        encoding="utf-8",
    )


def _write_table(records: list[Record], stdout: TextIO) -> None:
    """Write records as a table.

    Args:
        records: Records to show.
        stdout: Standard output stream.
    """
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    table = Table(show_header=True, show_lines=True, expand=True)
    for column, ratio in TABLE_COLUMN_RATIOS.items():
        table.add_column(column, ratio=ratio, overflow="fold")
    for record in records:
        table.add_row(
            record.name,
            record.version,
            record.publisher,
            record.install_date,
            record.location,
        )
    console.print(table)
    console.print(f"Found {len(records)} applications", markup=False, highlight=False)


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    exit_code = run(
        sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr, stdin=sys.stdin
    )
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
