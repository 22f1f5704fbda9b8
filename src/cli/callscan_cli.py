# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Command-line entry point for marker call scanning."""

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from callscan.coordinator import (
    DEFAULT_EXTENSION,
    ScanCoordinator,
    default_worker_count,
)
from callscan.discovery import DiscoveryError, list_candidate_paths
from callscan.matcher import (
    DEFAULT_MARKER,
    DEFAULT_WINDOW_SIZE,
    PatternCompileError,
    PatternMatcher,
)
from callscan.model import Record, ScanError
from callscan.scanner import FileScanner
from callscan.table_writer import (
    TableWriteError,
    record_row,
    write_csv_file,
    write_json_file,
)

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "function_calls.csv"

TABLE_COLUMN_RATIOS: dict[str, int] = {
    "Filename": 1,
    "Function Call": 4,
    "Argument": 3,
    "Tag": 1,
    "Identifier": 2,
}


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
    """Build the CLI parser.

    Returns:
        Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(prog="callscan")
    parser.add_argument(
        "--path",
        required=False,
        help="Directory to scan. Prompted for interactively when omitted.",
    )
    parser.add_argument(
        "--output", default=DEFAULT_OUTPUT, help="Output file path."
    )
    parser.add_argument(
        "--format",
        choices=("csv", "json"),
        default="csv",
        help="Output format.",
    )
    parser.add_argument(
        "--extension",
        default=DEFAULT_EXTENSION,
        help="Required file extension of scanned files.",
    )
    parser.add_argument(
        "--marker", default=DEFAULT_MARKER, help="Literal marker anchoring each call."
    )
    parser.add_argument(
        "--window-size",
        type=int,
        default=DEFAULT_WINDOW_SIZE,
        help="Maximum characters examined after each marker occurrence.",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of worker threads. Defaults to the CPU count.",
    )
    parser.add_argument(
        "--recursive",
        action="store_true",
        help="Also scan files in subdirectories.",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        help="Gitignore-style pattern of paths to skip. May be repeated.",
    )
    parser.add_argument(
        "--strict-csv",
        action="store_true",
        help="Quote CSV fields that contain line breaks.",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Print the extracted records as a table.",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging."
    )
    return parser


def run(
    argv: list[str],
    stdout: TextIO,
    stderr: TextIO,
    stdin: TextIO | None = None,
) -> int:
    """Run the scan command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.
        stdin: Stream read for the directory prompt when ``--path`` is absent.

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
        logging.getLogger("callscan").setLevel(logging.DEBUG)

    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    workers = args.workers if args.workers is not None else default_worker_count()
    if workers <= 0:
        logger.warning(f"Invalid worker count (workers={workers})")
        stderr.write("workers must be > 0\n")
        return 2

    try:
        matcher = PatternMatcher(marker=args.marker, window_size=args.window_size)
    except PatternCompileError as exc:
        stderr.write(f"{exc}\n")
        return 2
    except ValueError as exc:
        logger.warning(f"Invalid matcher configuration (error={exc})")
        stderr.write(f"Invalid matcher configuration: {exc}\n")
        return 2

    try:
        coordinator = ScanCoordinator(
            scanner=FileScanner(matcher=matcher),
            extension=args.extension,
            num_workers=workers,
        )
    except ValueError as exc:
        logger.warning(f"Invalid scan configuration (error={exc})")
        stderr.write(f"Invalid scan configuration: {exc}\n")
        return 2

    directory = args.path
    if directory is None:
        directory = Prompt.ask(
            f"Enter directory path containing {coordinator.extension} files",
            console=console,
            stream=stdin,
        )
    if not directory.strip():
        logger.warning("Empty directory path")
        stderr.write("Directory path must not be empty\n")
        return 2
    directory_path = Path(directory.strip())

    try:
        paths = list_candidate_paths(
            directory_path, recursive=args.recursive, excludes=args.exclude
        )
    except DiscoveryError as exc:
        stderr.write(f"{exc}\n")
        return 2

    result = coordinator.run(paths)
    _write_errors(errors=result.errors, stderr=stderr)

    output_path = Path(args.output)
    try:
        if args.format == "json":
            write_json_file(result=result, output_path=output_path)
        else:
            write_csv_file(result.records, output_path, strict=args.strict_csv)
    except TableWriteError as exc:
        stderr.write(f"{exc}\n")
        return 2

    if args.preview:
        _write_table(records=result.records, console=console)
    console.print(
        f"Processed {len(result.records)} function calls with {result.worker_count} "
        f"workers. Output written to {output_path}",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )
    return 0


def _write_errors(errors: list[ScanError], stderr: TextIO) -> None:
    """Write per-file scan errors to stderr.

    Args:
        errors: Recoverable scan errors.
        stderr: Standard error stream.
    """
    for error in errors:
        stderr.write(
            f"scan_error: Unable to open file: {error.file_path} ({error.message})\n"
        )


def _write_table(records: list[Record], console: Console) -> None:
    """Render records as a table in merge order.

    Args:
        records: Records to render.
        console: Target console.
    """
    table = Table(show_header=True, show_lines=True, expand=True)
    for column, ratio in TABLE_COLUMN_RATIOS.items():
        table.add_column(column, ratio=ratio, overflow="fold")
    for record in records:
        table.add_row(*(Text(field) for field in record_row(record)))
    console.print(table)


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
