# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""CSV and JSON serialization of scan records."""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Iterable, TextIO

from callscan.model import Record, ScanResult

logger = logging.getLogger(__name__)

CSV_HEADER = ("Filename", "Function Call", "Argument", "Tag", "Identifier")


class TableWriteError(RuntimeError):
    """Represent a failure to create or write an output file."""


def escape_field(value: str, strict: bool = False) -> str:
    """Escape one CSV field.

    A field is quoted only when it contains a comma or a double quote, with
    inner quotes doubled. With ``strict`` set, fields holding CR or LF are
    quoted too so that standard readers keep them in one cell.

    Args:
        value: Raw field text.
        strict: Also quote fields containing line breaks.

    Returns:
        Field text ready to be joined with commas.
    """
    special = ',"\r\n' if strict else ',"'
    if not any(char in value for char in special):
        return value
    return '"' + value.replace('"', '""') + '"'


def record_row(record: Record) -> tuple[str, str, str, str, str]:
    """Return record fields in CSV column order."""
    return (
        record.source_file,
        record.full_call,
        record.argument,
        record.tag,
        record.identifier,
    )


def write_csv(records: Iterable[Record], stream: TextIO, strict: bool = False) -> int:
    """Write a header and one row per record.

    Args:
        records: Records to serialize.
        stream: Text stream opened with ``newline=""``.
        strict: Quote fields containing line breaks as well.

    Returns:
        Number of data rows written.
    """
    stream.write(",".join(CSV_HEADER) + "\n")
    count = 0
    for record in records:
        stream.write(
            ",".join(escape_field(field, strict=strict) for field in record_row(record))
            + "\n"
        )
        count += 1
    return count


def write_csv_file(records: Iterable[Record], output_path: Path, strict: bool = False) -> int:
    """Write records to a CSV file.

    Args:
        records: Records to serialize.
        output_path: Target file path; parent directories are created.
        strict: Quote fields containing line breaks as well.

    Returns:
        Number of data rows written.

    Raises:
        TableWriteError: If the file cannot be created or written.
    """
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", encoding="utf-8", newline="") as handle:
            return write_csv(records, handle, strict=strict)
    except OSError as exc:
        logger.warning(f"Failed to write CSV output (output_path={output_path} error={exc})")
        raise TableWriteError(f"Unable to create output CSV file: {output_path}") from exc


def write_json_file(result: ScanResult, output_path: Path) -> None:
    """Write records and per-file errors as a JSON document.

    Args:
        result: Merged scan result.
        output_path: Target file path; parent directories are created.

    Raises:
        TableWriteError: If the file cannot be created or written.
    """
    payload = {
        "records": [asdict(record) for record in result.records],
        "errors": [asdict(error) for error in result.errors],
    }
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8"
        )
    except OSError as exc:
        logger.warning(f"Failed to write JSON output (output_path={output_path} error={exc})")
        raise TableWriteError(f"Unable to create output JSON file: {output_path}") from exc
