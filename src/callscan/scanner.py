# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Per-file extraction of marker call records."""

import logging
from pathlib import Path

from callscan.matcher import PatternMatcher
from callscan.model import Record, ScanError
from callscan.normalizer import normalize_field

logger = logging.getLogger(__name__)


class FileScanner:
    """Extract records from the text of one source file."""

    def __init__(self, matcher: PatternMatcher) -> None:
        """Initialize scanner.

        Args:
            matcher: Shared call expression matcher.
        """
        self._matcher = matcher

    def scan_file(self, path: Path) -> tuple[list[Record], ScanError | None]:
        """Read and scan one file.

        Args:
            path: File to scan.

        Returns:
            Records in occurrence order and an error when the file could not be
            read. An unreadable file yields no records. Line endings are kept
            as stored and undecodable bytes are replaced individually.
        """
        try:
            with path.open(encoding="utf-8", errors="replace", newline="") as handle:
                content = handle.read()
        except OSError as exc:
            logger.warning(f"Unable to open file (file_path={path} error={exc})")
            return [], ScanError(file_path=str(path), message=str(exc))
        return self.scan_text(content=content, source_file=path.name), None

    def scan_text(self, content: str, source_file: str) -> list[Record]:
        """Scan file content for marker call expressions.

        Every marker occurrence is tried, including ones that overlap or sit
        inside an earlier match; scanning resumes one character past each
        occurrence.

        Args:
            content: Full file content.
            source_file: Base file name recorded on each record.

        Returns:
            Records in the order their occurrences appear in ``content``.
        """
        records: list[Record] = []
        marker = self._matcher.marker
        position = content.find(marker)
        while position != -1:
            window = self._matcher.window(content, position)
            found = self._matcher.match(window)
            if found is not None:
                records.append(
                    _build_record(
                        source_file=source_file,
                        full_call=found.full.shifted(position).slice(content),
                        tag=found.tag.slice(window),
                        identifier=found.identifier.slice(window),
                    )
                )
            position = content.find(marker, position + 1)
        if records:
            logger.debug(
                f"Scanned file (source_file={source_file} records={len(records)})"
            )
        return records


def _build_record(
    source_file: str, full_call: str, tag: str, identifier: str
) -> Record:
    """Assemble a record, deriving and normalizing the argument field."""
    return Record(
        source_file=source_file,
        full_call=full_call,
        argument=normalize_field(f"{tag} {identifier}"),
        tag=normalize_field(tag),
        identifier=normalize_field(identifier),
    )
