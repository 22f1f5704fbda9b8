# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Domain models for scan artifacts."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Record:
    """Represent one matched marker invocation.

    Attributes:
        source_file: Base file name the occurrence was found in.
        full_call: Exact matched text, marker through the terminating ``;``.
        argument: ``tag`` and ``identifier`` joined by one space, normalized.
        tag: Normalized alphabetic word leading the quoted argument.
        identifier: Normalized remaining text inside the quoted argument.
    """

    source_file: str
    full_call: str
    argument: str
    tag: str
    identifier: str


@dataclass(frozen=True)
class ScanError:
    """Represent a recoverable scan failure for one file."""

    file_path: str
    message: str


@dataclass(frozen=True)
class ScanResult:
    """Represent the merged outcome of one coordinated scan.

    Attributes:
        records: Records ordered by shard, then file, then occurrence.
        errors: Per-file failures collected across all workers.
        worker_count: Number of shards the path list was split into.
        files_scanned: Files that passed the extension filter, readable or not.
        files_skipped: Files rejected by the extension filter.
    """

    records: list[Record]
    errors: list[ScanError]
    worker_count: int
    files_scanned: int
    files_skipped: int
