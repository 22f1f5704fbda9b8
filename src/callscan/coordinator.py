# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Concurrent scan orchestration over a list of candidate files."""

import concurrent.futures
import logging
import os
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, TypeVar

from callscan.model import Record, ScanError, ScanResult
from callscan.scanner import FileScanner

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".java"

T = TypeVar("T")


@dataclass(frozen=True)
class _ShardOutcome:
    """Represent everything one worker produced for its shard."""

    records: list[Record]
    errors: list[ScanError]
    files_scanned: int
    files_skipped: int


def default_worker_count() -> int:
    """Return the parallelism hint reported by the runtime."""
    return os.cpu_count() or 1


def normalize_extension(extension: str) -> str:
    """Return ``extension`` with exactly one leading dot.

    Raises:
        ValueError: If the extension is empty.
    """
    stripped = extension.strip().lstrip(".")
    if not stripped:
        raise ValueError("extension must not be empty")
    return f".{stripped}"


def partition(items: Sequence[T], num_workers: int) -> list[list[T]]:
    """Split ``items`` into ``num_workers`` contiguous shards.

    Each shard holds ``len(items) // num_workers`` items and the last shard
    also takes the remainder, so shards may be empty when there are fewer
    items than workers.

    Args:
        items: Sequence to split.
        num_workers: Number of shards to produce.

    Returns:
        Shards whose concatenation equals ``items``.

    Raises:
        ValueError: If ``num_workers`` is not > 0.
    """
    if num_workers <= 0:
        raise ValueError("num_workers must be > 0")
    per_shard = len(items) // num_workers
    shards: list[list[T]] = []
    for index in range(num_workers):
        start = index * per_shard
        end = len(items) if index == num_workers - 1 else start + per_shard
        shards.append(list(items[start:end]))
    return shards


class ScanCoordinator:
    """Fan file scanning out across a fixed pool of worker threads."""

    def __init__(
        self,
        scanner: FileScanner,
        extension: str = DEFAULT_EXTENSION,
        num_workers: int | None = None,
    ) -> None:
        """Initialize coordinator.

        Args:
            scanner: File scanner shared by all workers.
            extension: Required file suffix, with or without the leading dot.
            num_workers: Worker count; defaults to ``default_worker_count()``.

        Raises:
            ValueError: If ``num_workers`` is not > 0 or ``extension`` is empty.
        """
        if num_workers is None:
            num_workers = default_worker_count()
        if num_workers <= 0:
            raise ValueError("num_workers must be > 0")
        self._scanner = scanner
        self._extension = normalize_extension(extension)
        self._num_workers = num_workers

    @property
    def extension(self) -> str:
        return self._extension

    def run(self, paths: Sequence[Path]) -> ScanResult:
        """Scan all candidate paths and merge the results.

        Args:
            paths: Candidate file paths; files without the required suffix
                are skipped silently.

        Returns:
            Merged scan result. Records are ordered by shard, then by file
            within the shard, then by occurrence within the file.
        """
        shards = partition(list(paths), self._num_workers)
        merged: dict[int, _ShardOutcome] = {}
        merge_lock = threading.Lock()
        started = time.monotonic()

        with concurrent.futures.ThreadPoolExecutor(
            max_workers=self._num_workers, thread_name_prefix="callscan"
        ) as executor:
            futures = [
                executor.submit(self._scan_shard, index, shard, merged, merge_lock)
                for index, shard in enumerate(shards)
            ]
            completed = 0
            for future in concurrent.futures.as_completed(futures):
                future.result()
                completed += 1
                logger.debug(
                    "scan_progress shards_completed=%s shards_total=%s",
                    completed,
                    len(shards),
                )

        records: list[Record] = []
        errors: list[ScanError] = []
        files_scanned = 0
        files_skipped = 0
        for index in sorted(merged):
            outcome = merged[index]
            records.extend(outcome.records)
            errors.extend(outcome.errors)
            files_scanned += outcome.files_scanned
            files_skipped += outcome.files_skipped

        elapsed_ms = int(round((time.monotonic() - started) * 1000))
        logger.info(
            f"Scan completed (files={len(paths)} scanned={files_scanned} "
            f"records={len(records)} errors={len(errors)} workers={self._num_workers} "
            f"elapsed_ms={elapsed_ms})"
        )
        return ScanResult(
            records=records,
            errors=errors,
            worker_count=self._num_workers,
            files_scanned=files_scanned,
            files_skipped=files_skipped,
        )

    def _scan_shard(
        self,
        index: int,
        shard: list[Path],
        merged: dict[int, _ShardOutcome],
        merge_lock: threading.Lock,
    ) -> None:
        """Scan one shard privately, then publish it in a single critical section."""
        local_records: list[Record] = []
        local_errors: list[ScanError] = []
        scanned = 0
        skipped = 0
        for path in shard:
            if Path(path).suffix != self._extension:
                skipped += 1
                continue
            scanned += 1
            file_records, error = self._scanner.scan_file(Path(path))
            local_records.extend(file_records)
            if error is not None:
                local_errors.append(error)

        outcome = _ShardOutcome(
            records=local_records,
            errors=local_errors,
            files_scanned=scanned,
            files_skipped=skipped,
        )
        with merge_lock:
            merged[index] = outcome
