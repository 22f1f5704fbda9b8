# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Candidate file enumeration for a scan root."""

import logging
import os
from pathlib import Path
from typing import Iterable

import pathspec

logger = logging.getLogger(__name__)


class DiscoveryError(RuntimeError):
    """Represent a failure to enumerate the scan directory."""


class ExcludeMatcher:
    """Match directory-relative paths against gitignore-style exclude patterns."""

    def __init__(self, spec: pathspec.GitIgnoreSpec) -> None:
        """Initialize matcher.

        Args:
            spec: Compiled gitignore matcher.
        """
        self._spec = spec

    @classmethod
    def from_patterns(cls, patterns: Iterable[str]) -> "ExcludeMatcher":
        """Build matcher from gitignore-style pattern lines."""
        return cls(spec=pathspec.GitIgnoreSpec.from_lines(list(patterns)))

    def matches(self, relative_path: str, is_dir: bool) -> bool:
        """Check whether a path should be excluded.

        Args:
            relative_path: Root-relative POSIX path.
            is_dir: Whether the path is a directory.

        Returns:
            True when the path should be excluded.
        """
        normalized = relative_path.replace(os.sep, "/").strip("/")
        if not normalized:
            return False
        if self._spec.match_file(normalized):
            return True
        if is_dir and self._spec.match_file(f"{normalized}/"):
            return True
        return False


def list_candidate_paths(
    directory: Path, recursive: bool = False, excludes: Iterable[str] = ()
) -> list[Path]:
    """List regular files beneath a scan directory.

    Args:
        directory: Directory to enumerate.
        recursive: Descend into subdirectories when true; otherwise only the
            directory's own entries are listed.
        excludes: Gitignore-style patterns for paths to leave out.

    Returns:
        Sorted file paths. Extension filtering is left to the coordinator.

    Raises:
        DiscoveryError: If the directory is missing, not a directory, or
            cannot be listed.
    """
    if not directory.exists():
        raise DiscoveryError(f"Directory does not exist: {directory}")
    if not directory.is_dir():
        raise DiscoveryError(f"Path is not a directory: {directory}")

    matcher = ExcludeMatcher.from_patterns(excludes)
    paths: list[Path] = []
    queue: list[Path] = [directory]
    try:
        while queue:
            current = queue.pop(0)
            for child in sorted(current.iterdir(), key=lambda item: item.name):
                relative = child.relative_to(directory).as_posix()
                is_dir = child.is_dir()
                if matcher.matches(relative_path=relative, is_dir=is_dir):
                    continue
                if is_dir:
                    if recursive and not child.is_symlink():
                        queue.append(child)
                    continue
                paths.append(child)
    except OSError as exc:
        logger.warning(f"Directory enumeration failed (directory={directory} error={exc})")
        raise DiscoveryError(f"Filesystem error: {exc}") from exc

    logger.info(f"Discovered candidate files (directory={directory} files={len(paths)})")
    return sorted(paths)
