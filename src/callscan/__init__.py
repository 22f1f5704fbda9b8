# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Public import surface for marker call scanning components."""

from callscan.coordinator import ScanCoordinator, partition
from callscan.matcher import CallMatch, PatternCompileError, PatternMatcher, Span
from callscan.model import Record, ScanError, ScanResult
from callscan.normalizer import normalize_field
from callscan.scanner import FileScanner

__all__ = [
    "CallMatch",
    "FileScanner",
    "PatternCompileError",
    "PatternMatcher",
    "Record",
    "ScanCoordinator",
    "ScanError",
    "ScanResult",
    "Span",
    "normalize_field",
    "partition",
]
