# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Bounded-window pattern matching for marker call expressions."""

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_MARKER = "myFunction"
DEFAULT_WINDOW_SIZE = 100


class PatternCompileError(RuntimeError):
    """Represent a failure to compile the call expression pattern."""


@dataclass(frozen=True)
class Span:
    """Half-open ``[start, end)`` offset range into the searched text."""

    start: int
    end: int

    def slice(self, text: str) -> str:
        """Return the portion of ``text`` covered by this span."""
        return text[self.start : self.end]

    def shifted(self, offset: int) -> "Span":
        """Return this span moved right by ``offset`` characters."""
        return Span(start=self.start + offset, end=self.end + offset)


@dataclass(frozen=True)
class CallMatch:
    """Represent one successful call expression match within a window.

    Attributes:
        full: Range of the whole call expression.
        tag: Range of capture group 1 (alphabetic tag).
        identifier: Range of capture group 2, including interior whitespace.
    """

    full: Span
    tag: Span
    identifier: Span


def build_call_pattern(marker: str) -> str:
    """Build the call expression pattern for a marker literal.

    Args:
        marker: Literal text that starts every call expression.

    Returns:
        Regular expression source with two capture groups.
    """
    return re.escape(marker) + r'\s*\(\s*"\s*([a-zA-Z]+)\s+([^"]*)"\s*\)\s*;'


class PatternMatcher:
    """Match marker call expressions at the start of bounded windows.

    The compiled pattern is immutable and every ``match`` call builds its own
    result, so one instance can be shared by all scan workers.
    """

    def __init__(
        self, marker: str = DEFAULT_MARKER, window_size: int = DEFAULT_WINDOW_SIZE
    ) -> None:
        """Compile the call expression pattern.

        Args:
            marker: Literal text anchoring each call expression.
            window_size: Maximum number of characters examined per occurrence.

        Raises:
            ValueError: If ``marker`` is empty or ``window_size`` is not > 0.
            PatternCompileError: If the pattern cannot be compiled.
        """
        if not marker:
            raise ValueError("marker must not be empty")
        if window_size <= 0:
            raise ValueError("window_size must be > 0")
        source = build_call_pattern(marker)
        try:
            self._pattern = re.compile(source, re.MULTILINE | re.DOTALL | re.ASCII)
        except re.error as exc:
            logger.warning(f"Pattern compilation failed (pattern={source} error={exc})")
            raise PatternCompileError(
                f"Pattern compilation failed at offset {exc.pos}: {exc.msg}"
            ) from exc
        self._marker = marker
        self._window_size = window_size

    @property
    def marker(self) -> str:
        return self._marker

    def window(self, content: str, position: int) -> str:
        """Carve the lookahead window starting at ``position``.

        Args:
            content: Full file content.
            position: Offset of a marker occurrence.

        Returns:
            At most ``window_size`` characters of ``content``.
        """
        return content[position : position + self._window_size]

    def match(self, window: str) -> CallMatch | None:
        """Match a call expression anchored at the start of ``window``.

        Args:
            window: Text beginning at a marker occurrence.

        Returns:
            Capture spans relative to the window, or ``None`` when the text at
            this position is not a well-formed call expression.
        """
        found = self._pattern.match(window)
        if found is None:
            return None
        return CallMatch(
            full=Span(*found.span(0)),
            tag=Span(*found.span(1)),
            identifier=Span(*found.span(2)),
        )
