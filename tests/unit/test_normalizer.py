# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for record field normalization."""

from callscan.normalizer import normalize_field


def test_normalize_field_trims_space_tab_and_line_breaks() -> None:
    assert normalize_field(" \t\r\n value \n\t") == "value"


def test_normalize_field_returns_empty_for_whitespace_only_text() -> None:
    assert normalize_field(" \t\r\n ") == ""
    assert normalize_field("") == ""


def test_normalize_field_keeps_interior_whitespace() -> None:
    assert normalize_field("  some   spaced\nvalue  ") == "some   spaced\nvalue"


def test_normalize_field_leaves_other_whitespace_characters() -> None:
    assert normalize_field("\x0bvalue\x0c") == "\x0bvalue\x0c"


def test_normalize_field_is_idempotent() -> None:
    for text in ["  a b  ", "\n", "plain", "\tx\ty\t"]:
        once = normalize_field(text)
        assert normalize_field(once) == once
