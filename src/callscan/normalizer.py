# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Whitespace normalization for extracted record fields."""

TRIM_CHARACTERS = " \t\r\n"


def normalize_field(text: str) -> str:
    """Trim surrounding whitespace from an extracted field.

    Only space, tab, CR and LF are removed, and only at the ends; interior
    whitespace is preserved.

    Args:
        text: Raw field text sliced from a match.

    Returns:
        Trimmed text, or an empty string when the text is all whitespace.
    """
    return text.strip(TRIM_CHARACTERS)
