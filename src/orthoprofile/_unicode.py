"""
Unicode helpers: grapheme clusters, codepoint labels and character names.
"""

from __future__ import annotations

import unicodedata

import regex

__all__ = ["grapheme_clusters", "codepoints", "unicode_names", "CLUSTER"]

# Extended grapheme cluster (UAX #29)
CLUSTER = regex.compile(r"\X")


def grapheme_clusters(text: str, pos: int = 0, endpos: int | None = None) -> list[tuple[int, int]]:
    """
    Split text[pos:endpos] into extended grapheme clusters.

    Args:
        text: Input string
        pos: Start offset
        endpos: End offset (defaults to len(text))

    Returns:
        List of (start, end) offsets into text

    Example:
        >>> grapheme_clusters("ne\u0301")
        [(0, 1), (1, 3)]
    """
    if endpos is None:
        endpos = len(text)
    return [m.span() for m in CLUSTER.finditer(text, pos, endpos)]


def codepoints(text: str) -> str:
    """Space-separated U+XXXX labels for each codepoint in text."""
    return " ".join(f"U+{ord(c):04X}" for c in text)


def unicode_names(text: str) -> str:
    """Comma-separated Unicode character names for each codepoint in text."""
    return ", ".join(unicodedata.name(c, f"<U+{ord(c):04X}>") for c in text)
