"""
Pattern variants used by the matcher.

Both variants answer the same questions: where does the pattern occur in
``text[pos:endpos]``, does it occur exactly at ``pos``, and do its contexts
accept a candidate span. Offsets always refer to the full string, so
contexts see the characters adjoining a span in the unsegmented input.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

import regex

__all__ = ["LiteralPattern", "RegexPattern", "compile_pattern", "expand_classes"]


class LiteralPattern:
    """Exact substring pattern; contexts are exact adjoining substrings."""

    __slots__ = ("grapheme", "left", "right")

    def __init__(self, grapheme: str, left: Optional[str] = None, right: Optional[str] = None) -> None:
        self.grapheme = grapheme
        self.left = left or None
        self.right = right or None

    def search(self, text: str, pos: int, endpos: int) -> Optional[tuple[int, int]]:
        if not self.grapheme:
            return None
        start = text.find(self.grapheme, pos, endpos)
        if start < 0:
            return None
        return start, start + len(self.grapheme)

    def match(self, text: str, pos: int, endpos: int) -> Optional[tuple[int, int]]:
        if not self.grapheme or not text.startswith(self.grapheme, pos, endpos):
            return None
        return pos, pos + len(self.grapheme)

    def context_matches(self, text: str, start: int, end: int) -> bool:
        if self.left is not None and not text.endswith(self.left, 0, start):
            return False
        if self.right is not None and not text.startswith(self.right, end):
            return False
        return True

    def __repr__(self) -> str:
        return f"LiteralPattern({self.grapheme!r}, left={self.left!r}, right={self.right!r})"


class RegexPattern:
    """
    Regular-expression pattern with regex contexts.

    The left context must match immediately before the span (compiled as a
    lookbehind), the right context immediately after it.
    """

    __slots__ = ("grapheme", "left", "right", "_pattern", "_left", "_right")

    def __init__(self, grapheme: str, left: Optional[str] = None, right: Optional[str] = None) -> None:
        self.grapheme = grapheme
        self.left = left or None
        self.right = right or None
        self._pattern = regex.compile(grapheme)
        self._left = regex.compile(f"(?<={self.left})") if self.left else None
        self._right = regex.compile(self.right) if self.right else None

    def search(self, text: str, pos: int, endpos: int) -> Optional[tuple[int, int]]:
        # Skip zero-width hits so a pattern like "a*" cannot stall the scan
        while pos <= endpos:
            m = self._pattern.search(text, pos, endpos)
            if m is None:
                return None
            if m.end() > m.start():
                return m.span()
            pos = m.start() + 1
        return None

    def match(self, text: str, pos: int, endpos: int) -> Optional[tuple[int, int]]:
        m = self._pattern.match(text, pos, endpos)
        if m is None or m.end() == m.start():
            return None
        return m.span()

    def context_matches(self, text: str, start: int, end: int) -> bool:
        if self._left is not None and self._left.match(text, start) is None:
            return False
        if self._right is not None and self._right.match(text, end) is None:
            return False
        return True

    def __repr__(self) -> str:
        return f"RegexPattern({self.grapheme!r}, left={self.left!r}, right={self.right!r})"


# Regex pieces left untouched by class expansion: escapes (including
# \p{...}, \N{...} and \x{...} forms) and bracket expressions
_OPAQUE = r"\\[pPNx]\{[^}]*\}|\\.|\[\^?\]?(?:\\.|[^\]\\])*\]"


def expand_classes(context: Optional[str], classes: Mapping[str, Sequence[str]]) -> Optional[str]:
    """
    Replace class labels in a regex context by an alternation of members.

    Labels inside escapes (``\\s``, ``\\W``, ``\\p{L}``) and inside bracket
    expressions are not class references and are left alone.

    Example:
        >>> expand_classes("V", {"V": ["a", "e"]})
        '(?:a|e)'
    """
    if not context or not classes:
        return context
    labels = sorted(classes, key=len, reverse=True)
    finder = regex.compile(
        f"({_OPAQUE})|" + "|".join(regex.escape(label) for label in labels)
    )

    def _replace(m) -> str:
        if m.group(1) is not None:
            return m.group(1)
        return "(?:" + "|".join(classes[m.group()]) + ")"

    return finder.sub(_replace, context)


def compile_pattern(
    grapheme: str,
    left: Optional[str] = None,
    right: Optional[str] = None,
    use_regex: bool = False,
) -> LiteralPattern | RegexPattern:
    """Build the pattern variant selected for this call."""
    if use_regex:
        return RegexPattern(grapheme, left, right)
    return LiteralPattern(grapheme, left, right)
