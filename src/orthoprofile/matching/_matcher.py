"""
Grapheme matching: segment a string into spans using an ordered profile.

Two algorithms are available and they can legitimately disagree:

- global: take the catalog entry by entry; each entry claims every
  non-overlapping occurrence in the still-unclaimed parts of the string
  before the next entry is tried.
- linear: scan left to right; at each position the first entry (in
  profile order) that matches there claims the span.

With the catalog [bc, ab, a, c] and the string "abc", global yields
(a, bc) while linear yields (ab, c).

Whatever no entry claims becomes residue, one Unicode grapheme cluster per
span.

Example:
    >>> from orthoprofile.profile import Profile
    >>> from orthoprofile.matching import Matcher
    >>> profile = Profile.from_graphemes(["bc", "ab", "a", "c"])
    >>> Matcher(profile, method="global").tokenize("abc").tokenized
    'a bc'
    >>> Matcher(profile, method="linear").tokenize("abc").tokenized
    'ab c'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from orthoprofile._config import METHODS, TokenizerConfig, normalize_text
from orthoprofile._unicode import CLUSTER, grapheme_clusters
from orthoprofile.matching._patterns import compile_pattern, expand_classes
from orthoprofile.profile._model import GraphemeEntry, Profile

__all__ = ["Matcher", "TokenSpan", "TokenizedString"]


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class TokenSpan:
    """
    A contiguous piece of one (normalized) input string.

    ``entry`` and ``index`` point at the profile row that matched the span
    (``index`` is its position in the ordered profile); both are None for
    residue.
    """

    text: str
    start: int
    end: int
    entry: Optional[GraphemeEntry] = None
    index: Optional[int] = None

    @property
    def is_residue(self) -> bool:
        return self.entry is None


@dataclass(frozen=True)
class TokenizedString:
    """Segmentation of one input string."""

    original: str
    normalized: str
    spans: tuple[TokenSpan, ...]
    tokens: tuple[str, ...]
    separator: str = " "

    @property
    def tokenized(self) -> str:
        """Separator-joined surface form."""
        return self.separator.join(self.tokens)

    @property
    def residues(self) -> list[str]:
        """Texts of all unmatched spans, in string order."""
        return [span.text for span in self.spans if span.is_residue]

    @property
    def has_residue(self) -> bool:
        return any(span.is_residue for span in self.spans)

    def marked(self, missing: str) -> str:
        """Surface form with every residue span replaced by ``missing``."""
        return self.separator.join(
            missing if span.is_residue else token
            for span, token in zip(self.spans, self.tokens)
        )


# =============================================================================
# Matcher
# =============================================================================


class Matcher:
    """
    Segment strings with an (already ordered) profile.

    Patterns are compiled once, at construction. In regex mode, class
    labels from the profile's Class column may be used inside contexts and
    are expanded to an alternation of their member graphemes.

    Args:
        profile: Profile in matching priority order
        method: "global" or "linear"
        regex: Treat patterns and contexts as regular expressions
        separator: Symbol joining tokens in the surface form
        separator_replacement: Replaces the separator inside token text
        normalization: "NFC", "NFD" or None, applied to strings and patterns
    """

    def __init__(
        self,
        profile: Profile,
        method: str = "global",
        regex: bool = False,
        separator: str = " ",
        separator_replacement: Optional[str] = None,
        normalization: Optional[str] = "NFC",
    ) -> None:
        if method not in METHODS:
            raise ValueError(
                f"Unknown method: {method}. Choose 'global' or 'linear'."
            )
        self.profile = profile
        self.method = method
        self.regex = regex
        self.separator = separator
        self.separator_replacement = separator_replacement
        self.normalization = normalization

        classes = profile.classes() if regex else {}
        self._patterns = []
        for entry in profile:
            entry = entry.normalized(normalization)
            self._patterns.append(
                compile_pattern(
                    entry.grapheme,
                    expand_classes(entry.left, classes),
                    expand_classes(entry.right, classes),
                    use_regex=regex,
                )
            )

    @classmethod
    def from_config(cls, profile: Profile, config: TokenizerConfig) -> "Matcher":
        return cls(
            profile,
            method=config.method,
            regex=config.regex,
            separator=config.separator,
            separator_replacement=config.separator_replacement,
            normalization=config.normalization,
        )

    def tokenize(self, text: str) -> TokenizedString:
        """
        Segment one string.

        Args:
            text: Input string (normalized here before matching)

        Returns:
            TokenizedString whose spans cover the normalized string
        """
        normalized = normalize_text(text, self.normalization)
        if self.method == "global":
            spans = self._match_global(normalized)
        else:
            spans = self._match_linear(normalized)

        tokens = tuple(self._token_text(span.text) for span in spans)
        return TokenizedString(
            original=text,
            normalized=normalized,
            spans=tuple(spans),
            tokens=tokens,
            separator=self.separator,
        )

    def _token_text(self, text: str) -> str:
        if self.separator_replacement is None:
            return text
        return text.replace(self.separator, self.separator_replacement)

    def _span(self, text: str, start: int, end: int, idx: Optional[int]) -> TokenSpan:
        entry = self.profile[idx] if idx is not None else None
        return TokenSpan(text[start:end], start, end, entry, idx)

    def _match_global(self, text: str) -> list[TokenSpan]:
        spans = []
        # Unclaimed stretches of the string as (start, end)
        free = [(0, len(text))] if text else []

        for idx, pattern in enumerate(self._patterns):
            if not free:
                break
            remaining = []
            for seg_start, seg_end in free:
                cursor = seg_start
                pos = seg_start
                while pos < seg_end:
                    found = pattern.search(text, pos, seg_end)
                    if found is None:
                        break
                    start, end = found
                    if not pattern.context_matches(text, start, end):
                        pos = start + 1
                        continue
                    spans.append(self._span(text, start, end, idx))
                    if start > cursor:
                        remaining.append((cursor, start))
                    cursor = pos = end
                if cursor < seg_end:
                    remaining.append((cursor, seg_end))
            free = remaining

        for seg_start, seg_end in free:
            for start, end in grapheme_clusters(text, seg_start, seg_end):
                spans.append(self._span(text, start, end, None))

        spans.sort(key=lambda span: span.start)
        return spans

    def _match_linear(self, text: str) -> list[TokenSpan]:
        spans = []
        pos = 0
        length = len(text)

        while pos < length:
            for idx, pattern in enumerate(self._patterns):
                found = pattern.match(text, pos, length)
                if found is not None and pattern.context_matches(text, *found):
                    spans.append(self._span(text, found[0], found[1], idx))
                    pos = found[1]
                    break
            else:
                end = CLUSTER.match(text, pos).end()
                spans.append(self._span(text, pos, end, None))
                pos = end

        return spans
