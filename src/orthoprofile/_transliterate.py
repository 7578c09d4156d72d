"""
Transliteration: replace each token by a value from a replacement column.

Tokens keep the link to the profile row that matched them. Where rule
correction rewrote part of the stream, the rewritten tokens are linked
again by looking their text up among the profile graphemes. A token with
no linked row, or whose row has no value in the requested column, becomes
the missing symbol.
"""

from __future__ import annotations

from difflib import SequenceMatcher
from typing import Optional

from orthoprofile._config import DEFAULT_MISSING, TokenizerConfig, normalize_text
from orthoprofile.matching._matcher import TokenizedString
from orthoprofile.profile._model import GraphemeEntry, Profile

__all__ = ["Transliterator", "Transliteration", "split_stream"]


def split_stream(stream: str, separator: str) -> list[str]:
    """
    Split a token stream back into tokens.

    A token equal to the separator shows up as two adjacent empty fields, so
    every pair of empty fields in a row is read back as one such token.
    Lone empty fields (doubled separators left by a rule) are dropped.

    Example:
        >>> split_stream("a b   c", " ")
        ['a', 'b', ' ', 'c']
    """
    tokens = []
    empties = 0
    for field in stream.split(separator):
        if field:
            tokens.extend([separator] * (empties // 2))
            empties = 0
            tokens.append(field)
        else:
            empties += 1
    tokens.extend([separator] * (empties // 2))
    return tokens


class Transliteration:
    """Transliterated stream plus the tokens that fell back to ``missing``."""

    __slots__ = ("text", "gaps")

    def __init__(self, text: str, gaps: list[str]) -> None:
        self.text = text
        self.gaps = gaps

    def __repr__(self) -> str:
        return f"Transliteration({self.text!r}, gaps={self.gaps!r})"


class Transliterator:
    """
    Map corrected token streams to a replacement column.

    Args:
        profile: Ordered profile used for matching
        column: Replacement column name (checked by the caller)
        missing: Fallback symbol
        separator: Token separator of the stream
        normalization: Applied to profile graphemes for lookups

    Example:
        >>> from orthoprofile.profile import GraphemeEntry, Profile
        >>> from orthoprofile.matching import Matcher
        >>> profile = Profile([GraphemeEntry("sch", replacements={"IPA": "ʃ"}),
        ...                    GraphemeEntry("a", replacements={"IPA": "a"})])
        >>> tokenized = Matcher(profile).tokenize("scha")
        >>> Transliterator(profile, "IPA").transliterate(tokenized).text
        'ʃ a'
    """

    def __init__(
        self,
        profile: Profile,
        column: str,
        missing: str = DEFAULT_MISSING,
        separator: str = " ",
        normalization: Optional[str] = "NFC",
    ) -> None:
        self.column = column
        self.missing = missing
        self.separator = separator

        # Context-free rows win the lookup; otherwise the first row in order
        self._lookup: dict[str, GraphemeEntry] = {}
        for entry in profile:
            key = normalize_text(entry.grapheme, normalization)
            current = self._lookup.get(key)
            if current is None or (current.has_context and not entry.has_context):
                self._lookup[key] = entry

    @classmethod
    def from_config(cls, profile: Profile, config: TokenizerConfig) -> "Transliterator":
        return cls(
            profile,
            config.transliterate,
            missing=config.missing,
            separator=config.separator,
            normalization=config.normalization,
        )

    def transliterate(
        self,
        tokenized: TokenizedString,
        corrected: Optional[str] = None,
    ) -> Transliteration:
        """
        Transliterate one (possibly rule-corrected) token stream.

        Args:
            tokenized: Matcher output carrying the span linkage
            corrected: Stream after rule correction; defaults to the
                matcher's own surface form

        Returns:
            Transliteration with the output stream and the texts of tokens
            (other than residue) that had no value
        """
        original_tokens = list(tokenized.tokens)
        if corrected is None or corrected == tokenized.tokenized:
            tokens = original_tokens
            linked = [(span.entry, span.is_residue) for span in tokenized.spans]
        else:
            tokens = split_stream(corrected, self.separator)
            linked = self._relink(original_tokens, tokenized, tokens)

        output = []
        gaps = []
        for token, (entry, is_residue) in zip(tokens, linked):
            value = entry.replacement(self.column) if entry is not None else None
            if value is None:
                output.append(self.missing)
                if not is_residue:
                    gaps.append(token)
            else:
                output.append(value)
        return Transliteration(self.separator.join(output), gaps)

    def _relink(
        self,
        original_tokens: list[str],
        tokenized: TokenizedString,
        tokens: list[str],
    ) -> list[tuple[Optional[GraphemeEntry], bool]]:
        linked: list[tuple[Optional[GraphemeEntry], bool]] = [
            (self._lookup.get(token), False) for token in tokens
        ]
        matcher = SequenceMatcher(None, original_tokens, tokens, autojunk=False)
        for tag, i1, i2, j1, _ in matcher.get_opcodes():
            if tag != "equal":
                continue
            for offset in range(i2 - i1):
                span = tokenized.spans[i1 + offset]
                linked[j1 + offset] = (span.entry, span.is_residue)
        return linked
