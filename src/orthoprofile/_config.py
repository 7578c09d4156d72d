"""
Call-scoped configuration for a tokenization run.

One immutable ``TokenizerConfig`` is built per call and handed to every
stage (ordering, matching, rule correction, transliteration).

Example:
    >>> from orthoprofile import TokenizerConfig
    >>> config = TokenizerConfig(method="linear", ordering=("size",))
    >>> config.replace(separator="|").separator
    '|'
"""

from __future__ import annotations

import dataclasses
import unicodedata
from dataclasses import dataclass
from typing import Optional, Sequence

from orthoprofile._errors import InvalidOrderingSpec

__all__ = [
    "TokenizerConfig",
    "METHODS",
    "ORDERING_STRATEGIES",
    "DEFAULT_ORDERING",
    "DEFAULT_MISSING",
    "normalize_text",
    "validate_ordering",
]

METHODS = ("global", "linear")

ORDERING_STRATEGIES = ("size", "context", "frequency", "reverse")

DEFAULT_ORDERING = ("size", "context", "reverse")

# U+2047 DOUBLE QUESTION MARK
DEFAULT_MISSING = "\u2047"

_NORMALIZATION_FORMS = ("NFC", "NFD")


def validate_ordering(ordering: Optional[Sequence[str]]) -> tuple[str, ...]:
    """
    Check ordering keywords and return them as a tuple.

    Args:
        ordering: Strategy keywords, or None for catalog order

    Returns:
        Tuple of strategy keywords (empty for catalog order)

    Raises:
        InvalidOrderingSpec: If a keyword is not a known strategy
    """
    if ordering is None:
        return ()
    if isinstance(ordering, str):
        ordering = (ordering,)
    strategies = tuple(ordering)
    for strategy in strategies:
        if strategy not in ORDERING_STRATEGIES:
            raise InvalidOrderingSpec(
                f"Unknown ordering strategy: {strategy!r}. "
                f"Choose from {', '.join(ORDERING_STRATEGIES)}."
            )
    return strategies


def normalize_text(text: str, normalization: Optional[str]) -> str:
    """Apply Unicode normalization (NFC/NFD), or return text unchanged."""
    if normalization is None:
        return text
    return unicodedata.normalize(normalization, text)


@dataclass(frozen=True)
class TokenizerConfig:
    """
    Settings shared by all stages of one tokenization call.

    Attributes:
        method: "global" (catalog-first) or "linear" (left-to-right scan)
        ordering: Ordering strategies applied before matching
        separator: Symbol inserted between tokens in the output stream
        separator_replacement: Replaces the separator inside token text
        missing: Fallback symbol for residue and transliteration gaps
        normalization: "NFC", "NFD" or None
        regex: Treat patterns and contexts as regular expressions
        silent: Suppress MissingGraphemeWarning
        transliterate: Replacement column to transliterate into, or None
    """

    method: str = "global"
    ordering: tuple[str, ...] = DEFAULT_ORDERING
    separator: str = " "
    separator_replacement: Optional[str] = None
    missing: str = DEFAULT_MISSING
    normalization: Optional[str] = "NFC"
    regex: bool = False
    silent: bool = False
    transliterate: Optional[str] = None

    def __post_init__(self) -> None:
        if self.method not in METHODS:
            raise ValueError(
                f"Unknown method: {self.method}. Choose 'global' or 'linear'."
            )
        object.__setattr__(self, "ordering", validate_ordering(self.ordering))

        normalization = self.normalization
        if isinstance(normalization, str):
            if normalization.lower() == "none":
                normalization = None
            else:
                normalization = normalization.upper()
        if normalization is not None and normalization not in _NORMALIZATION_FORMS:
            raise ValueError(
                f"Unknown normalization: {self.normalization}. "
                "Choose 'NFC', 'NFD' or None."
            )
        object.__setattr__(self, "normalization", normalization)

        if not self.separator:
            raise ValueError("Separator must be a non-empty string.")

    def replace(self, **changes) -> "TokenizerConfig":
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    def normalize(self, text: str) -> str:
        """Normalize text according to this configuration."""
        return normalize_text(text, self.normalization)
