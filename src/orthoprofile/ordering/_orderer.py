"""
Profile ordering: decide which catalog entries are tried first.

Hand-written profiles usually list general patterns before specific ones
and short graphemes before long ones. Matching is order-sensitive, so the
catalog is reordered by a composite, stable key before matching starts.

Strategies (applied as successive tie-breakers, in the order given):
    - size: longer patterns (codepoints after normalization) first
    - context: entries with a left/right context first
    - frequency: rarest patterns first, counted in a raw pre-pass
    - reverse: reverse the catalog order of entries still tied

Example:
    >>> from orthoprofile.profile import Profile
    >>> from orthoprofile.ordering import order_profile
    >>> profile = Profile.from_graphemes(["a", "aa", "b"])
    >>> ordered, order = order_profile(profile, ["size"])
    >>> ordered.graphemes, order
    (['aa', 'a', 'b'], [1, 0, 2])
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from orthoprofile._config import normalize_text, validate_ordering
from orthoprofile.profile._model import GraphemeEntry, Profile

__all__ = ["order_profile", "count_occurrences"]


def count_occurrences(
    profile: Profile,
    strings: Iterable[str],
    normalization: Optional[str] = "NFC",
) -> list[int]:
    """
    Count non-overlapping literal occurrences of each pattern in a batch.

    This is a raw scan: contexts are ignored and no characters are claimed,
    so every entry is counted independently of all others. The result only
    feeds the "frequency" ordering strategy.

    Args:
        profile: Profile whose patterns are counted
        strings: The whole batch of input strings
        normalization: Applied to strings and patterns before counting

    Returns:
        One count per entry, in profile order
    """
    texts = [normalize_text(s, normalization) for s in strings]
    counts = []
    for entry in profile:
        pattern = normalize_text(entry.grapheme, normalization)
        if not pattern:
            counts.append(0)
            continue
        counts.append(sum(text.count(pattern) for text in texts))
    return counts


def _sort_key(
    entry: GraphemeEntry,
    idx: int,
    strategies: Sequence[str],
    normalization: Optional[str],
    frequencies: Optional[Sequence[int]],
) -> tuple:
    key = []
    for strategy in strategies:
        if strategy == "size":
            key.append(-entry.size(normalization))
        elif strategy == "context":
            key.append(0 if entry.has_context else 1)
        elif strategy == "frequency":
            key.append(frequencies[idx])
        elif strategy == "reverse":
            key.append(-idx)
    # Catalog position settles anything still tied
    key.append(idx)
    return tuple(key)


def order_profile(
    profile: Profile,
    strategies: Optional[Sequence[str]] = None,
    normalization: Optional[str] = "NFC",
    frequencies: Optional[Sequence[int]] = None,
) -> tuple[Profile, list[int]]:
    """
    Reorder a profile by a composite strategy.

    Args:
        profile: Profile in catalog order
        strategies: Strategy keywords; None or empty keeps catalog order
        normalization: Used to measure pattern size
        frequencies: Per-entry raw counts (see count_occurrences);
            required by the "frequency" strategy

    Returns:
        (ordered_profile, order) where order[i] is the catalog index of
        the entry now at position i

    Raises:
        InvalidOrderingSpec: If a strategy keyword is unknown
        ValueError: If "frequency" is requested without frequencies
    """
    strategies = validate_ordering(strategies)
    if "frequency" in strategies:
        if frequencies is None or len(frequencies) != len(profile):
            raise ValueError(
                "Frequency ordering needs one raw count per profile entry."
            )

    order = sorted(
        range(len(profile)),
        key=lambda i: _sort_key(profile[i], i, strategies, normalization, frequencies),
    )
    return profile.permuted(order), order
