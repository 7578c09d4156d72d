"""
Orthography profile: an ordered catalog of grapheme entries.

Each entry carries a pattern (literal or regex), optional left/right
context, an optional class label and any number of named replacement
columns. Relative order within the profile decides matching precedence;
patterns need not be unique.

Example:
    >>> from orthoprofile.profile import GraphemeEntry, Profile
    >>> profile = Profile.from_graphemes(["a", "ch", "c"])
    >>> [e.grapheme for e in profile]
    ['a', 'ch', 'c']
    >>> profile.entries[1].size("NFC")
    2
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Sequence

from orthoprofile._config import normalize_text
from orthoprofile._errors import MalformedProfileError
from orthoprofile._unicode import codepoints, grapheme_clusters, unicode_names

__all__ = ["GraphemeEntry", "Profile", "derive_profile"]

# Column names with fixed meaning; everything else is a replacement column
GRAPHEME_COLUMNS = ("grapheme", "graphemes")
LEFT_COLUMN = "left"
RIGHT_COLUMN = "right"
CLASS_COLUMN = "class"
FREQUENCY_COLUMN = "frequency"
INFO_COLUMNS = ("codepoint", "codepoints", "unicodename", "unicodenames")


@dataclass(frozen=True)
class GraphemeEntry:
    """
    A single catalog row.

    The replacement mapping is copied into a read-only view, so entries are
    immutable and hashable (the hash leaves the replacements out).
    """

    grapheme: str
    left: Optional[str] = None
    right: Optional[str] = None
    class_: Optional[str] = None
    replacements: Mapping[str, Optional[str]] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "replacements", MappingProxyType(dict(self.replacements)))

    @property
    def has_context(self) -> bool:
        """True if a left or right context constrains this entry."""
        return bool(self.left) or bool(self.right)

    def size(self, normalization: Optional[str] = "NFC") -> int:
        """Codepoint count of the pattern after normalization."""
        return len(normalize_text(self.grapheme, normalization))

    def replacement(self, column: str) -> Optional[str]:
        """Value of a replacement column, or None when the entry has none."""
        value = self.replacements.get(column)
        if value is None or value == "":
            return None
        return value

    def normalized(self, normalization: Optional[str]) -> "GraphemeEntry":
        """Return a copy with pattern and contexts normalized."""
        return GraphemeEntry(
            grapheme=normalize_text(self.grapheme, normalization),
            left=normalize_text(self.left, normalization) if self.left else self.left,
            right=normalize_text(self.right, normalization) if self.right else self.right,
            class_=self.class_,
            replacements=self.replacements,
        )


class Profile:
    """
    Ordered sequence of GraphemeEntry plus the replacement column names.

    Columns are resolved once, at construction; matching never looks
    anything up by column name.
    """

    def __init__(
        self,
        entries: Iterable[GraphemeEntry],
        columns: Sequence[str] = (),
    ) -> None:
        self.entries: list[GraphemeEntry] = list(entries)
        seen = dict.fromkeys(columns)
        for entry in self.entries:
            for name in entry.replacements:
                seen.setdefault(name)
        self.columns: list[str] = list(seen)

    @classmethod
    def from_graphemes(cls, graphemes: Iterable[str]) -> Profile:
        """Build a context-free profile from bare grapheme strings."""
        return cls(GraphemeEntry(g) for g in graphemes)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Optional[str]]]) -> Profile:
        """
        Build a profile from table rows (e.g. read from a TSV file).

        Column names are matched case-insensitively: "Grapheme" (or
        "Graphemes"), "Left", "Right" and "Class" have fixed meanings;
        "Frequency" and Unicode info columns are ignored; every other
        column is a replacement column.

        Raises:
            MalformedProfileError: If no grapheme column is present
        """
        entries = []
        columns: dict[str, None] = {}
        for row in records:
            keys = {k.lower(): k for k in row}
            grapheme_key = next(
                (keys[name] for name in GRAPHEME_COLUMNS if name in keys), None
            )
            if grapheme_key is None:
                raise MalformedProfileError(
                    "Profile has no 'Grapheme' column. "
                    f"Found columns: {', '.join(row)}"
                )
            replacements = {}
            for key, value in row.items():
                lower = key.lower()
                if lower in GRAPHEME_COLUMNS or lower in (
                    LEFT_COLUMN, RIGHT_COLUMN, CLASS_COLUMN, FREQUENCY_COLUMN
                ) or lower in INFO_COLUMNS:
                    continue
                columns.setdefault(key)
                replacements[key] = value or None
            entries.append(
                GraphemeEntry(
                    grapheme=row[grapheme_key] or "",
                    left=_cell(row, keys, LEFT_COLUMN),
                    right=_cell(row, keys, RIGHT_COLUMN),
                    class_=_cell(row, keys, CLASS_COLUMN),
                    replacements=replacements,
                )
            )
        return cls(entries, columns=list(columns))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[GraphemeEntry]:
        return iter(self.entries)

    def __getitem__(self, idx: int) -> GraphemeEntry:
        return self.entries[idx]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Profile):
            return NotImplemented
        return self.entries == other.entries and self.columns == other.columns

    def __repr__(self) -> str:
        return f"Profile(entries={len(self.entries)}, columns={self.columns})"

    @property
    def graphemes(self) -> list[str]:
        return [e.grapheme for e in self.entries]

    def check_column(self, column: str) -> None:
        """
        Verify a replacement column exists.

        Raises:
            MalformedProfileError: If the column is not on this profile
        """
        if column not in self.columns:
            available = ", ".join(self.columns) or "none"
            raise MalformedProfileError(
                f"Replacement column {column!r} not found in profile. "
                f"Available columns: {available}"
            )

    def permuted(self, order: Sequence[int]) -> Profile:
        """Return a new profile with entries in the given index order."""
        return Profile((self.entries[i] for i in order), columns=self.columns)

    def classes(self) -> dict[str, list[str]]:
        """Map each class label to the graphemes carrying it, in profile order."""
        result: dict[str, list[str]] = {}
        for entry in self.entries:
            if entry.class_:
                result.setdefault(entry.class_, []).append(entry.grapheme)
        return result

    def to_records(
        self,
        frequencies: Optional[Sequence[int]] = None,
        info: bool = False,
        editing: bool = False,
    ) -> list[dict[str, str]]:
        """
        Render the profile as table rows.

        Args:
            frequencies: Optional per-entry match counts (profile order)
            info: Add Codepoint and UnicodeName columns
            editing: Always include Left, Right and Class columns

        Returns:
            List of dicts keyed by column name
        """
        has_left = editing or any(e.left for e in self.entries)
        has_right = editing or any(e.right for e in self.entries)
        has_class = editing or any(e.class_ for e in self.entries)

        rows = []
        for i, entry in enumerate(self.entries):
            row = {"Grapheme": entry.grapheme}
            if has_left:
                row["Left"] = entry.left or ""
            if has_right:
                row["Right"] = entry.right or ""
            if has_class:
                row["Class"] = entry.class_ or ""
            for column in self.columns:
                row[column] = entry.replacements.get(column) or ""
            if frequencies is not None:
                row["Frequency"] = str(frequencies[i])
            if info:
                row["Codepoint"] = codepoints(entry.grapheme)
                row["UnicodeName"] = unicode_names(entry.grapheme)
            rows.append(row)
        return rows


def _cell(row: Mapping[str, Optional[str]], keys: Mapping[str, str], name: str) -> Optional[str]:
    key = keys.get(name)
    if key is None:
        return None
    return row[key] or None


def derive_profile(
    strings: Iterable[str],
    normalization: Optional[str] = "NFC",
    separator: Optional[str] = None,
    editing: bool = False,
) -> tuple[Profile, list[int]]:
    """
    Build a profile from every distinct grapheme cluster in the input.

    With a separator, the strings are taken as already segmented and each
    separator-delimited field becomes a grapheme instead.

    Args:
        strings: Input strings
        normalization: "NFC", "NFD" or None
        separator: Split on this symbol instead of grapheme clusters
        editing: Add a "Replacement" column prefilled with the grapheme,
            ready for hand editing

    Returns:
        (profile, frequencies) with entries ordered by descending
        frequency, then by codepoint order

    Example:
        >>> profile, freqs = derive_profile(["aba", "ca"])
        >>> profile.graphemes, freqs
        (['a', 'b', 'c'], [3, 1, 1])
    """
    counts: Counter[str] = Counter()
    for text in strings:
        text = normalize_text(text, normalization)
        if separator is not None:
            counts.update(field for field in text.split(separator) if field)
        else:
            counts.update(text[s:e] for s, e in grapheme_clusters(text))

    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    entries = []
    for grapheme, _ in ranked:
        replacements = {"Replacement": grapheme} if editing else {}
        entries.append(GraphemeEntry(grapheme, replacements=replacements))
    columns = ["Replacement"] if editing else []
    return Profile(entries, columns=columns), [count for _, count in ranked]
