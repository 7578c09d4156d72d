"""
Aggregated statistics for one tokenization call.

The reporter collects match counts per profile entry, residue per string
and a deduplicated report of missing graphemes. Two reporters built over
disjoint parts of a batch can be merged; merging only sums and unions, so
the result does not depend on the order in which strings were processed.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterator, Optional

from orthoprofile._unicode import codepoints, unicode_names
from orthoprofile.matching._matcher import TokenizedString

__all__ = ["MissingReport", "Reporter"]


class MissingReport:
    """
    Distinct unmatched substrings with the strings they occurred in.

    Strings are identified by their index in the batch.
    """

    def __init__(self) -> None:
        self._sources: dict[str, set[int]] = {}
        self._counts: Counter[str] = Counter()

    def add(self, grapheme: str, index: int, count: int = 1) -> None:
        self._sources.setdefault(grapheme, set()).add(index)
        self._counts[grapheme] += count

    def __contains__(self, grapheme: object) -> bool:
        return grapheme in self._sources

    def __len__(self) -> int:
        return len(self._sources)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._sources))

    def __bool__(self) -> bool:
        return bool(self._sources)

    def sources(self, grapheme: str) -> list[int]:
        """Sorted indices of the strings containing the grapheme."""
        return sorted(self._sources[grapheme])

    def count(self, grapheme: str) -> int:
        return self._counts[grapheme]

    def union(self, other: "MissingReport") -> "MissingReport":
        merged = MissingReport()
        for report in (self, other):
            for grapheme, indices in report._sources.items():
                merged._sources.setdefault(grapheme, set()).update(indices)
            merged._counts.update(report._counts)
        return merged

    def __repr__(self) -> str:
        return f"MissingReport({sorted(self._sources)})"


class Reporter:
    """
    Statistics accumulated over one batch.

    Args:
        n_entries: Number of entries in the ordered profile
    """

    def __init__(self, n_entries: int) -> None:
        self.n_entries = n_entries
        self.counts = [0] * n_entries
        self.originals: dict[int, str] = {}
        self.residues: dict[int, list[str]] = {}
        self.missing = MissingReport()

    def observe(self, index: int, tokenized: TokenizedString) -> None:
        """Record the matcher output for the string at ``index``."""
        self.originals[index] = tokenized.original
        residues = []
        for span in tokenized.spans:
            if span.is_residue:
                residues.append(span.text)
                self.missing.add(span.text, index)
            else:
                self.counts[span.index] += 1
        if residues:
            self.residues[index] = residues

    def mark_missing(self, grapheme: str, index: int) -> None:
        """Record a token that could not be transliterated."""
        self.missing.add(grapheme, index)

    def merge(self, other: "Reporter") -> "Reporter":
        """Combine two reporters over disjoint strings of the same batch."""
        if other.n_entries != self.n_entries:
            raise ValueError("Cannot merge reporters built for different profiles.")
        merged = Reporter(self.n_entries)
        merged.counts = [a + b for a, b in zip(self.counts, other.counts)]
        merged.originals = {**self.originals, **other.originals}
        merged.residues = {**self.residues, **other.residues}
        merged.missing = self.missing.union(other.missing)
        return merged

    def frequencies(self) -> list[int]:
        """Match count per entry of the ordered profile."""
        return list(self.counts)

    def residue_strings(self) -> list[int]:
        """Sorted indices of strings that contain residue."""
        return sorted(self.residues)

    def missing_table(self, sep: str = " | ") -> Optional[list[dict[str, str]]]:
        """
        Missing graphemes as table rows, or None when nothing is missing.

        Args:
            sep: Joins the source strings listed for each grapheme
        """
        if not self.missing:
            return None
        rows = []
        for grapheme in self.missing:
            rows.append({
                "Grapheme": grapheme,
                "Frequency": str(self.missing.count(grapheme)),
                "Codepoint": codepoints(grapheme),
                "UnicodeName": unicode_names(grapheme),
                "Strings": sep.join(
                    self.originals.get(i, "") for i in self.missing.sources(grapheme)
                ),
            })
        return rows

    def print_statistics(self) -> None:
        """Print a summary of the batch."""
        total = len(self.originals)

        if total == 0:
            print("No strings processed.")
            return

        with_residue = len(self.residues)
        pct = (with_residue / total) * 100

        print("\n" + "=" * 60)
        print("TOKENIZATION STATISTICS")
        print("=" * 60)
        print(f"Strings processed: {total:,}")
        print(f"Strings with missing graphemes: {with_residue:,} ({pct:.2f}%)")
        print(f"Profile entries matched: {sum(1 for c in self.counts if c):,} of {self.n_entries:,}")

        if self.missing:
            print("\nMissing graphemes:")
            for grapheme in self.missing:
                print(f"  {grapheme!r:12} {codepoints(grapheme):20} : {self.missing.count(grapheme):>6,}x")

        print("=" * 60 + "\n")
