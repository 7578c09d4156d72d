"""
Post-segmentation correction rules.

Rules are (pattern, replacement) pairs applied to the separator-joined
token stream produced by the matcher. They run once, top to bottom: each
rule substitutes globally over the output of the previous rule. Rules are
not iterated to a fixpoint, and an earlier rule never sees the output of a
later one.

Because rules see the surface form (tokens plus separators), a pattern
must target the exact first-pass tokenization it intends to correct.

Example:
    >>> from orthoprofile.rules import Rule, apply_rules
    >>> apply_rules("t s c h", [Rule("t s", "ts"), Rule("c h", "ch")])
    'ts ch'
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

import regex

from orthoprofile._tsv import read_tsv_rows

__all__ = ["Rule", "apply_rules", "read_rules", "as_rules"]


@dataclass(frozen=True)
class Rule:
    """A single find/replace step."""

    pattern: str
    replacement: str

    def apply(self, stream: str) -> str:
        """Substitute every occurrence of the pattern in the stream."""
        return regex.sub(self.pattern, self.replacement, stream)


def apply_rules(stream: str, rules: Sequence[Rule]) -> str:
    """
    Apply rules in order, each to the output of the previous one.

    Args:
        stream: Separator-joined token stream
        rules: Rules in file order

    Returns:
        Corrected stream
    """
    for rule in rules:
        stream = rule.apply(stream)
    return stream


def read_rules(path: str | Path) -> list[Rule]:
    """
    Load rules from a two-column TSV file without a header.

    A missing replacement cell means "replace with nothing".

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If a row has no pattern
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found: {path}")

    rules = []
    for lineno, row in enumerate(read_tsv_rows(path), start=1):
        if not row[0]:
            raise ValueError(f"{path}: rule {lineno} has an empty pattern")
        replacement = row[1] if len(row) > 1 else ""
        rules.append(Rule(row[0], replacement))
    return rules


def as_rules(rules: Iterable[Rule | tuple[str, str]] | str | Path | None) -> list[Rule]:
    """Accept rules as a file path, Rule objects or (pattern, replacement) pairs."""
    if rules is None:
        return []
    if isinstance(rules, (str, Path)):
        return read_rules(rules)
    return [rule if isinstance(rule, Rule) else Rule(*rule) for rule in rules]
