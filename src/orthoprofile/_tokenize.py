"""
Batch tokenization: order the profile, match, correct, transliterate.

Example:
    >>> from orthoprofile import tokenize
    >>> result = tokenize(["tschüss"], ["tsch", "ü", "ss", "s"], ordering=None)
    >>> result.strings[0].tokenized
    'tsch ü ss'
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Sequence

from loguru import logger

from orthoprofile._config import TokenizerConfig
from orthoprofile._errors import MissingGraphemeWarning
from orthoprofile._report import MissingReport, Reporter
from orthoprofile._transliterate import Transliterator
from orthoprofile._tsv import write_tsv
from orthoprofile.matching._matcher import Matcher, TokenizedString
from orthoprofile.ordering._orderer import count_occurrences, order_profile
from orthoprofile.profile._io import read_profile
from orthoprofile.profile._model import Profile, derive_profile
from orthoprofile.rules._rules import Rule, apply_rules, as_rules

__all__ = ["tokenize", "TokenizationResult", "StringResult", "RESULT_SUFFIXES"]

RESULT_SUFFIXES = {
    "strings": "_strings.tsv",
    "profile": "_profile.tsv",
    "errors": "_errors.tsv",
    "missing": "_missing.tsv",
}


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class StringResult:
    """Output for one input string."""

    original: str
    tokenized: str
    transliterated: Optional[str]
    segmentation: TokenizedString

    @property
    def has_missing(self) -> bool:
        return self.segmentation.has_residue


@dataclass
class TokenizationResult:
    """Result bundle of one tokenization call."""

    strings: list[StringResult]
    profile: Profile
    frequencies: list[int]
    reporter: Reporter
    config: TokenizerConfig
    rules: list[Rule] = field(default_factory=list)

    @property
    def missing(self) -> MissingReport:
        return self.reporter.missing

    def strings_table(self) -> list[dict[str, str]]:
        rows = []
        for result in self.strings:
            row = {"originals": result.original, "tokenized": result.tokenized}
            if self.config.transliterate is not None:
                row["transliterated"] = result.transliterated
            rows.append(row)
        return rows

    def profile_table(self) -> list[dict[str, str]]:
        return self.profile.to_records(frequencies=self.frequencies)

    def errors_table(self) -> list[dict[str, str]]:
        """Strings containing residue, residue shown as the missing symbol."""
        return [
            {
                "originals": result.original,
                "errors": result.segmentation.marked(self.config.missing),
            }
            for result in self.strings
            if result.has_missing
        ]

    def missing_table(self) -> Optional[list[dict[str, str]]]:
        return self.reporter.missing_table()

    def write(self, stem: str | Path) -> list[Path]:
        """
        Write the result tables as TSV files sharing a stem.

        The missing-graphemes file is only written when something is
        missing. Tabs and line breaks inside cells (from the input strings
        or a derived profile) are written as ``\\t``, ``\\n`` and ``\\r``.

        Returns:
            Paths of the files written
        """
        stem = Path(stem)
        written = []

        def _write(kind: str, records: list[dict[str, str]], columns: Sequence[str]) -> None:
            path = stem.with_name(stem.name + RESULT_SUFFIXES[kind])
            write_tsv(path, records, columns, escape=True)
            written.append(path)

        strings_columns = ["originals", "tokenized"]
        if self.config.transliterate is not None:
            strings_columns.append("transliterated")
        _write("strings", self.strings_table(), strings_columns)

        profile_rows = self.profile_table()
        profile_columns = list(profile_rows[0]) if profile_rows else ["Grapheme", "Frequency"]
        _write("profile", profile_rows, profile_columns)

        _write("errors", self.errors_table(), ["originals", "errors"])

        missing_rows = self.missing_table()
        if missing_rows is not None:
            _write("missing", missing_rows, list(missing_rows[0]))

        logger.debug("Wrote {} result files with stem {}", len(written), stem)
        return written


# =============================================================================
# Pipeline
# =============================================================================


def _as_profile(
    profile: Profile | str | Path | Iterable[str] | None,
    strings: Sequence[str],
    config: TokenizerConfig,
) -> Profile:
    if profile is None:
        derived, _ = derive_profile(strings, normalization=config.normalization)
        logger.debug("Derived profile with {} graphemes", len(derived))
        return derived
    if isinstance(profile, Profile):
        return profile
    if isinstance(profile, (str, Path)):
        return read_profile(profile)
    return Profile.from_graphemes(profile)


def tokenize(
    strings: str | Iterable[str],
    profile: Profile | str | Path | Iterable[str] | None = None,
    rules: Iterable[Rule | tuple[str, str]] | str | Path | None = None,
    *,
    config: Optional[TokenizerConfig] = None,
    **options,
) -> TokenizationResult:
    """
    Tokenize (and optionally transliterate) a batch of strings.

    Args:
        strings: Input strings (a single string is treated as a batch of one)
        profile: Profile, path to a profile TSV, bare graphemes, or None to
            derive one from the input
        rules: Correction rules, path to a rule file, or None
        config: Settings; keyword options override its fields
        **options: TokenizerConfig fields (method, ordering, separator,
            separator_replacement, missing, normalization, regex, silent,
            transliterate)

    Returns:
        TokenizationResult with per-string output, the ordered profile with
        match frequencies, and the missing-grapheme report

    Raises:
        MalformedProfileError: Unknown replacement column
        InvalidOrderingSpec: Unknown ordering keyword

    Warns:
        MissingGraphemeWarning: Once per string with unmatched residue,
            unless silent=True
    """
    if config is None:
        config = TokenizerConfig(**options)
    elif options:
        config = config.replace(**options)

    if isinstance(strings, str):
        strings = [strings]
    strings = list(strings)

    profile = _as_profile(profile, strings, config)
    rules = as_rules(rules)

    if config.transliterate is not None:
        profile.check_column(config.transliterate)

    raw_counts = None
    if "frequency" in config.ordering:
        raw_counts = count_occurrences(profile, strings, config.normalization)
    ordered, _ = order_profile(
        profile, config.ordering, config.normalization, frequencies=raw_counts
    )
    logger.debug(
        "Ordered {} profile entries by {}", len(ordered), list(config.ordering) or "catalog"
    )

    matcher = Matcher.from_config(ordered, config)
    transliterator = (
        Transliterator.from_config(ordered, config)
        if config.transliterate is not None
        else None
    )
    reporter = Reporter(len(ordered))

    results = []
    for idx, text in enumerate(strings):
        segmentation = matcher.tokenize(text)
        reporter.observe(idx, segmentation)

        if segmentation.has_residue and not config.silent:
            warnings.warn(
                MissingGraphemeWarning(
                    f"Missing graphemes in string {idx} ({text!r}): "
                    + ", ".join(repr(r) for r in segmentation.residues)
                ),
                stacklevel=2,
            )

        corrected = apply_rules(segmentation.tokenized, rules)

        transliterated = None
        if transliterator is not None:
            transliteration = transliterator.transliterate(segmentation, corrected)
            transliterated = transliteration.text
            for gap in transliteration.gaps:
                reporter.mark_missing(gap, idx)

        results.append(
            StringResult(
                original=text,
                tokenized=corrected,
                transliterated=transliterated,
                segmentation=segmentation,
            )
        )

    logger.info(
        "Tokenized {} strings; {} with missing graphemes",
        len(results),
        len(reporter.residues),
    )
    return TokenizationResult(
        strings=results,
        profile=ordered,
        frequencies=reporter.frequencies(),
        reporter=reporter,
        config=config,
        rules=rules,
    )
