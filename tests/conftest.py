"""Shared fixtures for orthoprofile tests."""

from pathlib import Path

import pytest

from orthoprofile import GraphemeEntry, Profile, TokenizerConfig


@pytest.fixture
def divergent_profile() -> Profile:
    """Catalog on which global and linear matching disagree for 'abc'."""
    return Profile.from_graphemes(["bc", "ab", "a", "c"])


@pytest.fixture
def german_profile() -> Profile:
    """Small German profile with an IPA replacement column."""
    return Profile(
        [
            GraphemeEntry("a", replacements={"IPA": "a"}),
            GraphemeEntry("c", replacements={"IPA": "k"}),
            GraphemeEntry("ch", replacements={"IPA": "x"}),
            GraphemeEntry("h", replacements={"IPA": "h"}),
            GraphemeEntry("s", replacements={"IPA": "s"}),
            GraphemeEntry("sch", replacements={"IPA": "ʃ"}),
            GraphemeEntry("t", replacements={"IPA": "t"}),
            GraphemeEntry("u", replacements={"IPA": "u"}),
            GraphemeEntry("ü", replacements={"IPA": "y"}),
            GraphemeEntry("ss", replacements={"IPA": None}),
        ],
        columns=["IPA"],
    )


@pytest.fixture
def unordered() -> TokenizerConfig:
    """Configuration keeping catalog order."""
    return TokenizerConfig(ordering=())


@pytest.fixture
def profile_file(tmp_path: Path) -> Path:
    """A profile TSV with contexts, classes and two replacement columns."""
    path = tmp_path / "test.prf"
    path.write_text(
        "Grapheme\tLeft\tRight\tClass\tIPA\tASCII\n"
        "a\t\t\tV\ta\ta\n"
        "e\t\t\tV\te\te\n"
        "n\t\t\t\tn\tn\n"
        "ng\t\t\t\tŋ\tng\n"
        "g\t\t\t\tg\t\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def rules_file(tmp_path: Path) -> Path:
    """A two-column rule file belonging to profile_file."""
    path = tmp_path / "test.rules"
    path.write_text("n g\tng\nx\ty\n", encoding="utf-8")
    return path
