"""
orthoprofile: orthography profile tokenization and transliteration.

Segments strings into user-defined graphemes according to an ordered
catalog (an orthography profile), corrects the segmentation with optional
rules and transliterates each grapheme into a chosen replacement column.

Basic usage:
    >>> from orthoprofile import tokenize
    >>> result = tokenize(["aabc"], ["a", "aa", "b", "c"], ordering=["size"])
    >>> result.strings[0].tokenized
    'aa b c'

With transliteration:
    >>> from orthoprofile import GraphemeEntry, Profile, tokenize
    >>> profile = Profile([
    ...     GraphemeEntry("sch", replacements={"IPA": "ʃ"}),
    ...     GraphemeEntry("u", replacements={"IPA": "u"}),
    ... ])
    >>> tokenize("schu", profile, transliterate="IPA").strings[0].transliterated
    'ʃ u'

Diagnostics are logged with loguru and disabled by default; enable them
with ``logger.enable("orthoprofile")``.
"""

from loguru import logger

from orthoprofile._config import TokenizerConfig
from orthoprofile._errors import (
    InvalidOrderingSpec,
    MalformedProfileError,
    MissingGraphemeWarning,
)
from orthoprofile._report import MissingReport, Reporter
from orthoprofile._tokenize import StringResult, TokenizationResult, tokenize
from orthoprofile._transliterate import Transliterator
from orthoprofile.matching import Matcher, TokenizedString, TokenSpan
from orthoprofile.ordering import count_occurrences, order_profile
from orthoprofile.profile import (
    GraphemeEntry,
    Profile,
    derive_profile,
    read_profile,
    rules_path_for,
    write_profile,
)
from orthoprofile.rules import Rule, apply_rules, read_rules

logger.disable("orthoprofile")

__version__ = "0.1.0"
__all__ = [
    "tokenize",
    "TokenizerConfig",
    "TokenizationResult",
    "StringResult",
    "GraphemeEntry",
    "Profile",
    "derive_profile",
    "read_profile",
    "write_profile",
    "rules_path_for",
    "order_profile",
    "count_occurrences",
    "Matcher",
    "TokenSpan",
    "TokenizedString",
    "Rule",
    "apply_rules",
    "read_rules",
    "Transliterator",
    "Reporter",
    "MissingReport",
    "MalformedProfileError",
    "InvalidOrderingSpec",
    "MissingGraphemeWarning",
]


# Lazy import for spaCy components (only when spacy is installed)
def __getattr__(name: str):
    if name == "OrthographyTokenizerComponent":
        try:
            from orthoprofile.spacy import OrthographyTokenizerComponent
            return OrthographyTokenizerComponent
        except ImportError:
            raise ImportError(
                "spaCy integration requires spacy. "
                "Install with: pip install orthoprofile[spacy]"
            )
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
