"""
Grapheme matching submodule.

Re-exports the matcher, its result types and the pattern variants.
"""

from orthoprofile.matching._matcher import Matcher, TokenSpan, TokenizedString
from orthoprofile.matching._patterns import (
    LiteralPattern,
    RegexPattern,
    compile_pattern,
    expand_classes,
)

__all__ = [
    "Matcher",
    "TokenSpan",
    "TokenizedString",
    "LiteralPattern",
    "RegexPattern",
    "compile_pattern",
    "expand_classes",
]
