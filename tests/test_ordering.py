"""Tests for profile ordering strategies."""

import pytest

from orthoprofile import InvalidOrderingSpec
from orthoprofile.ordering import count_occurrences, order_profile
from orthoprofile.profile import GraphemeEntry, Profile


def _graphemes(profile, strategies, **kwargs):
    ordered, _ = order_profile(profile, strategies, **kwargs)
    return ordered.graphemes


# =============================================================================
# Single strategies
# =============================================================================


class TestSingleStrategies:
    def test_no_strategy_keeps_catalog_order(self):
        profile = Profile.from_graphemes(["a", "aa", "b"])
        assert _graphemes(profile, []) == ["a", "aa", "b"]
        assert _graphemes(profile, None) == ["a", "aa", "b"]

    def test_size_longest_first_stable(self):
        profile = Profile.from_graphemes(["a", "sch", "b", "ch", "c"])
        assert _graphemes(profile, ["size"]) == ["sch", "ch", "a", "b", "c"]

    def test_size_uses_normalization(self):
        # Decomposed e + acute is one codepoint under NFC, two under NFD
        profile = Profile.from_graphemes(["x", "e\u0301"])
        assert _graphemes(profile, ["size"], normalization="NFD") == ["e\u0301", "x"]
        assert _graphemes(profile, ["size"], normalization="NFC") == ["x", "e\u0301"]
        profile = Profile.from_graphemes(["x", "\u00e9"])
        assert _graphemes(profile, ["size"], normalization="NFD") == ["\u00e9", "x"]

    def test_context_first(self):
        profile = Profile([
            GraphemeEntry("a"),
            GraphemeEntry("b", left="x"),
            GraphemeEntry("c"),
            GraphemeEntry("d", right="y"),
        ])
        assert _graphemes(profile, ["context"]) == ["b", "d", "a", "c"]

    def test_reverse(self):
        profile = Profile.from_graphemes(["a", "b", "c"])
        assert _graphemes(profile, ["reverse"]) == ["c", "b", "a"]

    def test_frequency_rarest_first(self):
        profile = Profile.from_graphemes(["a", "b", "c"])
        counts = count_occurrences(profile, ["aaab", "ab", "ccc", "c"])
        assert counts == [4, 2, 4]
        assert _graphemes(profile, ["frequency"], frequencies=counts) == ["b", "a", "c"]

    def test_frequency_needs_counts(self):
        profile = Profile.from_graphemes(["a"])
        with pytest.raises(ValueError, match="raw count"):
            order_profile(profile, ["frequency"])


# =============================================================================
# Composite ordering
# =============================================================================


class TestCompositeOrdering:
    def test_reverse_breaks_size_ties(self):
        profile = Profile.from_graphemes(["a", "sch", "b", "ch", "tsch", "c"])
        assert _graphemes(profile, ["size", "reverse"]) == [
            "tsch", "sch", "ch", "c", "b", "a"
        ]

    def test_context_breaks_size_ties(self):
        profile = Profile([
            GraphemeEntry("a"),
            GraphemeEntry("a", right="b"),
            GraphemeEntry("aa"),
        ])
        ordered, order = order_profile(profile, ["size", "context"])
        assert order == [2, 1, 0]
        assert ordered[1].right == "b"

    def test_strategy_order_matters(self):
        profile = Profile([
            GraphemeEntry("ab"),
            GraphemeEntry("c", left="x"),
        ])
        assert _graphemes(profile, ["size", "context"]) == ["ab", "c"]
        assert _graphemes(profile, ["context", "size"]) == ["c", "ab"]

    def test_strategies_after_reverse_have_no_effect(self):
        profile = Profile.from_graphemes(["a", "bb", "c"])
        assert _graphemes(profile, ["reverse", "size"]) == ["c", "bb", "a"]

    def test_default_composite(self):
        profile = Profile([
            GraphemeEntry("a"),
            GraphemeEntry("e"),
            GraphemeEntry("a", left="x"),
            GraphemeEntry("ae"),
        ])
        ordered, order = order_profile(profile, ["size", "context", "reverse"])
        assert order == [3, 2, 1, 0]
        assert ordered.graphemes == ["ae", "a", "e", "a"]

    def test_content_unchanged(self):
        entry = GraphemeEntry("x", replacements={"IPA": "ks"})
        profile = Profile([GraphemeEntry("a"), entry])
        ordered, _ = order_profile(profile, ["reverse"])
        assert ordered[0] is entry
        assert ordered.columns == profile.columns


# =============================================================================
# Validation and raw counts
# =============================================================================


class TestValidation:
    def test_unknown_strategy(self):
        profile = Profile.from_graphemes(["a"])
        with pytest.raises(InvalidOrderingSpec, match="alphabetical"):
            order_profile(profile, ["size", "alphabetical"])

    def test_invalid_ordering_is_value_error(self):
        assert issubclass(InvalidOrderingSpec, ValueError)


class TestCountOccurrences:
    def test_non_overlapping(self):
        profile = Profile.from_graphemes(["aa"])
        assert count_occurrences(profile, ["aaa", "aaaa"]) == [3]

    def test_ignores_context_and_other_entries(self):
        profile = Profile([GraphemeEntry("a", left="zzz"), GraphemeEntry("ab")])
        assert count_occurrences(profile, ["ab", "ab"]) == [2, 2]

    def test_literal_counting_of_regex_metacharacters(self):
        profile = Profile.from_graphemes([".", "a"])
        assert count_occurrences(profile, ["a.b"]) == [1, 1]

    def test_empty_pattern(self):
        profile = Profile.from_graphemes([""])
        assert count_occurrences(profile, ["abc"]) == [0]
