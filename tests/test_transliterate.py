"""Tests for transliteration into replacement columns."""

from orthoprofile import Transliterator
from orthoprofile._transliterate import split_stream
from orthoprofile.matching import Matcher
from orthoprofile.ordering import order_profile
from orthoprofile.profile import GraphemeEntry, Profile


def _ordered(profile):
    ordered, _ = order_profile(profile, ["size", "context", "reverse"])
    return ordered


class TestTransliterator:
    def test_basic(self, german_profile):
        profile = _ordered(german_profile)
        tokenized = Matcher(profile).tokenize("schach")
        result = Transliterator(profile, "IPA").transliterate(tokenized)
        assert tokenized.tokenized == "sch a ch"
        assert result.text == "ʃ a x"
        assert result.gaps == []

    def test_entry_without_value_falls_back(self, german_profile):
        profile = _ordered(german_profile)
        tokenized = Matcher(profile).tokenize("tass")
        result = Transliterator(profile, "IPA", missing="?").transliterate(tokenized)
        assert result.text == "t a ?"
        assert result.gaps == ["ss"]

    def test_residue_falls_back_without_gap(self, german_profile):
        profile = _ordered(german_profile)
        tokenized = Matcher(profile).tokenize("tax")
        result = Transliterator(profile, "IPA", missing="?").transliterate(tokenized)
        assert result.text == "t a ?"
        assert result.gaps == []

    def test_fallback_never_blank_nor_source(self):
        profile = Profile([
            GraphemeEntry("a", replacements={"X": ""}),
            GraphemeEntry("b", replacements={"X": "B"}),
        ])
        tokenized = Matcher(profile).tokenize("abc")
        result = Transliterator(profile, "X").transliterate(tokenized)
        assert result.text == "\u2047 B \u2047"

    def test_context_rows_distinguish_values(self):
        profile = Profile([
            GraphemeEntry("n", right="k", replacements={"IPA": "ŋ"}),
            GraphemeEntry("n", replacements={"IPA": "n"}),
            GraphemeEntry("k", replacements={"IPA": "k"}),
            GraphemeEntry("a", replacements={"IPA": "a"}),
        ])
        tokenized = Matcher(profile, regex=True).tokenize("ankna")
        result = Transliterator(profile, "IPA").transliterate(tokenized)
        assert result.text == "a ŋ k n a"


class TestAfterRules:
    def test_rewritten_tokens_relinked_by_grapheme(self, german_profile):
        profile = _ordered(german_profile)
        tokenized = Matcher(profile).tokenize("tsch")
        assert tokenized.tokenized == "t sch"
        # A rule merging the first-pass tokens into an unknown unit
        corrected = "tsch"
        result = Transliterator(profile, "IPA").transliterate(tokenized, corrected)
        assert result.text == "\u2047"
        assert result.gaps == ["tsch"]

    def test_resplit_tokens_found_in_profile(self, german_profile):
        profile = _ordered(german_profile)
        tokenized = Matcher(profile).tokenize("sch")
        result = Transliterator(profile, "IPA").transliterate(tokenized, "s ch")
        assert result.text == "s x"

    def test_unchanged_stretches_keep_linkage(self):
        profile = Profile([
            GraphemeEntry("n", right="k", replacements={"IPA": "ŋ"}),
            GraphemeEntry("n", replacements={"IPA": "n"}),
            GraphemeEntry("k", replacements={"IPA": "k"}),
            GraphemeEntry("a", replacements={"IPA": "a"}),
            GraphemeEntry("e", replacements={"IPA": "e"}),
        ])
        tokenized = Matcher(profile, regex=True).tokenize("anka")
        result = Transliterator(profile, "IPA").transliterate(tokenized, "e n k a")
        # "n k a" is unchanged, so n keeps its context-specific row
        assert result.text == "e ŋ k a"

    def test_lookup_prefers_context_free_row(self):
        profile = Profile([
            GraphemeEntry("n", right="k", replacements={"IPA": "ŋ"}),
            GraphemeEntry("n", replacements={"IPA": "n"}),
            GraphemeEntry("o", replacements={"IPA": "o"}),
        ])
        tokenized = Matcher(profile, regex=True).tokenize("no")
        result = Transliterator(profile, "IPA").transliterate(tokenized, "o n")
        assert result.text == "o n"

    def test_separator_valued_token_survives_rewrite(self):
        profile = Profile([
            GraphemeEntry("a", replacements={"IPA": "A"}),
            GraphemeEntry("b", replacements={"IPA": "B"}),
            GraphemeEntry("c", replacements={"IPA": "C"}),
            GraphemeEntry("ab", replacements={"IPA": "AB"}),
            GraphemeEntry(" ", replacements={"IPA": "#"}),
        ])
        tokenized = Matcher(profile).tokenize("ab c")
        assert tokenized.tokens == ("a", "b", " ", "c")
        plain = Transliterator(profile, "IPA").transliterate(tokenized)
        assert plain.text == "A B # C"
        result = Transliterator(profile, "IPA").transliterate(tokenized, "ab   c")
        assert result.text == "AB # C"
        assert result.gaps == []


class TestSplitStream:
    def test_plain_tokens(self):
        assert split_stream("a b c", " ") == ["a", "b", "c"]

    def test_separator_tokens(self):
        assert split_stream("a b   c", " ") == ["a", "b", " ", "c"]
        assert split_stream("  a", " ") == [" ", "a"]
        assert split_stream("a  ", " ") == ["a", " "]
        assert split_stream("a     b", " ") == ["a", " ", " ", "b"]

    def test_doubled_separator_dropped(self):
        # A rule deleting a whole token leaves two separators behind
        assert split_stream("a  b", " ") == ["a", "b"]

    def test_empty_stream(self):
        assert split_stream("", " ") == []
