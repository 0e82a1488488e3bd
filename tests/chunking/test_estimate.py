"""Tests for counting views and unit estimation."""

import pytest

from chattools.chunking.estimate import (
    CleanMode,
    analyze_text,
    count_words,
    counting_view,
    estimate_units,
    top_words,
)
from chattools.core.errors import ConfigurationError

pytestmark = pytest.mark.unit


class TestCountingView:
    def test_retain_all_is_identity(self):
        text = "caf\u00e9 \U0001F600 $5\n"
        assert counting_view(text, CleanMode.RETAIN_ALL) == text

    def test_ascii_only_drops_non_ascii(self):
        assert counting_view("caf\u00e9 \U0001F600 ok", CleanMode.ASCII_ONLY) == "caf  ok"

    def test_restricted_keeps_letters_numbers_punct_space(self):
        text = "H\u00e9llo, w\u00f6rld 42!\n\tnext"
        assert counting_view(text, CleanMode.RESTRICTED) == text

    def test_restricted_drops_symbols_and_emoji(self):
        assert counting_view("cost $5 + tax 😀", CleanMode.RESTRICTED) == "cost 5  tax "

    def test_default_mode_is_restricted(self):
        assert counting_view("a😀b") == "ab"


class TestEstimateUnits:
    def test_four_chars_per_unit(self):
        assert estimate_units("abcd" * 10, CleanMode.RETAIN_ALL) == 10

    @pytest.mark.parametrize("text", ["", "a", "abc", "😀😀😀😀😀"])
    def test_never_below_one(self, text):
        assert estimate_units(text) == 1

    def test_monotonic_in_length(self):
        text = "The quick brown fox jumps over the lazy dog. " * 10
        previous = 0
        for i in range(len(text) + 1):
            units = estimate_units(text[:i])
            assert units >= previous
            previous = units

    def test_counts_cleaned_length(self):
        # 8 symbols drop out, leaving 8 letters
        assert estimate_units("abcdefgh$$$$$$$$", CleanMode.RESTRICTED) == 2
        assert estimate_units("abcdefgh$$$$$$$$", CleanMode.RETAIN_ALL) == 4


class TestCleanModeParse:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("unicode", CleanMode.RESTRICTED),
            ("ASCII", CleanMode.ASCII_ONLY),
            (" none ", CleanMode.RETAIN_ALL),
            (CleanMode.ASCII_ONLY, CleanMode.ASCII_ONLY),
        ],
    )
    def test_known_values(self, value, expected):
        assert CleanMode.parse(value) is expected

    def test_unknown_value_names_offender(self):
        with pytest.raises(ConfigurationError, match="bogus"):
            CleanMode.parse("bogus")


class TestWordStats:
    def test_count_words_keeps_apostrophes(self):
        assert count_words("It's a dog's life, 42 times") == 6

    def test_top_words_skips_short_words(self):
        text = "the cat and the dog and the bird of a"
        assert top_words(text, 2) == [("the", 3), ("and", 2)]

    def test_top_words_case_insensitive(self):
        assert top_words("Chunk chunk CHUNK", 1) == [("chunk", 3)]

    def test_analyze_text(self):
        stats = analyze_text("Budget budget overlap 😀", CleanMode.RESTRICTED, top_n=1)
        assert stats.cleaned_chars == len("Budget budget overlap ")
        assert stats.units == 5
        assert stats.words == 3
        assert stats.top_words == [("budget", 2)]
