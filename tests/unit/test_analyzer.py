"""Unit tests for the query analyzer."""

from __future__ import annotations

import pytest

from media_search.search.analyzer import Term, analyze, fold, tokenize


class TestTokenize:
    def test_splits_and_lowercases(self) -> None:
        assert tokenize("ABC DEF") == [Term("abc", False), Term("def", True)]

    def test_single_term_is_last(self) -> None:
        assert tokenize("Beatles") == [Term("beatles", True)]

    def test_punctuation_splits_words(self) -> None:
        assert [t.text for t in tokenize("AC/DC - Back.In.Black!")] == [
            "ac",
            "dc",
            "back",
            "in",
            "black",
        ]

    def test_only_last_term_flagged(self) -> None:
        terms = tokenize("one two three four")
        assert [t.is_last for t in terms] == [False, False, False, True]

    @pytest.mark.parametrize("raw", ["", "   ", "!!! --- ...", None])
    def test_degenerate_input_is_empty(self, raw: str | None) -> None:
        assert tokenize(raw) == []

    def test_accents_are_folded(self) -> None:
        assert [t.text for t in tokenize("Beyoncé Sigur Rós")] == ["beyonce", "sigur", "ros"]

    def test_non_latin_words_kept(self) -> None:
        assert [t.text for t in tokenize("東京事変 Ярко")] == ["東京事変", "ярко"]

    def test_digits_are_words(self) -> None:
        assert [t.text for t in tokenize("Blink-182")] == ["blink", "182"]

    @pytest.mark.parametrize("raw", ["ABC", "Beyoncé", "MÖTLEY", "ﬁre", "x_y"])
    def test_idempotent_on_normalized_term(self, raw: str) -> None:
        (term,) = tokenize(raw)
        assert tokenize(term.text) == [Term(term.text, True)]


class TestFold:
    def test_strips_combining_marks(self) -> None:
        assert fold("Motörhead") == "Motorhead"

    def test_compatibility_forms(self) -> None:
        assert fold("ﬁ") == "fi"


class TestAnalyze:
    def test_returns_plain_tokens(self) -> None:
        assert analyze("The Dark Side") == ["the", "dark", "side"]
