"""Tests for the word-combination generator."""

import pytest

from pwctl.domain.errors import GenerationError
from pwctl.generators.xkcd import generate_words, load_wordlist


class TestWordlists:
    @pytest.mark.parametrize("lang", ["en", "de"])
    def test_packaged_lists(self, lang: str) -> None:
        words = load_wordlist(lang)
        assert len(words) > 100
        assert all("-" not in w and " " not in w for w in words)

    def test_unknown_language(self) -> None:
        with pytest.raises(GenerationError):
            load_wordlist("xx")


class TestGenerateWords:
    def test_four_words_three_separators(self) -> None:
        pw = generate_words(4, "-", "en")
        assert pw.count("-") == 3
        assert all(part for part in pw.split("-"))

    def test_words_come_from_list(self) -> None:
        words = set(load_wordlist("en"))
        assert all(w in words for w in generate_words(6, " ", "en").split(" "))

    def test_zero_count(self) -> None:
        assert generate_words(0, "-") == ""
