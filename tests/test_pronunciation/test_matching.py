"""Test suite for exact and fuzzy word matching."""

import pytest

from pronunciation_pipeline.alignment.matching import is_alignable, is_exact_match
from pronunciation_pipeline.models import Token


def _pair(reference: str, spoken: str) -> tuple[Token, Token]:
    return Token.from_raw(reference), Token.from_raw(spoken)


@pytest.mark.unit
class TestIsExactMatch:
    """Test cases for is_exact_match."""

    def test_ignores_case_and_punctuation(self) -> None:
        assert is_exact_match(*_pair("World!", "world"))
        assert is_exact_match(*_pair("don't", "dont"))

    def test_different_words(self) -> None:
        assert not is_exact_match(*_pair("world", "word"))


@pytest.mark.unit
class TestIsAlignable:
    """Test cases for is_alignable."""

    @pytest.mark.parametrize(
        ("reference", "spoken", "expected"),
        [
            ("cat", "cat", True),
            ("cat", "cap", True),
            ("cat", "cup", False),
            ("world", "word", True),
            ("garden", "gordan", True),
            ("garden", "button", False),
            ("elephant", "elefent", True),
            ("elephant", "elegant", True),
            ("elephant", "umbrella", False),
            ("I", "a", True),
            ("go", "do", True),
            ("it", "at", True),
            ("it", "on", False),
        ],
    )
    def test_length_scaled_tolerance(self, reference: str, spoken: str, expected: bool) -> None:
        assert is_alignable(*_pair(reference, spoken)) is expected

    def test_tolerance_uses_longer_word(self) -> None:
        # "ab" vs "abcd": distance 2, longer word has 4 letters so tolerance is 2
        assert is_alignable(*_pair("ab", "abcd"))
        # "ab" vs "abcde": distance 3, longer word has 5 letters so tolerance is 2
        assert not is_alignable(*_pair("ab", "abcde"))

    def test_punctuation_only_tokens_match_each_other(self) -> None:
        assert is_exact_match(*_pair("-", "..."))
        assert is_alignable(*_pair("-", "..."))

    def test_custom_steps(self) -> None:
        reference, spoken = _pair("world", "word")

        assert not is_alignable(reference, spoken, tolerance_steps=((10, 0),), tolerance_ceiling=0)
