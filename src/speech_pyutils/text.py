import re
import unicodedata
from enum import StrEnum
from typing import Final

WHITESPACE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\s+")


class KeptChar(StrEnum):
    L = "L"  # letter
    N = "N"  # number


def split_words(*, text: str) -> list[str]:
    """Split text on runs of whitespace, dropping empty pieces.

    Args:
        text: Input text to split

    Returns:
        Whitespace-delimited words in their original surface form
    """
    return [word for word in WHITESPACE_PATTERN.split(str(text)) if word]


def normalize_word(*, word: str) -> str:
    """Reduce a word to its comparison form.

    Every character whose Unicode category is not a letter or a number is
    removed, then the remainder is lowercased. Punctuation-only input yields
    an empty string.

    Args:
        word: Surface word to normalize

    Returns:
        Lowercased word containing only letters and digits
    """
    kept = "".join(ch for ch in word if _is_kept_character(ch=ch))
    return kept.lower()


def _is_kept_character(*, ch: str) -> bool:
    """Check if a character survives comparison normalization.

    Args:
        ch: Single character to evaluate

    Returns:
        True if character is a Unicode letter or number
    """
    category = unicodedata.category(ch)
    return category[0] in [e.value for e in KeptChar]
