"""Localized message tables for pronunciation tips.

Read-only lookup tables keyed by locale, then by tip kind.
"""

from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Final

from pronunciation_pipeline.exceptions import UnsupportedLocaleError


class TipKind(StrEnum):
    """Kinds of tips the feedback rules can emit."""

    INCORRECT = "incorrect"
    MISSING = "missing"
    EXTRA = "extra"
    PERFECT = "perfect"
    ALMOST = "almost"


TIP_MESSAGES: Final[Mapping[str, Mapping[TipKind, str]]] = MappingProxyType(
    {
        "zh-TW": MappingProxyType(
            {
                TipKind.INCORRECT: "這些單字的發音還不夠清楚，先聽示範再慢慢跟著唸",
                TipKind.MISSING: "你漏唸了這些單字，記得把整個句子完整唸出來",
                TipKind.EXTRA: "你多唸了句子裡沒有的單字，試著只唸出句子中的內容",
                TipKind.PERFECT: "發音非常準確，繼續保持！",
                TipKind.ALMOST: "表現很好，只差一點點，再練習一次會更棒！",
            }
        ),
        "en": MappingProxyType(
            {
                TipKind.INCORRECT: "These words were not pronounced clearly. Listen to the model and repeat them slowly",
                TipKind.MISSING: "You left out these words. Remember to read the whole sentence",
                TipKind.EXTRA: "You said some words that are not in the sentence. Try to read only what is written",
                TipKind.PERFECT: "Your pronunciation was accurate. Keep it up!",
                TipKind.ALMOST: "Great job, you are very close. One more try will make it even better!",
            }
        ),
    }
)


def supported_locales() -> list[str]:
    return sorted(TIP_MESSAGES)


def get_message(*, locale: str, kind: TipKind) -> str:
    """Look up a tip message.

    Args:
        locale: Locale code such as "zh-TW" or "en".
        kind: Tip kind.

    Returns:
        Localized message text.

    Raises:
        UnsupportedLocaleError: If no table exists for the locale.
    """
    table = TIP_MESSAGES.get(locale)
    if table is None:
        raise UnsupportedLocaleError(locale=locale, supported=supported_locales())
    return table[kind]
