"""
Remediation tips for the pronunciation assessment pipeline.

Buckets the aligned words by status and maps each non-empty bucket onto a
canned, localized tip. Tips are always emitted in the order incorrect,
missing, extra, encouragement.
"""

from pronunciation_pipeline.alignment.word_alignment import summarize_alignment
from pronunciation_pipeline.constants import (
    DEFAULT_LOCALE,
    ENCOURAGEMENT_ERROR_LIMIT,
    EXAMPLE_SEPARATOR,
    MAX_TIP_EXAMPLES,
)
from pronunciation_pipeline.messages import TipKind, get_message
from pronunciation_pipeline.models import AlignedWord, PronunciationTip, WordStatus
from speech_pyutils.logging import get_logger

logger = get_logger(__name__)


def _words_with_status(words: list[AlignedWord], status: WordStatus) -> list[str]:
    return [word.text for word in words if word.status == status]


def _example(texts: list[str], *, max_examples: int) -> str:
    return EXAMPLE_SEPARATOR.join(texts[:max_examples])


def synthesize_tips(
    words: list[AlignedWord],
    *,
    locale: str | None = None,
    max_examples: int = MAX_TIP_EXAMPLES,
    encouragement_error_limit: int = ENCOURAGEMENT_ERROR_LIMIT,
) -> list[PronunciationTip]:
    """
    Derive remediation tips from an alignment.

    Args:
        words: Output of ``align_words``.
        locale: Message table to use, defaults to zh-TW.
        max_examples: Maximum example words listed per tip.
        encouragement_error_limit: Highest total error count that still earns
            an encouragement tip next to the bucket tips.

    Returns:
        At most four tips: one per non-empty error bucket, then an
        encouragement tip when there were no errors or only a few.

    Raises:
        UnsupportedLocaleError: If ``locale`` has no message table.
    """
    locale = locale or DEFAULT_LOCALE
    incorrect = _words_with_status(words, WordStatus.INCORRECT)
    missing = _words_with_status(words, WordStatus.MISSING)
    extra = _words_with_status(words, WordStatus.EXTRA)

    tips: list[PronunciationTip] = []
    if incorrect:
        tips.append(
            PronunciationTip(
                message=get_message(locale=locale, kind=TipKind.INCORRECT),
                example=_example(incorrect, max_examples=max_examples),
            )
        )
    if missing:
        tips.append(
            PronunciationTip(
                message=get_message(locale=locale, kind=TipKind.MISSING),
                example=_example(missing, max_examples=max_examples),
            )
        )
    if extra:
        tips.append(PronunciationTip(message=get_message(locale=locale, kind=TipKind.EXTRA)))

    error_count = summarize_alignment(words).error_count
    if error_count == 0:
        tips.append(PronunciationTip(message=get_message(locale=locale, kind=TipKind.PERFECT)))
    elif error_count <= encouragement_error_limit:
        tips.append(PronunciationTip(message=get_message(locale=locale, kind=TipKind.ALMOST)))

    logger.debug(f"Generated {len(tips)} tips for {error_count} errors")
    return tips
