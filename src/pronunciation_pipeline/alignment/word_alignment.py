from collections import Counter
from enum import IntEnum

import numpy as np

from pronunciation_pipeline.alignment.matching import is_alignable, is_exact_match
from pronunciation_pipeline.constants import (
    DEFAULT_MAX_TOKENS,
    EXACT_MATCH_COST,
    EXTRA_COST,
    FUZZY_TOLERANCE_CEILING,
    FUZZY_TOLERANCE_STEPS,
    MISSING_COST,
    SUBSTITUTION_COST,
)
from pronunciation_pipeline.exceptions import InputTooLongError
from pronunciation_pipeline.models import AlignedWord, AlignmentSummary, Token, WordStatus
from speech_pyutils.logging import get_logger
from speech_pyutils.text import split_words

logger = get_logger(__name__)


class Move(IntEnum):
    """Backtrack direction stored per DP cell."""

    DIAGONAL = 0
    UP = 1
    LEFT = 2


def tokenize(*, text: str) -> list[Token]:
    """Split text on whitespace into tokens carrying their comparison form.

    Args:
        text: Sentence or transcript.

    Returns:
        Tokens in input order; empty for blank input.
    """
    return [Token.from_raw(word) for word in split_words(text=text)]


def _check_length(*, side: str, tokens: list[Token], max_tokens: int) -> None:
    if len(tokens) > max_tokens:
        logger.warning(f"Rejecting {side} with {len(tokens)} tokens (limit {max_tokens})")
        raise InputTooLongError(side=side, token_count=len(tokens), max_tokens=max_tokens)


def _fill_tables(
    *,
    reference: list[Token],
    transcript: list[Token],
    tolerance_steps: tuple[tuple[int, int], ...],
    tolerance_ceiling: int,
) -> np.ndarray:
    """Fill the cost table and return the backtrack table.

    Args:
        reference: Reference tokens (rows).
        transcript: Transcript tokens (columns).
        tolerance_steps: Fuzzy matching step table.
        tolerance_ceiling: Fuzzy tolerance beyond the last step.

    Returns:
        (m+1) x (n+1) array of ``Move`` values.
    """
    m, n = len(reference), len(transcript)
    cost = np.zeros((m + 1, n + 1), dtype=np.int64)
    back = np.zeros((m + 1, n + 1), dtype=np.int8)

    cost[:, 0] = np.arange(m + 1) * MISSING_COST
    back[:, 0] = Move.UP
    cost[0, :] = np.arange(n + 1) * EXTRA_COST
    back[0, :] = Move.LEFT

    for i in range(1, m + 1):
        ref_token = reference[i - 1]
        for j in range(1, n + 1):
            spoken = transcript[j - 1]
            exact = is_exact_match(ref_token, spoken)
            alignable = exact or is_alignable(
                ref_token,
                spoken,
                tolerance_steps=tolerance_steps,
                tolerance_ceiling=tolerance_ceiling,
            )

            diagonal = cost[i - 1, j - 1] + (EXACT_MATCH_COST if exact else SUBSTITUTION_COST)
            up = cost[i - 1, j] + MISSING_COST
            left = cost[i, j - 1] + EXTRA_COST

            if alignable and diagonal <= up and diagonal <= left:
                cost[i, j], back[i, j] = diagonal, Move.DIAGONAL
            elif up <= left:
                cost[i, j], back[i, j] = up, Move.UP
            else:
                cost[i, j], back[i, j] = left, Move.LEFT

    return back


def _backtrack(
    *, reference: list[Token], transcript: list[Token], back: np.ndarray
) -> list[AlignedWord]:
    aligned: list[AlignedWord] = []
    i, j = len(reference), len(transcript)

    while i > 0 or j > 0:
        move = Move(int(back[i, j]))
        if move == Move.DIAGONAL:
            ref_token = reference[i - 1]
            status = (
                WordStatus.CORRECT
                if is_exact_match(ref_token, transcript[j - 1])
                else WordStatus.INCORRECT
            )
            aligned.append(
                AlignedWord(
                    text=ref_token.raw, status=status, reference_index=i - 1, transcript_index=j - 1
                )
            )
            i -= 1
            j -= 1
        elif move == Move.UP:
            aligned.append(
                AlignedWord(
                    text=reference[i - 1].raw, status=WordStatus.MISSING, reference_index=i - 1
                )
            )
            i -= 1
        else:
            aligned.append(
                AlignedWord(
                    text=transcript[j - 1].raw, status=WordStatus.EXTRA, transcript_index=j - 1
                )
            )
            j -= 1

    aligned.reverse()
    return aligned


def align_words(
    reference: str,
    transcript: str,
    *,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    tolerance_steps: tuple[tuple[int, int], ...] = FUZZY_TOLERANCE_STEPS,
    tolerance_ceiling: int = FUZZY_TOLERANCE_CEILING,
) -> list[AlignedWord]:
    """Align the words of a target sentence with the words of a transcript.

    Uses a minimum edit-distance DP where pairing two words is only allowed
    when they are an exact or fuzzy match. Each entry is marked as:
    - correct: the spoken word matches the reference word
    - incorrect: the spoken word is a near miss of the reference word
    - missing: the reference word was not spoken
    - extra: the spoken word is not in the reference

    Ties prefer pairing, then a missing word over an extra word, so identical
    inputs always produce the identical alignment.

    Args:
        reference: The sentence the student should speak.
        transcript: The transcribed speech.
        max_tokens: Upper bound on tokens per side.
        tolerance_steps: Ascending ``(max_length, tolerance)`` fuzzy match steps.
        tolerance_ceiling: Fuzzy tolerance beyond the last step.

    Returns:
        Aligned words in reference order, extra words placed where they were spoken.

    Raises:
        InputTooLongError: If either side has more than ``max_tokens`` tokens.

    Example:
        >>> [w.status.value for w in align_words("Hello world", "Hello word")]
        ['correct', 'incorrect']
    """
    ref_tokens = tokenize(text=reference)
    hyp_tokens = tokenize(text=transcript)
    _check_length(side="reference", tokens=ref_tokens, max_tokens=max_tokens)
    _check_length(side="transcript", tokens=hyp_tokens, max_tokens=max_tokens)

    if not ref_tokens:
        return [
            AlignedWord(text=token.raw, status=WordStatus.EXTRA, transcript_index=idx)
            for idx, token in enumerate(hyp_tokens)
        ]

    if not hyp_tokens:
        return [
            AlignedWord(text=token.raw, status=WordStatus.MISSING, reference_index=idx)
            for idx, token in enumerate(ref_tokens)
        ]

    back = _fill_tables(
        reference=ref_tokens,
        transcript=hyp_tokens,
        tolerance_steps=tolerance_steps,
        tolerance_ceiling=tolerance_ceiling,
    )
    aligned = _backtrack(reference=ref_tokens, transcript=hyp_tokens, back=back)
    logger.debug(f"Aligned {len(ref_tokens)} reference with {len(hyp_tokens)} transcript tokens")
    return aligned


def summarize_alignment(words: list[AlignedWord]) -> AlignmentSummary:
    """Count aligned words per status."""
    counts = Counter(word.status for word in words)
    return AlignmentSummary(
        correct=counts[WordStatus.CORRECT],
        incorrect=counts[WordStatus.INCORRECT],
        missing=counts[WordStatus.MISSING],
        extra=counts[WordStatus.EXTRA],
    )
