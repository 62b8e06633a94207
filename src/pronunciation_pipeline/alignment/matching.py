"""Word pairing rules used by the alignment DP."""

from pronunciation_pipeline.constants import FUZZY_TOLERANCE_CEILING, FUZZY_TOLERANCE_STEPS
from pronunciation_pipeline.models import Token
from speech_pyutils.word_distance import within_tolerance


def is_exact_match(reference: Token, spoken: Token) -> bool:
    """Whether two tokens are the same word once normalized."""
    return reference.normalized == spoken.normalized


def is_alignable(
    reference: Token,
    spoken: Token,
    *,
    tolerance_steps: tuple[tuple[int, int], ...] = FUZZY_TOLERANCE_STEPS,
    tolerance_ceiling: int = FUZZY_TOLERANCE_CEILING,
) -> bool:
    """Whether two tokens may be paired as one (possibly mispronounced) word.

    Exact matches are always alignable. Otherwise the edit distance between
    the normalized forms must fall within the tolerance for the longer form:
    up to 3 characters allow 1 edit, up to 6 allow 2, longer words allow 3.

    Args:
        reference: Token from the target sentence.
        spoken: Token from the transcript.
        tolerance_steps: Ascending ``(max_length, tolerance)`` pairs.
        tolerance_ceiling: Tolerance beyond the last step.

    Returns:
        True if the pair may take the diagonal move.
    """
    if is_exact_match(reference, spoken):
        return True
    return within_tolerance(
        reference.normalized,
        s2=spoken.normalized,
        steps=tolerance_steps,
        ceiling=tolerance_ceiling,
    )
