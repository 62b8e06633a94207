"""Star rating for externally generated pronunciation scores."""

import math
from typing import Final

from pronunciation_pipeline.constants import MAX_SCORE, MIN_SCORE
from pronunciation_pipeline.models import ScoringThresholds
from speech_pyutils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_THRESHOLDS: Final[ScoringThresholds] = ScoringThresholds()


def clamp_score(raw_score: float) -> int:
    """Round a raw model score half up and clamp it into [0, 100].

    Args:
        raw_score: Score as returned by the scoring model.

    Returns:
        Integer score within the valid range.
    """
    return min(MAX_SCORE, max(MIN_SCORE, math.floor(raw_score + 0.5)))


def score_to_stars(score: int, *, thresholds: ScoringThresholds | None = None) -> int:
    """Convert a 0-100 score to a star rating.

    - 1 star: score <= one_star_max
    - 2 stars: one_star_max < score <= two_star_max
    - 3 stars: score > two_star_max

    Scores outside [0, 100] are clamped first, which yields the same rating
    the comparisons would give for the raw value.

    Args:
        score: Score to convert.
        thresholds: Cut points, defaults to (70, 84).

    Returns:
        Star rating from 1 to 3.
    """
    effective = thresholds or DEFAULT_THRESHOLDS

    if not MIN_SCORE <= score <= MAX_SCORE:
        logger.warning(f"Score {score} outside [{MIN_SCORE}, {MAX_SCORE}], clamping")
        score = clamp_score(score)

    if score <= effective.one_star_max:
        return 1
    if score <= effective.two_star_max:
        return 2
    return 3
