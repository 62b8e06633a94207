"""Pipeline entry points for the pronunciation assessment core.

The surrounding request handler calls these two functions: one turns a
sentence and transcript into detailed feedback, the other turns an external
score into a star rating.
"""

from pronunciation_pipeline.alignment.word_alignment import align_words, summarize_alignment
from pronunciation_pipeline.config import ScoringConfig, get_config
from pronunciation_pipeline.models import DetailedFeedback, ScoringThresholds, StarResult
from pronunciation_pipeline.rules.feedback import synthesize_tips
from pronunciation_pipeline.rules.stars import clamp_score, score_to_stars
from speech_pyutils.logging import get_logger

logger = get_logger(__name__)


def assess_pronunciation(
    *,
    sentence: str,
    transcript: str,
    locale: str | None = None,
    config: ScoringConfig | None = None,
    submission_id: str | None = None,
) -> DetailedFeedback:
    """Align a transcript with its target sentence and derive tips.

    Args:
        sentence: Target sentence the student should speak.
        transcript: Transcribed speech.
        locale: Tip locale, defaults to the configured locale.
        config: Scoring configuration, defaults to the cached environment config.
        submission_id: Optional identifier used for log correlation.

    Returns:
        Detailed feedback with aligned words and tips.

    Raises:
        InputTooLongError: If either input exceeds the configured token limit.
        UnsupportedLocaleError: If the locale has no message table.
    """
    cfg = config or get_config()

    with logger.correlation_context(description="assess_pronunciation", submission_id=submission_id):
        words = align_words(
            sentence,
            transcript,
            max_tokens=cfg.max_tokens,
            tolerance_steps=cfg.matching.tolerance_steps,
            tolerance_ceiling=cfg.matching.tolerance_ceiling,
        )
        tips = synthesize_tips(
            words,
            locale=locale or cfg.locale,
            max_examples=cfg.max_tip_examples,
            encouragement_error_limit=cfg.encouragement_error_limit,
        )
        summary = summarize_alignment(words)
        logger.info(
            f"Assessed {summary.reference_count} words: {summary.correct} correct, "
            f"{summary.incorrect} incorrect, {summary.missing} missing, {summary.extra} extra"
        )

    return DetailedFeedback(words=words, tips=tips)


def rate_score(
    *,
    score: float,
    thresholds: ScoringThresholds | None = None,
    config: ScoringConfig | None = None,
) -> StarResult:
    """Clamp a model score and map it onto a star rating.

    Args:
        score: Raw score from the scoring model.
        thresholds: Admin-supplied cut points, defaults to the configured ones.
        config: Scoring configuration, defaults to the cached environment config.

    Returns:
        The clamped score and its star rating.
    """
    effective = thresholds or (config or get_config()).thresholds
    clamped = clamp_score(score)
    stars = score_to_stars(clamped, thresholds=effective)
    logger.debug(f"Score {score} -> {clamped} -> {stars} stars")
    return StarResult(stars=stars, score=clamped)
