"""Pronunciation assessment core.

Aligns a target sentence with a speech transcript, classifies each word,
derives localized remediation tips and maps an external 0-100 score onto a
three-star rating.
"""

from pronunciation_pipeline.alignment.word_alignment import align_words
from pronunciation_pipeline.pipeline import assess_pronunciation, rate_score
from pronunciation_pipeline.rules.feedback import synthesize_tips
from pronunciation_pipeline.rules.stars import score_to_stars

__all__ = [
    "align_words",
    "assess_pronunciation",
    "rate_score",
    "score_to_stars",
    "synthesize_tips",
]
