"""Models for the pronunciation assessment pipeline.

This module contains the data structures that flow between the word aligner,
the feedback rules and the star classifier, plus their serialized shapes for
the surrounding request handler.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pronunciation_pipeline.constants import (
    DEFAULT_ONE_STAR_MAX,
    DEFAULT_TWO_STAR_MAX,
    MAX_SCORE,
    MIN_SCORE,
)
from speech_pyutils.text import normalize_word


class WordStatus(StrEnum):
    """Per-word outcome of an alignment."""

    CORRECT = "correct"
    INCORRECT = "incorrect"
    MISSING = "missing"
    EXTRA = "extra"


@dataclass(frozen=True)
class Token:
    """Whitespace-delimited word with its comparison form.

    Attributes:
        raw: The word as it appeared in the input.
        normalized: Lowercased form with everything but letters and digits removed.
    """

    raw: str
    normalized: str

    @classmethod
    def from_raw(cls, raw: str) -> "Token":
        return cls(raw=raw, normalized=normalize_word(word=raw))


@dataclass(frozen=True)
class AlignedWord:
    """One entry of a reference/transcript alignment.

    Attributes:
        text: Surface text, from the reference for correct/incorrect/missing
            words and from the transcript for extra words.
        status: Word status.
        reference_index: Position in the reference tokens, None for extra words.
        transcript_index: Position in the transcript tokens, None for missing words.
    """

    text: str
    status: WordStatus
    reference_index: int | None = None
    transcript_index: int | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"text": self.text, "status": self.status.value}
        if self.reference_index is not None:
            payload["referenceIndex"] = self.reference_index
        if self.transcript_index is not None:
            payload["transcriptIndex"] = self.transcript_index
        return payload


@dataclass(frozen=True)
class PronunciationTip:
    """Localized remediation message with optional example words."""

    message: str
    example: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"message": self.message}
        if self.example is not None:
            payload["example"] = self.example
        return payload


@dataclass(frozen=True)
class AlignmentSummary:
    """Per-status counts of an alignment.

    Attributes:
        correct: Number of exactly matched words.
        incorrect: Number of fuzzy matched words.
        missing: Number of reference words that were not spoken.
        extra: Number of spoken words that are not in the reference.
    """

    correct: int = 0
    incorrect: int = 0
    missing: int = 0
    extra: int = 0

    @property
    def reference_count(self) -> int:
        return self.correct + self.incorrect + self.missing

    @property
    def transcript_count(self) -> int:
        return self.correct + self.incorrect + self.extra

    @property
    def error_count(self) -> int:
        return self.incorrect + self.missing + self.extra

    @property
    def accuracy(self) -> float:
        """Share of reference words read exactly, 1.0 for an empty reference."""
        if self.reference_count == 0:
            return 1.0
        return self.correct / self.reference_count


@dataclass(frozen=True)
class DetailedFeedback:
    """Word-by-word alignment plus the tips derived from it."""

    words: list[AlignedWord] = field(default_factory=list)
    tips: list[PronunciationTip] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "words": [word.to_dict() for word in self.words],
            "tips": [tip.to_dict() for tip in self.tips],
        }


class ScoringThresholds(BaseModel):
    """Admin-configurable cut points for the star rating.

    Scores up to ``one_star_max`` earn one star, scores up to ``two_star_max``
    earn two stars and anything above earns three.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    one_star_max: Annotated[int, Field(ge=MIN_SCORE, le=MAX_SCORE, alias="oneStarMax")] = (
        DEFAULT_ONE_STAR_MAX
    )
    two_star_max: Annotated[int, Field(ge=MIN_SCORE, le=MAX_SCORE, alias="twoStarMax")] = (
        DEFAULT_TWO_STAR_MAX
    )

    @model_validator(mode="after")
    def validate_ordering(self) -> "ScoringThresholds":
        """Ensure the one-star cut point is strictly below the two-star cut point."""
        if self.one_star_max >= self.two_star_max:
            raise ValueError(
                f"oneStarMax ({self.one_star_max}) must be lower than "
                f"twoStarMax ({self.two_star_max})"
            )
        return self


@dataclass(frozen=True)
class StarResult:
    """Star rating for a clamped score."""

    stars: int
    score: int

    def to_dict(self) -> dict[str, Any]:
        return {"stars": self.stars, "score": self.score}
