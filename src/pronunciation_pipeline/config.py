"""Configuration for the pronunciation assessment pipeline.

Provides a typed configuration model with environment-backed defaults, a YAML
loader for admin-maintained settings and an accessor that caches the loaded
configuration for reuse.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, Final

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from pronunciation_pipeline.constants import (
    DEFAULT_LOCALE,
    DEFAULT_MAX_TOKENS,
    ENCOURAGEMENT_ERROR_LIMIT,
    FUZZY_TOLERANCE_CEILING,
    FUZZY_TOLERANCE_STEPS,
    MAX_TIP_EXAMPLES,
)
from pronunciation_pipeline.exceptions import ConfigurationError
from pronunciation_pipeline.models import ScoringThresholds
from speech_pyutils.logging import get_logger

logger = get_logger(__name__)

THRESHOLD_ENV_OVERRIDES: Final[tuple[tuple[str, str, str], ...]] = (
    ("oneStarMax", "one_star_max", "ONE_STAR_MAX"),
    ("twoStarMax", "two_star_max", "TWO_STAR_MAX"),
)


class MatchingConfig(BaseModel):
    """Fuzzy word matching configuration."""

    tolerance_steps: tuple[tuple[int, int], ...] = FUZZY_TOLERANCE_STEPS
    tolerance_ceiling: Annotated[int, Field(ge=0)] = FUZZY_TOLERANCE_CEILING

    @field_validator("tolerance_steps")
    @classmethod
    def validate_ascending_steps(cls, v: tuple[tuple[int, int], ...]) -> tuple[tuple[int, int], ...]:
        """Validate step lengths are strictly ascending and tolerances non-negative."""
        lengths = [max_len for max_len, _ in v]
        if lengths != sorted(set(lengths)):
            raise ValueError("tolerance_steps lengths must be strictly ascending")
        if any(tol < 0 for _, tol in v):
            raise ValueError("tolerance_steps tolerances must be non-negative")
        return v


class ScoringConfig(BaseModel):
    """Complete pronunciation scoring configuration."""

    thresholds: ScoringThresholds = Field(default_factory=ScoringThresholds)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    locale: str = DEFAULT_LOCALE
    max_tokens: Annotated[int, Field(ge=1, le=10_000)] = DEFAULT_MAX_TOKENS
    max_tip_examples: Annotated[int, Field(ge=1, le=20)] = MAX_TIP_EXAMPLES
    encouragement_error_limit: Annotated[int, Field(ge=0)] = ENCOURAGEMENT_ERROR_LIMIT

    @classmethod
    def from_env(cls) -> ScoringConfig:
        """Build configuration from environment variables (and a local ``.env``)."""
        load_dotenv()

        def _int(name: str, default: int) -> int:
            try:
                return int(os.getenv(name, str(default)))
            except (ValueError, TypeError):
                logger.warning(f"Ignoring non-integer {name}={os.getenv(name)!r}")
                return default

        try:
            thresholds = ScoringThresholds(
                one_star_max=_int("ONE_STAR_MAX", ScoringThresholds().one_star_max),
                two_star_max=_int("TWO_STAR_MAX", ScoringThresholds().two_star_max),
            )
            return cls(
                thresholds=thresholds,
                locale=os.getenv("FEEDBACK_LOCALE", DEFAULT_LOCALE),
                max_tokens=_int("ALIGNMENT_MAX_TOKENS", DEFAULT_MAX_TOKENS),
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid environment configuration: {e}") from e


def load_config(*, config_path: str | None = None) -> ScoringConfig:
    """Load configuration from a YAML file, falling back to the environment.

    Environment variables override file values for the star thresholds so a
    deployment can adjust them without editing the file.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Configuration object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigurationError: If the file cannot be parsed or fails validation.
    """
    if config_path is None:
        return ScoringConfig.from_env()

    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with config_file.open("r", encoding="utf-8") as file:
            raw_config: Any = yaml.safe_load(file) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse YAML config: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigurationError(
            f"Invalid configuration: expected a mapping at top level, got {type(raw_config).__name__}"
        )
    raw_thresholds = raw_config.get("thresholds")
    if raw_thresholds is not None and not isinstance(raw_thresholds, dict):
        raise ConfigurationError(
            f"Invalid configuration: thresholds must be a mapping, got {type(raw_thresholds).__name__}"
        )

    thresholds = dict(raw_thresholds or {})
    for alias, name, env_name in THRESHOLD_ENV_OVERRIDES:
        if os.getenv(env_name):
            thresholds.pop(name, None)
            thresholds[alias] = os.getenv(env_name)
    if thresholds:
        raw_config["thresholds"] = thresholds

    try:
        config = ScoringConfig(**raw_config)
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    logger.info(f"Config loaded from {config_path}")
    return config


@lru_cache(maxsize=1)
def get_config() -> ScoringConfig:
    """Load and cache the scoring configuration from environment."""
    return ScoringConfig.from_env()
