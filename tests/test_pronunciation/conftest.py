"""Pytest configuration and fixtures for the pronunciation pipeline tests."""

from collections.abc import Iterator

import pytest

from pronunciation_pipeline.config import ScoringConfig, get_config
from pronunciation_pipeline.models import AlignedWord, WordStatus


@pytest.fixture(autouse=True)
def clear_config_cache() -> Iterator[None]:
    """Reset the cached environment configuration around each test."""
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def scoring_config() -> ScoringConfig:
    """Default configuration independent of the environment."""
    return ScoringConfig()


@pytest.fixture
def mixed_alignment() -> list[AlignedWord]:
    """Alignment with one word in every bucket."""
    return [
        AlignedWord("I", WordStatus.CORRECT, 0, 0),
        AlignedWord("um", WordStatus.EXTRA, None, 1),
        AlignedWord("like", WordStatus.CORRECT, 1, 2),
        AlignedWord("to", WordStatus.MISSING, 2, None),
        AlignedWord("apples", WordStatus.INCORRECT, 3, 3),
    ]
