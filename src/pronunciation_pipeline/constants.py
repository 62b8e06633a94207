"""Constants for the pronunciation assessment pipeline.

Default values shared by configuration, alignment and the feedback rules.
"""

from typing import Final

# Fuzzy matching: (max normalized length, allowed edit distance), ascending.
FUZZY_TOLERANCE_STEPS: Final[tuple[tuple[int, int], ...]] = ((3, 1), (6, 2))
FUZZY_TOLERANCE_CEILING: Final[int] = 3

EXACT_MATCH_COST: Final[int] = 0
SUBSTITUTION_COST: Final[int] = 2
MISSING_COST: Final[int] = 1
EXTRA_COST: Final[int] = 1

DEFAULT_MAX_TOKENS: Final[int] = 200

DEFAULT_ONE_STAR_MAX: Final[int] = 70
DEFAULT_TWO_STAR_MAX: Final[int] = 84
MIN_SCORE: Final[int] = 0
MAX_SCORE: Final[int] = 100

MAX_TIP_EXAMPLES: Final[int] = 3
ENCOURAGEMENT_ERROR_LIMIT: Final[int] = 2
EXAMPLE_SEPARATOR: Final[str] = ", "

DEFAULT_LOCALE: Final[str] = "zh-TW"
