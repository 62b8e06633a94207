from jellyfish import levenshtein_distance

from speech_pyutils.logging import get_logger

logger = get_logger(__name__)


def l_dist(s1: str, *, s2: str) -> int:
    """Calculate Levenshtein distance between two strings.

    Args:
        s1: First string
        s2: Second string

    Returns:
        Levenshtein distance between the two strings
    """
    try:
        return levenshtein_distance(s1, s2)
    except (TypeError, AttributeError) as e:
        logger.warning(f"Distance calculation error on inputs '{s1}' and '{s2}': {e}")
        return max(len(str(s1)), len(str(s2)))


def within_tolerance(
    s1: str, *, s2: str, steps: tuple[tuple[int, int], ...], ceiling: int
) -> bool:
    """Check whether two strings are within a length-scaled edit tolerance.

    The tolerance is looked up on the longer of the two strings: the first
    ``(max_length, tolerance)`` step whose ``max_length`` is not exceeded wins,
    otherwise ``ceiling`` applies.

    Args:
        s1: First string
        s2: Second string
        steps: Ascending ``(max_length, tolerance)`` pairs
        ceiling: Tolerance for strings longer than every step

    Returns:
        True if the Levenshtein distance does not exceed the tolerance
    """
    longest = max(len(s1), len(s2))
    tolerance = next((tol for max_len, tol in steps if longest <= max_len), ceiling)
    return l_dist(s1, s2=s2) <= tolerance
