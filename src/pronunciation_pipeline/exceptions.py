"""Custom exception classes for the pipeline."""

from speech_pyutils.errors import SpeechError


class PipelineException(SpeechError):
    """Base exception for all pipeline errors."""

    def __init__(self, msg: str, *, retryable: bool = False) -> None:
        super().__init__(msg=msg, retryable=retryable)


class ConfigurationError(PipelineException):
    """Raised when configuration is invalid or missing."""


class AlignmentError(PipelineException):
    """Raised when alignment cannot be performed."""


class InputTooLongError(AlignmentError):
    """Raised when a sentence or transcript exceeds the token limit.

    Args:
        side: Which input was too long ("reference" or "transcript")
        token_count: Number of tokens found
        max_tokens: Configured limit
    """

    def __init__(self, *, side: str, token_count: int, max_tokens: int) -> None:
        super().__init__(f"{side} has {token_count} tokens, limit is {max_tokens}")
        self.side = side
        self.token_count = token_count
        self.max_tokens = max_tokens


class UnsupportedLocaleError(PipelineException):
    """Raised when feedback is requested in a locale without a message table."""

    def __init__(self, *, locale: str, supported: list[str]) -> None:
        super().__init__(
            f"Locale '{locale}' is unsupported for feedback (supported are {', '.join(supported)})"
        )
        self.locale = locale
