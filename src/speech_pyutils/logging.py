"""Loguru-backed logging shared by the assessment modules.

A single stderr sink is installed on first use and reconfigured only when the
requested settings change. Records carry the id of the assessment being
processed so interleaved requests can be told apart.
"""

import os
import random
import sys
import threading
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from loguru import logger as _loguru_logger

if TYPE_CHECKING:
    from loguru import Record

TRUTHY: frozenset[str] = frozenset({"1", "true", "yes", "on"})


class LogFormat(StrEnum):
    """Supported sink formats."""

    STANDARD = "standard"
    JSON = "json"


@dataclass(frozen=True)
class CorrelationInfo:
    """Identifies the assessment a log record belongs to.

    Args:
        request_id: Generated per assessment when not supplied
        submission_id: Caller's submission identifier, preferred for display
    """

    request_id: str
    submission_id: str | None = None

    def __str__(self) -> str:
        return self.submission_id or self.request_id


@dataclass(frozen=True)
class LoggerConfig:
    """Sink settings.

    Args:
        level: Minimum level name accepted by loguru
        format_type: Colorized text or serialized JSON records
        sampling_rate: Share of records kept, 1.0 keeps everything
    """

    level: str = "INFO"
    format_type: LogFormat = LogFormat.STANDARD
    sampling_rate: float = 1.0

    @classmethod
    def from_env(cls) -> "LoggerConfig":
        level = os.getenv("LOGLEVEL", os.getenv("LOG_LEVEL", "INFO")).upper()
        if os.getenv("LOG_JSON", "false").lower() in TRUTHY:
            format_type = LogFormat.JSON
        else:
            format_type = LogFormat(os.getenv("LOG_FORMAT", LogFormat.STANDARD.value).lower())
        return cls(
            level=level,
            format_type=format_type,
            sampling_rate=_get_sampling_rate("LOG_SAMPLING_RATE", 1.0),
        )


_current_correlation: ContextVar[CorrelationInfo | None] = ContextVar(
    "speech_correlation", default=None
)
_active_config: LoggerConfig | None = None
_setup_lock = threading.RLock()

TEXT_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
    "{extra[service_part]} | <yellow>{extra[correlation]}</yellow> - <level>{message}</level>"
)


def _enrich(record: "Record") -> None:
    correlation = _current_correlation.get()
    record["extra"]["correlation"] = str(correlation) if correlation else "-"
    service = record["extra"].get("service")
    record["extra"]["service_part"] = f" | {service}" if service else ""


def configure_logging(config: LoggerConfig) -> None:
    """Install the stderr sink for ``config``, replacing any previous sink.

    Calling again with an identical config is a no-op.
    """
    global _active_config
    rate = config.sampling_rate

    def _keep(record: "Record") -> bool:
        return rate >= 1.0 or random.random() < rate

    with _setup_lock:
        if config == _active_config:
            return
        _loguru_logger.remove()
        _loguru_logger.configure(patcher=_enrich)
        if config.format_type == LogFormat.JSON:
            _loguru_logger.add(sys.stderr, level=config.level, filter=_keep, serialize=True)
        else:
            _loguru_logger.add(
                sys.stderr, level=config.level, filter=_keep, format=TEXT_FORMAT, colorize=True
            )
        _active_config = config


class SpeechLogger:
    """Named logger that tags records with the current assessment.

    Args:
        name: Module name, usually ``__name__``
        service: Optional component name shown next to the location
    """

    def __init__(self, *, name: str, service: str | None = None) -> None:
        self._name = name
        self._logger = _loguru_logger.bind(service=service) if service else _loguru_logger

    @contextmanager
    def correlation_context(
        self, *, description: str, request_id: str | None = None, submission_id: str | None = None
    ) -> Iterator[CorrelationInfo]:
        """Tag every record emitted inside the block with one assessment id.

        Args:
            description: Operation name, logged when the context opens
            request_id: Explicit id, generated when omitted
            submission_id: Caller's submission id

        Yields:
            The active correlation info
        """
        info = CorrelationInfo(
            request_id=request_id or uuid.uuid4().hex, submission_id=submission_id
        )
        token = _current_correlation.set(info)
        self._logger.opt(depth=2).debug(f"Started '{description}' as {info}")
        try:
            yield info
        finally:
            _current_correlation.reset(token)

    @property
    def correlation_info(self) -> CorrelationInfo | None:
        return _current_correlation.get()

    def debug(self, message: str, **kwargs: Any) -> None:
        self._logger.opt(depth=1).debug(message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._logger.opt(depth=1).info(message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._logger.opt(depth=1).warning(message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._logger.opt(depth=1).error(message, **kwargs)


_loggers: dict[str, SpeechLogger] = {}


def get_logger(name: str, *, service: str | None = None) -> SpeechLogger:
    """Return the cached logger for ``name``, configuring the sink from the environment.

    Reads ``LOG_LEVEL`` (or ``LOGLEVEL``), ``LOG_FORMAT``, ``LOG_JSON`` and
    ``LOG_SAMPLING_RATE``.

    Examples:
        logger = get_logger(__name__)
        logger = get_logger(__name__, service="cli")
    """
    cache_key = f"{name}:{service}" if service else name
    with _setup_lock:
        if cache_key not in _loggers:
            configure_logging(LoggerConfig.from_env())
            _loggers[cache_key] = SpeechLogger(name=name, service=service)
        return _loggers[cache_key]


def _get_sampling_rate(env_name: str, default: float) -> float:
    try:
        value = float(os.getenv(env_name, str(default)))
    except ValueError:
        return default
    return value if 0.0 <= value <= 1.0 else default
