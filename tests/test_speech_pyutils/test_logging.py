"""Tests for logger caching and assessment correlation."""

from concurrent.futures import ThreadPoolExecutor

import pytest
from loguru import logger as loguru_logger

from speech_pyutils.logging import CorrelationInfo, LogFormat, LoggerConfig, get_logger


@pytest.mark.unit
class TestCorrelation:
    def test_context_sets_and_restores(self) -> None:
        logger = get_logger(__name__)

        with logger.correlation_context(description="outer", request_id="req-1") as outer:
            assert logger.correlation_info == outer
            with logger.correlation_context(description="inner", submission_id="sub-2"):
                assert str(logger.correlation_info) == "sub-2"
            assert logger.correlation_info == outer

        assert logger.correlation_info is None

    def test_generated_request_id(self) -> None:
        with get_logger(__name__).correlation_context(description="op") as info:
            assert len(info.request_id) == 32

    def test_display_prefers_submission_id(self) -> None:
        assert str(CorrelationInfo(request_id="r")) == "r"
        assert str(CorrelationInfo(request_id="r", submission_id="s")) == "s"

    def test_correlation_shared_between_loggers(self) -> None:
        with get_logger("a").correlation_context(description="op", request_id="shared"):
            assert get_logger("b").correlation_info.request_id == "shared"


@pytest.mark.unit
class TestLoggerConfig:
    def test_loggers_are_cached(self) -> None:
        assert get_logger("cached") is get_logger("cached")
        assert get_logger("cached", service="cli") is not get_logger("cached")

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LOGLEVEL", raising=False)
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_JSON", "true")
        monkeypatch.setenv("LOG_SAMPLING_RATE", "7")

        config = LoggerConfig.from_env()

        assert config == LoggerConfig(level="DEBUG", format_type=LogFormat.JSON, sampling_rate=1.0)

    def test_concurrent_first_use_yields_one_logger(self) -> None:
        with ThreadPoolExecutor(max_workers=8) as pool:
            loggers = list(pool.map(lambda _: get_logger("first-use-race"), range(32)))

        assert all(logger is loggers[0] for logger in loggers)


@pytest.mark.unit
class TestServiceTag:
    def test_service_shown_in_records(self) -> None:
        tagged = get_logger("tagged", service="cli")
        untagged = get_logger("untagged")
        messages: list[str] = []
        handler_id = loguru_logger.add(messages.append, format="{extra[service_part]}|{message}")
        try:
            tagged.info("hello")
            untagged.info("plain")
        finally:
            loguru_logger.remove(handler_id)

        assert [m.strip() for m in messages] == ["| cli|hello", "|plain"]
