"""Test suite for the command line interface."""

import orjson
import pytest
from loguru import logger as loguru_logger
from typer.testing import CliRunner

from pronunciation_pipeline.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("ONE_STAR_MAX", "TWO_STAR_MAX", "FEEDBACK_LOCALE", "ALIGNMENT_MAX_TOKENS"):
        monkeypatch.delenv(name, raising=False)


@pytest.mark.unit
class TestAssessCommand:
    """Test cases for the assess command."""

    def test_json_output(self) -> None:
        result = runner.invoke(app, ["assess", "Hello world", "Hello word", "--json"])

        assert result.exit_code == 0
        payload = orjson.loads(result.stdout)
        assert [w["status"] for w in payload["words"]] == ["correct", "incorrect"]
        assert payload["tips"][0]["example"] == "world"

    def test_text_output(self) -> None:
        result = runner.invoke(app, ["assess", "Hello world", "Hello word", "--locale", "en"])

        assert result.exit_code == 0
        lines = result.stdout.splitlines()
        assert lines[0].split() == ["correct", "Hello"]
        assert lines[1].split() == ["incorrect", "world"]
        assert "Accuracy: 50%" in result.stdout
        assert "(world)" in result.stdout

    def test_unsupported_locale_exits_with_error(self) -> None:
        result = runner.invoke(app, ["assess", "Hello", "Hello", "--locale", "fr"])

        assert result.exit_code == 1

    def test_missing_config_file(self, tmp_path) -> None:
        result = runner.invoke(
            app, ["assess", "Hello", "Hello", "--config-path", str(tmp_path / "absent.yaml")]
        )

        assert result.exit_code == 2


@pytest.mark.unit
class TestStarsCommand:
    """Test cases for the stars command."""

    @pytest.mark.parametrize(
        "score,expected",
        [
            ("70", {"stars": 1, "score": 70}),
            ("84.4", {"stars": 2, "score": 84}),
            ("150", {"stars": 3, "score": 100}),
        ],
    )
    def test_default_thresholds(self, score: str, expected: dict) -> None:
        result = runner.invoke(app, ["stars", score])

        assert result.exit_code == 0
        assert orjson.loads(result.stdout) == expected

    def test_threshold_options(self) -> None:
        result = runner.invoke(app, ["stars", "65", "--one-star-max", "50", "--two-star-max", "60"])

        assert result.exit_code == 0
        assert orjson.loads(result.stdout) == {"stars": 3, "score": 65}

    def test_single_threshold_option_keeps_the_other(self) -> None:
        result = runner.invoke(app, ["stars", "80", "--two-star-max", "79"])

        assert orjson.loads(result.stdout)["stars"] == 3

    def test_inverted_thresholds(self) -> None:
        result = runner.invoke(app, ["stars", "65", "--one-star-max", "90", "--two-star-max", "80"])

        assert result.exit_code == 2

    def test_thresholds_from_config_file(self, tmp_path) -> None:
        config_file = tmp_path / "scoring.yaml"
        config_file.write_text("thresholds:\n  oneStarMax: 40\n  twoStarMax: 50\n")

        result = runner.invoke(app, ["stars", "45", "--config-path", str(config_file)])

        assert result.exit_code == 0
        assert orjson.loads(result.stdout)["stars"] == 2

    def test_malformed_config_file(self, tmp_path) -> None:
        config_file = tmp_path / "scoring.yaml"
        config_file.write_text("- a\n- b\n")

        result = runner.invoke(app, ["stars", "45", "--config-path", str(config_file)])

        assert result.exit_code == 2


@pytest.mark.unit
class TestCliLogging:
    def test_errors_are_tagged_with_cli_service(self) -> None:
        messages: list[str] = []
        handler_id = loguru_logger.add(
            messages.append, level="ERROR", format="{extra[service_part]}|{message}"
        )
        try:
            runner.invoke(app, ["assess", "Hello", "Hello", "--locale", "fr"])
        finally:
            loguru_logger.remove(handler_id)

        assert any(m.startswith(" | cli|Assessment failed") for m in messages)
