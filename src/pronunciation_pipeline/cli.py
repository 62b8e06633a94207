"""Command line interface for the pronunciation assessment pipeline."""

import orjson
import typer

from pronunciation_pipeline.alignment.word_alignment import summarize_alignment
from pronunciation_pipeline.config import ScoringConfig, load_config
from pronunciation_pipeline.exceptions import PipelineException
from pronunciation_pipeline.models import ScoringThresholds
from pronunciation_pipeline.pipeline import assess_pronunciation, rate_score
from speech_pyutils.logging import get_logger

logger = get_logger(__name__, service="cli")

app: typer.Typer = typer.Typer(
    help="Align spoken transcripts with target sentences and rate scores", no_args_is_help=True
)


def _load(config_path: str | None) -> ScoringConfig:
    try:
        return load_config(config_path=config_path)
    except (FileNotFoundError, PipelineException) as e:
        typer.echo(f"Could not load configuration: {e}", err=True)
        raise typer.Exit(2) from e


@app.command()
def assess(
    sentence: str = typer.Argument(..., help="Target sentence the student should speak"),
    transcript: str = typer.Argument(..., help="Transcribed speech"),
    locale: str = typer.Option(None, "--locale", help="Tip locale (zh-TW or en)"),
    config_path: str = typer.Option(
        None, "--config-path", help="Path to configuration YAML file", show_default=False
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the feedback as JSON"),
) -> None:
    """Show word-by-word feedback and tips for a transcript."""
    config = _load(config_path)

    try:
        feedback = assess_pronunciation(
            sentence=sentence, transcript=transcript, locale=locale, config=config
        )
    except PipelineException as e:
        logger.error(f"Assessment failed: {e}")
        typer.echo(f"Assessment failed: {e}", err=True)
        raise typer.Exit(1) from e

    if as_json:
        typer.echo(orjson.dumps(feedback.to_dict(), option=orjson.OPT_INDENT_2).decode("utf-8"))
        return

    for word in feedback.words:
        typer.echo(f"{word.status.value:<10} {word.text}")
    summary = summarize_alignment(feedback.words)
    typer.echo(f"\nAccuracy: {summary.accuracy:.0%}")
    for tip in feedback.tips:
        suffix = f" ({tip.example})" if tip.example else ""
        typer.echo(f"* {tip.message}{suffix}")


@app.command()
def stars(
    score: float = typer.Argument(..., help="Score from the scoring model (0-100)"),
    one_star_max: int = typer.Option(None, "--one-star-max", help="Highest one-star score"),
    two_star_max: int = typer.Option(None, "--two-star-max", help="Highest two-star score"),
    config_path: str = typer.Option(
        None, "--config-path", help="Path to configuration YAML file", show_default=False
    ),
) -> None:
    """Map a score onto a 1-3 star rating."""
    config = _load(config_path)

    thresholds = config.thresholds
    if one_star_max is not None or two_star_max is not None:
        try:
            thresholds = ScoringThresholds(
                one_star_max=one_star_max if one_star_max is not None else thresholds.one_star_max,
                two_star_max=two_star_max if two_star_max is not None else thresholds.two_star_max,
            )
        except ValueError as e:
            typer.echo(f"Invalid thresholds: {e}", err=True)
            raise typer.Exit(2) from e

    result = rate_score(score=score, thresholds=thresholds)
    typer.echo(orjson.dumps(result.to_dict()).decode("utf-8"))


if __name__ == "__main__":
    app()
