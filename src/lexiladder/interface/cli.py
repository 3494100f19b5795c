"""lexiladder CLI — review scheduling commands and configuration."""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated

import typer

from lexiladder.application.config import AppConfig, resolve_config
from lexiladder.application.factory import get_review_service
from lexiladder.application.review_service import ReviewService
from lexiladder.domain.exceptions import LexiladderError
from lexiladder.domain.review.models import Grade, ReviewItem

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="lexiladder: Mastery-ladder review scheduler for vocabulary.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage lexiladder configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

_LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def configure_logging(verbose: int) -> None:
    logging.getLogger().setLevel(_LOG_LEVELS.get(verbose, logging.DEBUG))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def humanize_error(error: Exception) -> str:
    """Turn an exception into a one-line message for the terminal."""
    if isinstance(error, LexiladderError):
        return str(error)
    if isinstance(error, ValueError):
        return f"Invalid value: {error}"
    return f"{type(error).__name__}: {error}"


def _resolve(ctx: typer.Context) -> AppConfig:
    ctx.ensure_object(dict)
    config = resolve_config(ctx.obj.get("overrides"))
    configure_logging(config.verbose)
    return config


def _service(ctx: typer.Context) -> ReviewService:
    return get_review_service(_resolve(ctx))


def _fail(error: Exception) -> None:
    typer.secho(f"Error: {humanize_error(error)}", fg="red", err=True)
    raise typer.Exit(1)


def _format_instant(ms: int) -> str:
    try:
        return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).isoformat(timespec="seconds")
    except (OverflowError, OSError, ValueError):
        return f"{ms} ms"


def _item_dict(item: ReviewItem) -> dict:
    return {
        "identifier": item.identifier,
        "masteryLevel": item.mastery_level,
        "nextReviewAt": item.next_review_at,
        "reviewCount": item.review_count,
    }


def _echo_item(item: ReviewItem) -> None:
    typer.echo(
        f"{item.identifier}: level {item.mastery_level}, "
        f"next review {_format_instant(item.next_review_at)}, "
        f"reviews {item.review_count}"
    )


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
    snapshot: Annotated[
        Path | None,
        typer.Option("--snapshot", help="Review snapshot file. Defaults to config."),
    ] = None,
):
    """Global settings for lexiladder."""
    ctx.ensure_object(dict)
    ctx.obj["overrides"] = {
        "snapshot_path": snapshot,
        "verbose": (verbose + 1) if verbose else None,
    }


# ---------------------------------------------------------------------------
# Review commands
# ---------------------------------------------------------------------------


@app.command()
def due(
    ctx: typer.Context,
    words: Annotated[
        list[str] | None,
        typer.Argument(help="Candidate words. Defaults to every tracked word."),
    ] = None,
    limit: Annotated[int | None, typer.Option(help="Show at most this many words.")] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """List words due for review, [bold]lowest mastery first[/bold]."""
    try:
        queue = _service(ctx).due(words or None, limit=limit)
    except LexiladderError as e:
        _fail(e)

    if json_output:
        typer.echo(json.dumps(queue))
        return

    if not queue:
        typer.secho("Nothing due.", fg="green")
        return

    for word in queue:
        typer.echo(word)


@app.command("grade")
def grade_cmd(
    ctx: typer.Context,
    word: Annotated[str, typer.Argument(help="Word that was reviewed.")],
    outcome: Annotated[str, typer.Argument(help="correct or incorrect.")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """[bold green]Record[/bold green] a review outcome for a word."""
    try:
        parsed = Grade.parse(outcome)
    except ValueError:
        raise typer.BadParameter(
            f"'{outcome}' is not one of: correct, incorrect", param_hint="OUTCOME"
        )

    try:
        item = _service(ctx).record(word, parsed)
    except LexiladderError as e:
        _fail(e)

    if json_output:
        typer.echo(json.dumps(_item_dict(item)))
    else:
        _echo_item(item)


@app.command()
def track(
    ctx: typer.Context,
    word: Annotated[str, typer.Argument(help="Word to start scheduling.")],
):
    """Start scheduling a word (due immediately)."""
    try:
        item = _service(ctx).track(word)
    except LexiladderError as e:
        _fail(e)
    _echo_item(item)


@app.command()
def forget(
    ctx: typer.Context,
    word: Annotated[str, typer.Argument(help="Word to drop.")],
):
    """Drop a word's review history."""
    try:
        removed = _service(ctx).forget(word)
    except LexiladderError as e:
        _fail(e)

    if removed:
        typer.echo(f"Forgot '{word}'.")
    else:
        typer.secho(f"'{word}' was not tracked.", fg="yellow")


@app.command()
def rename(
    ctx: typer.Context,
    old: Annotated[str, typer.Argument(help="Current word.")],
    new: Annotated[str, typer.Argument(help="New spelling.")],
):
    """Move a word's review history to a new spelling."""
    try:
        item = _service(ctx).rename(old, new)
    except LexiladderError as e:
        _fail(e)
    _echo_item(item)


@app.command()
def reset(
    ctx: typer.Context,
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Bypass confirmation.")
    ] = False,
):
    """[bold red]Reset[/bold red] all progress back to level 0."""
    if not force and not typer.confirm("Reset all review progress?"):
        raise typer.Abort()

    try:
        removed = _service(ctx).reset()
    except LexiladderError as e:
        _fail(e)
    typer.echo(f"Reset {removed} words.")


@app.command()
def stats(
    ctx: typer.Context,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show progress across tracked words."""
    try:
        summary = _service(ctx).summary()
    except LexiladderError as e:
        _fail(e)

    if json_output:
        typer.echo(json.dumps(summary.as_dict(), indent=2))
        return

    typer.echo(f"Words:      {summary.total}")
    typer.echo(f"Due now:    {summary.due}")
    typer.echo(f"New:        {summary.new}")
    typer.echo(f"Learning:   {summary.learning}")
    typer.echo(f"Relearning: {summary.relearning}")
    typer.secho(f"Mastered:   {summary.mastered}", fg="green")
    levels = "  ".join(f"L{level}={count}" for level, count in summary.by_level.items())
    typer.echo(f"Levels:     {levels}")


# ---------------------------------------------------------------------------
# Config commands
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Print the resolved configuration as JSON."""
    config = _resolve(ctx)
    typer.echo(json.dumps(config.model_dump(mode="json"), indent=2))


def main() -> None:
    app()
