"""vocabb CLI: root commands and the config subgroup."""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import click
import typer

from vocabb.application.config import AppConfig, resolve_config
from vocabb.domain.constants import DEFAULT_CATEGORY, DEFAULT_PART_OF_SPEECH

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="vocabb: spaced-repetition vocabulary trainer.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

config_app = typer.Typer(help="Manage vocabb configuration.")
app.add_typer(config_app, name="config")

LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}
HEAT_GLYPHS = " .:*#"


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    store: Annotated[
        Path | None, typer.Option("--store", help="Path to the vocabulary YAML file.")
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for vocabb."""
    ctx.ensure_object(dict)
    ctx.obj["store_path"] = store
    logging.getLogger("vocabb").setLevel(LOG_LEVELS.get(verbose, logging.DEBUG))


def _config(ctx: typer.Context) -> AppConfig:
    obj = ctx.obj or {}
    return resolve_config({"store_path": obj.get("store_path")})


def _store(config: AppConfig):
    from vocabb.application.factory import get_item_store

    return get_item_store(config)


def _fetch_items(store) -> list:
    from vocabb.domain.exceptions import StoreError

    try:
        return store.fetch_all()
    except StoreError as e:
        typer.secho(f"Could not read the vocabulary store: {e}", fg="red", err=True)
        raise typer.Exit(1) from e


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def add(
    ctx: typer.Context,
    word: Annotated[str, typer.Argument(help="The word to learn.")],
    definition: Annotated[str, typer.Argument(help="Its definition.")],
    category: Annotated[str, typer.Option(help="Category tag.")] = DEFAULT_CATEGORY,
    example: Annotated[str, typer.Option(help="Example sentence.")] = "",
    part_of_speech: Annotated[
        str, typer.Option(help="Noun, Verb, ...")
    ] = DEFAULT_PART_OF_SPEECH,
    band_score: Annotated[float | None, typer.Option(help="Band score, e.g. 7.5.")] = None,
):
    """[bold green]Add[/bold green] a word to the vocabulary bank."""
    from vocabb.application.study_service import save_quietly
    from vocabb.domain.models import VocabularyItem

    store = _store(_config(ctx))
    word = word.strip()
    if any(item.word == word for item in _fetch_items(store)):
        typer.secho(f"'{word}' is already in the vocabulary bank.", fg="yellow")
        raise typer.Exit(1)

    store.insert_item(
        VocabularyItem.new(
            word,
            definition.strip(),
            category=category,
            example_sentence=example,
            part_of_speech=part_of_speech,
            band_score=band_score,
        )
    )
    if not save_quietly(store):
        raise typer.Exit(1)
    typer.secho(f"Added '{word}'.", fg="green")


@app.command("import")
def import_words(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="CSV file with word/definition columns.")],
):
    """Import words from a CSV file. Existing words are skipped."""
    from vocabb.application.importer import parse_csv
    from vocabb.application.study_service import save_quietly
    from vocabb.domain.exceptions import ImportFormatError

    store = _store(_config(ctx))
    existing = [item.word for item in _fetch_items(store)]

    try:
        result = parse_csv(path.read_text(encoding="utf-8"), existing_words=existing)
    except (OSError, UnicodeDecodeError) as e:
        typer.secho(f"Could not read {path}: {e}", fg="red", err=True)
        raise typer.Exit(1) from e
    except ImportFormatError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(1) from e

    for item in result.items:
        store.insert_item(item)
    if not save_quietly(store):
        raise typer.Exit(1)

    typer.secho(f"Successfully imported {result.imported} words!", fg="green")
    if result.skipped_duplicates or result.skipped_incomplete:
        typer.echo(
            f"Skipped {result.skipped_duplicates} duplicates and "
            f"{result.skipped_incomplete} incomplete rows."
        )


@app.command("export")
def export_words(
    ctx: typer.Context,
    path: Annotated[
        Path | None, typer.Argument(help="Output CSV file. Prints to stdout if omitted.")
    ] = None,
):
    """Export the vocabulary bank as CSV."""
    from vocabb.application.importer import export_csv

    text = export_csv(_fetch_items(_store(_config(ctx))))
    if path is None:
        typer.echo(text, nl=False)
    else:
        path.write_text(text, encoding="utf-8")
        typer.secho(f"Exported to {path}.", fg="green")


@app.command()
def due(
    ctx: typer.Context,
    category: Annotated[str | None, typer.Option(help="Filter by category.")] = None,
):
    """List the words due for review, most overdue first."""
    from vocabb.application.queue_builder import due_items

    config = _config(ctx)
    items = due_items(
        _fetch_items(_store(config)),
        category or config.default_category,
        buffer_seconds=config.due_buffer_seconds,
    )
    if not items:
        typer.secho("Nothing to review.", fg="yellow")
        return
    for item in items:
        when = item.next_review_at.strftime("%Y-%m-%d") if item.next_review_at else "new"
        typer.echo(f"{item.word}\t{item.category}\t{when}")


@app.command("list")
def list_words(
    ctx: typer.Context,
    category: Annotated[str | None, typer.Option(help="Filter by category.")] = None,
    search: Annotated[str, typer.Option(help="Case-insensitive word search.")] = "",
):
    """Browse the vocabulary bank alphabetically."""
    from vocabb.application.word_bank import browse

    config = _config(ctx)
    items = browse(_fetch_items(_store(config)), category or config.default_category, search)
    if not items:
        typer.secho("No words found.", fg="yellow")
        return
    for item in items:
        typer.echo(f"{item.word}\t{item.category}\t{item.definition}")


@app.command()
def categories(ctx: typer.Context):
    """List the categories in the vocabulary bank."""
    from vocabb.application.word_bank import list_categories

    for name in list_categories(_fetch_items(_store(_config(ctx)))):
        typer.echo(name)


@app.command()
def delete(
    ctx: typer.Context,
    word: Annotated[str, typer.Argument(help="The word to remove.")],
):
    """Remove a word and its review progress."""
    from vocabb.application.study_service import save_quietly
    from vocabb.domain.exceptions import StoreError

    store = _store(_config(ctx))
    try:
        removed = store.delete_item(word.strip())
    except StoreError as e:
        typer.secho(f"Could not read the vocabulary store: {e}", fg="red", err=True)
        raise typer.Exit(1) from e

    if not removed:
        typer.secho(f"'{word}' is not in the vocabulary bank.", fg="yellow")
        raise typer.Exit(1)
    if not save_quietly(store):
        raise typer.Exit(1)
    typer.secho(f"Deleted '{word}'.", fg="green")


@app.command()
def clear(
    ctx: typer.Context,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation.")] = False,
):
    """[bold red]Delete[/bold red] every word and all study progress."""
    from vocabb.application.study_service import save_quietly

    if not yes:
        typer.confirm(
            "This deletes all words and study progress and cannot be undone. Continue?",
            abort=True,
        )
    store = _store(_config(ctx))
    store.clear()
    if not save_quietly(store):
        raise typer.Exit(1)
    typer.secho("All data cleared.", fg="green")


@app.command()
def review(
    ctx: typer.Context,
    category: Annotated[str | None, typer.Option(help="Filter by category.")] = None,
):
    """Review due words as flashcards and grade your recall 0-5."""
    from vocabb.application.factory import get_review_service

    config = _config(ctx)
    service = get_review_service(config, _store(config))
    session = service.start_session(category or config.default_category)

    if session.is_complete:
        typer.secho("All caught up! No words to review.", fg="green")
        return

    while (item := session.current) is not None:
        typer.secho(f"\n{item.word}", bold=True)
        typer.prompt("Press Enter to reveal", default="", show_default=False)
        session.reveal()
        typer.echo(item.definition)
        if item.example_sentence:
            typer.echo(f"  e.g. {item.example_sentence}")
        quality = typer.prompt("Recall quality (0-5)", type=click.IntRange(0, 5))
        updated = service.submit(session, quality)
        if updated is not None and updated.next_review_at is not None:
            typer.echo(f"Next review: {updated.next_review_at:%Y-%m-%d}")

    typer.secho(f"\nSession complete: {session.reviewed} reviewed.", fg="green")


@app.command()
def quiz(
    ctx: typer.Context,
    category: Annotated[str | None, typer.Option(help="Filter by category.")] = None,
):
    """Take a multiple-choice quiz on word definitions."""
    from vocabb.application.factory import get_quiz_service
    from vocabb.domain.quiz import QuizState

    config = _config(ctx)
    service = get_quiz_service(config, _store(config))
    session = service.start(category or config.default_category)

    if session.state == QuizState.IDLE:
        typer.secho("Add at least 4 words to start a quiz.", fg="yellow")
        raise typer.Exit(1)

    while (question := session.current_question) is not None:
        typer.secho(f"\nQuestion {session.total_questions}: {question.item.word}", bold=True)
        for number, option in enumerate(question.options, start=1):
            typer.echo(f"  {number}. {option}")
        choice = typer.prompt("Your answer", type=click.IntRange(1, len(question.options)))
        if service.answer(session, choice - 1):
            typer.secho("Correct!", fg="green")
        else:
            typer.secho(f"Wrong: {question.correct_answer}", fg="red")

    typer.secho(f"\nScore: {session.score}/{session.total_questions}", bold=True)
    for attempt in session.incorrect_attempts:
        typer.echo(f"  {attempt.word}: {attempt.definition} (you chose: {attempt.chosen_answer})")


@app.command()
def stats(
    ctx: typer.Context,
    as_json: Annotated[bool, typer.Option("--json", help="Output raw JSON.")] = False,
):
    """Show streak, mastery and the review forecast."""
    from vocabb.application.activity import activity_heatmap, heat_level
    from vocabb.application.stats import DashboardCalculator
    from vocabb.domain.exceptions import StoreError

    config = _config(ctx)
    store = _store(config)
    items = _fetch_items(store)
    try:
        records = store.fetch_activity()
    except StoreError as e:
        logger.error(f"Failed to fetch activity: {e}")
        records = []

    summary = DashboardCalculator(
        forecast_days=config.forecast_days, daily_goal=config.daily_goal
    ).summarize(items, records)

    if as_json:
        payload = {
            "total_words": summary.total_words,
            "due_now": summary.due_now,
            "streak": summary.streak,
            "mastery_rate": round(summary.mastery_rate, 1),
            "mastered": summary.breakdown.mastered,
            "learning": summary.breakdown.learning,
            "new": summary.breakdown.new,
            "added_today": summary.added_today,
            "reviewed_today": summary.reviewed_today,
            "daily_goal": summary.daily_goal,
            "goal_progress": round(summary.goal_progress, 2),
            "forecast": {d.isoformat(): n for d, n in summary.forecast.items()},
            "activity": summary.activity_by_type,
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    typer.echo(f"Total words:  {summary.total_words}")
    typer.echo(f"To review:    {summary.due_now}")
    typer.echo(f"Streak:       {summary.streak} Days")
    typer.echo(f"Mastery:      {int(summary.mastery_rate)}%")
    typer.echo(
        f"Levels:       {summary.breakdown.mastered} mastered, "
        f"{summary.breakdown.learning} learning, {summary.breakdown.new} new"
    )
    typer.echo(
        f"Daily goal:   {summary.added_today}/{summary.daily_goal} "
        f"({int(summary.goal_progress * 100)}%)"
    )
    typer.echo("Forecast:")
    for day, count in summary.forecast.items():
        typer.echo(f"  {day:%a} {count}")

    heatmap = activity_heatmap(records, weeks=config.heatmap_weeks)
    cells = [HEAT_GLYPHS[heat_level(count)] for count in heatmap.values()]
    typer.echo("Activity:")
    for start in range(0, len(cells), 7):
        typer.echo("  " + "".join(cells[start : start + 7]))


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display the resolved configuration as JSON."""
    config = _config(ctx)
    typer.echo(json.dumps(config.model_dump(mode="json"), indent=2))


def main():
    app()


if __name__ == "__main__":
    main()
