"""Lexis CLI — review vocabulary from the terminal."""

import asyncio
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml

from lexis.application.config import AppConfig, resolve_config
from lexis.domain.constants import SOURCE_BOOK_LIBRARY, SOURCE_TEXT_ANALYSIS
from lexis.domain.errors import InvalidQuality, NoCardsAvailable, RecordNotFound
from lexis.domain.review.models import VocabularyItem, VocabularyReviewRecord
from lexis.infrastructure.adapters.yaml_store import parse_date

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="lexis: spaced-repetition vocabulary reviews.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage lexis configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


def _configure_verbosity(verbose: int) -> None:
    level = logging.WARNING
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    logging.getLogger("lexis").setLevel(level)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _resolve_with_overrides(ctx: typer.Context, **overrides: Any) -> AppConfig:
    """Merge global options from the callback with per-command overrides."""
    merged = dict(ctx.obj or {})
    merged.update(overrides)
    return resolve_config(merged)


def _service(config: AppConfig):
    from lexis.infrastructure.adapters.factory import get_review_service

    return get_review_service(config)


def _card_line(record: VocabularyReviewRecord) -> str:
    state = "new" if record.repetitions == 0 else f"{record.interval}d"
    flags = ""
    if record.is_mastered:
        flags += " [mastered]"
    if record.is_suspended:
        flags += " [suspended]"
    return (
        f"{record.id}  {record.term:<24} due {record.next_review_date.isoformat()}"
        f"  ease {record.ease_factor:.2f}  {state}{flags}"
    )


def _fail(message: str) -> None:
    typer.secho(message, fg="red", err=True)
    raise typer.Exit(1)


def _is_vocabulary_row(row: Any) -> bool:
    return (
        isinstance(row, dict)
        and isinstance(row.get("term"), str)
        and isinstance(row.get("definition"), str)
    )


def _vocabulary_item(row: dict[str, Any]) -> VocabularyItem:
    known = set(VocabularyItem.__dataclass_fields__)
    values = {k: v for k, v in row.items() if k in known}
    if "created_at" in values:
        values["created_at"] = parse_date(values["created_at"])
    return VocabularyItem(**values)


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
    store: Annotated[
        Path | None, typer.Option("--store", help="Path to the YAML review store.")
    ] = None,
    user: Annotated[str | None, typer.Option("--user", help="Learner id.")] = None,
):
    """Global settings for lexis."""
    ctx.ensure_object(dict)
    ctx.obj.update({"verbose": verbose, "store_path": store, "user_id": user})
    _configure_verbosity(verbose)


# ---------------------------------------------------------------------------
# Vocabulary commands
# ---------------------------------------------------------------------------


@app.command()
def add(
    ctx: typer.Context,
    term: Annotated[str, typer.Argument(help="Word or phrase to learn.")],
    definition: Annotated[str, typer.Argument(help="Definition shown on the card back.")],
    category: Annotated[str | None, typer.Option(help="Vocabulary category.")] = None,
    book: Annotated[
        bool, typer.Option("--book", help="File the term under book_library.")
    ] = False,
):
    """[bold green]Add[/bold green] a term to your review deck."""
    config = _resolve_with_overrides(ctx)
    service = _service(config)
    record = asyncio.run(
        service.add_term(
            config.user_id,
            term,
            definition,
            source_type=SOURCE_BOOK_LIBRARY if book else SOURCE_TEXT_ANALYSIS,
            category=category,
        )
    )
    typer.echo(_card_line(record))


@app.command("import")
def import_vocabulary(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="YAML file with a list of {term, definition}.")],
):
    """Import vocabulary from a YAML list, skipping terms you already have."""
    config = _resolve_with_overrides(ctx)

    try:
        rows = yaml.safe_load(path.read_text(encoding="utf-8")) or []
    except (OSError, yaml.YAMLError) as e:
        _fail(f"Could not read {path}: {e}")

    if not isinstance(rows, list):
        _fail(f"{path} must contain a YAML list of terms.")

    try:
        items = [_vocabulary_item(row) for row in rows if _is_vocabulary_row(row)]
    except ValueError as e:
        _fail(f"Invalid date in {path}: {e}")

    count = asyncio.run(_service(config).import_vocabulary(config.user_id, items))
    typer.secho(f"Imported {count} new terms.", fg="green")


# ---------------------------------------------------------------------------
# Review commands
# ---------------------------------------------------------------------------


@app.command()
def session(
    ctx: typer.Context,
    size: Annotated[int | None, typer.Option("--size", "-n", help="Cards in the session.")] = None,
    due: Annotated[
        bool | None, typer.Option("--due/--no-due", help="Include due reviews.")
    ] = None,
    new: Annotated[
        bool | None, typer.Option("--new/--no-new", help="Include never-reviewed terms.")
    ] = None,
):
    """Build a study session and list its cards."""
    try:
        config = _resolve_with_overrides(
            ctx, session_size=size, include_due=due, include_new=new
        )
    except ValueError as e:
        _fail(str(e))

    session_config = config.session_config()

    try:
        cards = asyncio.run(_service(config).start_session(config.user_id, session_config))
    except NoCardsAvailable as e:
        typer.secho(str(e), fg="yellow")
        raise typer.Exit()

    typer.echo(f"Session: {len(cards)} cards")
    for record in cards:
        typer.echo(_card_line(record))


@app.command()
def answer(
    ctx: typer.Context,
    record_id: Annotated[str, typer.Argument(help="Record id.")],
    grade: Annotated[str, typer.Argument(help="again, hard, good or easy.")],
):
    """Grade your recall of a card and reschedule it."""
    config = _resolve_with_overrides(ctx)
    try:
        record = asyncio.run(_service(config).answer(config.user_id, record_id, grade))
    except (RecordNotFound, InvalidQuality) as e:
        _fail(str(e))

    typer.echo(_card_line(record))


@app.command()
def check(
    ctx: typer.Context,
    record_id: Annotated[str, typer.Argument(help="Record id.")],
    typed: Annotated[str, typer.Argument(help="Your answer for the card's term.")],
):
    """Check a typed answer against a card's term (does not reschedule)."""
    from lexis.application.utils.text import check_answer

    config = _resolve_with_overrides(ctx)
    try:
        record = asyncio.run(_service(config).get(config.user_id, record_id))
    except RecordNotFound as e:
        _fail(str(e))

    if check_answer(typed, record.term):
        typer.secho(f"Correct: {record.term}", fg="green")
    else:
        typer.secho(f"Incorrect: {record.term}", fg="red")
        typer.echo("Grade it with: lexis answer <id> again")


@app.command()
def preview(
    ctx: typer.Context,
    record_id: Annotated[str, typer.Argument(help="Record id.")],
):
    """Show the interval each grade would produce, without answering."""
    config = _resolve_with_overrides(ctx)
    try:
        previews = asyncio.run(_service(config).preview(config.user_id, record_id))
    except RecordNotFound as e:
        _fail(str(e))

    for grade, description in previews.items():
        typer.echo(f"{grade.value:<6} {description}")


@app.command()
def suspend(
    ctx: typer.Context,
    record_id: Annotated[str, typer.Argument(help="Record id.")],
    undo: Annotated[bool, typer.Option("--undo", help="Unsuspend instead.")] = False,
):
    """Stop showing a card (or bring it back with --undo)."""
    config = _resolve_with_overrides(ctx)
    try:
        record = asyncio.run(
            _service(config).set_suspended(config.user_id, record_id, suspended=not undo)
        )
    except RecordNotFound as e:
        _fail(str(e))

    typer.echo(_card_line(record))


@app.command()
def queue(ctx: typer.Context):
    """List every card in review priority order."""
    config = _resolve_with_overrides(ctx)
    records = asyncio.run(_service(config).prioritized(config.user_id))
    if not records:
        typer.secho("No cards found.", fg="yellow")
        return
    for record in records:
        typer.echo(_card_line(record))


@app.command()
def stats(
    ctx: typer.Context,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show progress counters."""
    config = _resolve_with_overrides(ctx)
    result = asyncio.run(_service(config).stats(config.user_id))

    if json_output:
        typer.echo(json.dumps(asdict(result), indent=2))
        return

    typer.echo(
        f"Total: {result.total_words}  New: {result.new_words}  "
        f"Learning: {result.learning_words}  Mastered: {result.mastered_words}  "
        f"Suspended: {result.suspended_words}"
    )
    typer.echo(f"Due today: {result.due_today}")
    typer.secho(f"{round(result.mastery_percentage)}% mastered", fg="green")


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display final resolved configuration."""
    config = _resolve_with_overrides(ctx)
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))


def main():
    app()


if __name__ == "__main__":
    main()
