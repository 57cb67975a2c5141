"""lexio CLI: scheduling calculator, terminal study driver and config commands."""

import json
import logging
import random
import sys
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from lexio.application.config import StudyConfig, resolve_config
from lexio.application.grading import GradingPolicy
from lexio.application.scheduler import compute_next
from lexio.application.session_queue import SessionQueue
from lexio.domain.errors import InvalidInput
from lexio.domain.models import SchedulingState
from lexio.infrastructure.deck_file import load_deck

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="lexio: SM-2 flashcard scheduling and study sessions.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage lexio configuration.")
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

LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def _apply_verbosity(level: int) -> None:
    logging.getLogger("lexio").setLevel(LOG_LEVELS.get(level, logging.DEBUG))


def _fail(message: str) -> NoReturn:
    typer.secho(f"Error: {message}", fg="red", err=True)
    raise typer.Exit(2)


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
):
    """Global settings for lexio."""
    ctx.ensure_object(dict)
    ctx.obj["verbose_bonus"] = verbose


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def schedule(
    quality: Annotated[int, typer.Option("--quality", "-q", help="Recall quality, 0-5.")],
    interval: Annotated[int, typer.Option(help="Current interval in days.")] = 1,
    ease_factor: Annotated[float, typer.Option(help="Current ease factor.")] = 2.5,
    repetitions: Annotated[int, typer.Option(help="Consecutive successful reviews.")] = 0,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Compute the next interval, ease factor and repetition count for one review."""
    current = SchedulingState(interval=interval, ease_factor=ease_factor, repetitions=repetitions)
    try:
        result = compute_next(current, quality)
    except InvalidInput as e:
        _fail(str(e))

    if json_output:
        typer.echo(
            json.dumps(
                {
                    "interval": result.interval,
                    "easeFactor": result.ease_factor,
                    "repetitions": result.repetitions,
                }
            )
        )
    else:
        typer.echo(f"Interval: {current.interval} -> {result.interval} days")
        typer.echo(f"Ease factor: {current.ease_factor:.2f} -> {result.ease_factor:.2f}")
        typer.echo(f"Repetitions: {current.repetitions} -> {result.repetitions}")


@app.command()
def study(
    ctx: typer.Context,
    deck: Annotated[Path, typer.Argument(help="YAML or JSON deck file.")],
    limit: Annotated[
        int | None, typer.Option("--limit", "-n", help="Maximum cards to grade.")
    ] = None,
    shuffle: Annotated[
        bool | None, typer.Option("--shuffle/--no-shuffle", help="Shuffle cards once at start.")
    ] = None,
    seed: Annotated[int | None, typer.Option(help="Seed for the shuffle.")] = None,
    time_limit: Annotated[
        float | None, typer.Option("--time-limit", help="Session time limit in minutes.")
    ] = None,
    binary: Annotated[
        bool, typer.Option("--binary", help="Grade with repeat/learned instead of 0-5.")
    ] = False,
    events: Annotated[
        bool, typer.Option("--events", help="Echo each grade event as a JSON line.")
    ] = False,
):
    """[bold green]Study[/bold green] a deck in the terminal. Nothing is written back."""
    try:
        config = resolve_config(
            {
                "session_limit": limit,
                "shuffle": shuffle,
                "seed": seed,
                "time_limit_minutes": time_limit,
            }
        )
    except ValueError as e:
        _fail(str(e))
    _apply_verbosity(config.verbose + (ctx.obj or {}).get("verbose_bonus", 0))

    try:
        deck_file = load_deck(deck)
        session = _build_session(deck_file.records, config)
    except InvalidInput as e:
        _fail(str(e))
    logger.debug(f"Session {session.session_id}: {session.total_cards} cards from {deck}")

    typer.secho(deck_file.title, bold=True)
    typer.echo(
        f"Cards: {session.total_cards}  New: {session.new_count}"
        f"  Learning: {session.learning_count}  Mastered: {session.mastered_count}"
    )

    prompt = "[r]epeat / [l]earned" if binary else "Quality 0-5"
    while (card := session.current()) is not None:
        typer.echo("")
        typer.secho(card.front, fg="cyan")
        answer = typer.prompt(
            f"{prompt}, [s]kip, [q]uit (Enter shows answer)", default="", show_default=False
        )
        if answer == "":
            typer.echo(card.back)
            answer = typer.prompt(f"{prompt}, [s]kip, [q]uit")

        answer = answer.strip().lower()
        if answer == "q":
            break
        if answer == "s":
            session.skip()
            continue

        try:
            event = session.grade(_parse_answer(answer, binary))
        except InvalidInput as e:
            typer.secho(str(e), fg="yellow")
            continue

        if events:
            typer.echo(json.dumps(event.to_dict()))
        else:
            typer.echo(
                f"-> {event.status.value}, next in {event.new_interval} day(s), "
                f"ease {event.new_ease_factor:.2f}"
            )

    summary = session.summary()
    typer.echo("")
    typer.secho("Session summary", bold=True)
    typer.echo(
        f"Studied: {summary['studied']}/{summary['limit']}  "
        f"Correct: {summary['correct']}  Wrong: {summary['wrong']}  Points: {summary['points']}"
    )
    if summary["accuracy"] is not None:
        typer.echo(f"Accuracy: {summary['accuracy']:.0%}")


def _build_session(records: list[dict], config: StudyConfig) -> SessionQueue:
    policy = GradingPolicy(
        repeat_quality=config.repeat_quality,
        learned_quality=config.learned_quality,
    )
    rng = random.Random(config.seed) if config.seed is not None else None
    return SessionQueue.from_records(
        records,
        session_limit=config.session_limit,
        shuffle=config.shuffle,
        rng=rng,
        policy=policy,
        time_limit=config.time_limit,
    )


def _parse_answer(answer: str, binary: bool) -> int | str:
    if binary:
        aliases = {"r": "repeat", "l": "learned"}
        return aliases.get(answer, answer)
    try:
        return int(answer)
    except ValueError:
        raise InvalidInput(f"Expected a quality between 0 and 5, got {answer!r}") from None


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    try:
        config = resolve_config()
    except ValueError as e:
        _fail(str(e))
    typer.echo(json.dumps(config.model_dump(), indent=2))


if __name__ == "__main__":
    app()
