"""
Typer CLI for the lexiscore difficulty engine.

Developer tool for inspecting the scoring primitives without a quiz UI.

Commands:
    lexiscore explain 3.0 --correct      - Run one score update and show every factor
    lexiscore explain 4.5 --wrong -f 2   - Wrong answer with two recent failures
    lexiscore level 2.4                  - Score -> display level
    lexiscore level 4 --to-score         - Display level -> score
    lexiscore estimate 2000 4100 3900    - Smoothed baseline for a latency history

Usage:
    lexiscore --help
    python -m src.cli.main explain 3.0 --correct --time 2000 --avg 5000
"""

from __future__ import annotations

import time

import typer
from rich.console import Console
from rich.table import Table

from src.difficulty.levels import ScoreLevelMapper
from src.difficulty.models import MS_PER_HOUR, ResponseEvent
from src.difficulty.observability import configure_logging
from src.difficulty.response_time import ResponseTimeEstimator
from src.difficulty.score_updater import ScoreUpdater

app = typer.Typer(
    help="lexiscore CLI: inspect adaptive difficulty scoring",
    no_args_is_help=True,
)

console = Console()
mapper = ScoreLevelMapper()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show DEBUG diagnostics on stderr"),
):
    """Adaptive difficulty scoring tools."""
    configure_logging(level="DEBUG" if verbose else "WARNING")


def _level_cell(score: float) -> str:
    level = mapper.score_to_level(score)
    info = mapper.info(level)
    return f"{level} ({info.label})"


@app.command()
def explain(
    score: float = typer.Argument(..., help="Current score (0.5-5.5)"),
    correct: bool = typer.Option(True, "--correct/--wrong", help="Whether the answer was correct"),
    streak: int = typer.Option(0, "--streak", "-s", help="Session-wide consecutive correct answers"),
    item_streak: int = typer.Option(0, "--item-streak", "-i", help="Consecutive correct answers on this item"),
    failures: int = typer.Option(0, "--failures", "-f", help="Recent incorrect responses"),
    response_time: float | None = typer.Option(None, "--time", "-t", help="Response time (ms)"),
    avg_response_time: float | None = typer.Option(None, "--avg", "-a", help="Baseline response time (ms)"),
    hours_since: float | None = typer.Option(None, "--hours", help="Hours since last review"),
):
    """
    Run one score update and show every intermediate factor.
    """
    now_ms = time.time() * 1000
    last_reviewed = now_ms - hours_since * MS_PER_HOUR if hours_since is not None else None
    recent = [
        ResponseEvent(
            item_id="cli",
            is_correct=False,
            timestamp_ms=now_ms,
            response_time_ms=0,
            previous_score=score,
            new_score=score,
        )
        for _ in range(max(failures, 0))
    ]

    result = ScoreUpdater().update(
        score,
        correct,
        consecutive_correct_global=streak,
        last_reviewed_at_ms=last_reviewed,
        recent_events=recent,
        response_time_ms=response_time,
        avg_response_time_ms=avg_response_time,
        consecutive_correct_for_item=item_streak,
        now_ms=now_ms,
    )

    table = Table(title="Score update", show_header=True)
    table.add_column("Factor", style="cyan")
    table.add_column("Value", justify="right")
    for name, value in result.diagnostics.to_dict().items():
        if value is None:
            continue
        if isinstance(value, float):
            value = f"{value:.3f}"
        table.add_row(name, str(value))
    console.print(table)

    color = "green" if result.new_score < score else "red" if result.new_score > score else "white"
    console.print(
        f"[bold]{score:.1f}[/bold] {_level_cell(score)} -> "
        f"[bold {color}]{result.new_score:.1f}[/bold {color}] {_level_cell(result.new_score)}"
    )


@app.command()
def level(
    value: float = typer.Argument(..., help="Score, or display level with --to-score"),
    to_score: bool = typer.Option(False, "--to-score", help="Treat VALUE as a display level"),
):
    """
    Convert between score and display level.
    """
    if to_score:
        lvl = int(value)
        info = mapper.info(lvl)
        console.print(f"Level {lvl} ({info.label}, {info.color}) -> score {mapper.level_to_score(lvl):.2f}")
        return

    lvl = mapper.score_to_level(value)
    info = mapper.info(lvl)
    console.print(f"Score {value:.2f} -> level {lvl} ({info.label}, {info.color})")


@app.command()
def estimate(
    history: list[float] = typer.Argument(..., help="Response times (ms), oldest first; the last is the current one"),
    previous: float | None = typer.Option(None, "--previous", "-p", help="Previous baseline (ms)"),
):
    """
    Compute the smoothed baseline response time.
    """
    estimator = ResponseTimeEstimator()
    current = history[-1]
    kept = estimator.filter_history(history, previous)
    baseline = estimator.estimate(history, current, previous)

    console.print(f"Kept {len(kept)}/{len(history)} samples: {', '.join(f'{t:.0f}' for t in kept) or '-'}")
    console.print(f"New baseline: [bold]{baseline:.0f} ms[/bold]")


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
