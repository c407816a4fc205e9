"""CLI for Pelada Teams."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated

import structlog
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from pelada_teams import __version__
from pelada_teams.core.config import load_config
from pelada_teams.core.errors import ConfigurationError, PeladaError
from pelada_teams.models import FormationResult
from pelada_teams.services.formation import validate_formation
from pelada_teams.services.reporting import (
    format_skill_level,
    generate_formation_report,
    generate_stats_report,
)
from pelada_teams.services.session import GameSession
from pelada_teams.services.stats import compute_game_stats, compute_team_stats
from pelada_teams.services.storage import load_snapshot, save_snapshot

# Configure structlog
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class Outcome(str, Enum):
    team_a = "team_a"
    team_b = "team_b"
    draw = "draw"


class TeamSide(str, Enum):
    team_a = "team_a"
    team_b = "team_b"


app = typer.Typer(
    name="pelada-teams",
    help="Pelada Teams - Balanced teams and winner-stays rotation for pickup soccer",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"pelada-teams v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """Pelada Teams CLI."""


def _configure_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _print_formation(formation: FormationResult) -> None:
    if not formation.matches:
        console.print("[yellow]Not enough players for a match yet.[/yellow]")

    for number, slot in enumerate(formation.matches, start=1):
        table = Table(title=f"Match {number}")
        table.add_column("Team A")
        table.add_column("Team B")
        for player_a, player_b in zip(slot.team_a, slot.team_b, strict=False):
            table.add_row(
                f"{player_a.display_name} ({format_skill_level(player_a.skill_level)})",
                f"{player_b.display_name} ({format_skill_level(player_b.skill_level)})",
            )
        stats_a = compute_team_stats(slot.team_a)
        stats_b = compute_team_stats(slot.team_b)
        table.add_row(
            f"[bold]skill {stats_a.total_skill} (avg {stats_a.average_skill:.1f})[/bold]",
            f"[bold]skill {stats_b.total_skill} (avg {stats_b.average_skill:.1f})[/bold]",
        )
        console.print(table)

    if formation.waiting_queue:
        names = ", ".join(p.display_name for p in formation.waiting_queue)
        console.print(f"[bold]Waiting queue:[/bold] {names}")
    else:
        console.print("[bold]Waiting queue:[/bold] empty")


@app.command()
def form(
    config_path: Annotated[Path, typer.Argument(help="Path to pelada config YAML file")],
    players_per_team: Annotated[
        int | None,
        typer.Option("--players-per-team", "-n", help="Override players per team"),
    ] = None,
    state: Annotated[
        Path | None, typer.Option("--state", help="Save the session snapshot to this file")
    ] = None,
    report: Annotated[
        Path | None, typer.Option("--report", help="Write a markdown report to this file")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-V", help="Verbose output")] = False,
) -> None:
    """Form balanced teams for the players checked in.

    Args:
        config_path: Path to YAML configuration file.
        players_per_team: Override the configured team size.
        state: Where to save the session for later ``result`` calls.
        report: Where to write the markdown report.
        verbose: Enable verbose logging.
    """
    _configure_logging(verbose)

    try:
        config = load_config(config_path)
        session = GameSession(config, players_per_team=players_per_team)
        formation = session.formation

        console.print(
            f"[bold]{config.title}[/bold]: {len(session.eligible)} eligible players, "
            f"{session.players_per_team} per team"
        )
        _print_formation(formation)

        validation = validate_formation(formation.matches, session.players_per_team)
        for error in validation.errors:
            console.print(f"[red]Invalid formation:[/red] {error}")

        if state is not None:
            save_snapshot(session, state)
            console.print(f"Session saved to: {state}")
        if report is not None:
            report.write_text(generate_formation_report(formation, config.title), encoding="utf-8")
            console.print(f"Report saved to: {report}")

    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    except ConfigurationError as e:
        console.print(f"[red]{e}")
        raise typer.Exit(1) from e
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1) from e


@app.command()
def result(
    state: Annotated[Path, typer.Argument(help="Path to a saved session snapshot")],
    match: Annotated[int, typer.Option("--match", "-m", help="Match number (from 1)")],
    winner: Annotated[
        Outcome,
        typer.Option("--winner", "-w", help="team_a, team_b or draw"),
    ],
    tie_break: Annotated[
        TeamSide | None,
        typer.Option("--tie-break", help="On a draw, the team that leaves"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-V", help="Verbose output")] = False,
) -> None:
    """Record a match result and rotate the losing team out.

    Args:
        state: Session snapshot written by ``form``; updated in place.
        match: Match number as shown by ``form`` (1-based).
        winner: Outcome of the match.
        tie_break: Team that leaves on a draw.
        verbose: Enable verbose logging.
    """
    _configure_logging(verbose)

    try:
        session = load_snapshot(state)
        record = session.finish_match(
            match - 1, winner.value, tie_break.value if tie_break else None
        )
        save_snapshot(session, state)

        console.print(f"[green]Match {match} finished:[/green] {record.winner}")
        _print_formation(session.formation)

    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    except PeladaError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1) from e


@app.command()
def stats(
    state: Annotated[Path, typer.Argument(help="Path to a saved session snapshot")],
    report: Annotated[
        Path | None, typer.Option("--report", help="Write a markdown report to this file")
    ] = None,
) -> None:
    """Show player statistics for the matches recorded in a session.

    Args:
        state: Session snapshot written by ``form``.
        report: Where to write the markdown report.
    """
    try:
        session = load_snapshot(state)
        game_stats = compute_game_stats(session.history, session.participants)

        table = Table(title=f"{session.config.title} - {game_stats.total_matches} matches")
        for column in ("Player", "Matches", "W", "D", "L", "Win rate", "Goals"):
            table.add_column(column)
        for s in game_stats.player_stats:
            table.add_row(
                s.player_name,
                str(s.total_matches),
                str(s.wins),
                str(s.draws),
                str(s.losses),
                f"{s.win_rate:.1f}%",
                str(s.goals),
            )
        console.print(table)
        console.print(f"  Duration: {game_stats.duration_minutes} min")

        if report is not None:
            report.write_text(generate_stats_report(game_stats.player_stats), encoding="utf-8")
            console.print(f"Report saved to: {report}")

    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1) from e


@app.command()
def validate(
    config_path: Annotated[Path, typer.Argument(help="Path to pelada config YAML file")],
) -> None:
    """Validate a configuration file without forming teams.

    Args:
        config_path: Path to YAML configuration file.
    """
    try:
        config = load_config(config_path)
        console.print("[green]Configuration is valid![/green]")
        console.print(f"  Title: {config.title}")
        console.print(f"  Players per team: {config.players_per_team}")
        console.print(f"  Max players: {config.max_players}")
        console.print(f"  Roster: {len(config.players)}")
        console.print(f"  Eligible today: {len(config.eligible_players)}")

    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    except ConfigurationError as e:
        console.print(f"[red]{e}")
        raise typer.Exit(1) from e
    except Exception as e:
        console.print(f"[red]Validation error:[/red] {e}")
        raise typer.Exit(1) from e


@app.command()
def info() -> None:
    """Show tool information and example commands."""
    console.print("[bold]Pelada Teams[/bold]")
    console.print(f"Version: {__version__}\n")

    console.print("[bold]Example Commands:[/bold]")
    console.print("  # Form teams and keep the session")
    console.print("  pelada-teams form pelada.yaml --state session.json\n")

    console.print("  # Team A won match 1")
    console.print("  pelada-teams result session.json --match 1 --winner team_a\n")

    console.print("  # Draw in match 1, team B leaves")
    console.print("  pelada-teams result session.json --match 1 --winner draw --tie-break team_b\n")

    console.print("  # Player statistics")
    console.print("  pelada-teams stats session.json --report stats.md\n")

    console.print("  # Validate config")
    console.print("  pelada-teams validate pelada.yaml")


if __name__ == "__main__":
    app()
