"""Markdown reports for formations and player statistics."""

from __future__ import annotations

from collections.abc import Sequence

from tabulate import tabulate

from pelada_teams.models import FormationResult, Participant
from pelada_teams.services.stats import PlayerStats, compute_team_stats

SKILL_LABELS = {
    1: "Beginner",
    2: "Basic",
    3: "Intermediate",
    4: "Advanced",
    5: "Expert",
}


def format_skill_level(level: int | None) -> str:
    """Display label for a skill rating."""
    if level is None:
        return "Undefined"
    return SKILL_LABELS.get(level, "Undefined")


def _team_rows(team: Sequence[Participant]) -> list[tuple[str, str, int]]:
    return [(p.display_name, format_skill_level(p.skill_level), p.wins) for p in team]


def generate_formation_report(result: FormationResult, title: str) -> str:
    """Render the match slots and waiting queue as markdown.

    Args:
        result: Formation to render.
        title: Report title (markdown heading).

    Returns:
        Markdown report content.
    """
    lines = [f"# {title}", ""]

    if not result.matches:
        lines.extend(["Not enough players for a match yet.", ""])

    for number, slot in enumerate(result.matches, start=1):
        lines.extend([f"## Match {number}", ""])
        for label, team in (("Team A", slot.team_a), ("Team B", slot.team_b)):
            stats = compute_team_stats(team)
            lines.append(
                f"**{label}**: {stats.count} players, skill {stats.total_skill} "
                f"(avg {stats.average_skill:.1f}), {stats.total_wins} wins"
            )
            lines.append("")
            lines.append(
                tabulate(_team_rows(team), headers=("Player", "Skill", "Wins"), tablefmt="github")
            )
            lines.append("")

    lines.extend(["## Waiting queue", ""])
    if result.waiting_queue:
        rows = [
            (position, p.display_name, format_skill_level(p.skill_level))
            for position, p in enumerate(result.waiting_queue, start=1)
        ]
        lines.append(tabulate(rows, headers=("#", "Player", "Skill"), tablefmt="github"))
    else:
        lines.append("Nobody is waiting.")

    return "\n".join(lines)


def generate_stats_report(stats: Sequence[PlayerStats], title: str = "Player Stats") -> str:
    """Render a player leaderboard as markdown."""
    rows = [
        (
            s.player_name,
            s.total_matches,
            s.wins,
            s.draws,
            s.losses,
            f"{s.win_rate:.1f}%",
            s.goals,
        )
        for s in stats
    ]
    headers = ("Player", "Matches", "W", "D", "L", "Win rate", "Goals")
    return "\n".join([f"# {title}", "", tabulate(rows, headers=headers, tablefmt="github")])
