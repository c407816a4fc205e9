"""Team, player and game statistics."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from pelada_teams.models import MatchRecord, Participant


@dataclass(frozen=True)
class TeamStats:
    """Aggregate numbers for one team.

    Attributes:
        count: Number of players.
        total_skill: Sum of skill ratings (unknown counts as 3).
        average_skill: Mean skill, one decimal, 0.0 for an empty team.
        total_wins: Sum of the players' win counters.
    """

    count: int
    total_skill: int
    average_skill: float
    total_wins: int


@dataclass
class PlayerStats:
    """Results of one player across the recorded matches."""

    player_id: str
    player_name: str
    total_matches: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    goals: int = 0

    @property
    def win_rate(self) -> float:
        """Percentage of matches won, one decimal."""
        if not self.total_matches:
            return 0.0
        return round_half_up(self.wins * 100, self.total_matches)


@dataclass
class GameStats:
    total_matches: int
    total_players: int
    duration_minutes: int
    player_stats: list[PlayerStats] = field(default_factory=list)


def round_half_up(numerator: int, denominator: int) -> float:
    """Exact ``numerator / denominator`` rounded half-up to one decimal."""
    value = Decimal(numerator) / Decimal(denominator)
    return float(value.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def compute_team_stats(team: Sequence[Participant]) -> TeamStats:
    """Aggregate skill and wins for a team.

    Args:
        team: Players of one team.

    Returns:
        TeamStats for the team.
    """
    total_skill = sum(p.effective_skill for p in team)
    average = round_half_up(total_skill, len(team)) if team else 0.0
    return TeamStats(
        count=len(team),
        total_skill=total_skill,
        average_skill=average,
        total_wins=sum(p.wins for p in team),
    )


def compute_player_stats(
    history: Iterable[MatchRecord], participants: Iterable[Participant]
) -> list[PlayerStats]:
    """Tally wins, losses, draws and goals per player.

    Only finished matches count. Players who appear in history but are no
    longer on the roster are reported under their id.

    Args:
        history: Recorded matches.
        participants: Roster, used for display names.

    Returns:
        PlayerStats sorted by wins, then win rate (both descending), then name.
    """
    names = {p.id: p.display_name for p in participants}
    stats: dict[str, PlayerStats] = {}

    def entry(player_id: str) -> PlayerStats:
        if player_id not in stats:
            stats[player_id] = PlayerStats(
                player_id=player_id, player_name=names.get(player_id, player_id)
            )
        return stats[player_id]

    for record in history:
        if not record.is_finished:
            continue
        for side, members in (("team_a", record.team_a), ("team_b", record.team_b)):
            for player_id in members:
                player = entry(player_id)
                player.total_matches += 1
                if record.winner == "draw":
                    player.draws += 1
                elif record.winner == side:
                    player.wins += 1
                else:
                    player.losses += 1
        for goal in record.goals:
            entry(goal.player_id).goals += 1

    return sorted(
        stats.values(), key=lambda s: (-s.wins, -s.win_rate, s.player_name)
    )


def compute_game_stats(
    history: Sequence[MatchRecord], participants: Sequence[Participant]
) -> GameStats:
    """Summarize a game day from its match history."""
    finished = [r for r in history if r.is_finished]
    player_stats = compute_player_stats(finished, participants)

    duration = 0
    ends = [r.finished_at for r in finished if r.finished_at is not None]
    if finished and ends:
        start = min(r.started_at for r in finished)
        duration = int((max(ends) - start).total_seconds() // 60)

    return GameStats(
        total_matches=len(finished),
        total_players=len(player_stats),
        duration_minutes=duration,
        player_stats=player_stats,
    )
