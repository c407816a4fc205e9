"""Team formation for the players checked in to a game."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from pelada_teams.core.errors import InvalidTeamSizeError
from pelada_teams.models import FormationResult, MatchSlot, Participant
from pelada_teams.services.formation.balancing import balance_two_teams

logger = structlog.get_logger()


def ensure_team_size(players_per_team: int) -> None:
    """Reject team sizes that cannot form a match.

    Raises:
        InvalidTeamSizeError: If ``players_per_team`` is not a positive int.
    """
    if isinstance(players_per_team, bool) or not isinstance(players_per_team, int):
        raise InvalidTeamSizeError(players_per_team)
    if players_per_team <= 0:
        raise InvalidTeamSizeError(players_per_team)


def eligible_by_arrival(participants: Iterable[Participant]) -> list[Participant]:
    """Present, checked-in participants, earliest arrival first (stable)."""
    eligible = [p for p in participants if p.is_eligible]
    return sorted(eligible, key=lambda p: p.checked_in_at)


def form_teams(
    participants: Iterable[Participant], players_per_team: int
) -> FormationResult:
    """Build every match the current roster allows.

    Eligible players are ordered by arrival and consumed in blocks of
    ``2 * players_per_team``. Each block becomes one match slot, split by
    :func:`balance_two_teams`. Whoever is left over waits in the queue in
    arrival order. With fewer than two full teams nobody plays and every
    eligible player waits; that is a normal result, not an error.

    Args:
        participants: Roster for the game. Only players that are present and
            checked in for the day are considered.
        players_per_team: Team size N (at least 1).

    Returns:
        FormationResult with the match slots and the waiting queue.

    Raises:
        InvalidTeamSizeError: If ``players_per_team`` is not positive.
    """
    ensure_team_size(players_per_team)

    ordered = eligible_by_arrival(participants)
    match_size = players_per_team * 2

    matches: list[MatchSlot] = []
    start = 0
    while start + match_size <= len(ordered):
        chunk = ordered[start : start + match_size]
        team_a, team_b = balance_two_teams(chunk, players_per_team)
        matches.append(MatchSlot(team_a=team_a, team_b=team_b))
        start += match_size

    waiting_queue = tuple(ordered[start:])

    logger.debug(
        "teams_formed",
        eligible=len(ordered),
        players_per_team=players_per_team,
        matches=len(matches),
        waiting=len(waiting_queue),
    )
    return FormationResult(matches=tuple(matches), waiting_queue=waiting_queue)
