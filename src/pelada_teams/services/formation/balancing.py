"""Split a group of 2N players into two teams of N."""

from __future__ import annotations

from collections.abc import Sequence

from pelada_teams.models import Participant


def balance_two_teams(
    chunk: Sequence[Participant], players_per_team: int
) -> tuple[tuple[Participant, ...], tuple[Participant, ...]]:
    """Divide one match worth of players into team A and team B.

    Two strategies, chosen by whether any skill data exists:

    1. No player has a ``skill_level``: strict alternation in the given
       (arrival) order. Even positions go to team A, odd ones to team B.
    2. Otherwise a draft: players are taken from strongest to weakest
       (unknown skill counts as 3, ties keep their original order) and each
       one joins the team with the lower running skill total. Equal totals
       alternate by pick number, even picks to team A. A full team never
       receives another player.

    The draft is greedy. It keeps the final totals within one player's
    rating of each other but does not search for the best possible split.

    Args:
        chunk: Exactly ``2 * players_per_team`` distinct players.
        players_per_team: Team size N.

    Returns:
        Tuple of (team_a, team_b).
    """
    if not any(p.skill_level is not None for p in chunk):
        return _alternate(chunk)

    # sorted() is stable, equal skills keep arrival order
    by_skill = sorted(chunk, key=lambda p: p.effective_skill, reverse=True)

    team_a: list[Participant] = []
    team_b: list[Participant] = []
    skill_a = 0
    skill_b = 0

    for i, participant in enumerate(by_skill):
        prefer_a = skill_a < skill_b or (skill_a == skill_b and i % 2 == 0)

        if prefer_a and len(team_a) < players_per_team:
            add_to_a = True
        elif len(team_b) < players_per_team:
            add_to_a = False
        else:
            add_to_a = True

        if add_to_a:
            team_a.append(participant)
            skill_a += participant.effective_skill
        else:
            team_b.append(participant)
            skill_b += participant.effective_skill

    return tuple(team_a), tuple(team_b)


def _alternate(
    chunk: Sequence[Participant],
) -> tuple[tuple[Participant, ...], tuple[Participant, ...]]:
    """Even positions to team A, odd positions to team B."""
    return tuple(chunk[0::2]), tuple(chunk[1::2])
