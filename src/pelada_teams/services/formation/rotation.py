"""Winner-stays rotation after a match result."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from pelada_teams.core.errors import SlotNotFoundError
from pelada_teams.models import MatchSlot, Participant, Side, Winner
from pelada_teams.services.formation.balancing import balance_two_teams

logger = structlog.get_logger()


def losing_side(winner: Winner, tie_break: Side | None = None) -> Side:
    """Side that leaves the field for a given outcome.

    On a draw the organizer picks the side that leaves via ``tie_break``.
    Without a pick team B leaves.
    """
    if winner == "team_a":
        return "team_b"
    if winner == "team_b":
        return "team_a"
    if tie_break is None:
        logger.warning("draw_without_tie_break", leaving="team_b")
        return "team_b"
    return tie_break


def report_match_result(
    matches: Sequence[MatchSlot],
    queue: Sequence[Participant],
    match_index: int,
    winner: Winner,
    tie_break: Side | None = None,
    *,
    strict: bool = False,
) -> tuple[list[MatchSlot], list[Participant]]:
    """Rotate the losing team out of one match slot.

    The losers join the back of the queue in their current order. When the
    queue then holds at least as many players as the winning team, the first
    ones in line come in and the winners plus newcomers are rebalanced into
    the same slot. Otherwise the winners keep the slot as it is and wait for
    challengers.

    Inputs are not modified; new lists are returned.

    Args:
        matches: Current match slots.
        queue: Current waiting queue, first in line first.
        match_index: Position of the finished match in ``matches``.
        winner: "team_a", "team_b" or "draw".
        tie_break: On a draw, the side that leaves.
        strict: Raise instead of ignoring an unknown ``match_index``.

    Returns:
        Tuple of (new_matches, new_queue). Only ``match_index`` can differ.

    Raises:
        SlotNotFoundError: If ``strict`` and ``match_index`` is out of range.
    """
    if not 0 <= match_index < len(matches):
        if strict:
            raise SlotNotFoundError(match_index, len(matches))
        logger.debug("rotation_skipped", match_index=match_index, slots=len(matches))
        return list(matches), list(queue)

    slot = matches[match_index]
    leaving = losing_side(winner, tie_break)
    staying: Side = "team_a" if leaving == "team_b" else "team_b"
    winners = slot.team(staying)
    losers = slot.team(leaving)

    extended_queue = [*queue, *losers]
    new_matches = list(matches)

    needed = len(winners)
    if len(extended_queue) < needed:
        logger.info(
            "rotation_stalled",
            match_index=match_index,
            waiting=len(extended_queue),
            needed=needed,
        )
        return new_matches, extended_queue

    challengers = extended_queue[:needed]
    team_a, team_b = balance_two_teams([*winners, *challengers], needed)
    new_matches[match_index] = MatchSlot(team_a=team_a, team_b=team_b)

    logger.info(
        "rotation_applied",
        match_index=match_index,
        winner=winner,
        leaving=leaving,
        challengers=[p.id for p in challengers],
    )
    return new_matches, extended_queue[needed:]
