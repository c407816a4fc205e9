"""Game session: roster, current formation and match history for one game."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import UTC, datetime

import structlog
from pydantic import BaseModel, Field

from pelada_teams.core.config import PeladaConfig
from pelada_teams.core.errors import (
    MatchNotFoundError,
    ParticipantNotFoundError,
    SlotNotFoundError,
)
from pelada_teams.models import (
    FormationResult,
    Goal,
    MatchRecord,
    MatchSlot,
    Participant,
    Side,
    Winner,
)
from pelada_teams.services.formation import (
    ensure_team_size,
    form_teams,
    report_match_result,
)

logger = structlog.get_logger()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SessionSnapshot(BaseModel):
    """Serializable state of a :class:`GameSession`."""

    config: PeladaConfig
    players_per_team: int = Field(ge=1)
    participants: list[Participant] = Field(default_factory=list)
    formation: FormationResult = Field(default_factory=FormationResult)
    history: list[MatchRecord] = Field(default_factory=list)
    open_slots: dict[int, str] = Field(default_factory=dict)


class GameSession:
    """Owns the state of one game day and drives the formation engine.

    The engine itself is pure; this class keeps the roster, the formation in
    play and the recorded matches, and replaces the formation with the
    engine's output in a single assignment after every change. It is a
    single-writer object: share it across threads only behind a lock.
    """

    def __init__(
        self,
        config: PeladaConfig,
        participants: Iterable[Participant] | None = None,
        *,
        players_per_team: int | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the session and form the first teams.

        Args:
            config: Pelada configuration.
            participants: Starting roster. Defaults to ``config.players``.
            players_per_team: Override for ``config.players_per_team``.
            clock: Source of timestamps for check-ins and match records.
        """
        self._init_state(
            config,
            config.players_per_team if players_per_team is None else players_per_team,
            clock,
        )
        for participant in config.players if participants is None else participants:
            self._add(participant)
        self.regenerate()

    def _init_state(
        self,
        config: PeladaConfig,
        players_per_team: int,
        clock: Callable[[], datetime],
        *,
        formation: FormationResult | None = None,
        history: Iterable[MatchRecord] = (),
        open_slots: dict[int, str] | None = None,
    ) -> None:
        """Set every attribute of the session; shared by __init__ and from_snapshot."""
        ensure_team_size(players_per_team)
        self.config = config
        self.players_per_team = players_per_team
        self._clock = clock
        self._roster: dict[str, Participant] = {}
        self._history: list[MatchRecord] = list(history)
        self._open_slots: dict[int, str] = dict(open_slots or {})
        self._formation = formation if formation is not None else FormationResult()

    @property
    def participants(self) -> list[Participant]:
        return list(self._roster.values())

    @property
    def eligible(self) -> list[Participant]:
        return [p for p in self._roster.values() if p.is_eligible]

    @property
    def formation(self) -> FormationResult:
        return self._formation

    @property
    def history(self) -> list[MatchRecord]:
        return list(self._history)

    def get_participant(self, participant_id: str) -> Participant:
        try:
            return self._roster[participant_id]
        except KeyError:
            raise ParticipantNotFoundError(participant_id) from None

    # Roster changes. Each one recomputes the formation from scratch.

    def add_participant(self, participant: Participant) -> FormationResult:
        """Add a player to the roster."""
        self._add(participant)
        logger.info("participant_added", participant=participant.id)
        return self.regenerate()

    def check_in(self, participant_id: str, at: datetime | None = None) -> FormationResult:
        """Mark a player as checked in for today's game.

        The check-in time is recorded in ``checked_in_on_day_at``. Queue
        priority still comes from ``checked_in_at``.
        """
        self._update(
            participant_id,
            checked_in_on_day=True,
            checked_in_on_day_at=at or self._clock(),
        )
        logger.info("participant_checked_in", participant=participant_id)
        return self.regenerate()

    def remove_participant(self, participant_id: str) -> FormationResult:
        """Take a player out of the game.

        The player stays on the roster, marked as not present, so their
        wins and history are kept.
        """
        return self.set_presence(participant_id, is_present=False)

    def set_presence(self, participant_id: str, is_present: bool) -> FormationResult:
        self._update(participant_id, is_present=is_present)
        logger.info("presence_changed", participant=participant_id, is_present=is_present)
        return self.regenerate()

    def regenerate(self) -> FormationResult:
        """Recompute the formation from the current roster."""
        formation = form_teams(self._roster.values(), self.players_per_team)
        self._drop_stale_matches(formation.matches)
        self._formation = formation
        return formation

    # Matches

    def start_match(self, match_index: int) -> MatchRecord:
        """Open a match record for a slot, or return the one already open."""
        slot = self._slot(match_index)
        record_id = self._open_slots.get(match_index)
        if record_id is not None:
            return self._record(record_id)

        record = MatchRecord(
            team_a=[p.id for p in slot.team_a],
            team_b=[p.id for p in slot.team_b],
            started_at=self._clock(),
        )
        self._history.append(record)
        self._open_slots[match_index] = record.id
        logger.info("match_started", match_index=match_index, match_id=record.id)
        return record

    def record_goal(self, match_id: str, player_id: str, minute: int) -> Goal:
        """Register a goal in an open match.

        Raises:
            MatchNotFoundError: If the match is unknown or already finished.
            ParticipantNotFoundError: If the player is not in that match.
            pydantic.ValidationError: If ``minute`` is outside 0-999.
        """
        record = self._record(match_id)
        if record.is_finished:
            raise MatchNotFoundError(match_id)
        side = record.side_of(player_id)
        if side is None:
            raise ParticipantNotFoundError(player_id, where=f"match {match_id}")

        goal = Goal(player_id=player_id, team=side, minute=minute)
        self._replace_record(record.model_copy(update={"goals": [*record.goals, goal]}))
        logger.info("goal_recorded", match_id=match_id, player=player_id, minute=minute)
        return goal

    def finish_match(
        self,
        match_index: int,
        winner: Winner,
        tie_break: Side | None = None,
    ) -> MatchRecord:
        """Record the result of a slot and rotate the losing team out.

        Players of the winning team get one more win on the roster (nobody
        on a draw). The slot is then refilled from the waiting queue.

        Args:
            match_index: Position of the slot in the current formation.
            winner: "team_a", "team_b" or "draw".
            tie_break: On a draw, the side that leaves the field.

        Returns:
            The finished MatchRecord.

        Raises:
            SlotNotFoundError: If no slot exists at ``match_index``.
        """
        slot = self._slot(match_index)
        record = self.start_match(match_index)
        finished = record.model_copy(update={"winner": winner, "finished_at": self._clock()})
        self._replace_record(finished)
        del self._open_slots[match_index]

        if winner != "draw":
            for participant in slot.team(winner):
                current = self._roster[participant.id]
                self._roster[participant.id] = current.model_copy(
                    update={"wins": current.wins + 1}
                )

        matches, queue = report_match_result(
            self._formation.matches,
            self._formation.waiting_queue,
            match_index,
            winner,
            tie_break,
            strict=True,
        )
        self._formation = FormationResult(
            matches=tuple(self._refresh_slot(s) for s in matches),
            waiting_queue=tuple(self._roster[p.id] for p in queue),
        )
        logger.info("match_finished", match_index=match_index, match_id=record.id, winner=winner)
        return finished

    # Snapshots

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            config=self.config,
            players_per_team=self.players_per_team,
            participants=self.participants,
            formation=self._formation,
            history=self.history,
            open_slots=dict(self._open_slots),
        )

    @classmethod
    def from_snapshot(
        cls, snapshot: SessionSnapshot, *, clock: Callable[[], datetime] = _utcnow
    ) -> GameSession:
        """Restore a session exactly as it was, without re-forming teams."""
        session = cls.__new__(cls)
        session._init_state(
            snapshot.config,
            snapshot.players_per_team,
            clock,
            formation=snapshot.formation,
            history=snapshot.history,
            open_slots=snapshot.open_slots,
        )
        session._roster = {p.id: p for p in snapshot.participants}
        return session

    # Internals

    def _add(self, participant: Participant) -> None:
        if participant.id in self._roster:
            msg = f"Participant '{participant.id}' is already on the roster"
            raise ValueError(msg)
        if len(self._roster) >= self.config.max_players:
            msg = f"Roster is full ({self.config.max_players} players)"
            raise ValueError(msg)
        self._roster[participant.id] = participant

    def _update(self, participant_id: str, **changes: object) -> Participant:
        current = self.get_participant(participant_id)
        updated = Participant.model_validate(current.model_dump() | changes)
        self._roster[participant_id] = updated
        return updated

    def _slot(self, match_index: int) -> MatchSlot:
        matches = self._formation.matches
        if not 0 <= match_index < len(matches):
            raise SlotNotFoundError(match_index, len(matches))
        return matches[match_index]

    def _record(self, match_id: str) -> MatchRecord:
        for record in self._history:
            if record.id == match_id:
                return record
        raise MatchNotFoundError(match_id)

    def _replace_record(self, record: MatchRecord) -> None:
        self._history = [record if r.id == record.id else r for r in self._history]

    def _refresh_slot(self, slot: MatchSlot) -> MatchSlot:
        return MatchSlot(
            team_a=tuple(self._roster[p.id] for p in slot.team_a),
            team_b=tuple(self._roster[p.id] for p in slot.team_b),
        )

    def _drop_stale_matches(self, matches: tuple[MatchSlot, ...]) -> None:
        """Abandon open matches whose slot no longer holds the same teams."""
        for match_index, record_id in list(self._open_slots.items()):
            record = self._record(record_id)
            still_playing = match_index < len(matches) and (
                [p.id for p in matches[match_index].team_a] == record.team_a
                and [p.id for p in matches[match_index].team_b] == record.team_b
            )
            if still_playing:
                continue
            del self._open_slots[match_index]
            self._history = [r for r in self._history if r.id != record_id]
            logger.warning("match_abandoned", match_index=match_index, match_id=record_id)
