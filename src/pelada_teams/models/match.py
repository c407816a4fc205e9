import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from pelada_teams.models.participant import Participant

Winner = Literal["team_a", "team_b", "draw"]
Side = Literal["team_a", "team_b"]


class MatchSlot(BaseModel):
    """One two-team pairing within a formation round."""

    model_config = ConfigDict(frozen=True)

    team_a: tuple[Participant, ...] = ()
    team_b: tuple[Participant, ...] = ()

    @property
    def participants(self) -> tuple[Participant, ...]:
        return self.team_a + self.team_b

    def team(self, side: Side) -> tuple[Participant, ...]:
        return self.team_a if side == "team_a" else self.team_b


class FormationResult(BaseModel):
    """Match slots in play plus the players waiting for a slot."""

    model_config = ConfigDict(frozen=True)

    matches: tuple[MatchSlot, ...] = ()
    waiting_queue: tuple[Participant, ...] = ()


class Goal(BaseModel):
    """A goal scored during a recorded match."""

    player_id: str
    team: Side
    minute: int = Field(ge=0, le=999)


class MatchRecord(BaseModel):
    """History entry for a match played from a slot.

    Team members are stored by id so the record survives roster edits.
    ``winner`` stays None while the match is being played.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    team_a: list[str]
    team_b: list[str]
    winner: Winner | None = None
    started_at: datetime
    finished_at: datetime | None = None
    goals: list[Goal] = Field(default_factory=list)

    @property
    def is_finished(self) -> bool:
        return self.winner is not None

    def side_of(self, player_id: str) -> Side | None:
        if player_id in self.team_a:
            return "team_a"
        if player_id in self.team_b:
            return "team_b"
        return None
