"""Configuration schemas and loading for Pelada Teams."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from pelada_teams.core.errors import MissingFieldError, ValidationError
from pelada_teams.models import Participant

MIN_PLAYERS_PER_TEAM = 3
MAX_PLAYERS_PER_TEAM = 11


class PeladaConfig(BaseModel):
    """A pelada and the roster of players signed up for today's game.

    Attributes:
        title: Name of the pelada.
        description: Free text shown to players.
        address: Where the games are played.
        players_per_team: Team size N; each match needs 2N eligible players.
        max_players: Cap on the roster size.
        players: Roster for the current game.
    """

    title: str = Field(..., min_length=3, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    address: str | None = Field(default=None, max_length=200)
    players_per_team: int = Field(
        default=5, ge=MIN_PLAYERS_PER_TEAM, le=MAX_PLAYERS_PER_TEAM
    )
    max_players: int = Field(default=30, ge=6, le=50)
    players: list[Participant] = Field(default_factory=list)

    @field_validator("players")
    @classmethod
    def validate_unique_ids(cls, v: list[Participant]) -> list[Participant]:
        """Ensure no participant id appears twice on the roster."""
        seen: set[str] = set()
        for participant in v:
            if participant.id in seen:
                msg = f"Duplicate participant id '{participant.id}'"
                raise ValueError(msg)
            seen.add(participant.id)
        return v

    @model_validator(mode="after")
    def validate_capacity(self) -> PeladaConfig:
        if self.max_players < self.players_per_team * 2:
            msg = "max_players must be at least twice players_per_team"
            raise ValueError(msg)
        if len(self.players) > self.max_players:
            msg = f"Roster has {len(self.players)} players, max_players is {self.max_players}"
            raise ValueError(msg)
        return self

    @property
    def eligible_players(self) -> list[Participant]:
        return [p for p in self.players if p.is_eligible]


def load_config(path: str | Path) -> PeladaConfig:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to YAML configuration file.

    Returns:
        Validated PeladaConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        MissingFieldError: If the file is empty.
        ValidationError: If the top level is not a mapping.
        pydantic.ValidationError: If config is invalid.
    """
    config_path = Path(path)
    if not config_path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with config_path.open(encoding="utf-8") as f:
        data: Any = yaml.safe_load(f)

    if data is None:
        raise MissingFieldError("title", str(config_path))
    if not isinstance(data, dict):
        raise ValidationError("config", "The top level of the file must be a mapping.")

    return PeladaConfig.model_validate(data)
