"""Core configuration and errors for Pelada Teams."""

from pelada_teams.core.config import (
    MAX_PLAYERS_PER_TEAM,
    MIN_PLAYERS_PER_TEAM,
    PeladaConfig,
    load_config,
)
from pelada_teams.core.errors import (
    ConfigurationError,
    InvalidTeamSizeError,
    MatchNotFoundError,
    MissingFieldError,
    ParticipantNotFoundError,
    PeladaError,
    SlotNotFoundError,
    ValidationError,
)

__all__ = [
    "MAX_PLAYERS_PER_TEAM",
    "MIN_PLAYERS_PER_TEAM",
    "PeladaConfig",
    "load_config",
    "ConfigurationError",
    "InvalidTeamSizeError",
    "MatchNotFoundError",
    "MissingFieldError",
    "ParticipantNotFoundError",
    "PeladaError",
    "SlotNotFoundError",
    "ValidationError",
]
