from pelada_teams.models.match import (
    FormationResult,
    Goal,
    MatchRecord,
    MatchSlot,
    Side,
    Winner,
)
from pelada_teams.models.participant import DEFAULT_SKILL_LEVEL, Participant

__all__ = [
    "DEFAULT_SKILL_LEVEL",
    "FormationResult",
    "Goal",
    "MatchRecord",
    "MatchSlot",
    "Participant",
    "Side",
    "Winner",
]
