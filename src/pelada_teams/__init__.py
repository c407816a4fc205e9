"""Pelada Teams.

Form balanced two-team matches from the players checked in for a pelada,
keep a waiting queue, and rotate the losing team out after each result.
"""

from pelada_teams.services.formation import (
    balance_two_teams,
    form_teams,
    report_match_result,
    validate_formation,
)
from pelada_teams.services.stats import compute_team_stats

__version__ = "0.1.0"
__all__ = [
    "__version__",
    "balance_two_teams",
    "compute_team_stats",
    "form_teams",
    "report_match_result",
    "validate_formation",
]
