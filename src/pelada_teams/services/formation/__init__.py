from .balancing import balance_two_teams
from .engine import eligible_by_arrival, ensure_team_size, form_teams
from .rotation import losing_side, report_match_result
from .validation import FormationViolation, ValidationReport, validate_formation

__all__ = [
    "FormationViolation",
    "ValidationReport",
    "balance_two_teams",
    "eligible_by_arrival",
    "ensure_team_size",
    "form_teams",
    "losing_side",
    "report_match_result",
    "validate_formation",
]
