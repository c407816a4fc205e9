"""Tests for formation sanity checks."""

from datetime import UTC, datetime

from pelada_teams.models import MatchSlot, Participant
from pelada_teams.services.formation import validate_formation

ARRIVAL = datetime(2026, 10, 18, 19, 0, tzinfo=UTC)


def _team(*ids: str) -> tuple[Participant, ...]:
    return tuple(Participant(id=pid, checked_in_at=ARRIVAL) for pid in ids)


class TestValidateFormation:
    """Tests for validate_formation."""

    def test_valid_formation(self):
        """Test a well-formed slot has no violations."""
        slots = [MatchSlot(team_a=_team("a", "b"), team_b=_team("c", "d"))]

        report = validate_formation(slots, 2)

        assert report.is_valid
        assert report.errors == []

    def test_empty_match_list_is_valid(self):
        """Test no slots means nothing to report."""
        assert validate_formation([], 5).is_valid

    def test_wrong_sizes_reported_per_team(self):
        """Test each team with the wrong size gets its own violation."""
        slots = [MatchSlot(team_a=_team("a"), team_b=_team("b", "c", "d"))]

        report = validate_formation(slots, 2)

        assert not report.is_valid
        assert [v.kind for v in report.violations] == ["team_size", "team_size"]
        assert report.errors[0] == "Team A of match 1 has 1 players, expected 2"
        assert report.errors[1] == "Team B of match 1 has 3 players, expected 2"

    def test_duplicates_reported(self):
        """Test a player on both sides is flagged."""
        slots = [MatchSlot(team_a=_team("a", "b"), team_b=_team("b", "c"))]

        report = validate_formation(slots, 2)

        assert len(report.violations) == 1
        violation = report.violations[0]
        assert violation.kind == "duplicate_participant"
        assert violation.slot_index == 0
        assert "b" in violation.message

    def test_all_violations_collected(self):
        """Test problems in several slots are all returned with their slot."""
        slots = [
            MatchSlot(team_a=_team("a", "b"), team_b=_team("c", "d")),
            MatchSlot(team_a=_team("e"), team_b=_team("f", "g")),
            MatchSlot(team_a=_team("h", "h"), team_b=_team("i", "j")),
        ]

        report = validate_formation(slots, 2)

        assert [(v.slot_index, v.kind) for v in report.violations] == [
            (1, "team_size"),
            (2, "duplicate_participant"),
        ]
        assert report.errors[0].startswith("Team A of match 2")
        assert report.errors[1].startswith("Match 3")
