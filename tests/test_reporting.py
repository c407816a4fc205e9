"""Tests for markdown reports."""

from datetime import UTC, datetime

import pytest

from pelada_teams.models import FormationResult, MatchSlot, Participant
from pelada_teams.services.reporting import (
    format_skill_level,
    generate_formation_report,
    generate_stats_report,
)
from pelada_teams.services.stats import PlayerStats

ARRIVAL = datetime(2026, 10, 18, 19, 0, tzinfo=UTC)


def _player(pid: str, skill: int | None = None) -> Participant:
    return Participant(id=pid, name=pid.title(), skill_level=skill, checked_in_at=ARRIVAL)


class TestFormatSkillLevel:
    """Tests for skill labels."""

    @pytest.mark.parametrize(
        ("level", "label"),
        [
            (1, "Beginner"),
            (3, "Intermediate"),
            (5, "Expert"),
            (None, "Undefined"),
            (9, "Undefined"),
        ],
    )
    def test_labels(self, level, label):
        """Test each rating maps to its label."""
        assert format_skill_level(level) == label


class TestFormationReport:
    """Tests for generate_formation_report."""

    def test_matches_and_queue(self):
        """Test slots, team stats and the queue are rendered."""
        result = FormationResult(
            matches=(
                MatchSlot(
                    team_a=(_player("ana", 5), _player("bia", 1)),
                    team_b=(_player("caio", 3), _player("davi", 3)),
                ),
            ),
            waiting_queue=(_player("edu"),),
        )

        report = generate_formation_report(result, "Thursday Pelada")

        assert report.startswith("# Thursday Pelada")
        assert "## Match 1" in report
        assert "**Team A**: 2 players, skill 6 (avg 3.0), 0 wins" in report
        assert "Ana" in report
        assert "Expert" in report
        assert "## Waiting queue" in report
        assert "Edu" in report

    def test_no_matches(self):
        """Test an empty formation says so."""
        report = generate_formation_report(FormationResult(), "Thursday Pelada")

        assert "Not enough players for a match yet." in report
        assert "Nobody is waiting." in report


class TestStatsReport:
    """Tests for generate_stats_report."""

    def test_leaderboard(self):
        """Test player rows include the win rate."""
        stats = [PlayerStats(player_id="a", player_name="Ana", total_matches=3, wins=2, losses=1)]

        report = generate_stats_report(stats)

        assert report.startswith("# Player Stats")
        assert "Ana" in report
        assert "66.7%" in report
