"""Tests for forming matches from the checked-in roster."""

import random
from datetime import UTC, datetime, timedelta

import pytest

from pelada_teams.core.errors import InvalidTeamSizeError
from pelada_teams.models import Participant
from pelada_teams.services.formation import form_teams, validate_formation

BASE_TIME = datetime(2026, 10, 18, 19, 0, tzinfo=UTC)


def _player(
    index: int,
    skill: int | None = None,
    *,
    present: bool = True,
    checked_in: bool = True,
    minute: int | None = None,
) -> Participant:
    return Participant(
        id=f"p{index}",
        skill_level=skill,
        checked_in_at=BASE_TIME + timedelta(minutes=index if minute is None else minute),
        is_present=present,
        checked_in_on_day=checked_in,
    )


def _ids(players) -> list[str]:
    return [p.id for p in players]


class TestInsufficientPlayers:
    """Tests for rosters too small for a match."""

    def test_everyone_waits(self):
        """Test fewer than 2N eligible players yields no match."""
        players = [_player(i) for i in range(7)]

        result = form_teams(players, 4)

        assert result.matches == ()
        assert _ids(result.waiting_queue) == [f"p{i}" for i in range(7)]

    def test_empty_roster(self):
        """Test an empty roster is a valid, empty formation."""
        result = form_teams([], 5)

        assert result.matches == ()
        assert result.waiting_queue == ()

    def test_waiting_queue_in_arrival_order(self):
        """Test the queue is ordered by arrival even without a match."""
        players = [_player(2), _player(0), _player(1)]

        result = form_teams(players, 2)

        assert _ids(result.waiting_queue) == ["p0", "p1", "p2"]


class TestEligibility:
    """Tests for filtering present and checked-in players."""

    def test_only_present_and_checked_in(self):
        """Test absent or not checked-in players never play or wait."""
        players = [
            _player(0),
            _player(1, present=False),
            _player(2, checked_in=False),
            _player(3),
            _player(4),
            _player(5),
        ]

        result = form_teams(players, 2)

        placed = _ids(result.matches[0].participants)
        assert sorted(placed) == ["p0", "p3", "p4", "p5"]
        assert result.waiting_queue == ()


class TestArrivalOrder:
    """Tests for arrival-based fairness."""

    def test_earliest_arrivals_play_first(self):
        """Test the first 2N arrivals fill the first match."""
        players = [_player(i) for i in range(6)]
        shuffled = list(players)
        random.Random(7).shuffle(shuffled)

        result = form_teams(shuffled, 2)

        assert sorted(_ids(result.matches[0].participants)) == ["p0", "p1", "p2", "p3"]
        assert _ids(result.waiting_queue) == ["p4", "p5"]

    def test_same_timestamp_keeps_input_order(self):
        """Test ties on arrival keep the roster order."""
        players = [_player(i, minute=0) for i in (3, 1, 2)]

        result = form_teams(players, 2)

        assert _ids(result.waiting_queue) == ["p3", "p1", "p2"]

    def test_earlier_arrival_never_waits_behind_later(self):
        """Test nobody in the queue arrived before someone who plays."""
        players = [_player(i, skill=(i % 5) + 1) for i in range(13)]
        random.Random(3).shuffle(players)

        result = form_teams(players, 3)

        latest_playing = max(
            p.checked_in_at for slot in result.matches for p in slot.participants
        )
        assert all(p.checked_in_at > latest_playing for p in result.waiting_queue)

    def test_naive_and_aware_timestamps_on_one_roster(self):
        """Test naive arrivals are read as UTC and sort next to offset-aware ones."""
        rows = [
            {"id": "late", "checked_in_at": "2026-10-22T19:00:00-03:00"},
            {"id": "early", "checked_in_at": "2026-10-22T19:02:00"},
            {"id": "middle", "checked_in_at": datetime(2026, 10, 22, 20, 0)},
        ]
        players = [Participant.model_validate({**row, "checked_in_on_day": True}) for row in rows]

        result = form_teams(players, 1)

        assert players[1].checked_in_at.tzinfo is UTC
        assert _ids(result.matches[0].team_a) == ["early"]
        assert _ids(result.matches[0].team_b) == ["middle"]
        assert _ids(result.waiting_queue) == ["late"]


class TestMatchSlots:
    """Tests for chunking the roster into match slots."""

    def test_concrete_scenario(self):
        """Test 10 players rated 3 with 4 per team."""
        players = [_player(i, skill=3) for i in range(10)]

        result = form_teams(players, 4)

        assert len(result.matches) == 1
        assert _ids(result.matches[0].team_a) == ["p0", "p2", "p4", "p6"]
        assert _ids(result.matches[0].team_b) == ["p1", "p3", "p5", "p7"]
        assert _ids(result.waiting_queue) == ["p8", "p9"]

    def test_fallback_alternation_per_chunk(self):
        """Test every chunk alternates when nobody has a rating."""
        players = [_player(i) for i in range(8)]

        result = form_teams(players, 2)

        assert len(result.matches) == 2
        assert _ids(result.matches[0].team_a) == ["p0", "p2"]
        assert _ids(result.matches[0].team_b) == ["p1", "p3"]
        assert _ids(result.matches[1].team_a) == ["p4", "p6"]
        assert _ids(result.matches[1].team_b) == ["p5", "p7"]

    def test_size_and_membership_invariants(self):
        """Test slot sizes and that every eligible player is placed once."""
        players = [_player(i, skill=(i * 7) % 5 + 1) for i in range(23)]
        players.append(_player(99, present=False))

        result = form_teams(players, 5)

        assert len(result.matches) == 2
        assert len(result.waiting_queue) == 3
        assert validate_formation(result.matches, 5).is_valid

        placed = [p.id for slot in result.matches for p in slot.participants]
        placed += _ids(result.waiting_queue)
        assert len(placed) == len(set(placed))
        assert set(placed) == {p.id for p in players if p.is_eligible}

    def test_one_player_per_team(self):
        """Test the engine works with a single player per side."""
        result = form_teams([_player(i) for i in range(5)], 1)

        assert len(result.matches) == 2
        assert _ids(result.waiting_queue) == ["p4"]

    def test_input_not_modified(self):
        """Test the caller's roster keeps its order."""
        players = [_player(2), _player(0), _player(1), _player(3)]
        original = list(players)

        form_teams(players, 1)

        assert players == original


class TestConfiguration:
    """Tests for rejecting unusable team sizes."""

    @pytest.mark.parametrize("size", [0, -1])
    def test_non_positive_team_size(self, size):
        """Test zero or negative team sizes are rejected."""
        with pytest.raises(InvalidTeamSizeError, match="positive integer"):
            form_teams([_player(0), _player(1)], size)

    def test_bool_team_size(self):
        """Test booleans are not accepted as a team size."""
        with pytest.raises(InvalidTeamSizeError):
            form_teams([_player(0), _player(1)], True)
