"""Custom exceptions for configuration and game-session errors."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Base exception for configuration errors with optional suggestions."""

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"[Configuration Error] {self.message}"
        if self.suggestion:
            msg += f"\n[Suggestion] {self.suggestion}"
        return msg


class MissingFieldError(ConfigurationError):
    """Error when a required configuration field is missing."""

    def __init__(self, field: str, config_path: str) -> None:
        super().__init__(
            f"Missing required field '{field}' in {config_path}",
            "Add the field to your configuration.",
        )


class InvalidTeamSizeError(ConfigurationError):
    """Error when players_per_team cannot form a team."""

    def __init__(self, players_per_team: int) -> None:
        self.players_per_team = players_per_team
        super().__init__(
            f"players_per_team must be a positive integer, got {players_per_team}",
            "Use at least 1 player per team (3 to 11 for a regular pelada).",
        )


class ValidationError(ConfigurationError):
    """Error when configuration validation fails."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(
            f"Invalid value for '{field}'",
            f"{reason}",
        )


class PeladaError(Exception):
    """Base exception for errors raised while running a game."""


class SlotNotFoundError(PeladaError, LookupError):
    """No match slot exists at the requested position."""

    def __init__(self, match_index: int, slot_count: int) -> None:
        self.match_index = match_index
        self.slot_count = slot_count
        super().__init__(
            f"No match slot at index {match_index} ({slot_count} slot(s) in play)"
        )


class ParticipantNotFoundError(PeladaError, LookupError):
    """A participant id is unknown to the roster or to the match."""

    def __init__(self, participant_id: str, where: str = "roster") -> None:
        self.participant_id = participant_id
        super().__init__(f"Participant '{participant_id}' not found in {where}")


class MatchNotFoundError(PeladaError, LookupError):
    """A match record id is unknown or the match is already finished."""

    def __init__(self, match_id: str) -> None:
        self.match_id = match_id
        super().__init__(f"No open match with id '{match_id}'")
