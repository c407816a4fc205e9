from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_SKILL_LEVEL = 3


class Participant(BaseModel):
    """A player checked in for one game of a pelada."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str = ""
    skill_level: int | None = Field(default=None, ge=1, le=5)
    checked_in_at: datetime
    wins: int = Field(default=0, ge=0)
    is_present: bool = True
    checked_in_on_day: bool = False
    checked_in_on_day_at: datetime | None = None

    @field_validator("checked_in_at", "checked_in_on_day_at")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        """Read naive timestamps as UTC so every arrival on a roster compares."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @property
    def effective_skill(self) -> int:
        """Skill used for balancing; unknown ratings count as intermediate."""
        if self.skill_level is None:
            return DEFAULT_SKILL_LEVEL
        return self.skill_level

    @property
    def is_eligible(self) -> bool:
        return self.is_present and self.checked_in_on_day

    @property
    def display_name(self) -> str:
        return self.name or self.id
