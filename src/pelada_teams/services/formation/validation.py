"""Sanity checks for a set of match slots."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal

from pelada_teams.models import MatchSlot

ViolationKind = Literal["team_size", "duplicate_participant"]


@dataclass(frozen=True)
class FormationViolation:
    """A single problem found in one match slot.

    Attributes:
        slot_index: 0-based position of the slot in the match list.
        kind: "team_size" or "duplicate_participant".
        message: Human-readable description (slots numbered from 1).
    """

    slot_index: int
    kind: ViolationKind
    message: str


@dataclass
class ValidationReport:
    """Outcome of :func:`validate_formation`."""

    violations: list[FormationViolation] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    @property
    def errors(self) -> list[str]:
        return [v.message for v in self.violations]


def validate_formation(
    matches: Sequence[MatchSlot], players_per_team: int
) -> ValidationReport:
    """Check team sizes and duplicate players in every slot.

    All problems are collected; nothing is raised for a bad formation.

    Args:
        matches: Match slots to check.
        players_per_team: Expected size of every team.

    Returns:
        ValidationReport listing every violation found.
    """
    report = ValidationReport()

    for index, slot in enumerate(matches):
        number = index + 1
        for label, team in (("A", slot.team_a), ("B", slot.team_b)):
            if len(team) != players_per_team:
                report.violations.append(
                    FormationViolation(
                        slot_index=index,
                        kind="team_size",
                        message=(
                            f"Team {label} of match {number} has {len(team)} players, "
                            f"expected {players_per_team}"
                        ),
                    )
                )

        counts = Counter(p.id for p in slot.participants)
        duplicated = sorted(pid for pid, count in counts.items() if count > 1)
        if duplicated:
            report.violations.append(
                FormationViolation(
                    slot_index=index,
                    kind="duplicate_participant",
                    message=f"Match {number} has duplicated players: {', '.join(duplicated)}",
                )
            )

    return report
