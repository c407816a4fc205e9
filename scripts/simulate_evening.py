#!/usr/bin/env python
"""Simulate a game day: form teams and play a series of random results.

Useful for eyeballing how the waiting queue moves and how wins pile up
with winner-stays rotation.
"""

import argparse
import random
from pathlib import Path

from pelada_teams.core.config import load_config
from pelada_teams.services.reporting import generate_formation_report, generate_stats_report
from pelada_teams.services.session import GameSession
from pelada_teams.services.stats import compute_player_stats

OUTCOMES = ["team_a", "team_b", "draw"]
OUTCOME_WEIGHTS = [0.4, 0.4, 0.2]


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path)
    parser.add_argument("--matches", type=int, default=8)
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    rng = random.Random(args.seed)  # noqa: S311
    config = load_config(args.config)
    session = GameSession(config)
    print(generate_formation_report(session.formation, f"{config.title} - kick-off"))

    if not session.formation.matches:
        return

    for _ in range(args.matches):
        match_index = rng.randrange(len(session.formation.matches))
        winner = rng.choices(OUTCOMES, weights=OUTCOME_WEIGHTS)[0]
        tie_break = rng.choice(["team_a", "team_b"]) if winner == "draw" else None
        record = session.finish_match(match_index, winner, tie_break)
        print(f"\nMatch {match_index + 1}: {record.winner}")

    print()
    print(generate_formation_report(session.formation, f"{config.title} - now"))
    print()
    print(generate_stats_report(compute_player_stats(session.history, session.participants)))


if __name__ == "__main__":
    main()
