"""JSON snapshots of a game session."""

from __future__ import annotations

from pathlib import Path

import structlog

from pelada_teams.services.session import GameSession, SessionSnapshot

logger = structlog.get_logger()


def save_snapshot(session: GameSession, path: str | Path) -> Path:
    """Write the session state to ``path`` as JSON."""
    snapshot_path = Path(path)
    snapshot_path.parent.mkdir(parents=True, exist_ok=True)
    snapshot_path.write_text(session.snapshot().model_dump_json(indent=2), encoding="utf-8")
    logger.debug("saved_snapshot", path=str(snapshot_path))
    return snapshot_path


def load_snapshot(path: str | Path) -> GameSession:
    """Restore a session saved with :func:`save_snapshot`.

    Raises:
        FileNotFoundError: If the snapshot file doesn't exist.
        pydantic.ValidationError: If the file is not a valid snapshot.
    """
    snapshot_path = Path(path)
    if not snapshot_path.exists():
        msg = f"Snapshot file not found: {snapshot_path}"
        raise FileNotFoundError(msg)

    snapshot = SessionSnapshot.model_validate_json(snapshot_path.read_text(encoding="utf-8"))
    logger.debug("loaded_snapshot", path=str(snapshot_path))
    return GameSession.from_snapshot(snapshot)
