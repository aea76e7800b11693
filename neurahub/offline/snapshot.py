"""Local JSON snapshots of the hub state, one file per key."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

USER_KEY = "ftc_user"
TEAM_KEY = "ftc_team"
TEAMS_KEY = "ftc_global_teams"
MEMBERS_KEY = "ftc_members"
TASKS_KEY = "ftc_tasks"
IDEAS_KEY = "ftc_ideas"
EVENTS_KEY = "ftc_events"
ACTIVITIES_KEY = "ftc_activities"
INVITATIONS_KEY = "ftc_invitations"
OUTBOX_KEY = "ftc_outbox"

SNAPSHOT_KEYS = (
    USER_KEY, TEAM_KEY, TEAMS_KEY, MEMBERS_KEY, TASKS_KEY,
    IDEAS_KEY, EVENTS_KEY, ACTIVITIES_KEY, INVITATIONS_KEY,
)


class LocalSnapshotStore:
    """
    Keyed JSON documents stored under a directory.

    Writes go to a temporary file that replaces the target, so a crash never
    leaves a half-written snapshot. A missing or unreadable snapshot reads as
    the caller's default.
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid snapshot key: {key!r}")
        return self.directory / f"{key}.json"

    def read(self, key: str, default: Optional[Any] = None) -> Any:
        path = self._path(key)
        if not path.exists():
            return default
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Unreadable snapshot {key}, using default: {e}")
            return default

    def write(self, key: str, value: Any) -> None:
        path = self._path(key)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, ensure_ascii=False, default=str)
            os.replace(tmp_path, path)
        except Exception:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def delete(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()

    def clear(self) -> None:
        """Drop every hub snapshot (the outbox is kept)"""
        for key in SNAPSHOT_KEYS:
            self.delete(key)
