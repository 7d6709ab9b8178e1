"""Local client state: when this machine last completed a sync."""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

logger = logging.getLogger(__name__)


class SyncState:
    """Advisory "last synced" timestamp kept in a small JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable sync state %s: %s", self.path, e)
            return {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write to a temp file first so a crash never leaves half a file behind
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp.replace(self.path)

    def last_synced_at(self) -> str | None:
        return self._read().get("last_synced_at")

    def mark_synced(self, when: datetime | None = None) -> str:
        stamp = (when or datetime.now(UTC)).isoformat()
        data = self._read()
        data["last_synced_at"] = stamp
        self._write(data)
        return stamp
