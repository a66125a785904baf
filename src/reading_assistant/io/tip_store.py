"""Client-local persisted UI state (the one-time tip flag)."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class TipStore:
    """
    File-based store for the dismissible tip flag.

    The flag lives in a small JSON file inside the user's data directory
    and is never synced to the backend.

    Format:
    {
        "version": 1,
        "tip-dismissed": true
    }
    """

    STATE_VERSION = 1
    STATE_FILENAME = "client-state.json"
    TIP_STORAGE_KEY = "tip-dismissed"

    def __init__(self, data_dir: Path):
        self._state_file = Path(data_dir) / self.STATE_FILENAME

    @property
    def state_file(self) -> Path:
        return self._state_file

    def is_tip_dismissed(self) -> bool:
        """Return the stored flag; a missing or unreadable file means not dismissed."""
        return bool(self._read().get(self.TIP_STORAGE_KEY, False))

    def dismiss_tip(self) -> None:
        self._write(self.TIP_STORAGE_KEY, True)

    def _read(self) -> dict:
        if not self._state_file.exists():
            return {}
        try:
            data = json.loads(self._state_file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Error reading client state %s: %s", self._state_file, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, key: str, value: bool) -> None:
        data = self._read()
        data["version"] = self.STATE_VERSION
        data[key] = value
        try:
            self._state_file.parent.mkdir(parents=True, exist_ok=True)
            self._state_file.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error("Error writing client state %s: %s", self._state_file, e)
