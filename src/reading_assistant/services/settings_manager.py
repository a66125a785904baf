"""Settings Manager - Handles backend URL, timeouts and local data paths."""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class SettingsManager:
    """
    Manages client configuration.

    Reads values from a .env file in the project root, falling back to
    process environment variables and built-in defaults.
    """

    DEFAULT_API_URL = "http://127.0.0.1:8000/api"
    DEFAULT_TIMEOUT = 30.0
    DEFAULT_LOG_LEVEL = "INFO"

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            project_root: Path to project root where .env is located.
                         If None, searches upward from current file.
        """
        if project_root is None:
            current = Path(__file__).resolve()
            project_root = current.parent.parent.parent.parent

        env_path = project_root / ".env"
        load_dotenv(dotenv_path=env_path)

        self._project_root = project_root

    def get_api_base_url(self) -> str:
        url = os.getenv("READING_ASSISTANT_API_URL")
        return url.strip().rstrip("/") if url and url.strip() else self.DEFAULT_API_URL

    def get_request_timeout(self) -> float:
        raw = os.getenv("READING_ASSISTANT_TIMEOUT")
        if not raw or not raw.strip():
            return self.DEFAULT_TIMEOUT
        try:
            timeout = float(raw)
        except ValueError:
            logger.warning("Ignoring invalid READING_ASSISTANT_TIMEOUT=%r", raw)
            return self.DEFAULT_TIMEOUT
        return timeout if timeout > 0 else self.DEFAULT_TIMEOUT

    def get_data_dir(self) -> Path:
        """Directory for client-local state such as the tip flag."""
        raw = os.getenv("READING_ASSISTANT_DATA_DIR")
        if raw and raw.strip():
            return Path(raw.strip()).expanduser()
        return Path.home() / ".reading_assistant"

    def get_log_level(self) -> str:
        level = os.getenv("READING_ASSISTANT_LOG_LEVEL")
        return level.strip().upper() if level and level.strip() else self.DEFAULT_LOG_LEVEL

    def reload_env(self) -> None:
        """Reload environment variables from .env file."""
        env_path = self._project_root / ".env"
        load_dotenv(dotenv_path=env_path, override=True)
