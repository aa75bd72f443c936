"""User settings for taskboard.

Settings live in ~/.taskboard/config.json (the directory can be moved with
the TASKBOARD_HOME environment variable). Board data and the activity log
are stored under ``data_dir``, which defaults to the same directory.
"""

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

HOME_ENV_VAR = "TASKBOARD_HOME"


def get_config_dir() -> Path:
    """Get the taskboard config directory."""
    override = os.environ.get(HOME_ENV_VAR)
    config_dir = Path(override) if override else Path.home() / ".taskboard"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


class Settings(BaseModel):
    """Persisted user preferences."""

    data_dir: Optional[Path] = None
    stale_threshold_days: int = Field(default=7, ge=1)
    owner_id: str = "me"
    log_level: str = "WARNING"

    def resolved_data_dir(self) -> Path:
        return self.data_dir or get_config_dir()

    @property
    def board_file(self) -> Path:
        return self.resolved_data_dir() / "board.json"

    @property
    def activity_file(self) -> Path:
        return self.resolved_data_dir() / "activity.json"


def get_settings() -> Settings:
    """Load settings, falling back to defaults when missing or invalid."""
    config_file = get_config_dir() / "config.json"
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
            return Settings(**data)
        except (json.JSONDecodeError, TypeError, ValueError):
            pass
    return Settings()  # defaults


def save_settings(settings: Settings) -> None:
    """Save settings."""
    config_file = get_config_dir() / "config.json"
    config_file.write_text(
        json.dumps(settings.model_dump(mode="json"), indent=2),
        encoding="utf-8",
    )


def get_last_board_id() -> Optional[str]:
    """Get the last used board ID."""
    config_file = get_config_dir() / "last_board.txt"
    if config_file.exists():
        return config_file.read_text(encoding="utf-8").strip() or None
    return None


def save_last_board_id(board_id: str) -> None:
    """Save the last used board ID."""
    config_file = get_config_dir() / "last_board.txt"
    config_file.write_text(board_id, encoding="utf-8")
