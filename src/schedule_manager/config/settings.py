"""Application configuration helpers."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Holds configuration values for the application."""

    data_dir: Path = Path(".")
    schedule_filename: str = "schedule.json"
    log_level: str = "WARNING"
    host: str = "127.0.0.1"
    port: int = 8765
    app_version: str = "0.1.0"
    api_version: str = "v1"

    @property
    def schedule_path(self) -> Path:
        """Return the full path for storing schedule data."""

        return self.data_dir / self.schedule_filename

    @property
    def api_prefix(self) -> str:
        """Return the URL prefix used for versioned API routes."""

        return f"/api/{self.api_version}"


def get_settings() -> Settings:
    """Provide application settings, applying environment overrides."""

    settings = Settings()
    data_dir = os.getenv("SCHEDULE_DATA_DIR")
    if data_dir:
        settings = replace(settings, data_dir=Path(data_dir).expanduser())

    filename = os.getenv("SCHEDULE_FILE")
    if filename:
        settings = replace(settings, schedule_filename=filename)

    port = os.getenv("SCHEDULE_PORT")
    if port:
        try:
            settings = replace(settings, port=int(port))
        except ValueError:
            logger.warning(
                "Ignoring invalid SCHEDULE_PORT %r, using %d", port, settings.port
            )

    log_level = os.getenv("SCHEDULE_LOG_LEVEL")
    if log_level:
        if isinstance(logging.getLevelName(log_level.upper()), int):
            settings = replace(settings, log_level=log_level.upper())
        else:
            logger.warning("Ignoring unknown SCHEDULE_LOG_LEVEL %r", log_level)

    return settings
