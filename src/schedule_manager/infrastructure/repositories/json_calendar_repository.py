"""Repository storing the calendar aggregate as a JSON file."""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from schedule_manager.domain.errors import ScheduleDecodeError, ScheduleStorageError
from schedule_manager.domain.models.schedule import Calendar
from schedule_manager.domain.repositories.calendar_repository import CalendarRepository

logger = logging.getLogger(__name__)


class JsonCalendarRepository(CalendarRepository):
    """Persist the calendar on disk as a single JSON document."""

    def __init__(self, file_path: Path) -> None:
        """Initialize the repository with the path where data will be stored."""

        self._file_path = file_path

    def save(self, calendar: Calendar) -> None:
        """Serialize and persist the calendar aggregate.

        The document is written to a sibling temporary file first and then
        moved over the target, so readers never observe a partial write.
        """

        directory = self._file_path.parent
        temp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{self._file_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as output_file:
                temp_name = output_file.name
                json.dump(calendar.to_dict(), output_file, ensure_ascii=False, indent=2)
            os.replace(temp_name, self._file_path)
        except OSError as error:
            if temp_name is not None and os.path.exists(temp_name):
                os.unlink(temp_name)
            raise ScheduleStorageError(self._file_path, str(error)) from error

        logger.debug(
            "Saved %d schedules to %s", len(calendar.schedules), self._file_path
        )

    def load(self) -> Calendar:
        """Load the stored calendar, materializing an empty one when absent."""

        try:
            with self._file_path.open("r", encoding="utf-8") as input_file:
                data = json.load(input_file)
        except FileNotFoundError:
            logger.info("No schedule file at %s, creating an empty one", self._file_path)
            calendar = Calendar()
            self.save(calendar)
            return calendar
        except (json.JSONDecodeError, UnicodeDecodeError) as error:
            raise ScheduleDecodeError(f"{self._file_path}: {error}") from error
        except OSError as error:
            raise ScheduleStorageError(self._file_path, str(error)) from error

        calendar = Calendar.from_dict(data)
        logger.debug(
            "Loaded %d schedules from %s", len(calendar.schedules), self._file_path
        )
        return calendar
