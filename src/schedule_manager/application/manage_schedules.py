"""Use cases for listing, adding and deleting stored schedules."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import List

from schedule_manager.domain.errors import ScheduleError
from schedule_manager.domain.models.schedule import Schedule
from schedule_manager.domain.repositories.calendar_repository import CalendarRepository

logger = logging.getLogger(__name__)


class ListSchedulesUseCase:
    """Retrieve every stored schedule without modifying the store."""

    def __init__(self, repository: CalendarRepository) -> None:
        """Initialize the use case with the repository dependency."""

        self._repository = repository

    def execute(self) -> List[Schedule]:
        """Return the stored schedules in insertion order."""

        return self._repository.load().list_schedules()


class RetrieveScheduleUseCase:
    """Retrieve a single stored schedule by its identifier."""

    def __init__(self, repository: CalendarRepository) -> None:
        """Initialize the use case with the repository dependency."""

        self._repository = repository

    def execute(self, schedule_id: int) -> Schedule:
        """Return the schedule or raise ``ScheduleNotFoundError``."""

        return self._repository.load().get(schedule_id)


class AddScheduleUseCase:
    """Validate and persist a new schedule."""

    def __init__(self, repository: CalendarRepository) -> None:
        """Initialize the use case with the repository dependency."""

        self._repository = repository

    def execute(self, subject: str, start: datetime, end: datetime) -> Schedule:
        """Add the schedule and save the calendar, returning the stored entry.

        Nothing is saved when the calendar rejects the schedule.
        """

        calendar = self._repository.load()
        try:
            schedule = calendar.add(subject, start, end)
        except ScheduleError as error:
            logger.info("Rejected schedule %r: %s", subject, error)
            raise
        self._repository.save(calendar)
        logger.info("Added schedule %d (%s)", schedule.id, schedule.subject)
        return schedule


class DeleteScheduleUseCase:
    """Remove a stored schedule identified by its id."""

    def __init__(self, repository: CalendarRepository) -> None:
        """Initialize the use case with the repository dependency."""

        self._repository = repository

    def execute(self, schedule_id: int) -> None:
        """Delete the schedule and save the calendar.

        Raises ``ScheduleNotFoundError`` without saving when the id is unknown.
        """

        calendar = self._repository.load()
        calendar.delete(schedule_id)
        self._repository.save(calendar)
        logger.info("Deleted schedule %d", schedule_id)
