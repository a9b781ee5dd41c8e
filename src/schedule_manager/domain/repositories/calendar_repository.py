"""Repository interface dedicated to the stored calendar."""
from __future__ import annotations

from typing import Protocol

from schedule_manager.domain.models.schedule import Calendar


class CalendarRepository(Protocol):
    """Persist and retrieve the calendar aggregate."""

    def save(self, calendar: Calendar) -> None:
        """Persist the provided calendar aggregate."""

    def load(self) -> Calendar:
        """Retrieve the stored calendar, creating an empty one when absent."""
