"""Errors raised while loading, mutating or persisting a calendar."""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from schedule_manager.domain.models.schedule import Schedule


class ScheduleError(Exception):
    """Base class for every error produced by the schedule manager."""


class ScheduleStorageError(ScheduleError):
    """Signal that the schedule store could not be read or written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Schedule file operation failed ({path}): {reason}")
        self.path = path


class ScheduleDecodeError(ScheduleError):
    """Signal that the stored document does not have the expected structure."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Schedule data could not be decoded: {reason}")


class ScheduleConflictError(ScheduleError):
    """Signal that a new schedule overlaps one that is already stored."""

    def __init__(self, candidate: "Schedule", conflicting: "Schedule") -> None:
        super().__init__(
            f"Schedule overlaps an existing one (ID: {conflicting.id})"
        )
        self.candidate = candidate
        self.conflicting = conflicting


class ScheduleNotFoundError(ScheduleError):
    """Signal that no schedule carries the requested identifier."""

    def __init__(self, schedule_id: int) -> None:
        super().__init__(f"Schedule not found (ID: {schedule_id})")
        self.schedule_id = schedule_id


class InvalidScheduleError(ScheduleError, ValueError):
    """Signal that a schedule does not end after it starts."""

    def __init__(self, start: datetime, end: datetime) -> None:
        super().__init__(
            f"Schedule must end after it starts (start: {start.isoformat()}, "
            f"end: {end.isoformat()})"
        )
        self.start = start
        self.end = end
