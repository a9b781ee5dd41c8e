"""Domain models describing appointments and the calendar that owns them."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from schedule_manager.domain.errors import (
    InvalidScheduleError,
    ScheduleConflictError,
    ScheduleDecodeError,
    ScheduleNotFoundError,
)

logger = logging.getLogger(__name__)


def format_timestamp(value: datetime) -> str:
    """Return ``value`` as a zero-padded ISO 8601 string with second precision."""

    return value.isoformat(timespec="seconds")


def parse_local_datetime(text: str) -> datetime:
    """Parse a local naive ISO 8601 date-time, dropping fractions of a second.

    Raises ``ValueError`` for malformed text or values carrying a time zone.
    """

    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        raise ValueError(f"time zones are not supported: {text!r}")
    return parsed.replace(microsecond=0)


@dataclass(frozen=True)
class Schedule:
    """Represent a single appointment occupying the interval ``[start, end)``."""

    id: int
    subject: str
    start: datetime
    end: datetime

    def intersects(self, other: "Schedule") -> bool:
        """Return ``True`` when both intervals share at least one instant.

        Intervals are half-open, so an appointment ending exactly when the
        other one starts does not intersect it.
        """

        return self.start < other.end and other.start < self.end

    def to_dict(self) -> Dict[str, object]:
        """Return a JSON-serializable representation of the schedule."""

        return {
            "id": self.id,
            "subject": self.subject,
            "start": format_timestamp(self.start),
            "end": format_timestamp(self.end),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Schedule":
        """Create a schedule from its dictionary representation.

        Raises ``ScheduleDecodeError`` when a field is missing or has the
        wrong type.
        """

        if not isinstance(data, Mapping):
            raise ScheduleDecodeError("each schedule must be an object")

        schedule_id = data.get("id")
        if isinstance(schedule_id, bool) or not isinstance(schedule_id, int) or schedule_id < 0:
            raise ScheduleDecodeError(f"invalid schedule id: {schedule_id!r}")

        subject = data.get("subject")
        if not isinstance(subject, str):
            raise ScheduleDecodeError(f"invalid subject for schedule {schedule_id}")

        return cls(
            id=schedule_id,
            subject=subject,
            start=_parse_timestamp(data.get("start"), "start", schedule_id),
            end=_parse_timestamp(data.get("end"), "end", schedule_id),
        )


def _parse_timestamp(value: object, name: str, schedule_id: int) -> datetime:
    if not isinstance(value, str):
        raise ScheduleDecodeError(f"missing {name} for schedule {schedule_id}")
    try:
        return parse_local_datetime(value)
    except ValueError as error:
        raise ScheduleDecodeError(
            f"invalid {name} for schedule {schedule_id}: {value!r}"
        ) from error


@dataclass
class Calendar:
    """Aggregate of schedules guaranteeing that none of them overlap."""

    schedules: List[Schedule] = field(default_factory=list)
    next_id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.next_id is None:
            self.next_id = _derive_next_id(self.schedules)

    def list_schedules(self) -> List[Schedule]:
        """Return the stored schedules in insertion order."""

        return list(self.schedules)

    def get(self, schedule_id: int) -> Schedule:
        """Return the schedule identified by ``schedule_id``."""

        for schedule in self.schedules:
            if schedule.id == schedule_id:
                return schedule
        raise ScheduleNotFoundError(schedule_id)

    def add(self, subject: str, start: datetime, end: datetime) -> Schedule:
        """Append a new schedule unless it overlaps an existing one.

        Timestamps are kept with second precision. The calendar is left
        untouched when the schedule is rejected.
        """

        start = start.replace(microsecond=0)
        end = end.replace(microsecond=0)
        if start >= end:
            raise InvalidScheduleError(start, end)

        candidate = Schedule(id=self.next_id, subject=subject, start=start, end=end)
        for schedule in self.schedules:
            if schedule.intersects(candidate):
                logger.debug(
                    "Schedule %r conflicts with stored schedule %d", subject, schedule.id
                )
                raise ScheduleConflictError(candidate, schedule)

        self.schedules.append(candidate)
        self.next_id = candidate.id + 1
        return candidate

    def delete(self, schedule_id: int) -> None:
        """Remove the first schedule identified by ``schedule_id``."""

        for index, schedule in enumerate(self.schedules):
            if schedule.id == schedule_id:
                del self.schedules[index]
                return
        raise ScheduleNotFoundError(schedule_id)

    def to_dict(self) -> Dict[str, object]:
        """Return a JSON-serializable representation of the calendar."""

        return {
            "schedules": [schedule.to_dict() for schedule in self.schedules],
            "next_id": self.next_id,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Calendar":
        """Create a calendar from its stored document.

        The whole document is rejected when any part of it is malformed.
        """

        if not isinstance(data, Mapping):
            raise ScheduleDecodeError("the document root must be an object")

        raw_schedules = data.get("schedules")
        if not isinstance(raw_schedules, list):
            raise ScheduleDecodeError("the 'schedules' field must be a list")

        schedules = [Schedule.from_dict(item) for item in raw_schedules]
        seen: set[int] = set()
        for schedule in schedules:
            if schedule.id in seen:
                raise ScheduleDecodeError(f"duplicate schedule id: {schedule.id}")
            seen.add(schedule.id)
            if schedule.start >= schedule.end:
                raise ScheduleDecodeError(
                    f"schedule {schedule.id} does not end after it starts"
                )

        next_id = data.get("next_id")
        if next_id is not None:
            if isinstance(next_id, bool) or not isinstance(next_id, int):
                raise ScheduleDecodeError(f"invalid next_id: {next_id!r}")
            if next_id < _derive_next_id(schedules):
                raise ScheduleDecodeError(
                    f"next_id {next_id} would reuse an existing schedule id"
                )

        return cls(schedules=schedules, next_id=next_id)


def _derive_next_id(schedules: List[Schedule]) -> int:
    """Return an id that no stored schedule uses, never below the count."""

    highest = max((schedule.id for schedule in schedules), default=-1)
    return max(len(schedules), highest + 1)
