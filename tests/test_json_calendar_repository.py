"""Tests for the JSON repository persisting the calendar."""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import pytest

from schedule_manager.domain.errors import ScheduleDecodeError, ScheduleStorageError
from schedule_manager.domain.models.schedule import Calendar, Schedule
from schedule_manager.infrastructure.repositories.json_calendar_repository import (
    JsonCalendarRepository,
)


def test_load_creates_empty_store_when_missing(tmp_path: Path) -> None:
    """The first load materializes an empty calendar on disk."""

    file_path = tmp_path / "nested" / "schedule.json"
    repository = JsonCalendarRepository(file_path)

    calendar = repository.load()

    assert calendar.schedules == []
    assert json.loads(file_path.read_text(encoding="utf-8")) == {
        "schedules": [],
        "next_id": 0,
    }


def test_save_and_load_roundtrip(tmp_path: Path) -> None:
    """Saving and loading should preserve the calendar aggregate."""

    repository = JsonCalendarRepository(tmp_path / "schedule.json")
    calendar = Calendar(
        schedules=[
            Schedule(0, "Café con Ana", datetime(2024, 1, 1, 9), datetime(2024, 1, 1, 10)),
            Schedule(2, "Dinner", datetime(2024, 1, 1, 19), datetime(2024, 1, 1, 20)),
        ],
        next_id=3,
    )

    repository.save(calendar)

    assert repository.load() == calendar


def test_roundtrip_without_mutation_keeps_document(tmp_path: Path) -> None:
    """Loading then saving an untouched calendar keeps every stored value."""

    file_path = tmp_path / "schedule.json"
    document = {
        "schedules": [
            {"id": 0, "subject": "Dinner", "start": "2024-01-01T19:00:00", "end": "2024-01-01T20:00:00"},
            {"id": 1, "subject": "Movie", "start": "2024-01-01T20:00:00", "end": "2024-01-01T22:00:00"},
        ]
    }
    file_path.write_text(json.dumps(document), encoding="utf-8")
    repository = JsonCalendarRepository(file_path)

    repository.save(repository.load())

    stored = json.loads(file_path.read_text(encoding="utf-8"))
    assert stored["schedules"] == document["schedules"]
    assert stored["next_id"] == 2


def test_save_leaves_no_temporary_files(tmp_path: Path) -> None:
    """The atomic write replaces the target without leftovers."""

    repository = JsonCalendarRepository(tmp_path / "schedule.json")

    repository.save(Calendar())
    repository.save(Calendar())

    assert [path.name for path in tmp_path.iterdir()] == ["schedule.json"]


def test_load_rejects_invalid_json(tmp_path: Path) -> None:
    """Corrupted files are reported as decode errors."""

    file_path = tmp_path / "schedule.json"
    file_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ScheduleDecodeError):
        JsonCalendarRepository(file_path).load()


def test_load_rejects_unexpected_structure(tmp_path: Path) -> None:
    """Valid JSON with the wrong shape is not salvaged."""

    file_path = tmp_path / "schedule.json"
    file_path.write_text(json.dumps({"events": []}), encoding="utf-8")

    with pytest.raises(ScheduleDecodeError):
        JsonCalendarRepository(file_path).load()

    assert json.loads(file_path.read_text(encoding="utf-8")) == {"events": []}


def test_load_reports_storage_errors(tmp_path: Path) -> None:
    """A store path that cannot be read surfaces as a storage error."""

    directory = tmp_path / "schedule.json"
    directory.mkdir()

    with pytest.raises(ScheduleStorageError) as excinfo:
        JsonCalendarRepository(directory).load()

    assert excinfo.value.path == directory


def test_save_reports_storage_errors(tmp_path: Path) -> None:
    """Writing below a regular file fails with a storage error."""

    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(ScheduleStorageError):
        JsonCalendarRepository(blocker / "schedule.json").save(Calendar())


@pytest.mark.parametrize(
    ("start", "end", "stored_start", "stored_end"),
    [
        (
            datetime(999, 1, 1, 19),
            datetime(999, 1, 1, 20),
            "0999-01-01T19:00:00",
            "0999-01-01T20:00:00",
        ),
        (
            datetime(2024, 12, 31, 22, 0, 0),
            datetime(2024, 12, 31, 23, 59, 59),
            "2024-12-31T22:00:00",
            "2024-12-31T23:59:59",
        ),
        (
            datetime(2024, 1, 1, 19, 0, 0, 100000),
            datetime(2024, 1, 1, 19, 0, 1, 900000),
            "2024-01-01T19:00:00",
            "2024-01-01T19:00:01",
        ),
    ],
)
def test_added_schedule_survives_save_and_load(
    tmp_path: Path, start: datetime, end: datetime, stored_start: str, stored_end: str
) -> None:
    """Every accepted schedule reloads exactly as it was stored."""

    file_path = tmp_path / "schedule.json"
    repository = JsonCalendarRepository(file_path)
    calendar = repository.load()
    schedule = calendar.add("Edge", start, end)
    repository.save(calendar)

    stored = json.loads(file_path.read_text(encoding="utf-8"))["schedules"][0]
    assert (stored["start"], stored["end"]) == (stored_start, stored_end)

    reloaded = repository.load()
    assert reloaded == calendar
    assert reloaded.get(schedule.id).start < reloaded.get(schedule.id).end
