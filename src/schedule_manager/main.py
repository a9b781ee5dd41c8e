"""Application entry point defining the HTTP API."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Mapping, TypeVar

from fastapi import APIRouter, Body, FastAPI, HTTPException, Response, status
from fastapi.middleware.cors import CORSMiddleware

from schedule_manager.application.manage_schedules import (
    AddScheduleUseCase,
    DeleteScheduleUseCase,
    ListSchedulesUseCase,
    RetrieveScheduleUseCase,
)
from schedule_manager.config.logging_config import configure_logging
from schedule_manager.config.settings import get_settings
from schedule_manager.domain.errors import (
    InvalidScheduleError,
    ScheduleConflictError,
    ScheduleError,
    ScheduleNotFoundError,
)
from schedule_manager.domain.models.schedule import parse_local_datetime
from schedule_manager.domain.repositories.calendar_repository import CalendarRepository
from schedule_manager.infrastructure.repositories.json_calendar_repository import (
    JsonCalendarRepository,
)


def create_app(calendar_repo: CalendarRepository | None = None) -> FastAPI:
    """Create and configure the FastAPI application instance."""

    settings = get_settings()
    configure_logging(settings.log_level)
    calendar_repository = (
        calendar_repo
        if calendar_repo is not None
        else JsonCalendarRepository(settings.schedule_path)
    )

    schedules_lister = ListSchedulesUseCase(calendar_repository)
    schedule_retriever = RetrieveScheduleUseCase(calendar_repository)
    schedule_adder = AddScheduleUseCase(calendar_repository)
    schedule_deleter = DeleteScheduleUseCase(calendar_repository)

    app = FastAPI(title="Schedule Manager API", version=settings.app_version)

    @app.get("/", status_code=status.HTTP_200_OK)
    async def get_root() -> dict[str, str]:
        """Return a simple heartbeat response for uptime monitoring."""

        return {"message": "RUNNING SCHEDULE MANAGER"}

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_router = APIRouter(prefix=settings.api_prefix)

    @api_router.get("/status", status_code=status.HTTP_200_OK)
    async def get_status() -> dict:
        """Return the operational status and version of the service."""

        return {"status": "ok", "version": settings.app_version}

    @api_router.get("/schedules", status_code=status.HTTP_200_OK)
    async def list_schedules() -> dict:
        """Return every stored schedule in insertion order."""

        schedules = _execute(schedules_lister.execute)
        return {"schedules": [schedule.to_dict() for schedule in schedules]}

    @api_router.get("/schedules/{schedule_id}", status_code=status.HTTP_200_OK)
    async def get_schedule(schedule_id: int) -> dict:
        """Return the schedule identified by ``schedule_id``."""

        return _execute(schedule_retriever.execute, schedule_id).to_dict()

    @api_router.post("/schedules", status_code=status.HTTP_201_CREATED)
    async def add_schedule(
        response: Response, payload: dict[str, Any] = Body(...)
    ) -> dict:
        """Store a new schedule unless it overlaps an existing one."""

        subject, start, end = _parse_schedule_payload(payload)
        schedule = _execute(schedule_adder.execute, subject, start, end)
        response.headers["Location"] = f"{settings.api_prefix}/schedules/{schedule.id}"
        return schedule.to_dict()

    @api_router.delete(
        "/schedules/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT
    )
    async def delete_schedule(schedule_id: int) -> Response:
        """Delete the schedule identified by ``schedule_id``."""

        _execute(schedule_deleter.execute, schedule_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    app.include_router(api_router)
    return app


def _parse_schedule_payload(payload: Mapping[str, Any]) -> tuple[str, datetime, datetime]:
    """Extract the subject and interval from a request body."""

    subject = payload.get("subject")
    if not isinstance(subject, str):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="The 'subject' field must be a string.",
        )
    return subject, _parse_datetime(payload, "start"), _parse_datetime(payload, "end")


def _parse_datetime(payload: Mapping[str, Any], name: str) -> datetime:
    value = payload.get(name)
    try:
        if not isinstance(value, str):
            raise ValueError(f"{name} must be a string")
        return parse_local_datetime(value)
    except ValueError as error:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"The '{name}' field must be a local ISO 8601 date-time.",
        ) from error


_ResultT = TypeVar("_ResultT")


def _execute(operation: Callable[..., _ResultT], *args: Any) -> _ResultT:
    """Run a use case converting schedule errors to HTTP errors."""

    try:
        return operation(*args)
    except ScheduleNotFoundError as error:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(error)
        ) from error
    except ScheduleConflictError as error:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=str(error)
        ) from error
    except InvalidScheduleError as error:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(error)
        ) from error
    except ScheduleError as error:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error)
        ) from error


app = create_app()
