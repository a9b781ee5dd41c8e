"""Command-line interface for listing, adding and deleting schedules."""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Sequence, TextIO

from schedule_manager.application.manage_schedules import (
    AddScheduleUseCase,
    DeleteScheduleUseCase,
    ListSchedulesUseCase,
)
from schedule_manager.config.logging_config import configure_logging
from schedule_manager.config.settings import get_settings
from schedule_manager.domain.errors import ScheduleError
from schedule_manager.domain.models.schedule import (
    Schedule,
    format_timestamp,
    parse_local_datetime,
)
from schedule_manager.domain.repositories.calendar_repository import CalendarRepository
from schedule_manager.infrastructure.repositories.json_calendar_repository import (
    JsonCalendarRepository,
)

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def parse_datetime(value: str) -> datetime:
    """Parse a local naive date-time such as ``2024-01-01T19:00:00``.

    Fractions of a second are dropped.
    """

    try:
        return parse_local_datetime(value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(
            f"invalid local date-time {value!r}, expected YYYY-MM-DDTHH:MM[:SS]"
        ) from error


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(f"invalid id {value!r}") from error
    if number < 0:
        raise argparse.ArgumentTypeError(f"invalid id {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``schedule`` command."""

    parser = argparse.ArgumentParser(
        prog="schedule", description="Manage non-overlapping personal schedules."
    )
    parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help="path of the JSON schedule store (default: ./schedule.json)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging verbosity written to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="list every schedule")

    add_parser = subparsers.add_parser("add", help="add a schedule")
    add_parser.add_argument("subject", help="title of the schedule")
    add_parser.add_argument("start", type=parse_datetime, help="start date-time")
    add_parser.add_argument("end", type=parse_datetime, help="end date-time")

    delete_parser = subparsers.add_parser("delete", help="delete a schedule")
    delete_parser.add_argument("id", type=_non_negative_int, help="schedule id")

    return parser


def render_schedules(schedules: Iterable[Schedule], out: TextIO) -> None:
    """Write the schedules as a tab-separated table."""

    out.write("ID\tSTART\t\t\tEND\t\t\tSUBJECT\n")
    for schedule in schedules:
        out.write(
            f"{schedule.id}\t{format_timestamp(schedule.start)}\t"
            f"{format_timestamp(schedule.end)}\t{schedule.subject}\n"
        )


def run(args: argparse.Namespace, repository: CalendarRepository, out: TextIO) -> None:
    """Execute the parsed command against ``repository``."""

    if args.command == "list":
        render_schedules(ListSchedulesUseCase(repository).execute(), out)
    elif args.command == "add":
        schedule = AddScheduleUseCase(repository).execute(
            args.subject, args.start, args.end
        )
        out.write(f"Schedule added (ID: {schedule.id})\n")
    elif args.command == "delete":
        DeleteScheduleUseCase(repository).execute(args.id)
        out.write(f"Schedule deleted (ID: {args.id})\n")


def main(
    argv: Optional[Sequence[str]] = None,
    repository: Optional[CalendarRepository] = None,
) -> int:
    """Run the command line and return the process exit code."""

    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)

    if repository is None:
        repository = JsonCalendarRepository(args.file or settings.schedule_path)

    try:
        run(args, repository, sys.stdout)
    except ScheduleError as error:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {error}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
