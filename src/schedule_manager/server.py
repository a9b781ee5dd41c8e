"""ASGI server runner for the schedule HTTP API."""
from __future__ import annotations

import uvicorn

from schedule_manager.config.settings import get_settings


def main() -> None:
    """Run the API server using Uvicorn."""

    settings = get_settings()
    uvicorn.run(
        "schedule_manager.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
    )


if __name__ == "__main__":
    main()
