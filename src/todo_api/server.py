"""
ASGI entry point for the Todo List API.

Usage:
    python -m todo_api.server
    todo-api

Or via uvicorn directly:
    uvicorn todo_api.main:app --port 3000
"""
from __future__ import annotations

import uvicorn

from .logger import get_logger
from .settings import get_settings

logger = get_logger(__name__)


def main() -> None:
    """Run the API server on the configured HOST and PORT."""
    settings = get_settings()
    logger.info("Todo List API server running on port %d", settings.port)
    logger.info("Persisting todos to %s", settings.todos_file_path)
    uvicorn.run(
        "todo_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
