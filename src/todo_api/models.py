from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A Todo item exactly as it is persisted in the JSON file and returned by
    the API.

    Fields:
    - id: Opaque unique identifier (UUID4 string), immutable
    - text: Trimmed, non-empty text
    - completed: Boolean completion flag
    - createdAt: ISO-8601 UTC creation timestamp, immutable
    - updatedAt: ISO-8601 UTC timestamp of the last mutation
    """

    id: str
    text: str
    completed: bool
    createdAt: str
    updatedAt: str


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. '2025-01-31T12:00:00.123Z'."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# PUBLIC_INTERFACE
def new_todo(text: str, completed: bool = False) -> TodoEntity:
    """Build a fresh TodoEntity with a new id and equal created/updated timestamps."""
    now = utc_timestamp()
    return {
        "id": str(uuid.uuid4()),
        "text": text,
        "completed": completed,
        "createdAt": now,
        "updatedAt": now,
    }
