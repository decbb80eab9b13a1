from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Request fields are typed Any on purpose: type and emptiness checks belong to
# the repository, which raises ValidationError with the messages clients see.


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "text": "Buy groceries",
            }
        }
    )

    text: Any = Field(default=None, description="Todo text; surrounding whitespace is trimmed")


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Schema for updating an existing Todo item.
    All fields are optional; only provided fields will be updated.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "text": "Buy groceries and supplies",
                "completed": True,
            }
        }
    )

    text: Any = Field(default=None, description="New todo text; must be a non-empty string")
    completed: Any = Field(default=None, description="New completion status; must be a boolean")

    def changes(self) -> dict:
        """Return only the fields present in the request body."""
        return self.model_dump(exclude_unset=True)


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "0b6f3c3e-8f4e-4a37-9d0c-6f6c1c1e2f7a",
                "text": "Buy groceries",
                "completed": False,
                "createdAt": "2025-01-25T10:15:30.123Z",
                "updatedAt": "2025-01-26T09:00:00.000Z",
            }
        }
    )

    id: str = Field(..., description="Unique identifier of the todo item")
    text: str = Field(..., description="Todo text")
    completed: bool = Field(..., description="Completion status flag")
    createdAt: str = Field(..., description="Creation timestamp (ISO-8601, UTC)")
    updatedAt: str = Field(..., description="Last update timestamp (ISO-8601, UTC)")


# PUBLIC_INTERFACE
class ErrorOut(BaseModel):
    """
    Error payload returned for every non-2xx response.
    """

    error: str = Field(..., description="Human readable error message")
