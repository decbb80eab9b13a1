from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional

from .errors import ValidationError
from .logger import get_logger
from .models import TodoEntity, new_todo, utc_timestamp
from .settings import get_settings
from .store import JsonFileStore

logger = get_logger(__name__)

TEXT_REQUIRED = "Todo text is required and must be a non-empty string"
TEXT_NON_EMPTY = "Todo text must be a non-empty string"
COMPLETED_NOT_BOOLEAN = "Completed field must be a boolean"


def _clean_text(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message)
    return value.strip()


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    def find_all(self) -> List[TodoEntity]:
        """Return every todo in insertion order."""

    @abstractmethod
    def find_by_id(self, todo_id: str) -> Optional[TodoEntity]:
        """Return a TodoEntity by id, or None if not found."""

    @abstractmethod
    def create(self, text: Any) -> TodoEntity:
        """Validate `text`, then create and return a new TodoEntity."""

    @abstractmethod
    def update(self, todo_id: str, changes: Mapping[str, Any]) -> Optional[TodoEntity]:
        """Apply the provided fields to an existing TodoEntity. Return it, or None if not found."""

    @abstractmethod
    def delete(self, todo_id: str) -> bool:
        """Delete a TodoEntity by id. Return True if deleted, False if not found."""

    @abstractmethod
    def delete_all(self) -> None:
        """Remove every todo."""


class TodoRepository(Repository):
    """
    Repository over a JsonFileStore.

    Nothing is cached between calls: each operation reads the whole
    collection, mutates it in memory and, for writes, persists the whole
    collection back.
    """

    def __init__(self, store: JsonFileStore) -> None:
        self._store = store

    @staticmethod
    def _index_of(todos: List[TodoEntity], todo_id: str) -> int:
        for i, todo in enumerate(todos):
            if todo.get("id") == todo_id:
                return i
        return -1

    def find_all(self) -> List[TodoEntity]:
        return self._store.read_all()

    def find_by_id(self, todo_id: str) -> Optional[TodoEntity]:
        todos = self._store.read_all()
        i = self._index_of(todos, todo_id)
        return None if i == -1 else todos[i]

    def create(self, text: Any) -> TodoEntity:
        todo = new_todo(_clean_text(text, TEXT_REQUIRED))
        todos = self._store.read_all()
        todos.append(todo)
        self._store.write_all(todos)
        logger.info("Created todo %s", todo["id"])
        return todo

    def update(self, todo_id: str, changes: Mapping[str, Any]) -> Optional[TodoEntity]:
        todos = self._store.read_all()
        i = self._index_of(todos, todo_id)
        if i == -1:
            return None

        # Validate everything before touching the record
        text = _clean_text(changes["text"], TEXT_NON_EMPTY) if "text" in changes else None
        if "completed" in changes and not isinstance(changes["completed"], bool):
            raise ValidationError(COMPLETED_NOT_BOOLEAN)

        updated = dict(todos[i])
        if text is not None:
            updated["text"] = text
        if "completed" in changes:
            updated["completed"] = changes["completed"]
        updated["updatedAt"] = utc_timestamp()

        todos[i] = updated  # type: ignore[assignment]
        self._store.write_all(todos)
        logger.info("Updated todo %s", todo_id)
        return todos[i]

    def delete(self, todo_id: str) -> bool:
        todos = self._store.read_all()
        i = self._index_of(todos, todo_id)
        if i == -1:
            return False
        del todos[i]
        self._store.write_all(todos)
        logger.info("Deleted todo %s", todo_id)
        return True

    def delete_all(self) -> None:
        self._store.write_all([])
        logger.info("Deleted all todos")


# PUBLIC_INTERFACE
def get_repository() -> Repository:
    """
    Factory returning a TodoRepository over the JSON file configured by
    TODOS_FILE_PATH. Settings are read on every call so the file location
    can be switched per test.
    """
    settings = get_settings()
    return TodoRepository(JsonFileStore(settings.todos_file_path))
