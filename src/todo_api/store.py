from __future__ import annotations

import json
from pathlib import Path
from typing import List, Sequence, Union

from .errors import DeserializationError, PersistenceError
from .logger import get_logger
from .models import TodoEntity

logger = get_logger(__name__)

RECORD_KEYS = frozenset({"id", "text", "completed", "createdAt", "updatedAt"})


class JsonFileStore:
    """
    Whole-collection persistence in a single pretty-printed JSON file.

    Every read loads the entire array and every write replaces the entire
    file. There is no locking and no atomic rename: concurrent writers are
    last-write-wins and a crash mid-write can leave a truncated file.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        """Return True iff the backing file is present."""
        return self._path.is_file()

    def read_all(self) -> List[TodoEntity]:
        """
        Return every stored todo in insertion order.

        A missing file is an empty collection. Malformed content raises
        DeserializationError; any other I/O failure raises PersistenceError.
        """
        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.debug("Todos file %s not found, starting empty", self._path)
            return []
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DeserializationError(f"Invalid todos file {self._path}: {e}") from e
        except OSError as e:
            raise PersistenceError(f"Failed to read todos: {e}") from e

        if not isinstance(data, list):
            raise DeserializationError(
                f"Invalid todos file {self._path}: expected a JSON array, got {type(data).__name__}"
            )
        for i, item in enumerate(data):
            if not isinstance(item, dict) or not RECORD_KEYS.issubset(item):
                raise DeserializationError(
                    f"Invalid todos file {self._path}: entry {i} is not a todo record"
                )
        logger.debug("Read %d todos from %s", len(data), self._path)
        return data

    def write_all(self, todos: Sequence[TodoEntity]) -> None:
        """Replace the backing file content with `todos`."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as f:
                json.dump(list(todos), f, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"Failed to write todos: {e}") from e
        logger.debug("Wrote %d todos to %s", len(todos), self._path)
