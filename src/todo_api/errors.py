"""
Error taxonomy shared by the store, the repository and the HTTP layer.

Not-found is deliberately absent: repository lookups return None/False for a
missing id, and the router turns that into a 404.
"""
from __future__ import annotations


class TodoError(Exception):
    """Base class for all todo service errors."""


class ValidationError(TodoError):
    """A caller-supplied field failed a constraint (answered with 400)."""


class TodoStoreError(TodoError):
    """The backing JSON file could not be read or written."""


class DeserializationError(TodoStoreError):
    """The backing file exists but does not hold a JSON array of todos."""


class PersistenceError(TodoStoreError):
    """An I/O operation on the backing file failed."""
