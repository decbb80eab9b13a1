"""
Todo List API package.

A FastAPI service exposing CRUD operations over todo items that are persisted
as a single JSON array on disk. The ASGI app lives in `todo_api.main:app`.
"""

__version__ = "1.0.0"
