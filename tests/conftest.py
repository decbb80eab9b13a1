import pytest
from fastapi.testclient import TestClient

from todo_api.main import app
from todo_api.repositories import TodoRepository
from todo_api.store import JsonFileStore


@pytest.fixture()
def todos_file(tmp_path, monkeypatch):
    """Point the app at a fresh, not-yet-existing JSON file for each test."""
    path = tmp_path / "data" / "todos.json"
    monkeypatch.setenv("TODOS_FILE_PATH", str(path))
    return path


@pytest.fixture()
def store(todos_file):
    return JsonFileStore(todos_file)


@pytest.fixture()
def repo(store):
    return TodoRepository(store)


@pytest.fixture()
def client(todos_file):
    with TestClient(app) as c:
        yield c
