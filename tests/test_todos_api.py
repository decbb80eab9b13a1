import json
import time

from fastapi.testclient import TestClient

from todo_api.main import app
from todo_api.repositories import get_repository


def create_todo(client, text="Test todo"):
    res = client.post("/todos", json={"text": text})
    assert res.status_code == 201
    return res.json()


def assert_todo_shape(todo: dict):
    assert set(todo) == {"id", "text", "completed", "createdAt", "updatedAt"}
    assert isinstance(todo["id"], str)
    assert isinstance(todo["text"], str)
    assert isinstance(todo["completed"], bool)
    assert isinstance(todo["createdAt"], str)
    assert isinstance(todo["updatedAt"], str)


class TestHealth:
    def test_health_check(self, client):
        res = client.get("/")
        assert res.status_code == 200
        assert res.json() == {"message": "Todo List API is running!"}


class TestListTodos:
    def test_empty_when_no_todos(self, client):
        res = client.get("/todos")
        assert res.status_code == 200
        assert res.json() == []

    def test_returns_all_todos_in_order(self, client):
        first = create_todo(client, "First todo")
        second = create_todo(client, "Second todo")

        res = client.get("/todos")
        assert res.status_code == 200
        assert res.json() == [first, second]

    def test_trailing_slash(self, client):
        todo = create_todo(client)
        res = client.get("/todos/", follow_redirects=False)
        assert res.status_code == 200
        assert res.json() == [todo]

    def test_create_with_trailing_slash(self, client):
        res = client.post("/todos/", json={"text": "Slashed"}, follow_redirects=False)
        assert res.status_code == 201
        assert res.json()["text"] == "Slashed"
        assert [t["text"] for t in client.get("/todos").json()] == ["Slashed"]


class TestGetTodo:
    def test_not_found(self, client):
        res = client.get("/todos/non-existent-id")
        assert res.status_code == 404
        assert res.json() == {"error": "Todo not found"}

    def test_returns_specific_todo(self, client):
        todo = create_todo(client)
        res = client.get(f"/todos/{todo['id']}")
        assert res.status_code == 200
        assert res.json() == todo


class TestCreateTodo:
    def test_create(self, client, todos_file):
        res = client.post("/todos", json={"text": "New todo"})
        assert res.status_code == 201
        todo = res.json()
        assert_todo_shape(todo)
        assert todo["text"] == "New todo"
        assert todo["completed"] is False

        # Verify it was saved
        saved = json.loads(todos_file.read_text(encoding="utf-8"))
        assert saved == [todo]

    def test_trims_text(self, client):
        res = client.post("/todos", json={"text": "  Trimmed todo  "})
        assert res.status_code == 201
        assert res.json()["text"] == "Trimmed todo"

    def test_ignores_client_supplied_fields(self, client):
        res = client.post("/todos", json={"text": "Mine", "id": "forced", "completed": True})
        assert res.status_code == 201
        todo = res.json()
        assert todo["id"] != "forced"
        assert todo["completed"] is False

    def test_empty_text(self, client):
        res = client.post("/todos", json={"text": ""})
        assert res.status_code == 400
        assert res.json() == {"error": "Todo text is required and must be a non-empty string"}

    def test_missing_text(self, client):
        res = client.post("/todos", json={})
        assert res.status_code == 400
        assert res.json() == {"error": "Todo text is required and must be a non-empty string"}

    def test_non_string_text(self, client):
        res = client.post("/todos", json={"text": 123})
        assert res.status_code == 400
        assert "required" in res.json()["error"]

    def test_body_not_an_object(self, client):
        res = client.post("/todos", json=["not", "an", "object"])
        assert res.status_code == 400
        body = res.json()
        assert body["error"] == "Request validation failed"
        assert isinstance(body["detail"], list)

    def test_malformed_json(self, client):
        res = client.post("/todos", content=b"{not json", headers={"Content-Type": "application/json"})
        assert res.status_code == 400
        assert res.json()["error"] == "Request validation failed"


class TestUpdateTodo:
    def test_update_text(self, client):
        todo = create_todo(client, "Original todo")
        time.sleep(0.01)

        res = client.put(f"/todos/{todo['id']}", json={"text": "Updated todo"})
        assert res.status_code == 200
        updated = res.json()
        assert updated["text"] == "Updated todo"
        assert updated["completed"] is False
        assert updated["createdAt"] == todo["createdAt"]
        assert updated["updatedAt"] != todo["updatedAt"]

    def test_update_completed(self, client):
        todo = create_todo(client, "Original todo")
        res = client.put(f"/todos/{todo['id']}", json={"completed": True})
        assert res.status_code == 200
        assert res.json()["completed"] is True
        assert res.json()["text"] == "Original todo"

    def test_update_both(self, client):
        todo = create_todo(client, "Original todo")
        res = client.put(f"/todos/{todo['id']}", json={"text": "Updated text", "completed": True})
        assert res.status_code == 200
        assert res.json()["text"] == "Updated text"
        assert res.json()["completed"] is True

        # Persisted
        assert client.get(f"/todos/{todo['id']}").json() == res.json()

    def test_not_found(self, client):
        res = client.put("/todos/non-existent-id", json={"text": "Updated text"})
        assert res.status_code == 404
        assert res.json() == {"error": "Todo not found"}

    def test_invalid_text(self, client):
        todo = create_todo(client)
        res = client.put(f"/todos/{todo['id']}", json={"text": ""})
        assert res.status_code == 400
        assert res.json() == {"error": "Todo text must be a non-empty string"}

    def test_null_text_is_rejected(self, client):
        todo = create_todo(client)
        res = client.put(f"/todos/{todo['id']}", json={"text": None})
        assert res.status_code == 400
        assert res.json() == {"error": "Todo text must be a non-empty string"}

    def test_invalid_completed(self, client):
        todo = create_todo(client)
        res = client.put(f"/todos/{todo['id']}", json={"completed": "not boolean"})
        assert res.status_code == 400
        assert res.json() == {"error": "Completed field must be a boolean"}
        # No mutation happened
        assert client.get(f"/todos/{todo['id']}").json() == todo


class TestDeleteTodo:
    def test_delete(self, client):
        todo = create_todo(client, "To delete")

        res = client.delete(f"/todos/{todo['id']}")
        assert res.status_code == 204
        assert res.text == ""

        res_list = client.get("/todos")
        assert all(t["id"] != todo["id"] for t in res_list.json())
        assert client.get(f"/todos/{todo['id']}").status_code == 404

    def test_not_found(self, client):
        res = client.delete("/todos/non-existent-id")
        assert res.status_code == 404
        assert res.json() == {"error": "Todo not found"}


class TestRoutingMisses:
    def test_unknown_route(self, client):
        res = client.get("/unknown-route")
        assert res.status_code == 404
        assert res.json() == {"error": "Route not found"}

    def test_unsupported_method(self, client):
        res = client.patch("/todos/some-id", json={"completed": True})
        assert res.status_code == 404
        assert res.json() == {"error": "Route not found"}


class TestServerErrors:
    def test_corrupt_file_on_list(self, client, todos_file):
        todos_file.parent.mkdir(parents=True)
        todos_file.write_text("invalid json", encoding="utf-8")

        res = client.get("/todos")
        assert res.status_code == 500
        assert res.json() == {"error": "Failed to fetch todos"}

    def test_corrupt_file_on_get_and_create(self, client, todos_file):
        todos_file.parent.mkdir(parents=True)
        todos_file.write_text("{}", encoding="utf-8")

        assert client.get("/todos/some-id").json() == {"error": "Failed to fetch todo"}
        res = client.post("/todos", json={"text": "New todo"})
        assert res.status_code == 500
        assert res.json() == {"error": "Failed to create todo"}

    def test_entries_that_are_not_records(self, client, todos_file):
        todos_file.parent.mkdir(parents=True)
        todos_file.write_text("[1, 2]", encoding="utf-8")

        res = client.get("/todos")
        assert res.status_code == 500
        assert res.json() == {"error": "Failed to fetch todos"}

        res = client.get("/todos/x")
        assert res.status_code == 500
        assert res.json() == {"error": "Failed to fetch todo"}

        assert client.put("/todos/x", json={"completed": True}).json() == {"error": "Failed to update todo"}
        assert client.delete("/todos/x").json() == {"error": "Failed to delete todo"}

    def test_invalid_utf8_file(self, client, todos_file):
        todos_file.parent.mkdir(parents=True)
        todos_file.write_bytes(b'[{"text": "\xff\xfe"}]')

        res = client.get("/todos")
        assert res.status_code == 500
        assert res.json() == {"error": "Failed to fetch todos"}

    def test_unwritable_file(self, client, todos_file):
        todos_file.mkdir(parents=True)

        res = client.post("/todos", json={"text": "New todo"})
        assert res.status_code == 500
        assert res.json() == {"error": "Failed to create todo"}

    def test_unexpected_error_is_generic(self, todos_file):
        class Exploding:
            def find_all(self):
                raise RuntimeError("secret internal detail")

        app.dependency_overrides[get_repository] = lambda: Exploding()
        try:
            with TestClient(app, raise_server_exceptions=False) as c:
                res = c.get("/todos")
        finally:
            app.dependency_overrides.clear()

        assert res.status_code == 500
        assert res.json() == {"error": "Something went wrong!"}
        assert "secret" not in res.text
