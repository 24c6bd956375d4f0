from typing import List, Optional

import httpx
from fastapi.testclient import TestClient

from src.api.errors import UpstreamError
from src.api.main import create_app
from src.api.notifier import SlackNotifier
from src.api.repositories import InMemoryRepository, Repository, SupabaseRepository
from src.api.services import Services
from src.api.summarizer import ChatCompletionClient, TodoSummarizer


class RecordingRepository(InMemoryRepository):
    """In-memory repository that remembers which operations were called."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: List[str] = []

    def list(self):
        self.calls.append("list")
        return super().list()

    def create(self, text):
        self.calls.append("create")
        return super().create(text)

    def update(self, todo_id, text):
        self.calls.append("update")
        return super().update(todo_id, text)

    def delete(self, todo_id):
        self.calls.append("delete")
        return super().delete(todo_id)


class FailingRepository(InMemoryRepository):
    def list(self):
        raise UpstreamError("relation \"todos\" does not exist")

    def create(self, text):
        raise UpstreamError("insert failed")

    def update(self, todo_id, text):
        raise UpstreamError("update failed")

    def delete(self, todo_id):
        raise UpstreamError("delete failed")


def make_client(repo: Optional[Repository] = None) -> TestClient:
    # Summarizer and notifier are never reached by the CRUD routes
    services = Services(
        repository=repo if repo is not None else RecordingRepository(),
        summarizer=TodoSummarizer(ChatCompletionClient(None, api_key=None)),  # type: ignore[arg-type]
        notifier=SlackNotifier(None, webhook_url=None),  # type: ignore[arg-type]
    )
    return TestClient(create_app(services=services))


def assert_todo_shape(todo: dict):
    for key in ["id", "text"]:
        assert key in todo
    assert isinstance(todo["text"], str)
    assert todo["text"] != ""


class TestTodosCRUD:
    def test_create_then_list_includes_new_record(self):
        client = make_client()
        res = client.post("/todos", json={"text": "Buy milk"})
        assert res.status_code == 201
        created = res.json()
        assert_todo_shape(created)
        assert created["text"] == "Buy milk"

        res_list = client.get("/todos")
        assert res_list.status_code == 200
        todos = res_list.json()
        assert {"id": created["id"], "text": "Buy milk"} in todos

    def test_created_ids_are_distinct(self):
        client = make_client()
        a = client.post("/todos", json={"text": "A"}).json()
        b = client.post("/todos", json={"text": "B"}).json()
        assert a["id"] != b["id"]

    def test_list_empty(self):
        client = make_client()
        res = client.get("/todos")
        assert res.status_code == 200
        assert res.json() == []

    def test_put_replaces_text(self):
        client = make_client()
        tid = client.post("/todos", json={"text": "Initial"}).json()["id"]

        res_put = client.put(f"/todos/{tid}", json={"text": "Replaced"})
        assert res_put.status_code == 200
        assert res_put.json() == {"id": tid, "text": "Replaced"}
        assert client.get("/todos").json() == [{"id": tid, "text": "Replaced"}]

    def test_put_unknown_id_is_404(self):
        client = make_client()
        res = client.put("/todos/424242", json={"text": "Nope"})
        assert res.status_code == 404
        assert res.json() == {"error": "Todo not found"}

    def test_delete_existing_and_missing_both_succeed(self):
        client = make_client()
        tid = client.post("/todos", json={"text": "ToDelete"}).json()["id"]

        res_del = client.delete(f"/todos/{tid}")
        assert res_del.status_code == 200
        assert res_del.json() == {"message": "Todo deleted successfully"}
        assert client.get("/todos").json() == []

        res_again = client.delete(f"/todos/{tid}")
        assert res_again.status_code == 200
        assert res_again.json() == {"message": "Todo deleted successfully"}


class TestValidationErrors:
    def test_create_without_text_is_400_and_no_store_call(self):
        repo = RecordingRepository()
        client = make_client(repo)
        for body in ({}, {"text": ""}, {"text": None}):
            res = client.post("/todos", json=body)
            assert res.status_code == 400
            assert res.json() == {"error": "Text is required"}
        assert repo.calls == []

    def test_create_without_body_is_400(self):
        repo = RecordingRepository()
        client = make_client(repo)
        res = client.post("/todos")
        assert res.status_code == 400
        assert res.json()["error"] == "Text is required"
        assert repo.calls == []

    def test_create_with_non_string_text_is_400(self):
        repo = RecordingRepository()
        client = make_client(repo)
        res = client.post("/todos", json={"text": 123})
        assert res.status_code == 400
        assert res.json()["error"] == "Text is required"
        assert repo.calls == []

    def test_put_without_text_is_400_and_no_store_call(self):
        repo = RecordingRepository()
        client = make_client(repo)
        res = client.put("/todos/1", json={})
        assert res.status_code == 400
        assert res.json() == {"error": "Text is required"}
        assert repo.calls == []


class TestUpstreamErrors:
    def test_every_route_relays_store_message_as_500(self):
        client = make_client(FailingRepository())

        res = client.get("/todos")
        assert res.status_code == 500
        assert res.json() == {"error": 'relation "todos" does not exist'}

        res = client.post("/todos", json={"text": "x"})
        assert res.status_code == 500
        assert res.json() == {"error": "insert failed"}

        res = client.put("/todos/1", json={"text": "x"})
        assert res.status_code == 500
        assert res.json() == {"error": "update failed"}

        res = client.delete("/todos/1")
        assert res.status_code == 500
        assert res.json() == {"error": "delete failed"}

    def test_invalid_store_url_is_json_500(self):
        repo = SupabaseRepository(
            httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200, json=[]))),
            base_url="https://proj.test:badport",
            api_key="anon-key",
        )
        client = make_client(repo)

        res = client.get("/todos")
        assert res.status_code == 500
        assert "error" in res.json()
