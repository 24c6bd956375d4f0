from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from threading import RLock
from typing import Any, Dict, List, Optional

import httpx

from .errors import UpstreamError
from .models import TodoEntity
from .settings import Settings

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    def list(self) -> List[TodoEntity]:
        """Return every TodoEntity in store-defined order."""

    @abstractmethod
    def create(self, text: str) -> TodoEntity:
        """Insert a new TodoEntity and return it with its assigned id."""

    @abstractmethod
    def update(self, todo_id: str, text: str) -> Optional[TodoEntity]:
        """Replace the text of a TodoEntity. Return the updated entity or None if nothing matched."""

    @abstractmethod
    def delete(self, todo_id: str) -> None:
        """Delete a TodoEntity by id. Deleting an unknown id is not an error."""


class SupabaseRepository(Repository):
    """
    Repository backed by a Supabase table through its PostgREST interface.

    Every failure (transport error, timeout, non-2xx answer, unreadable body)
    is raised as UpstreamError carrying the store's message when it sent one.
    """

    def __init__(
        self,
        client: httpx.Client,
        base_url: Optional[str],
        api_key: Optional[str],
        table: str = "todos",
        timeout: float = 10.0,
    ) -> None:
        self._client = client
        self._base_url = (base_url or "").rstrip("/")
        self._api_key = api_key or ""
        self._table = table
        self._timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/rest/v1/{self._table}"

    def _headers(self, prefer: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def _request(
        self,
        method: str,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
        prefer: Optional[str] = None,
    ) -> httpx.Response:
        if not self._base_url or not self._api_key:
            raise UpstreamError("Supabase is not configured (SUPABASE_URL / SUPABASE_ANON_KEY)")
        try:
            response = self._client.request(
                method,
                self.endpoint,
                params=params,
                json=json,
                headers=self._headers(prefer),
                timeout=self._timeout,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error("Store %s %s failed: %s", method, self.endpoint, exc)
            raise UpstreamError(str(exc) or exc.__class__.__name__) from exc

        if response.is_error:
            message = _error_message(response)
            logger.error("Store %s %s returned %s: %s", method, self.endpoint, response.status_code, message)
            raise UpstreamError(message)
        return response

    def _rows(self, response: httpx.Response) -> List[TodoEntity]:
        try:
            rows = response.json()
        except ValueError as exc:
            raise UpstreamError("Store returned a non-JSON response") from exc
        if not isinstance(rows, list):
            raise UpstreamError("Store returned an unexpected response shape")
        return rows

    def list(self) -> List[TodoEntity]:
        return self._rows(self._request("GET", params={"select": "*"}))

    def create(self, text: str) -> TodoEntity:
        rows = self._rows(
            self._request(
                "POST",
                params={"select": "*"},
                json=[{"text": text}],
                prefer="return=representation",
            )
        )
        if not rows:
            raise UpstreamError("Store returned no row for the inserted todo")
        return rows[0]

    def update(self, todo_id: str, text: str) -> Optional[TodoEntity]:
        rows = self._rows(
            self._request(
                "PATCH",
                params={"id": f"eq.{todo_id}", "select": "*"},
                json={"text": text},
                prefer="return=representation",
            )
        )
        return rows[0] if rows else None

    def delete(self, todo_id: str) -> None:
        self._request("DELETE", params={"id": f"eq.{todo_id}"})


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"Store request failed with status {response.status_code}"


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing and local runs.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        # Keyed by str(id) since path ids arrive as strings
        self._items: Dict[str, TodoEntity] = {}
        self._next_id = 1

    def _allocate_id(self) -> int:
        with self._lock:
            i = self._next_id
            self._next_id += 1
            return i

    def list(self) -> List[TodoEntity]:
        with self._lock:
            return [t.copy() for t in self._items.values()]

    def create(self, text: str) -> TodoEntity:
        entity: TodoEntity = {"id": self._allocate_id(), "text": text}
        with self._lock:
            self._items[str(entity["id"])] = entity
        return entity.copy()

    def update(self, todo_id: str, text: str) -> Optional[TodoEntity]:
        with self._lock:
            existing = self._items.get(str(todo_id))
            if existing is None:
                return None
            updated = existing.copy()
            updated["text"] = text
            self._items[str(todo_id)] = updated
            return updated.copy()

    def delete(self, todo_id: str) -> None:
        with self._lock:
            self._items.pop(str(todo_id), None)


# PUBLIC_INTERFACE
def build_repository(settings: Settings, client: httpx.Client) -> Repository:
    """
    Return the configured repository.
    - supabase: SupabaseRepository sharing the process-wide HTTP client
    - memory: InMemoryRepository
    """
    if settings.store_backend == "memory":
        return InMemoryRepository()
    return SupabaseRepository(
        client,
        base_url=settings.supabase_url,
        api_key=settings.supabase_key,
        table=settings.supabase_table,
        timeout=settings.http_timeout_seconds,
    )
