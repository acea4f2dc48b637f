"""HTTP client for the Motivodo API with a query cache.

Reads go through the cache; writes wait for the server and then
invalidate the keys they affect, so the next read shows server truth.
Nothing is retried automatically and no update is applied optimistically.
"""
import logging
from typing import Any, Callable, List, Optional, TypeVar
import uuid

import httpx
from pydantic.alias_generators import to_camel
from pydantic_core import to_jsonable_python

from motivodo.schemas.quote import QuoteRead
from motivodo.schemas.task import TaskRead
from motivodo.schemas.user import UserRead
from .cache import QueryCache, QueryKey, QueryResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    detail = body.get("detail", body.get("message")) if isinstance(body, dict) else None
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list):
        # Validation errors: one entry per offending field
        return "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
            for err in detail
            if isinstance(err, dict)
        )
    return response.reason_phrase


class MotivodoClient:
    ME_KEY: QueryKey = ("/api/auth/me",)
    TASKS_KEY: QueryKey = ("/api/tasks",)
    QUOTE_KEY: QueryKey = ("/api/quotes/daily",)

    def __init__(self, http: httpx.Client, api_prefix: str = "/api"):
        self.http = http
        self.api_prefix = api_prefix.rstrip("/")
        self.cache = QueryCache()
        self.quote_refresh_key = 0

    # --- transport ---

    def _request(self, method: str, path: str, json: Any = None) -> Any:
        response = self.http.request(method, f"{self.api_prefix}{path}", json=json)
        if response.is_error:
            raise ApiError(response.status_code, _error_message(response))
        return response.json()

    def _query(self, key: QueryKey, fetch: Callable[[], T]) -> QueryResult[T]:
        cached = self.cache.get(key)
        if cached is not None and cached.is_success:
            return cached

        self.cache.set(key, QueryResult.loading())
        try:
            result = QueryResult.success(fetch())
        except (ApiError, httpx.HTTPError) as exc:
            logger.warning("Query %s failed: %s", key, exc)
            result = QueryResult.failure(exc)
        self.cache.set(key, result)
        return result

    # --- queries ---

    def me(self) -> QueryResult[UserRead]:
        return self._query(
            self.ME_KEY,
            lambda: UserRead.model_validate(self._request("GET", "/auth/me")),
        )

    def tasks(self) -> QueryResult[List[TaskRead]]:
        return self._query(
            self.TASKS_KEY,
            lambda: [TaskRead.model_validate(t) for t in self._request("GET", "/tasks")],
        )

    def daily_quote(self, refresh_key: Optional[int] = None) -> QueryResult[QuoteRead]:
        if refresh_key is None:
            refresh_key = self.quote_refresh_key
        return self._query(
            self.QUOTE_KEY + (refresh_key,),
            lambda: QuoteRead.model_validate(
                self._request("GET", f"/quotes/daily/{refresh_key}")
            ),
        )

    def refresh_quote(self) -> QueryResult[QuoteRead]:
        # A new key forces a refetch; the server still returns today's quote
        self.quote_refresh_key += 1
        return self.daily_quote()

    # --- auth mutations ---

    def register(self, username: str, password: str) -> UserRead:
        data = self._request("POST", "/auth/register", {"username": username, "password": password})
        self.cache.invalidate(self.ME_KEY)
        return UserRead.model_validate(data)

    def login(self, username: str, password: str) -> UserRead:
        data = self._request("POST", "/auth/login", {"username": username, "password": password})
        self.cache.invalidate(self.ME_KEY)
        return UserRead.model_validate(data)

    def logout(self) -> None:
        self._request("POST", "/auth/logout", {})
        # Nothing cached belongs to the next user
        self.cache.clear()

    # --- task mutations ---

    def create_task(self, title: str, **fields: Any) -> TaskRead:
        payload = {"title": title, **fields}
        data = self._request("POST", "/tasks", _jsonable(payload))
        self.cache.invalidate(self.TASKS_KEY)
        return TaskRead.model_validate(data)

    def update_task(self, task_id: uuid.UUID, **fields: Any) -> TaskRead:
        data = self._request("PATCH", f"/tasks/{task_id}", _jsonable(fields))
        self.cache.invalidate(self.TASKS_KEY)
        return TaskRead.model_validate(data)

    def toggle_task(self, task: TaskRead) -> TaskRead:
        return self.update_task(task.id, completed=not task.completed)

    def delete_task(self, task_id: uuid.UUID) -> None:
        self._request("DELETE", f"/tasks/{task_id}")
        self.cache.invalidate(self.TASKS_KEY)


def _jsonable(fields: dict) -> dict:
    """Convert snake_case keyword arguments into the API's JSON body."""
    return {to_camel(key): to_jsonable_python(value) for key, value in fields.items()}
