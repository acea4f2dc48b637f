"""Client-side query cache.

Entries are keyed by tuples such as ``("/api/tasks",)`` or
``("/api/quotes/daily", 2)``. Writes never patch entries in place: a
mutation invalidates the affected keys and the next read refetches.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Hashable, Iterator, Optional, Tuple, TypeVar

T = TypeVar("T")

QueryKey = Tuple[Hashable, ...]


class QueryStatus(str, Enum):
    loading = "loading"
    success = "success"
    error = "error"


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    status: QueryStatus
    data: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def is_loading(self) -> bool:
        return self.status is QueryStatus.loading

    @property
    def is_error(self) -> bool:
        return self.status is QueryStatus.error

    @property
    def is_success(self) -> bool:
        return self.status is QueryStatus.success

    @classmethod
    def loading(cls) -> "QueryResult[T]":
        return cls(QueryStatus.loading)

    @classmethod
    def success(cls, data: T) -> "QueryResult[T]":
        return cls(QueryStatus.success, data=data)

    @classmethod
    def failure(cls, error: Exception) -> "QueryResult[T]":
        return cls(QueryStatus.error, error=error)


class QueryCache:
    def __init__(self) -> None:
        self._entries: Dict[QueryKey, QueryResult[Any]] = {}

    def get(self, key: QueryKey) -> Optional[QueryResult[Any]]:
        return self._entries.get(key)

    def set(self, key: QueryKey, result: QueryResult[Any]) -> None:
        self._entries[key] = result

    def invalidate(self, prefix: QueryKey) -> int:
        """Drop every entry whose key starts with ``prefix``; returns how many."""
        stale = [key for key in self._entries if key[: len(prefix)] == prefix]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: QueryKey) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[QueryKey]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
