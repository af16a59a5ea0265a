"""In-memory backends for unit tests and local development: dict-backed fakes."""

from __future__ import annotations

import copy
import threading
import uuid
from typing import Any

from linguaqa.core.exceptions import ConcurrentUpdateError, NotFoundError


class MemoryEntityStore:
    """Dict-backed IEntityStore. Conditional updates are checked under a lock."""

    def __init__(self) -> None:
        self._tables: dict[str, dict[str, dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def _table(self, entity: str) -> dict[str, dict[str, Any]]:
        return self._tables.setdefault(entity, {})

    def get(self, entity: str, record_id: str) -> dict[str, Any] | None:
        record = self._table(entity).get(record_id)
        return copy.deepcopy(record) if record is not None else None

    def filter(self, entity: str, **criteria: Any) -> list[dict[str, Any]]:
        return [
            copy.deepcopy(r) for r in self._table(entity).values()
            if all(r.get(k) == v for k, v in criteria.items())
        ]

    def create(self, entity: str, data: dict[str, Any]) -> dict[str, Any]:
        record = copy.deepcopy(data)
        record.setdefault("id", uuid.uuid4().hex)
        with self._lock:
            self._table(entity)[record["id"]] = record
        return copy.deepcopy(record)

    def update(
        self,
        entity: str,
        record_id: str,
        partial: dict[str, Any],
        expected: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        with self._lock:
            current = self._table(entity).get(record_id)
            if current is None:
                raise NotFoundError(entity, record_id)
            if expected and any(current.get(k) != v for k, v in expected.items()):
                raise ConcurrentUpdateError(entity, record_id, expected)
            current.update(copy.deepcopy(partial))
            return copy.deepcopy(current)


class MemoryCacheBackend:
    """Dict-backed ICacheBackend for unit tests."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def setex(self, key: str, ttl: int, value: str) -> None:
        self._store[key] = value

    def delete(self, key: str) -> None:
        self._store.pop(key, None)


class MemoryNotificationChannel:
    """Recording INotificationChannel for unit tests and local development."""

    def __init__(self, fail_for: set[str] | None = None) -> None:
        self.sent: list[dict[str, str]] = []
        self._fail_for = fail_for or set()

    def send(self, to: str, subject: str, body: str) -> None:
        if to in self._fail_for:
            raise ConnectionError(f"simulated delivery failure for {to}")
        self.sent.append({"to": to, "subject": subject, "body": body})

    def recipients(self) -> list[str]:
        return [m["to"] for m in self.sent]
