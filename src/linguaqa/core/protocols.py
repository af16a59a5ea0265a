"""Protocol interfaces for all LinguaQA abstractions.

All inter-layer communication uses these Protocols: structural typing,
no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


# ---------------------------------------------------------------------------
# Persistence: Entity Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IEntityStore(Protocol):
    """Record store for reports, freelancers, settings, users and audit entries."""

    def get(self, entity: str, record_id: str) -> dict[str, Any] | None: ...

    def filter(self, entity: str, **criteria: Any) -> list[dict[str, Any]]: ...

    def create(self, entity: str, data: dict[str, Any]) -> dict[str, Any]: ...

    def update(
        self,
        entity: str,
        record_id: str,
        partial: dict[str, Any],
        expected: dict[str, Any] | None = None,
    ) -> dict[str, Any]: ...


# ---------------------------------------------------------------------------
# Persistence: Cache Backend
# ---------------------------------------------------------------------------

@runtime_checkable
class ICacheBackend(Protocol):
    """Redis-compatible cache interface."""

    def get(self, key: str) -> str | None: ...

    def setex(self, key: str, ttl: int, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


# ---------------------------------------------------------------------------
# Notification Channel
# ---------------------------------------------------------------------------

@runtime_checkable
class INotificationChannel(Protocol):
    """Outbound e-mail style channel. Fire-and-forget, no delivery receipt."""

    def send(self, to: str, subject: str, body: str) -> None: ...
