"""LinguaQA exception hierarchy."""

from __future__ import annotations


class LinguaQAError(Exception):
    """Base exception for all LinguaQA errors."""


class PermissionDeniedError(LinguaQAError):
    """Caller's role may not perform the attempted action."""

    def __init__(self, action: str, role: str) -> None:
        self.action = str(action)
        self.role = str(role)
        super().__init__(f"Role {self.role!r} is not allowed to {self.action}")


class InvalidStateError(LinguaQAError):
    """Transition attempted from a status that does not allow it."""

    def __init__(self, report_id: str, status: str, action: str) -> None:
        self.report_id = report_id
        self.status = str(status)
        self.action = str(action)
        super().__init__(f"Report {report_id} cannot {self.action} in status {self.status!r}")


class ValidationError(LinguaQAError):
    """Required input is missing or blank."""


class NotFoundError(LinguaQAError):
    """Referenced record does not exist."""

    def __init__(self, entity: str, record_id: str) -> None:
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} {record_id!r} not found")


class ConcurrentUpdateError(LinguaQAError):
    """Conditional update lost a race against another writer."""

    def __init__(self, entity: str, record_id: str, expected: dict | None = None) -> None:
        self.entity = entity
        self.record_id = record_id
        self.expected = expected or {}
        super().__init__(f"{entity} {record_id!r} was modified concurrently (expected {self.expected})")


class StoreError(LinguaQAError):
    """Entity store operation failed."""


class CacheError(LinguaQAError):
    """Redis cache operation failed."""


class NotificationError(LinguaQAError):
    """Outbound notification could not be delivered."""
