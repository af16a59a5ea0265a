"""Shared test doubles: memory backends, a controllable clock, record builders."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from linguaqa.persistence.memory_backend import (
    MemoryCacheBackend,
    MemoryEntityStore,
    MemoryNotificationChannel,
)

__all__ = [
    "FrozenClock",
    "MemoryCacheBackend",
    "MemoryEntityStore",
    "MemoryNotificationChannel",
    "NOW",
    "freelancer_record",
    "report_record",
    "user_record",
]

NOW = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


def report_record(report_id: str = "r1", freelancer_id: str = "f1", **overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": report_id,
        "freelancer_id": freelancer_id,
        "project_name": "Acme Localization",
        "report_type": "LQA",
        "lqa_score": 88.0,
        "qs_score": None,
        "status": "draft",
        "reviewer_id": "u-reviewer",
        "reviewer_comments": "Solid terminology, minor punctuation issues.",
        "version": 0,
        "created_date": NOW.isoformat(),
    }
    record.update(overrides)
    return record


def freelancer_record(freelancer_id: str = "f1", **overrides: Any) -> dict[str, Any]:
    record = {
        "id": freelancer_id,
        "full_name": "Ayse Demir",
        "email": "ayse@example.com",
        "status": "Approved",
    }
    record.update(overrides)
    return record


def user_record(user_id: str, role: str, email: str | None = None) -> dict[str, Any]:
    return {
        "id": user_id,
        "email": email or f"{user_id}@elturco.example",
        "full_name": user_id.title(),
        "role": role,
    }
