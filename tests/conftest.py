"""Unit test fixtures: in-memory store, recording channel, wired services."""

from __future__ import annotations

import pytest

from linguaqa.core.config import AppSettings
from linguaqa.models.quality import FREELANCER_ENTITY, USER_ENTITY
from linguaqa.services import build_services
from tests.fakes import (
    FrozenClock,
    MemoryEntityStore,
    MemoryNotificationChannel,
    freelancer_record,
    user_record,
)


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def store():
    store = MemoryEntityStore()
    store.create(FREELANCER_ENTITY, freelancer_record())
    store.create(USER_ENTITY, user_record("admin1", "admin"))
    store.create(USER_ENTITY, user_record("pm1", "project_manager"))
    store.create(USER_ENTITY, user_record("u-reviewer", "project_manager", "reviewer@elturco.example"))
    store.create(USER_ENTITY, user_record("t1", "translator"))
    return store


@pytest.fixture
def channel():
    return MemoryNotificationChannel()


@pytest.fixture
def services(store, channel, clock):
    return build_services(AppSettings(), store=store, channel=channel, clock=clock)
