"""Tests for service wiring."""

from __future__ import annotations

import logging

from linguaqa.core.config import AppSettings, NotificationConfig
from linguaqa.services import build_services
from tests.fakes import MemoryEntityStore, MemoryNotificationChannel


def test_warns_when_memory_channel_outside_dev(caplog):
    with caplog.at_level(logging.WARNING, logger="linguaqa.services"):
        services = build_services(AppSettings(environment="prod"), store=MemoryEntityStore())
    assert isinstance(services.channel, MemoryNotificationChannel)
    assert "e-mails will not be delivered" in caplog.text


def test_no_warning_in_dev(caplog):
    with caplog.at_level(logging.WARNING, logger="linguaqa.services"):
        build_services(AppSettings(environment="dev"), store=MemoryEntityStore())
    assert "e-mails will not be delivered" not in caplog.text


def test_explicit_channel_skips_check(caplog):
    settings = AppSettings(environment="uat", notifications=NotificationConfig(channel="memory"))
    with caplog.at_level(logging.WARNING, logger="linguaqa.services"):
        build_services(settings, store=MemoryEntityStore(), channel=MemoryNotificationChannel())
    assert caplog.text == ""
