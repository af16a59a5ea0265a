"""Wires stores, channel and quality components into one service bundle."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from linguaqa.core.config import AppSettings
from linguaqa.core.protocols import ICacheBackend, IEntityStore, INotificationChannel
from linguaqa.models.quality import utcnow
from linguaqa.notifications import create_channel
from linguaqa.notifications.dispatcher import NotificationDispatcher
from linguaqa.persistence import create_persistence
from linguaqa.quality.audit import AuditLogger
from linguaqa.quality.escalation import EscalationEvaluator
from linguaqa.quality.settings import SettingsLoader
from linguaqa.quality.state_machine import ReportStateMachine
from linguaqa.quality.sweeper import DeadlineSweeper

logger = logging.getLogger(__name__)


@dataclass
class QualityServices:
    store: IEntityStore
    channel: INotificationChannel
    settings_loader: SettingsLoader
    dispatcher: NotificationDispatcher
    state_machine: ReportStateMachine
    escalation: EscalationEvaluator
    sweeper: DeadlineSweeper


def build_services(
    settings: AppSettings | None = None,
    *,
    store: IEntityStore | None = None,
    cache: ICacheBackend | None = None,
    channel: INotificationChannel | None = None,
    clock: Callable[[], datetime] = utcnow,
) -> QualityServices:
    """Build the quality services. Explicit backends override configuration."""
    if settings is None:
        settings = AppSettings()
    if store is None:
        store, configured_cache = create_persistence(settings)
        cache = cache if cache is not None else configured_cache
    if channel is None:
        if settings.notifications.channel == "memory" and settings.environment != "dev":
            logger.warning(
                "Notification channel is 'memory' in %s; e-mails will not be delivered "
                "(set LINGUAQA_NOTIFY_CHANNEL=ses)",
                settings.environment,
            )
        channel = create_channel(settings.notifications)

    notify = settings.notifications
    loader = SettingsLoader(store, settings.quality, cache)
    dispatcher = NotificationDispatcher(channel)
    machine = ReportStateMachine(
        store=store,
        settings_loader=loader,
        dispatcher=dispatcher,
        audit=AuditLogger(store),
        app_url=notify.app_url,
        signature=notify.signature,
        clock=clock,
    )
    return QualityServices(
        store=store,
        channel=channel,
        settings_loader=loader,
        dispatcher=dispatcher,
        state_machine=machine,
        escalation=EscalationEvaluator(
            store=store, settings_loader=loader, dispatcher=dispatcher, signature=notify.signature,
        ),
        sweeper=DeadlineSweeper(store=store, state_machine=machine, settings_loader=loader, clock=clock),
    )
