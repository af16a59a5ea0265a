"""NotificationDispatcher: best-effort delivery of notification intents."""

from __future__ import annotations

import logging
from typing import Iterable

from linguaqa.core.protocols import INotificationChannel
from linguaqa.models.notifications import DispatchReport, NotificationIntent

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Sends intents through a channel, one at a time.

    A failed send is logged and counted. It never propagates: the workflow
    step that produced the intent has already committed.
    """

    def __init__(self, channel: INotificationChannel) -> None:
        self._channel = channel

    def dispatch(self, intents: Iterable[NotificationIntent]) -> DispatchReport:
        report = DispatchReport()
        for intent in intents:
            if not intent.to:
                logger.warning("Skipping notification %r: no recipient", intent.subject)
                report.skipped += 1
                continue
            try:
                self._channel.send(intent.to, intent.subject, intent.body)
            except Exception:
                logger.exception("Notification to %s failed: %s", intent.to, intent.subject)
                report.failed += 1
            else:
                report.sent += 1
        if report.failed:
            logger.warning("Dispatch finished with %d failure(s), %d sent", report.failed, report.sent)
        return report
