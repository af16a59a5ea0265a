"""Outbound notification channels and the best-effort dispatcher."""

from __future__ import annotations

from linguaqa.core.config import NotificationConfig
from linguaqa.core.protocols import INotificationChannel
from linguaqa.persistence.memory_backend import MemoryNotificationChannel


def create_channel(config: NotificationConfig | None = None) -> INotificationChannel:
    """Build the configured notification channel."""
    if config is None:
        config = NotificationConfig()
    if config.channel == "ses":
        from linguaqa.notifications.ses_channel import SESNotificationChannel

        return SESNotificationChannel(
            sender=config.sender,
            region=config.region,
            endpoint_url=config.endpoint_url,
        )
    return MemoryNotificationChannel()
