"""Integration test for SESNotificationChannel against LocalStack."""

from __future__ import annotations

from linguaqa.models.notifications import NotificationIntent
from linguaqa.notifications.dispatcher import NotificationDispatcher
from linguaqa.notifications.ses_channel import SESNotificationChannel
from tests.integration.conftest import LOCALSTACK_URL, skip_no_localstack


@skip_no_localstack
def test_dispatch_through_ses(verified_sender):
    channel = SESNotificationChannel(sender=verified_sender, endpoint_url=LOCALSTACK_URL)
    report = NotificationDispatcher(channel).dispatch([
        NotificationIntent(to="ayse@example.com", subject="[Review Required] Quality Assessment Report", body="..."),
    ])
    assert (report.sent, report.failed) == (1, 0)
