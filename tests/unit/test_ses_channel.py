"""Tests for SESNotificationChannel using moto."""

from __future__ import annotations

import boto3
import pytest
from moto import mock_aws

from linguaqa.core.config import NotificationConfig
from linguaqa.core.exceptions import NotificationError
from linguaqa.models.notifications import NotificationIntent
from linguaqa.notifications import create_channel
from linguaqa.notifications.dispatcher import NotificationDispatcher
from linguaqa.notifications.ses_channel import SESNotificationChannel

SENDER = "quality@elturco.example"


@pytest.fixture
def ses():
    with mock_aws():
        yield boto3.client("ses", region_name="us-east-1")


def _sent_count(ses) -> int:
    return int(ses.get_send_quota()["SentLast24Hours"])


def test_sends_from_verified_identity(ses):
    ses.verify_email_identity(EmailAddress=SENDER)
    SESNotificationChannel(sender=SENDER).send("ayse@example.com", "Subject", "Body")
    assert _sent_count(ses) == 1


def test_unverified_sender_raises_notification_error(ses):
    channel = SESNotificationChannel(sender="nobody@unverified.example")
    with pytest.raises(NotificationError):
        channel.send("ayse@example.com", "Subject", "Body")


def test_dispatcher_absorbs_ses_failure(ses):
    channel = SESNotificationChannel(sender="nobody@unverified.example")
    report = NotificationDispatcher(channel).dispatch([NotificationIntent(to="a@x.io", subject="s", body="b")])
    assert report.failed == 1


def test_create_channel_builds_ses(ses):
    channel = create_channel(NotificationConfig(channel="ses", sender=SENDER))
    assert isinstance(channel, SESNotificationChannel)
