"""Amazon SES notification channel implementing INotificationChannel."""

from __future__ import annotations

import boto3
from botocore.exceptions import ClientError

from linguaqa.core.exceptions import NotificationError


class SESNotificationChannel:
    """Production INotificationChannel backed by SES plain-text e-mail."""

    def __init__(self, sender: str, region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        self._sender = sender
        self._region = region
        self._endpoint_url = endpoint_url
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._client = boto3.client("ses", **kwargs)

    def send(self, to: str, subject: str, body: str) -> None:
        try:
            self._client.send_email(
                Source=self._sender,
                Destination={"ToAddresses": [to]},
                Message={
                    "Subject": {"Data": subject, "Charset": "UTF-8"},
                    "Body": {"Text": {"Data": body, "Charset": "UTF-8"}},
                },
            )
        except ClientError as exc:
            raise NotificationError(f"SES send to {to!r} failed: {exc}") from exc
