"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class DynamoDBConfig(BaseSettings):
    """DynamoDB configuration."""

    model_config = {"env_prefix": "LINGUAQA_DYNAMO_"}

    table_suffix: str = ""  # "-dev", "-uat", or "" for prod
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class RedisConfig(BaseSettings):
    """Redis cache configuration."""

    model_config = {"env_prefix": "LINGUAQA_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0


class NotificationConfig(BaseSettings):
    """Outbound notification channel configuration."""

    model_config = {"env_prefix": "LINGUAQA_NOTIFY_"}

    channel: Literal["memory", "ses"] = "memory"
    sender: str = "quality@elturco.example"
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override
    app_url: str = ""  # Base URL used for report links in e-mails
    signature: str = "el turco Quality Management"


class QualityDefaults(BaseSettings):
    """Fallback quality policy used when no QualitySettings record exists."""

    model_config = {"env_prefix": "LINGUAQA_QUALITY_"}

    dispute_period_days: int = 7
    probation_threshold: float = 70
    lqa_weight: float = 4
    qs_multiplier: float = 20
    auto_accept_enabled: bool = True
    settings_cache_ttl: int = 300  # 5 minutes


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "LINGUAQA_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    store: Literal["memory", "dynamodb"] = "memory"
    cache: Literal["none", "memory", "redis"] = "none"

    dynamodb: DynamoDBConfig = DynamoDBConfig()
    redis: RedisConfig = RedisConfig()
    notifications: NotificationConfig = NotificationConfig()
    quality: QualityDefaults = QualityDefaults()
