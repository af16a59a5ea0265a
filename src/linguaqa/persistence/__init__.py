"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from linguaqa.core.config import AppSettings
from linguaqa.core.protocols import ICacheBackend, IEntityStore
from linguaqa.persistence.memory_backend import MemoryCacheBackend, MemoryEntityStore


def create_persistence(settings: AppSettings | None = None) -> tuple[IEntityStore, ICacheBackend | None]:
    """Create wired-up persistence backends from application settings.

    Returns:
        Tuple of (entity_store, cache). ``cache`` is None when caching is off.
    """
    if settings is None:
        settings = AppSettings()

    cache: ICacheBackend | None = None
    if settings.cache == "redis":
        from linguaqa.persistence.redis_backend import RedisCacheBackend

        cache = RedisCacheBackend.from_config(settings.redis)
    elif settings.cache == "memory":
        cache = MemoryCacheBackend()

    store: IEntityStore
    if settings.store == "dynamodb":
        from linguaqa.persistence.dynamodb_backend import DynamoDBEntityStore

        store = DynamoDBEntityStore(
            table_suffix=settings.dynamodb.table_suffix,
            region=settings.dynamodb.region,
            endpoint_url=settings.dynamodb.endpoint_url,
        )
    else:
        store = MemoryEntityStore()

    return store, cache
