"""Loads the active QualitySettings record once per operation."""

from __future__ import annotations

import json
import logging

import pydantic

from linguaqa.core.config import QualityDefaults
from linguaqa.core.exceptions import CacheError, StoreError
from linguaqa.core.protocols import ICacheBackend, IEntityStore
from linguaqa.models.quality import SETTINGS_ENTITY, QualitySettings

logger = logging.getLogger(__name__)

CACHE_KEY = "quality_settings:active"


class SettingsLoader:
    """Reads the single active settings record, falling back to configured defaults.

    A cache outage only costs a store read; it never fails the caller.
    """

    def __init__(
        self,
        store: IEntityStore,
        defaults: QualityDefaults | None = None,
        cache: ICacheBackend | None = None,
    ) -> None:
        self._store = store
        self._defaults = defaults or QualityDefaults()
        self._cache = cache

    def load(self) -> QualitySettings:
        cached = self._cache_get()
        if cached is not None:
            return QualitySettings.model_validate(json.loads(cached))

        records = self._store.filter(SETTINGS_ENTITY)
        if not records:
            logger.debug("No QualitySettings record found, using defaults")
        try:
            settings = QualitySettings.from_record(records[0] if records else None, self._defaults)
        except pydantic.ValidationError as exc:
            logger.exception("Stored QualitySettings record is invalid")
            raise StoreError(f"Invalid QualitySettings record: {exc.error_count()} field error(s)") from exc

        if self._cache is not None:
            try:
                self._cache.setex(CACHE_KEY, self._defaults.settings_cache_ttl, settings.model_dump_json())
            except CacheError as exc:
                logger.warning("Could not cache quality settings: %s", exc)
        return settings

    def invalidate(self) -> None:
        if self._cache is not None:
            self._cache.delete(CACHE_KEY)

    def _cache_get(self) -> str | None:
        if self._cache is None:
            return None
        try:
            return self._cache.get(CACHE_KEY)
        except CacheError as exc:
            logger.warning("Quality settings cache unavailable: %s", exc)
            return None
