"""
Per-client display preferences (theme, locale) kept in a Redis hash.
"""

import logging

from pydantic import ValidationError

from app.models.preference_models import Preferences, PreferencesUpdate
from app.services.db import CacheService

logger = logging.getLogger(__name__)


class PreferenceStore:
    def __init__(self, cache: CacheService):
        self.cache = cache

    @staticmethod
    def _key(client_id: str) -> str:
        return f"prefs:{client_id}"

    async def get(self, client_id: str) -> Preferences:
        stored = await self.cache.hgetall(self._key(client_id))
        try:
            return Preferences(**stored)
        except ValidationError as e:
            logger.warning("Resetting invalid preferences for %s: %s", client_id, e)
            return Preferences()

    async def update(self, client_id: str, changes: PreferencesUpdate) -> Preferences:
        current = await self.get(client_id)
        updated = current.model_copy(update=changes.model_dump(exclude_none=True))
        await self.cache.hset(self._key(client_id), updated.model_dump())
        return updated
