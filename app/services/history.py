"""
Generation history, one capped Redis list per (topic, kind), newest first.
"""

import logging
from datetime import datetime, timezone
from typing import List

from pydantic import ValidationError

from app.models.study_models import GeneratedContent, HistoryItem, MaterialKind
from app.services.db import CacheService
from app.services.share import topic_key
from config import settings

logger = logging.getLogger(__name__)


def history_key(topic: str, kind: MaterialKind) -> str:
    return f"history:{topic_key(topic)}:{MaterialKind(kind).value}"


class HistoryService:
    def __init__(self, cache: CacheService, max_items: int = settings.HISTORY_MAX_ITEMS,
                 ttl_seconds: int = settings.HISTORY_TTL_SECONDS):
        self.cache = cache
        self.max_items = max_items
        self.ttl_seconds = ttl_seconds

    async def record(self, topic: str, content: GeneratedContent) -> HistoryItem:
        """Store a freshly generated piece of content and return its history entry."""
        item = HistoryItem(
            content=content,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        saved = await self.cache.push_capped(
            history_key(topic, content.kind),
            item.model_dump(mode="json", by_alias=True),
            max_items=self.max_items,
            ttl_seconds=self.ttl_seconds,
        )
        if not saved:
            logger.warning("History entry for '%s' (%s) was not persisted.", topic, content.kind.value)
        return item

    async def list(self, topic: str, kind: MaterialKind) -> List[HistoryItem]:
        items = []
        for entry in await self.cache.lrange_json(history_key(topic, kind)):
            try:
                items.append(HistoryItem.model_validate(entry))
            except ValidationError as e:
                logger.warning("Skipping invalid history entry for '%s': %s", topic, e)
        return items

    async def clear(self, topic: str, kind: MaterialKind) -> bool:
        return await self.cache.delete(history_key(topic, kind)) > 0
