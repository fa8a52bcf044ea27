# app/services/db.py

import json
import logging
from typing import Any, Dict, List, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError
from config import settings

logger = logging.getLogger(__name__)

# --- Initialize the Async Client ---
# No connection is made here; the first awaited command opens it.
REDIS_CLIENT = redis.Redis.from_url(
    settings.REDIS_HOST,
    decode_responses=True
)


class CacheService:
    """
    Thin JSON-aware wrapper over an async Redis client.

    Every method catches `RedisError`, logs it and returns a neutral value
    (None, False, 0 or an empty container).
    """

    def __init__(self, client: redis.Redis):
        self.client = client

    # ---------- Core JSON get/set ----------
    async def get(self, key: str) -> Optional[Any]:
        """Return parsed JSON object or None."""
        try:
            raw = await self.client.get(key)
            if raw is None:
                return None
            return json.loads(raw)
        except (RedisError, json.JSONDecodeError) as e:
            logger.warning("[Redis:get] Error for key %s: %s", key, e)
            return None

    async def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> bool:
        """Set key to JSON-serialized value."""
        try:
            payload = json.dumps(value)
            if ttl_seconds is not None:
                await self.client.set(key, payload, ex=int(ttl_seconds))
            else:
                await self.client.set(key, payload)
            return True
        except RedisError as e:
            logger.warning("[Redis:set] Error setting key %s: %s", key, e)
            return False

    # ---------- TTL utilities ----------
    async def expire(self, key: str, ttl_seconds: int) -> bool:
        try:
            return bool(await self.client.expire(key, int(ttl_seconds)))
        except RedisError as e:
            logger.warning("[Redis:expire] Error applying TTL to %s: %s", key, e)
            return False

    # ---------- Hash helpers ----------
    async def hset(self, key: str, mapping: Dict[str, Any]) -> bool:
        try:
            flat = {k: (v if isinstance(v, (str, int, float)) else json.dumps(v)) for k, v in mapping.items()}
            await self.client.hset(key, mapping=flat)
            return True
        except RedisError as e:
            logger.warning("[Redis:hset] Error on %s: %s", key, e)
            return False

    async def hgetall(self, key: str) -> Dict[str, str]:
        try:
            return await self.client.hgetall(key) or {}
        except RedisError as e:
            logger.warning("[Redis:hgetall] Error on %s: %s", key, e)
            return {}

    # ---------- List helpers ----------
    async def push_capped(self, key: str, value: Any, max_items: int, ttl_seconds: Optional[int] = None) -> bool:
        """Prepend a JSON value and trim the list to `max_items` newest entries."""
        pipe = self.client.pipeline()
        pipe.lpush(key, json.dumps(value))
        pipe.ltrim(key, 0, max_items - 1)
        if ttl_seconds is not None:
            pipe.expire(key, int(ttl_seconds))
        try:
            await pipe.execute()
            return True
        except RedisError as e:
            logger.warning("[Redis:push_capped] Error on %s: %s", key, e)
            return False

    async def lrange_json(self, key: str, start: int = 0, end: int = -1) -> List[Any]:
        """Return list entries parsed from JSON, skipping corrupted ones."""
        try:
            raw_items = await self.client.lrange(key, start, end) or []
        except RedisError as e:
            logger.warning("[Redis:lrange] Error on %s: %s", key, e)
            return []

        items = []
        for raw in raw_items:
            try:
                items.append(json.loads(raw))
            except json.JSONDecodeError:
                logger.warning("[Redis:lrange] Skipping corrupted entry in %s", key)
        return items

    # ---------- Generic ----------
    async def delete(self, *keys: str) -> int:
        try:
            return int(await self.client.delete(*keys)) if keys else 0
        except RedisError as e:
            logger.warning("[Redis:delete] Error deleting keys: %s", e)
            return 0

    async def exists(self, key: str) -> bool:
        try:
            return await self.client.exists(key) == 1
        except RedisError as e:
            logger.warning("[Redis:exists] Error checking %s: %s", key, e)
            return False


# Instantiate the cache service for app usage
cache_service = CacheService(REDIS_CLIENT)
