import os

# Settings are read at import time; give them what they need before the app loads.
os.environ.setdefault("GOOGLE_GEMINI_API_KEY", "test-key")
os.environ.setdefault("REDIS_HOST", "redis://localhost:6379/15")

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_cache, get_genius_service
from app.main import app
from app.services.db import CacheService
from app.services.genius import GeniusService


class FakeRedis:
    """In-memory stand-in for the few redis.asyncio commands CacheService uses."""

    def __init__(self):
        self.data = {}
        self.ttls = {}

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value, ex=None):
        self.data[key] = value
        if ex is not None:
            self.ttls[key] = ex
        return True

    async def expire(self, key, seconds):
        if key not in self.data:
            return False
        self.ttls[key] = seconds
        return True

    async def hset(self, key, mapping):
        self.data.setdefault(key, {}).update({k: str(v) for k, v in mapping.items()})
        return len(mapping)

    async def hgetall(self, key):
        return dict(self.data.get(key, {}))

    async def lpush(self, key, *values):
        items = self.data.setdefault(key, [])
        for value in values:
            items.insert(0, value)
        return len(items)

    async def ltrim(self, key, start, end):
        items = self.data.get(key, [])
        self.data[key] = items[start:end + 1] if end != -1 else items[start:]
        return True

    async def lrange(self, key, start, end):
        items = self.data.get(key, [])
        return items[start:end + 1] if end != -1 else items[start:]

    async def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
            self.ttls.pop(key, None)
        return removed

    async def exists(self, key):
        return 1 if key in self.data else 0

    def pipeline(self):
        return FakePipeline(self)


class FakePipeline:
    def __init__(self, redis):
        self.redis = redis
        self.calls = []

    def __getattr__(self, name):
        def queue(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self
        return queue

    async def execute(self):
        results = []
        for name, args, kwargs in self.calls:
            results.append(await getattr(self.redis, name)(*args, **kwargs))
        self.calls = []
        return results


class FakeModels:
    """Mimics `client.aio.models`: queued replies, recorded calls."""

    def __init__(self):
        self.replies = []
        self.calls = []

    def queue(self, reply):
        """Queue a text reply, or an exception to raise."""
        self.replies.append(reply)

    async def generate_content(self, model, contents, config=None):
        self.calls.append(SimpleNamespace(model=model, contents=contents, config=config))
        if not self.replies:
            raise RuntimeError("no fake reply queued")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return SimpleNamespace(text=reply)


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def cache(fake_redis):
    return CacheService(fake_redis)


@pytest.fixture
def fake_gemini():
    return SimpleNamespace(models=FakeModels())


@pytest.fixture
def genius(fake_gemini):
    return GeniusService(fake_gemini, model="gemini-test")


@pytest.fixture
def client(cache, genius):
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_genius_service] = lambda: genius
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

