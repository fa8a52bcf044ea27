"""
FastAPI dependency providers for the service layer.

Routers depend on these instead of importing singletons directly, so tests
can swap them through `app.dependency_overrides`.
"""

from fastapi import Depends

from app.services.chat_sessions import ChatSessionService
from app.services.db import CacheService, cache_service
from app.services.genius import GeniusService, genius_service
from app.services.history import HistoryService
from app.services.preferences import PreferenceStore


def get_cache() -> CacheService:
    return cache_service


def get_genius_service() -> GeniusService:
    return genius_service


def get_history_service(cache: CacheService = Depends(get_cache)) -> HistoryService:
    return HistoryService(cache)


def get_chat_sessions(
    cache: CacheService = Depends(get_cache),
    genius: GeniusService = Depends(get_genius_service),
) -> ChatSessionService:
    return ChatSessionService(cache, genius)


def get_preference_store(cache: CacheService = Depends(get_cache)) -> PreferenceStore:
    return PreferenceStore(cache)
