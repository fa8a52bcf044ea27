"""
Topic-scoped chat sessions with the transcript persisted in Redis.

Every exchange appends exactly two turns (user + model); when Gemini fails
the model turn carries a fixed apology instead.
"""

import logging
import uuid
from typing import Optional

from pydantic import ValidationError

from app.errors import EmptyMessage, EmptyTopic, ServiceFailure
from app.models.chat_models import ChatTranscript, ChatTurn
from app.services.db import CacheService
from app.services.genius import GeniusService
from config import settings

logger = logging.getLogger(__name__)

CHAT_FALLBACK_REPLY = "Sorry, I encountered an error. Please try again."


class ChatSessionService:
    def __init__(self, cache: CacheService, genius: GeniusService, ttl_seconds: int = settings.CHAT_TTL_SECONDS):
        self.cache = cache
        self.genius = genius
        self.ttl_seconds = ttl_seconds

    @staticmethod
    def _key(session_id: str) -> str:
        return f"chat:{session_id}"

    async def load(self, session_id: str) -> ChatTranscript:
        stored = await self.cache.get(self._key(session_id))
        if not stored:
            return ChatTranscript(session_id=session_id)
        try:
            transcript = ChatTranscript.model_validate(stored)
        except ValidationError as e:
            logger.warning("Corrupted history for chat %s, resetting. %s", session_id, e)
            await self.cache.delete(self._key(session_id))
            return ChatTranscript(session_id=session_id)
        logger.info("Restored chat %s with %d turns.", session_id, len(transcript.history))
        return transcript

    async def save(self, transcript: ChatTranscript) -> bool:
        return await self.cache.set(
            self._key(transcript.session_id),
            transcript.model_dump(mode="json"),
            ttl_seconds=self.ttl_seconds,
        )

    async def clear(self, session_id: str) -> bool:
        return await self.cache.delete(self._key(session_id)) > 0

    async def converse(
        self,
        topic: str,
        language: str,
        message: str,
        session_id: Optional[str] = None,
    ) -> tuple[ChatTranscript, str]:
        """
        Ask a follow-up question about `topic` and record both turns.

        Returns the updated transcript and the reply text.

        Raises:
            EmptyTopic / EmptyMessage: nothing to ask; the transcript is untouched.
        """
        topic = topic.strip()
        if not topic:
            raise EmptyTopic()
        if not message.strip():
            raise EmptyMessage()

        transcript = await self.load(session_id or str(uuid.uuid4()))
        if transcript.topic != topic:
            if transcript.history:
                logger.info("Topic changed for chat %s, clearing transcript.", transcript.session_id)
            transcript = ChatTranscript(session_id=transcript.session_id, topic=topic)

        try:
            reply = await self.genius.get_chat_response(topic, language, transcript.history, message)
        except ServiceFailure as e:
            logger.error("Chat %s falling back after failure: %s", transcript.session_id, e)
            reply = CHAT_FALLBACK_REPLY

        transcript.history.append(ChatTurn(role="user", text=message))
        transcript.history.append(ChatTurn(role="model", text=reply))
        await self.save(transcript)

        return transcript, reply
