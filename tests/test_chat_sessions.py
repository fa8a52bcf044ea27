import asyncio
import json

import pytest

from app.errors import EmptyMessage, EmptyTopic
from app.services.chat_sessions import CHAT_FALLBACK_REPLY, ChatSessionService


@pytest.fixture
def sessions(cache, genius):
    return ChatSessionService(cache, genius, ttl_seconds=60)


def test_each_exchange_adds_two_turns(sessions, fake_gemini):
    fake_gemini.models.queue("First answer.")
    fake_gemini.models.queue("Second answer.")

    transcript, reply = asyncio.run(sessions.converse("Badr", "en", "Who led?", session_id="s1"))
    assert reply == "First answer."
    assert len(transcript.history) == 2

    transcript, _ = asyncio.run(sessions.converse("Badr", "en", "When?", session_id="s1"))
    assert [(t.role, t.text) for t in transcript.history] == [
        ("user", "Who led?"),
        ("model", "First answer."),
        ("user", "When?"),
        ("model", "Second answer."),
    ]
    # Second call saw the first exchange as history
    assert len(fake_gemini.models.calls[1].contents) == 3


def test_failure_appends_fallback_reply(sessions, fake_gemini):
    fake_gemini.models.queue("Fine.")
    fake_gemini.models.queue(RuntimeError("503 unavailable"))

    asyncio.run(sessions.converse("Badr", "en", "Hi", session_id="s1"))
    transcript, reply = asyncio.run(sessions.converse("Badr", "en", "Still there?", session_id="s1"))

    assert reply == CHAT_FALLBACK_REPLY
    assert len(transcript.history) == 4
    assert transcript.history[-1].role == "model"
    assert transcript.history[-1].text == CHAT_FALLBACK_REPLY


def test_transcript_is_persisted_with_ttl(sessions, fake_gemini, fake_redis):
    fake_gemini.models.queue("Answer.")

    asyncio.run(sessions.converse("Badr", "en", "Q", session_id="s1"))

    assert fake_redis.ttls["chat:s1"] == 60
    loaded = asyncio.run(sessions.load("s1"))
    assert loaded.topic == "Badr"
    assert len(loaded.history) == 2


def test_topic_change_clears_transcript(sessions, fake_gemini):
    fake_gemini.models.queue("About Badr.")
    fake_gemini.models.queue("About Uhud.")

    asyncio.run(sessions.converse("Badr", "en", "Tell me", session_id="s1"))
    transcript, _ = asyncio.run(sessions.converse("Uhud", "en", "Tell me", session_id="s1"))

    assert transcript.topic == "Uhud"
    assert [t.text for t in transcript.history] == ["Tell me", "About Uhud."]
    assert len(fake_gemini.models.calls[1].contents) == 1


def test_new_session_gets_an_id(sessions, fake_gemini):
    fake_gemini.models.queue("Hello.")

    transcript, _ = asyncio.run(sessions.converse("Badr", "en", "Hi"))

    assert transcript.session_id


def test_blank_input_is_rejected_without_turns(sessions, fake_gemini, fake_redis):
    with pytest.raises(EmptyMessage):
        asyncio.run(sessions.converse("Badr", "en", "   ", session_id="s1"))
    with pytest.raises(EmptyTopic):
        asyncio.run(sessions.converse(" ", "en", "Hi", session_id="s1"))

    assert fake_gemini.models.calls == []
    assert "chat:s1" not in fake_redis.data


def test_clear(sessions, fake_gemini):
    fake_gemini.models.queue("Hello.")
    asyncio.run(sessions.converse("Badr", "en", "Hi", session_id="s1"))

    assert asyncio.run(sessions.clear("s1")) is True
    assert asyncio.run(sessions.load("s1")).history == []


def test_corrupted_transcript_is_reset(sessions, fake_gemini, fake_redis):
    fake_redis.data["chat:s1"] = json.dumps({
        "session_id": "s1",
        "topic": "Badr",
        "history": [{"role": "assistant", "text": "Stale."}],
    })

    loaded = asyncio.run(sessions.load("s1"))

    assert loaded.session_id == "s1"
    assert loaded.history == []
    assert "chat:s1" not in fake_redis.data

    fake_redis.data["chat:s1"] = json.dumps({"session_id": "s1", "history": "oops"})
    fake_gemini.models.queue("Fresh answer.")
    transcript, _ = asyncio.run(sessions.converse("Badr", "en", "Who led?", session_id="s1"))

    assert [t.text for t in transcript.history] == ["Who led?", "Fresh answer."]


def test_topic_whitespace_does_not_reset_transcript(sessions, fake_gemini):
    fake_gemini.models.queue("In 622 CE.")
    fake_gemini.models.queue("To Madinah.")

    asyncio.run(sessions.converse("Hijrah", "en", "When?", session_id="s1"))
    transcript, _ = asyncio.run(sessions.converse("Hijrah ", "en", "Where?", session_id="s1"))

    assert transcript.topic == "Hijrah"
    assert len(transcript.history) == 4
    assert asyncio.run(sessions.load("s1")).topic == "Hijrah"
