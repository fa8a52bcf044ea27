from urllib.parse import parse_qs, urlparse

import pytest

from app.errors import EmptyTopic, InvalidMaterialKind
from app.models.study_models import MaterialKind
from app.services.share import build_share_url, parse_share_query, topic_key


def test_topic_key_slugifies():
    assert topic_key("Hijrah of the Prophet SAW to Madinah") == "hijrah-of-the-prophet-saw-to-madinah"
    assert topic_key("  Badr (624 CE)!  ") == "badr-624-ce"


def test_share_url_round_trips():
    url = build_share_url("https://study.example.com/", "battle-of-uhud", MaterialKind.FLASHCARDS)

    parsed = urlparse(url)
    assert parsed.netloc == "study.example.com"
    query = {k: v[0] for k, v in parse_qs(parsed.query).items()}
    assert query == {"topic": "battle-of-uhud", "type": "Flashcards"}
    assert parse_share_query(query) == ("battle-of-uhud", MaterialKind.FLASHCARDS)


def test_missing_topic_rejected():
    with pytest.raises(EmptyTopic):
        parse_share_query({"type": "Quiz"})


def test_unknown_kind_rejected():
    with pytest.raises(InvalidMaterialKind):
        parse_share_query({"topic": "badr", "type": "Essay"})
    with pytest.raises(InvalidMaterialKind):
        parse_share_query({"topic": "badr"})


def test_topic_key_keeps_non_latin_letters():
    assert topic_key("الهجرة النبوية") == "الهجرة-النبوية"
    assert topic_key("غزوة بدر") == "غزوة-بدر"
    # Harakat do not split or change the key
    assert topic_key("غَزْوَة بَدْر") == "غزوة-بدر"


def test_topic_key_drops_latin_accents():
    assert topic_key("Sejarah Islām") == "sejarah-islam"
    assert topic_key("Sejarah Islām") == topic_key("sejarah islam")


def test_topic_key_without_word_characters_is_hashed():
    key = topic_key("☪ ✦")

    assert key.startswith("t-")
    assert len(key) == 14
    assert key != topic_key("✦ ☪")
    assert key == topic_key("☪ ✦")
