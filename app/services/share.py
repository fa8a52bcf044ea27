"""
Shareable links: a study page is addressed by `?topic=<topic_key>&type=<Kind>`.

Resolving the topic key back into a full topic is left to the UI's catalog.
"""

import hashlib
import re
import unicodedata
from typing import Mapping
from urllib.parse import urlencode

from app.errors import EmptyTopic, InvalidMaterialKind
from app.models.study_models import MaterialKind

TOPIC_PARAM = "topic"
KIND_PARAM = "type"


def topic_key(topic: str) -> str:
    """
    Case-folded slug of a topic, e.g. 'Hijrah to Madinah' -> 'hijrah-to-madinah'.

    Letters of any script are kept ('غزوة بدر' -> 'غزوة-بدر'); combining marks
    (Arabic harakat, Latin accents) are dropped. A topic with no word characters
    at all falls back to a short hash of its text.
    """
    decomposed = unicodedata.normalize("NFKD", topic)
    bare = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    normalized = unicodedata.normalize("NFKC", bare).casefold()
    slug = "-".join(re.findall(r"[^\W_]+", normalized))
    if slug:
        return slug
    return "t-" + hashlib.sha1(normalized.strip().encode("utf-8")).hexdigest()[:12]


def build_share_url(base_url: str, key: str, kind: MaterialKind) -> str:
    query = urlencode({TOPIC_PARAM: key, KIND_PARAM: MaterialKind(kind).value})
    return f"{base_url.rstrip('/')}/?{query}"


def parse_share_query(query: Mapping[str, str]) -> tuple[str, MaterialKind]:
    """
    Read `(topic_key, kind)` back from share-link query parameters.

    Raises:
        EmptyTopic: the topic parameter is missing or blank.
        InvalidMaterialKind: the type parameter is not a material kind.
    """
    key = (query.get(TOPIC_PARAM) or "").strip()
    if not key:
        raise EmptyTopic("Shared link has no topic.")

    raw_kind = query.get(KIND_PARAM)
    try:
        kind = MaterialKind(raw_kind)
    except ValueError:
        raise InvalidMaterialKind(raw_kind) from None

    return key, kind
