"""
Study Endpoint Module.

Generates study material (summary, quiz, timeline, flashcards) with Gemini,
scores quizzes, serves generation history and resolves shared links.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.dependencies import get_genius_service, get_history_service
from app.errors import (
    EmptyTopic,
    InvalidMaterialKind,
    MalformedResponse,
    ServiceFailure,
)
from app.models.study_models import (
    GenerateResponse,
    GenerationRequest,
    HistoryItem,
    MaterialKind,
    QuizScore,
    QuizScoreRequest,
    ShareResolution,
)
from app.services.genius import GeniusService
from app.services.history import HistoryService
from app.services.resolver import audit_content
from app.services.share import build_share_url, parse_share_query, topic_key
from app.utils.scoring import score_quiz
from config import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/study", tags=["study"])


@router.get("/kinds", summary="List the supported material kinds")
async def list_kinds() -> List[str]:
    return [kind.value for kind in MaterialKind]


@router.post(
    "/generate",
    summary="Generate study material for a topic",
    response_model=GenerateResponse,
)
async def generate_material(
    data: GenerationRequest,
    genius: GeniusService = Depends(get_genius_service),
    history: HistoryService = Depends(get_history_service),
):
    """
    Generate (or regenerate) one piece of study material.

    Every successful generation is appended to the topic's history.
    """
    try:
        content = await genius.generate_study_material(data.topic, data.kind, data.language)
    except EmptyTopic as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except MalformedResponse as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.USER_MESSAGE)
    except ServiceFailure as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except InvalidMaterialKind as e:
        logger.error("Generation reached an unknown kind: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    warnings = audit_content(content)
    for warning in warnings:
        logger.warning("[%s] %s", data.kind.value, warning)

    topic = data.topic.strip()
    item = await history.record(topic, content)

    return GenerateResponse(
        topic=topic,
        kind=data.kind,
        language=data.language,
        content=content,
        warnings=warnings,
        timestamp=item.timestamp,
        share_url=build_share_url(settings.UI_HOST, topic_key(topic), data.kind),
    )


@router.post("/score", summary="Score a submitted quiz", response_model=QuizScore)
async def score_submission(data: QuizScoreRequest):
    return score_quiz(data.questions, data.answers)


@router.get(
    "/history",
    summary="List past generations for a topic and kind",
    response_model=List[HistoryItem],
)
async def get_history(
    topic: str,
    kind: MaterialKind,
    history: HistoryService = Depends(get_history_service),
):
    """Newest first."""
    if not topic.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(EmptyTopic()))
    return await history.list(topic.strip(), kind)


@router.delete(
    "/history",
    summary="Clear past generations for a topic and kind",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def clear_history(
    topic: str,
    kind: MaterialKind,
    history: HistoryService = Depends(get_history_service),
):
    if not topic.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(EmptyTopic()))
    await history.clear(topic.strip(), kind)
    return None


@router.get("/share", summary="Resolve a shared study link", response_model=ShareResolution)
async def resolve_share_link(request: Request):
    """
    Reads `topic` and `type` from the query string of a shared link.
    """
    try:
        key, kind = parse_share_query(request.query_params)
    except (EmptyTopic, InvalidMaterialKind) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ShareResolution(topic_key=key, kind=kind)
