"""
Decode raw Gemini text into typed study content.

Summaries pass through untouched. Structured kinds are trimmed, stripped of
one outer markdown fence and strictly decoded; anything that does not match
the expected list shape raises `MalformedResponse`.
"""

import logging
from typing import List

from pydantic import TypeAdapter, ValidationError

from app.errors import InvalidMaterialKind, MalformedResponse
from app.models.study_models import (
    Flashcard,
    FlashcardContent,
    GeneratedContent,
    MaterialKind,
    QuizContent,
    QuizQuestion,
    SummaryContent,
    TimelineContent,
    TimelineEvent,
)
from app.services.prompts import (
    FLASHCARD_COUNT,
    QUIZ_OPTION_COUNT,
    QUIZ_QUESTION_COUNT,
    TIMELINE_MIN_EVENTS,
)

logger = logging.getLogger(__name__)

JSON_FENCE = "```json"
FENCE = "```"

_QUIZ_ADAPTER = TypeAdapter(List[QuizQuestion])
_TIMELINE_ADAPTER = TypeAdapter(List[TimelineEvent])
_FLASHCARD_ADAPTER = TypeAdapter(List[Flashcard])


def strip_fence(text: str) -> str:
    """Trim `text` and remove a single outer ```json / ``` wrapper if present."""
    cleaned = text.strip()
    if cleaned.startswith(JSON_FENCE):
        cleaned = cleaned[len(JSON_FENCE):]
    elif cleaned.startswith(FENCE):
        cleaned = cleaned[len(FENCE):]
    else:
        return cleaned

    if cleaned.rstrip().endswith(FENCE):
        cleaned = cleaned.rstrip()[:-len(FENCE)]
    return cleaned.strip()


def resolve_content(raw_text: str, kind: MaterialKind) -> GeneratedContent:
    """
    Turn Gemini's raw text into the content variant for `kind`.

    Raises:
        MalformedResponse: the cleaned text is not valid JSON of the expected shape.
        InvalidMaterialKind: `kind` is not a known material kind.
    """
    if kind == MaterialKind.SUMMARY:
        return SummaryContent(text=raw_text)

    cleaned = strip_fence(raw_text)
    try:
        if kind == MaterialKind.QUIZ:
            return QuizContent(questions=_QUIZ_ADAPTER.validate_json(cleaned))
        if kind == MaterialKind.TIMELINE:
            return TimelineContent(events=_TIMELINE_ADAPTER.validate_json(cleaned))
        if kind == MaterialKind.FLASHCARDS:
            return FlashcardContent(cards=_FLASHCARD_ADAPTER.validate_json(cleaned))
    except ValidationError as e:
        logger.error(
            "Failed to parse JSON from AI response: %s | original=%r | cleaned=%r",
            e.errors(include_url=False)[:3], raw_text, cleaned,
        )
        raise MalformedResponse(raw_text=raw_text, cleaned_text=cleaned, reason=str(e)) from e

    raise InvalidMaterialKind(kind)


def audit_content(content: GeneratedContent) -> list[str]:
    """
    Report prompt-level constraints the decoded content does not meet.

    These are advisory: the content is still usable, the caller only surfaces
    the warnings.
    """
    issues: list[str] = []

    if isinstance(content, QuizContent):
        if len(content.questions) != QUIZ_QUESTION_COUNT:
            issues.append(f"Expected {QUIZ_QUESTION_COUNT} questions, got {len(content.questions)}.")
        for i, q in enumerate(content.questions, start=1):
            if len(q.options) != QUIZ_OPTION_COUNT:
                issues.append(f"Question {i} has {len(q.options)} options instead of {QUIZ_OPTION_COUNT}.")
            if q.correct_answer not in q.options:
                issues.append(f"Question {i}: correct answer is not one of the options.")

    elif isinstance(content, TimelineContent):
        if len(content.events) < TIMELINE_MIN_EVENTS:
            issues.append(f"Expected at least {TIMELINE_MIN_EVENTS} events, got {len(content.events)}.")

    elif isinstance(content, FlashcardContent):
        if len(content.cards) != FLASHCARD_COUNT:
            issues.append(f"Expected {FLASHCARD_COUNT} flashcards, got {len(content.cards)}.")

    return issues
