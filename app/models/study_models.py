"""
Pydantic models for study material generation.

`GeneratedContent` is a closed union discriminated by `kind`, so each
material kind carries exactly one payload shape.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union

from google.genai import types
from pydantic import BaseModel, ConfigDict, Field

from config import DEFAULT_LANGUAGE


class MaterialKind(str, Enum):
    SUMMARY = "Summary"
    QUIZ = "Quiz"
    TIMELINE = "Timeline"
    FLASHCARDS = "Flashcards"


# --- Items produced by Gemini ---

class QuizQuestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question: str
    options: List[str]
    correct_answer: str = Field(alias="correctAnswer")


class TimelineEvent(BaseModel):
    date: str
    event: str
    description: str


class Flashcard(BaseModel):
    term: str
    definition: str


# --- Generated content variants ---

class SummaryContent(BaseModel):
    kind: Literal[MaterialKind.SUMMARY] = MaterialKind.SUMMARY
    text: str


class QuizContent(BaseModel):
    kind: Literal[MaterialKind.QUIZ] = MaterialKind.QUIZ
    questions: List[QuizQuestion]


class TimelineContent(BaseModel):
    kind: Literal[MaterialKind.TIMELINE] = MaterialKind.TIMELINE
    events: List[TimelineEvent]


class FlashcardContent(BaseModel):
    kind: Literal[MaterialKind.FLASHCARDS] = MaterialKind.FLASHCARDS
    cards: List[Flashcard]


GeneratedContent = Annotated[
    Union[SummaryContent, QuizContent, TimelineContent, FlashcardContent],
    Field(discriminator="kind"),
]


@dataclass(frozen=True)
class GenerationInstruction:
    """Prompt text plus the optional response schema sent alongside it."""
    prompt: str
    output_schema: Optional[types.Schema] = None


# --- API payloads ---

class GenerationRequest(BaseModel):
    topic: str
    kind: MaterialKind
    language: str = DEFAULT_LANGUAGE


class HistoryItem(BaseModel):
    content: GeneratedContent
    timestamp: str


class GenerateResponse(BaseModel):
    topic: str
    kind: MaterialKind
    language: str
    content: GeneratedContent
    warnings: List[str] = Field(default_factory=list)
    timestamp: str
    share_url: str


class QuizScoreRequest(BaseModel):
    questions: List[QuizQuestion]
    answers: Dict[int, str] = Field(default_factory=dict)


class QuestionResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    index: int
    selected: Optional[str] = None
    correct_answer: str = Field(alias="correctAnswer")
    is_correct: bool


class QuizScore(BaseModel):
    score: int
    total: int
    complete: bool
    results: List[QuestionResult]


class ShareResolution(BaseModel):
    topic_key: str
    kind: MaterialKind
