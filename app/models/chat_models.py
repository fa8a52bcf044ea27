from pydantic import BaseModel, Field
from typing import List, Literal, Optional

from config import DEFAULT_LANGUAGE


class ChatTurn(BaseModel):
    # "model" is the assistant role, as Gemini names it
    role: Literal["user", "model"]
    text: str


class ChatRequest(BaseModel):
    session_id: Optional[str] = None
    topic: str
    language: str = DEFAULT_LANGUAGE
    message: str


class ChatResponse(BaseModel):
    session_id: str
    response: str
    history: List[ChatTurn] = Field(default_factory=list)


class ChatTranscript(BaseModel):
    session_id: str
    topic: Optional[str] = None
    history: List[ChatTurn] = Field(default_factory=list)
