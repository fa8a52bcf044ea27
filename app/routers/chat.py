from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies import get_chat_sessions
from app.errors import EmptyMessage, EmptyTopic
from app.models.chat_models import ChatRequest, ChatResponse, ChatTranscript
from app.services.chat_sessions import ChatSessionService

router = APIRouter(
    prefix="/chat",
    tags=["chat"],
)


@router.post("/", response_model=ChatResponse)
async def continue_chat(
    request: ChatRequest,
    sessions: ChatSessionService = Depends(get_chat_sessions),
):
    """
    Endpoint to send a message and continue an ongoing
    conversation about the selected topic
    """
    try:
        transcript, reply = await sessions.converse(
            topic=request.topic,
            language=request.language,
            message=request.message,
            session_id=request.session_id,
        )
    except (EmptyTopic, EmptyMessage) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return ChatResponse(
        session_id=transcript.session_id,
        response=reply,
        history=transcript.history,
    )


@router.get("/{session_id}", response_model=ChatTranscript)
async def get_transcript(
    session_id: str,
    sessions: ChatSessionService = Depends(get_chat_sessions),
):
    return await sessions.load(session_id)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def clear_transcript(
    session_id: str,
    sessions: ChatSessionService = Depends(get_chat_sessions),
):
    await sessions.clear(session_id)
    return None
