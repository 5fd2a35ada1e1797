"""Question answering endpoint."""

from typing import List, Dict, Any, Optional

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from api.auth import error_response
from api.deps import get_chat_service, get_gemini_client, get_perplexity_client
from services.errors import ContentValidationError, ProviderError

router = APIRouter(prefix="/api/chat", tags=["chat"])


class Message(BaseModel):
    """A prior turn of the conversation."""
    role: str
    content: str


class ChatRequest(BaseModel):
    """Request body for the chat endpoint."""
    model_config = ConfigDict(populate_by_name=True)

    question: Optional[str] = None
    context: Optional[str] = None
    chat_history: List[Message] = Field(default_factory=list, alias="chatHistory")


@router.post("")
async def ask_question(request: ChatRequest):
    """
    Answer a question about the transformed content.

    Returns {success, answer, relatedQuestions, question, provider}.
    Perplexity is tried first and Gemini answers when it fails.
    """
    history: List[Dict[str, Any]] = [msg.model_dump() for msg in request.chat_history]

    try:
        return await get_chat_service().ask(request.question, request.context, history)
    except ContentValidationError as e:
        return error_response(400, str(e))
    except ProviderError as e:
        print(f"[CHAT] Error in ai-chat: {e}")
        return error_response(500, str(e))


@router.get("/providers")
async def get_providers():
    """Get the Q&A providers and whether each is configured."""
    return {
        "providers": [
            get_perplexity_client().get_provider_info(),
            get_gemini_client().get_provider_info(),
        ]
    }
