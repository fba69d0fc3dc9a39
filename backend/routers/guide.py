import logging

from fastapi import APIRouter

from brickworld.guide import GuideAssistant
from brickworld.models import ChatMessage
from brickworld.scene import scene_context

from backend.models import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/guide", tags=["guide"])

assistant = GuideAssistant()


@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest):
    """Ask the Lego Historian for the next reply.

    Always answers 200 with displayable text; a missing credential or a
    failed model call comes back as a fixed fallback message.
    """
    history = [ChatMessage(role=entry.role, text=entry.text) for entry in request.history]
    reply = await assistant.reply(history, scene_context(request.time_of_day))
    return ChatResponse(reply=reply)
