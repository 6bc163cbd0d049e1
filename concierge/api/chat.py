# api/chat.py
"""
Concierge Chat API
Multi-turn chat scoped to a dashboard session
"""

from fastapi import APIRouter, Depends

from ..agents.concierge_service import ConciergeService, get_concierge
from ..schemas.ai_schemas import ChatRequest, ChatResponse
from .deps import dashboard_or_error


router = APIRouter(prefix="/api/concierge/sessions", tags=["Concierge Chat"])


@router.post("/{session_id}/chat", response_model=ChatResponse)
async def send_message(
    session_id: str,
    request: ChatRequest,
    concierge: ConciergeService = Depends(get_concierge),
):
    """
    Send a message to the concierge.
    A blank message is ignored: no reply, transcript unchanged.
    """
    dashboard = dashboard_or_error(concierge, session_id)
    reply = await dashboard.send_chat(request.message)
    return ChatResponse(reply=reply, transcript=dashboard.transcript)


@router.get("/{session_id}/chat", response_model=ChatResponse)
async def get_transcript(session_id: str, concierge: ConciergeService = Depends(get_concierge)):
    dashboard = dashboard_or_error(concierge, session_id)
    return ChatResponse(transcript=dashboard.transcript)
