# api/souvenir.py
"""
Souvenir API
Postcard for completed trips
"""

from fastapi import APIRouter, Depends

from ..agents.concierge_service import ConciergeService, get_concierge
from ..schemas.ai_schemas import SouvenirContent
from .deps import souvenir_or_error


router = APIRouter(prefix="/api/concierge/sessions", tags=["Concierge Souvenir"])


@router.get("/{session_id}/souvenir", response_model=SouvenirContent)
async def get_souvenir(session_id: str, concierge: ConciergeService = Depends(get_concierge)):
    return await souvenir_or_error(concierge, session_id).load()
