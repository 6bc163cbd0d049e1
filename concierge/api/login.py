# api/login.py
"""
Login API
Booking lookup, avatar generation and journey start
"""

from typing import List
from fastapi import APIRouter, Depends
from loguru import logger

from ..agents.concierge_service import ConciergeError, ConciergeService, get_concierge
from ..schemas.ai_schemas import (
    AvatarRequest,
    AvatarResponse,
    Booking,
    BookingLookupRequest,
    SessionCreateRequest,
    SessionResponse,
)
from .deps import http_error, session_response


router = APIRouter(prefix="/api/concierge", tags=["Concierge Login"])


@router.post("/login/lookup", response_model=Booking)
async def lookup_booking(request: BookingLookupRequest, concierge: ConciergeService = Depends(get_concierge)):
    """Find a booking by order id; the entered name becomes the greeting name"""
    try:
        return concierge.find_booking(request.order_id, request.name)
    except ConciergeError as e:
        raise http_error(e)


@router.post("/login/avatar", response_model=AvatarResponse)
async def generate_avatar(request: AvatarRequest, concierge: ConciergeService = Depends(get_concierge)):
    avatar, error = await concierge.generate_avatar(request.travel_style)
    if error:
        logger.info(f"No avatar for {request.travel_style.value}: {error}")
    return AvatarResponse(avatar=avatar, presets=concierge.presets(), error=error)


@router.get("/login/presets", response_model=List[str])
async def list_presets(concierge: ConciergeService = Depends(get_concierge)):
    return concierge.presets()


@router.post("/sessions", response_model=SessionResponse)
async def start_journey(request: SessionCreateRequest, concierge: ConciergeService = Depends(get_concierge)):
    try:
        session = concierge.start_session(
            request.order_id, request.name, request.travel_style, request.avatar
        )
    except ConciergeError as e:
        raise http_error(e)
    return session_response(session)
