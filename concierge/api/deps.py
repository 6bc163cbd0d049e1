# api/deps.py
"""
Shared lookups for the routers: concierge errors become HTTP errors here.
"""

from fastapi import HTTPException

from ..agents.concierge_service import (
    BookingNotFoundError,
    ConciergeError,
    ConciergeService,
    InvalidGuestNameError,
    SessionNotFoundError,
    WrongScreenError,
)
from ..agents.dashboard import DashboardCoordinator
from ..agents.souvenir import SouvenirCoordinator
from ..schemas.ai_schemas import SessionResponse, UserSession


def http_error(error: ConciergeError) -> HTTPException:
    if isinstance(error, InvalidGuestNameError):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, (BookingNotFoundError, SessionNotFoundError)):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, WrongScreenError):
        return HTTPException(status_code=409, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))


def session_or_404(concierge: ConciergeService, session_id: str) -> UserSession:
    try:
        return concierge.get_session(session_id)
    except ConciergeError as e:
        raise http_error(e)


def dashboard_or_error(concierge: ConciergeService, session_id: str) -> DashboardCoordinator:
    try:
        return concierge.dashboard(session_id)
    except ConciergeError as e:
        raise http_error(e)


def souvenir_or_error(concierge: ConciergeService, session_id: str) -> SouvenirCoordinator:
    try:
        return concierge.souvenir(session_id)
    except ConciergeError as e:
        raise http_error(e)


def session_response(session: UserSession) -> SessionResponse:
    return SessionResponse(
        session_id=session.session_id,
        booking=session.booking,
        travel_style=session.travel_style,
        status=session.status,
        screen=session.screen,
        avatar=session.avatar,
    )
