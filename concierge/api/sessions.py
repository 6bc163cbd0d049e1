# api/sessions.py
"""
Sessions API
Session lookup and the dashboard: load, attraction selection, refresh
"""

from fastapi import APIRouter, Depends, HTTPException

from ..agents.concierge_service import ConciergeService, get_concierge
from ..schemas.ai_schemas import DashboardState, InsightResponse, SessionResponse
from .deps import dashboard_or_error, session_or_404, session_response


router = APIRouter(prefix="/api/concierge/sessions", tags=["Concierge Sessions"])


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str, concierge: ConciergeService = Depends(get_concierge)):
    return session_response(session_or_404(concierge, session_id))


@router.delete("/{session_id}")
async def end_session(session_id: str, concierge: ConciergeService = Depends(get_concierge)):
    if not concierge.end_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"status": "ended", "session_id": session_id}


# ============================================
# Dashboard
# ============================================

@router.post("/{session_id}/dashboard/load", response_model=DashboardState)
async def load_dashboard(session_id: str, concierge: ConciergeService = Depends(get_concierge)):
    """Attractions, icons and itinerary; later calls return the loaded state"""
    dashboard = dashboard_or_error(concierge, session_id)
    return await dashboard.load()


@router.get("/{session_id}/dashboard", response_model=DashboardState)
async def get_dashboard(session_id: str, concierge: ConciergeService = Depends(get_concierge)):
    return dashboard_or_error(concierge, session_id).state()


@router.post("/{session_id}/attractions/deselect", response_model=DashboardState)
async def return_to_hotel(session_id: str, concierge: ConciergeService = Depends(get_concierge)):
    dashboard = dashboard_or_error(concierge, session_id)
    dashboard.deselect()
    return dashboard.state()


@router.post("/{session_id}/attractions/{attraction_id}/select", response_model=InsightResponse)
async def select_attraction(
    session_id: str,
    attraction_id: int,
    concierge: ConciergeService = Depends(get_concierge),
):
    dashboard = dashboard_or_error(concierge, session_id)
    attraction = dashboard.find_attraction(attraction_id)
    if attraction is None:
        raise HTTPException(status_code=404, detail=f"Attraction {attraction_id} not found")

    insight = await dashboard.select_attraction(attraction)
    return InsightResponse(
        attraction=attraction,
        insight=insight,
        map_url=dashboard.map_url,
        directions_url=dashboard.directions_url() or "",
        image=dashboard.image_for(attraction),
    )


@router.post("/{session_id}/refresh", response_model=DashboardState)
async def refresh_content(session_id: str, concierge: ConciergeService = Depends(get_concierge)):
    """Forget cached insights so the next selection generates fresh text"""
    dashboard = dashboard_or_error(concierge, session_id)
    dashboard.refresh()
    return dashboard.state()
