# schemas/__init__.py
"""
Pydantic Schemas Package

Contains all Pydantic v2 models for:
- Domain records (bookings, attractions, sessions, chat turns)
- Coordinator snapshots (dashboard, souvenir)
- API requests/responses
"""

from .ai_schemas import (
    # Enums
    TravelStyle, TripStatus, AttractionCategory, Speaker, Screen,
    # Domain
    Booking, Attraction, ChatTurn, UserSession,
    # Snapshots
    DashboardState, SouvenirContent,
    # API
    BookingLookupRequest, AvatarRequest, AvatarResponse,
    SessionCreateRequest, SessionResponse, InsightResponse,
    ChatRequest, ChatResponse, CredentialUpdate, CredentialStatus, HealthResponse
)

__all__ = [
    # Enums
    "TravelStyle", "TripStatus", "AttractionCategory", "Speaker", "Screen",
    # Domain
    "Booking", "Attraction", "ChatTurn", "UserSession",
    # Snapshots
    "DashboardState", "SouvenirContent",
    # API
    "BookingLookupRequest", "AvatarRequest", "AvatarResponse",
    "SessionCreateRequest", "SessionResponse", "InsightResponse",
    "ChatRequest", "ChatResponse", "CredentialUpdate", "CredentialStatus", "HealthResponse"
]
