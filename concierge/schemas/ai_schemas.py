# schemas/ai_schemas.py
"""
Pydantic v2 schemas for the Concierge Service
Domain records (bookings, attractions, sessions) and API payloads
"""

from pydantic import BaseModel, ConfigDict, Field, computed_field
from typing import Optional, List, Dict
from datetime import date, datetime
from enum import Enum


# ============================================
# Enums
# ============================================

class TravelStyle(str, Enum):
    BUSINESS = "Business"
    FAMILY = "Family"
    SOLO = "Solo"
    LUXURY = "Luxury"


class TripStatus(str, Enum):
    UPCOMING = "UPCOMING"
    DURING_STAY = "DURING_STAY"
    COMPLETED = "COMPLETED"


class AttractionCategory(str, Enum):
    NEARBY = "Nearby"
    MUST_SEE = "Must-See"


class Speaker(str, Enum):
    GUEST = "guest"
    CONCIERGE = "concierge"


class Screen(str, Enum):
    LOGIN = "login"
    DASHBOARD = "dashboard"
    SOUVENIR = "souvenir"


# ============================================
# Booking & Attractions
# ============================================

class Booking(BaseModel):
    """A hotel reservation; immutable once looked up"""
    model_config = ConfigDict(frozen=True)

    order_id: str
    guest_name: str  # last name on the reservation
    first_name: str  # display name
    hotel_name: str
    location: str
    check_in_date: date
    check_out_date: date
    background_image: str = ""

    @property
    def city(self) -> str:
        """City part of the location ("Tokyo, Japan" -> "Tokyo")"""
        return self.location.split(",")[0].strip()


class Attraction(BaseModel):
    """A point of interest shown on the dashboard"""
    id: int
    name: str
    type: str
    category: AttractionCategory
    icon: str = "place"
    description: str = ""
    image_url: str = ""


# ============================================
# Session & Chat
# ============================================

class ChatTurn(BaseModel):
    """One transcript entry"""
    speaker: Speaker
    text: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class UserSession(BaseModel):
    """Created once the guest starts their journey; a new login makes a new session"""
    model_config = ConfigDict(frozen=True)

    session_id: str
    booking: Booking
    travel_style: TravelStyle
    status: TripStatus
    avatar: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def screen(self) -> Screen:
        if self.status == TripStatus.COMPLETED:
            return Screen.SOUVENIR
        return Screen.DASHBOARD


# ============================================
# Coordinator snapshots
# ============================================

class DashboardState(BaseModel):
    """Everything the dashboard screen renders for one session"""
    attractions: List[Attraction] = Field(default_factory=list)
    nearby: List[Attraction] = Field(default_factory=list)
    must_see: List[Attraction] = Field(default_factory=list)
    images: Dict[int, str] = Field(default_factory=dict)  # id -> data URI / URL / placeholder
    itinerary: str = ""
    selected: Optional[Attraction] = None
    insight: str = ""
    map_url: str = ""
    transcript: List[ChatTurn] = Field(default_factory=list)
    loading_attractions: bool = False
    loading_itinerary: bool = False
    loading_insight: bool = False


class SouvenirContent(BaseModel):
    """Postcard shown after checkout"""
    caption: str
    postcard_image: Optional[str] = None
    background_image: str = ""
    avatar: Optional[str] = None

    @computed_field
    @property
    def display_image(self) -> str:
        return self.postcard_image or self.background_image


# ============================================
# API Requests / Responses
# ============================================

class BookingLookupRequest(BaseModel):
    order_id: str = Field(..., min_length=1, max_length=32)
    name: str = Field("", max_length=100, description="Guest name as entered on the login screen")


class AvatarRequest(BaseModel):
    travel_style: TravelStyle = TravelStyle.SOLO


class AvatarResponse(BaseModel):
    avatar: Optional[str] = None
    presets: List[str] = Field(default_factory=list)
    error: Optional[str] = None


class SessionCreateRequest(BaseModel):
    order_id: str = Field(..., min_length=1, max_length=32)
    name: str = Field(..., max_length=100)
    travel_style: TravelStyle = TravelStyle.SOLO
    avatar: Optional[str] = None


class SessionResponse(BaseModel):
    session_id: str
    booking: Booking
    travel_style: TravelStyle
    status: TripStatus
    screen: Screen
    avatar: Optional[str] = None


class InsightResponse(BaseModel):
    attraction: Attraction
    insight: str
    map_url: str
    directions_url: str
    image: str


class ChatRequest(BaseModel):
    message: str = Field(..., max_length=2000, description="Guest's message")


class ChatResponse(BaseModel):
    reply: Optional[str] = None
    transcript: List[ChatTurn] = Field(default_factory=list)


class CredentialUpdate(BaseModel):
    api_key: str = Field("", max_length=512)


class CredentialStatus(BaseModel):
    configured: bool
    source: str  # "override", "environment" or "none"


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    credential_configured: bool
    redis: str
    active_sessions: int
    timestamp: datetime = Field(default_factory=datetime.utcnow)
