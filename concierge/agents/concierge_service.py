# agents/concierge_service.py
"""
Concierge Service
Front door for the API: login flow (booking lookup, avatar, journey
start), per-session coordinators and the API credential.

Owns the single transport and generator set shared by every session,
so a credential change reaches all of them at once.
"""

from typing import List, Optional, Tuple
from loguru import logger

from ..cache.content_cache import ContentCache
from ..config import settings
from ..interfaces.booking_directory import BookingDirectory, PRESET_AVATARS
from ..interfaces.credential_store import CredentialStore
from ..interfaces.session_store import SessionStore
from ..llm.generators import ContentGenerators
from ..llm.transport import GenerationTransport
from ..schemas.ai_schemas import Booking, Screen, TravelStyle, UserSession
from .dashboard import DashboardCoordinator
from .souvenir import SouvenirCoordinator


NAME_REQUIRED = "Please enter your name."
BOOKING_NOT_FOUND = "We could not find a booking with this Order ID. Please check and try again."
AVATAR_UNAVAILABLE = "Could not generate AI avatar. Please select a preset."


class ConciergeError(Exception):
    """Base error for the login and session flow"""


class InvalidGuestNameError(ConciergeError, ValueError):
    pass


class BookingNotFoundError(ConciergeError, LookupError):
    pass


class SessionNotFoundError(ConciergeError, LookupError):
    pass


class WrongScreenError(ConciergeError):
    """The requested screen does not match the trip status"""


class ConciergeService:
    """
    Usage:
        concierge = ConciergeService()
        booking = concierge.find_booking("1002", "Alex")
        avatar, error = await concierge.generate_avatar(TravelStyle.LUXURY)
        session = concierge.start_session("1002", "Alex", TravelStyle.LUXURY, avatar)
        state = await concierge.dashboard(session.session_id).load()
    """

    def __init__(
        self,
        credentials: Optional[CredentialStore] = None,
        directory: Optional[BookingDirectory] = None,
        transport: Optional[GenerationTransport] = None,
        sessions: Optional[SessionStore] = None,
    ):
        self.credentials = credentials or CredentialStore()
        self.directory = directory or BookingDirectory()
        self.transport = transport or GenerationTransport(timeout=settings.generation_timeout)
        self.transport.update_credential(self.credentials.get())
        self.generators = ContentGenerators(self.transport)
        self.sessions = sessions or SessionStore()
        self.avatar_memo: ContentCache[str] = ContentCache("avatar")

    # ============================================
    # Login
    # ============================================

    def find_booking(self, order_id: str, name: str) -> Booking:
        """Booking for the order id, greeted by the name the guest typed"""
        name = (name or "").strip()
        if not name:
            raise InvalidGuestNameError(NAME_REQUIRED)

        booking = self.directory.validate_user(order_id, name)
        if booking is None:
            raise BookingNotFoundError(BOOKING_NOT_FOUND)

        return booking.model_copy(update={"first_name": name})

    def presets(self) -> List[str]:
        return list(PRESET_AVATARS)

    async def generate_avatar(self, style: TravelStyle) -> Tuple[Optional[str], Optional[str]]:
        """
        Always generates a fresh avatar. When that fails, the last avatar
        generated for the style is reused. Returns (avatar, error message).
        """
        avatar = await self.generators.generate_avatar(style)
        if avatar:
            self.avatar_memo.put(style.value, avatar)
            return avatar, None

        memo = self.avatar_memo.get(style.value)
        if memo:
            logger.info(f"Avatar generation failed, reusing the last {style.value} avatar")
            return memo, None
        return None, AVATAR_UNAVAILABLE

    def start_session(
        self,
        order_id: str,
        name: str,
        style: TravelStyle,
        avatar: Optional[str] = None,
    ) -> UserSession:
        booking = self.find_booking(order_id, name)
        session = UserSession(
            session_id=SessionStore.new_session_id(booking.order_id),
            booking=booking,
            travel_style=style,
            status=self.directory.get_trip_status(booking),
            avatar=avatar or PRESET_AVATARS[0],
        )
        self.sessions.save_session(session)
        logger.info(f"Journey started for order {booking.order_id}: {session.status.value}, {style.value}")
        return session

    # ============================================
    # Sessions
    # ============================================

    def get_session(self, session_id: str) -> UserSession:
        session = self.sessions.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(f"Session not found: {session_id}")
        return session

    def end_session(self, session_id: str) -> bool:
        return self.sessions.delete_session(session_id)

    def dashboard(self, session_id: str) -> DashboardCoordinator:
        session = self.get_session(session_id)
        if session.screen != Screen.DASHBOARD:
            raise WrongScreenError(f"Trip is {session.status.value}; the dashboard is not available")

        coordinator = self.sessions.get_coordinator(session_id, "dashboard")
        if coordinator is None:
            coordinator = DashboardCoordinator(
                session, self.generators, self.directory, shared_caches=[self.avatar_memo]
            )
            self.sessions.set_coordinator(session_id, "dashboard", coordinator)
        return coordinator

    def souvenir(self, session_id: str) -> SouvenirCoordinator:
        session = self.get_session(session_id)
        if session.screen != Screen.SOUVENIR:
            raise WrongScreenError(f"Trip is {session.status.value}; the souvenir is not available yet")

        coordinator = self.sessions.get_coordinator(session_id, "souvenir")
        if coordinator is None:
            coordinator = SouvenirCoordinator(session, self.generators)
            self.sessions.set_coordinator(session_id, "souvenir", coordinator)
        return coordinator

    # ============================================
    # Credential
    # ============================================

    def set_credential(self, api_key: str):
        self.credentials.set(api_key)
        self.transport.update_credential(self.credentials.get())

    @property
    def credential_configured(self) -> bool:
        return self.credentials.has_credential()

    async def aclose(self):
        await self.transport.aclose()


# Global instance
concierge_service: Optional[ConciergeService] = None


def get_concierge() -> ConciergeService:
    """FastAPI dependency; created on first use"""
    global concierge_service
    if concierge_service is None:
        concierge_service = ConciergeService()
    return concierge_service
