# agents/dashboard.py
"""
Dashboard Coordinator
Owns one session's dashboard: attraction list, icon images, itinerary,
selected attraction with its insight, map, and the concierge chat.

Load sequence:
    attractions ──> image fan-out (displayed subset only)
    itinerary   ──┘ (runs concurrently with both)

Caches:
- insights: (location, attraction name) -> text, cleared by refresh
- images: attraction id -> data URI / URL, kept across refresh
"""

import asyncio
from typing import List, Optional, Sequence, Tuple
from urllib.parse import quote
from loguru import logger

from ..cache.content_cache import ContentCache, InFlightRegistry
from ..config import settings
from ..interfaces.booking_directory import BookingDirectory
from ..llm.generators import INSIGHT_FALLBACKS, ContentGenerators, attraction_placeholder
from ..schemas.ai_schemas import (
    Attraction,
    AttractionCategory,
    Booking,
    ChatTurn,
    DashboardState,
    Speaker,
    UserSession,
)


def _encode(text: str) -> str:
    return quote(text, safe="!~*'()")


def hotel_map_url(booking: Booking) -> str:
    query = _encode(f"{booking.hotel_name} {booking.location}")
    return f"https://maps.google.com/maps?q={query}&t=&z=14&ie=UTF8&iwloc=&output=embed"


def attraction_map_url(name: str, location: str) -> str:
    query = _encode(f"{name} {location}")
    return f"https://maps.google.com/maps?q={query}&t=&z=15&ie=UTF8&iwloc=&output=embed"


def directions_url(name: str, location: str) -> str:
    """External directions link; no route is computed here"""
    return f"https://www.google.com/maps/dir/?api=1&destination={_encode(f'{name} {location}')}"


class DashboardCoordinator:
    """
    Sequences and parallelizes generator calls for one session.

    Usage:
        dashboard = DashboardCoordinator(session, generators, directory)
        await dashboard.load()
        text = await dashboard.select_attraction(dashboard.find_attraction(4))
    """

    def __init__(
        self,
        session: UserSession,
        generators: ContentGenerators,
        directory: BookingDirectory,
        shared_caches: Sequence[ContentCache] = (),
        displayed_per_category: Optional[int] = None,
        chat_history_limit: Optional[int] = None,
    ):
        self.session = session
        self.booking = session.booking
        self.generators = generators
        self.directory = directory
        self.displayed_per_category = (
            settings.DISPLAYED_PER_CATEGORY if displayed_per_category is None else displayed_per_category
        )
        self.chat_history_limit = (
            settings.CHAT_HISTORY_LIMIT if chat_history_limit is None else chat_history_limit
        )

        self.insights: ContentCache[str] = ContentCache("insight")
        self.images: ContentCache[str] = ContentCache("image")
        self._inflight = InFlightRegistry()
        self._load_flight = InFlightRegistry()
        # refresh also clears these (e.g. the avatar memo shared with login)
        self._shared_caches = list(shared_caches)

        self.attractions: List[Attraction] = []
        self.itinerary = ""
        self.selected: Optional[Attraction] = None
        self.insight = ""
        self.map_url = hotel_map_url(self.booking)
        self.transcript: List[ChatTurn] = []

        self.loaded = False
        self.loading_attractions = False
        self.loading_itinerary = False
        self.loading_insight = False

    # ============================================
    # Load
    # ============================================

    async def load(self) -> DashboardState:
        """Load once per session; concurrent and repeated calls share the first load"""
        if not self.loaded:
            await self._load_flight.run_once("load", self._load)
        return self.state()

    async def _load(self):
        logger.info(f"Loading dashboard for order {self.booking.order_id} ({self.booking.location})")
        self.loading_attractions = True
        self.loading_itinerary = True
        await asyncio.gather(self._load_attractions(), self._load_itinerary())
        self.loaded = True

    async def _load_attractions(self):
        try:
            attractions = self.directory.attractions_for(self.booking.order_id)
            if attractions is None:
                attractions = await self.generators.generate_dynamic_attractions(
                    self.booking.location, self.session.travel_style
                )
            self.attractions = attractions
        finally:
            self.loading_attractions = False

        await self.fan_out_images()

    async def _load_itinerary(self):
        try:
            self.itinerary = await self.generators.generate_itinerary(
                self.booking.location,
                self.session.travel_style,
                self.booking.check_in_date,
                self.booking.check_out_date,
            )
        finally:
            self.loading_itinerary = False

    def displayed(self) -> Tuple[List[Attraction], List[Attraction]]:
        """First N Nearby and first N Must-See, in list order"""
        limit = self.displayed_per_category
        nearby = [a for a in self.attractions if a.category == AttractionCategory.NEARBY][:limit]
        must_see = [a for a in self.attractions if a.category == AttractionCategory.MUST_SEE][:limit]
        return nearby, must_see

    async def fan_out_images(self) -> int:
        """
        Generate icons for displayed attractions that have neither a cached
        nor a pre-supplied image. Each task writes its own cache entry as it
        finishes; the batch is joined at the end. Returns the number stored.
        """
        nearby, must_see = self.displayed()
        targets = [a for a in nearby + must_see if a.id not in self.images and not a.image_url]
        if not targets:
            return 0

        version = self.images.version
        logger.info(f"Generating {len(targets)} attraction images")

        async def generate(attraction: Attraction) -> bool:
            image = await self.generators.generate_attraction_image(attraction.type, attraction.name)
            if not image:
                return False
            return self.images.put(attraction.id, image, version=version)

        results = await asyncio.gather(*(generate(a) for a in targets))
        stored = sum(1 for ok in results if ok)
        if stored < len(targets):
            logger.warning(f"{len(targets) - stored} attraction images unavailable, using placeholders")
        return stored

    def image_for(self, attraction: Attraction) -> str:
        """Generated image, else the pre-supplied URL, else a placeholder"""
        return (
            self.images.snapshot().get(attraction.id)
            or attraction.image_url
            or attraction_placeholder(attraction.type, attraction.name)
        )

    # ============================================
    # Selection & Insights
    # ============================================

    def find_attraction(self, attraction_id: int) -> Optional[Attraction]:
        for attraction in self.attractions:
            if attraction.id == attraction_id:
                return attraction
        return None

    def insight_key(self, attraction: Attraction) -> Tuple[str, str]:
        return (self.booking.location.lower(), attraction.name)

    async def select_attraction(self, attraction: Attraction) -> str:
        """Select an attraction, move the map to it and return its insight"""
        self.selected = attraction
        self.map_url = attraction_map_url(attraction.name, self.booking.location)

        key = self.insight_key(attraction)
        cached = self.insights.get(key)
        if cached is not None:
            self.insight = cached
            self.loading_insight = False
            return cached

        self.insight = ""
        self.loading_insight = True
        version = self.insights.version

        async def generate() -> str:
            text = await self.generators.generate_insight(
                attraction.name, self.booking.location, self.session.travel_style
            )
            # fallback text is never cached
            if text not in INSIGHT_FALLBACKS:
                self.insights.put(key, text, version=version)
            return text

        text = await self._inflight.run_once(key, generate)

        # the guest may have moved on while this was generating
        if self.selected is not None and self.selected.id == attraction.id:
            self.insight = text
            self.loading_insight = False
        return text

    def deselect(self):
        """Return to the hotel view; caches are untouched"""
        self.selected = None
        self.insight = ""
        self.loading_insight = False
        self.map_url = hotel_map_url(self.booking)

    def directions_url(self) -> Optional[str]:
        if self.selected is None:
            return None
        return directions_url(self.selected.name, self.booking.location)

    def refresh(self):
        """
        Drop cached insights and any in-flight insight generations.
        Generations already running still finish, but their cache writes are discarded.

        The shared caches (the avatar memo) belong to the whole service, so a
        refresh in one session clears them for every guest.
        """
        self.insights.clear()
        self._inflight.clear()
        for cache in self._shared_caches:
            cache.clear()
        logger.info(f"Refreshed content caches for session {self.session.session_id}")

    # ============================================
    # Chat
    # ============================================

    async def send_chat(self, message: str) -> Optional[str]:
        """Append the guest turn, ask the concierge, append the reply. Blank input is ignored."""
        text = (message or "").strip()
        if not text:
            return None

        history = list(self.transcript)
        if self.chat_history_limit > 0:
            history = history[-self.chat_history_limit:]

        self.transcript.append(ChatTurn(speaker=Speaker.GUEST, text=text))
        reply = await self.generators.chat(text, history, self.booking.hotel_name)
        self.transcript.append(ChatTurn(speaker=Speaker.CONCIERGE, text=reply))
        return reply

    # ============================================
    # Snapshot
    # ============================================

    def state(self) -> DashboardState:
        nearby, must_see = self.displayed()
        return DashboardState(
            attractions=list(self.attractions),
            nearby=nearby,
            must_see=must_see,
            images={a.id: self.image_for(a) for a in nearby + must_see},
            itinerary=self.itinerary,
            selected=self.selected,
            insight=self.insight,
            map_url=self.map_url,
            transcript=list(self.transcript),
            loading_attractions=self.loading_attractions,
            loading_itinerary=self.loading_itinerary,
            loading_insight=self.loading_insight,
        )
