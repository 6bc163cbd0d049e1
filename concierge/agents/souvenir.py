# agents/souvenir.py
"""
Souvenir Coordinator
Post-checkout postcard: a short caption and an illustrated postcard,
generated concurrently and kept for the rest of the session.
"""

import asyncio
from typing import Optional
from loguru import logger

from ..cache.content_cache import InFlightRegistry
from ..llm.generators import ContentGenerators
from ..schemas.ai_schemas import SouvenirContent, UserSession


class SouvenirCoordinator:

    def __init__(self, session: UserSession, generators: ContentGenerators):
        self.session = session
        self.generators = generators
        self._content: Optional[SouvenirContent] = None
        self._inflight = InFlightRegistry()

    async def load(self) -> SouvenirContent:
        if self._content is None:
            self._content = await self._inflight.run_once("souvenir", self._generate)
        return self._content

    async def _generate(self) -> SouvenirContent:
        booking = self.session.booking
        style = self.session.travel_style
        logger.info(f"Generating souvenir for order {booking.order_id}")

        caption, postcard = await asyncio.gather(
            self.generators.generate_souvenir_caption(booking.location, style),
            self.generators.generate_postcard_image(booking.hotel_name, booking.location, style),
        )
        if postcard is None:
            logger.info("No postcard image, showing the hotel background instead")

        return SouvenirContent(
            caption=caption,
            postcard_image=postcard,
            background_image=booking.background_image,
            avatar=self.session.avatar,
        )
