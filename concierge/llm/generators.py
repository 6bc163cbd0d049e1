# llm/generators.py
"""
Content Generators
Each generator builds one prompt, calls the transport, normalizes the
response and owns a static fallback:
- Insight text for an attraction
- Souvenir caption and postcard image
- Avatar and attraction icon images
- Dynamic attraction list (structured JSON)
- Itinerary (markdown)
- Concierge chat replies

No credential -> fallback with zero network calls.
Any GenerationError -> logged, fallback returned.
Generators never cache; the coordinators do.
"""

import base64
import hashlib
from datetime import date
from typing import Any, List, Optional, Sequence, Union

from loguru import logger

from ..schemas.ai_schemas import Attraction, AttractionCategory, ChatTurn, TravelStyle
from .errors import GenerationError
from .normalizer import extract_image_data_uri, extract_json, extract_text
from .prompts import (
    ATTRACTION_IMAGE_PROMPT,
    AVATAR_PROMPT,
    CHAT_SYSTEM_PROMPT,
    DYNAMIC_ATTRACTIONS_PROMPT,
    INSIGHT_PROMPT,
    ITINERARY_PROMPT,
    POSTCARD_IMAGE_PROMPT,
    SOUVENIR_CAPTION_PROMPT,
)
from .transport import GenerationTransport


# ============================================
# Fallbacks
# ============================================

INSIGHT_NO_KEY = "Please configure your API Key to access AI insights."
INSIGHT_FAILED = "Our concierge service is momentarily unavailable."
INSIGHT_EMPTY = "Information unavailable at the moment."
INSIGHT_FALLBACKS = frozenset({INSIGHT_NO_KEY, INSIGHT_FAILED, INSIGHT_EMPTY})

CAPTION_NO_KEY = "To travel is to live."
CAPTION_FAILED = "A moment in time."
CAPTION_EMPTY = "Memories made here."

ITINERARY_NO_KEY = "Itinerary generation offline."
ITINERARY_FAILED = "Itinerary service momentarily unavailable."
ITINERARY_EMPTY = "Could not generate itinerary."

CHAT_NO_KEY = "System offline."
CHAT_FAILED = "I am having trouble connecting to the concierge network."
CHAT_EMPTY = "I'm sorry, I couldn't understand that."

# Output token ceilings per call type
INSIGHT_MAX_TOKENS = 256
CAPTION_MAX_TOKENS = 64
IMAGE_MAX_TOKENS = 2048
ATTRACTIONS_MAX_TOKENS = 1024
ITINERARY_MAX_TOKENS = 1024
CHAT_MAX_TOKENS = 256

DYNAMIC_ID_BASE = 9000
DEFAULT_ICON = "place"

_PLACEHOLDER_COLORS = ["#F4B183", "#A9D18E", "#9DC3E6", "#FFD966", "#C9A0DC", "#F8CBAD"]

StyleLike = Union[TravelStyle, str]


def _style(style: StyleLike) -> str:
    return style.value if isinstance(style, TravelStyle) else str(style)


def attraction_placeholder(attraction_type: str, name: str) -> str:
    """
    Deterministic SVG placeholder for an attraction icon.
    Shown while an icon is being generated, or instead of it when generation fails.
    """
    digest = hashlib.md5(f"{attraction_type}:{name}".encode("utf-8")).hexdigest()
    color = _PLACEHOLDER_COLORS[int(digest[:8], 16) % len(_PLACEHOLDER_COLORS)]
    letter = (attraction_type.strip()[:1] or name.strip()[:1] or "?").upper()
    svg = (
        '<svg xmlns="http://www.w3.org/2000/svg" width="160" height="160" viewBox="0 0 160 160">'
        f'<rect width="160" height="160" rx="24" fill="{color}"/>'
        '<text x="80" y="96" font-family="Helvetica, Arial, sans-serif" font-size="56" '
        f'font-weight="700" fill="#ffffff" text-anchor="middle">{letter}</text>'
        '</svg>'
    )
    encoded = base64.b64encode(svg.encode("utf-8")).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"


def _coerce_category(value: Any) -> AttractionCategory:
    text = str(value or "").strip().lower().replace("_", "-").replace(" ", "-")
    if text in ("must-see", "mustsee", "must"):
        return AttractionCategory.MUST_SEE
    return AttractionCategory.NEARBY


class ContentGenerators:
    """
    All generation operations, bound to one transport.

    Usage:
        generators = ContentGenerators(transport)
        text = await generators.generate_insight("The Bund", "Shanghai, China", TravelStyle.SOLO)
    """

    def __init__(self, transport: GenerationTransport):
        self.transport = transport

    @property
    def available(self) -> bool:
        return self.transport.has_credential

    # ============================================
    # Text
    # ============================================

    async def generate_insight(self, attraction_name: str, location: str, style: StyleLike) -> str:
        """Two-sentence cultural tip about an attraction, in the tone of the travel style"""
        if not self.available:
            return INSIGHT_NO_KEY

        prompt = INSIGHT_PROMPT.format(
            attraction_name=attraction_name, location=location, travel_style=_style(style)
        )
        try:
            raw = await self.transport.send_text(prompt, INSIGHT_MAX_TOKENS)
        except GenerationError as e:
            logger.error(f"Insight generation failed for '{attraction_name}': {e}")
            return INSIGHT_FAILED

        return extract_text(raw).strip() or INSIGHT_EMPTY

    async def generate_souvenir_caption(self, location: str, style: StyleLike) -> str:
        if not self.available:
            return CAPTION_NO_KEY

        prompt = SOUVENIR_CAPTION_PROMPT.format(location=location, travel_style=_style(style))
        try:
            raw = await self.transport.send_text(prompt, CAPTION_MAX_TOKENS)
        except GenerationError as e:
            logger.error(f"Souvenir caption generation failed: {e}")
            return CAPTION_FAILED

        caption = extract_text(raw).strip().strip("\"'“”‘’").strip()
        return caption or CAPTION_EMPTY

    async def generate_itinerary(
        self,
        location: str,
        style: StyleLike,
        check_in: date,
        check_out: date,
    ) -> str:
        """Markdown itinerary: one theme and two activities per day"""
        if not self.available:
            return ITINERARY_NO_KEY

        prompt = ITINERARY_PROMPT.format(
            location=location,
            travel_style=_style(style),
            check_in=check_in.isoformat(),
            check_out=check_out.isoformat(),
        )
        try:
            raw = await self.transport.send_text(prompt, ITINERARY_MAX_TOKENS)
        except GenerationError as e:
            logger.error(f"Itinerary generation failed for {location}: {e}")
            return ITINERARY_FAILED

        return extract_text(raw).strip() or ITINERARY_EMPTY

    async def chat(self, message: str, transcript: Sequence[ChatTurn], hotel_name: str) -> str:
        """
        Concierge chat reply.
        The 50-word limit lives in the system instruction only.
        """
        if not self.available:
            return CHAT_NO_KEY

        system_instruction = CHAT_SYSTEM_PROMPT.format(hotel_name=hotel_name)
        try:
            raw = await self.transport.send_chat(
                transcript, message, system_instruction=system_instruction, max_tokens=CHAT_MAX_TOKENS
            )
        except GenerationError as e:
            logger.error(f"Concierge chat failed: {e}")
            return CHAT_FAILED

        return extract_text(raw).strip() or CHAT_EMPTY

    # ============================================
    # Images
    # ============================================

    async def _generate_image(self, prompt: str, label: str) -> Optional[str]:
        if not self.available:
            return None
        try:
            raw = await self.transport.send_image(prompt, IMAGE_MAX_TOKENS)
        except GenerationError as e:
            logger.error(f"{label} generation failed: {e}")
            return None

        image = extract_image_data_uri(raw)
        if image is None:
            logger.warning(f"{label} generation returned no image")
        return image

    async def generate_postcard_image(self, hotel_name: str, location: str, style: StyleLike) -> Optional[str]:
        prompt = POSTCARD_IMAGE_PROMPT.format(
            hotel_name=hotel_name, location=location, travel_style=_style(style)
        )
        return await self._generate_image(prompt, "Postcard")

    async def generate_avatar(self, style: StyleLike) -> Optional[str]:
        return await self._generate_image(AVATAR_PROMPT.format(travel_style=_style(style)), "Avatar")

    async def generate_attraction_image(self, attraction_type: str, name: str) -> Optional[str]:
        prompt = ATTRACTION_IMAGE_PROMPT.format(attraction_type=attraction_type, attraction_name=name)
        return await self._generate_image(prompt, f"Attraction image ({name})")

    # ============================================
    # Structured
    # ============================================

    async def generate_dynamic_attractions(self, location: str, style: StyleLike) -> List[Attraction]:
        """
        Three "Nearby" and three "Must-See" attractions for a location.
        Malformed or missing JSON yields an empty list.
        """
        if not self.available:
            return []

        prompt = DYNAMIC_ATTRACTIONS_PROMPT.format(location=location, travel_style=_style(style))
        try:
            raw = await self.transport.send_text(prompt, ATTRACTIONS_MAX_TOKENS)
            payload = extract_json(extract_text(raw))
        except GenerationError as e:
            logger.error(f"Dynamic attraction generation failed for {location}: {e}")
            return []

        attractions = self._parse_attractions(payload)
        logger.info(f"Generated {len(attractions)} attractions for {location}")
        return attractions

    def _parse_attractions(self, payload: Any) -> List[Attraction]:
        if isinstance(payload, dict):
            items = payload.get("attractions") or []
        elif isinstance(payload, list):
            items = payload
        else:
            items = []
        if not isinstance(items, list):
            return []

        attractions: List[Attraction] = []
        for item in items:
            if not isinstance(item, dict):
                continue
            name = str(item.get("name") or "").strip()
            if not name:
                continue
            attractions.append(Attraction(
                id=DYNAMIC_ID_BASE + len(attractions),
                name=name,
                type=str(item.get("type") or "Attraction").strip(),
                category=_coerce_category(item.get("category")),
                icon=str(item.get("icon") or DEFAULT_ICON).strip() or DEFAULT_ICON,
                description=str(item.get("description") or "").strip(),
                image_url="",
            ))
        return attractions

