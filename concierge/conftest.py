"""
Shared test fixtures
A scripted generation service behind httpx.MockTransport, so no test
touches the network.
"""

import asyncio
import json
import os
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

# keep tests off any local Redis
os.environ.setdefault("REDIS_ENABLED", "false")

import httpx
import pytest

from concierge.agents.concierge_service import ConciergeService
from concierge.interfaces.booking_directory import BookingDirectory
from concierge.interfaces.credential_store import CredentialStore
from concierge.llm.generators import ContentGenerators
from concierge.llm.transport import GenerationTransport
from concierge.schemas.ai_schemas import TravelStyle

TODAY = date(2026, 10, 19)
BASE_URL = "https://gemini.test/v1beta/models"
PNG_B64 = "iVBORw0KGgo="


def text_response(text: str) -> Dict[str, Any]:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def image_response(data: str = PNG_B64, mime: str = "image/png") -> Dict[str, Any]:
    return {"candidates": [{"content": {"parts": [{"inlineData": {"mimeType": mime, "data": data}}]}}]}


def classify(payload: Dict[str, Any]) -> str:
    """Which generator produced this request"""
    if "safetySettings" in payload:
        return "image"
    if "systemInstruction" in payload:
        return "chat"
    prompt = payload["contents"][-1]["parts"][0]["text"]
    if "cultural fact" in prompt:
        return "insight"
    if "travel quote" in prompt:
        return "caption"
    if "itinerary" in prompt:
        return "itinerary"
    if "Must-See" in prompt:
        return "attractions"
    return "text"


class FakeGemini:
    """
    Records every request and answers per request kind.

    replies[kind] may be a dict (JSON body), an httpx.Response, or a
    callable taking the payload and returning either.
    """

    def __init__(self):
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.requests: List[httpx.Request] = []
        self.replies: Dict[str, Any] = {
            "insight": text_response("A fine insight."),
            "caption": text_response('"Sun, sand and stillness."'),
            "itinerary": text_response("## Day 1\n- Explore"),
            "attractions": text_response("{}"),
            "chat": text_response("Happy to help."),
            "image": image_response(),
            "text": text_response("ok"),
        }
        self.failing: Set[str] = set()
        self.gate: Optional[asyncio.Event] = None

    async def handler(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        kind = classify(payload)
        self.calls.append((kind, payload))
        self.requests.append(request)

        if self.gate is not None:
            await self.gate.wait()
        if kind in self.failing:
            return httpx.Response(500, text="upstream error")

        reply = self.replies[kind]
        if callable(reply):
            reply = reply(payload)
        if isinstance(reply, httpx.Response):
            return reply
        return httpx.Response(200, json=reply)

    def count(self, kind: Optional[str] = None) -> int:
        if kind is None:
            return len(self.calls)
        return sum(1 for k, _ in self.calls if k == kind)

    def prompts(self, kind: str) -> List[str]:
        return [p["contents"][-1]["parts"][0]["text"] for k, p in self.calls if k == kind]


def make_transport(fake: FakeGemini, api_key: str = "test-key") -> GenerationTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(fake.handler))
    return GenerationTransport(api_key=api_key, base_url=BASE_URL, client=client)


@pytest.fixture
def fake_gemini() -> FakeGemini:
    return FakeGemini()


@pytest.fixture
def transport(fake_gemini) -> GenerationTransport:
    return make_transport(fake_gemini)


@pytest.fixture
def offline_transport(fake_gemini) -> GenerationTransport:
    return make_transport(fake_gemini, api_key="")


@pytest.fixture
def generators(transport) -> ContentGenerators:
    return ContentGenerators(transport)


@pytest.fixture
def directory() -> BookingDirectory:
    return BookingDirectory(today=TODAY)


@pytest.fixture
def credentials() -> CredentialStore:
    return CredentialStore(configured="test-key", use_redis=False)


@pytest.fixture
def concierge(credentials, directory, transport) -> ConciergeService:
    return ConciergeService(credentials=credentials, directory=directory, transport=transport)


@pytest.fixture
def start(concierge) -> Callable:
    """Start a journey for an order id"""
    def _start(order_id: str, style: TravelStyle = TravelStyle.SOLO, name: str = "Alex"):
        return concierge.start_session(order_id, name, style)
    return _start
