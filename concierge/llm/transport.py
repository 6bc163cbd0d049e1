# llm/transport.py
"""
Generation Transport
Builds request payloads for the three request shapes the concierge uses
(plain text, image, multi-turn chat) and posts them to the generation
service's generateContent endpoint.

One HTTP call per invocation. No retries: a failed call raises and the
calling generator decides what the guest sees.
"""

from typing import Any, Dict, List, Optional, Sequence

import httpx
from loguru import logger

from ..config import settings
from ..schemas.ai_schemas import ChatTurn, Speaker
from .errors import GenerationTransportError, MalformedContentError, NetworkUnavailableError


TEXT_TEMPERATURE = 0.7
IMAGE_TEMPERATURE = 0.6
TOP_K = 20
TOP_P = 0.8

SAFETY_THRESHOLD = "BLOCK_MEDIUM_AND_ABOVE"
SAFETY_CATEGORIES = [
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
]

_ROLES = {Speaker.GUEST: "user", Speaker.CONCIERGE: "model"}


# ============================================
# Payload builders
# ============================================

def _generation_config(max_tokens: int, temperature: float) -> Dict[str, Any]:
    return {
        "temperature": temperature,
        "topK": TOP_K,
        "topP": TOP_P,
        "maxOutputTokens": max_tokens,
    }


def build_text_payload(prompt: str, max_tokens: int) -> Dict[str, Any]:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": _generation_config(max_tokens, TEXT_TEMPERATURE),
    }


def build_image_payload(prompt: str, max_tokens: int) -> Dict[str, Any]:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": _generation_config(max_tokens, IMAGE_TEMPERATURE),
        "safetySettings": [
            {"category": category, "threshold": SAFETY_THRESHOLD}
            for category in SAFETY_CATEGORIES
        ],
    }


def build_chat_payload(
    history: Sequence[ChatTurn],
    new_message: str,
    max_tokens: int,
    system_instruction: Optional[str] = None,
) -> Dict[str, Any]:
    contents: List[Dict[str, Any]] = [
        {"role": _ROLES[turn.speaker], "parts": [{"text": turn.text}]}
        for turn in history
    ]
    contents.append({"role": "user", "parts": [{"text": new_message}]})

    payload: Dict[str, Any] = {
        "contents": contents,
        "generationConfig": _generation_config(max_tokens, TEXT_TEMPERATURE),
    }
    if system_instruction:
        payload["systemInstruction"] = {"parts": [{"text": system_instruction}]}
    return payload


# ============================================
# Transport
# ============================================

class GenerationTransport:
    """
    Async client for the generation service.

    The credential is injected at construction and can be swapped later with
    update_credential(). The transport never checks whether a credential is
    present; generators short-circuit before calling it.

    Usage:
        transport = GenerationTransport(api_key="...")
        raw = await transport.send_text("Say hello", max_tokens=64)
    """

    def __init__(
        self,
        api_key: str = "",
        base_url: Optional[str] = None,
        text_model: Optional[str] = None,
        chat_model: Optional[str] = None,
        image_model: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._api_key = api_key.strip()
        self.base_url = (base_url or settings.GEMINI_BASE_URL).rstrip("/")
        self.text_model = text_model or settings.GEMINI_TEXT_MODEL
        self.chat_model = chat_model or settings.GEMINI_CHAT_MODEL
        self.image_model = image_model or settings.GEMINI_IMAGE_MODEL
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def has_credential(self) -> bool:
        return bool(self._api_key)

    def update_credential(self, api_key: Optional[str]):
        """Re-inject the credential (empty string or None clears it)"""
        self._api_key = (api_key or "").strip()
        logger.info(f"Generation credential {'updated' if self._api_key else 'cleared'}")

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    def endpoint(self, model: str) -> str:
        return f"{self.base_url}/{model}:generateContent"

    async def send_text(self, prompt: str, max_tokens: int) -> Dict[str, Any]:
        return await self._post(self.text_model, build_text_payload(prompt, max_tokens))

    async def send_image(self, prompt: str, max_tokens: int) -> Dict[str, Any]:
        return await self._post(self.image_model, build_image_payload(prompt, max_tokens))

    async def send_chat(
        self,
        history: Sequence[ChatTurn],
        new_message: str,
        system_instruction: Optional[str] = None,
        max_tokens: int = 256,
    ) -> Dict[str, Any]:
        payload = build_chat_payload(history, new_message, max_tokens, system_instruction)
        return await self._post(self.chat_model, payload)

    async def _post(self, model: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = self.endpoint(model)
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = await self._get_client().post(url, json=payload, headers=headers)
        except httpx.RequestError as e:
            logger.error(f"Cannot reach generation service at {url}: {e}")
            raise NetworkUnavailableError(f"Cannot reach generation service: {e}") from e

        if not response.is_success:
            logger.warning(f"Generation service error {response.status_code} from {model}")
            raise GenerationTransportError(response.status_code, response.text, url)

        try:
            return response.json()
        except ValueError as e:
            raise MalformedContentError("Generation service returned a non-JSON body", response.text) from e

    async def aclose(self):
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
