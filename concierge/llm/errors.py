# llm/errors.py
"""
Error taxonomy for the generation layer.
Generators absorb every GenerationError into their fallback value;
nothing here is meant to reach the guest.
"""

from typing import Optional


class GenerationError(RuntimeError):
    """Base error for generation failures."""


class GenerationTransportError(GenerationError):
    """Raised when the generation service answers with a non-success status."""

    def __init__(self, status_code: int, body: str, url: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        self.url = url
        super().__init__(f"Generation service returned {status_code}: {body[:200]}")


class NetworkUnavailableError(GenerationError):
    """Raised when the generation service cannot be reached at all."""


class MalformedContentError(GenerationError):
    """Raised when a response cannot be parsed into the expected shape."""

    def __init__(self, message: str, raw: str = ""):
        self.raw = raw
        super().__init__(message)
