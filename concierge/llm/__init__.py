# llm/__init__.py
"""
LLM Components Package

Contains the generation layer:
- transport: HTTP calls to the generation service
- normalizer: text / image / JSON extraction from responses
- prompts: prompt templates
- generators: one operation per kind of content, each with a fallback
"""

from .errors import (
    GenerationError,
    GenerationTransportError,
    NetworkUnavailableError,
    MalformedContentError
)
from .transport import GenerationTransport
from .normalizer import extract_text, extract_image_data_uri, extract_json
from .generators import ContentGenerators, attraction_placeholder

__all__ = [
    "GenerationError",
    "GenerationTransportError",
    "NetworkUnavailableError",
    "MalformedContentError",
    "GenerationTransport",
    "extract_text",
    "extract_image_data_uri",
    "extract_json",
    "ContentGenerators",
    "attraction_placeholder"
]
