# llm/normalizer.py
"""
Response Normalizer
Turns the loosely-structured envelopes returned by the generation service
into plain text, an image data URI, or parsed JSON.

Missing text or images are normal outcomes (empty string / None).
Only extract_json raises, and only MalformedContentError.
"""

import json
import re
from typing import Any, Dict, Iterator, List, Optional, Union

from .errors import MalformedContentError


_FENCE_RE = re.compile(r"```[ \t]*([A-Za-z0-9_-]*)[ \t]*\r?\n?(.*?)```", re.DOTALL)
DEFAULT_IMAGE_MIME = "image/png"


def _parts(raw: Any) -> Iterator[Dict[str, Any]]:
    """Yield content parts of the first candidate"""
    if not isinstance(raw, dict):
        return
    candidates = raw.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return
    first = candidates[0]
    if not isinstance(first, dict):
        return
    content = first.get("content")
    if not isinstance(content, dict):
        return
    parts = content.get("parts")
    if not isinstance(parts, list):
        return
    for part in parts:
        if isinstance(part, dict):
            yield part


def extract_text(raw: Any) -> str:
    """Concatenate every text part of the first candidate ("" when none)"""
    texts = [part["text"] for part in _parts(raw) if isinstance(part.get("text"), str)]
    return "".join(texts)


def _inline_to_data_uri(inline: Any) -> Optional[str]:
    if not isinstance(inline, dict):
        return None
    data = inline.get("data")
    if not isinstance(data, str) or not data:
        return None
    mime = inline.get("mimeType") or inline.get("mime_type") or DEFAULT_IMAGE_MIME
    return f"data:{mime};base64,{data}"


def _image_entry_to_reference(entry: Any) -> Optional[str]:
    """Array entries may be a URL string, {url}, {b64_json} or {inlineData}"""
    if isinstance(entry, str) and entry:
        return entry
    if not isinstance(entry, dict):
        return None
    if isinstance(entry.get("url"), str) and entry["url"]:
        return entry["url"]
    if isinstance(entry.get("b64_json"), str) and entry["b64_json"]:
        return f"data:{DEFAULT_IMAGE_MIME};base64,{entry['b64_json']}"
    return _inline_to_data_uri(entry.get("inlineData") or entry.get("inline_data"))


def extract_image_data_uri(raw: Any) -> Optional[str]:
    """
    Find the first image in a response.

    Order:
        1. inlineData parts of the first candidate
        2. {"image": {"url": ...}}
        3. {"images": [...]}
        4. {"data": [...]}

    Returns:
        data URI or URL, None if the response holds no image
    """
    for part in _parts(raw):
        uri = _inline_to_data_uri(part.get("inlineData") or part.get("inline_data"))
        if uri:
            return uri

    if not isinstance(raw, dict):
        return None

    image = raw.get("image")
    if isinstance(image, dict) and isinstance(image.get("url"), str) and image["url"]:
        return image["url"]

    for field in ("images", "data"):
        entries = raw.get(field)
        if isinstance(entries, list):
            for entry in entries:
                reference = _image_entry_to_reference(entry)
                if reference:
                    return reference

    return None


def _first_object_span(text: str) -> Optional[str]:
    """Return the first balanced top-level {...} span, skipping braces inside strings"""
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for index in range(start, len(text)):
            char = text[index]
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
                continue
            if char == '"':
                in_string = True
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return text[start:index + 1]
        # unbalanced from here on; try the next opening brace
        start = text.find("{", start + 1)
    return None


def extract_json(text: str) -> Union[Dict[str, Any], List[Any]]:
    """
    Parse JSON out of model text.

    Order: the whole text as bare JSON (object or array), then the first
    fenced block, then the first balanced {...} span.

    Raises:
        MalformedContentError: nothing parseable was found
    """
    if not isinstance(text, str) or not text.strip():
        raise MalformedContentError("Empty response where JSON was expected", raw=text or "")

    stripped = text.strip()
    try:
        return json.loads(stripped)
    except ValueError:
        pass

    fence = _FENCE_RE.search(text)
    if fence:
        candidate = fence.group(2).strip()
    else:
        candidate = _first_object_span(text) or stripped

    try:
        return json.loads(candidate)
    except ValueError as e:
        raise MalformedContentError(f"Response is not valid JSON: {e}", raw=text) from e
