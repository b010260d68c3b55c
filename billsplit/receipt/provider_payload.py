"""Parse receipt-scan request payloads and the OCR provider's text reply."""

import json
import re
from dataclasses import dataclass
from typing import Any

DEFAULT_MIME_TYPE = "image/jpeg"
DATA_URL_PATTERN = re.compile(r"^data:([^;]+);base64,(.+)$", re.DOTALL)


@dataclass(frozen=True)
class ImagePayload:
    """Base64 image data plus its MIME type, as sent to the OCR provider."""

    base64: str
    mime_type: str = DEFAULT_MIME_TYPE


def parse_image_payload(image: Any) -> ImagePayload | None:
    """
    Parse the ``image`` field of a scan request.

    Accepts:
    - an object with ``base64``/``data``/``image`` and optional
      ``mimeType``/``mime_type``
    - a ``data:<mime>;base64,<data>`` URL
    - a bare base64 string (assumed JPEG)

    Returns:
        ImagePayload, or None if the value cannot be used
    """
    if not image:
        return None

    if isinstance(image, dict):
        maybe_base64 = image.get("base64") or image.get("data") or image.get("image")
        if isinstance(maybe_base64, str) and maybe_base64.strip():
            mime_type = image.get("mimeType") or image.get("mime_type") or DEFAULT_MIME_TYPE
            return ImagePayload(base64=maybe_base64.strip(), mime_type=str(mime_type))

    if not isinstance(image, str):
        return None

    if image.startswith("data:"):
        match = DATA_URL_PATTERN.match(image)
        if not match:
            return None
        return ImagePayload(base64=match.group(2), mime_type=match.group(1) or DEFAULT_MIME_TYPE)

    return ImagePayload(base64=image)


def _empty_result(raw_text: str) -> dict[str, Any]:
    return {"items": [], "summary": {}, "rawText": raw_text}


def _result_from_json(parsed: Any, raw_text: str) -> dict[str, Any]:
    if isinstance(parsed, list):
        return {"items": parsed, "summary": {}, "rawText": raw_text}
    if isinstance(parsed, dict):
        items = parsed.get("items")
        summary = parsed.get("summary")
        return {
            "items": items if isinstance(items, list) else [],
            "summary": summary if isinstance(summary, dict) else {},
            "rawText": raw_text,
        }
    return _empty_result(raw_text)


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return None


def parse_provider_text(text: str | None) -> dict[str, Any]:
    """
    Parse the provider's free-text reply into ``{items, summary, rawText}``.

    Models are asked for a bare JSON object but sometimes wrap it in prose or
    code fences. Strategy order:
    1. The whole reply as JSON
    2. The outermost ``{...}`` slice
    3. The first ``[...]`` slice, taken as the item list
    Anything else yields no items and an empty summary.
    """
    raw_text = text or ""
    trimmed = raw_text.strip()

    parsed = _loads(trimmed)
    if parsed is not None:
        return _result_from_json(parsed, raw_text)

    brace_start = trimmed.find("{")
    brace_end = trimmed.rfind("}")
    if brace_start != -1 and brace_end > brace_start:
        parsed = _loads(trimmed[brace_start : brace_end + 1])
        if parsed is not None:
            return _result_from_json(parsed, raw_text)

    array_match = re.search(r"\[[\s\S]*\]", trimmed)
    if array_match:
        items = _loads(array_match.group(0))
        return {"items": items if isinstance(items, list) else [], "summary": {}, "rawText": raw_text}

    return _empty_result(raw_text)
