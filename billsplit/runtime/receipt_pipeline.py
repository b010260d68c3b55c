"""Runtime helpers for the receipt OCR provider call (non-HTTP-server)."""

import time
from typing import Any

import httpx

from billsplit.receipt.provider_payload import ImagePayload, parse_provider_text
from billsplit.runtime.logging import get_logger
from billsplit.runtime.settings import RuntimeSettings, get_settings

logger = get_logger(__name__)

PROVIDER_NAME = "gemini"

EXTRACTION_PROMPT = """You are a receipt OCR assistant. Extract ALL purchased line items and key totals from this receipt image.
Output ONLY a JSON object with this exact shape (no prose, markdown, or code fences):
{
  "items": [
    {"name": "Chicken Burger", "qty": 1, "price": 42.50},
    {"name": "Iced Tea", "qty": 2, "price": 15.00}
  ],
  "summary": {
    "subtotal": 72.50,
    "serviceCharge": 7.25,
    "total": 79.75,
    "currency": "MVR"
  }
}

Rules:
- Items must exclude subtotals, totals, tax, service charges, and discounts.
- `qty` defaults to 1 when not shown on the receipt.
- `price` is the unit price (no currency symbols).
- `summary.subtotal`, `summary.serviceCharge`, and `summary.total` are monetary amounts (not percentages). Use null if a value is not visible.
- `summary.currency` should return the major currency code (e.g., "MVR", "USD") if visible, otherwise null.
- Return an empty array for items if nothing is detected, but keep the JSON object structure.
- Do NOT include any text outside of the JSON object."""


class OCRServiceUnavailable(RuntimeError):
    """Raised when the OCR provider cannot be reached or returns an error."""


def build_provider_request(image: ImagePayload) -> dict[str, Any]:
    """Build the generateContent request body for one receipt image."""
    return {
        "contents": [
            {
                "parts": [
                    {"text": EXTRACTION_PROMPT},
                    {"inline_data": {"mime_type": image.mime_type, "data": image.base64}},
                ]
            }
        ],
        "generationConfig": {"temperature": 0.1, "maxOutputTokens": 2048},
    }


def extract_reply_text(response_json: Any) -> str:
    """Return the first candidate's text part, or "" if the reply has none."""
    if not isinstance(response_json, dict):
        return ""
    candidates = response_json.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    if not parts or not isinstance(parts[0], dict):
        return ""
    text = parts[0].get("text")
    return text if isinstance(text, str) else ""


def _require_api_key(settings: RuntimeSettings) -> str:
    if not settings.api_key:
        raise OCRServiceUnavailable("GEMINI_API_KEY not configured")
    return settings.api_key


def _handle_provider_response(response: httpx.Response) -> dict[str, Any]:
    if response.status_code != 200:
        # TODO(security): The error body may echo request details; redact before logging in production.
        logger.error("OCR provider error: %s - %s", response.status_code, response.text)
        raise OCRServiceUnavailable(f"OCR provider error: {response.status_code}")

    try:
        response_json = response.json()
    except ValueError as e:
        logger.error("OCR provider returned invalid JSON: %s", e)
        raise OCRServiceUnavailable("OCR provider returned invalid JSON") from e

    result = parse_provider_text(extract_reply_text(response_json))
    result["provider"] = PROVIDER_NAME
    logger.info("OCR provider returned %d items", len(result["items"]))
    return result


def call_ocr_provider(image: ImagePayload, settings: RuntimeSettings | None = None) -> dict[str, Any]:
    """
    Send a receipt image to the OCR provider and return its parsed payload.

    Returns:
        Dict of shape {items, summary, rawText, provider}.
    """
    settings = settings or get_settings()
    api_key = _require_api_key(settings)
    logger.info("Sending receipt to OCR provider model %s...", settings.model)

    try:
        start_time = time.time()
        response = httpx.post(
            settings.generate_content_url,
            params={"key": api_key},
            json=build_provider_request(image),
            timeout=settings.timeout,
        )
        logger.info("OCR provider returned in %.2f seconds", time.time() - start_time)
    except httpx.RequestError as e:
        logger.error("Failed to connect to OCR provider: %s", e)
        raise OCRServiceUnavailable(f"Failed to connect to OCR provider: {e}") from e

    return _handle_provider_response(response)


async def async_call_ocr_provider(
    image: ImagePayload,
    settings: RuntimeSettings | None = None,
) -> dict[str, Any]:
    """Async variant of call_ocr_provider() for use inside the receipt server."""
    settings = settings or get_settings()
    api_key = _require_api_key(settings)
    logger.info("Sending receipt to OCR provider model %s...", settings.model)

    try:
        start_time = time.time()
        async with httpx.AsyncClient(timeout=settings.timeout) as client:
            response = await client.post(
                settings.generate_content_url,
                params={"key": api_key},
                json=build_provider_request(image),
            )
        logger.info("OCR provider returned in %.2f seconds", time.time() - start_time)
    except httpx.RequestError as e:
        logger.error("Failed to connect to OCR provider: %s", e)
        raise OCRServiceUnavailable(f"Failed to connect to OCR provider: {e}") from e

    return _handle_provider_response(response)
