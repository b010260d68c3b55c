"""FastAPI server for scanning receipts and parsing OCR text into bills."""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from billsplit.receipt.ocr_result_parser import build_scan_result, parse_receipt_text
from billsplit.receipt.provider_payload import parse_image_payload
from billsplit.runtime import get_logger
from billsplit.runtime.receipt_pipeline import OCRServiceUnavailable, async_call_ocr_provider

logger = get_logger(__name__)

OCR_FAILED_MESSAGE = "OCR failed. Ensure GEMINI_API_KEY is configured."

app = FastAPI(title="Bill Receipt Scanner")


async def _read_json_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        logger.info("Request body is not valid JSON")
        return None


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@app.post("/scan-receipt")
async def scan_receipt(request: Request) -> JSONResponse:
    """Send a receipt image to the OCR provider and return its structured reply."""
    body = await _read_json_body(request)
    image = body.get("image") if isinstance(body, dict) else None
    image_payload = parse_image_payload(image)
    if image_payload is None:
        return _error("Invalid image payload", 400)

    try:
        result = await async_call_ocr_provider(image_payload)
    except OCRServiceUnavailable as e:
        logger.error("Receipt OCR failed: %s", e)
        return _error(OCR_FAILED_MESSAGE, 500)

    return JSONResponse(
        {
            "items": result["items"],
            "summary": result.get("summary") or {},
            "rawText": result["rawText"],
            "provider": result["provider"],
        }
    )


@app.api_route("/scan-receipt", methods=["GET", "PUT", "PATCH", "DELETE"])
async def scan_receipt_method_not_allowed() -> JSONResponse:
    return _error("Method not allowed", 405)


@app.post("/parse")
async def parse_bill(request: Request) -> JSONResponse:
    """Parse OCR text ({"text": ...}) or a provider payload into a structured bill."""
    body = await _read_json_body(request)
    if not isinstance(body, dict):
        return _error("Expected a JSON object", 400)

    text = body.get("text")
    result = parse_receipt_text(text) if isinstance(text, str) else build_scan_result(body)
    if not result.items:
        logger.warning("No items detected in submitted bill")
    return JSONResponse(result.to_dict())


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8080)
