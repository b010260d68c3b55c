"""Bill parsing workflow orchestration."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from billsplit.receipt.ocr_result_parser import build_scan_result, parse_receipt_text
from billsplit.runtime import get_logger

if TYPE_CHECKING:
    from billsplit.domain.bill import ScanResult

logger = get_logger(__name__)

SourceKind = Literal["text", "provider_json"]

ParseStatus = Literal[
    "file_not_found",
    "invalid_json",
    "no_items",
    "parsed",
]

STDIN_SOURCE = "-"


@dataclass(frozen=True)
class BillParseRequest:
    """Inputs for running the bill parse workflow."""

    source: str
    kind: SourceKind = "text"


@dataclass(frozen=True)
class BillParseResult:
    """Outcome from the bill parse workflow."""

    status: ParseStatus
    result: ScanResult | None = None
    error: str | None = None


def _read_source(source: str) -> str | None:
    if source == STDIN_SOURCE:
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8")


def run_bill_parse(request: BillParseRequest) -> BillParseResult:
    """Run parse flow: read input -> build structured bill.

    A bill without items is still returned (status "no_items"); whether
    that is a failure is up to the caller.
    """
    content = _read_source(request.source)
    if content is None:
        return BillParseResult(status="file_not_found", error=f"Input file not found: {request.source}")

    if request.kind == "provider_json":
        try:
            payload = json.loads(content)
        except json.JSONDecodeError as exc:
            return BillParseResult(status="invalid_json", error=f"Invalid provider JSON: {exc}")
        if not isinstance(payload, dict):
            return BillParseResult(status="invalid_json", error="Provider JSON must be an object")
        result = build_scan_result(payload)
    else:
        result = parse_receipt_text(content)

    if not result.items:
        logger.warning("No items detected in %s", request.source)
        return BillParseResult(status="no_items", result=result)

    logger.info("Parsed %d items from %s", len(result.items), request.source)
    return BillParseResult(status="parsed", result=result)
