"""Turn an OCR provider response (or plain OCR text) into a structured bill."""

from collections.abc import Mapping, Sequence
from decimal import Decimal, InvalidOperation
from typing import Any

from billsplit.domain.bill import BillSummary, ParsedItem, ScanResult

from .ocr_parser import extract_summary, merge_items, parse_items

# Structured summary keys, in preference order, for each BillSummary field
SUMMARY_FIELD_KEYS: dict[str, tuple[str, ...]] = {
    "subtotal": ("subtotal",),
    "service_charge_amount": ("serviceChargeAmount", "serviceCharge"),
    "service_charge_percent": ("serviceChargePercent",),
    "discount1_percent": ("discount1Percent",),
    "discount2_percent": ("discount2Percent",),
    "gst_percent": ("gstPercent", "gst"),
    "total": ("total",),
}


def coerce_number(value: Any) -> Decimal | None:
    """
    Coerce a provider-supplied value to a Decimal.

    Numbers are taken as-is (bools are not numbers here), non-blank strings
    are parsed after stripping thousands commas. Anything else, and any
    non-finite result, gives None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, (int, float)):
        try:
            number = Decimal(str(value))
        except InvalidOperation:
            return None
        return number if number.is_finite() else None
    if isinstance(value, str) and value.strip():
        try:
            number = Decimal(value.strip().replace(",", ""))
        except InvalidOperation:
            return None
        return number if number.is_finite() else None
    return None


def _coerce_quantity(value: Any) -> int | None:
    if value is None:
        return 1
    number = coerce_number(value)
    if number is None:
        return None
    return int(number)


def _normalize_provider_item(raw_item: Any) -> ParsedItem | None:
    """Normalize one provider item; None if it has no name or unusable numbers."""
    if not isinstance(raw_item, Mapping):
        return None

    raw_name = raw_item.get("name")
    name = str(raw_name).strip() if raw_name is not None else ""
    if not name:
        return None

    raw_price = raw_item.get("price")
    price = Decimal("0") if raw_price is None else coerce_number(raw_price)
    qty = _coerce_quantity(raw_item.get("qty"))
    if price is None or qty is None:
        return None

    raw_participants = raw_item.get("participants")
    participants: tuple[str, ...] = ()
    if isinstance(raw_participants, list):
        participants = tuple(str(p) for p in raw_participants)

    return ParsedItem(name=name, price=price, qty=qty, participants=participants)


def _normalize_provider_items(raw_items: Any) -> list[ParsedItem]:
    if not isinstance(raw_items, Sequence) or isinstance(raw_items, (str, bytes)):
        return []
    items: list[ParsedItem] = []
    for raw_item in raw_items:
        item = _normalize_provider_item(raw_item)
        if item is not None:
            items.append(item)
    return items


def merge_summaries(structured: Mapping[str, Any] | None, text_summary: BillSummary) -> BillSummary:
    """
    Merge a provider's structured summary with a text-derived one.

    For each field the structured value wins when it coerces to a number;
    the text-derived value is the fallback.
    """
    structured = structured or {}
    merged = BillSummary()
    for field_name, keys in SUMMARY_FIELD_KEYS.items():
        value: Decimal | None = None
        for key in keys:
            value = coerce_number(structured.get(key))
            if value is not None:
                break
        if value is None:
            value = getattr(text_summary, field_name)
        setattr(merged, field_name, value)

    currency = structured.get("currency")
    if isinstance(currency, str) and currency.strip():
        merged.currency = currency.strip()
    else:
        merged.currency = text_summary.currency
    return merged


def build_scan_result(payload: Mapping[str, Any] | None) -> ScanResult:
    """
    Build a structured bill from an OCR provider payload.

    Expected payload shape: ``{items?, summary?, rawText?, provider?}``.
    Provider items bypass the text parser; without them the items come
    from the raw text. Either way modifier rows are merged into their
    parent item. The summary always gets a text-extraction fallback.
    """
    payload = payload or {}
    raw_text = payload.get("rawText")
    if not isinstance(raw_text, str):
        raw_text = ""

    items = _normalize_provider_items(payload.get("items"))
    if not items:
        items = parse_items(raw_text)

    structured_summary = payload.get("summary")
    if not isinstance(structured_summary, Mapping):
        structured_summary = {}

    provider = payload.get("provider")
    return ScanResult(
        items=merge_items(items),
        raw_text=raw_text,
        summary=merge_summaries(structured_summary, extract_summary(raw_text)),
        provider=provider if isinstance(provider, str) else None,
    )


def parse_receipt_text(text: str) -> ScanResult:
    """Build a structured bill from plain OCR text."""
    return build_scan_result({"rawText": text})
