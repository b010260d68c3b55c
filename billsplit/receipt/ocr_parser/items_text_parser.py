"""Text-line based bill item extraction."""

from decimal import Decimal

from billsplit.domain.bill import ParsedItem, round_amount

from .common import (
    ITEM_PRICE_PATTERN,
    ITEM_SKIP_WORDS,
    MAX_ITEM_QUANTITY,
    TRAILING_QUANTITY_PATTERN,
    _contains_any,
    _parse_decimal,
    normalize_lines,
)


def _split_quantity(name_segment: str) -> tuple[str, int]:
    """Split a trailing quantity off an item name segment.

    Only 1..20 counts as a quantity; larger trailing numbers stay part of
    the name ("Item 25").
    """
    match = TRAILING_QUANTITY_PATTERN.search(name_segment)
    if match:
        candidate = int(match.group(1))
        if 0 < candidate <= MAX_ITEM_QUANTITY:
            return name_segment[: match.start()].strip(), candidate
    return name_segment, 1


def _clean_item_name(name: str) -> str:
    return " ".join(name.split()).replace(":", "").replace(";", "").strip()


def _parse_item_line(line: str) -> ParsedItem | None:
    """Parse one normalized line into an item, or None if it is not one."""
    if _contains_any(line.lower(), ITEM_SKIP_WORDS):
        return None

    match = ITEM_PRICE_PATTERN.search(line)
    if not match:
        return None

    raw_amount = match.group(0)
    amount = _parse_decimal(raw_amount.replace(",", ""))
    # Negative amounts are itemized discounts, not items.
    if amount is None or amount <= Decimal("0"):
        return None

    price_index = line.find(raw_amount)
    if price_index <= 0:
        return None

    name_segment = line[:price_index].strip()
    if not name_segment:
        return None

    name_segment, qty = _split_quantity(name_segment)
    name = _clean_item_name(name_segment)
    if len(name) < 2:
        return None

    return ParsedItem(name=name, price=round_amount(amount), qty=qty)


def parse_items(text: str | None) -> list[ParsedItem]:
    """
    Extract line items from OCR text.

    This is heuristic-based: summary/footer lines are skipped by keyword,
    every other line needs a two-decimal price with a name before it.
    Lines that do not qualify are dropped silently.

    Args:
        text: Raw OCR text, one receipt line per text line
    """
    items: list[ParsedItem] = []
    for line in normalize_lines(text):
        item = _parse_item_line(line)
        if item is None:
            continue
        items.append(item)

    # Keep duplicates: two identical drinks are two bill lines.
    return items
