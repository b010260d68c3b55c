"""Fold modifier/add-on rows into the item they belong to."""

from collections.abc import Iterable
from dataclasses import replace
from decimal import Decimal

from billsplit.domain.bill import ParsedItem, round_amount

MODIFIER_PREFIXES = ("-", "+", "(")
ADDON_PREFIX = "add "


def _is_modifier_label(name: str) -> bool:
    return name.startswith(MODIFIER_PREFIXES) or name.lower().startswith(ADDON_PREFIX)


def _strip_modifier_marker(name: str) -> str:
    if name.startswith(MODIFIER_PREFIXES):
        name = name[1:]
    return name.strip()


def merge_items(items: Iterable[ParsedItem]) -> list[ParsedItem]:
    """
    Merge modifier rows into the preceding item.

    OCR of itemized bills often renders add-ons ("+ Extra cheese 2.00") and
    zero-priced variants as their own rows right under the parent item.
    Such a row is appended to the previous item's name and its price is
    added to the previous item's price. A modifier with nothing before it
    is kept as a regular item.
    """
    merged: list[ParsedItem] = []
    for item in items:
        name = item.name.strip()
        is_zero_addon = item.price == Decimal("0") and bool(name) and bool(merged)

        if merged and (_is_modifier_label(name) or is_zero_addon):
            last = merged[-1]
            suffix = _strip_modifier_marker(name)
            merged[-1] = replace(
                last,
                name=f"{last.name} {suffix}" if suffix else last.name,
                price=round_amount(last.price + item.price),
            )
            continue

        merged.append(replace(item, name=name or item.name))

    return merged
