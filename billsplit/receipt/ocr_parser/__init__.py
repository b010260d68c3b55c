"""Composable OCR bill parser components."""

from .common import SUPPORTED_CURRENCIES, normalize_lines
from .fields_parser import extract_summary
from .item_merger import merge_items
from .items_text_parser import parse_items

__all__ = [
    "SUPPORTED_CURRENCIES",
    "extract_summary",
    "merge_items",
    "normalize_lines",
    "parse_items",
]
