"""Shared constants and helpers for OCR receipt parsing."""

import re
from decimal import Decimal, InvalidOperation

# Words marking summary/footer lines that never describe a purchasable item
ITEM_SKIP_WORDS = (
    "total",
    "subtotal",
    "gst",
    "tax",
    "discount",
    "balance",
    "tender",
    "payable",
    "service",
    "round",
    "thank",
    "thanks",
    "unsettled",
    "due",
    "card",
    "cash",
    "change",
    "bill amount",
    "grand",
)

# Item prices must carry exactly two decimals ("42.50", "1,234.56").
# Integer-only amounts are deliberately not prices.
ITEM_PRICE_PATTERN = re.compile(r"-?\d[\d,]*\.\d{2}")

# Trailing quantity token on an item name segment, e.g. "Coffee 2".
# Digits glued to a word or a longer number ("Item12", "Model 1005") are not one.
TRAILING_QUANTITY_PATTERN = re.compile(r"(?:(?<=\s)|^)(\d{1,3})\s*$")
MAX_ITEM_QUANTITY = 20

# Any numeric token on a summary line; the right-most one is the amount
SUMMARY_AMOUNT_PATTERN = re.compile(r"-?\d[\d,]*\.?\d+")
PERCENT_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*%")
DECIMAL_COMMA_PATTERN = re.compile(r"-?\d+,\d{1,2}")

SUPPORTED_CURRENCIES = (
    "MVR",
    "USD",
    "EUR",
    "GBP",
    "INR",
    "SGD",
    "AUD",
    "CAD",
    "JPY",
    "MYR",
    "CNY",
    "CHF",
    "AED",
    "SAR",
)
CURRENCY_CODE_BEFORE_AMOUNT = re.compile(r"\b([A-Z]{2,4})\s*-?\s*\d")
KNOWN_CURRENCY_PATTERN = re.compile(r"\b(" + "|".join(SUPPORTED_CURRENCIES) + r")\b", re.IGNORECASE)


def normalize_lines(text: str | None) -> list[str]:
    """Split OCR text into cleaned, non-empty lines.

    Pipes from OCR'd table borders become spaces and whitespace runs collapse
    to a single space.
    """
    if not text:
        return []
    lines = []
    for raw_line in re.split(r"\r?\n", text):
        line = re.sub(r"\s+", " ", raw_line.replace("|", " ")).strip()
        if line:
            lines.append(line)
    return lines


def _parse_decimal(text: str) -> Decimal | None:
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def _normalize_amount_token(token: str) -> str:
    """Resolve comma usage in a numeric token.

    A single "," followed by one or two digits and no "." is a decimal
    comma ("12,50"); any other comma is a thousands separator
    ("1,234.56", "1,234,567").
    """
    token = token.replace(" ", "")
    if "." not in token and DECIMAL_COMMA_PATTERN.fullmatch(token):
        return token.replace(",", ".")
    return token.replace(",", "")


def _parse_line_amount(line: str) -> Decimal | None:
    """Return the right-most numeric token on a line.

    Labels often carry leading numbers (e.g. a tax rate), so the last
    number is the actual amount.
    """
    matches = SUMMARY_AMOUNT_PATTERN.findall(line)
    if not matches:
        return None
    return _parse_decimal(_normalize_amount_token(matches[-1]))


def _parse_line_percent(line: str) -> Decimal | None:
    """Return the first "NN%" value on a line."""
    match = PERCENT_PATTERN.search(line)
    if not match:
        return None
    return _parse_decimal(match.group(1))


def _extract_currency(line: str) -> str | None:
    """Detect a supported currency code on a line.

    A code written right before an amount ("MVR 100.00") wins over a code
    mentioned anywhere on the line.
    """
    code_match = CURRENCY_CODE_BEFORE_AMOUNT.search(line)
    if code_match and code_match.group(1) in SUPPORTED_CURRENCIES:
        return code_match.group(1)
    known_match = KNOWN_CURRENCY_PATTERN.search(line)
    if known_match:
        return known_match.group(1).upper()
    return None


def _contains_any(text: str, words: tuple[str, ...]) -> bool:
    return any(word in text for word in words)
