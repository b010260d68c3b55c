"""Bill summary extraction: subtotal, service charge, percent fields, total, currency."""

from billsplit.domain.bill import BillSummary

from .common import (
    _contains_any,
    _extract_currency,
    _parse_line_amount,
    _parse_line_percent,
    normalize_lines,
)

SUBTOTAL_LABELS = ("subtotal", "sub total")
SERVICE_CHARGE_LABELS = ("service charge", "svc charge", "service fee")
TOTAL_LABELS = ("total", "amount due", "grand total", "balance due")
TOTAL_EXCLUDED_LABELS = ("service", "tax")
GST_LABELS = ("gst", "tax")
SERVICE_PERCENT_LABEL = "service"


def _is_total_line(lower: str) -> bool:
    """Return True if a lower-cased line is a grand total candidate.

    "Service Charge Total" and "Tax Total" style labels are excluded.
    """
    if not _contains_any(lower, TOTAL_LABELS):
        return False
    if "subtotal" in lower:
        return False
    return not _contains_any(lower, TOTAL_EXCLUDED_LABELS)


def _apply_percent_fields(summary: BillSummary, line: str, lower: str) -> None:
    """Fill still-empty percent fields from a line's "NN%" token."""
    if "discount" in lower:
        if "1" in lower and summary.discount1_percent is None:
            summary.discount1_percent = _parse_line_percent(line)
        elif "2" in lower and summary.discount2_percent is None:
            summary.discount2_percent = _parse_line_percent(line)
    if _contains_any(lower, GST_LABELS) and summary.gst_percent is None:
        summary.gst_percent = _parse_line_percent(line)
    # Any service line may carry the rate ("Service 10%"), not only the amount labels.
    if SERVICE_PERCENT_LABEL in lower and summary.service_charge_percent is None:
        summary.service_charge_percent = _parse_line_percent(line)


def extract_summary(text: str | None) -> BillSummary:
    """
    Extract bill summary fields from OCR text.

    Every field is sticky: the first line that yields a value for a field
    wins and later matching lines are ignored for it. Fields without a
    matching line stay None. Amounts are taken as found; no cross-field
    consistency check is made.

    Args:
        text: Raw OCR text

    Returns:
        A fresh BillSummary for this text
    """
    summary = BillSummary()

    for line in normalize_lines(text):
        lower = line.lower()

        if summary.currency is None:
            summary.currency = _extract_currency(line)

        _apply_percent_fields(summary, line, lower)

        if _contains_any(lower, SUBTOTAL_LABELS) and summary.subtotal is None:
            summary.subtotal = _parse_line_amount(line)
            if summary.subtotal is not None:
                continue

        if _contains_any(lower, SERVICE_CHARGE_LABELS) and summary.service_charge_amount is None:
            summary.service_charge_amount = _parse_line_amount(line)
            if summary.service_charge_amount is not None:
                continue

        if summary.total is None and _is_total_line(lower):
            summary.total = _parse_line_amount(line)

    return summary
