"""Format scanned bills as plain text for terminal review."""

from decimal import Decimal

from billsplit.domain.bill import BillSummary, ScanResult

# (label, BillSummary attribute, is_percent)
SUMMARY_ROWS: tuple[tuple[str, str, bool], ...] = (
    ("Subtotal", "subtotal", False),
    ("Service charge", "service_charge_amount", False),
    ("Service charge %", "service_charge_percent", True),
    ("Discount 1 %", "discount1_percent", True),
    ("Discount 2 %", "discount2_percent", True),
    ("GST %", "gst_percent", True),
    ("Total", "total", False),
)


def _format_amount(amount: Decimal, currency: str | None) -> str:
    text = f"{amount:,.2f}"
    return f"{currency} {text}" if currency else text


def _format_rows_aligned(rows: list[tuple[str, str]], indent: str = "  ") -> list[str]:
    """
    Format (label, value) rows with left-aligned labels and right-aligned values.

    Args:
        rows: List of (label, value) tuples
        indent: Indentation prefix for each line

    Returns:
        List of formatted lines
    """
    if not rows:
        return []

    max_label_len = max(len(label) for label, _ in rows)
    max_value_len = max(len(value) for _, value in rows)
    return [f"{indent}{label.ljust(max_label_len)}  {value.rjust(max_value_len)}" for label, value in rows]


def _summary_rows(summary: BillSummary) -> list[tuple[str, str]]:
    rows: list[tuple[str, str]] = []
    for label, attr, is_percent in SUMMARY_ROWS:
        value = getattr(summary, attr)
        if value is None:
            continue
        rows.append((label, f"{value}%" if is_percent else _format_amount(value, summary.currency)))
    return rows


def format_scan_result(result: ScanResult) -> str:
    """Render items and summary of a scanned bill as aligned text."""
    currency = result.summary.currency
    lines = [f"Items ({len(result.items)}):"]

    item_rows = []
    for item in result.items:
        qty_str = f" x{item.qty}" if item.qty > 1 else ""
        item_rows.append((f"{item.name}{qty_str}", _format_amount(item.price, currency)))
    if item_rows:
        lines.extend(_format_rows_aligned(item_rows))
    else:
        lines.append("  (no items detected)")

    summary_rows = _summary_rows(result.summary)
    if summary_rows:
        lines.append("")
        lines.append("Summary:")
        lines.extend(_format_rows_aligned(summary_rows))

    return "\n".join(lines) + "\n"
