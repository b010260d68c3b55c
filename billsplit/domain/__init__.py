"""Core domain models for the billsplit project.

This module provides the data models shared by the receipt parsers and the
runtime layer:
- ParsedItem: a single bill line (name, price, qty)
- BillSummary: subtotal/service charge/percent fields/total/currency
- ScanResult: items + raw OCR text + summary

Usage:
    from billsplit.domain import BillSummary, ParsedItem, ScanResult
"""

from billsplit.domain.bill import BillSummary, ParsedItem, ScanResult, round_amount

__all__ = [
    "BillSummary",
    "ParsedItem",
    "ScanResult",
    "round_amount",
]
