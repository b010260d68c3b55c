"""Receipt workflows."""

from billsplit.application.receipts.parse import BillParseRequest, BillParseResult, run_bill_parse

__all__ = [
    "BillParseRequest",
    "BillParseResult",
    "run_bill_parse",
]
