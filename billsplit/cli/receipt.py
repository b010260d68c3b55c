"""Receipt command handlers used by the unified CLI."""

import argparse
import json
import sys

from billsplit.runtime import get_logger

logger = get_logger(__name__)


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI server for receipt scanning."""
    import uvicorn

    from billsplit.runtime import receipt_server as server

    print(f"Starting receipt server on {args.host}:{args.port}")
    print(f"Endpoints: http://{args.host}:{args.port}/scan-receipt | /parse | /health")
    print("Press Ctrl+C to stop")

    uvicorn.run(server.app, host=args.host, port=args.port)


def _run_parse(args: argparse.Namespace, kind: str) -> None:
    from billsplit.application.receipts.parse import BillParseRequest, run_bill_parse
    from billsplit.receipt.formatter import format_scan_result

    outcome = run_bill_parse(BillParseRequest(source=args.input, kind=kind))

    if outcome.status in ("file_not_found", "invalid_json"):
        logger.error("%s", outcome.error)
        print(f"Error: {outcome.error}")
        sys.exit(1)

    result = outcome.result
    if result is None:
        print("Parse failed: missing bill output.")
        sys.exit(1)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return

    print(format_scan_result(result), end="")
    if outcome.status == "no_items":
        print("No items detected. Check the OCR text or enter items manually.")


def cmd_parse(args: argparse.Namespace) -> None:
    """Parse raw OCR text into a structured bill."""
    _run_parse(args, "text")


def cmd_normalize(args: argparse.Namespace) -> None:
    """Normalize an OCR provider JSON response into a structured bill."""
    _run_parse(args, "provider_json")
