#!/usr/bin/env python3

import argparse
from collections.abc import Callable, Sequence


def _coerce_exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


def _run_legacy_command(command: Callable[[argparse.Namespace], None], args: argparse.Namespace) -> int:
    """
    Normalize command handlers that call sys.exit().

    This keeps process termination centralized in this module's entrypoint.
    """
    try:
        command(args)
    except SystemExit as exc:
        return _coerce_exit_code(exc.code)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Bill splitting receipt utilities",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  parse <file|->             Parse raw OCR text into a bill
  normalize <file|->         Normalize an OCR provider JSON response into a bill
  serve [--host] [--port]    Start the receipt scanning server

Use "-" to read from stdin.
""",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Override BILLSPLIT_LOG_LEVEL for this run",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser("parse", help="Parse raw OCR text into a bill")
    parse_parser.add_argument("input", help="OCR text file, or - for stdin")
    parse_parser.add_argument("--json", action="store_true", help="Print the bill as JSON")

    normalize_parser = subparsers.add_parser("normalize", help="Normalize an OCR provider JSON response")
    normalize_parser.add_argument("input", help="Provider JSON file, or - for stdin")
    normalize_parser.add_argument("--json", action="store_true", help="Print the bill as JSON")

    serve_parser = subparsers.add_parser("serve", help="Start the receipt scanning server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to (default: 8080)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.log_level:
        from billsplit.runtime import parse_log_level, set_log_level

        set_log_level(parse_log_level(args.log_level))

    if args.command == "parse":
        from billsplit.cli.receipt import cmd_parse

        return _run_legacy_command(cmd_parse, args)
    elif args.command == "normalize":
        from billsplit.cli.receipt import cmd_normalize

        return _run_legacy_command(cmd_normalize, args)
    elif args.command == "serve":
        from billsplit.cli.receipt import cmd_serve

        return _run_legacy_command(cmd_serve, args)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
