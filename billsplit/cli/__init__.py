"""Unified command-line interface for the billsplit project.

Usage:
    billsplit parse <ocr_text_file>
    billsplit parse - --json
    billsplit normalize <provider_json_file>
    billsplit serve [--host] [--port]
"""
