"""Tests for bill summary extraction."""

from decimal import Decimal

import pytest
from billsplit.domain.bill import BillSummary
from billsplit.receipt.ocr_parser.common import SUPPORTED_CURRENCIES
from billsplit.receipt.ocr_parser.fields_parser import extract_summary


def test_extract_summary_full_receipt() -> None:
    text = """
      Item 1 10.00
      Item 2 15.00
      Subtotal 25.00
      Service Charge 2.50
      Total MVR 27.50
    """

    summary = extract_summary(text)

    assert summary == BillSummary(
        subtotal=Decimal("25.00"),
        service_charge_amount=Decimal("2.50"),
        total=Decimal("27.50"),
        currency="MVR",
    )


def test_extract_summary_does_not_check_cross_field_consistency() -> None:
    summary = extract_summary("Subtotal 50.00\nService Charge 5.00\nTotal MVR 27.50")

    assert summary.subtotal == Decimal("50.00")
    assert summary.service_charge_amount == Decimal("5.00")
    assert summary.total == Decimal("27.50")
    assert summary.currency == "MVR"


@pytest.mark.parametrize("text", ["", "   \n  ", None])
def test_extract_summary_empty_input(text: str | None) -> None:
    assert extract_summary(text) == BillSummary()


def test_extract_summary_text_without_fields() -> None:
    assert extract_summary("Just some text").is_empty()


@pytest.mark.parametrize("label", ["Subtotal", "Sub Total", "SUBTOTAL"])
def test_extract_summary_subtotal_labels(label: str) -> None:
    assert extract_summary(f"{label} 45.00").subtotal == Decimal("45.00")


@pytest.mark.parametrize("label", ["Service Charge", "Service Fee", "Svc Charge"])
def test_extract_summary_service_charge_labels(label: str) -> None:
    assert extract_summary(f"{label} 3.50").service_charge_amount == Decimal("3.50")


@pytest.mark.parametrize("label", ["Total", "Amount Due", "Grand Total", "Balance Due"])
def test_extract_summary_total_labels(label: str) -> None:
    assert extract_summary(f"{label} 75.00").total == Decimal("75.00")


def test_extract_summary_subtotal_is_not_total() -> None:
    summary = extract_summary("Subtotal 50.00\nTotal 55.00")

    assert summary.subtotal == Decimal("50.00")
    assert summary.total == Decimal("55.00")


def test_extract_summary_service_charge_total_label_is_not_grand_total() -> None:
    summary = extract_summary("Service Charge Total 5.00\nTotal 55.00")

    assert summary.service_charge_amount == Decimal("5.00")
    assert summary.total == Decimal("55.00")


def test_extract_summary_tax_total_label_is_not_grand_total() -> None:
    assert extract_summary("Tax Total 4.00\nTotal 44.00").total == Decimal("44.00")


def test_extract_summary_takes_last_number_on_line() -> None:
    assert extract_summary("Subtotal 100.00 50.00 75.00").subtotal == Decimal("75.00")


def test_extract_summary_ignores_leading_rate_number() -> None:
    summary = extract_summary("Service Charge 10% 5.00")

    assert summary.service_charge_amount == Decimal("5.00")
    assert summary.service_charge_percent == Decimal("10")


def test_extract_summary_fields_are_sticky() -> None:
    text = "\n".join(
        [
            "Subtotal 50.00",
            "Subtotal 60.00",
            "Service Charge 5.00",
            "Service Charge 6.00",
            "Total 55.00",
            "Total 66.00",
        ]
    )

    summary = extract_summary(text)

    assert summary.subtotal == Decimal("50.00")
    assert summary.service_charge_amount == Decimal("5.00")
    assert summary.total == Decimal("55.00")


def test_extract_summary_thousands_separator() -> None:
    assert extract_summary("Total 1,234.56").total == Decimal("1234.56")


def test_extract_summary_decimal_comma() -> None:
    assert extract_summary("Total 12,50").total == Decimal("12.50")


def test_extract_summary_currency_before_amount() -> None:
    summary = extract_summary("Total MVR 100.00")

    assert summary.currency == "MVR"
    assert summary.total == Decimal("100.00")


@pytest.mark.parametrize("currency", SUPPORTED_CURRENCIES)
def test_extract_summary_recognizes_supported_currencies(currency: str) -> None:
    assert extract_summary(f"Total {currency} 100.00").currency == currency


def test_extract_summary_currency_is_case_insensitive() -> None:
    assert extract_summary("Total usd 50.00").currency == "USD"


def test_extract_summary_unknown_uppercase_code_is_not_currency() -> None:
    summary = extract_summary("GST 8% 4.00\nTotal 54.00")

    assert summary.currency is None


def test_extract_summary_first_currency_wins() -> None:
    assert extract_summary("Paid in USD\nTotal MVR 100.00").currency == "USD"


def test_extract_summary_percent_fields() -> None:
    text = "\n".join(
        [
            "Subtotal 200.00",
            "Discount 1 10% 20.00",
            "Discount 2 5% 9.00",
            "Service Charge 10% 17.10",
            "GST 8% 15.05",
            "Total 203.15",
        ]
    )

    summary = extract_summary(text)

    assert summary.discount1_percent == Decimal("10")
    assert summary.discount2_percent == Decimal("5")
    assert summary.service_charge_percent == Decimal("10")
    assert summary.gst_percent == Decimal("8")
    assert summary.total == Decimal("203.15")


def test_extract_summary_percent_fields_are_sticky() -> None:
    summary = extract_summary("Tax 8% 4.00\nTax 12% 6.00")

    assert summary.gst_percent == Decimal("8")


def test_extract_summary_returns_fresh_summary_each_call() -> None:
    first = extract_summary("Total 10.00")
    second = extract_summary("Subtotal 5.00")

    assert first.subtotal is None
    assert second.total is None
    assert extract_summary("Total 10.00") == first


def test_extract_summary_service_percent_from_any_service_line() -> None:
    summary = extract_summary("Service 10% 5.00\nService Charge 5.00")

    assert summary.service_charge_percent == Decimal("10")
    assert summary.service_charge_amount == Decimal("5.00")


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("Total 1,234,567", Decimal("1234567")),
        ("Total 1,234", Decimal("1234")),
        ("Total 1,234,567.89", Decimal("1234567.89")),
        ("Total 7,5", Decimal("7.5")),
    ],
)
def test_extract_summary_comma_usage(line: str, expected: Decimal) -> None:
    assert extract_summary(line).total == expected
