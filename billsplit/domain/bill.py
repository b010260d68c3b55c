"""Data models for scanned bills."""

from dataclasses import dataclass, field
from decimal import Decimal, localcontext
from typing import Any

CENTS = Decimal("0.01")


def round_amount(value: Decimal) -> Decimal:
    """Round a monetary amount to two decimal places.

    Precision grows with the amount so that long OCR numbers still quantize.
    """
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(CENTS)


def _json_number(value: Decimal | None) -> float | None:
    return None if value is None else float(value)


@dataclass(frozen=True)
class ParsedItem:
    """A single purchasable line on a bill."""

    name: str
    price: Decimal
    qty: int = 1
    # Only provider-structured items carry pre-assigned participants.
    participants: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "price": _json_number(self.price),
            "qty": self.qty,
        }
        if self.participants:
            data["participants"] = list(self.participants)
        return data


@dataclass
class BillSummary:
    """Summary totals found on a bill. Every field is independently optional."""

    subtotal: Decimal | None = None
    service_charge_amount: Decimal | None = None
    service_charge_percent: Decimal | None = None
    discount1_percent: Decimal | None = None
    discount2_percent: Decimal | None = None
    gst_percent: Decimal | None = None
    total: Decimal | None = None
    currency: str | None = None

    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in self.__dataclass_fields__)

    def to_dict(self) -> dict[str, Any]:
        return {
            "subtotal": _json_number(self.subtotal),
            "serviceChargeAmount": _json_number(self.service_charge_amount),
            "serviceChargePercent": _json_number(self.service_charge_percent),
            "discount1Percent": _json_number(self.discount1_percent),
            "discount2Percent": _json_number(self.discount2_percent),
            "gstPercent": _json_number(self.gst_percent),
            "total": _json_number(self.total),
            "currency": self.currency,
        }


@dataclass
class ScanResult:
    """Structured bill produced from an OCR scan."""

    items: list[ParsedItem] = field(default_factory=list)
    raw_text: str = ""
    summary: BillSummary = field(default_factory=BillSummary)
    provider: str | None = None

    @property
    def items_total(self) -> Decimal:
        # Price is the line total as printed; qty is informational.
        return round_amount(sum((item.price for item in self.items), Decimal("0")))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "items": [item.to_dict() for item in self.items],
            "rawText": self.raw_text,
            "summary": self.summary.to_dict(),
        }
        if self.provider:
            data["provider"] = self.provider
        return data
