"""Value records exchanged with the invoice engine."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Sequence

from .errors import InvoiceFormatError
from .iban import is_qr_iban
from .utils import ZERO, fmt2, group_by_four, parse_decimal, q2


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present value among ``keys``."""

    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return default


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise InvoiceFormatError(f"{what} must be an object, got {type(data).__name__}")
    return data


def _parse_date(value: Any, field_name: str) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError as exc:
        raise InvoiceFormatError(f"{field_name}: invalid date {value!r}") from exc


@dataclass(frozen=True)
class LineItem:
    """One invoice position. ``gross_amount`` already includes VAT."""

    description: str
    quantity: Decimal
    unit_price: Decimal
    tax_rate_code: str
    tax_rate: Decimal
    gross_amount: Decimal
    detail: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LineItem":
        """Build a line item from snake_case or dashboard (``totalBrutto``) keys."""

        data = _require_mapping(data, "line item")
        code = _pick(data, "tax_rate_code", "mwstCode", "taxRateCode")
        if code is None or not str(code).strip():
            raise InvoiceFormatError("line item without tax rate code")

        gross = _pick(data, "gross_amount", "totalBrutto", "grossAmount")
        rate = _pick(data, "tax_rate", "mwstRate", "taxRate")
        return cls(
            description=str(data.get("description") or ""),
            quantity=parse_decimal(_pick(data, "quantity", default=1), field="quantity"),
            unit_price=parse_decimal(
                _pick(data, "unit_price", "unitPrice", default=0), field="unit_price"
            ),
            tax_rate_code=str(code).strip(),
            tax_rate=parse_decimal(rate, field="tax_rate"),
            gross_amount=parse_decimal(gross, field="gross_amount"),
            detail=str(data.get("detail") or ""),
        )


@dataclass(frozen=True)
class TaxGroup:
    """VAT bucket aggregating every line item sharing a tax code."""

    code: str
    rate: Decimal
    gross_total: Decimal = ZERO
    net_total: Decimal = ZERO
    tax_total: Decimal = ZERO

    @property
    def label(self) -> str:
        from .rates import rate_label

        return rate_label(self.rate)

    def rounded(self) -> "TaxGroup":
        """Return a copy with the monetary values rounded to two decimals."""

        return replace(
            self,
            gross_total=q2(self.gross_total),
            net_total=q2(self.net_total),
            tax_total=q2(self.tax_total),
        )

    def as_dict(self) -> dict[str, str]:
        return {
            "code": self.code,
            "rate": str(self.rate),
            "gross_total": fmt2(self.gross_total),
            "net_total": fmt2(self.net_total),
            "tax_total": fmt2(self.tax_total),
        }


@dataclass(frozen=True)
class Party:
    """Issuer or recipient identity as supplied by the store/profile data."""

    name: str
    street: str = ""
    building_number: str = ""
    postal_code: str = ""
    town: str = ""
    country: str = "CH"
    vat_number: str = ""
    uid: str = ""
    iban: str = ""
    bank: str = ""
    email: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, role: str = "party") -> "Party":
        data = _require_mapping(data, role)
        return cls(
            name=str(data.get("name") or "").strip(),
            street=str(data.get("street") or "").strip(),
            building_number=str(
                _pick(data, "building_number", "buildingNumber", "houseNumber", default="")
            ).strip(),
            postal_code=str(_pick(data, "postal_code", "zip", "postalCode", default="")).strip(),
            town=str(_pick(data, "town", "city", default="")).strip(),
            country=str(_pick(data, "country_code", "country", default="CH")).strip(),
            vat_number=str(_pick(data, "vat_number", "mwstNummer", default="")).strip(),
            uid=str(data.get("uid") or "").strip(),
            iban=str(data.get("iban") or "").strip(),
            bank=str(data.get("bank") or "").strip(),
            email=str(data.get("email") or "").strip(),
        )

    @property
    def has_address(self) -> bool:
        return bool(self.street and self.postal_code and self.town)

    def as_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "street": self.street,
            "building_number": self.building_number,
            "postal_code": self.postal_code,
            "town": self.town,
            "country": self.country,
        }


@dataclass(frozen=True)
class Invoice:
    """Invoice header plus the ordered line items."""

    number: str
    currency: str
    line_items: tuple[LineItem, ...]
    issuer: Party | None = None
    recipient: Party | None = None
    issue_date: date | None = None
    service_date: date | None = None
    due_date: date | None = None
    reference: str = ""
    notes: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Invoice":
        """Build an invoice from the dashboard JSON shape or snake_case keys."""

        data = _require_mapping(data, "invoice")
        number = _pick(data, "number", "nummer")
        if number is None or not str(number).strip():
            raise InvoiceFormatError("invoice number is missing")

        raw_items = _pick(data, "line_items", "items", default=[])
        if not isinstance(raw_items, Sequence) or isinstance(raw_items, (str, bytes)):
            raise InvoiceFormatError("line items must be a list")

        issuer = data.get("issuer")
        recipient = data.get("recipient")
        return cls(
            number=str(number).strip(),
            currency=str(_pick(data, "currency", "waehrung", default="CHF")).strip().upper(),
            line_items=tuple(LineItem.from_mapping(item) for item in raw_items),
            issuer=Party.from_mapping(issuer, role="issuer") if issuer else None,
            recipient=Party.from_mapping(recipient, role="recipient") if recipient else None,
            issue_date=_parse_date(_pick(data, "issue_date", "datum"), "issue_date"),
            service_date=_parse_date(
                _pick(data, "service_date", "leistungsDatum"), "service_date"
            ),
            due_date=_parse_date(_pick(data, "due_date", "faelligkeitsDatum"), "due_date"),
            reference=str(_pick(data, "reference", "referenz", default="")).strip(),
            notes=str(data.get("notes") or ""),
        )


@dataclass(frozen=True)
class InvoiceTotals:
    """Reconciled VAT breakdown, rounded for output."""

    tax_groups: tuple[TaxGroup, ...] = ()
    grand_gross: Decimal = field(default_factory=lambda: Decimal("0.00"))
    grand_net: Decimal = field(default_factory=lambda: Decimal("0.00"))
    grand_tax: Decimal = field(default_factory=lambda: Decimal("0.00"))

    def as_dict(self) -> dict[str, Any]:
        return {
            "tax_groups": [group.as_dict() for group in self.tax_groups],
            "grand_gross": fmt2(self.grand_gross),
            "grand_net": fmt2(self.grand_net),
            "grand_tax": fmt2(self.grand_tax),
        }


@dataclass(frozen=True)
class CreditorReference:
    """ISO 11649 structured creditor reference."""

    basic_reference: str
    check_digits: str

    @property
    def full_reference(self) -> str:
        return f"RF{self.check_digits}{self.basic_reference}"

    @property
    def printed(self) -> str:
        """Print form in blocks of four, e.g. ``RF18 5390 0754 7034``."""

        return group_by_four(self.full_reference)

    def __str__(self) -> str:
        return self.full_reference


@dataclass(frozen=True)
class PaymentSlip:
    """Record handed to the QR-bill renderer."""

    creditor_iban: str
    creditor: Party
    currency: str
    amount: Decimal
    reference: str
    debtor: Party | None = None
    reference_type: str = "SCOR"
    additional_information: str = ""

    def as_dict(self) -> dict[str, Any]:
        return {
            "creditor_iban": self.creditor_iban,
            "qr_iban": is_qr_iban(self.creditor_iban),
            "creditor": self.creditor.as_dict(),
            "debtor": self.debtor.as_dict() if self.debtor else None,
            "currency": self.currency,
            "amount": fmt2(self.amount),
            "reference_type": self.reference_type,
            "reference": self.reference,
            "additional_information": self.additional_information,
        }


__all__ = [
    "CreditorReference",
    "Invoice",
    "InvoiceTotals",
    "LineItem",
    "Party",
    "PaymentSlip",
    "TaxGroup",
]
