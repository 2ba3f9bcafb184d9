"""Compliance checks for Swiss invoices (Art. 26 MWSTG).

Unlike the engine errors these findings do not stop the computation; they
are reported to the user, printed by the CLI or exported to Excel.
"""

from __future__ import annotations

import re
from decimal import Decimal
from pathlib import Path
from typing import Iterable

from .iban import is_valid_iban
from .models import Invoice, InvoiceTotals, Party
from .rates import format_rate, load_rate_table

# Above this gross amount the recipient must be named with a full address.
FULL_INVOICE_THRESHOLD = Decimal("400")

_VAT_NUMBER = re.compile(r"CHE-\d{3}\.\d{3}\.\d{3}\s*(MWST|TVA|IVA|VAT)")


class ValidationIssue:
    """Representation of a problem detected during validation."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, str] | None = None,
    ) -> None:
        self.message = message
        self.code = code or "GENERIC"
        self.details = details or {}

    def as_cells(self) -> list[str]:
        """Serialise the issue for tabular export."""

        details = "; ".join(f"{key}={value}" for key, value in self.details.items())
        return [self.code, self.message, details]

    def __repr__(self) -> str:
        return f"ValidationIssue(code={self.code!r}, message={self.message!r})"


def is_valid_vat_number(value: str) -> bool:
    """Check the format ``CHE-123.456.789 MWST`` (also TVA, IVA, VAT)."""

    return _VAT_NUMBER.fullmatch(value.strip()) is not None


def requires_full_invoice(gross: Decimal) -> bool:
    return gross > FULL_INVOICE_THRESHOLD


def validate_invoice(invoice: Invoice, totals: InvoiceTotals) -> list[ValidationIssue]:
    """Run the compliance checks against an invoice and its computed totals."""

    issues: list[ValidationIssue] = []
    issues.extend(_check_header(invoice))
    issues.extend(_check_issuer(invoice.issuer))
    issues.extend(_check_recipient(invoice.recipient, totals.grand_gross))
    issues.extend(_check_known_rates(totals))
    return issues


def export_report(issues: Iterable[ValidationIssue], *, destination: Path) -> Path:
    """Export validation issues to an Excel report."""

    from .logging import ExcelLogger, ExcelLoggerConfig

    logger = ExcelLogger(
        ExcelLoggerConfig(columns=("code", "message", "details"), filename=str(destination))
    )
    return logger.write_rows(issues)


def _check_header(invoice: Invoice) -> list[ValidationIssue]:
    issues = []
    if not invoice.number.strip():
        issues.append(
            ValidationIssue("Rechnungsnummer fehlt.", code="INVOICE_NUMBER_MISSING")
        )
    if not invoice.line_items:
        issues.append(
            ValidationIssue(
                f"Rechnung '{invoice.number}' enthält keine Positionen.",
                code="INVOICE_WITHOUT_LINES",
            )
        )
    if invoice.issue_date and invoice.due_date and invoice.due_date < invoice.issue_date:
        issues.append(
            ValidationIssue(
                "Fälligkeitsdatum liegt vor dem Rechnungsdatum.",
                code="DUE_DATE_BEFORE_ISSUE_DATE",
                details={
                    "issue_date": invoice.issue_date.isoformat(),
                    "due_date": invoice.due_date.isoformat(),
                },
            )
        )
    return issues


def _check_issuer(issuer: Party | None) -> list[ValidationIssue]:
    if issuer is None or not issuer.name:
        return [ValidationIssue("Name des Rechnungsstellers fehlt.", code="ISSUER_NAME_MISSING")]

    issues = []
    if not issuer.has_address:
        issues.append(
            ValidationIssue(
                f"Adresse des Rechnungsstellers '{issuer.name}' ist unvollständig.",
                code="ISSUER_ADDRESS_INCOMPLETE",
            )
        )
    if issuer.vat_number and not is_valid_vat_number(issuer.vat_number):
        issues.append(
            ValidationIssue(
                "MWST-Nummer muss dem Format 'CHE-123.456.789 MWST' entsprechen.",
                code="ISSUER_VAT_NUMBER_INVALID",
                details={"current_value": issuer.vat_number},
            )
        )
    if issuer.iban and not is_valid_iban(issuer.iban):
        issues.append(
            ValidationIssue(
                f"IBAN des Rechnungsstellers '{issuer.iban}' ist ungültig.",
                code="ISSUER_IBAN_INVALID",
                details={"current_value": issuer.iban},
            )
        )
    return issues


def _check_recipient(recipient: Party | None, gross: Decimal) -> list[ValidationIssue]:
    if not requires_full_invoice(gross):
        return []
    if recipient is not None and recipient.name and recipient.has_address:
        return []
    return [
        ValidationIssue(
            "Empfänger mit Name und vollständiger Adresse ist ab CHF 400 Pflicht.",
            code="RECIPIENT_DETAILS_REQUIRED",
            details={"gross": str(gross)},
        )
    ]


def _check_known_rates(totals: InvoiceTotals) -> list[ValidationIssue]:
    table = load_rate_table()
    issues = []
    for group in totals.tax_groups:
        if group.rate in table:
            continue
        issues.append(
            ValidationIssue(
                f"MWST-Satz {format_rate(group.rate)} (Code {group.code}) ist nicht in der Satztabelle.",
                code="UNKNOWN_TAX_RATE",
                details={"code": group.code, "rate": str(group.rate)},
            )
        )
    return issues


__all__ = [
    "FULL_INVOICE_THRESHOLD",
    "ValidationIssue",
    "export_report",
    "is_valid_vat_number",
    "requires_full_invoice",
    "validate_invoice",
]
