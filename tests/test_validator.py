from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal

from openpyxl import load_workbook

from swissbill.models import Invoice, Party
from swissbill.pipeline import compute_totals
from swissbill.validator import (
    export_report,
    is_valid_vat_number,
    requires_full_invoice,
    validate_invoice,
)


def _codes(invoice: Invoice) -> list[str]:
    return [issue.code for issue in validate_invoice(invoice, compute_totals(invoice.line_items))]


def test_sample_invoice_has_no_issues(sample_invoice: Invoice) -> None:
    assert _codes(sample_invoice) == []


def test_vat_number_format() -> None:
    assert is_valid_vat_number("CHE-123.456.789 MWST")
    assert is_valid_vat_number("CHE-123.456.789 TVA")
    assert not is_valid_vat_number("CHE-123.456.789")
    assert not is_valid_vat_number("CHE123456789 MWST")


def test_invalid_vat_number_is_reported(sample_invoice: Invoice) -> None:
    issuer = replace(sample_invoice.issuer, vat_number="123456789")

    assert _codes(replace(sample_invoice, issuer=issuer)) == ["ISSUER_VAT_NUMBER_INVALID"]


def test_full_recipient_required_above_threshold(sample_invoice: Invoice) -> None:
    recipient = Party(name="Müller & Partner AG")

    assert requires_full_invoice(Decimal("400.01"))
    assert not requires_full_invoice(Decimal("400"))
    assert _codes(replace(sample_invoice, recipient=recipient)) == ["RECIPIENT_DETAILS_REQUIRED"]
    assert _codes(replace(sample_invoice, recipient=None)) == ["RECIPIENT_DETAILS_REQUIRED"]


def test_small_invoice_does_not_need_recipient(sample_invoice: Invoice, make_item) -> None:
    invoice = replace(sample_invoice, recipient=None, line_items=(make_item("120"),))

    assert _codes(invoice) == []


def test_header_and_issuer_issues() -> None:
    invoice = Invoice(
        number="",
        currency="CHF",
        line_items=(),
        issuer=Party(name="Beispiel AG"),
        issue_date=date(2026, 3, 1),
        due_date=date(2026, 2, 1),
    )

    assert _codes(invoice) == [
        "INVOICE_NUMBER_MISSING",
        "INVOICE_WITHOUT_LINES",
        "DUE_DATE_BEFORE_ISSUE_DATE",
        "ISSUER_ADDRESS_INCOMPLETE",
    ]


def test_missing_issuer_and_unknown_rate(make_item) -> None:
    invoice = Invoice(number="7", currency="CHF", line_items=(make_item("10", rate="0.077"),))

    assert _codes(invoice) == ["ISSUER_NAME_MISSING", "UNKNOWN_TAX_RATE"]


def test_export_report(tmp_path, sample_invoice: Invoice) -> None:
    invoice = replace(sample_invoice, recipient=None)
    issues = validate_invoice(invoice, compute_totals(invoice.line_items))

    destination = export_report(issues, destination=tmp_path / "out" / "issues.xlsx")

    rows = list(load_workbook(destination).active.iter_rows(values_only=True))
    assert rows[0] == ("code", "message", "details")
    assert rows[1][0] == "RECIPIENT_DETAILS_REQUIRED"
    assert rows[1][2] == "gross=21450.00"


def test_invalid_issuer_iban_is_reported(sample_invoice: Invoice) -> None:
    issuer = replace(sample_invoice.issuer, iban="CH94 0076 2011 6238 5295 7")

    issues = validate_invoice(
        replace(sample_invoice, issuer=issuer), compute_totals(sample_invoice.line_items)
    )

    assert [issue.code for issue in issues] == ["ISSUER_IBAN_INVALID"]
    assert issues[0].as_cells()[2] == "current_value=CH94 0076 2011 6238 5295 7"
