"""Excel export of an invoice's VAT summary."""

from __future__ import annotations

from pathlib import Path

from openpyxl import Workbook

from .models import Invoice, InvoiceTotals
from .rates import format_rate

SUMMARY_HEADER = ["Code", "Satz", "Bezeichnung", "Brutto", "Netto", "MWST"]
LINES_HEADER = ["Beschreibung", "Menge", "Preis", "Code", "Satz", "Brutto"]


def default_report_destination(source: Path) -> Path:
    """Return ``<source stem>_mwst.xlsx`` next to *source*."""

    return source.with_name(f"{source.stem}_mwst.xlsx")


def write_vat_report(invoice: Invoice, totals: InvoiceTotals, destination: Path) -> Path:
    """Generate a workbook with the VAT groups and the invoice positions."""

    destination.parent.mkdir(parents=True, exist_ok=True)

    workbook = Workbook()
    summary_ws = workbook.active
    summary_ws.title = "MWST"
    summary_ws.append(SUMMARY_HEADER)

    for group in totals.tax_groups:
        summary_ws.append(
            [
                group.code,
                format_rate(group.rate),
                group.label,
                group.gross_total,
                group.net_total,
                group.tax_total,
            ]
        )

    summary_ws.append([])
    summary_ws.append(
        [
            "Total",
            "",
            invoice.currency,
            totals.grand_gross,
            totals.grand_net,
            totals.grand_tax,
        ]
    )

    lines_ws = workbook.create_sheet(title="Positionen")
    lines_ws.append(LINES_HEADER)
    for item in invoice.line_items:
        lines_ws.append(
            [
                item.description,
                item.quantity,
                item.unit_price,
                item.tax_rate_code,
                format_rate(item.tax_rate),
                item.gross_amount,
            ]
        )

    workbook.save(destination)
    return destination


__all__ = ["default_report_destination", "write_vat_report"]
