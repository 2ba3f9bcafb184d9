"""Print the VAT summary of an invoice and optionally export it to Excel."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from ..iban import format_iban, is_qr_iban
from ..models import Invoice, InvoiceTotals
from ..pipeline import compute_totals
from ..rates import format_rate
from ..reporting import default_report_destination, write_vat_report
from ..utils import format_chf
from . import HANDLED_ERRORS, load_or_report, report_error

SUMMARY = "MWST-Aufstellung je Satz mit optionalem Excel-Export."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Zeigt die MWST-Aufstellung einer Rechnung (Brutto, Netto, MWST je Satz)."
    )
    parser.add_argument("invoice", type=Path, help="Rechnungsdatei (.json oder .xml)")
    parser.add_argument(
        "--xlsx",
        nargs="?",
        const="",
        default=None,
        metavar="ZIEL",
        help="Aufstellung zusätzlich als Excel-Datei speichern.",
    )
    return parser


def render_summary(invoice: Invoice, totals: InvoiceTotals) -> str:
    """Return the VAT summary as a plain-text table."""

    rows = [f"Rechnung {invoice.number} ({invoice.currency})"]
    rows.append(f"{'Code':<6}{'Satz':>6}  {'Bezeichnung':<14}{'Brutto':>14}{'Netto':>14}{'MWST':>12}")
    for group in totals.tax_groups:
        rows.append(
            f"{group.code:<6}{format_rate(group.rate):>6}  {group.label:<14}"
            f"{format_chf(group.gross_total):>14}{format_chf(group.net_total):>14}"
            f"{format_chf(group.tax_total):>12}"
        )
    rows.append(
        f"{'Total':<28}{format_chf(totals.grand_gross):>14}"
        f"{format_chf(totals.grand_net):>14}{format_chf(totals.grand_tax):>12}"
    )
    if invoice.issuer is not None and invoice.issuer.iban:
        account = f"Konto: {format_iban(invoice.issuer.iban)}"
        if is_qr_iban(invoice.issuer.iban):
            account += " (QR-IBAN)"
        rows.append(account)
    return "\n".join(rows)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    invoice = load_or_report(args.invoice)
    if isinstance(invoice, int):
        return invoice

    try:
        totals = compute_totals(invoice.line_items)
        print(render_summary(invoice, totals))
        if args.xlsx is not None:
            destination = Path(args.xlsx) if args.xlsx else default_report_destination(args.invoice)
            write_vat_report(invoice, totals, destination)
            print(f"MWST-Aufstellung gespeichert in: {destination}")
    except HANDLED_ERRORS as exc:
        return report_error(exc)

    return 0


if __name__ == "__main__":  # pragma: no cover - direct execution
    raise SystemExit(main())
