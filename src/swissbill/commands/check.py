"""Compliance check of an invoice with an optional Excel log."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from ..pipeline import compute_totals
from ..validator import export_report, validate_invoice
from . import EXIT_ENGINE_ERROR, HANDLED_ERRORS, load_or_report, report_error

SUMMARY = "Pflichtangaben nach Art. 26 MWSTG prüfen."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Prüft die Pflichtangaben einer Rechnung nach Art. 26 MWSTG."
    )
    parser.add_argument("invoice", type=Path, help="Rechnungsdatei (.json oder .xml)")
    parser.add_argument("--log", type=Path, help="Befunde als Excel-Datei speichern.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    invoice = load_or_report(args.invoice)
    if isinstance(invoice, int):
        return invoice

    try:
        totals = compute_totals(invoice.line_items)
        issues = validate_invoice(invoice, totals)
    except HANDLED_ERRORS as exc:
        return report_error(exc)

    for issue in issues:
        print(f"[{issue.code}] {issue.message}")

    if args.log:
        destination = export_report(issues, destination=args.log)
        print(f"Protokoll gespeichert in: {destination}")

    if issues:
        return EXIT_ENGINE_ERROR
    print(f"Rechnung {invoice.number}: keine Befunde.")
    return 0


if __name__ == "__main__":  # pragma: no cover - direct execution
    raise SystemExit(main())
