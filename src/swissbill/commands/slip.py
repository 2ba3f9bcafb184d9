"""Compose the QR payment-slip record of an invoice and print it as JSON."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Sequence

from ..pipeline import process_invoice
from . import HANDLED_ERRORS, load_or_report, report_error

SUMMARY = "Daten des QR-Zahlteils als JSON ausgeben."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Erstellt die Daten des QR-Zahlteils (IBAN, Referenz, Betrag) als JSON."
    )
    parser.add_argument("invoice", type=Path, help="Rechnungsdatei (.json oder .xml)")
    parser.add_argument(
        "--basic-reference",
        dest="basic_reference",
        help="Basisreferenz, falls die Rechnung keine RF-Referenz enthält.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="JSON in diese Datei schreiben statt auf die Standardausgabe.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    invoice = load_or_report(args.invoice)
    if isinstance(invoice, int):
        return invoice

    try:
        result = process_invoice(invoice, basic_reference=args.basic_reference)
    except HANDLED_ERRORS as exc:
        return report_error(exc)

    payload = {
        "invoice": invoice.number,
        "totals": result.totals.as_dict(),
        "payment_slip": result.payment_slip.as_dict(),
    }
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text + "\n", encoding="utf-8")
        print(f"Zahlteil gespeichert in: {args.output}")
    else:
        print(text)
    return 0


if __name__ == "__main__":  # pragma: no cover - direct execution
    raise SystemExit(main())
