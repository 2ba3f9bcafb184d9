"""Generate or validate ISO 11649 creditor references."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from .. import reference as codec
from ..errors import InvalidBasicReferenceError
from . import EXIT_ENGINE_ERROR, report_error

SUMMARY = "Strukturierte Gläubigerreferenz (RF) erzeugen oder prüfen."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Erzeugt oder prüft eine strukturierte Gläubigerreferenz (RF, ISO 11649)."
    )
    actions = parser.add_subparsers(dest="action", metavar="aktion")
    actions.required = True

    generate = actions.add_parser("generate", help="RF-Referenz aus einer Basisreferenz erzeugen.")
    generate.add_argument("basic", help="Basisreferenz (1 bis 21 Buchstaben oder Ziffern)")
    generate.add_argument(
        "--printed",
        action="store_true",
        help="In Viererblöcken ausgeben (Druckform).",
    )

    validate = actions.add_parser("validate", help="RF-Referenz prüfen.")
    validate.add_argument("reference", nargs="+", help="RF-Referenz, Leerzeichen erlaubt")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.action == "generate":
        try:
            created = codec.create_reference(args.basic)
        except InvalidBasicReferenceError as exc:
            return report_error(exc)
        print(created.printed if args.printed else created.full_reference)
        return 0

    reference = " ".join(args.reference)
    if codec.validate(reference):
        print(f"{codec.format_reference(reference)}: gültig")
        return 0
    print(f"{reference}: ungültig", file=sys.stderr)
    return EXIT_ENGINE_ERROR


if __name__ == "__main__":  # pragma: no cover - direct execution
    raise SystemExit(main())
