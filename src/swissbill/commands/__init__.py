"""Command implementations dispatched by :mod:`swissbill.cli`."""

from __future__ import annotations

import sys
from pathlib import Path

from ..errors import InvoiceEngineError, RatesLoaderError
from ..models import Invoice
from ..schema import load_invoice_file

EXIT_ENGINE_ERROR = 1
EXIT_MISSING_FILE = 2

# Failures reported as "[FEHLER] ..." with exit status 1.
HANDLED_ERRORS = (InvoiceEngineError, RatesLoaderError)


def report_error(exc: Exception) -> int:
    print(f"[FEHLER] {exc}", file=sys.stderr)
    return EXIT_ENGINE_ERROR


def load_or_report(path: Path) -> Invoice | int:
    """Load *path* or print the problem and return the exit status."""

    try:
        return load_invoice_file(path)
    except FileNotFoundError as exc:
        print(f"[FEHLER] {exc}", file=sys.stderr)
        return EXIT_MISSING_FILE
    except HANDLED_ERRORS as exc:
        return report_error(exc)


__all__ = [
    "EXIT_ENGINE_ERROR",
    "EXIT_MISSING_FILE",
    "HANDLED_ERRORS",
    "load_or_report",
    "report_error",
]
