"""Swiss invoice VAT breakdown and QR payment-slip engine.

Typical use::

    from swissbill.pipeline import process_invoice
    from swissbill.schema import load_invoice_file

    result = process_invoice(load_invoice_file(path))
    result.totals.tax_groups, result.payment_slip.reference
"""

__all__ = [
    "checksum",
    "classifier",
    "cli",
    "commands",
    "errors",
    "iban",
    "logging",
    "models",
    "pipeline",
    "rates",
    "reconcile",
    "reference",
    "reporting",
    "schema",
    "slip",
    "utils",
    "validator",
    "vat",
]
