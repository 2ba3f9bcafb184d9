"""End-to-end computation for a single invoice.

line items -> classifier -> VAT breakdown -> reconciliation -> payment slip
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from . import reference as reference_codec
from .classifier import classify_line_items
from .models import CreditorReference, Invoice, InvoiceTotals, LineItem, Party, PaymentSlip
from .reconcile import reconcile_totals
from .slip import compose_payment_slip
from .vat import calculate_breakdown

LOGGER = logging.getLogger("swissbill.pipeline")


@dataclass(frozen=True)
class InvoiceResult:
    """Output handed to the invoice and QR-bill renderers."""

    invoice: Invoice
    totals: InvoiceTotals
    payment_slip: PaymentSlip


def compute_totals(items: Iterable[LineItem]) -> InvoiceTotals:
    """Group, split and reconcile ``items``."""

    groups = classify_line_items(items)
    return reconcile_totals(calculate_breakdown(groups))


def resolve_reference(invoice: Invoice, basic_reference: str | None = None) -> CreditorReference:
    """Pick the creditor reference for ``invoice``.

    A reference stored on the invoice wins, then an explicit
    ``basic_reference``; otherwise one is derived from the invoice number.
    """

    if invoice.reference:
        return reference_codec.parse(invoice.reference)
    if basic_reference:
        return reference_codec.create_reference(basic_reference)
    return reference_codec.reference_from_invoice_number(invoice.number)


def process_invoice(
    invoice: Invoice,
    *,
    basic_reference: str | None = None,
    creditor: Party | None = None,
) -> InvoiceResult:
    """Run the whole computation for ``invoice``.

    ``creditor`` defaults to the invoice issuer. Any
    :class:`~swissbill.errors.InvoiceEngineError` stops the computation.
    """

    LOGGER.debug("Processing invoice %s (%d line items)", invoice.number, len(invoice.line_items))

    totals = compute_totals(invoice.line_items)
    reference = resolve_reference(invoice, basic_reference)

    party = creditor or invoice.issuer or Party(name="")
    slip = compose_payment_slip(
        totals,
        invoice.currency,
        party,
        reference,
        debtor=invoice.recipient,
        additional_information=f"Rechnung {invoice.number}",
    )
    LOGGER.info(
        "Invoice %s: gross %s %s, reference %s",
        invoice.number,
        totals.grand_gross,
        slip.currency,
        slip.reference,
    )
    return InvoiceResult(invoice=invoice, totals=totals, payment_slip=slip)


__all__ = ["InvoiceResult", "compute_totals", "process_invoice", "resolve_reference"]
