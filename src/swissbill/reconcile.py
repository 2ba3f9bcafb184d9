"""Cross-check VAT groups against the invoice-level totals."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Sequence

from .errors import UnbalancedTotalsError
from .models import InvoiceTotals, TaxGroup
from .utils import q2

LOGGER = logging.getLogger("swissbill.reconcile")

TOLERANCE = Decimal("0.01")


def _delta(net: Decimal, tax: Decimal, gross: Decimal) -> Decimal:
    return net + tax - gross


def reconcile_totals(groups: Sequence[TaxGroup], *, tolerance: Decimal = TOLERANCE) -> InvoiceTotals:
    """Sum the calculated ``groups`` and verify that net plus tax equals gross.

    The grand totals are summed from the full-precision group values and
    rounded once. Each rounded group and the rounded grand totals must satisfy
    ``|net + tax - gross| <= tolerance``; otherwise
    :class:`~swissbill.errors.UnbalancedTotalsError` is raised with the delta
    and the group codes involved.
    """

    rounded: list[TaxGroup] = []
    for group in groups:
        output = group.rounded()
        delta = _delta(output.net_total, output.tax_total, output.gross_total)
        if abs(delta) > tolerance:
            raise UnbalancedTotalsError(delta, [group.code])
        rounded.append(output)

    grand_gross = q2(sum((group.gross_total for group in groups), Decimal("0")))
    grand_net = q2(sum((group.net_total for group in groups), Decimal("0")))
    grand_tax = q2(sum((group.tax_total for group in groups), Decimal("0")))

    delta = _delta(grand_net, grand_tax, grand_gross)
    if abs(delta) > tolerance:
        raise UnbalancedTotalsError(delta, [group.code for group in groups])

    LOGGER.debug(
        "Totals reconciled: gross=%s net=%s tax=%s (delta %s)",
        grand_gross,
        grand_net,
        grand_tax,
        delta,
    )
    return InvoiceTotals(
        tax_groups=tuple(rounded),
        grand_gross=grand_gross,
        grand_net=grand_net,
        grand_tax=grand_tax,
    )


__all__ = ["TOLERANCE", "reconcile_totals"]
