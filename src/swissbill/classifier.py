"""Partition invoice line items into VAT groups."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable

from .errors import RateConflictError
from .models import LineItem, TaxGroup

LOGGER = logging.getLogger("swissbill.classifier")


def classify_line_items(items: Iterable[LineItem]) -> list[TaxGroup]:
    """Group ``items`` by tax code, keeping the order in which codes first appear.

    The rate of a group is the rate of the first item seen for its code; a
    later item carrying another rate for the same code raises
    :class:`~swissbill.errors.RateConflictError`. Gross amounts are summed
    as given, negative (credit) lines included.
    """

    rates: dict[str, Decimal] = {}
    gross: dict[str, Decimal] = {}

    for item in items:
        code = item.tax_rate_code
        if code not in rates:
            rates[code] = item.tax_rate
            gross[code] = Decimal("0")
        elif rates[code] != item.tax_rate:
            raise RateConflictError(code, rates[code], item.tax_rate)
        gross[code] += item.gross_amount

    LOGGER.debug("Classified line items into %d group(s): %s", len(rates), list(rates))
    return [TaxGroup(code=code, rate=rate, gross_total=gross[code]) for code, rate in rates.items()]


__all__ = ["classify_line_items"]
