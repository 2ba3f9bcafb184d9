"""Swiss VAT breakdown (Art. 26 MWSTG).

Swiss prices are tax-inclusive, so VAT is extracted from the gross amount::

    net = gross / (1 + rate)
    tax = gross - net

and never computed as ``gross * rate``. Values stay in full precision here;
rounding to two decimals happens when output values are produced (see
:meth:`swissbill.models.TaxGroup.rounded` and :mod:`swissbill.reconcile`).
"""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal, localcontext
from typing import Iterable

from .errors import InvalidRateError
from .models import TaxGroup

ONE = Decimal("1")
PRECISION = 28


def check_rate(rate: Decimal, code: str = "") -> Decimal:
    """Return ``rate`` when it lies within ``[0, 1]``."""

    if not rate.is_finite() or rate < 0 or rate > ONE:
        raise InvalidRateError(code, rate)
    return rate


def split_gross(gross: Decimal, rate: Decimal, *, code: str = "") -> tuple[Decimal, Decimal]:
    """Split a tax-inclusive ``gross`` amount into ``(net, tax)``."""

    check_rate(rate, code)
    if rate == 0:
        return gross, Decimal("0")

    with localcontext() as ctx:
        ctx.prec = PRECISION
        net = gross / (ONE + rate)
        tax = gross - net
    return net, tax


def calculate_group(group: TaxGroup) -> TaxGroup:
    net, tax = split_gross(group.gross_total, group.rate, code=group.code)
    return replace(group, net_total=net, tax_total=tax)


def calculate_breakdown(groups: Iterable[TaxGroup]) -> list[TaxGroup]:
    """Return ``groups`` with net and tax totals filled in, unrounded."""

    return [calculate_group(group) for group in groups]


__all__ = ["calculate_breakdown", "calculate_group", "check_rate", "split_gross"]
