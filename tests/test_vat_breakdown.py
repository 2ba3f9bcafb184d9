from __future__ import annotations

from decimal import Decimal

import pytest

from swissbill.errors import InvalidRateError
from swissbill.models import TaxGroup
from swissbill.vat import calculate_breakdown, split_gross


def test_split_gross_extracts_vat_from_tax_inclusive_price() -> None:
    net, tax = split_gross(Decimal("100"), Decimal("0.081"))

    assert net + tax == Decimal("100")
    assert net.quantize(Decimal("0.01")) == Decimal("92.51")
    assert tax.quantize(Decimal("0.01")) == Decimal("7.49")


def test_breakdown_keeps_full_precision_until_rounded() -> None:
    groups = calculate_breakdown(
        [TaxGroup(code="A", rate=Decimal("0.081"), gross_total=Decimal("21360"))]
    )

    group = groups[0]
    assert group.net_total != group.net_total.quantize(Decimal("0.01"))
    assert group.net_total + group.tax_total == Decimal("21360")

    rounded = group.rounded()
    assert rounded.gross_total == Decimal("21360.00")
    assert rounded.net_total == Decimal("19759.48")
    assert rounded.tax_total == Decimal("1600.52")


def test_breakdown_for_reduced_rate() -> None:
    (group,) = calculate_breakdown(
        [TaxGroup(code="B", rate=Decimal("0.026"), gross_total=Decimal("90"))]
    )

    assert group.rounded().net_total == Decimal("87.72")
    assert group.rounded().tax_total == Decimal("2.28")


def test_zero_rate_leaves_gross_untouched() -> None:
    (group,) = calculate_breakdown(
        [TaxGroup(code="Z", rate=Decimal("0"), gross_total=Decimal("250.40"))]
    )

    assert group.net_total == Decimal("250.40")
    assert group.tax_total == 0


def test_negative_gross_rounds_symmetrically() -> None:
    (group,) = calculate_breakdown(
        [TaxGroup(code="A", rate=Decimal("0.081"), gross_total=Decimal("-50"))]
    )

    assert group.rounded().net_total == Decimal("-46.25")
    assert group.rounded().tax_total == Decimal("-3.75")


@pytest.mark.parametrize("rate", ["1.5", "-0.01", "1.0001"])
def test_rate_outside_unit_interval_is_rejected(rate: str) -> None:
    with pytest.raises(InvalidRateError) as exc:
        calculate_breakdown([TaxGroup(code="X", rate=Decimal(rate), gross_total=Decimal("10"))])

    assert exc.value.code == "X"
    assert exc.value.rate == Decimal(rate)


def test_rate_of_one_is_accepted() -> None:
    net, tax = split_gross(Decimal("10"), Decimal("1"))

    assert net == Decimal("5")
    assert tax == Decimal("5")
