from __future__ import annotations

from decimal import Decimal

import pytest

from swissbill.classifier import classify_line_items
from swissbill.errors import UnbalancedTotalsError
from swissbill.models import TaxGroup
from swissbill.reconcile import reconcile_totals
from swissbill.vat import calculate_breakdown


def test_sample_invoice_reconciles(sample_items) -> None:
    totals = reconcile_totals(calculate_breakdown(classify_line_items(sample_items)))

    assert totals.grand_gross == Decimal("21450.00")
    assert totals.grand_net == Decimal("19847.20")
    assert totals.grand_tax == Decimal("1602.80")
    assert [group.code for group in totals.tax_groups] == ["A", "B"]
    assert totals.tax_groups[0].net_total == Decimal("19759.48")
    assert totals.tax_groups[1].tax_total == Decimal("2.28")


def test_empty_groups_give_zero_totals() -> None:
    totals = reconcile_totals([])

    assert totals.tax_groups == ()
    assert totals.grand_gross == Decimal("0.00")
    assert totals.grand_net == Decimal("0.00")
    assert totals.grand_tax == Decimal("0.00")
    assert totals.as_dict()["grand_gross"] == "0.00"


def test_many_small_groups_stay_within_tolerance(make_item) -> None:
    items = [
        make_item("0.05", rate=rate, code=f"G{index}")
        for index, rate in enumerate(["0.081", "0.026", "0.038", "0.077", "0.025", "0.037"])
    ]

    totals = reconcile_totals(calculate_breakdown(classify_line_items(items)))

    delta = totals.grand_net + totals.grand_tax - totals.grand_gross
    assert abs(delta) <= Decimal("0.01")
    for group in totals.tax_groups:
        assert abs(group.net_total + group.tax_total - group.gross_total) <= Decimal("0.01")


def test_uncalculated_group_is_reported() -> None:
    groups = [
        TaxGroup(code="A", rate=Decimal("0.081"), gross_total=Decimal("100")),
    ]

    with pytest.raises(UnbalancedTotalsError) as exc:
        reconcile_totals(groups)

    assert exc.value.codes == ("A",)
    assert exc.value.delta == Decimal("-100.00")


def test_grand_total_drift_lists_all_group_codes() -> None:
    groups = [
        TaxGroup(
            code="A",
            rate=Decimal("0.081"),
            gross_total=Decimal("10"),
            net_total=Decimal("9.004"),
            tax_total=Decimal("1.004"),
        ),
        TaxGroup(
            code="B",
            rate=Decimal("0.026"),
            gross_total=Decimal("10"),
            net_total=Decimal("9.004"),
            tax_total=Decimal("1.004"),
        ),
    ]

    with pytest.raises(UnbalancedTotalsError) as exc:
        reconcile_totals(groups)

    assert exc.value.codes == ("A", "B")
    assert exc.value.delta == Decimal("0.02")
