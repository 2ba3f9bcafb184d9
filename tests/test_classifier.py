from __future__ import annotations

from decimal import Decimal

import pytest

from swissbill.classifier import classify_line_items
from swissbill.errors import RateConflictError


def test_groups_keep_first_appearance_order(make_item) -> None:
    items = [
        make_item("10", rate="0.026", code="B"),
        make_item("20", rate="0.081", code="A"),
        make_item("5", rate="0.026", code="B"),
        make_item("7", rate="0", code="C"),
    ]

    groups = classify_line_items(items)

    assert [group.code for group in groups] == ["B", "A", "C"]
    assert [group.gross_total for group in groups] == [
        Decimal("15"),
        Decimal("20"),
        Decimal("7"),
    ]
    assert groups[0].rate == Decimal("0.026")


def test_sample_items_are_split_in_two_groups(sample_items) -> None:
    groups = classify_line_items(sample_items)

    assert [(group.code, group.gross_total) for group in groups] == [
        ("A", Decimal("21360")),
        ("B", Decimal("90")),
    ]
    assert all(group.net_total == 0 and group.tax_total == 0 for group in groups)


def test_empty_input_returns_no_groups() -> None:
    assert classify_line_items([]) == []


def test_negative_gross_amounts_accumulate(make_item) -> None:
    groups = classify_line_items([make_item("100"), make_item("-30.50")])

    assert groups[0].gross_total == Decimal("69.50")


def test_conflicting_rate_for_same_code_is_rejected(make_item) -> None:
    items = [make_item("10", rate="0.081", code="A"), make_item("10", rate="0.026", code="A")]

    with pytest.raises(RateConflictError) as exc:
        classify_line_items(items)

    assert exc.value.code == "A"
    assert exc.value.first_rate == Decimal("0.081")
    assert exc.value.conflicting_rate == Decimal("0.026")


def test_equal_rates_with_different_scale_do_not_conflict(make_item) -> None:
    groups = classify_line_items([make_item("1", rate="0.081"), make_item("1", rate="0.0810")])

    assert len(groups) == 1


def test_classification_is_repeatable(sample_items) -> None:
    assert classify_line_items(sample_items) == classify_line_items(sample_items)


def test_classification_accepts_generators(sample_items) -> None:
    groups = classify_line_items(item for item in sample_items)

    assert [group.code for group in groups] == ["A", "B"]
