from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from openpyxl import load_workbook

from swissbill.models import Invoice
from swissbill.pipeline import compute_totals
from swissbill.reporting import default_report_destination, write_vat_report


def test_vat_report_contains_groups_and_lines(tmp_path: Path, sample_invoice: Invoice) -> None:
    totals = compute_totals(sample_invoice.line_items)
    destination = tmp_path / "report.xlsx"

    write_vat_report(sample_invoice, totals, destination)

    workbook = load_workbook(destination)
    summary_rows = list(workbook["MWST"].iter_rows(values_only=True))
    assert summary_rows[0] == ("Code", "Satz", "Bezeichnung", "Brutto", "Netto", "MWST")
    assert summary_rows[1][:3] == ("A", "8.1%", "Normalsatz")
    assert Decimal(str(summary_rows[1][4])) == Decimal("19759.48")
    assert Decimal(str(summary_rows[2][5])) == Decimal("2.28")
    total_row = summary_rows[-1]
    assert total_row[0] == "Total"
    assert Decimal(str(total_row[3])) == Decimal("21450")
    assert Decimal(str(total_row[5])) == Decimal("1602.8")

    line_rows = list(workbook["Positionen"].iter_rows(values_only=True))
    assert len(line_rows) == 6
    assert line_rows[5][0] == "Fachbuch"
    assert line_rows[5][3] == "B"


def test_default_report_destination() -> None:
    assert default_report_destination(Path("/data/2026-0042.json")) == Path(
        "/data/2026-0042_mwst.xlsx"
    )
