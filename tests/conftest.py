from __future__ import annotations

import copy
import logging
import sys
from decimal import Decimal
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from swissbill.models import Invoice, LineItem, Party  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("SWISSBILL_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("SWISSBILL_RATES_PATH", raising=False)
    yield
    logger = logging.getLogger("swissbill")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def item(gross: str, rate: str = "0.081", code: str = "A", description: str = "Position") -> LineItem:
    return LineItem(
        description=description,
        quantity=Decimal("1"),
        unit_price=Decimal(gross),
        tax_rate_code=code,
        tax_rate=Decimal(rate),
        gross_amount=Decimal(gross),
    )


@pytest.fixture
def make_item():
    return item


SAMPLE_INVOICE_DATA = {
    "nummer": "2026-0042",
    "datum": "2026-01-28",
    "leistungsDatum": "2026-01-15",
    "faelligkeitsDatum": "2026-02-27",
    "waehrung": "CHF",
    "referenz": "RF18 5390 0754 7034",
    "status": "open",
    "issuer": {
        "name": "Helvetia Digital GmbH",
        "street": "Bahnhofstrasse 42",
        "zip": "8001",
        "city": "Zürich",
        "country": "CH",
        "mwstNummer": "CHE-123.456.789 MWST",
        "iban": "CH93 0076 2011 6238 5295 7",
        "bank": "Zürcher Kantonalbank",
    },
    "recipient": {
        "name": "Müller & Partner AG",
        "street": "Limmatquai 78",
        "zip": "8005",
        "city": "Zürich",
        "uid": "CHE-987.654.321",
    },
    "items": [
        {"id": 1, "description": "UX/UI Design", "quantity": 40, "unitPrice": 180, "totalBrutto": 7200, "mwstRate": 0.081, "mwstCode": "A"},
        {"id": 2, "description": "Frontend-Entwicklung", "quantity": 60, "unitPrice": 195, "totalBrutto": 11700, "mwstRate": 0.081, "mwstCode": "A"},
        {"id": 3, "description": "Projektmanagement", "quantity": 12, "unitPrice": 160, "totalBrutto": 1920, "mwstRate": 0.081, "mwstCode": "A"},
        {"id": 4, "description": "Hosting & Domain", "quantity": 1, "unitPrice": 540, "totalBrutto": 540, "mwstRate": 0.081, "mwstCode": "A"},
        {"id": 5, "description": "Fachbuch", "quantity": 2, "unitPrice": 45, "totalBrutto": 90, "mwstRate": 0.026, "mwstCode": "B"},
    ],
}


@pytest.fixture
def sample_items() -> list[LineItem]:
    return [
        item("7200", description="UX/UI Design"),
        item("11700", description="Frontend-Entwicklung"),
        item("1920", description="Projektmanagement"),
        item("540", description="Hosting & Domain"),
        item("90", rate="0.026", code="B", description="Fachbuch"),
    ]


@pytest.fixture
def sample_invoice_data() -> dict:
    return copy.deepcopy(SAMPLE_INVOICE_DATA)


@pytest.fixture
def sample_invoice(sample_invoice_data) -> Invoice:
    return Invoice.from_mapping(sample_invoice_data)


@pytest.fixture
def creditor() -> Party:
    return Party(
        name="Helvetia Digital GmbH",
        street="Bahnhofstrasse",
        building_number="42",
        postal_code="8001",
        town="Zürich",
        iban="CH9300762011623852957",
    )
