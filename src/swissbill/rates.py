"""Runtime loader for the Swiss VAT rate table.

The built-in table holds the rates valid since 2024-01-01. A different table
can be supplied as JSON through the ``SWISSBILL_RATES_PATH`` environment
variable::

    {
      "valid_from": "2024-01-01",
      "rates": [
        {"rate": "0.081", "label": "Normalsatz", "description": "..."}
      ]
    }
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path

from .errors import RatesLoaderError

_RATES_ENV_VAR = "SWISSBILL_RATES_PATH"


@dataclass(frozen=True)
class RateEntry:
    """One VAT rate with its usual name on Swiss invoices."""

    rate: Decimal
    label: str
    description: str = ""


@dataclass(frozen=True)
class RateTable:
    valid_from: str | None
    entries: tuple[RateEntry, ...]

    def find(self, rate: Decimal) -> RateEntry | None:
        """Return the entry for ``rate`` if present."""

        return next((entry for entry in self.entries if entry.rate == rate), None)

    def __contains__(self, rate: object) -> bool:
        return isinstance(rate, Decimal) and self.find(rate) is not None


DEFAULT_TABLE = RateTable(
    valid_from="2024-01-01",
    entries=(
        RateEntry(Decimal("0.081"), "Normalsatz", "Dienstleistungen, Restaurants, Alkohol"),
        RateEntry(Decimal("0.026"), "Reduziert", "Lebensmittel, Bücher, Medikamente"),
        RateEntry(Decimal("0.038"), "Beherbergung", "Hotels und Beherbergung"),
        RateEntry(Decimal("0"), "Befreit", "Exporte, Luftfahrt"),
    ),
)

_CACHED_TABLE: tuple[Path, float, RateTable] | None = None


def _resolve_table_path() -> Path | None:
    candidate = os.getenv(_RATES_ENV_VAR)
    if candidate:
        return Path(candidate)
    return None


def _load_table_from_disk(path: Path) -> RateTable:
    if not path.exists():
        msg = f"Rate table '{path}' not found"
        raise RatesLoaderError(msg)

    with path.open("r", encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except UnicodeDecodeError as exc:
            msg = f"Rate table '{path}' is not UTF-8 encoded"
            raise RatesLoaderError(msg) from exc
        except json.JSONDecodeError as exc:
            msg = f"Rate table '{path}' is not valid JSON"
            raise RatesLoaderError(msg) from exc

    try:
        raw_rates = payload["rates"]
    except (KeyError, TypeError) as exc:
        msg = "Rate table is missing the 'rates' key"
        raise RatesLoaderError(msg) from exc

    if not isinstance(raw_rates, list):
        msg = "Rate table key 'rates' must hold a list"
        raise RatesLoaderError(msg)

    entries = []
    for item in raw_rates:
        try:
            rate = Decimal(str(item["rate"]))
            label = str(item["label"])
        except (KeyError, TypeError, InvalidOperation) as exc:
            msg = f"Rate table entry {item!r} is invalid"
            raise RatesLoaderError(msg) from exc
        entries.append(RateEntry(rate=rate, label=label, description=item.get("description", "")))

    return RateTable(valid_from=payload.get("valid_from"), entries=tuple(entries))


def load_rate_table(force_reload: bool = False) -> RateTable:
    """Load the configured rate table with caching."""

    global _CACHED_TABLE

    table_path = _resolve_table_path()
    if table_path is None:
        return DEFAULT_TABLE

    mtime = table_path.stat().st_mtime if table_path.exists() else 0.0

    if not force_reload and _CACHED_TABLE:
        cached_path, cached_mtime, cached_table = _CACHED_TABLE
        if cached_path == table_path and cached_mtime == mtime:
            return cached_table

    table = _load_table_from_disk(table_path)
    _CACHED_TABLE = (table_path, mtime, table)
    return table


def format_rate(rate: Decimal) -> str:
    """Return ``rate`` as a percentage with one decimal, e.g. ``8.1%``."""

    return f"{rate * 100:.1f}%"


def rate_label(rate: Decimal) -> str:
    """Return the label for ``rate`` or its percentage when it is unknown."""

    entry = load_rate_table().find(rate)
    if entry is None:
        return format_rate(rate)
    return entry.label


__all__ = [
    "DEFAULT_TABLE",
    "RateEntry",
    "RateTable",
    "format_rate",
    "load_rate_table",
    "rate_label",
]
