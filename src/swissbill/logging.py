"""Logging set-up and structured Excel logs.

``configure_logging`` wires the ``swissbill`` logger to a rotating log file
(and stderr when verbose). :class:`ExcelLogger` writes tabular records, such
as compliance issues, to a workbook with :mod:`openpyxl`.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable, Protocol, Sequence

_LOG_DIR_ENV_VAR = "SWISSBILL_LOG_DIR"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _resolve_log_dir() -> Path:
    candidate = os.getenv(_LOG_DIR_ENV_VAR)
    if candidate:
        return Path(candidate)
    return Path.cwd() / "work" / "logs"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Configure the ``swissbill`` logger once and return it."""

    logger = logging.getLogger("swissbill")
    if not logger.handlers:
        log_dir = _resolve_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            log_dir / "swissbill.log",
            maxBytes=1_000_000,
            backupCount=5,
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False

    if verbose and not any(getattr(h, "_swissbill_console", False) for h in logger.handlers):
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter("%(levelname)s [%(name)s] %(message)s"))
        console._swissbill_console = True  # type: ignore[attr-defined]
        logger.addHandler(console)
        logger.setLevel(logging.DEBUG)

    logging.captureWarnings(True)
    return logger


class RowLike(Protocol):
    def as_cells(self) -> Sequence[object]:
        """Cells of one sheet row, in column order."""


@dataclass(frozen=True)
class ExcelLoggerConfig:
    """Layout of an Excel log: header row, file and sheet name."""

    columns: Sequence[str]
    filename: str = "swissbill-log.xlsx"
    sheet_title: str = "Log"
    max_column_width: int = 80


class ExcelLogger:
    """Write findings and other records to a workbook with :mod:`openpyxl`.

    The header row is bold and frozen, columns are sized to their longest
    value. Each call to :meth:`write_rows` replaces the file.
    """

    def __init__(self, config: ExcelLoggerConfig) -> None:
        self.config = config

    def _cells(self, row: RowLike | Sequence[object]) -> list[object]:
        if hasattr(row, "as_cells"):
            return list(row.as_cells())  # type: ignore[union-attr]
        return list(row)  # type: ignore[arg-type]

    def write_rows(self, rows: Iterable[RowLike | Sequence[object]]) -> Path:
        """Save ``rows`` below the header and return the file path."""

        from openpyxl import Workbook
        from openpyxl.styles import Font
        from openpyxl.utils import get_column_letter

        destination = Path(self.config.filename)
        destination.parent.mkdir(parents=True, exist_ok=True)

        workbook = Workbook()
        sheet = workbook.active
        sheet.title = self.config.sheet_title

        widths = [len(str(title)) for title in self.config.columns]
        if self.config.columns:
            sheet.append(list(self.config.columns))
            for cell in sheet[1]:
                cell.font = Font(bold=True)
            sheet.freeze_panes = "A2"

        for row in rows:
            cells = self._cells(row)
            sheet.append(cells)
            for index, value in enumerate(cells):
                length = len(str(value)) if value is not None else 0
                if index >= len(widths):
                    widths.append(length)
                else:
                    widths[index] = max(widths[index], length)

        for index, width in enumerate(widths, start=1):
            sheet.column_dimensions[get_column_letter(index)].width = min(
                width + 2, self.config.max_column_width
            )

        workbook.save(destination)
        return destination


__all__ = ["ExcelLogger", "ExcelLoggerConfig", "RowLike", "configure_logging"]
