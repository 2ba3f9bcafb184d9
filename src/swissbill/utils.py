"""Utility helpers shared across swissbill modules."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .errors import InvoiceFormatError

AMT2 = Decimal("0.01")
ZERO = Decimal("0")


def q2(value: Decimal) -> Decimal:
    """Round ``value`` to two decimals using ``ROUND_HALF_UP``."""

    return value.quantize(AMT2, rounding=ROUND_HALF_UP)


def fmt2(value: Decimal) -> str:
    return f"{q2(value):.2f}"


def format_chf(value: Decimal) -> str:
    """Format ``value`` the Swiss way, e.g. ``1'234.56``."""

    return f"{q2(value):,.2f}".replace(",", "'")


def parse_decimal(value: str | int | float | Decimal | None, *, field: str = "value") -> Decimal:
    """Convert the provided value to :class:`~decimal.Decimal`.

    Floats go through :func:`str` so ``0.081`` stays ``Decimal("0.081")``.
    Empty or invalid values raise :class:`~swissbill.errors.InvoiceFormatError`.
    """

    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or value is None:
        raise InvoiceFormatError(f"{field}: numeric value expected, got {value!r}")

    text = str(value).strip()
    if not text:
        raise InvoiceFormatError(f"{field}: numeric value expected, got an empty string")

    try:
        result = Decimal(text)
    except (InvalidOperation, ValueError) as exc:
        raise InvoiceFormatError(f"{field}: invalid number {text!r}") from exc
    if not result.is_finite():
        raise InvoiceFormatError(f"{field}: invalid number {text!r}")
    return result


def compact(value: str) -> str:
    """Return ``value`` upper-cased with every whitespace character removed."""

    return "".join(value.split()).upper()


def group_by_four(value: str) -> str:
    """Split ``value`` in blocks of four characters (print form)."""

    return " ".join(value[index : index + 4] for index in range(0, len(value), 4))


__all__ = [
    "AMT2",
    "ZERO",
    "compact",
    "fmt2",
    "format_chf",
    "group_by_four",
    "parse_decimal",
    "q2",
]
