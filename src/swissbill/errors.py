"""Exceptions raised by the invoice engine.

Every error is a local validation failure detected while computing a single
invoice. None of them is transient: the caller decides whether to block the
submission, show a warning or log the problem.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence


class InvoiceEngineError(ValueError):
    """Base class for invoice computation failures."""


class RateConflictError(InvoiceEngineError):
    """The same tax code is used with two different rates in one invoice."""

    def __init__(self, code: str, first_rate: Decimal, conflicting_rate: Decimal) -> None:
        self.code = code
        self.first_rate = first_rate
        self.conflicting_rate = conflicting_rate
        super().__init__(
            f"Tax code {code!r} is used with rate {first_rate} and rate {conflicting_rate}"
        )


class InvalidRateError(InvoiceEngineError):
    """A tax rate lies outside ``[0, 1]``."""

    def __init__(self, code: str, rate: Decimal) -> None:
        self.code = code
        self.rate = rate
        super().__init__(f"Tax rate {rate} for code {code!r} must be between 0 and 1")


class UnbalancedTotalsError(InvoiceEngineError):
    """Net plus tax does not add up to gross within the tolerance."""

    def __init__(self, delta: Decimal, codes: Sequence[str]) -> None:
        self.delta = delta
        self.codes = tuple(codes)
        joined = ", ".join(self.codes) or "-"
        super().__init__(f"Totals do not reconcile (delta {delta}, groups: {joined})")


class InvalidBasicReferenceError(InvoiceEngineError):
    """Malformed input for creditor reference generation."""


class InvalidCreditorReferenceError(InvoiceEngineError):
    """A full RF reference fails the ISO 11649 check."""


class InvalidIbanError(InvoiceEngineError):
    """The IBAN fails the structural or checksum validation."""


class UnsupportedCurrencyError(InvoiceEngineError):
    """The currency cannot be used on a QR payment slip."""


class InvalidAmountError(InvoiceEngineError):
    """The amount lies outside the range accepted on a payment slip."""


class InvalidPartyError(InvoiceEngineError):
    """A creditor or debtor field breaks the payment-slip constraints."""


class IncompletePartyError(InvalidPartyError):
    """A mandatory creditor or debtor field is missing."""

    def __init__(self, role: str, fields: Sequence[str]) -> None:
        self.role = role
        self.fields = tuple(fields)
        super().__init__(f"{role} is missing required fields: {', '.join(self.fields)}")


class InvalidSlipFieldError(InvoiceEngineError):
    """A free-text payment-slip field exceeds its maximum length."""

    def __init__(self, field: str, length: int, limit: int) -> None:
        self.field = field
        self.length = length
        self.limit = limit
        super().__init__(f"{field} has {length} characters, at most {limit} allowed")


class InvoiceFormatError(InvoiceEngineError):
    """An input document or value cannot be interpreted."""


class RatesLoaderError(RuntimeError):
    """Raised when the rate table configuration cannot be parsed."""


__all__ = [
    "IncompletePartyError",
    "InvalidAmountError",
    "InvalidBasicReferenceError",
    "InvalidCreditorReferenceError",
    "InvalidIbanError",
    "InvalidPartyError",
    "InvalidRateError",
    "InvalidSlipFieldError",
    "InvoiceEngineError",
    "InvoiceFormatError",
    "RateConflictError",
    "RatesLoaderError",
    "UnbalancedTotalsError",
    "UnsupportedCurrencyError",
]
