"""Assemble the payment-slip record for the QR-bill renderer."""

from __future__ import annotations

import logging
from decimal import Decimal

from . import reference as reference_codec
from .errors import (
    IncompletePartyError,
    InvalidAmountError,
    InvalidIbanError,
    InvalidPartyError,
    InvalidSlipFieldError,
    UnsupportedCurrencyError,
)
from .iban import check_iban
from .models import CreditorReference, InvoiceTotals, Party, PaymentSlip
from .utils import q2

LOGGER = logging.getLogger("swissbill.slip")

SUPPORTED_CURRENCIES = frozenset({"CHF", "EUR"})
MAX_NAME_LENGTH = 70
MAX_AMOUNT = Decimal("999999999.99")
MAX_ADDITIONAL_INFORMATION = 140


def _check_party(party: Party, role: str, *, require_address: bool) -> None:
    name = party.name.strip()
    if not name:
        raise IncompletePartyError(role, ["name"])
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidPartyError(
            f"{role} name has {len(name)} characters, at most {MAX_NAME_LENGTH} allowed"
        )
    if require_address:
        missing = [
            label
            for label, value in (
                ("postal_code", party.postal_code),
                ("town", party.town),
                ("country", party.country),
            )
            if not value.strip()
        ]
        if missing:
            raise IncompletePartyError(role, missing)


def _resolve_reference(reference: CreditorReference | str) -> str:
    if isinstance(reference, CreditorReference):
        return reference_codec.parse(reference.full_reference).full_reference
    return reference_codec.parse(reference).full_reference


def compose_payment_slip(
    totals: InvoiceTotals,
    currency: str,
    creditor: Party,
    reference: CreditorReference | str,
    *,
    debtor: Party | None = None,
    iban: str | None = None,
    additional_information: str = "",
) -> PaymentSlip:
    """Return the :class:`PaymentSlip` for an invoice.

    ``iban`` defaults to the creditor's account. The amount is the reconciled
    grand gross total.
    """

    code = (currency or "").strip().upper()
    if code not in SUPPORTED_CURRENCIES:
        raise UnsupportedCurrencyError(
            f"Currency {currency!r} is not supported on a QR payment slip (CHF or EUR)"
        )

    _check_party(creditor, "creditor", require_address=True)
    if debtor is not None:
        _check_party(debtor, "debtor", require_address=False)

    account = iban if iban is not None else creditor.iban
    if not account:
        raise InvalidIbanError("creditor has no IBAN")
    account = check_iban(account)

    amount = q2(totals.grand_gross)
    if amount < 0 or amount > MAX_AMOUNT:
        raise InvalidAmountError(
            f"Amount {amount} is outside the payment-slip range 0.00 to {MAX_AMOUNT}"
        )

    full_reference = _resolve_reference(reference)

    info = additional_information.strip()
    if len(info) > MAX_ADDITIONAL_INFORMATION:
        raise InvalidSlipFieldError(
            "additional_information", len(info), MAX_ADDITIONAL_INFORMATION
        )

    LOGGER.debug("Payment slip composed for %s %s, reference %s", code, amount, full_reference)
    return PaymentSlip(
        creditor_iban=account,
        creditor=creditor,
        currency=code,
        amount=amount,
        reference=full_reference,
        debtor=debtor,
        additional_information=info,
    )


__all__ = ["MAX_NAME_LENGTH", "SUPPORTED_CURRENCIES", "compose_payment_slip"]
