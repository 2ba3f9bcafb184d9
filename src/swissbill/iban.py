"""IBAN checks for the payment-slip creditor account."""

from __future__ import annotations

import re

from .checksum import mod97, to_numeric
from .errors import InvalidIbanError
from .utils import compact, group_by_four

_IBAN_PATTERN = re.compile(r"[A-Z]{2}[0-9]{2}[A-Z0-9]{1,30}")

# Lengths for the countries a Swiss QR-bill creditor usually banks in.
IBAN_LENGTHS = {
    "AD": 24,
    "AT": 20,
    "BE": 16,
    "CH": 21,
    "CZ": 24,
    "DE": 22,
    "DK": 18,
    "ES": 24,
    "FI": 18,
    "FR": 27,
    "GB": 22,
    "HU": 28,
    "IE": 22,
    "IT": 27,
    "LI": 21,
    "LU": 20,
    "MC": 27,
    "NL": 18,
    "NO": 15,
    "PL": 28,
    "PT": 25,
    "SE": 24,
    "SK": 24,
    "SM": 27,
}

QR_IID_RANGE = range(30000, 32000)


def normalise_iban(value: str) -> str:
    """Return ``value`` in electronic form (no blanks, upper-case)."""

    return compact(value)


def check_iban(value: str) -> str:
    """Validate ``value`` and return the electronic form.

    Checks the layout (country code, two check digits, up to 30
    alphanumerics), the country-specific length where known and the
    MOD 97-10 check digits.
    """

    if not isinstance(value, str) or not value.isascii():
        raise InvalidIbanError(f"IBAN {value!r} is not a string of ASCII characters")

    iban = normalise_iban(value)
    if not _IBAN_PATTERN.fullmatch(iban):
        raise InvalidIbanError(f"IBAN {value!r} is not structurally valid")

    expected = IBAN_LENGTHS.get(iban[:2])
    if expected is not None and len(iban) != expected:
        raise InvalidIbanError(
            f"IBAN {value!r} has {len(iban)} characters, {expected} expected for {iban[:2]}"
        )

    if mod97(to_numeric(iban[4:] + iban[:4])) != 1:
        raise InvalidIbanError(f"IBAN {value!r} has invalid check digits")
    return iban


def is_valid_iban(value: str) -> bool:
    try:
        check_iban(value)
    except InvalidIbanError:
        return False
    return True


def is_qr_iban(value: str) -> bool:
    """Return ``True`` for a Swiss/Liechtenstein QR-IBAN (IID 30000-31999)."""

    iban = normalise_iban(value)
    if iban[:2] not in {"CH", "LI"} or len(iban) != 21 or not iban[4:9].isdigit():
        return False
    return int(iban[4:9]) in QR_IID_RANGE


def format_iban(value: str) -> str:
    """Return the print form, e.g. ``CH93 0076 2011 6238 5295 7``."""

    return group_by_four(normalise_iban(value))


__all__ = [
    "IBAN_LENGTHS",
    "check_iban",
    "format_iban",
    "is_qr_iban",
    "is_valid_iban",
    "normalise_iban",
]
