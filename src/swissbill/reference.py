"""ISO 11649 structured creditor reference ("RF" reference).

The reference is ``"RF" + check digits + basic reference`` where the check
digits follow ISO 7064 MOD 97-10, the same scheme as IBAN check digits:

* generation computes ``98 - mod97(numeric(basic + "RF00"))``;
* validation moves the first four characters to the end and expects a
  remainder of ``1``.

Only RF references are handled here; legacy ESR/QRR references are not.
"""

from __future__ import annotations

import re

from .checksum import mod97, to_numeric
from .errors import InvalidBasicReferenceError, InvalidCreditorReferenceError
from .models import CreditorReference
from .utils import compact, group_by_four

PREFIX = "RF"
MAX_BASIC_LENGTH = 21

_BASIC_PATTERN = re.compile(r"[A-Z0-9]{1,%d}" % MAX_BASIC_LENGTH)
_FULL_PATTERN = re.compile(r"RF[0-9]{2}[A-Z0-9]{1,%d}" % MAX_BASIC_LENGTH)


def _check_digits(basic: str) -> str:
    remainder = mod97(to_numeric(f"{basic}{PREFIX}00"))
    # remainder is 0..96, so the result is always 02..98
    return f"{98 - remainder:02d}"


def create_reference(basic_reference: str) -> CreditorReference:
    """Return the :class:`CreditorReference` for ``basic_reference``."""

    if not isinstance(basic_reference, str):
        raise InvalidBasicReferenceError("Basic reference must be a string")

    basic = compact(basic_reference)
    if not basic_reference.isascii() or not _BASIC_PATTERN.fullmatch(basic):
        raise InvalidBasicReferenceError(
            f"Basic reference {basic_reference!r} must contain 1 to "
            f"{MAX_BASIC_LENGTH} letters or digits"
        )
    return CreditorReference(basic_reference=basic, check_digits=_check_digits(basic))


def generate(basic_reference: str) -> str:
    """Return the full RF reference (electronic form) for ``basic_reference``."""

    return create_reference(basic_reference).full_reference


def validate(full_reference: str) -> bool:
    """Return ``True`` when ``full_reference`` is a valid RF reference.

    Blanks are ignored, so the printed form ``RF18 5390 0754 7034`` is
    accepted as well.
    """

    if not isinstance(full_reference, str) or not full_reference.isascii():
        return False
    reference = compact(full_reference)
    if not _FULL_PATTERN.fullmatch(reference):
        return False
    rearranged = reference[4:] + reference[:4]
    return mod97(to_numeric(rearranged)) == 1


def parse(full_reference: str) -> CreditorReference:
    """Split a valid RF reference into its parts."""

    if not validate(full_reference):
        raise InvalidCreditorReferenceError(
            f"{full_reference!r} is not a valid ISO 11649 creditor reference"
        )
    reference = compact(full_reference)
    return CreditorReference(basic_reference=reference[4:], check_digits=reference[2:4])


def format_reference(full_reference: str) -> str:
    """Return the print form of ``full_reference`` in blocks of four."""

    return group_by_four(compact(full_reference))


def reference_from_invoice_number(number: str) -> CreditorReference:
    """Derive a creditor reference from the letters and digits of ``number``.

    ``"2026-0042"`` becomes basic reference ``"20260042"``. Numbers that
    keep more than 21 characters are shortened from the left.
    """

    basic = "".join(ch for ch in compact(number) if ch.isascii() and ch.isalnum())
    if not basic:
        raise InvalidBasicReferenceError(
            f"Invoice number {number!r} contains no letters or digits"
        )
    return create_reference(basic[-MAX_BASIC_LENGTH:])


__all__ = [
    "create_reference",
    "format_reference",
    "generate",
    "parse",
    "reference_from_invoice_number",
    "validate",
]
