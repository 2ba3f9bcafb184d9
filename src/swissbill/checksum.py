"""ISO 7064 MOD 97-10 helpers shared by IBAN and RF reference checks."""

from __future__ import annotations


def to_numeric(text: str) -> str:
    """Map letters to two-digit numbers (``A=10`` ... ``Z=35``), keep digits.

    ``text`` must already be upper-case alphanumeric ASCII.
    """

    return "".join(ch if ch.isdigit() else str(int(ch, 36)) for ch in text)


def mod97(digits: str) -> int:
    """Remainder of the decimal number ``digits`` modulo 97.

    The number is reduced one digit at a time so arbitrarily long inputs
    never need a big integer.
    """

    remainder = 0
    for ch in digits:
        remainder = (remainder * 10 + int(ch)) % 97
    return remainder


__all__ = ["mod97", "to_numeric"]
