"""
Checksum algorithms used by Swedish identifiers.

- Luhn (mod 10): personnummer, organisationsnummer, bankgiro, payment
  cards, IMEI
- Weighted mod 10 with cyclic weights: plusgiro
- Mod 97 (ISO 13616): IBAN

The compute functions expect digit strings and do no validation of their
own. The validate functions reject empty and non-numeric input instead of
computing a checksum over it.
"""

import re
from typing import Sequence

# Characters that may separate groups in an identifier
SEPARATORS = re.compile(r"[\s\-+]")

# Century prefixes accepted in front of a 10-digit personnummer/orgnr
CENTURY_PREFIXES = range(16, 21)

PLUSGIRO_WEIGHTS = (7, 3, 1)


def strip_separators(value: str) -> str:
    """Remove whitespace, dashes and plus signs."""
    return SEPARATORS.sub("", value)


def is_digits(value: str) -> bool:
    """True for a non-empty string of ASCII digits."""
    return bool(value) and value.isascii() and value.isdigit()


def luhn_sum(digits: str) -> int:
    """
    Luhn sum of a payload, excluding the check digit.

    Every second digit is doubled starting from the rightmost payload digit
    (the one adjacent to the check digit); doubled values above 9 have 9
    subtracted.
    """
    total = 0
    for i, digit in enumerate(reversed(digits)):
        d = int(digit)
        if i % 2 == 0:
            d *= 2
            if d > 9:
                d -= 9
        total += d
    return total


def luhn_checksum(digits: str) -> int:
    """Calculate the Luhn check digit for a payload."""
    return (10 - (luhn_sum(digits) % 10)) % 10


def is_valid_luhn(value: str) -> bool:
    """
    Validate a Luhn-protected number.

    Separators are stripped. A 12-digit value starting with a century
    prefix (16-20) is validated on its last 10 digits, so both
    YYYYMMDD-NNNN and YYMMDD-NNNN personnummer validate.
    """
    if not value:
        return False

    clean = strip_separators(value)
    if len(clean) == 12 and is_digits(clean) and int(clean[:2]) in CENTURY_PREFIXES:
        clean = clean[2:]

    if len(clean) < 2 or not is_digits(clean):
        return False

    return luhn_checksum(clean[:-1]) == int(clean[-1])


def mod10_weighted(digits: str, weights: Sequence[int] = PLUSGIRO_WEIGHTS) -> int:
    """
    Weighted mod 10 check digit.

    Digits are taken from the right and multiplied by ``weights`` cyclically.
    """
    total = 0
    for i, digit in enumerate(reversed(digits)):
        total += int(digit) * weights[i % len(weights)]
    return (10 - (total % 10)) % 10


def is_valid_mod10_weighted(value: str, weights: Sequence[int] = PLUSGIRO_WEIGHTS) -> bool:
    """Validate a number whose last digit is a weighted mod 10 check digit."""
    clean = strip_separators(value) if value else ""
    if len(clean) < 2 or not is_digits(clean):
        return False
    return mod10_weighted(clean[:-1], weights) == int(clean[-1])


def alphanumeric_to_digits(value: str) -> str:
    """
    Convert an IBAN fragment to its numeric form.

    Digits are kept, letters become two-digit codes (A=10 ... Z=35).
    """
    parts = []
    for char in value.upper():
        if is_digits(char):
            parts.append(char)
        else:
            parts.append(str(ord(char) - 55))
    return "".join(parts)


def mod97(numeric: str) -> int:
    """
    Remainder of a decimal digit string modulo 97.

    Accumulated one digit at a time so arbitrarily long strings never need a
    big integer.
    """
    remainder = 0
    for digit in numeric:
        remainder = (remainder * 10 + int(digit)) % 97
    return remainder


def iban_check_digits(country_code: str, bban: str) -> str:
    """Compute the two IBAN check digits for a country code and BBAN."""
    numeric = alphanumeric_to_digits(f"{bban}{country_code}00")
    return f"{98 - mod97(numeric):02d}"


def is_valid_iban(iban: str) -> bool:
    """Validate an IBAN by moving the first four characters last and checking mod 97 == 1."""
    if not iban:
        return False
    clean = re.sub(r"\s", "", iban).upper()
    if not re.match(r"^[A-Z]{2}\d{2}[A-Z0-9]{1,30}$", clean):
        return False
    rearranged = clean[4:] + clean[:4]
    return mod97(alphanumeric_to_digits(rearranged)) == 1
