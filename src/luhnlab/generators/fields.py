"""
Atomic field generators.

Each function consumes the random source in a fixed order; changing the
order changes every seeded record downstream.
"""

from typing import Optional

from luhnlab.checksum import luhn_checksum
from luhnlab.config import settings
from luhnlab.prng import RandomSource, random_element, random_int

FIRST_NAMES = [
    "Erik", "Lars", "Karl", "Anders", "Johan", "Per", "Nils", "Mikael", "Jan", "Hans",
    "Maria", "Anna", "Margareta", "Elisabeth", "Eva", "Birgitta", "Kristina", "Karin",
    "William", "Liam", "Noah", "Hugo", "Lucas", "Oliver",
    "Alice", "Maja", "Elsa", "Astrid", "Wilma", "Freja",
]

LAST_NAMES = [
    "Andersson", "Johansson", "Karlsson", "Nilsson", "Eriksson",
    "Larsson", "Olsson", "Persson", "Svensson", "Gustafsson",
]

# Letters used on Swedish plates (no I, O, Q, V, Å, Ä, Ö)
PLATE_LETTERS = "ABCDEFGHJKLMNPRSTUWXYZ"
PLATE_LAST_CHARS = "0123456789" + PLATE_LETTERS

IMEI_TACS = ["35", "86", "99", "01"]

CARD_PREFIXES = {
    "Visa": "424242",
    "Mastercard": "555555",
}

# PTS reserves 070-174 06 05 .. 070-174 06 99 for fiction
FICTIONAL_MOBILE_PREFIX = "070-17406"
CARD_EXPIRY_FIRST_YEAR = 25
CARD_EXPIRY_LAST_YEAR = 30

_ASCII_FOLD = str.maketrans({"å": "a", "ä": "a", "ö": "o", "é": "e"})


def first_name(rng: RandomSource) -> str:
    return random_element(FIRST_NAMES, rng)


def last_name(rng: RandomSource) -> str:
    return random_element(LAST_NAMES, rng)


def record_id(rng: RandomSource) -> int:
    return random_int(1, 999999, rng)


def slugify_name(name: str) -> str:
    """Lower-case and fold Swedish letters for use in an email address."""
    return name.lower().translate(_ASCII_FOLD)


def email_address(first: str, last: str, domain: Optional[str] = None) -> str:
    return f"{slugify_name(first)}.{slugify_name(last)}@{domain or settings.email_domain}"


def mobile_number(rng: RandomSource) -> str:
    return f"{FICTIONAL_MOBILE_PREFIX}{random_int(5, 99, rng):02d}"


def registration_plate(rng: RandomSource) -> str:
    """Plate in the form ABC 12D (last character a digit or a letter)."""
    letters = "".join(random_element(PLATE_LETTERS, rng) for _ in range(3))
    digits = random_int(10, 99, rng)
    last = random_element(PLATE_LAST_CHARS, rng)
    return f"{letters} {digits}{last}"


def imei(rng: RandomSource) -> str:
    """15-digit IMEI: TAC prefix padded with random digits, Luhn digit last."""
    base = random_element(IMEI_TACS, rng)
    while len(base) < 14:
        base += str(random_int(0, 9, rng))
    return base + str(luhn_checksum(base))


def card_number(brand: str, rng: RandomSource) -> str:
    """
    16-digit card number with a brand IIN and a Luhn digit.

    Unknown brands get the Visa test prefix followed by a 9-digit block.
    """
    prefix = CARD_PREFIXES.get(brand)
    if prefix is None:
        base = "424242" + str(random_int(100000000, 999999999, rng))
    else:
        base = prefix
        while len(base) < 15:
            base += str(random_int(0, 9, rng))
    return base + str(luhn_checksum(base))


def card_expiry(rng: RandomSource) -> str:
    """MM/YY with the year drawn from a fixed range, independent of the current date."""
    month = random_int(1, 12, rng)
    year = random_int(CARD_EXPIRY_FIRST_YEAR, CARD_EXPIRY_LAST_YEAR, rng)
    return f"{month:02d}/{year:02d}"
