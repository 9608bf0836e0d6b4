"""
Organisationsnummer handling for Swedish legal entities.

Ten digits, NNNNNN-NNNN. The leading digit is the entity group, the
third and fourth digits together are always 20 or more (which keeps the
number apart from a personnummer month) and the last digit is a Luhn
control. Some registries print a "16" century prefix in front.

Generated numbers are aktiebolag: "55", a third digit 6-9, six digits.
"""

import re
from dataclasses import dataclass

from luhnlab.checksum import luhn_checksum
from luhnlab.prng import RandomSource, random_int

ORGANIZATION_TYPES = {
    "1": "Dödsbo (Estate of deceased)",
    "2": "Stat, landsting, kommun (Government)",
    "5": "Aktiebolag (Limited company)",
    "6": "Enkla bolag (Simple partnership)",
    "7": "Ekonomisk förening (Economic association)",
    "8": "Ideell förening, stiftelse (Non-profit/Foundation)",
    "9": "Handelsbolag, kommanditbolag (Partnership)",
}

AKTIEBOLAG_PREFIX = "55"

_ORGNR_RE = re.compile(r"(?:16)?(?P<number>[0-9]{10})")
_SEPARATORS = re.compile(r"[\s-]")


@dataclass
class OrganisationsnummerInfo:
    normalized: str = ""
    organization_type: str = ""
    organization_type_code: str = ""
    is_valid: bool = False


def validate_organisationsnummer(orgnr: str) -> OrganisationsnummerInfo:
    """Check group digits and control digit; the "16" prefix is dropped."""
    match = _ORGNR_RE.fullmatch(_SEPARATORS.sub("", orgnr))
    if match is None:
        return OrganisationsnummerInfo()

    number = match["number"]
    if int(number[2:4]) < 20 or luhn_checksum(number[:-1]) != int(number[-1]):
        return OrganisationsnummerInfo(normalized=number)

    code = number[0]
    return OrganisationsnummerInfo(
        normalized=number,
        organization_type=ORGANIZATION_TYPES.get(code, "Unknown"),
        organization_type_code=code,
        is_valid=True,
    )


def generate_organisationsnummer(rng: RandomSource) -> str:
    """Random aktiebolag number as NNNNNN-NNNN with a valid control digit."""
    base = f"{AKTIEBOLAG_PREFIX}{random_int(6, 9, rng)}{random_int(100000, 999999, rng)}"
    return f"{base[:6]}-{base[6:]}{luhn_checksum(base)}"
