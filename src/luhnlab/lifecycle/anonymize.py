"""
Deterministic masking of personnummer.

Masking swaps a real-looking number for a different, still Luhn-valid one:
- The replacement is derived from the stripped input plus a salt, so the
  same input and salt always give the same output
- Different salts give different outputs
- Birth year 1950-2003, month 1-12, day 1-28, birth number 100-999
- Inputs that fail Luhn validation are returned unchanged

This is pseudonymization for exchanging test data, not encryption: the
mapping is one-way but offers no cryptographic guarantees.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from luhnlab.checksum import is_valid_luhn, strip_separators
from luhnlab.config import settings
from luhnlab.prng import Mulberry32, cyrb128, random_int
from luhnlab.swedish.personnummer import build_personnummer

logger = logging.getLogger(__name__)

MASK_MIN_YEAR = 1950
MASK_MAX_YEAR = 2003


@dataclass
class MaskResult:
    """Result of masking one value."""

    masked: str
    is_valid: bool

    def to_dict(self) -> dict:
        return {"masked": self.masked, "isValid": self.is_valid}


def mask_personnummer(pnr: str, salt: Optional[str] = None) -> str:
    """
    Mask a personnummer.

    Args:
        pnr: Number in any common format (separators allowed)
        salt: Caller salt; the configured default salt is used when empty

    Returns:
        Masked number as YYMMDD-NNNC, or ``pnr`` unchanged if it is not
        Luhn-valid
    """
    clean = strip_separators(pnr)
    if not is_valid_luhn(clean):
        return pnr

    rng = Mulberry32(cyrb128(clean + (salt or settings.mask_default_salt)))
    year = random_int(MASK_MIN_YEAR, MASK_MAX_YEAR, rng)
    month = random_int(1, 12, rng)
    day = random_int(1, 28, rng)
    birth_number = str(random_int(100, 999, rng))
    return build_personnummer(year, month, day, birth_number)


class PersonnummerMasker:
    """
    Masks batches of numbers with one salt.

    Usage:
        masker = PersonnummerMasker(salt="project-x")
        results = masker.mask_batch(["811218-9876", "not-a-number"])
    """

    def __init__(self, salt: Optional[str] = None):
        self.salt = salt

    def mask(self, value: str) -> MaskResult:
        masked = mask_personnummer(value, self.salt)
        return MaskResult(masked=masked, is_valid=is_valid_luhn(masked))

    def mask_batch(self, values: list[str]) -> list[MaskResult]:
        results = [self.mask(value) for value in values]
        unchanged = sum(1 for value, result in zip(values, results) if value == result.masked)
        if unchanged:
            logger.debug(f"Masking left {unchanged}/{len(values)} values unchanged (not Luhn-valid)")
        return results
