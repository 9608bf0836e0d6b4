"""
Personnummer handling: parsing, checksum validation and seeded generation.

A number is a birth date (YYMMDD or YYYYMMDD), a three digit birth number
and a Luhn control digit computed over the ten digit form. The last birth
number digit is odd for men and even for women. Samordningsnummer carry the
day of month plus 60; a '+' separator marks someone aged 100 or more.
"""

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from luhnlab.checksum import luhn_checksum
from luhnlab.options import ScenarioOptions
from luhnlab.prng import RandomSource, random_element, random_int

# Appended to deliberately broken numbers (see invalid_rate)
INVALID_MARKER = " (INVA)"

_ALL_BIRTH_NUMBERS = [f"{i:03d}" for i in range(1000)]
_FEMALE_BIRTH_NUMBERS = [n for n in _ALL_BIRTH_NUMBERS if int(n[2]) % 2 == 0]
_MALE_BIRTH_NUMBERS = [n for n in _ALL_BIRTH_NUMBERS if int(n[2]) % 2 == 1]

_PERSONNUMMER_RE = re.compile(
    r"(?P<century>[0-9]{2})?(?P<yy>[0-9]{2})(?P<mm>[0-9]{2})(?P<dd>[0-9]{2})"
    r"(?P<serial>[0-9]{3})(?P<control>[0-9])"
)
_SEPARATORS = re.compile(r"[\s+-]")
_UNKNOWN_DATE = date(1900, 1, 1)


@dataclass
class PersonnummerInfo:
    """Outcome of parsing one personnummer."""

    normalized: str = ""  # YYYYMMDDNNNC
    birth_date: date = _UNKNOWN_DATE
    gender: str = ""  # "M" / "F"
    is_coordination: bool = False
    is_valid: bool = False
    problems: list[str] = field(default_factory=list)


def _expand_century(yy: str, centenarian: bool, today: date) -> str:
    born_this_century = int(yy) <= today.year % 100
    century = today.year // 100 if born_this_century else today.year // 100 - 1
    if centenarian:
        century -= 1
    return str(century)


def validate_personnummer(pnr: str, today: Optional[date] = None) -> PersonnummerInfo:
    """
    Parse ``pnr`` and check its date and control digit.

    Ten and twelve digit forms are accepted, with or without a separator.
    A ten digit number is placed in the most recent century that does not
    put the birth date after ``today`` (one century earlier with '+').
    Invalid input still yields whatever could be parsed, with ``problems``
    naming what failed.
    """
    today = today or date.today()
    digits = _SEPARATORS.sub("", pnr)
    match = _PERSONNUMMER_RE.fullmatch(digits)
    if match is None:
        return PersonnummerInfo(problems=["format"])

    parts = match.groupdict()
    century = parts["century"] or _expand_century(parts["yy"], "+" in pnr, today)
    normalized = century + digits[-10:]

    day = int(parts["dd"])
    info = PersonnummerInfo(
        normalized=normalized,
        gender="M" if int(parts["serial"][-1]) % 2 else "F",
        is_coordination=day > 60,
    )
    if info.is_coordination:
        day -= 60

    try:
        info.birth_date = date(int(century + parts["yy"]), int(parts["mm"]), day)
    except ValueError:
        info.problems.append("date")
    else:
        if info.birth_date > today:
            info.problems.append("future")

    if luhn_checksum(normalized[2:11]) != int(parts["control"]):
        info.problems.append("checksum")

    info.is_valid = not info.problems
    return info


def birth_numbers_for(gender: Optional[str]) -> list[str]:
    """Birth number candidates whose last digit encodes ``gender``."""
    if gender == "female":
        return _FEMALE_BIRTH_NUMBERS
    if gender == "male":
        return _MALE_BIRTH_NUMBERS
    return _ALL_BIRTH_NUMBERS


def build_personnummer(year: int, month: int, day: int, birth_number: str) -> str:
    """Assemble YYMMDD-NNNC with a computed Luhn digit."""
    date_part = f"{year % 100:02d}{month:02d}{day:02d}"
    control = luhn_checksum(date_part + birth_number)
    return f"{date_part}-{birth_number}{control}"


def generate_personnummer(
    rng: RandomSource,
    options: Optional[ScenarioOptions] = None,
    today: Optional[date] = None,
) -> str:
    """
    Generate a personnummer in YYMMDD-NNNC format.

    Draw order (fixed, so seeded output is reproducible):
    invalid trial (only when invalid_rate > 0), year, month, day,
    birth number, then the broken-digit delta for invalid numbers.

    Days stop at 28 so every month is valid without calendar logic.
    When the invalid trial fires, a valid number is generated first and its
    check digit shifted by 1-9, then INVALID_MARKER is appended.
    """
    options = options or ScenarioOptions()

    if options.invalid_rate > 0 and rng() * 100 < options.invalid_rate:
        valid = generate_personnummer(rng, options.without_invalid(), today)
        correct = int(valid[-1])
        wrong = (correct + random_int(1, 9, rng)) % 10
        return f"{valid[:-1]}{wrong}{INVALID_MARKER}"

    current_year = (today or date.today()).year
    min_age, max_age = options.age_bounds()

    year = random_int(current_year - max_age, current_year - min_age, rng)
    month = random_int(1, 12, rng)
    day = random_int(1, 28, rng)
    birth_number = random_element(birth_numbers_for(options.gender), rng)

    return build_personnummer(year, month, day, birth_number)


def is_marked_invalid(pnr: str) -> bool:
    """True for numbers produced by the invalid_rate branch."""
    return pnr.endswith(INVALID_MARKER)
