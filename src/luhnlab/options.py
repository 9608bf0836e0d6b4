"""
Scenario options: per-request knobs that shape generated records.
"""

from dataclasses import dataclass, replace
from typing import Optional

DEFAULT_MIN_AGE = 18
DEFAULT_MAX_AGE = 65


def parse_int(value: Optional[str], default: Optional[int] = None) -> Optional[int]:
    """
    Lenient integer parsing for query parameters.

    Accepts a leading integer ("150", "150rows", " 42") and returns
    ``default`` for anything else.
    """
    if value is None:
        return default
    text = str(value).strip()
    digits = ""
    for i, char in enumerate(text):
        if char.isascii() and char.isdigit():
            digits += char
        elif i == 0 and char in "+-":
            digits += char
        else:
            break
    try:
        return int(digits)
    except ValueError:
        return default


@dataclass(frozen=True)
class ScenarioOptions:
    """Read-only generation options for one request."""

    invalid_rate: int = 0  # percent chance a personnummer gets a broken check digit
    city: Optional[str] = None
    min_age: Optional[int] = None
    max_age: Optional[int] = None
    gender: Optional[str] = None  # "male", "female" or None

    @classmethod
    def from_query(
        cls,
        invalid_rate: Optional[str] = None,
        city: Optional[str] = None,
        min_age: Optional[str] = None,
        max_age: Optional[str] = None,
        gender: Optional[str] = None,
    ) -> "ScenarioOptions":
        rate = parse_int(invalid_rate, 0) or 0
        return cls(
            invalid_rate=min(100, max(0, rate)),
            city=city or None,
            min_age=parse_int(min_age),
            max_age=parse_int(max_age),
            gender=gender or None,
        )

    def age_bounds(self) -> tuple[int, int]:
        """Effective (min_age, max_age), each defaulted independently and ordered."""
        low = self.min_age if self.min_age is not None else DEFAULT_MIN_AGE
        high = self.max_age if self.max_age is not None else DEFAULT_MAX_AGE
        if low > high:
            low, high = high, low
        return low, high

    def without_invalid(self) -> "ScenarioOptions":
        return replace(self, invalid_rate=0)
