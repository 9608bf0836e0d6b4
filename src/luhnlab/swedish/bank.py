"""
Swedish banks, clearing numbers and IBANs.

Generated IBANs follow the Swedish layout: "SE", two mod 97 check digits,
then a 20-digit BBAN built from a 4-digit clearing number, zero padding and
a 10-digit account number.
"""

from dataclasses import dataclass
from typing import Optional

from luhnlab.checksum import iban_check_digits
from luhnlab.prng import RandomSource, random_element, random_int

COUNTRY_CODE = "SE"
BBAN_LENGTH = 20
ACCOUNT_LENGTH = 10


@dataclass(frozen=True)
class Bank:
    name: str
    clearing_from: int
    clearing_to: int


BANKS = (
    Bank("Swedbank", 7000, 7999),
    Bank("Handelsbanken", 6000, 6999),
    Bank("SEB", 5000, 5999),
    Bank("Nordea", 1100, 1199),
)


def random_bank(rng: RandomSource) -> Bank:
    return random_element(BANKS, rng)


def build_bban(clearing: int, account: int) -> str:
    """Clearing number, zero padding and account number as a 20-digit BBAN."""
    clearing_part = f"{clearing:04d}"
    account_part = f"{account:0{ACCOUNT_LENGTH}d}"
    padding = "0" * (BBAN_LENGTH - len(clearing_part) - len(account_part))
    return f"{clearing_part}{padding}{account_part}"


def generate_iban(rng: RandomSource, bank: Optional[Bank] = None) -> str:
    """
    Generate a Swedish IBAN.

    Draws: bank (only when none is given), clearing number, account number.
    """
    bank = bank or random_bank(rng)
    clearing = random_int(bank.clearing_from, bank.clearing_to, rng)
    account = random_int(1, 999999999, rng)
    bban = build_bban(clearing, account)
    return f"{COUNTRY_CODE}{iban_check_digits(COUNTRY_CODE, bban)}{bban}"
