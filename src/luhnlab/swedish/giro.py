"""
Bankgiro and plusgiro numbers.

- Bankgiro: 7 digits + Luhn digit, written NNN-NNNN(C)
- Plusgiro: 6-8 digits + weighted mod 10 digit (weights 7, 3, 1 from the
  right), grouped with spaces and the check digit after a dash
"""

from luhnlab.checksum import PLUSGIRO_WEIGHTS, luhn_checksum, mod10_weighted
from luhnlab.prng import RandomSource, random_int


def _digits(count: int, rng: RandomSource) -> str:
    return "".join(str(random_int(0, 9, rng)) for _ in range(count))


def generate_bankgiro(rng: RandomSource) -> str:
    base = _digits(7, rng)
    return f"{base[:3]}-{base[3:]}{luhn_checksum(base)}"


def generate_plusgiro(rng: RandomSource) -> str:
    length = random_int(6, 8, rng)
    base = _digits(length, rng)
    check = mod10_weighted(base, PLUSGIRO_WEIGHTS)

    # 6 -> NN NN NN, 7 -> NNN NN NN, 8 -> NNNN NN NN
    head = length - 4
    return f"{base[:head]} {base[head:head + 2]} {base[head + 2:]}-{check}"
