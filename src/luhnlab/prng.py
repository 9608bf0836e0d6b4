"""
Seedable pseudo-random generation for reproducible test data.

Two pieces work together:
- cyrb128: a non-cryptographic string hash reducing any seed string to a
  32-bit unsigned integer (four lanes folded together with XOR)
- Mulberry32: a counter-based generator producing floats in [0, 1)

Both are bit-exact ports of the well-known JavaScript routines, so a given
seed produces the same stream here as in any other implementation that
follows the same constants. All arithmetic is done on Python ints masked to
32 bits; JavaScript's Math.imul truncation is reproduced by masking the
full product.
"""

import random
from typing import Callable, Optional, Sequence, TypeVar, Union

T = TypeVar("T")

RandomSource = Callable[[], float]

MASK_32 = 0xFFFFFFFF
MULBERRY_INCREMENT = 0x6D2B79F5
TWO_POW_32 = 4294967296.0

# cyrb128 lane seeds and multipliers
_LANE_SEEDS = (1779033703, 3144134277, 1013904242, 2773480762)
_LANE_MULTIPLIERS = (597399067, 2869860233, 951274213, 2716044179)


def _imul(a: int, b: int) -> int:
    """32-bit multiply keeping the low 32 bits (unsigned view of Math.imul)."""
    return ((a & MASK_32) * (b & MASK_32)) & MASK_32


def _utf16_units(text: str) -> list[int]:
    """Return UTF-16 code units, matching JavaScript's charCodeAt."""
    raw = text.encode("utf-16-le", errors="surrogatepass")
    return [raw[i] | (raw[i + 1] << 8) for i in range(0, len(raw), 2)]


def cyrb128(text: str) -> int:
    """
    Hash a string to a 32-bit unsigned integer.

    Identical input always yields identical output. Not collision resistant.
    """
    h1, h2, h3, h4 = _LANE_SEEDS
    m1, m2, m3, m4 = _LANE_MULTIPLIERS

    for k in _utf16_units(text):
        h1 = h2 ^ _imul(h1 ^ k, m1)
        h2 = h3 ^ _imul(h2 ^ k, m2)
        h3 = h4 ^ _imul(h3 ^ k, m3)
        h4 = h1 ^ _imul(h4 ^ k, m4)

    h1 = _imul(h3 ^ (h1 >> 18), m1)
    h2 = _imul(h4 ^ (h2 >> 22), m2)
    h3 = _imul(h1 ^ (h3 >> 17), m3)
    h4 = _imul(h2 ^ (h4 >> 19), m4)

    return (h1 ^ h2 ^ h3 ^ h4) & MASK_32


class Mulberry32:
    """
    Deterministic sequence generator over a single 32-bit state.

    Instances are callable and return the next float in [0, 1), so they can
    be passed anywhere a ``random.random``-style source is accepted.
    """

    def __init__(self, seed: int):
        self.state = seed & MASK_32

    def next_uint32(self) -> int:
        """Advance the state and return the next raw 32-bit output."""
        self.state = (self.state + MULBERRY_INCREMENT) & MASK_32
        t = self.state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK_32
        return (t ^ (t >> 14)) & MASK_32

    def __call__(self) -> float:
        return self.next_uint32() / TWO_POW_32

    def __repr__(self) -> str:
        return f"Mulberry32(state={self.state})"


def derive_seed(seed: Union[str, int, None], fallback: Optional[str] = None) -> Optional[int]:
    """
    Turn a caller-supplied seed into a 32-bit integer.

    Integers are used directly (masked to 32 bits). Strings, including
    numeric-looking ones, are hashed. An empty or absent seed falls back to
    hashing ``fallback`` (e.g. a record id from the URL). Returns None when
    neither is available.
    """
    if isinstance(seed, bool):
        seed = str(seed).lower()
    if isinstance(seed, int):
        return seed & MASK_32
    if seed:
        return cyrb128(str(seed))
    if fallback:
        return cyrb128(str(fallback))
    return None


def get_random_generator(
    seed: Union[str, int, None] = None,
    fallback: Optional[str] = None,
) -> RandomSource:
    """
    Pick the random source for one request.

    Seeded requests get a Mulberry32 stream; unseeded requests draw from the
    platform's non-deterministic generator.
    """
    derived = derive_seed(seed, fallback)
    if derived is None:
        return random.SystemRandom().random
    return Mulberry32(derived)


def random_element(items: Sequence[T], rng: RandomSource) -> T:
    """Pick one element using exactly one draw from ``rng``."""
    return items[int(rng() * len(items))]


def random_int(minimum: int, maximum: int, rng: RandomSource) -> int:
    """Inclusive random integer using exactly one draw from ``rng``."""
    return int(rng() * (maximum - minimum + 1)) + minimum
