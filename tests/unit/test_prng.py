"""
Unit tests for seed derivation and the Mulberry32 generator.

Golden values match the reference JavaScript routines.
"""

from luhnlab.prng import (
    Mulberry32,
    cyrb128,
    derive_seed,
    get_random_generator,
    random_element,
    random_int,
)


class TestCyrb128:
    """Tests for the string hash."""

    def test_golden_values(self):
        assert cyrb128("test-42") == 1378652524
        assert cyrb128("abc") == 1181011423
        assert cyrb128("42") == 2814168319
        assert cyrb128("") == 41608494

    def test_result_is_32_bit(self):
        for text in ["a", "luhn", "ÅÄÖ", "x" * 500, "🙂"]:
            assert 0 <= cyrb128(text) <= 0xFFFFFFFF


class TestMulberry32:
    """Tests for the sequence generator."""

    def test_golden_first_value(self):
        assert Mulberry32(1)() == 0.6270739405881613

    def test_golden_stream_for_hashed_seed(self):
        rng = Mulberry32(cyrb128("test-42"))
        assert [rng.next_uint32() for _ in range(5)] == [
            685628288,
            2614149716,
            1957471903,
            1266676728,
            1327572991,
        ]

    def test_values_in_unit_interval(self):
        rng = Mulberry32(123456)
        for _ in range(1000):
            value = rng()
            assert 0.0 <= value < 1.0

    def test_same_seed_same_stream(self):
        a, b = Mulberry32(42), Mulberry32(42)
        assert [a() for _ in range(20)] == [b() for _ in range(20)]

    def test_seed_is_masked_to_32_bits(self):
        assert Mulberry32(2**32 + 1)() == Mulberry32(1)()


class TestDeriveSeed:
    """Tests for turning caller seeds into generator state."""

    def test_string_seed_is_hashed(self):
        assert derive_seed("test-42") == 1378652524

    def test_numeric_string_is_hashed_not_parsed(self):
        assert derive_seed("42") == cyrb128("42")

    def test_integer_seed_used_directly(self):
        assert derive_seed(7) == 7

    def test_fallback_used_without_seed(self):
        assert derive_seed(None, fallback="123") == cyrb128("123")
        assert derive_seed("", fallback="123") == cyrb128("123")

    def test_seed_wins_over_fallback(self):
        assert derive_seed("abc", fallback="123") == cyrb128("abc")

    def test_nothing_to_derive(self):
        assert derive_seed(None) is None


class TestGetRandomGenerator:
    """Tests for picking the request's random source."""

    def test_seeded_generator_is_reproducible(self):
        a = get_random_generator("seed")
        b = get_random_generator("seed")
        assert [a() for _ in range(10)] == [b() for _ in range(10)]

    def test_unseeded_generator_yields_floats(self):
        rng = get_random_generator()
        assert not isinstance(rng, Mulberry32)
        assert 0.0 <= rng() < 1.0


class TestCombinators:
    """Tests for random_element and random_int."""

    def test_random_int_bounds(self):
        rng = Mulberry32(9)
        values = {random_int(1, 6, rng) for _ in range(500)}
        assert values == {1, 2, 3, 4, 5, 6}

    def test_random_int_formula(self):
        # floor(0.627... * 10) + 0
        assert random_int(0, 9, Mulberry32(1)) == 6

    def test_random_element_uses_one_draw(self):
        rng = Mulberry32(1)
        assert random_element(["a", "b", "c", "d"], rng) == "c"  # floor(0.627 * 4) = 2
        reference = Mulberry32(1)
        reference()
        assert rng() == reference()
