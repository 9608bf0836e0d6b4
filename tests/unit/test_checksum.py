"""
Unit tests for the checksum algorithms.
"""

import pytest

from luhnlab.checksum import (
    alphanumeric_to_digits,
    iban_check_digits,
    is_valid_iban,
    is_valid_luhn,
    is_valid_mod10_weighted,
    luhn_checksum,
    mod10_weighted,
    mod97,
    strip_separators,
)
from luhnlab.prng import Mulberry32, random_int


class TestLuhn:
    """Tests for Luhn computation and validation."""

    @pytest.mark.parametrize(
        "value",
        [
            "811218-9876",
            "19811218-9876",
            "556703-7485",
            "4242424242424242",
            "490154203237518",  # IMEI
            "5555555555554444",
        ],
    )
    def test_known_valid(self, value):
        assert is_valid_luhn(value)

    @pytest.mark.parametrize("value", ["811218-9875", "4242424242424241", "0000000001"])
    def test_known_invalid(self, value):
        assert not is_valid_luhn(value)

    @pytest.mark.parametrize("value", ["", "-", "7", "abc", "81121898x6", "٨١١٢١٨٩٨٧٦"])
    def test_empty_or_non_numeric_is_invalid(self, value):
        assert not is_valid_luhn(value)

    def test_appended_check_digit_always_validates(self):
        rng = Mulberry32(2024)
        for _ in range(300):
            length = random_int(1, 18, rng)
            digits = "".join(str(random_int(0, 9, rng)) for _ in range(length))
            check = luhn_checksum(digits)
            assert luhn_checksum(digits) == check
            assert is_valid_luhn(digits + str(check))

    def test_century_prefix_only_for_12_digits(self):
        # 12 digits starting with 19: validated on the last 10
        assert is_valid_luhn("198112189876")
        # 12 digits not starting with a century prefix: validated as is
        assert not is_valid_luhn("998112189876")

    def test_separators_stripped(self):
        assert strip_separators(" 811218 - 9876+") == "8112189876"


class TestMod10Weighted:
    """Tests for the weighted mod 10 (plusgiro) check digit."""

    def test_known_value(self):
        # 6*7 + 5*3 + 4*1 + 3*7 + 2*3 + 1*1 = 89
        assert mod10_weighted("123456") == 1

    def test_validate(self):
        assert is_valid_mod10_weighted("12 34 56-1")
        assert not is_valid_mod10_weighted("12 34 56-2")

    def test_custom_weights(self):
        # 2*2 + 1*1 = 5
        assert mod10_weighted("12", weights=(2, 1)) == 5

    def test_empty_is_invalid(self):
        assert not is_valid_mod10_weighted("")


class TestMod97:
    """Tests for IBAN check digits."""

    def test_letters_to_digits(self):
        assert alphanumeric_to_digits("SE00") == "281400"

    def test_running_remainder_matches_integer_arithmetic(self):
        numeric = "500000000005839825746628140000"
        assert mod97(numeric) == int(numeric) % 97

    def test_known_swedish_iban(self):
        assert is_valid_iban("SE45 5000 0000 0583 9825 7466")
        assert iban_check_digits("SE", "50000000058398257466") == "45"

    def test_other_country(self):
        assert is_valid_iban("GB82 WEST 1234 5698 7654 32")
        assert iban_check_digits("GB", "WEST12345698765432") == "82"

    def test_invalid_iban(self):
        assert not is_valid_iban("SE46 5000 0000 0583 9825 7466")
        assert not is_valid_iban("")
        assert not is_valid_iban("not an iban")

    def test_check_digits_are_two_characters(self):
        rng = Mulberry32(5)
        for _ in range(100):
            bban = "".join(str(random_int(0, 9, rng)) for _ in range(20))
            check = iban_check_digits("SE", bban)
            assert len(check) == 2
            assert is_valid_iban(f"SE{check}{bban}")
