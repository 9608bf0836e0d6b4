"""
Unit tests for Swedish personnummer validation and generation.
"""

from datetime import date

import pytest

from luhnlab.checksum import is_valid_luhn, luhn_checksum
from luhnlab.options import ScenarioOptions
from luhnlab.prng import Mulberry32, get_random_generator
from luhnlab.swedish.personnummer import (
    INVALID_MARKER,
    build_personnummer,
    generate_personnummer,
    is_marked_invalid,
    validate_personnummer,
)

TODAY = date(2026, 10, 19)


class TestLuhnChecksum:
    """Tests for Luhn checksum calculation."""

    def test_known_checksums(self):
        """Test with known valid checksums."""
        # Test case from Skatteverket documentation
        assert luhn_checksum("811218987") == 6

    def test_all_zeros(self):
        """Test checksum of all zeros."""
        assert luhn_checksum("000000000") == 0


class TestValidatePersonnummer:
    """Tests for personnummer validation."""

    def test_valid_personnummer_12_digits(self):
        """Test valid 12-digit personnummer."""
        result = validate_personnummer("198112189876")
        assert result.is_valid
        assert result.normalized == "198112189876"
        assert result.birth_date == date(1981, 12, 18)
        assert result.gender == "M"  # 7 is odd
        assert not result.is_coordination

    def test_valid_personnummer_10_digits(self):
        """Test valid 10-digit personnummer."""
        result = validate_personnummer("8112189876")
        assert result.is_valid
        assert result.normalized == "198112189876"

    def test_valid_personnummer_with_dash(self):
        result = validate_personnummer("811218-9876")
        assert result.is_valid
        assert result.normalized == "198112189876"

    def test_valid_personnummer_with_plus(self):
        """Test personnummer with + for people over 100."""
        result = validate_personnummer("121218+9870", today=TODAY)
        assert result.is_valid
        assert result.normalized[:2] == "19"

    def test_invalid_checksum(self):
        result = validate_personnummer("198112189870")
        assert not result.is_valid

    def test_invalid_date(self):
        """Test personnummer with invalid date."""
        result = validate_personnummer("199902301234")  # Feb 30 doesn't exist
        assert not result.is_valid

    def test_coordination_number(self):
        """Test valid coordination number (samordningsnummer)."""
        # Day 18 becomes 78
        result = validate_personnummer("198112789873")
        assert result.is_valid
        assert result.is_coordination
        assert result.birth_date == date(1981, 12, 18)

    def test_invalid_format_letters(self):
        result = validate_personnummer("19811218ABCD")
        assert not result.is_valid

    def test_invalid_format_too_short(self):
        result = validate_personnummer("811218")
        assert not result.is_valid

    def test_invalid_format_too_long(self):
        result = validate_personnummer("19811218987612")
        assert not result.is_valid

    def test_whitespace_handling(self):
        result = validate_personnummer("  811218-9876  ")
        assert result.is_valid

    def test_future_date_rejected(self):
        """Test that future birth dates are rejected."""
        future = build_personnummer(2030, 1, 1, "123")
        result = validate_personnummer("20" + future, today=TODAY)
        assert not result.is_valid


class TestBuildPersonnummer:
    """Tests for assembling a number from its parts."""

    def test_known_number(self):
        assert build_personnummer(1981, 12, 18, "987") == "811218-9876"

    def test_zero_padding(self):
        pnr = build_personnummer(2005, 3, 7, "004")
        assert pnr.startswith("050307-004")
        assert is_valid_luhn(pnr)


class TestGeneratePersonnummer:
    """Tests for seeded personnummer generation."""

    def test_reference_seed(self):
        """Seed "test-42" with age 30 gives a fixed number."""
        rng = get_random_generator("test-42")
        options = ScenarioOptions(min_age=30, max_age=30)
        assert generate_personnummer(rng, options, today=TODAY) == "960813-2941"

    def test_same_seed_same_number(self):
        first = generate_personnummer(get_random_generator("abc"), today=TODAY)
        second = generate_personnummer(get_random_generator("abc"), today=TODAY)
        assert first == second

    def test_generated_numbers_are_valid(self):
        rng = Mulberry32(7)
        for _ in range(200):
            pnr = generate_personnummer(rng, today=TODAY)
            assert is_valid_luhn(pnr)
            assert validate_personnummer(pnr, today=TODAY).is_valid

    def test_format(self):
        pnr = generate_personnummer(Mulberry32(1), today=TODAY)
        assert len(pnr) == 11
        assert pnr[6] == "-"
        assert pnr.replace("-", "").isdigit()

    def test_fixed_age_gives_fixed_year(self):
        rng = Mulberry32(99)
        options = ScenarioOptions(min_age=20, max_age=20)
        for _ in range(50):
            pnr = generate_personnummer(rng, options, today=TODAY)
            assert pnr[:2] == f"{(TODAY.year - 20) % 100:02d}"

    def test_inverted_age_bounds_are_swapped(self):
        rng = Mulberry32(3)
        options = ScenarioOptions(min_age=40, max_age=30)
        for _ in range(50):
            year = 1900 + int(generate_personnummer(rng, options, today=TODAY)[:2])
            assert TODAY.year - 40 <= year <= TODAY.year - 30

    def test_day_never_exceeds_28(self):
        rng = Mulberry32(11)
        for _ in range(200):
            assert 1 <= int(generate_personnummer(rng, today=TODAY)[4:6]) <= 28

    @pytest.mark.parametrize("gender,parity", [("female", 0), ("male", 1)])
    def test_gender_parity(self, gender, parity):
        """Third birth-number digit is even for women, odd for men."""
        rng = Mulberry32(5)
        options = ScenarioOptions(gender=gender)
        for _ in range(100):
            pnr = generate_personnummer(rng, options, today=TODAY)
            assert int(pnr[9]) % 2 == parity

    def test_gender_matches_validator(self):
        rng = Mulberry32(8)
        pnr = generate_personnummer(rng, ScenarioOptions(gender="female"), today=TODAY)
        assert validate_personnummer(pnr, today=TODAY).gender == "F"

    @pytest.mark.parametrize("gender", ["Male", "FEMALE", "other"])
    def test_unrecognised_gender_is_unconstrained(self, gender):
        constrained = generate_personnummer(
            get_random_generator("x"), ScenarioOptions.from_query(gender=gender), today=TODAY
        )
        unconstrained = generate_personnummer(get_random_generator("x"), ScenarioOptions(), today=TODAY)
        assert constrained == unconstrained


class TestInvalidRate:
    """Tests for deliberately broken numbers."""

    def test_rate_100_always_invalid(self):
        rng = Mulberry32(21)
        options = ScenarioOptions(invalid_rate=100)
        for _ in range(100):
            pnr = generate_personnummer(rng, options, today=TODAY)
            assert pnr.endswith(INVALID_MARKER)
            assert is_marked_invalid(pnr)
            assert not is_valid_luhn(pnr[: -len(INVALID_MARKER)])

    def test_rate_0_never_invalid(self):
        rng = Mulberry32(21)
        for _ in range(100):
            pnr = generate_personnummer(rng, ScenarioOptions(invalid_rate=0), today=TODAY)
            assert not is_marked_invalid(pnr)
            assert is_valid_luhn(pnr)

    def test_invalid_number_keeps_structure(self):
        pnr = generate_personnummer(Mulberry32(4), ScenarioOptions(invalid_rate=100), today=TODAY)
        number = pnr[: -len(INVALID_MARKER)]
        assert len(number) == 11
        assert number[6] == "-"
