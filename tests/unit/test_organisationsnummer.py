"""
Unit tests for Swedish organisationsnummer validation and generation.
"""

from luhnlab.checksum import is_valid_luhn, luhn_checksum
from luhnlab.prng import Mulberry32
from luhnlab.swedish.organisationsnummer import (
    ORGANIZATION_TYPES,
    generate_organisationsnummer,
    validate_organisationsnummer,
)


class TestLuhnChecksum:
    """Tests for Luhn checksum calculation."""

    def test_known_checksums(self):
        """Test with known valid checksums."""
        # Spotify AB: 556703-7485
        assert luhn_checksum("556703748") == 5


class TestValidateOrganisationsnummer:
    """Tests for organisationsnummer validation."""

    def test_valid_orgnr_10_digits(self):
        result = validate_organisationsnummer("5567037485")
        assert result.is_valid
        assert result.normalized == "5567037485"
        assert result.organization_type_code == "5"
        assert result.organization_type == ORGANIZATION_TYPES["5"]

    def test_valid_orgnr_with_dash(self):
        result = validate_organisationsnummer("556703-7485")
        assert result.is_valid
        assert result.normalized == "5567037485"

    def test_valid_orgnr_with_prefix(self):
        """Test valid organisationsnummer with 16 prefix."""
        result = validate_organisationsnummer("165567037485")
        assert result.is_valid
        assert result.normalized == "5567037485"

    def test_invalid_checksum(self):
        result = validate_organisationsnummer("5567037480")
        assert not result.is_valid

    def test_invalid_group_number_too_low(self):
        """Digits 3-4 must be >= 20."""
        result = validate_organisationsnummer("5510000000")
        assert not result.is_valid

    def test_invalid_format_letters(self):
        result = validate_organisationsnummer("55670A7485")
        assert not result.is_valid

    def test_invalid_format_too_short(self):
        result = validate_organisationsnummer("556703")
        assert not result.is_valid

    def test_whitespace_handling(self):
        result = validate_organisationsnummer("  556703-7485  ")
        assert result.is_valid


class TestGenerateOrganisationsnummer:
    """Tests for seeded organisationsnummer generation."""

    def test_generated_numbers_are_valid(self):
        rng = Mulberry32(12)
        for _ in range(200):
            orgnr = generate_organisationsnummer(rng)
            assert is_valid_luhn(orgnr)
            assert validate_organisationsnummer(orgnr).is_valid

    def test_aktiebolag_prefix(self):
        rng = Mulberry32(13)
        for _ in range(100):
            orgnr = generate_organisationsnummer(rng)
            assert orgnr.startswith("55")
            assert orgnr[2] in "6789"

    def test_format(self):
        orgnr = generate_organisationsnummer(Mulberry32(1))
        assert len(orgnr) == 11
        assert orgnr[6] == "-"

    def test_deterministic(self):
        assert generate_organisationsnummer(Mulberry32(77)) == generate_organisationsnummer(
            Mulberry32(77)
        )
