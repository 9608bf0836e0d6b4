"""
Unit tests for postal data loading and address generation.
"""

import logging

from luhnlab.options import ScenarioOptions
from luhnlab.prng import Mulberry32
from luhnlab.swedish.address import (
    DEFAULT_ADDRESS,
    FALLBACK_POSTAL_DATA,
    STREETS,
    PostalDataset,
    PostalRecord,
    generate_address,
    load_postal_dataset,
    read_postal_csv,
)

EMBEDDED = PostalDataset(records=FALLBACK_POSTAL_DATA, source="embedded")

CSV_CONTENT = (
    "Postnummer,Ort,Kommun,Kommunkod,Län,Lat,Long\n"
    "114 55,Stockholm,Stockholm,0180,Stockholms län,59.33,18.07\n"
    "41101,Göteborg,Göteborg,1480,Västra Götalands län,57.70,11.97\n"
    "bad,row\n"
    "9999,Kort,Kort,0000,Kort län\n"
)


class TestReadPostalCsv:
    """Tests for reading the postal dataset file."""

    def test_reads_valid_rows(self, tmp_path):
        path = tmp_path / "postnummer.csv"
        path.write_text(CSV_CONTENT, encoding="utf-8")

        dataset = read_postal_csv(path)

        assert dataset is not None
        assert dataset.source == str(path)
        assert dataset.records == (
            PostalRecord("11455", "Stockholm", "Stockholm", "Stockholms län"),
            PostalRecord("41101", "Göteborg", "Göteborg", "Västra Götalands län"),
        )

    def test_missing_file(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            assert read_postal_csv(tmp_path / "missing.csv") is None
        assert "missing" in caplog.text

    def test_no_usable_rows(self, tmp_path):
        path = tmp_path / "postnummer.csv"
        path.write_text("Postnummer,Ort\nfoo,bar\n", encoding="utf-8")
        assert read_postal_csv(path) is None


class TestLoadPostalDataset:
    """Tests for the dataset fallback chain."""

    def test_file_wins(self, tmp_path):
        path = tmp_path / "postnummer.csv"
        path.write_text(CSV_CONTENT, encoding="utf-8")
        assert len(load_postal_dataset(path).records) == 2

    def test_embedded_fallback(self, tmp_path):
        dataset = load_postal_dataset(tmp_path / "missing.csv")
        assert dataset.source == "embedded"
        assert dataset.records == FALLBACK_POSTAL_DATA


class TestGenerateAddress:
    """Tests for address generation."""

    def test_fields(self):
        address = generate_address(Mulberry32(1), dataset=EMBEDDED)
        assert set(address) == {"gata", "postnummer", "ort", "kommun", "lan"}
        street, number = address["gata"].rsplit(" ", 1)
        assert street in STREETS
        assert 1 <= int(number) <= 150
        assert len(address["postnummer"]) == 6
        assert address["postnummer"][3] == " "

    def test_deterministic(self):
        first = generate_address(Mulberry32(5), dataset=EMBEDDED)
        second = generate_address(Mulberry32(5), dataset=EMBEDDED)
        assert first == second

    def test_city_filter(self):
        rng = Mulberry32(3)
        options = ScenarioOptions(city="göteborg")
        for _ in range(30):
            assert generate_address(rng, options, EMBEDDED)["ort"] == "Göteborg"

    def test_unknown_city_falls_back_to_all(self, caplog):
        rng = Mulberry32(3)
        with caplog.at_level(logging.WARNING):
            address = generate_address(rng, ScenarioOptions(city="Atlantis"), EMBEDDED)
        assert address["ort"] in {r.ort for r in FALLBACK_POSTAL_DATA}
        assert "Atlantis" in caplog.text

    def test_empty_dataset_gives_default_without_drawing(self):
        calls = []

        def rng():
            calls.append(1)
            return 0.5

        empty = PostalDataset(records=(), source="empty")
        assert generate_address(rng, dataset=empty) == DEFAULT_ADDRESS
        assert calls == []
