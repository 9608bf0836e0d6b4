"""
Unit tests for response serialization.
"""

import csv
import io
import json

import pytest

from luhnlab.formats import ExportFormat, RecordExporter, collect_columns, flatten_record

RECORDS = [
    {
        "id": 1,
        "namn": "Anna O'Brien",
        "adress": {"gata": "Storgatan 1", "ort": "Malmö"},
        "aktiv": True,
        "generatedAt": "2026-10-19T12:00:00.000Z",
    },
    {
        "id": 2,
        "namn": 'Erik "Kalle", Larsson',
        "adress": {"gata": "Kungsgatan 2", "ort": "Lund"},
        "extra": None,
        "generatedAt": "2026-10-19T12:00:00.000Z",
    },
]


@pytest.fixture
def exporter() -> RecordExporter:
    return RecordExporter()


class TestFlatten:
    """Tests for flattening nested records."""

    def test_dotted(self):
        assert flatten_record({"a": {"b": {"c": 1}}, "d": 2}, ".") == {"a.b.c": 1, "d": 2}

    def test_lists_kept(self):
        assert flatten_record({"a": [1, 2]}, "_") == {"a": [1, 2]}

    def test_columns_first_seen_order(self):
        rows = [{"a": 1, "b": 2}, {"c": 3, "a": 4}]
        assert collect_columns(rows) == ["a", "b", "c"]


class TestCsv:
    """Tests for CSV output."""

    def test_header_and_rows(self, exporter):
        result = exporter.export(RECORDS, ExportFormat.CSV, "person")
        rows = list(csv.reader(io.StringIO(result.content)))

        assert rows[0] == ["id", "namn", "adress.gata", "adress.ort", "aktiv", "generatedAt", "extra"]
        assert len(rows) == 1 + len(RECORDS)
        assert rows[2][1] == 'Erik "Kalle", Larsson'
        assert rows[1][4] == "true"
        assert rows[2][6] == ""
        assert result.media_type == "text/csv"
        assert result.record_count == 2

    def test_single_record(self, exporter):
        result = exporter.export(RECORDS[0], ExportFormat.CSV, "person")
        assert result.content.count("\n") == 2

    def test_empty(self, exporter):
        assert exporter.to_csv([]) == ""


class TestSql:
    """Tests for SQL INSERT output."""

    def test_one_statement_per_record(self, exporter):
        result = exporter.export(RECORDS, ExportFormat.SQL, "person")
        lines = result.content.split("\n")

        assert len(lines) == 2
        assert lines[0] == (
            "INSERT INTO `person` (`id`, `namn`, `adress_gata`, `adress_ort`, `aktiv`, "
            "`generatedAt`, `extra`) VALUES (1, 'Anna O''Brien', 'Storgatan 1', 'Malmö', "
            "TRUE, '2026-10-19T12:00:00.000Z', NULL);"
        )
        assert lines[1].endswith("'Kungsgatan 2', 'Lund', NULL, '2026-10-19T12:00:00.000Z', NULL);")
        assert result.media_type == "application/sql"


class TestXml:
    """Tests for XML output."""

    def test_list_renders_items(self, exporter):
        content = exporter.export(RECORDS, ExportFormat.XML).content
        assert content.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<response>')
        assert content.endswith("</response>")
        assert content.count("<item>") == 2
        assert "<ort>" in content

    def test_escaping(self, exporter):
        content = exporter.to_xml(RECORDS[1])
        assert "Erik &quot;Kalle&quot;, Larsson" in content
        assert "<item>" not in content

    def test_apostrophe_and_ampersand(self, exporter):
        content = exporter.to_xml({"namn": "O'Brien & <Co>"})
        assert "O&apos;Brien &amp; &lt;Co&gt;" in content

    def test_none_skipped(self, exporter):
        assert "<extra>" not in exporter.to_xml(RECORDS[1])


class TestJson:
    """Tests for JSON output."""

    def test_round_trip(self, exporter):
        result = exporter.export(RECORDS[0], ExportFormat.JSON)
        assert json.loads(result.content) == RECORDS[0]
        assert "Malmö" in result.content

    def test_paid_formats(self):
        assert not ExportFormat.JSON.requires_paid_plan
        assert all(f.requires_paid_plan for f in (ExportFormat.XML, ExportFormat.CSV, ExportFormat.SQL))
