"""
Response serialization.

Exports generated records as JSON, XML, CSV or SQL INSERT statements.
"""

import csv
import io
import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union
from xml.sax.saxutils import escape

logger = logging.getLogger(__name__)

XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}

Payload = Union[dict[str, Any], list[dict[str, Any]]]


class ExportFormat(str, Enum):
    """Supported output formats."""

    JSON = "json"
    XML = "xml"
    CSV = "csv"
    SQL = "sql"

    @property
    def media_type(self) -> str:
        return MEDIA_TYPES[self]

    @property
    def requires_paid_plan(self) -> bool:
        return self is not ExportFormat.JSON


MEDIA_TYPES = {
    ExportFormat.JSON: "application/json",
    ExportFormat.XML: "application/xml",
    ExportFormat.CSV: "text/csv",
    ExportFormat.SQL: "application/sql",
}


@dataclass
class ExportResult:
    """Serialized payload ready to be sent."""

    format: ExportFormat
    content: str
    media_type: str
    record_count: int


def flatten_record(record: dict[str, Any], separator: str, prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested mappings into one level.

    Keys are joined with ``separator``; lists are kept as values.
    """
    flat: dict[str, Any] = {}
    for key, value in record.items():
        name = f"{prefix}{separator}{key}" if prefix else key
        if isinstance(value, dict):
            flat.update(flatten_record(value, separator, name))
        else:
            flat[name] = value
    return flat


def collect_columns(rows: list[dict[str, Any]]) -> list[str]:
    """Union of row keys in first-seen order."""
    columns: dict[str, None] = {}
    for row in rows:
        for key in row:
            columns.setdefault(key, None)
    return list(columns)


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


class RecordExporter:
    """
    Serializes records for the HTTP layer.

    - JSON: the payload as generated (single object or array)
    - XML: ``<response>`` root, arrays as repeated ``<item>`` blocks
    - CSV: flattened dotted headers, one row per record
    - SQL: one INSERT per record into a table named after the resource
    """

    def export(self, data: Payload, format: ExportFormat, resource: str = "data") -> ExportResult:
        """
        Export a payload in the requested format.

        Args:
            data: One record or a list of records
            format: Target format
            resource: Resource name, used as SQL table name

        Returns:
            ExportResult with the serialized content
        """
        records = data if isinstance(data, list) else [data]

        if format == ExportFormat.JSON:
            content = json.dumps(data, ensure_ascii=False)
        elif format == ExportFormat.XML:
            content = self.to_xml(data)
        elif format == ExportFormat.CSV:
            content = self.to_csv(records)
        elif format == ExportFormat.SQL:
            content = self.to_sql(records, resource)
        else:
            raise ValueError(f"Unsupported export format: {format}")

        return ExportResult(
            format=format,
            content=content,
            media_type=format.media_type,
            record_count=len(records),
        )

    def to_xml(self, data: Payload, root: str = "response") -> str:
        lines = ['<?xml version="1.0" encoding="UTF-8"?>', f"<{root}>"]
        self._xml_lines(data, lines, depth=1)
        lines.append(f"</{root}>")
        return "\n".join(lines)

    def _xml_lines(self, value: Any, lines: list[str], depth: int) -> None:
        indent = "  " * depth
        if isinstance(value, list):
            for item in value:
                lines.append(f"{indent}<item>")
                self._xml_lines(item, lines, depth + 1)
                lines.append(f"{indent}</item>")
        elif isinstance(value, dict):
            for key, child in value.items():
                if child is None:
                    continue
                lines.append(f"{indent}<{key}>")
                if isinstance(child, (dict, list)):
                    self._xml_lines(child, lines, depth + 1)
                else:
                    lines.append(f"{indent}  {self._xml_escape(_scalar_text(child))}")
                lines.append(f"{indent}</{key}>")
        elif value is not None:
            lines.append(f"{indent}{self._xml_escape(_scalar_text(value))}")

    def to_csv(self, records: list[dict[str, Any]]) -> str:
        if not records:
            return ""
        rows = [flatten_record(record, ".") for record in records]
        headers = collect_columns(rows)

        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(headers)
        for row in rows:
            writer.writerow([self._csv_value(row.get(header)) for header in headers])
        return output.getvalue()

    def to_sql(self, records: list[dict[str, Any]], table: str) -> str:
        if not records:
            return ""
        rows = [flatten_record(record, "_") for record in records]
        columns = collect_columns(rows)
        quoted_columns = ", ".join(f"`{column}`" for column in columns)

        statements = []
        for row in rows:
            values = ", ".join(self._sql_literal(row.get(column)) for column in columns)
            statements.append(f"INSERT INTO `{table}` ({quoted_columns}) VALUES ({values});")
        return "\n".join(statements)

    @staticmethod
    def _csv_value(value: Any) -> str:
        if value is None:
            return ""
        return _scalar_text(value)

    @staticmethod
    def _sql_literal(value: Any) -> str:
        if value is None:
            return "NULL"
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if isinstance(value, (int, float)):
            return str(value)
        text = _scalar_text(value).replace("'", "''")
        return f"'{text}'"

    @staticmethod
    def _xml_escape(text: str) -> str:
        """Escape special XML characters."""
        return escape(text, XML_ENTITIES)
