"""
Tests for the generic tabular exporter.
"""

import io
import logging

import pytest
import pandas as pd
from openpyxl import load_workbook

from pathlib import Path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from export import (
    TabularExporter,
    ExportFormat,
    ExportError,
    EmptyExportError,
    build_table,
    export_data,
    save_artifact,
    CSV_MEDIA_TYPE,
    XLSX_MEDIA_TYPE,
)


@pytest.fixture
def rows():
    return [
        {"Order ID": "o1", "Customer": "Lanka Traders", "Total Amount": 100.0, "Status": "Delivered"},
        {"Order ID": "o2", "Customer": "Hill Country Stores", "Total Amount": 300.0, "Status": "Pending"},
        {"Order ID": "o3", "Customer": "Colombo Mart", "Total Amount": 60.5, "Status": "Delivered"},
    ]


class TestBuildTable:
    """Tests for format-agnostic row construction."""

    def test_columns_follow_first_record(self, rows):
        columns, frame = build_table(rows)

        assert columns == ["Order ID", "Customer", "Total Amount", "Status"]
        assert frame.columns.tolist() == columns
        assert len(frame) == 3

    def test_missing_keys_become_empty_cells(self):
        columns, frame = build_table([
            {"A": 1, "B": "x"},
            {"A": 2},
        ])

        assert frame.iloc[1]["B"] == ""

    def test_mixed_numbers_keep_their_form(self):
        artifact = export_data([{"a": 100}, {"a": 2.5}, {"a": 0}], "mixed", ExportFormat.CSV)

        assert artifact.content.decode("utf-8").splitlines() == ["a", "100", "2.5", "0"]

    def test_extra_keys_are_dropped(self):
        columns, frame = build_table([
            {"A": 1},
            {"A": 2, "B": "extra"},
        ])

        assert columns == ["A"]
        assert "B" not in frame.columns

    @pytest.mark.parametrize("records", [[], None])
    def test_empty_input_rejected(self, records):
        with pytest.raises(EmptyExportError) as exc_info:
            build_table(records)

        assert str(exc_info.value) == "No data to export"


class TestCsvExport:
    """Tests for CSV artifacts."""

    def test_csv_round_trip(self, rows):
        artifact = export_data(rows, "orders_2025-10-19", ExportFormat.CSV, "Orders")

        df = pd.read_csv(io.BytesIO(artifact.content))
        assert df.columns.tolist() == list(rows[0].keys())
        assert len(df) == len(rows)
        assert df.iloc[2]["Total Amount"] == 60.5

    def test_csv_metadata(self, rows):
        artifact = export_data(rows, "orders_2025-10-19", ExportFormat.CSV)

        assert artifact.filename == "orders_2025-10-19.csv"
        assert artifact.media_type == CSV_MEDIA_TYPE
        assert artifact.row_count == 3

    def test_csv_is_utf8(self):
        artifact = export_data([{"Name": "Café Ceylon", "City": "Nuwara Eliya"}], "customers", "csv")

        text = artifact.content.decode("utf-8")
        assert text.splitlines()[0] == "Name,City"
        assert "Café Ceylon" in text

    def test_csv_quotes_embedded_commas(self):
        artifact = export_data([{"Assigned Suppliers": "Dilmah, Maliban"}], "users", "csv")

        df = pd.read_csv(io.BytesIO(artifact.content))
        assert df.iloc[0]["Assigned Suppliers"] == "Dilmah, Maliban"


class TestXlsxExport:
    """Tests for Excel artifacts."""

    def test_xlsx_single_sheet(self, rows):
        artifact = export_data(rows, "orders_2025-10-19", ExportFormat.XLSX, "Orders")

        wb = load_workbook(io.BytesIO(artifact.content))
        assert wb.sheetnames == ["Orders"]
        assert artifact.filename == "orders_2025-10-19.xlsx"
        assert artifact.media_type == XLSX_MEDIA_TYPE

    def test_xlsx_header_and_rows(self, rows):
        artifact = export_data(rows, "orders", "xlsx", "Orders")

        df = pd.read_excel(io.BytesIO(artifact.content), sheet_name="Orders")
        assert df.columns.tolist() == list(rows[0].keys())
        assert len(df) == 3
        assert df["Total Amount"].tolist() == [100.0, 300.0, 60.5]

    def test_xlsx_header_is_plain(self, rows):
        artifact = export_data(rows, "orders", "xlsx")

        ws = load_workbook(io.BytesIO(artifact.content)).active
        assert [cell.value for cell in ws[1]] == list(rows[0].keys())
        assert not any(cell.font.bold for cell in ws[1])

    def test_xlsx_column_width(self, rows):
        artifact = export_data(rows, "orders", "xlsx")

        ws = load_workbook(io.BytesIO(artifact.content)).active
        assert ws.column_dimensions["A"].width == 20

    def test_default_sheet_name(self, rows):
        artifact = TabularExporter().export(rows, "data")

        assert load_workbook(io.BytesIO(artifact.content)).active.title == "Data"


class TestExportFailures:
    """Tests for error handling."""

    def test_empty_export_produces_no_artifact(self, temp_dir):
        with pytest.raises(EmptyExportError):
            export_data([], "orders", ExportFormat.XLSX)

        assert list(temp_dir.iterdir()) == []

    def test_serialization_failure(self, caplog):
        # nested lists cannot be written to a cell
        records = [{"Items": [1, 2, 3]}]

        with caplog.at_level(logging.ERROR):
            with pytest.raises(ExportError) as exc_info:
                export_data(records, "broken", ExportFormat.XLSX)

        assert str(exc_info.value) == "Export failed. Please try again."
        assert not isinstance(exc_info.value, EmptyExportError)
        assert "Export failed" in caplog.text

    def test_success_is_logged(self, rows, caplog):
        with caplog.at_level(logging.INFO):
            export_data(rows, "orders", ExportFormat.CSV)

        assert "Successfully exported 3 records as CSV" in caplog.text


class TestSaveArtifact:
    """Tests for writing artifacts to disk."""

    def test_save_writes_file(self, rows, temp_dir):
        artifact = export_data(rows, "orders_2025-10-19", ExportFormat.XLSX)

        path = save_artifact(artifact, temp_dir / "exports")

        assert path.exists()
        assert path.name == "orders_2025-10-19.xlsx"
        assert path.read_bytes() == artifact.content

    def test_each_save_is_independent(self, rows, temp_dir):
        first = save_artifact(export_data(rows, "a", "csv"), temp_dir)
        second = save_artifact(export_data(rows, "b", "csv"), temp_dir)

        assert first != second
        assert first.exists() and second.exists()
