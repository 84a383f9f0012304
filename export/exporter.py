"""
Generic tabular export to CSV and Excel.
Column order and headers come from the first record; only the final
encode step differs between formats.
"""

import io
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Dict, Any, Optional, Sequence, Tuple

import pandas as pd
from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from config import export_config

logger = logging.getLogger(__name__)


CSV_MEDIA_TYPE = "text/csv;charset=utf-8"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class ExportFormat(str, Enum):
    CSV = "csv"
    XLSX = "xlsx"


class ExportError(Exception):
    """Raised when an export cannot be serialized."""

    def __init__(self, message: str = "Export failed. Please try again."):
        super().__init__(message)


class EmptyExportError(ExportError):
    """Raised when there is nothing to export."""

    def __init__(self, message: str = "No data to export"):
        super().__init__(message)


@dataclass
class ExportArtifact:
    """A downloadable file produced by an export."""
    filename: str
    content: bytes
    media_type: str
    row_count: int


def build_table(records: Optional[Sequence[Dict[str, Any]]]) -> Tuple[List[str], pd.DataFrame]:
    """
    Build the column list and data frame shared by every export format.

    Missing keys become empty cells; keys absent from the first record
    are dropped.
    """
    if not records:
        raise EmptyExportError()

    columns = list(records[0].keys())
    rows = [[record.get(column, "") for column in columns] for record in records]
    return columns, pd.DataFrame(rows, columns=columns, dtype=object)


class TabularExporter:
    """Serialize flat label -> value records into spreadsheet artifacts."""

    def __init__(self, column_width: Optional[int] = None):
        self.column_width = column_width or export_config.column_width

    def export(
        self,
        records: Optional[Sequence[Dict[str, Any]]],
        filename: str,
        fmt: ExportFormat = ExportFormat.XLSX,
        sheet_name: str = "Data",
    ) -> ExportArtifact:
        """
        Export records to a single CSV or XLSX artifact.

        Args:
            records: Uniformly shaped label -> value mappings
            filename: Base filename without extension
            fmt: Target format
            sheet_name: Worksheet name for XLSX output

        Returns:
            ExportArtifact ready to be saved or streamed
        """
        fmt = ExportFormat(fmt)
        columns, frame = build_table(records)

        try:
            if fmt == ExportFormat.CSV:
                content = self._encode_csv(frame)
                media_type = CSV_MEDIA_TYPE
            else:
                content = self._encode_xlsx(columns, frame, sheet_name)
                media_type = XLSX_MEDIA_TYPE
        except Exception as e:
            logger.error(f"Export failed: {e}")
            raise ExportError() from e

        logger.info(f"Successfully exported {len(frame)} records as {fmt.value.upper()}")

        return ExportArtifact(
            filename=f"{filename}.{fmt.value}",
            content=content,
            media_type=media_type,
            row_count=len(frame),
        )

    def _encode_csv(self, frame: pd.DataFrame) -> bytes:
        return frame.to_csv(index=False).encode("utf-8")

    def _encode_xlsx(self, columns: List[str], frame: pd.DataFrame, sheet_name: str) -> bytes:
        wb = Workbook()
        ws = wb.active
        ws.title = sheet_name

        ws.append(columns)
        for row in frame.itertuples(index=False, name=None):
            ws.append([_cell_value(value) for value in row])

        for col_idx in range(1, len(columns) + 1):
            ws.column_dimensions[get_column_letter(col_idx)].width = self.column_width

        buffer = io.BytesIO()
        wb.save(buffer)
        return buffer.getvalue()


def _cell_value(value: Any) -> Any:
    # numpy scalars from the data frame are unwrapped for openpyxl
    if hasattr(value, "item") and not isinstance(value, (str, bytes)):
        return value.item()
    return value


def export_data(
    records: Optional[Sequence[Dict[str, Any]]],
    filename: str,
    fmt: ExportFormat = ExportFormat.XLSX,
    sheet_name: str = "Data",
) -> ExportArtifact:
    """Convenience function to export records."""
    exporter = TabularExporter()
    return exporter.export(records, filename, fmt, sheet_name)


def save_artifact(artifact: ExportArtifact, directory: Path) -> Path:
    """Write an artifact to disk and return its path."""
    directory.mkdir(parents=True, exist_ok=True)
    output_path = directory / artifact.filename
    output_path.write_bytes(artifact.content)

    logger.info(f"Export saved: {output_path}")
    return output_path
