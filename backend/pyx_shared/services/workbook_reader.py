"""
Workbook cell reader.

Converts .xlsx worksheets into a sparse, rich-text aware representation:
- rows: ordered SheetRow values (0-based row index), each holding only populated cells
- cells: SheetCell with 0-based column and the cell text split into StyledRun values

Design principles:
- Keep workbook I/O and openpyxl quirks here; card semantics live in the importer.
- Cells without a value (including merged-cell shadows) are omitted, never padded.
- Non-text values are rendered to their display string so parsers only see text.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from io import BytesIO
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.cell.rich_text import CellRichText, TextBlock
from openpyxl.utils.exceptions import InvalidFileException

from pyx_shared.exceptions import SourceReadError
from pyx_shared.models.cards import RunStyle, SheetCell, SheetCells, SheetRow, StyledRun
from pyx_shared.utils.app_logger import get_logger

logger = get_logger(__name__)

WorkbookSource = Union[str, Path, bytes]


@dataclass(frozen=True)
class WorkbookReadOptions:
    """Options for reading worksheets."""

    max_rows: Optional[int] = None
    max_cols: Optional[int] = None
    data_only: bool = True


class ExcelWorkbookReader:
    """Reads worksheets of an .xlsx workbook into SheetCells."""

    def __init__(self, source: WorkbookSource, *, options: Optional[WorkbookReadOptions] = None):
        self.options = options or WorkbookReadOptions()
        self.source_name = "<bytes>" if isinstance(source, bytes) else str(source)
        filename = BytesIO(source) if isinstance(source, bytes) else str(source)
        try:
            self._workbook = load_workbook(
                filename=filename,
                data_only=bool(self.options.data_only),
                rich_text=True,
            )
        except (InvalidFileException, BadZipFile, OSError, KeyError, ValueError) as e:
            raise SourceReadError(f"Unable to open workbook: {e}", source=self.source_name) from e

    def __enter__(self) -> "ExcelWorkbookReader":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._workbook.close()

    @property
    def sheet_names(self) -> List[str]:
        return list(self._workbook.sheetnames)

    @property
    def sheet_count(self) -> int:
        return len(self._workbook.sheetnames)

    def read_sheet(self, index: int) -> SheetCells:
        """Read the worksheet at ``index`` (0-based, workbook order)."""
        ws = self._workbook.worksheets[index]

        max_row = int(ws.max_row or 0)
        max_col = int(ws.max_column or 0)
        if self.options.max_rows is not None:
            max_row = min(max_row, int(self.options.max_rows))
        if self.options.max_cols is not None:
            max_col = min(max_col, int(self.options.max_cols))

        rows: List[SheetRow] = []
        if max_row <= 0 or max_col <= 0:
            return SheetCells(name=str(ws.title), rows=())

        # Row-major; openpyxl rows are 1-based
        for r, row in enumerate(ws.iter_rows(min_row=1, max_row=max_row, max_col=max_col)):
            cells: List[SheetCell] = []
            for cell in row:
                value = getattr(cell, "value", None)
                if value is None:
                    continue
                cells.append(SheetCell(column=int(cell.column) - 1, runs=self.cell_value_to_runs(value)))
            rows.append(SheetRow(index=r, cells=tuple(cells)))

        logger.debug("Read %d rows from sheet %s of %s", len(rows), ws.title, self.source_name)
        return SheetCells(name=str(ws.title), rows=tuple(rows))

    # -------------------------
    # Value conversion helpers
    # -------------------------

    @classmethod
    def cell_value_to_runs(cls, value: Any) -> Tuple[StyledRun, ...]:
        if isinstance(value, CellRichText):
            runs: List[StyledRun] = []
            for part in value:
                if isinstance(part, TextBlock):
                    runs.append(StyledRun(text=str(part.text), style=cls._font_to_style(part.font)))
                else:
                    runs.append(StyledRun(text=str(part)))
            return tuple(runs)
        return (StyledRun(text=cls._display_value(value)),)

    @staticmethod
    def _font_to_style(font: Any) -> Optional[RunStyle]:
        if font is None:
            return None
        underline = getattr(font, "u", None)
        return RunStyle(
            bold=bool(getattr(font, "b", False)),
            italic=bool(getattr(font, "i", False)),
            underline=bool(underline) and underline != "none",
        )

    @staticmethod
    def _display_value(value: Any) -> str:
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, datetime):
            # Excel often stores date as datetime midnight
            if value.hour == 0 and value.minute == 0 and value.second == 0 and value.microsecond == 0:
                return value.date().isoformat()
            return value.isoformat(sep=" ")
        if isinstance(value, (date, time)):
            return value.isoformat()
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
