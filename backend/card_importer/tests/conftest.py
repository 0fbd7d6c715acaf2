from __future__ import annotations

from typing import List, Sequence, Union

import pytest

from pyx_shared.models.cards import ReplacementTable, SheetCell, SheetCells, SheetRow, StyledRun

from card_importer.services.diagnostics import ImportDiagnostics
from card_importer.services.rich_text_formatter import RichTextFormatter

CellSpec = Union[None, str, Sequence[StyledRun]]

HTML_REPLACEMENTS = [
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ("ñ", "&ntilde;"),
    ("\n", "<br>"),
]


def make_sheet(rows: List[List[CellSpec]], name: str = "Sheet1") -> SheetCells:
    """Build SheetCells from a row-major list; ``None`` marks an absent cell."""
    out: List[SheetRow] = []
    for r, values in enumerate(rows):
        cells = []
        for c, value in enumerate(values):
            if value is None:
                continue
            if isinstance(value, str):
                cells.append(SheetCell.plain(c, value))
            else:
                cells.append(SheetCell(column=c, runs=tuple(value)))
        out.append(SheetRow(index=r, cells=tuple(cells)))
    return SheetCells(name=name, rows=tuple(out))


@pytest.fixture
def diagnostics() -> ImportDiagnostics:
    return ImportDiagnostics()


@pytest.fixture
def replacements() -> ReplacementTable:
    return ReplacementTable.from_pairs(HTML_REPLACEMENTS)


@pytest.fixture
def formatter(replacements: ReplacementTable, diagnostics: ImportDiagnostics) -> RichTextFormatter:
    return RichTextFormatter(replacements, format_text=True, diagnostics=diagnostics)


@pytest.fixture(name="make_sheet")
def make_sheet_fixture():
    return make_sheet


@pytest.fixture(name="plain_formatter")
def plain_formatter_fixture(diagnostics: ImportDiagnostics) -> RichTextFormatter:
    return RichTextFormatter(ReplacementTable(), diagnostics=diagnostics)
