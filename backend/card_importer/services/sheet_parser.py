"""
Deck-aware sheet parser.

A sheet holds cards with their deck indicated in either, or both, of two ways:
- heading named: the deck name is in the first row, cards are under it
- next column named: cards are in a column and each card's deck is in the column to its
  right; there is no header row in this region

The first ``heading_named_count`` columns are heading named, the following
``next_column_named_count`` column pairs are next column named. The parser does not know
whether the cards are black or white; it only collects normalized text per deck.
"""

from __future__ import annotations

from typing import Dict, Optional, Set

from pyx_shared.exceptions import ConfigurationError
from pyx_shared.models.cards import DeckCardMap, SheetCell, SheetCells, SheetRow
from pyx_shared.utils.app_logger import get_importer_logger

from card_importer.services.diagnostics import (
    AMBIGUOUS_COLUMN,
    MISSING_COLUMN_HEADING,
    ORPHANED_CARD_TEXT,
    ImportDiagnostics,
)
from card_importer.services.rich_text_formatter import RichTextFormatter

logger = get_importer_logger("sheet_parser")


class SheetParser:
    """Collects card text per deck from one sheet."""

    def __init__(
        self,
        sheet: SheetCells,
        heading_named_count: int,
        next_column_named_count: int,
        formatter: RichTextFormatter,
        diagnostics: Optional[ImportDiagnostics] = None,
    ):
        if heading_named_count < 0 or next_column_named_count < 0:
            raise ConfigurationError("Naming counts cannot be negative.")
        if heading_named_count + next_column_named_count <= 0:
            raise ConfigurationError(
                "Sum of heading named count and next column named count must be positive."
            )
        self.sheet = sheet
        self.heading_named_count = heading_named_count
        self.next_column_named_count = next_column_named_count
        self.formatter = formatter
        self.diagnostics = diagnostics if diagnostics is not None else formatter.diagnostics
        logger.debug("Created sheet parser for %s.", sheet.name)

    @property
    def last_column(self) -> int:
        """Exclusive end of the columns covered by either layout."""
        return self.heading_named_count + self.next_column_named_count * 2

    def get_cards(self) -> DeckCardMap:
        headings: Dict[int, str] = {}
        values: DeckCardMap = {}

        for row in self.sheet.rows:
            # headings are only read until the first one is found
            first_row = self.heading_named_count > 0 and not headings
            # deck columns already read together with their card column
            consumed: Set[int] = set()

            for cell in row.cells:
                col = cell.column
                if col in consumed:
                    continue

                if col < self.heading_named_count:
                    if first_row:
                        self._read_heading(row, cell, headings, values)
                    else:
                        self._read_heading_named(row, cell, headings, values)
                elif col < self.last_column:
                    if (col - self.heading_named_count) % 2:
                        # deck name without a card next to it
                        continue
                    consumed.add(col + 1)
                    self._read_next_column_named(row, cell, values)
                elif cell.text.strip():
                    self.diagnostics.report(
                        AMBIGUOUS_COLUMN,
                        f"Skipping value for row {row.index} col {col} ({cell.text}) in sheet "
                        f"{self.sheet.name}, don't know if it should be heading-named or "
                        f"next-column-named!",
                        text=cell.text,
                        sheet=self.sheet.name,
                        row=row.index,
                        column=col,
                    )

        return values

    def _read_heading(
        self, row: SheetRow, cell: SheetCell, headings: Dict[int, str], values: DeckCardMap
    ) -> None:
        deck = cell.text.strip()
        if not deck:
            logger.debug("Empty heading for column %d of sheet %s.", cell.column, self.sheet.name)
            return
        headings[cell.column] = deck
        values.setdefault(deck, set())

    def _read_heading_named(
        self, row: SheetRow, cell: SheetCell, headings: Dict[int, str], values: DeckCardMap
    ) -> None:
        text = self.formatter.format_cell(cell)
        if not text:
            return
        deck = headings.get(cell.column)
        if deck is None:
            self.diagnostics.report(
                MISSING_COLUMN_HEADING,
                f"Heading-named cell row {row.index} col {cell.column} ({text}) in sheet "
                f"{self.sheet.name} has no deck heading!",
                text=text,
                sheet=self.sheet.name,
                row=row.index,
                column=cell.column,
            )
            return
        values[deck].add(text)

    def _read_next_column_named(self, row: SheetRow, cell: SheetCell, values: DeckCardMap) -> None:
        text = self.formatter.format_cell(cell)
        deck_cell = row.cell_at(cell.column + 1)
        deck = deck_cell.text.strip() if deck_cell is not None else ""

        if not text:
            return
        if not deck:
            self.diagnostics.report(
                ORPHANED_CARD_TEXT,
                f"Next-column-labeled cell row {row.index} col {cell.column} ({text}) in sheet "
                f"{self.sheet.name} has blank deck name!",
                text=text,
                sheet=self.sheet.name,
                row=row.index,
                column=cell.column,
            )
            return
        values.setdefault(deck, set()).add(text)
