"""
Excel (.xlsx) source files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pyx_shared.exceptions import ConfigurationError, SourceReadError
from pyx_shared.models.cards import ParseResult, union_into
from pyx_shared.models.import_config import FileConfig
from pyx_shared.services.workbook_reader import ExcelWorkbookReader
from pyx_shared.utils.app_logger import get_importer_logger

from card_importer.filetypes.base import FileType
from card_importer.services.diagnostics import ImportDiagnostics
from card_importer.services.rich_text_formatter import RichTextFormatter
from card_importer.services.sheet_parser import SheetParser

logger = get_importer_logger("excel")


class ExcelFileType(FileType):
    """Workbook whose configured sheets are parsed by position."""

    type_name = "excel"

    def __init__(
        self,
        config: FileConfig,
        config_index: int,
        formatter: RichTextFormatter,
        diagnostics: Optional[ImportDiagnostics] = None,
    ):
        super().__init__(config, config_index)
        self.formatter = formatter
        self.diagnostics = diagnostics if diagnostics is not None else formatter.diagnostics

    def validate(self) -> None:
        path = Path(self.config.name)
        if not path.is_file():
            raise ConfigurationError(
                f"Unable to read file {self.config.name}.",
                details={"file_index": self.config_index},
            )

        try:
            with ExcelWorkbookReader(path) as reader:
                available = reader.sheet_count
        except SourceReadError as e:
            raise ConfigurationError(
                f"Workbook file format invalid: {e}",
                details={"file_index": self.config_index},
            ) from e

        configured = len(self.config.sheets)
        if configured > available:
            raise ConfigurationError(
                f"Workbook file has {available} sheets; {configured} configured.",
                details={"file_index": self.config_index},
            )

    def process(self) -> ParseResult:
        result = ParseResult()
        logger.info("Processing %s", self.config.name)

        with ExcelWorkbookReader(self.config.name) as reader:
            for index, sheet_config in enumerate(self.config.sheets):
                sheet = reader.read_sheet(index)
                parser = SheetParser(
                    sheet,
                    sheet_config.heading_named_count,
                    sheet_config.next_column_named_count,
                    self.formatter,
                    self.diagnostics,
                )
                cards = parser.get_cards()
                logger.info(
                    "Sheet %d (%s): %d %s cards in %d decks",
                    index,
                    sheet.name,
                    sum(len(c) for c in cards.values()),
                    sheet_config.color.value,
                    len(cards),
                )
                union_into(result.cards_for(sheet_config.color), cards)

        return result
