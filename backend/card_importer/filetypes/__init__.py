"""
Source file types, looked up by the ``type`` of each configured file.
"""

from typing import Dict, List, Optional, Type

from pyx_shared.exceptions import ConfigurationError
from pyx_shared.models.import_config import FileConfig

from card_importer.filetypes.base import FileType
from card_importer.filetypes.excel import ExcelFileType
from card_importer.services.diagnostics import ImportDiagnostics
from card_importer.services.rich_text_formatter import RichTextFormatter

FILE_TYPES: Dict[str, Type[FileType]] = {
    ExcelFileType.type_name: ExcelFileType,
}


def create_file_type(
    config: FileConfig,
    config_index: int,
    formatter: RichTextFormatter,
    diagnostics: Optional[ImportDiagnostics] = None,
) -> FileType:
    impl = FILE_TYPES.get(config.type)
    if impl is None:
        raise ConfigurationError(
            f"Unknown file type {config.type} for file {config_index}.",
            details={"file_index": config_index, "type": config.type},
        )
    return impl(config, config_index, formatter, diagnostics)


def create_file_types(
    configs: List[FileConfig],
    formatter: RichTextFormatter,
    diagnostics: Optional[ImportDiagnostics] = None,
) -> List[FileType]:
    return [create_file_type(config, i, formatter, diagnostics) for i, config in enumerate(configs)]


__all__ = ["FILE_TYPES", "ExcelFileType", "FileType", "create_file_type", "create_file_types"]
