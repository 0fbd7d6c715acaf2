"""
Card importer services

Import services by their direct path, e.g.
- card_importer.services.rich_text_formatter
- card_importer.services.sheet_parser
- card_importer.services.import_handler
"""

__all__ = []
