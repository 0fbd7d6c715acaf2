#!/usr/bin/env python3
"""
Card importer entry point.

Reads the import configuration, validates every source file, parses all sheets, merges
the decks and writes (or logs) the resulting card report.

Usage:
    pyx-card-importer -c importer.json -o report.json
    python -m card_importer.main --no-format --log-level DEBUG
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from pyx_shared.config import ImporterSettings, get_settings, load_import_config
from pyx_shared.exceptions import ConfigurationError
from pyx_shared.utils.app_logger import configure_logging, get_importer_logger

from card_importer.filetypes import create_file_types
from card_importer.services.card_output import (
    ImportReport,
    build_import_report,
    log_import_report,
    write_import_report,
)
from card_importer.services.diagnostics import ImportDiagnostics
from card_importer.services.import_handler import ImportHandler
from card_importer.services.rich_text_formatter import RichTextFormatter

logger = get_importer_logger("main")

EXIT_OK = 0
EXIT_CONFIGURATION_ERROR = 1
EXIT_ANOMALIES = 2


def build_arg_parser(settings: ImporterSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyx-card-importer",
        description="Import black and white cards from spreadsheets",
    )
    parser.add_argument(
        "-c",
        "--configuration",
        default=settings.config_path,
        metavar="FILENAME",
        help=f"Configuration file to use (default: {settings.config_path})",
    )
    parser.add_argument(
        "--format",
        action=argparse.BooleanOptionalAction,
        default=settings.format_text,
        help="Process rich-text formatting for card text",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=settings.output_path,
        metavar="FILENAME",
        help="Write the JSON import report to this file instead of the log",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Log level",
    )
    parser.add_argument(
        "--fail-on-anomalies",
        action=argparse.BooleanOptionalAction,
        default=settings.fail_on_anomalies,
        help="Exit with status 2 when any anomaly was reported",
    )
    return parser


def run_import(
    config_path: str,
    *,
    format_text: bool = True,
    diagnostics: Optional[ImportDiagnostics] = None,
) -> ImportReport:
    """
    Run one import.

    Raises:
        ConfigurationError: configuration or a source file failed validation; nothing
            has been parsed in that case
    """
    diagnostics = diagnostics if diagnostics is not None else ImportDiagnostics()
    config = load_import_config(config_path)

    formatter = RichTextFormatter(
        config.replacement_table(), format_text=format_text, diagnostics=diagnostics
    )
    aliases = config.alias_table()
    handler = ImportHandler(create_file_types(config.files, formatter, diagnostics), aliases, diagnostics)

    # make sure all of the files are valid before we start doing anything
    handler.validate()

    result = handler.process()
    return build_import_report(result, aliases, diagnostics)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser(get_settings()).parse_args(argv)
    configure_logging(args.log_level)

    diagnostics = ImportDiagnostics()
    try:
        report = run_import(args.configuration, format_text=args.format, diagnostics=diagnostics)
    except ConfigurationError as e:
        logger.error("Configuration validation failed: %s", e)
        return EXIT_CONFIGURATION_ERROR

    if args.output:
        write_import_report(report, args.output)
    else:
        log_import_report(report)

    if diagnostics.has_anomalies:
        logger.warning("%d anomalies reported: %s", len(diagnostics.anomalies), diagnostics.counts())
        if args.fail_on_anomalies:
            return EXIT_ANOMALIES
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
