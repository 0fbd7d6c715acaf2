"""
Shared model definitions for the card importer
"""

from .cards import (
    CardKind,
    DeckAliasTable,
    DeckCardMap,
    DeckInfo,
    ParseResult,
    PromptMetrics,
    ReplacementTable,
    RunStyle,
    SheetCell,
    SheetCells,
    SheetRow,
    StyledRun,
    union_into,
)
from .diagnostics import ImportAnomaly
from .import_config import DeckInfoConfig, FileConfig, ImportConfig, ReplacementRule, SheetConfig

__all__ = [
    # card models
    "CardKind",
    "DeckAliasTable",
    "DeckCardMap",
    "DeckInfo",
    "ParseResult",
    "PromptMetrics",
    "ReplacementTable",
    "RunStyle",
    "SheetCell",
    "SheetCells",
    "SheetRow",
    "StyledRun",
    "union_into",
    # diagnostics
    "ImportAnomaly",
    # import configuration
    "DeckInfoConfig",
    "FileConfig",
    "ImportConfig",
    "ReplacementRule",
    "SheetConfig",
]
