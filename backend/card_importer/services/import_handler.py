"""
Import aggregation.

Merges the deck -> cards maps produced per sheet and per file into one black and one
white map, renaming decks to their canonical names from the deck info table.
"""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from pyx_shared.models.cards import CardKind, DeckAliasTable, ParseResult
from pyx_shared.utils.app_logger import get_importer_logger

from card_importer.filetypes.base import FileType
from card_importer.services.diagnostics import MISSING_DECK_INFO, ImportDiagnostics

logger = get_importer_logger("import_handler")

SourceCards = Tuple[CardKind, Mapping[str, Iterable[str]]]


def resolve_deck_name(raw_name: str, aliases: DeckAliasTable, diagnostics: ImportDiagnostics) -> str:
    info = aliases.resolve(raw_name)
    if info is None:
        diagnostics.report(
            MISSING_DECK_INFO,
            f"Deck info not found for deck {raw_name}.",
            text=raw_name,
            deck=raw_name,
        )
        return raw_name
    return info.name


def merge_parse_results(
    sources: Iterable[SourceCards],
    aliases: DeckAliasTable,
    diagnostics: Optional[ImportDiagnostics] = None,
) -> ParseResult:
    """
    Union every source map into the canonical deck of the matching card kind.

    Set union makes the result independent of source order.
    """
    diagnostics = diagnostics if diagnostics is not None else ImportDiagnostics()
    merged = ParseResult()
    for kind, cards_by_deck in sources:
        target = merged.cards_for(CardKind(kind))
        for raw_name, cards in cards_by_deck.items():
            deck = resolve_deck_name(raw_name, aliases, diagnostics)
            target.setdefault(deck, set()).update(cards)
    return merged


def log_summary(result: ParseResult) -> None:
    logger.info("Decks:")
    for deck in sorted(result.decks):
        logger.info(
            ">%s (black: %d, white: %d)",
            deck,
            len(result.black_cards.get(deck, ())),
            len(result.white_cards.get(deck, ())),
        )

    logger.debug("White cards:")
    for deck, cards in sorted(result.white_cards.items()):
        logger.debug(">%s", deck)
        for card in sorted(cards):
            logger.debug(">>%s", card)

    logger.debug("Black cards:")
    for deck, cards in sorted(result.black_cards.items()):
        logger.debug(">%s", deck)
        for card in sorted(cards):
            logger.debug(">>%s", card)


class ImportHandler:
    """Runs every configured file type and merges their results."""

    def __init__(
        self,
        file_types: Sequence[FileType],
        aliases: DeckAliasTable,
        diagnostics: Optional[ImportDiagnostics] = None,
    ):
        self.file_types = list(file_types)
        self.aliases = aliases
        self.diagnostics = diagnostics if diagnostics is not None else ImportDiagnostics()

    def validate(self) -> None:
        """Validate every file before any is processed."""
        for file_type in self.file_types:
            file_type.validate()

    def process(self) -> ParseResult:
        sources: List[SourceCards] = []
        for file_type in self.file_types:
            result = file_type.process()
            sources.append((CardKind.BLACK, result.black_cards))
            sources.append((CardKind.WHITE, result.white_cards))

        merged = merge_parse_results(sources, self.aliases, self.diagnostics)
        log_summary(merged)
        return merged
