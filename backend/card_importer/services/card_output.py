"""
Import report output.

Builds the final per-deck listing handed to consumers: black cards with their pick/draw
counts, white cards, and each deck's watermark and weight from the deck info table.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

from pyx_shared.models.cards import DeckAliasTable, ParseResult
from pyx_shared.models.diagnostics import ImportAnomaly
from pyx_shared.utils.app_logger import get_importer_logger

from card_importer.services.black_card_helper import prompt_metrics
from card_importer.services.diagnostics import MISSING_WATERMARK, ImportDiagnostics

logger = get_importer_logger("card_output")


class BlackCardEntry(BaseModel):
    text: str
    pick: int = Field(..., ge=1)
    draw: int = Field(..., ge=0)
    watermark: str = ""


class WhiteCardEntry(BaseModel):
    text: str
    watermark: str = ""


class DeckReport(BaseModel):
    name: str
    watermark: str = ""
    weight: int = 0
    black_cards: List[BlackCardEntry] = Field(default_factory=list)
    white_cards: List[WhiteCardEntry] = Field(default_factory=list)


class ImportReport(BaseModel):
    decks: List[DeckReport] = Field(default_factory=list)
    anomaly_counts: Dict[str, int] = Field(default_factory=dict)
    anomalies: List[ImportAnomaly] = Field(default_factory=list)

    @property
    def black_card_count(self) -> int:
        return sum(len(d.black_cards) for d in self.decks)

    @property
    def white_card_count(self) -> int:
        return sum(len(d.white_cards) for d in self.decks)


def build_import_report(
    result: ParseResult,
    aliases: DeckAliasTable,
    diagnostics: Optional[ImportDiagnostics] = None,
) -> ImportReport:
    diagnostics = diagnostics if diagnostics is not None else ImportDiagnostics()
    decks: List[DeckReport] = []

    for name in result.decks:
        info = aliases.resolve_canonical(name)
        if info is None:
            diagnostics.report(
                MISSING_WATERMARK,
                f"No deck info for deck {name}, unable to determine watermark for its cards.",
                text=name,
                deck=name,
            )
        watermark = info.watermark if info is not None else ""
        weight = info.weight if info is not None else 0

        black_cards = []
        for text in sorted(result.black_cards.get(name, ())):
            metrics = prompt_metrics(text)
            black_cards.append(
                BlackCardEntry(text=text, pick=metrics.pick, draw=metrics.draw, watermark=watermark)
            )
        white_cards = [
            WhiteCardEntry(text=text, watermark=watermark)
            for text in sorted(result.white_cards.get(name, ()))
        ]
        decks.append(
            DeckReport(
                name=name,
                watermark=watermark,
                weight=weight,
                black_cards=black_cards,
                white_cards=white_cards,
            )
        )

    decks.sort(key=lambda d: (d.weight, d.name))
    return ImportReport(
        decks=decks,
        anomaly_counts=diagnostics.counts(),
        anomalies=list(diagnostics.anomalies),
    )


def write_import_report(report: ImportReport, path: Union[str, Path]) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(report.model_dump_json(indent=2), encoding="utf-8")
    logger.info(
        "Wrote %d black and %d white cards in %d decks to %s",
        report.black_card_count,
        report.white_card_count,
        len(report.decks),
        out,
    )
    return out


def log_import_report(report: ImportReport) -> None:
    for deck in report.decks:
        logger.info(">%s [%s] (weight %d)", deck.name, deck.watermark, deck.weight)
        for card in deck.black_cards:
            logger.info(">>B (pick %d, draw %d) %s", card.pick, card.draw, card.text)
        for card in deck.white_cards:
            logger.info(">>W %s", card.text)
