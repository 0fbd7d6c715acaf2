"""
Card import models.

Cells are read into sequences of StyledRun (text + optional font flags), normalized into
plain card text, and collected per deck into DeckCardMap values, one per card kind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field

from pyx_shared.exceptions import ConfigurationError

# deck name -> unique card texts
DeckCardMap = Dict[str, Set[str]]


class CardKind(str, Enum):
    """Card colors"""
    BLACK = "black"
    WHITE = "white"


@dataclass(frozen=True)
class RunStyle:
    """Font flags of one rich-text run."""

    bold: bool = False
    italic: bool = False
    underline: bool = False

    @property
    def is_recognized(self) -> bool:
        return self.bold or self.italic or self.underline


@dataclass(frozen=True)
class StyledRun:
    """Contiguous span of cell text sharing one (optional) style."""

    text: str
    style: Optional[RunStyle] = None


@dataclass(frozen=True)
class SheetCell:
    """A populated cell: 0-based column index plus its runs in document order."""

    column: int
    runs: Tuple[StyledRun, ...]

    @classmethod
    def plain(cls, column: int, text: str) -> "SheetCell":
        return cls(column=column, runs=(StyledRun(text),))

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)

    @property
    def has_formatting(self) -> bool:
        return any(run.style is not None for run in self.runs)


@dataclass(frozen=True)
class SheetRow:
    """0-based row index and its populated cells, ordered by column."""

    index: int
    cells: Tuple[SheetCell, ...]

    def cell_at(self, column: int) -> Optional[SheetCell]:
        for cell in self.cells:
            if cell.column == column:
                return cell
        return None


@dataclass(frozen=True)
class SheetCells:
    """Sparse cell content of one worksheet."""

    name: str
    rows: Tuple[SheetRow, ...] = ()


@dataclass(frozen=True)
class ReplacementTable:
    """
    Ordered (from, to) literal substitutions.

    Entries are applied in order. An entry whose source occurs inside the target of an
    earlier entry would re-match inserted text, so such tables are rejected.
    """

    entries: Tuple[Tuple[str, str], ...] = ()

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, str]]) -> "ReplacementTable":
        entries: List[Tuple[str, str]] = []
        for index, (source, target) in enumerate(pairs):
            if not source:
                raise ConfigurationError(
                    f"Special character replacement index {index} is empty.",
                    details={"index": index},
                )
            for earlier_source, earlier_target in entries:
                if source in earlier_target:
                    raise ConfigurationError(
                        f"Replacement for {source!r} would re-match the output of the earlier "
                        f"replacement {earlier_source!r} -> {earlier_target!r}; move it first.",
                        details={"index": index, "source": source, "conflicts_with": earlier_source},
                    )
            entries.append((source, target))
        return cls(entries=tuple(entries))

    def apply(self, text: str) -> str:
        for source, target in self.entries:
            if source in text:
                text = text.replace(source, target)
        return text

    def __len__(self) -> int:
        return len(self.entries)


class DeckInfo(BaseModel):
    """Deck metadata keyed by the identifier used in source sheets."""

    id: str = Field(..., min_length=1, description="Deck identifier as written in source sheets")
    name: str = Field(..., min_length=1, description="Canonical deck display name")
    watermark: str = Field(default="", description="Short tag printed on each card")
    weight: int = Field(default=0, description="Sort weight for output")

    model_config = ConfigDict(extra="ignore", frozen=True)


@dataclass
class DeckAliasTable:
    """Two-key deck lookup: by source identifier first, then by display name."""

    by_id: Dict[str, DeckInfo] = field(default_factory=dict)
    by_name: Dict[str, DeckInfo] = field(default_factory=dict)

    @classmethod
    def from_infos(cls, infos: Iterable[DeckInfo]) -> "DeckAliasTable":
        table = cls()
        for info in infos:
            table.by_id[info.id] = info
            table.by_name[info.name] = info
        return table

    def resolve(self, raw_name: str) -> Optional[DeckInfo]:
        info = self.by_id.get(raw_name)
        if info is None:
            info = self.by_name.get(raw_name)
        return info

    def resolve_canonical(self, name: str) -> Optional[DeckInfo]:
        """Look up a name produced by ``resolve``; raw names without deck info fall back to ids."""
        info = self.by_name.get(name)
        if info is None:
            info = self.by_id.get(name)
        return info

    def __contains__(self, raw_name: object) -> bool:
        return raw_name in self.by_id or raw_name in self.by_name


class PromptMetrics(BaseModel):
    """Pick/draw counts of a black card."""

    pick: int = Field(..., ge=1)
    draw: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)


@dataclass
class ParseResult:
    """Black and white cards keyed by deck name."""

    black_cards: DeckCardMap = field(default_factory=dict)
    white_cards: DeckCardMap = field(default_factory=dict)

    def cards_for(self, kind: CardKind) -> DeckCardMap:
        return self.black_cards if kind == CardKind.BLACK else self.white_cards

    @property
    def decks(self) -> Set[str]:
        return set(self.black_cards) | set(self.white_cards)


def union_into(target: DeckCardMap, source: Mapping[str, Iterable[str]]) -> DeckCardMap:
    """Union every deck of ``source`` into ``target`` without sharing set objects."""
    for deck, cards in source.items():
        target.setdefault(deck, set()).update(cards)
    return target
