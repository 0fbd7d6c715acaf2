"""
Import configuration models.

An import configuration lists the ordered special-character replacements, the deck
metadata used for alias resolution, and the source files with their per-sheet layout.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pyx_shared.models.cards import CardKind, DeckAliasTable, DeckInfo, ReplacementTable


class ReplacementRule(BaseModel):
    """One literal substitution; order in the list is significant."""

    source: str = Field(..., alias="from", description="Literal to replace")
    target: str = Field(default="", alias="to", description="Replacement literal")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class SheetConfig(BaseModel):
    """Layout of one worksheet, addressed by position in the workbook."""

    color: CardKind = Field(..., description="Kind of card held by the sheet")
    heading_named_count: int = Field(default=0, ge=0, description="Leading heading-named columns")
    next_column_named_count: int = Field(
        default=0, ge=0, description="Card/deck column pairs after the heading-named columns"
    )

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="after")
    def _check_layout(self) -> "SheetConfig":
        if self.heading_named_count + self.next_column_named_count <= 0:
            raise ValueError(
                "Sum of heading named count and next column named count must be positive."
            )
        return self


class FileConfig(BaseModel):
    """One source file."""

    type: str = Field(default="excel", min_length=1, description="Registered file type name")
    name: str = Field(..., min_length=1, description="Path to the source file")
    sheets: List[SheetConfig] = Field(..., min_length=1)

    model_config = ConfigDict(extra="ignore")


class DeckInfoConfig(BaseModel):
    """Deck metadata entry; the display name falls back to the id."""

    id: str = Field(..., min_length=1)
    name: Optional[str] = None
    watermark: str = ""
    weight: int = 0

    model_config = ConfigDict(extra="ignore")

    def to_deck_info(self) -> DeckInfo:
        return DeckInfo(
            id=self.id,
            name=self.name or self.id,
            watermark=self.watermark,
            weight=self.weight,
        )


class ImportConfig(BaseModel):
    """Complete import run configuration."""

    replacements: List[ReplacementRule] = Field(default_factory=list)
    deck_info: List[DeckInfoConfig] = Field(default_factory=list)
    files: List[FileConfig] = Field(..., min_length=1)

    model_config = ConfigDict(extra="ignore")

    def replacement_table(self) -> ReplacementTable:
        return ReplacementTable.from_pairs((rule.source, rule.target) for rule in self.replacements)

    def deck_infos(self) -> List[DeckInfo]:
        return [entry.to_deck_info() for entry in self.deck_info]

    def alias_table(self) -> DeckAliasTable:
        return DeckAliasTable.from_infos(self.deck_infos())
