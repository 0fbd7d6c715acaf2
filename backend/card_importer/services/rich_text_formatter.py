"""
Rich text to HTML card text.

Turns the styled runs of one cell into the flat card text stored downstream:
- special characters are replaced in configured order (HTML entities, <br>, ...)
- bold/italic/underline runs are wrapped in <b>/<i>/<u> (when formatting is enabled)
- runs of five or more underscores collapse to the four-underscore blank marker
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional, Tuple

from pyx_shared.models.cards import ReplacementTable, RunStyle, SheetCell, StyledRun
from pyx_shared.utils.app_logger import get_importer_logger

from card_importer.services.diagnostics import (
    INCONSISTENT_FORMATTING,
    UNHANDLED_CHARACTER,
    UNKNOWN_FORMATTING,
    ImportDiagnostics,
)

logger = get_importer_logger("rich_text_formatter")

# Characters above this one that survive replacement are reported
LAST_ASCII_CHARACTER = "~"

BLANK = "____"
_LONG_BLANK = re.compile(r"_{5,}")

# (flag, opening, closing) in opening order
_STYLE_MARKERS: Tuple[Tuple[str, str, str], ...] = (
    ("bold", "<b>", "</b>"),
    ("italic", "<i>", "</i>"),
    ("underline", "<u>", "</u>"),
)


def normalize_blanks(text: str) -> str:
    """Replace runs of more than four underscores with exactly four."""
    return _LONG_BLANK.sub(BLANK, text)


def style_markers(style: RunStyle) -> Tuple[str, str]:
    opening = "".join(tag for flag, tag, _ in _STYLE_MARKERS if getattr(style, flag))
    closing = "".join(tag for flag, _, tag in reversed(_STYLE_MARKERS) if getattr(style, flag))
    return opening, closing


class NormalizationMemo:
    """First normalized result per trimmed source text, for one import run."""

    def __init__(self) -> None:
        self._formatted: Dict[str, str] = {}

    def record(self, raw: str, formatted: str) -> Optional[str]:
        """Remember ``formatted`` for ``raw``; return the earlier result if it differs."""
        previous = self._formatted.get(raw)
        if previous is None:
            self._formatted[raw] = formatted
            return None
        return previous if previous != formatted else None

    def get(self, raw: str) -> Optional[str]:
        return self._formatted.get(raw)

    def __len__(self) -> int:
        return len(self._formatted)


class RichTextFormatter:
    """Normalizes cell text; one instance (and memo) per import run."""

    def __init__(
        self,
        replacements: ReplacementTable,
        format_text: bool = True,
        diagnostics: Optional[ImportDiagnostics] = None,
        memo: Optional[NormalizationMemo] = None,
    ):
        self.replacements = replacements
        self.format_text = format_text
        self.diagnostics = diagnostics if diagnostics is not None else ImportDiagnostics()
        self.memo = memo if memo is not None else NormalizationMemo()

    def format_cell(self, cell: SheetCell) -> str:
        return self.format(cell.runs)

    def format(self, runs: Iterable[StyledRun]) -> str:
        runs = tuple(runs)
        original = "".join(run.text for run in runs)

        if any(run.style is not None for run in runs):
            logger.debug("Processing formatting for %s", original)
            formatted = self._format_runs(runs, original)
        else:
            formatted = self._replace_specials(original, original)

        done = normalize_blanks(formatted).strip()
        trimmed = original.strip()
        if done != trimmed:
            logger.debug("Adjusted input string '%s' to '%s'.", original, done)

        previous = self.memo.record(trimmed, done)
        if previous is not None:
            self.diagnostics.report(
                INCONSISTENT_FORMATTING,
                f"Input string '{trimmed}' formatted to '{done}', but previously formatted to '{previous}'.",
                text=trimmed,
                formatted=done,
                previous=previous,
            )
        return done

    def _format_runs(self, runs: Tuple[StyledRun, ...], original: str) -> str:
        parts: List[str] = []
        # a styled run is followed by exactly one space, even before punctuation
        pending_separator = False
        for run in runs:
            segment = self._replace_specials(run.text, original)

            if run.style is None:
                if pending_separator:
                    parts.append(" ")
                    segment = segment.lstrip()
                parts.append(segment)
                pending_separator = False
                continue

            segment = segment.strip()
            if pending_separator:
                parts.append(" ")

            opening, closing = ("", "")
            if self.format_text:
                opening, closing = style_markers(run.style)
            if not run.style.is_recognized:
                self.diagnostics.report(
                    UNKNOWN_FORMATTING,
                    f"Unknown formatting applied to segment '{segment}' of card '{original}'.",
                    text=original,
                    segment=segment,
                )
            parts.append(f"{opening}{segment}{closing}")
            pending_separator = True

        return "".join(parts)

    def _replace_specials(self, text: str, original: str) -> str:
        replaced = self.replacements.apply(text)

        for ch in replaced:
            if ch > LAST_ASCII_CHARACTER:
                self.diagnostics.report(
                    UNHANDLED_CHARACTER,
                    f"Unhandled special character '{ch}' in string '{original}'.",
                    text=original,
                    character=ch,
                    codepoint=f"U+{ord(ch):04X}",
                )
        return replaced
