"""
Import diagnostics sink.

Collects ImportAnomaly records for the whole run and logs each one as it arrives.
Nothing here raises; deciding whether anomalies fail the run is up to the caller.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Dict, List, Optional

from pyx_shared.models.diagnostics import ImportAnomaly
from pyx_shared.utils.app_logger import get_importer_logger

# Anomaly codes
UNKNOWN_FORMATTING = "unknown_formatting"
UNHANDLED_CHARACTER = "unhandled_character"
INCONSISTENT_FORMATTING = "inconsistent_formatting"
ORPHANED_CARD_TEXT = "orphaned_card_text"
AMBIGUOUS_COLUMN = "ambiguous_column"
MISSING_COLUMN_HEADING = "missing_column_heading"
MISSING_DECK_INFO = "missing_deck_info"
MISSING_WATERMARK = "missing_watermark"


class ImportDiagnostics:
    """Anomaly collector for one import run."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or get_importer_logger("diagnostics")
        self.anomalies: List[ImportAnomaly] = []

    def report(
        self,
        code: str,
        message: str,
        *,
        text: Optional[str] = None,
        severity: str = "warning",
        **evidence: Any,
    ) -> ImportAnomaly:
        anomaly = ImportAnomaly(code=code, severity=severity, message=message, text=text, evidence=evidence)
        self.anomalies.append(anomaly)
        level = logging.WARNING if severity == "warning" else logging.INFO
        self.logger.log(level, "[%s] %s", code, message)
        return anomaly

    def by_code(self, code: str) -> List[ImportAnomaly]:
        return [a for a in self.anomalies if a.code == code]

    def counts(self) -> Dict[str, int]:
        return dict(Counter(a.code for a in self.anomalies))

    @property
    def has_anomalies(self) -> bool:
        return bool(self.anomalies)
