"""
Import diagnostics models.
"""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ImportAnomaly(BaseModel):
    """Non-fatal irregularity found while importing (never aborts the run)."""

    code: str = Field(..., description="Machine-readable anomaly identifier")
    severity: Literal["info", "warning"] = Field(default="warning")
    message: str = Field(..., description="Human-readable summary")
    text: Optional[str] = Field(default=None, description="Offending source text when applicable")
    evidence: Dict[str, Any] = Field(default_factory=dict, description="Structured context")

    model_config = ConfigDict(extra="ignore")
