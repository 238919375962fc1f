"""
Analysis Result Model
=====================

The single output contract of a scan.

Output Contract:
    {
        "brightness": {"level": 100.0, "status": "bright", "description": "Good lighting"},
        "environment": {"classification": "indoor_corridor", "dominant": "gray", ...},
        "structure": {"classification": "open_space", "vertical_edges": 0, ...},
        "safety_score": 85,
        "safety_status": "safe",
        "recommendations": ["Indoor corridor detected - check for emergency exits"],
        "method": "basic",
        "timestamp": 1770500938.284,
        "error": null
    }

Design Rules:
    - `method` tags which strategy produced the result (or "error")
    - `safety_score` is always in [0, 100]; 50 on failure
    - `recommendations` is never empty
    - Feature blocks are absent only on error results
    - Immutable once constructed
"""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from safety_scanner.models.features import (
    BrightnessFeature,
    EnvironmentFeature,
    StructureFeature,
)
from safety_scanner.models.state import ScanMethod


class SafetyStatus(str, Enum):
    """
    Score band used by downstream dashboards and alerting.

    Attributes:
        SAFE: score >= 80
        MODERATE_SAFETY: 60 <= score < 80
        LOW_SAFETY: score < 60, alert-worthy
    """

    SAFE = "safe"
    MODERATE_SAFETY = "moderate_safety"
    LOW_SAFETY = "low_safety"


class AnalysisResult(BaseModel):
    """
    Complete result for one scan.

    Attributes:
        brightness: Illumination feature (None on error)
        environment: Environment feature (None on error)
        structure: Structure feature (None on error)
        safety_score: Bounded safety score
        safety_status: Score band
        recommendations: Ordered advisories, never empty
        method: Strategy that produced this result
        timestamp: UNIX timestamp when the result was assembled
        error: Failure description (error results only)
    """

    model_config = ConfigDict(frozen=True)

    brightness: Optional[BrightnessFeature] = Field(default=None)
    environment: Optional[EnvironmentFeature] = Field(default=None)
    structure: Optional[StructureFeature] = Field(default=None)

    safety_score: int = Field(..., ge=0, le=100, description="Safety score (0-100)")
    safety_status: SafetyStatus = Field(..., description="Safety score band")

    recommendations: Tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="Ordered human-readable advisories",
    )

    method: ScanMethod = Field(..., description="Producing strategy")
    timestamp: float = Field(..., gt=0, description="UNIX timestamp of assembly")
    error: Optional[str] = Field(default=None, description="Failure description")

    @model_validator(mode="after")
    def _features_present_unless_error(self) -> "AnalysisResult":
        if self.method != ScanMethod.ERROR and (
            self.brightness is None or self.environment is None or self.structure is None
        ):
            raise ValueError(f"{self.method.value} result requires all three features")
        return self

    @property
    def requires_alert(self) -> bool:
        """Low-safety results warrant notifying security staff."""
        return self.safety_status == SafetyStatus.LOW_SAFETY
