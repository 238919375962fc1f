"""
Data Models
===========

Pydantic models and enums for the scan pipeline.

Models:
    State:
        - ScanState: Orchestrator lifecycle
        - ScanMethod: Result method tag
        - CapabilityState: Accelerated backend lifecycle

    Features:
        - BrightnessFeature, EnvironmentFeature, StructureFeature
        - LightingStatus, DominantColor, EnvironmentClass,
          StructureClass, Complexity

    Output:
        - SafetyStatus: Score band
        - AnalysisResult: Complete output contract
"""

from safety_scanner.models.state import CapabilityState, ScanMethod, ScanState
from safety_scanner.models.features import (
    BrightnessFeature,
    Complexity,
    DominantColor,
    EnvironmentClass,
    EnvironmentFeature,
    LightingStatus,
    StructureClass,
    StructureFeature,
)
from safety_scanner.models.result import AnalysisResult, SafetyStatus

__all__ = [
    # State
    "ScanState",
    "ScanMethod",
    "CapabilityState",
    # Features
    "LightingStatus",
    "DominantColor",
    "EnvironmentClass",
    "StructureClass",
    "Complexity",
    "BrightnessFeature",
    "EnvironmentFeature",
    "StructureFeature",
    # Output
    "SafetyStatus",
    "AnalysisResult",
]
