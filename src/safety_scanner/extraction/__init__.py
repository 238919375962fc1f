"""
Extraction Module
=================

Feature extraction for the scan pipeline.

Extraction is a pluggable backend behind the ExtractionStrategy
protocol. The orchestrator consumes only FeatureSets, never strategy
internals.

Components:
    - ExtractionStrategy: Protocol for backends
    - BasicStrategy: numpy heuristics over the raw buffer (normative)
    - AcceleratedStrategy: OpenCV edge and contour analysis
    - CapabilityNegotiator: Decides whether AcceleratedStrategy is usable
"""

from safety_scanner.extraction.strategy import (
    ExtractionStrategy,
    FeatureSet,
    brightness_from_level,
    extract_features,
)
from safety_scanner.extraction.basic import BasicStrategy
from safety_scanner.extraction.accelerated import (
    AcceleratedBackendFault,
    AcceleratedStrategy,
    warm_up_backend,
)
from safety_scanner.extraction.capability import CapabilityNegotiator

__all__ = [
    "ExtractionStrategy",
    "FeatureSet",
    "brightness_from_level",
    "extract_features",
    "BasicStrategy",
    "AcceleratedStrategy",
    "AcceleratedBackendFault",
    "warm_up_backend",
    "CapabilityNegotiator",
]
