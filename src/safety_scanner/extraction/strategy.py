"""
Extraction Strategy
===================

The interface every extraction backend implements, plus the pieces both
backends share.

Design Rules:
    - Strategies are stateless; every call is independent
    - Extractors never mutate the Frame
    - Brightness bands are identical across strategies
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from safety_scanner.frame.frame import Frame
from safety_scanner.models.features import (
    BrightnessFeature,
    EnvironmentFeature,
    LightingStatus,
    StructureFeature,
)
from safety_scanner.models.state import ScanMethod


logger = logging.getLogger(__name__)


DARK_BELOW = 30.0
DIM_BELOW = 60.0

# Perceptual luminance weights (ITU-R BT.601)
LUMA_R = 0.299
LUMA_G = 0.587
LUMA_B = 0.114


class ExtractionStrategy(Protocol):
    """
    Protocol for feature extraction backends.

    Implemented by:
        - BasicStrategy (numpy over the raw buffer, always available)
        - AcceleratedStrategy (OpenCV edge and contour analysis)
    """

    method: ScanMethod

    def extract_brightness(self, frame: Frame) -> BrightnessFeature:
        ...

    def extract_environment(self, frame: Frame) -> EnvironmentFeature:
        ...

    def extract_structure(self, frame: Frame) -> StructureFeature:
        ...

    def extract_all(self, frame: Frame) -> "FeatureSet":
        ...


@dataclass(frozen=True, slots=True)
class FeatureSet:
    """All three features extracted from one frame by one strategy."""

    brightness: BrightnessFeature
    environment: EnvironmentFeature
    structure: StructureFeature
    method: ScanMethod


def extract_features(strategy: ExtractionStrategy, frame: Frame) -> FeatureSet:
    """
    Run all extractors of a strategy over one frame.

    Delegates to the strategy's extract_all(), which may share work
    between extractors.

    Args:
        strategy: Backend to run
        frame: Frame to analyze

    Returns:
        FeatureSet tagged with the strategy's method
    """
    return strategy.extract_all(frame)


def brightness_from_level(level: float) -> BrightnessFeature:
    """
    Classify a luminance level into a BrightnessFeature.

    The level is clamped to [0, 100] to absorb floating-point overshoot
    on saturated frames.
    """
    level = min(100.0, max(0.0, level))

    if level < DARK_BELOW:
        status, description = LightingStatus.DARK, "Very dark environment detected"
    elif level < DIM_BELOW:
        status, description = LightingStatus.DIM, "Dim lighting detected"
    else:
        status, description = LightingStatus.BRIGHT, "Good lighting"

    return BrightnessFeature(level=level, status=status, description=description)
