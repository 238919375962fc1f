"""
Accelerated Extraction Strategy
===============================

OpenCV-backed feature extraction.

Pipeline per frame:
    RGBA → grayscale → Canny(50, 150) edge map
        ├─ external contours → indoor / outdoor indicators
        └─ edge pixel ratio  → complexity + structure class

Brightness uses the global mean of a float luminance image, which
matches the basic strategy's sampled mean whenever the sample is
representative (uniform or row-uniform frames).

The accelerated output is an approximation: it only has to be
well-formed, and it is not required to agree with the basic strategy on
ambiguous frames. Any OpenCV error is raised as AcceleratedBackendFault
so the orchestrator can fall back to the basic strategy.
"""

import logging
from typing import Optional, Sequence, Tuple

import cv2
import numpy as np

from safety_scanner.extraction.strategy import FeatureSet, brightness_from_level
from safety_scanner.frame.frame import Frame
from safety_scanner.models.features import (
    BrightnessFeature,
    Complexity,
    EnvironmentClass,
    EnvironmentFeature,
    StructureClass,
    StructureFeature,
)
from safety_scanner.models.state import ScanMethod


logger = logging.getLogger(__name__)


CANNY_LOW_THRESHOLD = 50
CANNY_HIGH_THRESHOLD = 150

# Contours smaller than this share of the frame are ignored
MIN_CONTOUR_AREA_RATIO = 0.1
ELONGATED_ABOVE = 2.0
ELONGATED_BELOW = 0.5

HIGH_COMPLEXITY_ABOVE = 0.1
MEDIUM_COMPLEXITY_ABOVE = 0.05


class AcceleratedBackendFault(Exception):
    """Raised when the OpenCV backend fails during extraction."""
    pass


def _rgba(frame: Frame) -> np.ndarray:
    # Frame buffers are read-only; OpenCV gets its own copy
    return frame.as_array().copy()


def compute_edge_map(frame: Frame) -> np.ndarray:
    """
    Canny edge map of the frame's grayscale image.

    Returns:
        (H, W) uint8 array, 255 on edges and 0 elsewhere

    Raises:
        AcceleratedBackendFault: If OpenCV fails
    """
    try:
        gray = cv2.cvtColor(_rgba(frame), cv2.COLOR_RGBA2GRAY)
        return cv2.Canny(gray, CANNY_LOW_THRESHOLD, CANNY_HIGH_THRESHOLD)
    except cv2.error as e:
        raise AcceleratedBackendFault(f"Edge detection failed: {e}") from e


def count_layout_indicators(
    contours: Sequence[np.ndarray],
    width: int,
    height: int,
) -> Tuple[int, int]:
    """
    Count indoor and outdoor indicators among large contours.

    A contour counts when its area exceeds MIN_CONTOUR_AREA_RATIO of the
    frame. Elongated bounding boxes (aspect > 2 or < 0.5) read as walls
    and corridors; compact ones read as open scenery.

    Args:
        contours: OpenCV point arrays, as returned by cv2.findContours
        width: Frame width
        height: Frame height

    Returns:
        (indoor_indicators, outdoor_indicators)
    """
    total_area = width * height
    indoor = 0
    outdoor = 0

    for contour in contours:
        area = cv2.contourArea(contour)
        if area / total_area <= MIN_CONTOUR_AREA_RATIO:
            continue

        _, _, box_w, box_h = cv2.boundingRect(contour)
        aspect_ratio = box_w / box_h

        if aspect_ratio > ELONGATED_ABOVE or aspect_ratio < ELONGATED_BELOW:
            indoor += 1
        else:
            outdoor += 1

    return indoor, outdoor


def complexity_from_edge_ratio(edge_ratio: float) -> Complexity:
    if edge_ratio > HIGH_COMPLEXITY_ABOVE:
        return Complexity.HIGH
    if edge_ratio > MEDIUM_COMPLEXITY_ABOVE:
        return Complexity.MEDIUM
    return Complexity.LOW


class AcceleratedStrategy:
    """
    OpenCV implementation of the three extractors.

    Environment and structure both derive from the same deterministic
    Canny edge map of the frame. extract_all() computes it once and hands
    it to both; the single-feature methods compute it when not given.
    """

    method = ScanMethod.ACCELERATED

    def extract_brightness(self, frame: Frame) -> BrightnessFeature:
        """Global mean of the float luminance image, scaled to [0, 100]."""
        try:
            rgba = _rgba(frame).astype(np.float32)
            gray = cv2.cvtColor(rgba, cv2.COLOR_RGBA2GRAY)
            mean = cv2.mean(gray)[0]
        except cv2.error as e:
            raise AcceleratedBackendFault(f"Brightness analysis failed: {e}") from e

        return brightness_from_level(mean / 255.0 * 100.0)

    def extract_environment(
        self,
        frame: Frame,
        edges: Optional[np.ndarray] = None,
    ) -> EnvironmentFeature:
        if edges is None:
            edges = compute_edge_map(frame)
        try:
            contours, _ = cv2.findContours(
                edges, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE
            )
            indoor, outdoor = count_layout_indicators(contours, frame.width, frame.height)
        except cv2.error as e:
            raise AcceleratedBackendFault(f"Contour analysis failed: {e}") from e

        classification = (
            EnvironmentClass.INDOOR_CORRIDOR
            if indoor > outdoor
            else EnvironmentClass.OUTDOOR
        )

        return EnvironmentFeature(
            classification=classification,
            indoor_indicators=indoor,
            outdoor_indicators=outdoor,
        )

    def extract_structure(
        self,
        frame: Frame,
        edges: Optional[np.ndarray] = None,
    ) -> StructureFeature:
        if edges is None:
            edges = compute_edge_map(frame)
        try:
            edge_pixels = cv2.countNonZero(edges)
        except cv2.error as e:
            raise AcceleratedBackendFault(f"Edge counting failed: {e}") from e

        edge_ratio = edge_pixels / edges.size

        return StructureFeature(
            classification=(
                StructureClass.CORRIDOR_LIKE
                if edge_ratio > HIGH_COMPLEXITY_ABOVE
                else StructureClass.OPEN_SPACE
            ),
            edge_ratio=edge_ratio,
            complexity=complexity_from_edge_ratio(edge_ratio),
        )

    def extract_all(self, frame: Frame) -> FeatureSet:
        """All three features from a single edge map."""
        edges = compute_edge_map(frame)
        return FeatureSet(
            brightness=self.extract_brightness(frame),
            environment=self.extract_environment(frame, edges),
            structure=self.extract_structure(frame, edges),
            method=self.method,
        )


def warm_up_backend() -> None:
    """
    Exercise the OpenCV code paths once.

    Used as the capability negotiator's loader: it runs the same
    conversions the strategy uses on a tiny synthetic frame, so a broken
    OpenCV build is detected before any scan relies on it.
    """
    sample = np.zeros((16, 16, 4), dtype=np.uint8)
    sample[4:12, 4:12] = 255
    gray = cv2.cvtColor(sample, cv2.COLOR_RGBA2GRAY)
    edges = cv2.Canny(gray, CANNY_LOW_THRESHOLD, CANNY_HIGH_THRESHOLD)
    cv2.findContours(edges, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
    logger.info(f"OpenCV {cv2.__version__} backend warmed up")
