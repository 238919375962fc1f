"""
Basic Extraction Strategy
=========================

Pure-heuristic feature extraction over the raw RGBA buffer.

This is the normative strategy: it is always available, depends only on
numpy, and its output is the reference for correctness tests.

Sampling:
    - Brightness and color sample every 4th pixel in row-major order
      (a 16-byte stride through the RGBA buffer)
    - Structure walks a 10x10 pixel grid and compares the red channel of
      each grid point with its immediate right and lower neighbors

Constants:
    GRAY_SPREAD      max(R,G,B) - min(R,G,B) below this is gray
    EDGE_DELTA       red-channel difference above this is an edge
"""

import logging

import numpy as np

from safety_scanner.extraction.strategy import (
    LUMA_B,
    LUMA_G,
    LUMA_R,
    FeatureSet,
    brightness_from_level,
)
from safety_scanner.frame.frame import CHANNELS, Frame, InvalidFrameError
from safety_scanner.models.features import (
    BrightnessFeature,
    DominantColor,
    EnvironmentClass,
    EnvironmentFeature,
    StructureClass,
    StructureFeature,
)
from safety_scanner.models.state import ScanMethod


logger = logging.getLogger(__name__)


SAMPLE_STRIDE = 4
GRAY_SPREAD = 30
GRID_STEP = 10
EDGE_DELTA = 30


def _sample_pixels(frame: Frame) -> np.ndarray:
    """Every SAMPLE_STRIDE-th pixel as an (N, 4) int16 array."""
    samples = frame.as_array().reshape(-1, CHANNELS)[::SAMPLE_STRIDE]
    if samples.shape[0] == 0:
        raise InvalidFrameError("Frame produced no pixel samples")
    return samples.astype(np.int16)


class BasicStrategy:
    """
    numpy implementation of the three extractors.

    Every method is a single pass over the (sampled) frame and is total
    over well-formed frames.
    """

    method = ScanMethod.BASIC

    def extract_brightness(self, frame: Frame) -> BrightnessFeature:
        """
        Mean perceptual luminance of the sampled pixels.

        Y = 0.299R + 0.587G + 0.114B, normalized to [0, 1], averaged and
        scaled by 100.
        """
        samples = _sample_pixels(frame).astype(np.float64)
        luminance = (
            LUMA_R * samples[:, 0] + LUMA_G * samples[:, 1] + LUMA_B * samples[:, 2]
        ) / 255.0
        level = float(luminance.mean() * 100.0)
        return brightness_from_level(level)

    def extract_environment(self, frame: Frame) -> EnvironmentFeature:
        """
        Classify sampled pixels by color and pick the dominant class.

        A pixel is gray when its channel spread is below GRAY_SPREAD,
        otherwise the channel strictly greater than both others names it,
        and anything else is OTHER. The dominant class is the highest
        count; ties go to the earliest DominantColor member.
        """
        samples = _sample_pixels(frame)
        r, g, b = samples[:, 0], samples[:, 1], samples[:, 2]
        spread = samples[:, :3].max(axis=1) - samples[:, :3].min(axis=1)

        gray = spread < GRAY_SPREAD
        chromatic = ~gray
        red = chromatic & (r > g) & (r > b)
        green = chromatic & (g > r) & (g > b)
        blue = chromatic & (b > r) & (b > g)
        other = chromatic & ~(red | green | blue)

        counts = {
            DominantColor.RED: int(red.sum()),
            DominantColor.GREEN: int(green.sum()),
            DominantColor.BLUE: int(blue.sum()),
            DominantColor.GRAY: int(gray.sum()),
            DominantColor.OTHER: int(other.sum()),
        }
        # max() keeps the first maximal key, which is the tie-break order
        dominant = max(counts, key=counts.get)

        classification = (
            EnvironmentClass.INDOOR_CORRIDOR
            if dominant == DominantColor.GRAY
            else EnvironmentClass.OUTDOOR
        )

        return EnvironmentFeature(
            classification=classification,
            dominant=dominant,
            distribution={color.value: count for color, count in counts.items()},
        )

    def extract_structure(self, frame: Frame) -> StructureFeature:
        """
        Count red-channel discontinuities on a coarse grid.

        Right-neighbor differences count as vertical edges, lower-neighbor
        differences as horizontal edges. Neighbors are taken in the flat
        buffer, so the right neighbor of a row's last pixel is the first
        pixel of the next row. The final pixel of the frame is never a
        grid point, and a lower neighbor past the end compares equal. A black
        neighbor (red 0) is compared like any other value.
        """
        width = frame.width
        red = frame.as_array()[:, :, 0].reshape(-1).astype(np.int16)
        total = red.size

        ys = np.arange(0, frame.height, GRID_STEP)
        xs = np.arange(0, width, GRID_STEP)
        points = (ys[:, None] * width + xs[None, :]).ravel()
        points = points[points < total - 1]

        current = red[points]
        right = red[points + 1]
        below_index = points + width
        below = np.where(
            below_index < total,
            red[np.minimum(below_index, total - 1)],
            current,
        )

        vertical = int((np.abs(current - right) > EDGE_DELTA).sum())
        horizontal = int((np.abs(current - below) > EDGE_DELTA).sum())

        classification = (
            StructureClass.CORRIDOR_LIKE
            if vertical > horizontal
            else StructureClass.OPEN_SPACE
        )

        return StructureFeature(
            classification=classification,
            vertical_edges=vertical,
            horizontal_edges=horizontal,
        )

    def extract_all(self, frame: Frame) -> FeatureSet:
        return FeatureSet(
            brightness=self.extract_brightness(frame),
            environment=self.extract_environment(frame),
            structure=self.extract_structure(frame),
            method=self.method,
        )
