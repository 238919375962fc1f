"""
Frame Data Model
=================

Internal frame representation for the scan pipeline.

A Frame is one decoded camera image: an RGBA byte buffer plus its
dimensions. It is the ONLY image format passed to the extractors.

Design Rules:
    - Immutable; extractors read it, nothing writes it
    - Validated on construction (non-empty, length = width * height * 4)
    - Pixel order is RGBA, row-major, 8 bits per channel
"""

from dataclasses import dataclass

import numpy as np


CHANNELS = 4


class InvalidFrameError(ValueError):
    """Raised when a frame buffer is empty or does not match its dimensions."""
    pass


@dataclass(frozen=True, slots=True)
class Frame:
    """
    Decoded RGBA camera frame.

    Attributes:
        width: Frame width in pixels (>= 1)
        height: Frame height in pixels (>= 1)
        pixels: Raw RGBA bytes, length width * height * 4
    """

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.width <= 0 or self.height <= 0:
            raise InvalidFrameError(
                f"Frame dimensions must be positive, got {self.width}x{self.height}"
            )
        if not isinstance(self.pixels, bytes):
            object.__setattr__(self, "pixels", bytes(self.pixels))
        expected = self.width * self.height * CHANNELS
        if len(self.pixels) != expected:
            raise InvalidFrameError(
                f"Pixel buffer length {len(self.pixels)} does not match "
                f"{self.width}x{self.height} RGBA ({expected} bytes)"
            )

    @classmethod
    def from_array(cls, rgba: np.ndarray) -> "Frame":
        """
        Build a Frame from an (H, W, 4) uint8 array.

        Raises:
            InvalidFrameError: If the array is not an RGBA uint8 image
        """
        if rgba.ndim != 3 or rgba.shape[2] != CHANNELS:
            raise InvalidFrameError(f"Expected (H, W, 4) array, got shape {rgba.shape}")
        if rgba.dtype != np.uint8:
            raise InvalidFrameError(f"Expected uint8 pixels, got {rgba.dtype}")
        height, width = rgba.shape[:2]
        return cls(width=width, height=height, pixels=np.ascontiguousarray(rgba).tobytes())

    def as_array(self) -> np.ndarray:
        """Read-only (H, W, 4) uint8 view over the pixel buffer."""
        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(
            self.height, self.width, CHANNELS
        )

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def __repr__(self) -> str:
        """Compact repr that doesn't dump the pixel buffer."""
        return f"Frame(width={self.width}, height={self.height})"
