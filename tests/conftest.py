"""
Test Configuration
==================

Pytest fixtures and synthetic frame factories for SafetyScanner.
"""

import base64

import cv2
import numpy as np
import pytest

from safety_scanner.frame import Frame


def rgba_image(rgb, width=40, height=40, alpha=255) -> np.ndarray:
    """Uniform (H, W, 4) uint8 image."""
    image = np.empty((height, width, 4), dtype=np.uint8)
    image[:, :, :3] = rgb
    image[:, :, 3] = alpha
    return image


@pytest.fixture
def rgba():
    """Factory for uniform RGBA arrays that a test then paints on."""
    return rgba_image


@pytest.fixture
def solid_frame():
    """Factory for uniformly colored frames."""
    def _make(rgb, width=40, height=40) -> Frame:
        return Frame.from_array(rgba_image(rgb, width, height))
    return _make


@pytest.fixture
def white_frame(solid_frame) -> Frame:
    return solid_frame((255, 255, 255))


@pytest.fixture
def black_frame(solid_frame) -> Frame:
    return solid_frame((0, 0, 0))


@pytest.fixture
def red_frame(solid_frame) -> Frame:
    return solid_frame((255, 0, 0))


@pytest.fixture
def vertical_stripes_frame() -> Frame:
    """White 40x40 frame with a black column on every 10th x (grid columns)."""
    image = rgba_image((255, 255, 255))
    image[:, ::10, :3] = 0
    return Frame.from_array(image)


@pytest.fixture
def horizontal_stripes_frame() -> Frame:
    """White 40x40 frame with a black row on every 10th y (grid rows)."""
    image = rgba_image((255, 255, 255))
    image[::10, :, :3] = 0
    return Frame.from_array(image)


@pytest.fixture
def checkerboard_frame() -> Frame:
    """200x200 black/white checkerboard with 8-pixel squares."""
    ys, xs = np.indices((200, 200))
    mask = ((ys // 8) + (xs // 8)) % 2 == 0
    image = rgba_image((0, 0, 0), 200, 200)
    image[mask, :3] = 255
    return Frame.from_array(image)


@pytest.fixture
def encode_png():
    """Factory that PNG-encodes an RGBA frame and returns base64 text."""
    def _encode(frame: Frame) -> str:
        bgr = cv2.cvtColor(frame.as_array().copy(), cv2.COLOR_RGBA2BGR)
        ok, buffer = cv2.imencode(".png", bgr)
        assert ok
        return base64.b64encode(buffer.tobytes()).decode("ascii")
    return _encode
