"""
Image Decoder
=============

Decodes base64-encoded JPEG/PNG captures into RGBA Frames.

Camera layers typically hand over a screenshot as a base64 string,
sometimes wrapped in a ``data:image/jpeg;base64,`` URL. This module is
the only place in the codebase that turns such payloads into pixels.

Design Rules:
    - Accepts raw base64 or a data URL
    - Validates shape and dtype after decoding
    - Fails fast with ImageDecodeError on corrupt payloads
"""

import base64
import binascii
import logging

import cv2
import numpy as np

from safety_scanner.frame.frame import Frame


logger = logging.getLogger(__name__)


class ImageDecodeError(Exception):
    """Raised when image decoding fails."""
    pass


def _strip_data_url(image_b64: str) -> str:
    if image_b64.startswith("data:"):
        _, _, payload = image_b64.partition(",")
        return payload
    return image_b64


def decode_image_bytes(image_bytes: bytes) -> Frame:
    """
    Decode encoded image bytes (JPEG, PNG, ...) into an RGBA Frame.

    Args:
        image_bytes: Encoded image file contents

    Returns:
        Frame with RGBA pixels

    Raises:
        ImageDecodeError: If decoding fails or image is invalid
    """
    if not image_bytes:
        raise ImageDecodeError("Empty image payload")

    nparr = np.frombuffer(image_bytes, np.uint8)
    bgr = cv2.imdecode(nparr, cv2.IMREAD_COLOR)

    if bgr is None:
        raise ImageDecodeError("Failed to decode image: cv2.imdecode returned None")

    if len(bgr.shape) != 3 or bgr.shape[2] != 3:
        raise ImageDecodeError(f"Invalid image shape: {bgr.shape}")

    if bgr.dtype != np.uint8:
        raise ImageDecodeError(f"Invalid dtype: {bgr.dtype}")

    rgba = cv2.cvtColor(bgr, cv2.COLOR_BGR2RGBA)
    logger.debug(f"Decoded image {rgba.shape[1]}x{rgba.shape[0]}")
    return Frame.from_array(rgba)


def decode_frame(image_b64: str) -> Frame:
    """
    Decode a base64 image (or data URL) into an RGBA Frame.

    Args:
        image_b64: Base64-encoded JPEG/PNG, optionally a data URL

    Returns:
        Frame with RGBA pixels

    Raises:
        ImageDecodeError: If base64 or image decoding fails
    """
    try:
        image_bytes = base64.b64decode(_strip_data_url(image_b64), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"Base64 decode failed: {e}")

    return decode_image_bytes(image_bytes)
