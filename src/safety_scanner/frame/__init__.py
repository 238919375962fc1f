"""
Frame Module
============

Frame representation and acquisition for the scan pipeline:
    - Frame: Immutable RGBA buffer with dimensions
    - decode_frame / decode_image_bytes: JPEG/PNG payload decoding
    - FrameSource: Protocol the orchestrator captures from
"""

from safety_scanner.frame.frame import Frame, InvalidFrameError
from safety_scanner.frame.image_decoder import (
    ImageDecodeError,
    decode_frame,
    decode_image_bytes,
)
from safety_scanner.frame.source import (
    CaptureUnavailableError,
    EncodedFrameSource,
    FrameSource,
    StaticFrameSource,
)


__all__ = [
    "Frame",
    "InvalidFrameError",
    "ImageDecodeError",
    "decode_frame",
    "decode_image_bytes",
    "CaptureUnavailableError",
    "FrameSource",
    "StaticFrameSource",
    "EncodedFrameSource",
]
