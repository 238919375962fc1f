"""
Frame Sources
=============

Boundary between the camera layer and the scan orchestrator.

The orchestrator never talks to a camera. It asks a FrameSource for one
frame per scan; a source that cannot produce one returns None, which the
orchestrator reports as an unavailable capture.
"""

import logging
from typing import Optional, Protocol

from safety_scanner.frame.frame import Frame
from safety_scanner.frame.image_decoder import decode_frame


logger = logging.getLogger(__name__)


class CaptureUnavailableError(Exception):
    """Raised by a source that knows no frame can be obtained (e.g. camera denied)."""
    pass


class FrameSource(Protocol):
    """
    Protocol for frame providers.

    Implementations return a Frame, or None (or raise
    CaptureUnavailableError) when no frame can be obtained. Undecodable
    payloads raise ImageDecodeError.
    """

    async def capture(self) -> Optional[Frame]:
        ...


class StaticFrameSource:
    """Source that hands out a frame captured elsewhere (or None)."""

    def __init__(self, frame: Optional[Frame]) -> None:
        self._frame = frame

    async def capture(self) -> Optional[Frame]:
        return self._frame


class EncodedFrameSource:
    """
    Source backed by a base64-encoded screenshot.

    Decoding happens on capture so that a corrupt payload fails the scan
    in the capture stage rather than at construction time.

    Attributes:
        image_b64: Base64 image or data URL; empty means nothing captured
    """

    def __init__(self, image_b64: Optional[str]) -> None:
        self.image_b64 = image_b64

    async def capture(self) -> Optional[Frame]:
        if not self.image_b64:
            logger.debug("EncodedFrameSource has no payload")
            return None
        return decode_frame(self.image_b64)
