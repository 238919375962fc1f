"""
Frame Tests
===========

Frame validation, decoding and frame sources.
"""

import base64

import numpy as np
import pytest

from safety_scanner.frame import (
    EncodedFrameSource,
    Frame,
    ImageDecodeError,
    InvalidFrameError,
    StaticFrameSource,
    decode_frame,
)


class TestFrame:
    """Frame construction invariants."""

    def test_valid_frame(self):
        frame = Frame(width=2, height=1, pixels=bytes(8))
        assert frame.pixel_count == 2
        assert frame.as_array().shape == (1, 2, 4)

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (0, 0), (-1, 4)])
    def test_zero_dimensions_rejected(self, width, height):
        with pytest.raises(InvalidFrameError):
            Frame(width=width, height=height, pixels=b"")

    def test_mismatched_buffer_rejected(self):
        with pytest.raises(InvalidFrameError):
            Frame(width=2, height=2, pixels=bytes(12))

    def test_invalid_frame_is_value_error(self):
        """Callers catching ValueError also catch precondition violations."""
        with pytest.raises(ValueError):
            Frame(width=1, height=1, pixels=b"")

    def test_bytearray_is_frozen_to_bytes(self):
        frame = Frame(width=1, height=1, pixels=bytearray([1, 2, 3, 4]))
        assert isinstance(frame.pixels, bytes)

    def test_from_array_requires_rgba(self):
        with pytest.raises(InvalidFrameError):
            Frame.from_array(np.zeros((4, 4, 3), dtype=np.uint8))
        with pytest.raises(InvalidFrameError):
            Frame.from_array(np.zeros((4, 4, 4), dtype=np.float32))

    def test_array_view_is_read_only(self, white_frame):
        view = white_frame.as_array()
        with pytest.raises(ValueError):
            view[0, 0, 0] = 1

    def test_repr_omits_pixels(self, white_frame):
        assert repr(white_frame) == "Frame(width=40, height=40)"


class TestImageDecoder:
    """Base64 JPEG/PNG decoding into RGBA frames."""

    def test_png_decodes_with_rgba_channel_order(self, solid_frame, encode_png):
        source_frame = solid_frame((10, 20, 200), width=8, height=6)
        frame = decode_frame(encode_png(source_frame))

        assert (frame.width, frame.height) == (8, 6)
        assert tuple(frame.as_array()[0, 0]) == (10, 20, 200, 255)

    def test_data_url_prefix_is_stripped(self, white_frame, encode_png):
        frame = decode_frame("data:image/png;base64," + encode_png(white_frame))
        assert (frame.width, frame.height) == (40, 40)

    def test_invalid_base64(self):
        with pytest.raises(ImageDecodeError):
            decode_frame("not base64 at all!!")

    def test_non_image_payload(self):
        with pytest.raises(ImageDecodeError):
            decode_frame(base64.b64encode(b"plain text, not an image").decode())

    def test_empty_payload(self):
        with pytest.raises(ImageDecodeError):
            decode_frame("")


class TestFrameSources:
    """Capture behavior of the bundled frame sources."""

    @pytest.mark.asyncio
    async def test_static_source(self, white_frame):
        assert await StaticFrameSource(white_frame).capture() is white_frame
        assert await StaticFrameSource(None).capture() is None

    @pytest.mark.asyncio
    async def test_encoded_source_without_payload(self):
        assert await EncodedFrameSource("").capture() is None
        assert await EncodedFrameSource(None).capture() is None

    @pytest.mark.asyncio
    async def test_encoded_source_decodes_on_capture(self, white_frame, encode_png):
        source = EncodedFrameSource(encode_png(white_frame))
        frame = await source.capture()
        assert frame.pixels == white_frame.pixels

    @pytest.mark.asyncio
    async def test_encoded_source_raises_on_garbage(self):
        source = EncodedFrameSource("@@@@")
        with pytest.raises(ImageDecodeError):
            await source.capture()
