"""A stand-in image codec that understands a one-line text "image" format.

``MOCKIMG <width>x<height>`` decodes to an image of that size, which keeps
icon sizing logic testable without GdkPixbuf loaders installed.
"""

from __future__ import annotations

import base64
import re
from pathlib import Path

from webapp_desktop.core.errors import IconDecodeError
from webapp_desktop.core.models import IconAsset

_HEADER = re.compile(rb"^MOCKIMG (\d+)x(\d+)\n?$")


def mock_image(width: int, height: int) -> bytes:
    return f"MOCKIMG {width}x{height}\n".encode("ascii")


def mock_data_url(width: int, height: int) -> str:
    return "data:image/png;base64," + base64.b64encode(mock_image(width, height)).decode("ascii")


class MockImageCodec:
    def __init__(self) -> None:
        self.decoded = 0

    def decode(self, data: bytes) -> IconAsset:
        match = _HEADER.match(data)
        if match is None:
            raise IconDecodeError("not a mock image")
        self.decoded += 1
        width, height = int(match.group(1)), int(match.group(2))
        return IconAsset(pixels=data, width=width, height=height)

    def decode_file(self, path: str) -> IconAsset:
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            raise IconDecodeError(str(exc)) from exc
        return self.decode(data)

    def scale(self, image: IconAsset, size: int) -> IconAsset:
        return IconAsset(pixels=mock_image(size, size), width=size, height=size)

    def encode_png(self, image: IconAsset) -> bytes:
        return mock_image(image.width, image.height)
